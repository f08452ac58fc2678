"""Positional decomposition of raw text fragments into typed fields.

Pure functions: no DOM access, no hidden state.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# Separates the company from the employment type: "Acme Corp · Full-time"
ORGANIZATION_DELIMITER = " · "


@dataclass(frozen=True)
class DetailFields:
    organization: str | None = None
    employment_type: str | None = None
    date_range: str | None = None
    location: str | None = None


@dataclass(frozen=True)
class DescriptionFields:
    description: str | None = None
    skills: str | None = None


@dataclass(frozen=True)
class EducationFields:
    diploma: str | None = None
    duration: str | None = None


def split_organization(text: str) -> tuple[str | None, str | None]:
    """Split "Company · Type" on the first delimiter.

    Returns:
        (organization, employment_type); employment_type is None when the
        delimiter is absent.
    """
    if ORGANIZATION_DELIMITER not in text:
        return text.strip() or None, None
    organization, employment_type = text.split(ORGANIZATION_DELIMITER, 1)
    return organization.strip() or None, employment_type.strip() or None


def decompose_details(fragments: Sequence[str]) -> DetailFields:
    """Map detail lines to organization, employment type, dates and location.

    fragment[0] is "Company · Type", fragment[1] the date range,
    fragment[2] the location. Anything after index 2 is ignored.
    """
    if not fragments:
        return DetailFields()

    organization, employment_type = split_organization(fragments[0])
    return DetailFields(
        organization=organization,
        employment_type=employment_type,
        date_range=fragments[1] if len(fragments) >= 2 else None,
        location=fragments[2] if len(fragments) >= 3 else None,
    )


def decompose_description_skills(fragments: Sequence[str]) -> DescriptionFields:
    """Map description lines to description and skills.

    A lone fragment is the skills list. With two or more, the first is the
    description and the last the skills; lines in between are dropped.
    """
    if not fragments:
        return DescriptionFields()
    if len(fragments) == 1:
        return DescriptionFields(skills=fragments[0])
    return DescriptionFields(description=fragments[0], skills=fragments[-1])


def decompose_education_details(fragments: Sequence[str]) -> EducationFields:
    """Map education detail lines to diploma and duration."""
    return EducationFields(
        diploma=fragments[0] if len(fragments) >= 1 else None,
        duration=fragments[1] if len(fragments) >= 2 else None,
    )
