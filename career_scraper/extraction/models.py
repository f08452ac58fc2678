"""Data models for the extraction engine."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    computed_field,
    field_validator,
    model_validator,
)


class Section(str, Enum):
    """A category of profile data."""

    EXPERIENCE = "experience"
    EDUCATION = "education"


class CompositePolicy(str, Enum):
    """Which of two nested matches of the same item selector is kept.

    OUTERMOST keeps grouping items (one record per group) and skips the
    entries nested inside them. INNERMOST skips grouping items and keeps
    every nested entry from the flat enumeration.
    """

    OUTERMOST = "outermost"
    INNERMOST = "innermost"


class SectionSelectors(BaseModel):
    """Selectors for one section.

    ``title``, ``details`` and ``description`` are relative to a matched
    item. Files written for the older scraper spell them as full paths
    starting with the item selector; that prefix is dropped here, once,
    so the engine only ever sees relative fragments.

    Attributes:
        item: Selector matching one entry (one job, one degree).
        title: Role title (experience) or institution (education).
        details: Ordered detail lines (company, dates, location / diploma, duration).
        description: Description and skills lines (experience only).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    item: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices(
            "item", "itemSelector", "experienceItem", "educationItem"
        ),
        description="Selector matching one entry of the section",
    )
    title: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "title", "titleSelector", "jobTitle", "role", "institution"
        ),
        description="Role title or institution, relative to the item",
    )
    details: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "details", "detailsSelector", "companyAndDetails"
        ),
        description="Detail lines, relative to the item",
    )
    description: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "description", "descriptionSelector", "skills_and_description"
        ),
        description="Description and skills lines, relative to the item",
    )

    @field_validator("item", mode="after")
    @classmethod
    def strip_item(cls, v: str) -> str:
        return v.strip()

    @field_validator("title", "details", "description", mode="after")
    @classmethod
    def relative_to_item(cls, v: str | None, info: ValidationInfo) -> str | None:
        """Drop a leading copy of the item selector from a sub-selector."""
        if v is None:
            return None
        value = v.strip()
        if not value:
            return None
        item = info.data.get("item")
        if item and value.startswith(item + " "):
            value = value[len(item) + 1 :].strip()
        return value


class SelectorsConfig(BaseModel):
    """Per-section selector configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    experience: SectionSelectors | None = None
    education: SectionSelectors | None = None

    @model_validator(mode="before")
    @classmethod
    def accept_flat_layout(cls, data: Any) -> Any:
        """Read a flat selectors block as the experience section."""
        if isinstance(data, dict) and not {"experience", "education"} & set(data):
            return {"experience": data}
        return data

    @model_validator(mode="after")
    def require_a_section(self) -> SelectorsConfig:
        if self.experience is None and self.education is None:
            raise ValueError("selectors must define 'experience' and/or 'education'")
        return self

    def sections(self) -> list[tuple[Section, SectionSelectors]]:
        """Return configured sections in run order (experience first)."""
        configured: list[tuple[Section, SectionSelectors]] = []
        if self.experience is not None:
            configured.append((Section.EXPERIENCE, self.experience))
        if self.education is not None:
            configured.append((Section.EDUCATION, self.education))
        return configured


class ScrapeOptions(BaseModel):
    """Optional per-run overrides carried in the config document."""

    model_config = ConfigDict(extra="ignore")

    headless: bool | None = None


class ScrapeConfig(BaseModel):
    """The scrape configuration document.

    Attributes:
        profiles: Profile URLs, scraped in this order.
        selectors: Per-section selectors.
        output_file: Where the run result is written.
        options: Optional per-run overrides.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    profiles: list[str] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("profiles", "urls"),
        description="Profile URLs to scrape, in order",
    )
    selectors: SelectorsConfig
    output_file: Path = Field(
        default=Path("results.json"),
        validation_alias=AliasChoices("output_file", "outputFile"),
        description="Output file (.json or .xlsx)",
    )
    options: ScrapeOptions = Field(default_factory=ScrapeOptions)

    @field_validator("profiles", mode="after")
    @classmethod
    def normalize_profiles(cls, v: list[str]) -> list[str]:
        profiles = [url.strip().rstrip("/") for url in v]
        if any(not url for url in profiles):
            raise ValueError("profile URLs must not be empty")
        return profiles


class ExperienceRecord(BaseModel):
    """One employment entry.

    Every field is always present; missing values are ``None``.
    ``partial`` is set when a field group could not be read.
    """

    model_config = ConfigDict(frozen=True)

    section: Literal["experience"] = "experience"
    profile_url: str
    index: int = Field(..., ge=0, description="Ordinal of the item on the page")
    title: str | None = None
    organization: str | None = None
    employment_type: str | None = None
    date_range: str | None = None
    location: str | None = None
    description: str | None = None
    skills: str | None = None
    partial: bool = False


class EducationRecord(BaseModel):
    """One education entry."""

    model_config = ConfigDict(frozen=True)

    section: Literal["education"] = "education"
    profile_url: str
    index: int = Field(..., ge=0, description="Ordinal of the item on the page")
    institution: str | None = None
    diploma: str | None = None
    duration: str | None = None
    partial: bool = False


ExtractedRecord = Annotated[
    ExperienceRecord | EducationRecord, Field(discriminator="section")
]


class ProfileOutcome(BaseModel):
    """Outcome of scraping one profile.

    Zero records with ``success=True`` is a valid outcome. A failed profile
    keeps the records extracted before the failure.
    """

    profile_url: str
    success: bool
    records: list[ExtractedRecord] = Field(default_factory=list)
    error: str | None = None

    @model_validator(mode="after")
    def check_error(self) -> ProfileOutcome:
        if self.success and self.error is not None:
            raise ValueError("error must be None when success=True")
        if not self.success and not self.error:
            raise ValueError("error is required when success=False")
        return self

    @property
    def experiences(self) -> list[ExperienceRecord]:
        return [r for r in self.records if isinstance(r, ExperienceRecord)]

    @property
    def education(self) -> list[EducationRecord]:
        return [r for r in self.records if isinstance(r, EducationRecord)]

    @computed_field
    @property
    def total_experiences(self) -> int:
        return len(self.experiences)

    @computed_field
    @property
    def total_education(self) -> int:
        return len(self.education)


class RunResult(BaseModel):
    """Ordered per-profile outcomes of one run.

    Attributes:
        scraped_at: When the run started.
        total_profiles: Number of configured profiles.
        stopped: True when the run was halted by a stop signal.
        profiles: Outcomes for the profiles reached, in config order.
    """

    scraped_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    total_profiles: int = Field(default=0, ge=0)
    stopped: bool = False
    profiles: list[ProfileOutcome] = Field(default_factory=list)

    def experience_records(self) -> list[ExperienceRecord]:
        return [r for outcome in self.profiles for r in outcome.experiences]

    def education_records(self) -> list[EducationRecord]:
        return [r for outcome in self.profiles for r in outcome.education]

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.profiles if outcome.success)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.profiles if not outcome.success)

    def to_dict(self) -> dict:
        """Serialize the run result to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")
