"""Write a ``RunResult`` to disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from openpyxl import Workbook

from career_scraper.extraction.models import RunResult

logger = logging.getLogger(__name__)

EXPERIENCE_COLUMNS: list[tuple[str, str]] = [
    ("Profile", "profile_url"),
    ("Title", "title"),
    ("Company", "organization"),
    ("Employment type", "employment_type"),
    ("Dates", "date_range"),
    ("Location", "location"),
    ("Description", "description"),
    ("Skills", "skills"),
]

EDUCATION_COLUMNS: list[tuple[str, str]] = [
    ("Profile", "profile_url"),
    ("Institution", "institution"),
    ("Diploma", "diploma"),
    ("Duration", "duration"),
]

FORMATS = ("json", "xlsx")


def detect_format(path: Path | str) -> str:
    """Pick the output format from the file suffix (JSON unless .xlsx)."""
    return "xlsx" if Path(path).suffix.lower() == ".xlsx" else "json"


def write_result(result: RunResult, path: Path | str, fmt: str | None = None) -> Path:
    """Write ``result`` as JSON or XLSX and return the written path."""
    fmt = fmt or detect_format(path)
    if fmt not in FORMATS:
        raise ValueError(f"Unknown output format: {fmt}. Must be one of {FORMATS}")
    if fmt == "xlsx":
        return write_xlsx(result, path)
    return write_json(result, path)


def write_json(result: RunResult, path: Path | str) -> Path:
    """Write the run as one JSON document with per-profile sections."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = {
        "scraped_at": result.scraped_at.isoformat(),
        "total_profiles": result.total_profiles,
        "stopped": result.stopped,
        "profiles": [
            {
                "profile_url": outcome.profile_url,
                "success": outcome.success,
                "error": outcome.error,
                "total_experiences": outcome.total_experiences,
                "total_education": outcome.total_education,
                "experiences": [r.model_dump(mode="json") for r in outcome.experiences],
                "education": [r.model_dump(mode="json") for r in outcome.education],
            }
            for outcome in result.profiles
        ],
    }

    path.write_text(
        json.dumps(payload, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.info(f"Results saved to {path}")
    return path


def write_xlsx(result: RunResult, path: Path | str) -> Path:
    """Write one sheet per section, one row per record."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    experience_sheet = workbook.active
    experience_sheet.title = "Experience"
    _fill_sheet(experience_sheet, EXPERIENCE_COLUMNS, result.experience_records())

    education_sheet = workbook.create_sheet("Education")
    _fill_sheet(education_sheet, EDUCATION_COLUMNS, result.education_records())

    workbook.save(path)
    logger.info(f"Data exported to {path}")
    return path


def _fill_sheet(sheet, columns: list[tuple[str, str]], records) -> None:
    sheet.append([header for header, _ in columns])
    for record in records:
        sheet.append([getattr(record, attribute) for _, attribute in columns])
