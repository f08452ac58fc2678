"""Result sinks."""

from career_scraper.output.writers import (
    FORMATS,
    detect_format,
    write_json,
    write_result,
    write_xlsx,
)

__all__ = ["FORMATS", "detect_format", "write_json", "write_result", "write_xlsx"]
