"""Structured progress events emitted by the pipeline and aggregator.

Console logging is one observer among others; the extraction code only
emits events.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from career_scraper.extraction.models import Section

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    """Kinds of extraction events."""

    ITEMS_FOUND = "items_found"
    ITEM_SKIPPED = "item_skipped"
    ITEM_EXTRACTED = "item_extracted"
    ITEM_FAILED = "item_failed"
    SECTION_STOPPED = "section_stopped"
    SECTION_COMPLETED = "section_completed"
    TARGET_STARTED = "target_started"
    TARGET_COMPLETED = "target_completed"
    TARGET_FAILED = "target_failed"
    RUN_STOPPED = "run_stopped"
    RUN_COMPLETED = "run_completed"


@dataclass(frozen=True)
class ExtractionEvent:
    kind: EventKind
    profile_url: str | None = None
    section: Section | None = None
    index: int | None = None
    count: int | None = None
    message: str | None = None


Observer = Callable[[ExtractionEvent], None]


class EventEmitter:
    """Fan events out to observers; a failing observer never breaks extraction."""

    def __init__(self, observers: Iterable[Observer] | None = None) -> None:
        self.observers: list[Observer] = (
            list(observers) if observers is not None else [LoggingObserver()]
        )

    def emit(self, event: ExtractionEvent) -> None:
        for observer in self.observers:
            with contextlib.suppress(Exception):
                observer(event)


class LoggingObserver:
    """Write events to the application log."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or logger

    def __call__(self, event: ExtractionEvent) -> None:
        where = self._where(event)
        kind = event.kind

        if kind is EventKind.ITEMS_FOUND:
            self.log.info(f"{where}: found {event.count} items")
        elif kind is EventKind.ITEM_SKIPPED:
            self.log.info(f"{where}: skipping item {event.index} ({event.message})")
        elif kind is EventKind.ITEM_EXTRACTED:
            self.log.info(f"{where}: extracted item {event.index}: {event.message}")
        elif kind is EventKind.ITEM_FAILED:
            self.log.warning(f"{where}: item {event.index} failed: {event.message}")
        elif kind is EventKind.SECTION_STOPPED:
            self.log.info(f"{where}: stopped by user after {event.count} records")
        elif kind is EventKind.SECTION_COMPLETED:
            self.log.info(f"{where}: {event.count} records")
        elif kind is EventKind.TARGET_STARTED:
            self.log.info(f"Processing profile: {event.profile_url}")
        elif kind is EventKind.TARGET_COMPLETED:
            self.log.info(f"Profile done: {event.profile_url} ({event.count} records)")
        elif kind is EventKind.TARGET_FAILED:
            self.log.error(f"Profile failed: {event.profile_url}: {event.message}")
        elif kind is EventKind.RUN_STOPPED:
            self.log.info(f"Scraping stopped by user ({event.count} profiles done)")
        elif kind is EventKind.RUN_COMPLETED:
            self.log.info(f"Run complete: {event.count} profiles processed")

    @staticmethod
    def _where(event: ExtractionEvent) -> str:
        section = event.section.value if event.section is not None else "-"
        return f"[{event.profile_url}] {section}"
