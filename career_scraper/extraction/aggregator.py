"""Sequential extraction across profiles and sections."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence

from career_scraper.extraction.cancellation import CancellationToken
from career_scraper.extraction.dom import DomNode
from career_scraper.extraction.events import (
    EventEmitter,
    EventKind,
    ExtractionEvent,
    Observer,
)
from career_scraper.extraction.models import (
    ExtractedRecord,
    ProfileOutcome,
    RunResult,
    Section,
    SelectorsConfig,
)
from career_scraper.extraction.pipeline import SectionExtractor

logger = logging.getLogger(__name__)

# Opens the page for one section of one profile and returns its scope.
ScopeProvider = Callable[[str, Section], Awaitable[DomNode]]


class RunAggregator:
    """Scrape profiles one after another and collect a ``RunResult``.

    A failure anywhere inside a profile (navigation, section enumeration)
    marks that profile failed and the run moves on. Nothing is retried.

    Attributes:
        scope_provider: Supplies the scope for (profile_url, section).
        extractor: Section extractor; shares this aggregator's events.
    """

    def __init__(
        self,
        *,
        scope_provider: ScopeProvider,
        extractor: SectionExtractor | None = None,
        observers: Iterable[Observer] | None = None,
    ) -> None:
        self.scope_provider = scope_provider
        if extractor is None:
            extractor = SectionExtractor(events=EventEmitter(observers))
        self.extractor = extractor
        self.events = extractor.events

    async def run_all(
        self,
        targets: Sequence[str],
        selectors: SelectorsConfig,
        token: CancellationToken | None = None,
    ) -> RunResult:
        """Scrape every target in order.

        Args:
            targets: Profile URLs.
            selectors: Sections to extract and their selectors.
            token: Polled before each profile. Profiles not reached after a
                stop are absent from the result rather than failed.

        Returns:
            RunResult with one outcome per profile reached.
        """
        result = RunResult(total_profiles=len(targets))

        for profile_url in targets:
            if token is not None and token.stopped:
                result.stopped = True
                self.events.emit(
                    ExtractionEvent(EventKind.RUN_STOPPED, count=len(result.profiles))
                )
                break
            result.profiles.append(await self._run_target(profile_url, selectors, token))
        else:
            # A stop during the last profile still leaves that profile partial
            result.stopped = token is not None and token.stopped

        self.events.emit(
            ExtractionEvent(EventKind.RUN_COMPLETED, count=len(result.profiles))
        )
        return result

    async def _run_target(
        self,
        profile_url: str,
        selectors: SelectorsConfig,
        token: CancellationToken | None,
    ) -> ProfileOutcome:
        self.events.emit(ExtractionEvent(EventKind.TARGET_STARTED, profile_url=profile_url))
        records: list[ExtractedRecord] = []

        try:
            for section, section_selectors in selectors.sections():
                if token is not None and token.stopped:
                    break
                scope = await self.scope_provider(profile_url, section)
                records.extend(
                    await self.extractor.extract_section(
                        scope,
                        section,
                        section_selectors,
                        profile_url=profile_url,
                        token=token,
                    )
                )
        except Exception as e:
            error = str(e) or type(e).__name__
            logger.debug(f"Profile {profile_url} failed", exc_info=True)
            self.events.emit(
                ExtractionEvent(
                    EventKind.TARGET_FAILED,
                    profile_url=profile_url,
                    count=len(records),
                    message=error,
                )
            )
            return ProfileOutcome(
                profile_url=profile_url, success=False, records=records, error=error
            )

        self.events.emit(
            ExtractionEvent(
                EventKind.TARGET_COMPLETED, profile_url=profile_url, count=len(records)
            )
        )
        return ProfileOutcome(profile_url=profile_url, success=True, records=records)
