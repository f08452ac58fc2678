"""Item extraction for one section of one profile."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from career_scraper.extraction.cancellation import CancellationToken
from career_scraper.extraction.decompose import (
    DescriptionFields,
    DetailFields,
    EducationFields,
    decompose_description_skills,
    decompose_details,
    decompose_education_details,
)
from career_scraper.extraction.dom import (
    DomNode,
    ScopedSelector,
    extract_fragments,
    extract_text,
    fragments_at,
    text_at,
)
from career_scraper.extraction.errors import ItemExtractionError, SectionError
from career_scraper.extraction.events import (
    EventEmitter,
    EventKind,
    ExtractionEvent,
    Observer,
)
from career_scraper.extraction.models import (
    CompositePolicy,
    EducationRecord,
    ExperienceRecord,
    ExtractedRecord,
    Section,
    SectionSelectors,
)
from career_scraper.extraction.resolver import inspect_relationship, own_nodes

T = TypeVar("T")


class _ItemContext:
    """Per-item bookkeeping: where we are and which field groups failed.

    ``composite`` items contain other items; their sub-selectors are
    restricted to the nodes the item owns.
    """

    def __init__(
        self, profile_url: str, section: Section, index: int, composite: bool = False
    ) -> None:
        self.profile_url = profile_url
        self.section = section
        self.index = index
        self.composite = composite
        self.failures: list[ItemExtractionError] = []


class SectionExtractor:
    """Extract the records of one section from a scope.

    Items are processed in document order. An item whose title, details or
    description cannot be read is still recorded: the unreadable fields stay
    ``None`` and the record is flagged ``partial``.

    Attributes:
        policy: How nested matches of the item selector are disambiguated.
        events: Event emitter shared with the caller.
    """

    def __init__(
        self,
        *,
        policy: CompositePolicy = CompositePolicy.OUTERMOST,
        observers: Iterable[Observer] | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        self.policy = policy
        self.events = events or EventEmitter(observers)

    async def extract_section(
        self,
        scope: DomNode,
        section: Section,
        selectors: SectionSelectors,
        *,
        profile_url: str,
        token: CancellationToken | None = None,
    ) -> list[ExtractedRecord]:
        """Extract all records of ``section`` under ``scope``.

        Args:
            scope: Page or node the item selector is evaluated against.
            section: Which record type to build.
            selectors: Item selector and item-relative sub-selectors.
            profile_url: Profile the records belong to.
            token: Polled before each item; once stopped, the records
                gathered so far are returned.

        Returns:
            Records in document order.

        Raises:
            SectionError: If the items themselves cannot be enumerated.
        """
        try:
            items = list(await scope.query_selector_all(selectors.item))
        except Exception as e:
            raise SectionError(section.value, profile_url, str(e)) from e

        self._emit(EventKind.ITEMS_FOUND, profile_url, section, count=len(items))

        records: list[ExtractedRecord] = []
        for index, item in enumerate(items):
            if token is not None and token.stopped:
                self._emit(
                    EventKind.SECTION_STOPPED,
                    profile_url,
                    section,
                    index=index,
                    count=len(records),
                )
                return records

            relationship = await inspect_relationship(item, selectors.item)
            if relationship.skip(self.policy):
                self._emit(
                    EventKind.ITEM_SKIPPED,
                    profile_url,
                    section,
                    index=index,
                    message=relationship.reason(self.policy),
                )
                continue

            ctx = _ItemContext(profile_url, section, index, relationship.composite)
            if section is Section.EXPERIENCE:
                record = await self._extract_experience(item, selectors, ctx)
            else:
                record = await self._extract_education(item, selectors, ctx)
            records.append(record)

            self._emit(
                EventKind.ITEM_EXTRACTED,
                profile_url,
                section,
                index=index,
                message=self._label(record),
            )

        self._emit(EventKind.SECTION_COMPLETED, profile_url, section, count=len(records))
        return records

    async def _extract_experience(
        self, item: DomNode, selectors: SectionSelectors, ctx: _ItemContext
    ) -> ExperienceRecord:
        title = await self._read_group(
            ctx,
            "title",
            lambda: self._text(item, selectors, selectors.title, ctx.composite),
            None,
        )
        details = await self._read_group(
            ctx,
            "details",
            lambda: self._decomposed(
                item, selectors, selectors.details, decompose_details, ctx.composite
            ),
            DetailFields(),
        )
        description = await self._read_group(
            ctx,
            "description",
            lambda: self._decomposed(
                item,
                selectors,
                selectors.description,
                decompose_description_skills,
                ctx.composite,
            ),
            DescriptionFields(),
        )
        return ExperienceRecord(
            profile_url=ctx.profile_url,
            index=ctx.index,
            title=title,
            organization=details.organization,
            employment_type=details.employment_type,
            date_range=details.date_range,
            location=details.location,
            description=description.description,
            skills=description.skills,
            partial=bool(ctx.failures),
        )

    async def _extract_education(
        self, item: DomNode, selectors: SectionSelectors, ctx: _ItemContext
    ) -> EducationRecord:
        institution = await self._read_group(
            ctx,
            "institution",
            lambda: self._text(item, selectors, selectors.title, ctx.composite),
            None,
        )
        details = await self._read_group(
            ctx,
            "details",
            lambda: self._decomposed(
                item,
                selectors,
                selectors.details,
                decompose_education_details,
                ctx.composite,
            ),
            EducationFields(),
        )
        return EducationRecord(
            profile_url=ctx.profile_url,
            index=ctx.index,
            institution=institution,
            diploma=details.diploma,
            duration=details.duration,
            partial=bool(ctx.failures),
        )

    async def _read_group(
        self,
        ctx: _ItemContext,
        field_group: str,
        read: Callable[[], Awaitable[T]],
        default: T,
    ) -> T:
        """Run one field-group read; a failure leaves the group at ``default``."""
        try:
            return await read()
        except Exception as e:
            error = ItemExtractionError(ctx.index, field_group, str(e))
            ctx.failures.append(error)
            self._emit(
                EventKind.ITEM_FAILED,
                ctx.profile_url,
                ctx.section,
                index=ctx.index,
                message=str(error),
            )
            return default

    @staticmethod
    async def _text(
        item: DomNode,
        selectors: SectionSelectors,
        relative: str | None,
        composite: bool = False,
    ) -> str | None:
        if relative is None:
            return None
        selector = ScopedSelector(selectors.item, relative)
        if not composite:
            return await text_at(item, selector)
        nodes = await own_nodes(
            item, await item.query_selector_all(selector.query), selectors.item
        )
        return await extract_text(nodes[0]) if nodes else None

    @staticmethod
    async def _decomposed(
        item: DomNode,
        selectors: SectionSelectors,
        relative: str | None,
        decompose: Callable[[list[str]], T],
        composite: bool = False,
    ) -> T:
        fragments: list[str] = []
        if relative is not None:
            selector = ScopedSelector(selectors.item, relative)
            if composite:
                # Lines of the nested items also match under a grouping item
                nodes = await own_nodes(
                    item, await item.query_selector_all(selector.query), selectors.item
                )
                fragments = await extract_fragments(nodes)
            else:
                fragments = await fragments_at(item, selector)
        return decompose(fragments)

    @staticmethod
    def _label(record: ExtractedRecord) -> str:
        if isinstance(record, ExperienceRecord):
            label = record.title or "(no title)"
        else:
            label = record.institution or "(no institution)"
        return f"{label} [partial]" if record.partial else label

    def _emit(
        self,
        kind: EventKind,
        profile_url: str,
        section: Section,
        *,
        index: int | None = None,
        count: int | None = None,
        message: str | None = None,
    ) -> None:
        self.events.emit(
            ExtractionEvent(
                kind=kind,
                profile_url=profile_url,
                section=section,
                index=index,
                count=count,
                message=message,
            )
        )
