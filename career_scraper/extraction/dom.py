"""DOM capability used by the engine, and the text extractor.

The engine never parses HTML. It talks to the page through ``DomNode``, a
small async interface implemented by the Playwright adapter
(``career_scraper.browser.dom``) and by in-memory trees in tests.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class DomNode(Protocol):
    """A page or element that selector queries can be evaluated against."""

    async def query_selector(self, selector: str) -> DomNode | None: ...

    async def query_selector_all(self, selector: str) -> Sequence[DomNode]: ...

    async def read_text(self) -> str | None: ...

    async def matches(self, selector: str) -> bool: ...

    async def ancestors(self) -> Sequence[DomNode]: ...

    async def dispose(self) -> None: ...


@dataclass(frozen=True)
class ScopedSelector:
    """A selector fragment resolved under an already-matched node.

    ``base`` is the selector that matched the scope node and is kept for
    logging; the query only ever runs against the scope node itself, so it
    never re-queries the whole page.
    """

    base: str
    relative: str

    @property
    def query(self) -> str:
        """Selector string to evaluate with the scope node as root."""
        relative = self.relative.strip()
        # A leading child combinator only means something anchored to the scope
        if relative.startswith(">"):
            return f":scope {relative}"
        return relative

    def __str__(self) -> str:
        return f"{self.base} {self.relative}"


async def extract_text(node: DomNode | None) -> str | None:
    """Return the trimmed text of a node.

    Absent nodes, blank text, and read failures all yield ``None``.
    """
    if node is None:
        return None
    try:
        text = await node.read_text()
    except Exception as e:
        logger.debug(f"Text read failed, treating as empty: {e}")
        return None
    if text is None:
        return None
    text = text.strip()
    return text or None


async def extract_fragments(nodes: Sequence[DomNode]) -> list[str]:
    """Read nodes in order, dropping blank fragments."""
    fragments: list[str] = []
    for node in nodes:
        text = await extract_text(node)
        if text:
            fragments.append(text)
    return fragments


async def text_at(scope: DomNode, selector: ScopedSelector) -> str | None:
    """Text of the first node matching ``selector`` under ``scope``."""
    return await extract_text(await scope.query_selector(selector.query))


async def fragments_at(scope: DomNode, selector: ScopedSelector) -> list[str]:
    """Non-blank texts of all nodes matching ``selector`` under ``scope``."""
    return await extract_fragments(await scope.query_selector_all(selector.query))


async def dispose_all(nodes: Sequence[DomNode]) -> None:
    """Release node handles that are no longer needed; failures are ignored."""
    for node in nodes:
        with contextlib.suppress(Exception):
            await node.dispose()
