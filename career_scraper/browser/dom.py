"""Playwright implementation of the ``DomNode`` capability."""

from __future__ import annotations

from playwright.async_api import ElementHandle, Page

_ANCESTORS_SCRIPT = """(el) => {
    const chain = [];
    let parent = el.parentElement;
    while (parent) {
        chain.push(parent);
        parent = parent.parentElement;
    }
    return chain;
}"""


class PlaywrightNode:
    """Wrap a Playwright ``Page`` or ``ElementHandle``.

    A page acts as the document root: it has no ancestors and matches no
    selector.
    """

    def __init__(self, handle: Page | ElementHandle) -> None:
        self.handle = handle

    @property
    def is_page(self) -> bool:
        return isinstance(self.handle, Page)

    async def query_selector(self, selector: str) -> PlaywrightNode | None:
        found = await self.handle.query_selector(selector)
        return PlaywrightNode(found) if found is not None else None

    async def query_selector_all(self, selector: str) -> list[PlaywrightNode]:
        return [PlaywrightNode(h) for h in await self.handle.query_selector_all(selector)]

    async def read_text(self) -> str | None:
        if self.is_page:
            return await self.handle.evaluate(
                "() => document.body ? document.body.textContent : null"
            )
        return await self.handle.text_content()

    async def matches(self, selector: str) -> bool:
        if self.is_page:
            return False
        return bool(await self.handle.evaluate("(el, sel) => el.matches(sel)", selector))

    async def ancestors(self) -> list[PlaywrightNode]:
        """Parent chain, nearest first.

        The caller owns the returned handles and releases them with
        ``dispose()``; every other handle is released here.
        """
        if self.is_page:
            return []
        chain = await self.handle.evaluate_handle(_ANCESTORS_SCRIPT)
        try:
            properties = await chain.get_properties()
            nodes: list[tuple[int, PlaywrightNode]] = []
            for key, value in properties.items():
                element = value.as_element()
                if key.isdigit() and element is not None:
                    nodes.append((int(key), PlaywrightNode(element)))
                else:
                    await value.dispose()
            return [node for _, node in sorted(nodes, key=lambda pair: pair[0])]
        finally:
            await chain.dispose()

    async def dispose(self) -> None:
        """Release the element handle; a page is never released here."""
        if not self.is_page:
            await self.handle.dispose()
