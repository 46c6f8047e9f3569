"""HTML pages queried with CSS selectors."""

from __future__ import annotations

from bs4 import BeautifulSoup

from sfex.value import SfxList, SfxValueError, to_display_string


class Page:
    """A parsed HTML document."""

    def __init__(self, html: str):
        self.html = html
        self._soup = BeautifulSoup(html, "html.parser", multi_valued_attributes=None)

    def _select(self, selector):
        selector_text = to_display_string(selector)
        try:
            return self._soup.select(selector_text)
        except Exception as exc:
            raise SfxValueError(f"Invalid CSS selector: {selector_text}") from exc

    def select_text(self, selector) -> SfxList:
        """Text of every element matching ``selector``, its text nodes joined by spaces."""
        return SfxList(" ".join(element.strings) for element in self._select(selector))

    def select_attr(self, selector, attribute) -> SfxList:
        """Value of ``attribute`` on every matching element that has it."""
        name = to_display_string(attribute)
        return SfxList(
            str(element[name])
            for element in self._select(selector)
            if element.has_attr(name)
        )

    def __repr__(self) -> str:
        return f"Page({len(self.html)} chars)"


def parse_html(content) -> Page:
    """Parse HTML text into a queryable page."""
    return Page(to_display_string(content))