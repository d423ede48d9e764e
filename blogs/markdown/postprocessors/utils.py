# blogs/markdown/postprocessors/utils.py
"""Parse-once helpers for postprocessors that edit the HTML tree."""

from __future__ import annotations

from bs4 import BeautifulSoup

SOUP_KEY = "__soup"
SOUP_SOURCE_KEY = "__soup_source"


def get_shared_soup(html: str, context: dict) -> BeautifulSoup:
    """
    Return the tree for ``html``, reusing the one cached in ``context``.

    The cached tree is only reused while ``html`` is exactly the string it
    was last serialized to; any processor that rewrote the markup as text
    forces a fresh parse.
    """
    if context.get(SOUP_KEY) is not None and context.get(SOUP_SOURCE_KEY) == html:
        return context[SOUP_KEY]

    soup = BeautifulSoup(html, "html.parser")
    context[SOUP_KEY] = soup
    context[SOUP_SOURCE_KEY] = html
    return soup


def soup_to_html(context: dict, soup: BeautifulSoup) -> str:
    """Serialize ``soup`` and remember the result as its source."""
    html = str(soup)
    context[SOUP_KEY] = soup
    context[SOUP_SOURCE_KEY] = html
    return html
