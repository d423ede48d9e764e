# blogs/markdown/postprocessors/table_enhancer.py
"""
Postprocessor that wraps tables for horizontal scrolling.

Input (pandoc output for a pipe table):
    <table>
        <thead>...</thead>
        <tbody>...</tbody>
    </table>

Output:
    <div class="table-wrapper">
        <table>...</table>
    </div>

Tables that already sit in a ``.table-wrapper`` div are left alone, so the
postprocessor can run more than once on the same HTML.
"""

from bs4 import Tag

from .utils import get_shared_soup, soup_to_html


def _is_wrapped(table: Tag) -> bool:
    parent = table.parent
    if parent is None or parent.name != "div":
        return False
    classes = parent.get("class", [])
    if isinstance(classes, str):
        classes = classes.split()
    return "table-wrapper" in classes


def table_enhancer(html: str, context: dict) -> str:
    """
    Wrap every table in a ``div.table-wrapper``.

    Args:
        html: HTML string to process
        context: Render context (holds the shared soup)

    Returns:
        HTML with wrapped tables
    """
    if "<table" not in html:
        return html

    soup = get_shared_soup(html, context)
    for table in soup.find_all("table"):
        if _is_wrapped(table):
            continue
        wrapper = soup.new_tag("div")
        wrapper["class"] = ["table-wrapper"]
        table.wrap(wrapper)

    return soup_to_html(context, soup)


def table_enhancer_default(html: str, context: dict) -> str:
    """
    Default configuration for table_enhancer.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return table_enhancer(html, context)
