# blogs/markdown/postprocessors/title_remover.py
"""
Postprocessor that removes the leading ``<h1>`` of an article.

Articles repeat their frontmatter title as a ``# Heading`` on the first
line; the page template already renders the title, so the duplicate is
dropped when ``context["strip_title"]`` is set.
"""

from .utils import get_shared_soup, soup_to_html


def title_remover(html: str, context: dict) -> str:
    if not context.get("strip_title") or "<h1" not in html:
        return html

    soup = get_shared_soup(html, context)
    heading = soup.find("h1")
    if heading is None:
        return html

    # Only a heading that comes before any other content counts as the title
    previous = heading.find_previous(string=lambda s: s.strip())
    if previous is not None:
        return html

    heading.decompose()
    return soup_to_html(context, soup).lstrip()


def title_remover_default(html: str, context: dict) -> str:
    """
    Default configuration for title_remover.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return title_remover(html, context)
