# blogs/articles.py
"""
Turn a raw article (YAML frontmatter + MyST Markdown) into a RenderedBlogPost.
"""

import datetime
import logging
from dataclasses import dataclass
from typing import Tuple

from dateutil import parser as date_parser

from .markdown.config import RenderConfig, get_render_config
from .markdown.frontmatter import split_frontmatter
from .markdown.postprocessors.path_rewriter import resolve_thumbnail_url
from .markdown.renderer import build_render_context, render_markdown

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedBlogPost:
    slug: str
    category: str
    path: str
    title: str
    date: str
    author: str
    thumbnail: str
    thumbnail_url: str
    tags: Tuple[str, ...]
    description: str
    language: str
    content: str
    raw_content: str
    # Math macros from the frontmatter as (name, expansion) pairs
    math: Tuple[Tuple[str, str], ...] = ()
    published: bool = False

    def to_dict(self) -> dict:
        """JSON shape used by the prerendered index."""
        return {
            "category": self.category,
            "slug": self.slug,
            "title": self.title,
            "date": self.date,
            "author": self.author,
            "thumbnail": self.thumbnail,
            "tags": list(self.tags),
            "description": self.description,
            "language": self.language,
            "renderedHtml": self.content,
            "rawContent": self.raw_content,
        }


def parse_tags(value) -> Tuple[str, ...]:
    """
    Normalize the ``tags`` frontmatter field.

    Accepts a comma-separated string or a YAML list; entries are trimmed and
    empty ones dropped.
    """
    if not value:
        return ()
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        items = [value]
    return tuple(str(item).strip() for item in items if item is not None and str(item).strip())


def _date_string(value) -> str:
    if value is None:
        return ""
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value)


def _description(metadata: dict) -> str:
    myst = metadata.get("myst")
    if not isinstance(myst, dict):
        return ""
    html_meta = myst.get("html_meta")
    if not isinstance(html_meta, dict):
        return ""
    return str(html_meta.get("description lang=en") or "")


def format_date(value) -> str:
    """
    Format a date as "Month D, YYYY".

    Args:
        value: ISO string, free-form date string or date object

    Returns:
        The formatted date; the input unchanged (as a string) when it cannot
        be parsed, and an empty string for empty input
    """
    if not value:
        return ""
    if isinstance(value, (datetime.date, datetime.datetime)):
        date = value
    else:
        try:
            date = date_parser.parse(str(value))
        except (ValueError, OverflowError):
            return str(value)
    return f"{date:%B} {date.day}, {date.year}"


def render_article(
    raw: str,
    category: str,
    slug: str,
    config: RenderConfig = None,
    strip_title: bool = False,
) -> RenderedBlogPost:
    """
    Render one article.

    Args:
        raw: Full article text, frontmatter included
        category: Category folder of the article
        slug: Article folder name
        config: RenderConfig; read from settings when omitted
        strip_title: Drop the leading <h1> of the body

    Returns:
        RenderedBlogPost with metadata, HTML and the raw body
    """
    config = config or get_render_config()
    source = f"{category}/{slug}"
    metadata, body = split_frontmatter(raw, source)

    context = build_render_context(category, slug, metadata, config)
    context["strip_title"] = strip_title
    html = render_markdown(body, context)

    thumbnail = str(metadata.get("thumbnail") or "")
    math = metadata.get("math")
    macros = tuple((str(k), str(v)) for k, v in math.items()) if isinstance(math, dict) else ()
    logger.debug(f"Rendered {source} ({len(context['equations'])} numbered equations)")

    return RenderedBlogPost(
        slug=slug,
        category=category,
        path=f"blogs/{category}/{slug}",
        title=str(metadata.get("blog_title") or slug),
        date=_date_string(metadata.get("date")),
        author=str(metadata.get("author") or "Unknown"),
        thumbnail=thumbnail,
        thumbnail_url=resolve_thumbnail_url(category, slug, thumbnail, config),
        tags=parse_tags(metadata.get("tags")),
        description=_description(metadata),
        language=str(metadata.get("language") or "English"),
        content=html,
        raw_content=body,
        math=macros,
        published=bool(metadata.get("blogpost")),
    )
