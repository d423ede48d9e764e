# blogs/markdown/postprocessors/sanitizer.py

import logging
from functools import lru_cache

import bleach
from django.conf import settings

logger = logging.getLogger(__name__)

# Tags emitted by pandoc's html5 writer and by the MyST directive/role handlers
PIPELINE_TAGS = {
    "p", "br", "hr", "div", "span", "section", "blockquote", "cite", "mark",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "del", "s", "ins", "u", "sub", "sup", "kbd", "samp", "var", "pre", "code",
    "ul", "ol", "li", "dl", "dt", "dd",
    "table", "caption", "colgroup", "col", "thead", "tbody", "tfoot", "tr", "th", "td",
    "img", "figure", "figcaption", "picture", "source", "video", "iframe",
    "details", "summary", "input", "abbr",
}

GLOBAL_ATTRIBUTES = {"class", "id", "title", "role"}

TAG_ATTRIBUTES = {
    "a": ["href", "rel", "target"],
    "img": ["src", "alt", "width", "height", "loading"],
    "video": ["src", "width", "height", "poster", "preload", "controls", "autoplay", "loop", "muted"],
    "source": ["src", "type"],
    "iframe": ["src", "width", "height", "frameborder", "allow", "allowfullscreen", "loading"],
    "details": ["open"],
    "th": ["colspan", "rowspan", "scope", "align"],
    "td": ["colspan", "rowspan", "align"],
    "ol": ["start", "type"],
    "input": ["type", "checked", "disabled"],
    "blockquote": ["cite"],
}

PROTOCOLS = ["http", "https", "mailto", "tel"]


def _allow_attribute(tag, name, value):
    """Global attributes plus any data-*/aria-*, then the per-tag list."""
    if name in GLOBAL_ATTRIBUTES or name.startswith(("data-", "aria-")):
        return True
    return name in TAG_ATTRIBUTES.get(tag, ())


@lru_cache(maxsize=1)
def _get_cleaner():
    return bleach.sanitizer.Cleaner(
        tags=frozenset(bleach.sanitizer.ALLOWED_TAGS) | PIPELINE_TAGS,
        attributes=_allow_attribute,
        protocols=PROTOCOLS,
        strip=False,  # Escape disallowed tags instead of dropping their text
    )


def sanitize_html(html, context):
    """
    Sanitize the rendered HTML with bleach.

    Runs first among the postprocessors so that everything added afterwards
    (table wrappers, rewritten URLs) is trusted output. Set
    ``BLOGS_SANITIZE_HTML = False`` to pass trusted content through untouched.
    """
    if not getattr(settings, "BLOGS_SANITIZE_HTML", True):
        return html

    try:
        return _get_cleaner().clean(html)
    except Exception as e:
        logger.error(f"Bleach sanitization failed: {e}", exc_info=True)
        return html
