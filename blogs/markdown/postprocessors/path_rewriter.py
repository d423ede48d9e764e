# blogs/markdown/postprocessors/path_rewriter.py
"""
Postprocessors that point relative media paths at the place the article's
files are actually served from.

Local mode (development, content served by this site):
    <img src="./images/chart.png">   →  <img src="/blogs/ai/post1/images/chart.png">

Published mode (content served from the raw-content host of the repository):
    <img src="./images/chart.png">   →
    <img src="https://raw.githubusercontent.com/ROCm/rocm-blogs/release/blogs/ai/post1/images/chart.png">

Recognized spellings:
    ./images/  images/      article images
    ./image/   image/       article images, singular folder
    ../images/ ../image/    images shared by every article (/blogs/images/)
    ./videos/  videos/      article videos
"""

import re

from ..config import RenderConfig, get_render_config
from .utils import get_shared_soup, soup_to_html

MEDIA_TAGS = ("img", "source", "video", "iframe")


def _config(context: dict) -> RenderConfig:
    config = context.get("config")
    if config is None:
        config = context["config"] = get_render_config()
    return config


def blog_base_url(config: RenderConfig) -> str:
    """Root URL of the blogs tree for the configured mode, without trailing slash."""
    if config.local_mode:
        return "/blogs"
    return f"{config.external_base}/blogs"


def media_prefixes(category: str, slug: str, config: RenderConfig):
    """
    Ordered (relative prefix, absolute prefix) pairs.

    Longer spellings come first so that ``./images/`` is never mistaken for
    ``images/``.
    """
    article = f"{blog_base_url(config)}/{category}/{slug}"
    images = f"{article}/images/"
    shared = f"{blog_base_url(config)}/images/"
    videos = images.replace("/images/", "/videos/")
    return [
        ("../images/", shared),
        ("../image/", shared),
        ("./images/", images),
        ("images/", images),
        ("./image/", f"{article}/image/"),
        ("image/", f"{article}/image/"),
        ("./videos/", videos),
        ("videos/", videos),
    ]


def rewrite_src(src: str, prefixes) -> str:
    for relative, absolute in prefixes:
        if src.startswith(relative):
            return absolute + src[len(relative):]
    return src


def path_rewriter(html: str, context: dict) -> str:
    """
    Rewrite relative ``src`` attributes of images, videos and embeds.

    Args:
        html: HTML string to process
        context: Render context; reads ``category``, ``slug`` and ``config``

    Returns:
        HTML with absolute media URLs
    """
    category = context.get("category")
    slug = context.get("slug")
    if not category or not slug or "src=" not in html:
        return html

    prefixes = media_prefixes(category, slug, _config(context))
    soup = get_shared_soup(html, context)
    for tag in soup.find_all(MEDIA_TAGS, src=True):
        tag["src"] = rewrite_src(tag["src"], prefixes)
    return soup_to_html(context, soup)


def rewrite_urls_for_production(html: str, config: RenderConfig) -> str:
    """
    Re-target ``src="/blogs/..."`` at the raw-content host.

    Used for HTML whose media paths were already resolved to same-origin
    paths. Nothing changes in local mode.
    """
    if config.local_mode:
        return html
    return re.sub(r'src="/blogs/', f'src="{config.external_base}/blogs/', html)


def production_rewriter(html: str, context: dict) -> str:
    return rewrite_urls_for_production(html, _config(context))


def resolve_thumbnail_url(category: str, slug: str, thumbnail: str, config: RenderConfig) -> str:
    """
    URL of an article thumbnail named in its frontmatter.

    Absolute URLs are returned as-is; a bare file name lives in the article's
    ``images/`` folder, any other relative path is taken from the article root.
    """
    if not thumbnail:
        return ""
    if thumbnail.startswith("http"):
        return thumbnail

    path = thumbnail[2:] if thumbnail.startswith("./") else thumbnail
    base = f"{blog_base_url(config)}/{category}/{slug}/"
    if "/" in path:
        return base + path
    return f"{base}images/{path}"


def path_rewriter_default(html: str, context: dict) -> str:
    """
    Default configuration for path_rewriter.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return path_rewriter(html, context)


def production_rewriter_default(html: str, context: dict) -> str:
    """
    Default configuration for production_rewriter.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return production_rewriter(html, context)
