# blogs/markdown/renderer.py

import pypandoc

from .config import RenderConfig, get_pandoc_config, get_render_config
from .postprocessors import apply_postprocessors
from .preprocessors import apply_preprocessors
from .preprocessors.math_resolver import EquationRegistry


def build_render_context(category=None, slug=None, metadata=None, config: RenderConfig = None):
    """
    Create the context shared by every processor of one render.

    Args:
        category: Article category, used for media URLs
        slug: Article folder name, used for media URLs
        metadata: Parsed frontmatter of the article
        config: RenderConfig; read from settings when omitted

    Returns:
        A fresh dict; registries are never shared between renders
    """
    metadata = metadata or {}
    abbreviations = metadata.get("abbreviations")
    return {
        "category": category,
        "slug": slug,
        "config": config or get_render_config(),
        "abbreviations": abbreviations if isinstance(abbreviations, dict) else {},
        "equations": EquationRegistry(),
        "figure_targets": {},
        "strip_title": False,
    }


def convert_markdown(text):
    """Convert Markdown (with raw HTML fragments) to HTML using pypandoc."""
    pandoc_config = get_pandoc_config()
    return pypandoc.convert_text(
        text,
        to=pandoc_config["to"],
        format=pandoc_config["from"],
        extra_args=pandoc_config["extra_args"],
        filters=pandoc_config.get("filters", []),
    )


def render_markdown(text, context=None):
    """
    Main rendering function with pre/post processing pipeline using pypandoc

    Args:
        text: Raw markdown text (frontmatter already removed)
        context: Optional dict for processors that need additional data
    """
    context = context if context is not None else build_render_context()

    # Pre-processing: Before markdown conversion
    text = apply_preprocessors(text, context)

    html = convert_markdown(text)

    # Post-processing: After markdown conversion
    html = apply_postprocessors(html, context)

    return html
