# blogs/markdown/postprocessors/__init__.py

from .path_rewriter import path_rewriter_default, production_rewriter_default
from .sanitizer import sanitize_html
from .table_enhancer import table_enhancer_default
from .title_remover import title_remover_default

POSTPROCESSORS = [
    sanitize_html,
    table_enhancer_default,  # Wrap tables in a scroll container
    path_rewriter_default,  # Relative image/video paths to local or published URLs
    production_rewriter_default,  # /blogs/... to the raw-content host when published
    title_remover_default,  # Drop the leading <h1> duplicating the frontmatter title
    # Order matters - they run sequentially
]


def apply_postprocessors(html, context):
    """Apply all postprocessors in order"""
    for processor in POSTPROCESSORS:
        html = processor(html, context)
    return html
