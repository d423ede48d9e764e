# blogs/markdown/preprocessors/__init__.py

from .abbreviations import abbreviations_default
from .directives import directives_default
from .figure_resolver import figure_resolver_default
from .math_resolver import math_resolver_default
from .roles import roles_default

PREPROCESSORS = [
    abbreviations_default,  # Expand frontmatter abbreviations into <abbr>
    math_resolver_default,  # Number equations, resolve {eq} references, inline math
    figure_resolver_default,  # Figure targets and {figure} directives
    directives_default,  # Admonitions, dropdowns, tabs, code blocks, ...
    roles_default,  # Inline roles; must not run before directives
    # Order matters - they run sequentially
]


def apply_preprocessors(text, context):
    """Apply all preprocessors in order"""
    for processor in PREPROCESSORS:
        text = processor(text, context)
    return text
