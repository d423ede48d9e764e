# blogs/markdown/preprocessors/abbreviations.py
"""
Preprocessor that expands abbreviations declared in the article frontmatter.

Frontmatter:
    abbreviations:
      LLM: Large Language Model
      HIP: Heterogeneous-compute Interface for Portability

Converts every whole-word occurrence in the body:
    LLM  →  <abbr title="Large Language Model">LLM</abbr>

Left alone: code, link targets, HTML tags, roles, math (inline, display,
AMS environments and {math} blocks), and directive opening and option lines,
whose paths, URLs and values are data for later stages.
"""

import re

from .utils import CodeShield, attr

# Compiled with MULTILINE and DOTALL; every region is copied through unchanged
SKIP_PATTERN = "|".join(
    [
        r"^(?P<math_fence>:{3,4}|`{3,4})\{math\}.*?^(?P=math_fence)[ \t]*$",
        r"\$\$.*?\$\$",
        r"\\begin\{(?P<env>[\w*]+)\}.*?\\end\{(?P=env)\}",
        r"^(?::{3,}|`{3,})\{[\w:-]+\}[^\n]*$",
        r"^[ \t]*:[\w-]+:[^\n]*$",
        r"\]\([^)\n]*\)",
        r"<[^>\n]*>",
        r"\{[\w:+-]+\}`[^`\n]*`",
        r"\$[^$\n]+\$",
    ]
)


def expand_abbreviations(text: str, context: dict) -> str:
    """
    Wrap whole-word abbreviations in <abbr> tags carrying their expansion.

    All abbreviations are matched in a single pass, longest first, so an
    expansion that happens to contain another abbreviation is never expanded
    again.

    Args:
        text: Markdown body
        context: Render context; reads ``abbreviations`` (mapping)

    Returns:
        Markdown with <abbr> markup injected
    """
    abbreviations = context.get("abbreviations")
    if not isinstance(abbreviations, dict) or not abbreviations:
        return text

    expansions = {
        str(abbr): str(full)
        for abbr, full in abbreviations.items()
        if str(abbr).strip() and full is not None
    }
    if not expansions:
        return text

    alternatives = "|".join(
        re.escape(abbr) for abbr in sorted(expansions, key=len, reverse=True)
    )
    pattern = re.compile(
        rf"(?P<skip>{SKIP_PATTERN})|(?<!\w)(?P<abbr>{alternatives})(?!\w)",
        re.MULTILINE | re.DOTALL,
    )

    def replace(match):
        abbr = match.group("abbr")
        if abbr is None:
            return match.group("skip")
        return f'<abbr title="{attr(expansions[abbr])}">{abbr}</abbr>'

    shield = CodeShield()
    return shield.restore(pattern.sub(replace, shield.protect(text)))


def abbreviations_default(text: str, context: dict) -> str:
    """
    Default configuration for expand_abbreviations.

    Register this in PREPROCESSORS.
    """
    return expand_abbreviations(text, context)
