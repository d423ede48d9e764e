# blogs/markdown/preprocessors/utils.py
"""Helpers shared by the text preprocessors."""

from __future__ import annotations

import re
from typing import List

from django.utils.html import escape

# Directives whose body is source code rather than MyST content
LITERAL_DIRECTIVES = frozenset({"code", "code-block", "sourcecode", "mermaid"})

_PLACEHOLDER = "\ue000{index}\ue001"
_PLACEHOLDER_RE = re.compile("\ue000(\\d+)\ue001")

_FENCE_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
_COLON_LITERAL_RE = re.compile(
    r"^(?P<fence>:{3,})\{(?:" + "|".join(sorted(LITERAL_DIRECTIVES)) + r")\}"
)
_DIRECTIVE_INFO_RE = re.compile(r"^\{(?P<name>[\w:-]+)\}")
_INLINE_RE = re.compile(
    r"(?P<role>\{[\w:+-]+(?:\s+[^}\n]*)?\}`[^`\n]*`)"
    r"|(?P<code>(?<!\\)(?P<tick>`+)(?!`).+?(?<!`)(?P=tick)(?!`))"
)


class CodeShield:
    """
    Hide code from regex-based substitutions.

    Fenced code blocks (including literal directives such as ``{code-block}``)
    and inline code spans are swapped for opaque placeholders by ``protect``
    and put back verbatim by ``restore``. MyST roles are left visible even
    though their text is wrapped in backticks.
    """

    def __init__(self):
        self._chunks: List[str] = []

    def _stash(self, chunk: str) -> str:
        self._chunks.append(chunk)
        return _PLACEHOLDER.format(index=len(self._chunks) - 1)

    def protect(self, text: str) -> str:
        return self._protect_inline(self._protect_fences(text))

    def restore(self, text: str) -> str:
        return _PLACEHOLDER_RE.sub(lambda m: self._chunks[int(m.group(1))], text)

    def _protect_fences(self, text: str) -> str:
        lines = text.split("\n")
        result = []
        open_directives = []
        i = 0
        while i < len(lines):
            line = lines[i]

            colon = _COLON_LITERAL_RE.match(line)
            if colon:
                end = _find_closing(lines, i, colon.group("fence"), exact=True)
                if end is not None:
                    result.append(self._stash("\n".join(lines[i : end + 1])))
                    i = end + 1
                    continue

            match = _FENCE_RE.match(line)
            if not match:
                result.append(line)
                i += 1
                continue

            fence = match.group("fence")
            info = match.group("info").strip()
            directive = _DIRECTIVE_INFO_RE.match(info)

            if directive and directive.group("name") not in LITERAL_DIRECTIVES:
                # MyST content lives inside, keep scanning its lines
                open_directives.append(fence)
                result.append(line)
                i += 1
                continue

            if not info and open_directives and fence == open_directives[-1]:
                open_directives.pop()
                result.append(line)
                i += 1
                continue

            end = _find_closing(lines, i, fence)
            if end is None:
                result.append(line)
                i += 1
                continue

            result.append(self._stash("\n".join(lines[i : end + 1])))
            i = end + 1

        return "\n".join(result)

    def _protect_inline(self, text: str) -> str:
        def replace(match):
            if match.group("role"):
                return match.group("role")
            return self._stash(match.group("code"))

        return _INLINE_RE.sub(replace, text)


def _find_closing(lines, start, fence, exact=False):
    """Index of the line closing ``fence`` opened at ``start``, or None."""
    char = re.escape(fence[0])
    count = f"{{{len(fence)}}}" if exact else f"{{{len(fence)},}}"
    closing = re.compile(rf"^ {{0,3}}{char}{count}\s*$")
    for j in range(start + 1, len(lines)):
        if closing.match(lines[j]):
            return j
    return None


def attr(value) -> str:
    """Escape a value for use inside a double-quoted HTML attribute."""
    return escape(str(value))


def glossary_term_id(term: str) -> str:
    """Anchor id shared by glossary entries and ``{term}`` references."""
    return "term-" + re.sub(r"[^a-z0-9]+", "-", term.strip().lower())


_ESCAPED_INLINE_MATH_RE = re.compile(r"\\\\\((?P<body>.+?)\\\\\)", re.DOTALL)
_MATH_ESCAPE_RE = re.compile(r"\\(\\|[*_\[\]<])")


def raw_inline_math(fragment: str, html: bool = True) -> str:
    """
    Undo the Markdown escaping of inline math in ``fragment``.

    Inline math leaves the math stage as ``\\\\(...\\\\)`` so that the Markdown
    converter turns it back into ``\\(...\\)``. Text placed inside raw HTML
    (titles, captions, attributes) is never read as Markdown and needs the
    literal form directly. With ``html`` a ``<`` in the LaTeX becomes ``&lt;``;
    pass ``html=False`` for values that are attribute-escaped afterwards.
    """

    def unescape(match):
        char = match.group(1)
        if char == "<" and html:
            return "&lt;"
        return char

    def literal(match):
        return "\\(" + _MATH_ESCAPE_RE.sub(unescape, match.group("body")) + "\\)"

    return _ESCAPED_INLINE_MATH_RE.sub(literal, fragment)
