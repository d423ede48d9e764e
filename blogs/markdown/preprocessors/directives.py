# blogs/markdown/preprocessors/directives.py
"""
Preprocessor that renders MyST block directives.

A directive is a fenced block whose opening line names it:

    :::{note} Optional title          ```{tab-item} Python
    :class: dropdown                  :sync: py

    Body, may contain other           Body
    directives.                       ```
    :::

Colon fences (``:::``/``::::``) and backtick fences (three or four
backticks) are both accepted. Directives nest: an opening line with the same
fence character and length as the enclosing one increases the nesting depth,
a bare closing fence decreases it, and the block ends when the depth drops
back to zero. Use a longer fence (``::::``) for the outer block to avoid
counting altogether.

Bodies are rendered recursively before their parent, then handed to the
handler registered for the directive name in DIRECTIVE_HANDLERS. Unknown
names fall back to a generic ``<div class="myst-NAME">`` wrapper; blocks
without a closing fence are left as literal text.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List

from .utils import LITERAL_DIRECTIVES

logger = logging.getLogger(__name__)

OPENING_RE = re.compile(r"^(?P<fence>:{3,4}|`{3,4})\{(?P<name>[\w:-]+)\}\s*(?P<argument>.*)$")
PLAIN_FENCE_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})(?P<info>[^`]*)$")
OPTION_LINE_RE = re.compile(r"^:\w+(?:-\w+)?:")
OPTION_RE = re.compile(r"^:(?P<name>\w+(?:-\w+)?):\s*(?P<value>.*)$")


class DirectiveOptions:
    """Ordered ``:name: value`` lines of a directive."""

    def __init__(self, lines=None):
        self.lines: List[str] = list(lines or [])

    def get(self, name: str, default: str = "") -> str:
        for line in self.lines:
            match = OPTION_RE.match(line)
            if match and match.group("name") == name:
                return match.group("value").strip()
        return default

    def names(self) -> List[str]:
        names = []
        for line in self.lines:
            match = OPTION_RE.match(line)
            if match:
                names.append(match.group("name"))
        return names

    def flag(self, name: str) -> bool:
        """True when the option is present and not explicitly false."""
        if name not in self:
            return False
        return self.get(name).lower() not in ("false", "0", "no")

    def __contains__(self, name) -> bool:
        return name in self.names()

    def __iter__(self):
        return iter(self.lines)

    def __len__(self):
        return len(self.lines)


@dataclass
class DirectiveNode:
    name: str
    argument: str = ""
    options: DirectiveOptions = field(default_factory=DirectiveOptions)
    body: str = ""


def split_options(lines: List[str]):
    """
    Split the lines of a directive into option lines and body.

    Leading ``:name: value`` lines (blank lines between them are skipped)
    are options; the first other line starts the body, and option-shaped
    lines after it are body text.
    """
    options = []
    content = []
    in_options = True
    for line in lines:
        stripped = line.strip()
        if in_options and OPTION_LINE_RE.match(stripped):
            options.append(stripped)
        elif in_options and not stripped:
            continue
        else:
            in_options = False
            content.append(line)

    while content and not content[-1].strip():
        content.pop()
    return DirectiveOptions(options), "\n".join(content)


def _find_directive_end(lines: List[str], start: int, fence: str):
    """Index of the fence closing the directive opened at ``start``, or None."""
    char = re.escape(fence[0])
    size = len(fence)
    closing = re.compile(rf"^{char}{{{size}}}\s*$")
    opening = re.compile(rf"^{char}{{{size}}}(?:\{{[\w:-]+\}}|[^\s{char}{{])")

    depth = 1
    for j in range(start + 1, len(lines)):
        if closing.match(lines[j]):
            depth -= 1
            if depth == 0:
                return j
        elif opening.match(lines[j]):
            depth += 1
    return None


def _find_code_end(lines: List[str], start: int, fence: str):
    closing = re.compile(rf"^ {{0,3}}{re.escape(fence[0])}{{{len(fence)},}}\s*$")
    for j in range(start + 1, len(lines)):
        if closing.match(lines[j]):
            return j
    return None


def parse_directives(content: str) -> str:
    """
    Render every directive in ``content``.

    Plain fenced code blocks are copied through untouched so that MyST
    syntax shown inside code samples is not interpreted.

    Args:
        content: Markdown text

    Returns:
        Markdown with directives replaced by HTML fragments
    """
    from .directive_handlers import render_directive

    lines = content.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    result = []

    i = 0
    while i < len(lines):
        line = lines[i]

        match = OPENING_RE.match(line)
        if match:
            fence = match.group("fence")
            end = _find_directive_end(lines, i, fence)
            if end is None:
                logger.warning(
                    f"Directive '{match.group('name')}' opened with '{fence}' is never closed"
                )
                result.append(line)
                i += 1
                continue

            options, body = split_options(lines[i + 1 : end])
            node = DirectiveNode(
                name=match.group("name"),
                argument=match.group("argument").strip(),
                options=options,
                body=body.strip("\n"),
            )
            if node.name not in LITERAL_DIRECTIVES:
                node.body = parse_directives(node.body).strip()
            result.append(render_directive(node))
            i = end + 1
            continue

        plain = PLAIN_FENCE_RE.match(line)
        if plain:
            end = _find_code_end(lines, i, plain.group("fence"))
            if end is not None:
                result.extend(lines[i : end + 1])
                i = end + 1
                continue

        result.append(line)
        i += 1

    return "\n".join(result)


def directives_default(text: str, context: dict) -> str:
    """
    Default configuration for parse_directives.

    Register this in PREPROCESSORS.
    """
    return parse_directives(text)
