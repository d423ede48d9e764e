# blogs/markdown/preprocessors/math_resolver.py
"""
Preprocessor that resolves MyST math: numbered equations, cross references
and inline math.

Supported block syntaxes, in the order they are matched:

    ```{math}                      $$ E = mc^2 $$ (einstein)
    :label: euler
    e^{i\\pi} + 1 = 0             \\begin{align} ... \\label{sys} ... \\end{align}
    ```
                                   $$ a^2 + b^2 = c^2 \\label{pyth} $$
    :::{math}
    :label: gauss
    :enumerated: false
    ...
    :::

Each block becomes
    <div class="equation-block" id="euler">\\[...\\]<span class="equation-number">(1)</span></div>

Labeled, enumerated equations are numbered 1..N in document order whatever
syntax they use. References ``{eq}`euler``` and ``[](#euler)`` become
``<a href="#euler" class="eq-ref">(1)</a>``; references to unknown labels
become a pending ``(?)`` link carrying ``data-label`` for the client.

Inline ``$...$`` and ``{math}`...``` are emitted as ``\\(...\\)`` with the
LaTeX escaped for the Markdown converter.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from django.utils.html import escape

from .utils import CodeShield, attr

logger = logging.getLogger(__name__)

AMS_ENVIRONMENTS = [
    "equation",
    "equation*",
    "align",
    "align*",
    "gather",
    "gather*",
    "multline",
    "multline*",
    "alignat",
    "alignat*",
    "split",
]

FENCED_MATH_RE = re.compile(
    r"^(?P<fence>`{3,4})\{math\}[^\n]*\n(?P<body>.*?)^(?P=fence)[ \t]*$",
    re.MULTILINE | re.DOTALL,
)
COLON_MATH_RE = re.compile(
    r"^(?P<fence>:{3,4})\{math\}[^\n]*\n(?P<body>.*?)^(?P=fence)[ \t]*$",
    re.MULTILINE | re.DOTALL,
)
LABELED_DOLLAR_RE = re.compile(
    r"\$\$(?P<body>(?:(?!\$\$).)+?)\$\$[ \t]*\((?P<label>[^()\s]+)\)",
    re.DOTALL,
)
AMS_RE = re.compile(
    r"\\begin\{(?P<env>"
    + "|".join(re.escape(env) for env in AMS_ENVIRONMENTS)
    + r")\}(?P<body>.*?)\\end\{(?P=env)\}",
    re.DOTALL,
)
DOLLAR_RE = re.compile(r"\$\$(?P<body>(?:(?!\$\$).)*?)\$\$", re.DOTALL)
LABEL_COMMAND_RE = re.compile(r"\\label\s*\{([^}]+)\}")
OPTION_RE = re.compile(r"^\s*:([\w-]+):\s*(.*)$")

EQ_ROLE_RE = re.compile(r"\{eq\}`(?P<label>[^`]+)`")
EMPTY_LINK_REF_RE = re.compile(r"\[\]\(#(?P<label>[^)\s]+)\)")
MATH_ROLE_RE = re.compile(r"\{math(?:\s+[^}]+)?\}`(?P<body>[^`]+)`")
INLINE_MATH_RE = re.compile(r"\$(?P<body>[^$\n]+)\$")

_BLOCK_TOKEN = "\ue002{index}\ue003"
_BLOCK_TOKEN_RE = re.compile("\ue002(\\d+)\ue003")
_MARKDOWN_SPECIAL_RE = re.compile(r"([*_\[\]<])")


@dataclass
class Equation:
    label: str
    number: int
    id: str


class EquationRegistry:
    """
    Labeled equations of one render, in document order.

    Numbers start at 1 and only grow. A label that is defined twice still
    gets a fresh number for its second block, but references keep resolving
    to the first definition.
    """

    def __init__(self):
        self._equations: Dict[str, Equation] = {}
        self._counter = 0

    def register(self, label: str) -> Equation:
        self._counter += 1
        equation = Equation(label=label, number=self._counter, id=label)
        if label in self._equations:
            logger.warning(f"Equation label '{label}' defined more than once")
        else:
            self._equations[label] = equation
        return equation

    def get(self, label: str) -> Optional[Equation]:
        return self._equations.get(label)

    def __contains__(self, label) -> bool:
        return label in self._equations

    def __len__(self) -> int:
        return len(self._equations)


@dataclass
class _MathBlock:
    source: str
    latex: str
    label: str = ""
    enumerated: bool = True
    ams: bool = False
    number: Optional[int] = None


def escape_inline_math(math: str) -> str:
    """
    Escape LaTeX so it survives the Markdown converter verbatim.

    Backslashes are doubled and characters Markdown would treat as emphasis,
    link or HTML syntax are backslash-escaped.
    """
    return _MARKDOWN_SPECIAL_RE.sub(r"\\\1", math.replace("\\", "\\\\"))


def _parse_options(body: str):
    options = {}
    math_lines = []
    for line in body.split("\n"):
        match = OPTION_RE.match(line)
        if match:
            options[match.group(1)] = match.group(2).strip()
        else:
            math_lines.append(line)
    return options, "\n".join(math_lines).strip()


def _is_enumerated(options: dict) -> bool:
    return options.get("enumerated", "true").strip().lower() != "false"


def _render_block(block: _MathBlock) -> str:
    classes = "equation-block ams-env" if block.ams else "equation-block"
    id_attr = f' id="{attr(block.label)}"' if block.label else ""
    number = (
        f'<span class="equation-number">({block.number})</span>'
        if block.number is not None
        else ""
    )
    return f'<div class="{classes}"{id_attr}>\\[{escape(block.latex)}\\]{number}</div>'


def _reference(label: str, registry: EquationRegistry) -> str:
    equation = registry.get(label)
    if equation:
        return f'<a href="#{attr(equation.id)}" class="eq-ref">({equation.number})</a>'
    return (
        f'<a href="#{attr(label)}" class="eq-ref eq-pending" '
        f'data-label="{attr(label)}">(?)</a>'
    )


def resolve_math(text: str, context: dict) -> str:
    """
    Convert every math construct of a document and resolve equation references.

    Block definitions are first swapped for placeholders so that later
    patterns cannot re-match converted content; numbers are then assigned by
    walking the placeholders in document order, which makes references
    resolve both forwards and backwards.

    Args:
        text: Markdown body
        context: Render context; ``equations`` holds the EquationRegistry
            of this render (created if missing)

    Returns:
        Markdown with math converted to HTML fragments and delimiters
    """
    registry = context.get("equations")
    if registry is None:
        registry = context["equations"] = EquationRegistry()

    shield = CodeShield()
    text = shield.protect(text)
    blocks: List[_MathBlock] = []

    def stash(block: _MathBlock) -> str:
        blocks.append(block)
        return _BLOCK_TOKEN.format(index=len(blocks) - 1)

    def unnest(content: str) -> str:
        """Put the source of blocks matched inside ``content`` back."""
        return _BLOCK_TOKEN_RE.sub(lambda m: blocks[int(m.group(1))].source, content)

    def fenced(match):
        options, latex = _parse_options(match.group("body"))
        label = options.get("label") or options.get("name") or ""
        return stash(
            _MathBlock(
                source=match.group(0),
                latex=latex,
                label=label,
                enumerated=_is_enumerated(options),
            )
        )

    def labeled_dollar(match):
        return stash(
            _MathBlock(
                source=match.group(0),
                latex=unnest(match.group("body")).strip(),
                label=match.group("label"),
            )
        )

    def ams(match):
        env = match.group("env")
        body = match.group("body")
        label_match = LABEL_COMMAND_RE.search(body)
        return stash(
            _MathBlock(
                source=match.group(0),
                latex=f"\\begin{{{env}}}{body}\\end{{{env}}}",
                label=label_match.group(1).strip() if label_match else "",
                ams=True,
            )
        )

    def dollar(match):
        body = match.group("body")
        if _BLOCK_TOKEN_RE.fullmatch(body.strip()):
            # $$ around an AMS environment: the environment already is a block
            return body.strip()
        body = unnest(body)
        label = ""
        label_match = LABEL_COMMAND_RE.search(body)
        if label_match:
            label = label_match.group(1).strip()
            body = body[: label_match.start()] + body[label_match.end():]
        return stash(_MathBlock(source=match.group(0), latex=body.strip(), label=label))

    def colon(match):
        options, latex = _parse_options(unnest(match.group("body")))
        label = options.get("label", "").split()
        return stash(
            _MathBlock(
                source=match.group(0),
                latex=latex,
                label=label[0] if label else "",
                enumerated=_is_enumerated(options),
            )
        )

    text = FENCED_MATH_RE.sub(fenced, text)
    text = LABELED_DOLLAR_RE.sub(labeled_dollar, text)
    text = AMS_RE.sub(ams, text)
    text = DOLLAR_RE.sub(dollar, text)
    text = COLON_MATH_RE.sub(colon, text)

    for match in _BLOCK_TOKEN_RE.finditer(text):
        block = blocks[int(match.group(1))]
        if block.label and block.enumerated:
            block.number = registry.register(block.label).number

    def eq_role(match):
        label = match.group("label").strip()
        if label not in registry:
            logger.warning(f"Unresolved equation reference '{label}'")
        return _reference(label, registry)

    def empty_link(match):
        label = match.group("label")
        if label not in registry:
            logger.debug(f"Reference '#{label}' is not a known equation")
        return _reference(label, registry)

    text = EQ_ROLE_RE.sub(eq_role, text)
    text = EMPTY_LINK_REF_RE.sub(empty_link, text)

    def inline(match):
        return "\\\\(" + escape_inline_math(match.group("body")) + "\\\\)"

    text = MATH_ROLE_RE.sub(inline, text)
    text = INLINE_MATH_RE.sub(inline, text)

    def place(match):
        html = _render_block(blocks[int(match.group(1))])
        line_start = text.rfind("\n", 0, match.start()) + 1
        line_end = text.find("\n", match.end())
        line_end = len(text) if line_end == -1 else line_end
        if text[line_start : match.start()].strip() or text[match.end() : line_end].strip():
            # Written inside a paragraph: the block must start its own HTML block
            return f"\n\n{html}\n\n"
        return html

    text = _BLOCK_TOKEN_RE.sub(place, text)
    return shield.restore(text)


def math_resolver_default(text: str, context: dict) -> str:
    """
    Default configuration for resolve_math.

    Register this in PREPROCESSORS.
    """
    return resolve_math(text, context)
