# blogs/markdown/preprocessors/directive_handlers.py
"""
HTML generators for MyST directives.

Every handler has the signature ``handler(argument, options, body) -> str``:

    argument: text after ``{name}`` on the opening line
    options:  DirectiveOptions of the block
    body:     body text, nested directives already rendered

Bodies that contain Markdown are placed between blank lines so that the
Markdown converter still processes them inside the injected HTML.
"""

import base64
import logging
import re
from functools import partial
from typing import Callable, Dict

from .utils import attr, glossary_term_id, raw_inline_math

logger = logging.getLogger(__name__)

ADMONITIONS = (
    "note",
    "warning",
    "tip",
    "important",
    "caution",
    "danger",
    "hint",
    "seealso",
    "attention",
    "error",
)

PROOF_TYPES = (
    "proof",
    "theorem",
    "lemma",
    "definition",
    "criterion",
    "remark",
    "conjecture",
    "corollary",
    "algorithm",
    "example",
    "property",
    "observation",
    "proposition",
    "assumption",
)

IFRAME_ALLOW = (
    "accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture"
)


def _id_attr(options) -> str:
    label = options.get("label")
    return f' id="{attr(label)}"' if label else ""


def _markdown_block(body: str) -> str:
    return f"\n\n{body}\n\n"


def render_admonition(kind, argument, options, body):
    title = raw_inline_math(argument) or kind.capitalize()
    extra = options.get("class")
    classes = f"admonition {kind}" + (f" {attr(extra)}" if extra else "")
    return (
        f'<div class="{classes}"{_id_attr(options)}>'
        f'<div class="admonition-title">{title}</div>'
        f"{_markdown_block(body)}</div>"
    )


def render_generic_admonition(argument, options, body):
    """``{admonition} Title`` with the style taken from ``:class:``."""
    kind = options.get("class") or "note"
    title = raw_inline_math(argument) or "Note"
    return (
        f'<div class="admonition {attr(kind)}"{_id_attr(options)}>'
        f'<div class="admonition-title">{title}</div>'
        f"{_markdown_block(body)}</div>"
    )


def render_dropdown(argument, options, body):
    is_open = ":open:" in options.lines or ":open:" in argument
    title = raw_inline_math(argument.replace(":open:", "").strip()) or "Details"
    return (
        f'<details class="dropdown"{" open" if is_open else ""}>'
        f"<summary>{title}</summary>"
        f'<div class="dropdown-content">{_markdown_block(body)}</div></details>'
    )


def render_card(argument, options, body):
    header = raw_inline_math(options.get("header") or argument) or "Card"
    footer = raw_inline_math(options.get("footer"))
    link = options.get("link")

    if link:
        html = f'<a href="{attr(link)}" class="card" target="_blank" rel="noopener">'
    else:
        html = '<div class="card">'
    html += f'<div class="card-header">{header}</div>'
    html += f'<div class="card-body">{_markdown_block(body)}</div>'
    if footer:
        html += f'<div class="card-footer">{footer}</div>'
    html += "</a>" if link else "</div>"
    return html


def render_grid(argument, options, body):
    # "{grid} 1 2 3 4" lists columns per breakpoint; the widest one wins
    columns = argument.split()[-1] if argument.split() else "3"
    return f'<div class="grid" data-columns="{attr(columns)}">{_markdown_block(body)}</div>'


def render_tab_set(argument, options, body):
    return f'<div class="tab-set">{_markdown_block(body)}</div>'


def render_tab_item(argument, options, body):
    title = raw_inline_math(argument, html=False) or "Tab"
    return f'<div class="tab-item" data-title="{attr(title)}">{_markdown_block(body)}</div>'


def render_proof(kind, argument, options, body):
    title = kind.capitalize()
    if argument:
        title += f" ({raw_inline_math(argument)})"
    return (
        f'<div class="prf-block prf-{kind}"{_id_attr(options)}>'
        f'<div class="prf-title">{title}</div>'
        f'<div class="prf-content">{_markdown_block(body)}</div></div>'
    )


def youtube_embed_url(url: str) -> str:
    """Turn YouTube watch and short links into embeddable URLs."""
    if "youtube.com/watch" in url:
        match = re.search(r"[?&]v=([^&#]+)", url)
        if match:
            return f"https://www.youtube.com/embed/{match.group(1)}"
    elif "youtu.be/" in url:
        video_id = url.split("youtu.be/", 1)[1].split("?", 1)[0]
        if video_id:
            return f"https://www.youtube.com/embed/{video_id}"
    return url


def render_iframe(argument, options, body):
    src = youtube_embed_url(argument)
    width = options.get("width", "100%")
    title = options.get("title", "Embedded content")
    caption = f"<figcaption>{raw_inline_math(body)}</figcaption>" if body else ""
    return (
        f'<figure class="myst-iframe"{_id_attr(options)}>'
        f'<iframe src="{attr(src)}" width="{attr(width)}" height="400" title="{attr(title)}" '
        f'frameborder="0" allow="{IFRAME_ALLOW}" allowfullscreen loading="lazy"></iframe>'
        f"{caption}</figure>"
    )


def render_video(argument, options, body):
    align = options.get("align", "center")
    attributes = [f'src="{attr(argument)}"']
    for dimension in ("width", "height"):
        value = options.get(dimension)
        if value:
            attributes.append(f'{dimension}="{attr(value.removesuffix("px"))}"')
    for name in ("controls", "autoplay", "loop", "muted"):
        if options.flag(name):
            attributes.append(name)
    attributes.append('preload="metadata"')

    caption = f'<div class="video-caption">{raw_inline_math(body)}</div>' if body else ""
    return (
        f'<div class="myst-video-container align-{attr(align)}"{_id_attr(options)}>'
        f'<video {" ".join(attributes)}>Your browser does not support the video tag.</video>'
        f"{caption}</div>"
    )


def render_video_compare(argument, options, body):
    sides = []
    for side, default_label in (("left", "Left"), ("right", "Right")):
        src = options.get(side)
        label = raw_inline_math(options.get(f"{side}-label", default_label))
        sides.append(
            f'<div class="video-compare-{side}">'
            f'<div class="video-compare-label">{label}</div>'
            f'<video controls preload="metadata"><source src="{attr(src)}" type="video/mp4"></video>'
            f"</div>"
        )
    return (
        f'<div class="video-compare"{_id_attr(options)}>'
        f'<div class="video-compare-container">{"".join(sides)}</div>'
        f'<div class="video-compare-caption">{raw_inline_math(body)}</div></div>'
    )


def _exercise_like(kind, title, argument, options, body, data_attr=""):
    title = raw_inline_math(title)
    extra = options.get("class")
    classes = f"{kind}-block" + (f" {attr(extra)}" if extra else "")
    opening = f'<div class="{classes}"{_id_attr(options)}{data_attr}>'
    content = f'<div class="{kind}-content">{_markdown_block(body)}</div>'

    if "dropdown" in extra.split():
        return (
            f'{opening}<details class="{kind}-dropdown">'
            f'<summary class="{kind}-title">{title}</summary>{content}</details></div>'
        )
    return f'{opening}<div class="{kind}-title">{title}</div>{content}</div>'


def render_exercise(argument, options, body):
    return _exercise_like("exercise", argument or "Exercise", argument, options, body)


def render_solution(argument, options, body):
    # The argument is the label of the exercise being solved
    title = f"Solution to {argument}" if argument else "Solution"
    data_attr = f' data-exercise="{attr(argument)}"'
    return _exercise_like("solution", title, argument, options, body, data_attr)


def _code_fence(body: str) -> str:
    longest = max((len(run) for run in re.findall(r"`+", body)), default=0)
    return "`" * max(3, longest + 1)


def render_code(argument, options, body):
    """
    Wrap a code directive, leaving the code itself as a fenced Markdown block
    so the Markdown converter applies syntax highlighting.
    """
    language = argument.split()[0] if argument else "text"
    filename = options.get("filename")
    caption = options.get("caption")
    linenos = "linenos" in options and options.get("linenos").lower() != "false"
    start = options.get("lineno-start", "1")
    start = int(start) if start.isdigit() and int(start) > 0 else 1

    classes = "code-block-container" + (" line-numbers" if linenos else "")
    data_start = f' data-start="{start}"' if linenos and start != 1 else ""

    html = f'<div class="{classes}"{_id_attr(options)}{data_start}>'
    if filename:
        html += f'<div class="code-filename">{attr(filename)}</div>'
    fence = _code_fence(body)
    html += f"\n\n{fence}{language}\n{body}\n{fence}\n\n"
    if caption:
        html += f'<div class="code-caption">{raw_inline_math(caption)}</div>'
    html += "</div>"
    return html


def render_mermaid(argument, options, body):
    # base64 keeps the diagram source intact through HTML parsing
    encoded = base64.b64encode(body.encode("utf-8")).decode("ascii")
    caption = options.get("caption")
    html = f'<div class="mermaid-container"{_id_attr(options)}>'
    html += f'<pre class="mermaid" data-code="{encoded}"></pre>'
    if caption:
        html += f'<div class="mermaid-caption">{raw_inline_math(caption)}</div>'
    html += "</div>"
    return html


def render_glossary(argument, options, body):
    """
    Definition list from the MyST glossary layout:

        Term
          Indented definition
        Other term
        : Definition introduced by a colon
    """
    html = '<dl class="myst-glossary">'
    current_term = ""
    for line in body.split("\n"):
        if not line.strip():
            continue
        if re.match(r"^:\s+", line) or line.startswith((" ", "\t")):
            if current_term:
                definition = re.sub(r"^:\s+", "", line).strip()
                html += f"<dd>{raw_inline_math(definition)}</dd>"
        else:
            current_term = line.strip()
            html += f'<dt id="{attr(glossary_term_id(current_term))}">{raw_inline_math(current_term)}</dt>'
    html += "</dl>"
    return html


def render_unknown(name, argument, options, body):
    css_name = re.sub(r"[^\w-]+", "-", name)
    return f'<div class="myst-{css_name}">{_markdown_block(body)}</div>'


DIRECTIVE_HANDLERS: Dict[str, Callable] = {
    **{kind: partial(render_admonition, kind) for kind in ADMONITIONS},
    "admonition": render_generic_admonition,
    "dropdown": render_dropdown,
    "card": render_card,
    "grid": render_grid,
    "tab-set": render_tab_set,
    "tab-item": render_tab_item,
    **{f"prf:{kind}": partial(render_proof, kind) for kind in PROOF_TYPES},
    "iframe": render_iframe,
    "video": render_video,
    "video-compare": render_video_compare,
    "exercise": render_exercise,
    "solution": render_solution,
    "code": render_code,
    "code-block": render_code,
    "sourcecode": render_code,
    "mermaid": render_mermaid,
    "glossary": render_glossary,
}


def render_directive(node) -> str:
    """Dispatch a DirectiveNode to its handler."""
    handler = DIRECTIVE_HANDLERS.get(node.name)
    if handler is None:
        logger.debug(f"No handler for directive '{node.name}', using generic wrapper")
        handler = partial(render_unknown, node.name)
    return handler(node.argument, node.options, node.body)
