# blogs/markdown/preprocessors/figure_resolver.py
"""
Preprocessor that renders MyST figure directives and named figure targets.

Target definitions (removed from the text, remembered for the render):
    (arch-diagram)=![MI300X block diagram](https://github.com/org/repo/blob/main/a.png)

Figure directives, with either fence family:
    ```{figure} ./images/speedup.png
    :alt: Speedup chart
    :width: 600px
    :align: center
    :name: fig-speedup

    Speedup over the baseline.
    ```

    :::{figure} #arch-diagram
    The MI300X package.
    :::

Output:
    <figure class="myst-figure align-center" id="fig-speedup">
        <img src="./images/speedup.png" alt="Speedup chart" width="600px" loading="lazy" />
        <figcaption>Speedup over the baseline.</figcaption>
    </figure>

Video files become a <video> element. A reference to an undefined target
renders a visible "Image target not found" placeholder.
"""

import logging
import re
from dataclasses import dataclass

from .utils import CodeShield, attr, raw_inline_math

logger = logging.getLogger(__name__)

TARGET_RE = re.compile(
    r"^\((?P<name>[^)]+)\)=!\[(?P<alt>[^\]]*)\]\((?P<src>[^)]+)\)[ \t]*$",
    re.MULTILINE,
)
FIGURE_RE = re.compile(
    r"^(?P<fence>`{3,4}|:{3,4})\{figure\}[ \t]*(?P<path>\S*)[^\n]*\n"
    r"(?P<body>.*?)^(?P=fence)[ \t]*$",
    re.MULTILINE | re.DOTALL,
)
OPTION_RE = re.compile(r"^:([\w-]+):\s*(.*)$")

FIGURE_OPTIONS = ("alt", "width", "align", "label", "name")
VIDEO_TYPES = {
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".ogg": "video/ogg",
    ".mov": "video/quicktime",
    ".avi": "video/x-msvideo",
}


@dataclass(frozen=True)
class FigureTarget:
    alt: str
    src: str


def normalize_github_url(src: str) -> str:
    """Point GitHub "blob" page URLs at the raw file instead."""
    if "github.com" in src and "/blob/" in src:
        return src.replace("github.com", "raw.githubusercontent.com", 1).replace(
            "/blob/", "/", 1
        )
    return src


def video_type(path: str):
    """MIME type of a video path, or None when it is not a known video."""
    lowered = path.lower().split("?", 1)[0]
    for extension, mime in VIDEO_TYPES.items():
        if lowered.endswith(extension):
            return mime
    return None


def _parse_figure_body(body: str):
    options = {}
    caption_lines = []
    for line in body.split("\n"):
        stripped = line.strip()
        match = OPTION_RE.match(stripped)
        if match:
            name = match.group(1)
            if name in FIGURE_OPTIONS:
                options[name] = match.group(2).strip()
            else:
                logger.debug(f"Ignoring unsupported figure option '{name}'")
        elif stripped or caption_lines:
            caption_lines.append(line)
    return options, "\n".join(caption_lines).strip()


def render_figure(path: str, options: dict, caption: str, targets: dict) -> str:
    """
    Build the HTML for one figure directive.

    Args:
        path: Directive argument, a path/URL or ``#target-name``
        options: Recognized options (alt, width, align, label, name)
        caption: Caption text (body minus option lines)
        targets: FigureTarget table of the current render

    Returns:
        <figure> markup, an error placeholder when the image cannot be found
    """
    src = path
    default_alt = ""
    if path.startswith("#"):
        name = path[1:]
        target = targets.get(name)
        if target:
            src = target.src
            default_alt = target.alt
        else:
            logger.warning(f"Figure target '{name}' not found")
            src = ""

    alt = options.get("alt") or default_alt or caption.replace("\n", " ")[:100]
    alt = raw_inline_math(alt, html=False)
    align_class = f" align-{attr(options['align'])}" if options.get("align") else ""
    element_id = options.get("label") or options.get("name")
    id_attr = f' id="{attr(element_id)}"' if element_id else ""
    width_attr = f' width="{attr(options["width"])}"' if options.get("width") else ""
    figcaption = f"<figcaption>{raw_inline_math(caption)}</figcaption>" if caption else ""

    if not src:
        return (
            f'<figure class="myst-figure{align_class}"{id_attr}>'
            f'<div class="figure-error">Image target not found</div>'
            f"{figcaption}</figure>"
        )

    mime = video_type(src)
    if mime:
        return (
            f'<figure class="myst-figure myst-video{align_class}"{id_attr}>'
            f'<video controls preload="metadata"{width_attr}>'
            f'<source src="{attr(src)}" type="{mime}">'
            f"Your browser does not support the video tag.</video>"
            f"{figcaption}</figure>"
        )

    return (
        f'<figure class="myst-figure{align_class}"{id_attr}>'
        f'<img src="{attr(src)}" alt="{attr(alt)}"{width_attr} loading="lazy" />'
        f"{figcaption}</figure>"
    )


def resolve_figures(text: str, context: dict) -> str:
    """
    Record figure targets and render figure directives.

    Args:
        text: Markdown body
        context: Render context; ``figure_targets`` receives the
            FigureTarget table of this render (created if missing)

    Returns:
        Markdown with figures replaced by HTML
    """
    targets = context.get("figure_targets")
    if targets is None:
        targets = context["figure_targets"] = {}

    def record_target(match):
        name = match.group("name")
        targets[name] = FigureTarget(
            alt=match.group("alt") or "",
            src=normalize_github_url(match.group("src").strip()),
        )
        return f"<!-- target:{name} defined -->"

    def figure(match):
        options, caption = _parse_figure_body(match.group("body"))
        return render_figure(match.group("path"), options, caption, targets)

    shield = CodeShield()
    text = TARGET_RE.sub(record_target, shield.protect(text))
    return shield.restore(FIGURE_RE.sub(figure, text))


def figure_resolver_default(text: str, context: dict) -> str:
    """
    Default configuration for resolve_figures.

    Register this in PREPROCESSORS.
    """
    return resolve_figures(text, context)
