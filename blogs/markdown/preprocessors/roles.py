# blogs/markdown/preprocessors/roles.py
"""
Preprocessor for inline MyST roles.

Syntax:
    {name}`text`
    {name}`text <argument>`

Examples:
    {button}`Get ROCm <https://rocm.docs.amd.com>`
    {term}`Wavefront`                →  <a href="#term-wavefront" class="term-ref">Wavefront</a>
    {kbd}`Ctrl+C`                    →  <kbd>Ctrl</kbd> + <kbd>C</kbd>
    {abbr}`HIP (Heterogeneous-compute Interface for Portability)`
    H{sub}`2`O, x{sup}`2`, {del}`old`, {u}`under`, {sc}`Small Caps`

Math and equation-reference roles are resolved earlier by the math
preprocessor. Roles with an unknown name are left untouched.
"""

import re

from django.utils.html import escape

from .utils import CodeShield, attr, glossary_term_id

ROLE_RE = re.compile(r"\{(?P<name>[\w:+-]+)\}`(?P<text>[^`\n]*)`")
TARGET_RE = re.compile(r"^(?P<text>.*?)\s*<(?P<target>[^<>]+)>$", re.DOTALL)
ABBR_RE = re.compile(r"^(?P<text>.*?)\s*\((?P<title>[^()]*)\)$", re.DOTALL)


def _split_target(text: str):
    """Split ``label <target>`` into (label, target); target may be None."""
    match = TARGET_RE.match(text.strip())
    if match:
        return match.group("text").strip(), match.group("target").strip()
    return text.strip(), None


def role_button(text):
    label, link = _split_target(text)
    return (
        f'<a href="{attr(link or "#")}" class="btn" role="button">'
        f"{escape(label or 'Button')}</a>"
    )


def role_term(text):
    label, target = _split_target(text)
    anchor = glossary_term_id(target or label)
    return f'<a href="#{attr(anchor)}" class="term-ref">{escape(label)}</a>'


def role_kbd(text):
    keys = [key.strip() for key in text.split("+")]
    return " + ".join(f"<kbd>{escape(key)}</kbd>" for key in keys if key)


def role_abbr(text):
    match = ABBR_RE.match(text.strip())
    if not match:
        return f"<abbr>{escape(text)}</abbr>"
    return f'<abbr title="{attr(match.group("title"))}">{escape(match.group("text"))}</abbr>'


def _wrap(tag, css_class=None):
    class_attr = f' class="{css_class}"' if css_class else ""
    return lambda text: f"<{tag}{class_attr}>{escape(text)}</{tag}>"


ROLE_HANDLERS = {
    "button": role_button,
    "term": role_term,
    "sub": _wrap("sub"),
    "subscript": _wrap("sub"),
    "sup": _wrap("sup"),
    "superscript": _wrap("sup"),
    "kbd": role_kbd,
    "keyboard": role_kbd,
    "abbr": role_abbr,
    "del": _wrap("del"),
    "strike": _wrap("del"),
    "u": _wrap("u"),
    "underline": _wrap("u"),
    "sc": _wrap("span", "smallcaps"),
    "smallcaps": _wrap("span", "smallcaps"),
}


def process_roles(text: str) -> str:
    """
    Replace supported roles with inline HTML.

    Args:
        text: Markdown text

    Returns:
        Text with role markers converted; code is left untouched
    """

    def replace(match):
        handler = ROLE_HANDLERS.get(match.group("name"))
        if handler is None:
            return match.group(0)
        return handler(match.group("text"))

    shield = CodeShield()
    return shield.restore(ROLE_RE.sub(replace, shield.protect(text)))


def roles_default(text: str, context: dict) -> str:
    """
    Default configuration for process_roles.

    Register this in PREPROCESSORS.
    """
    return process_roles(text)
