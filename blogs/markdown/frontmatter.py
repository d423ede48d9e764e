# blogs/markdown/frontmatter.py
"""
Split an article into its YAML frontmatter and Markdown body.

Articles start with a block delimited by ``---`` lines:

    ---
    blogpost: true
    blog_title: "Fast attention on MI300X"
    tags: PyTorch, LLM
    ---
    # Body starts here

PyYAML silently keeps the *last* value of a repeated key, while authors
expect the first one to win, so repeated top-level keys are removed before
parsing. A document without a frontmatter block, or with one that does not
parse to a mapping, is returned whole as the body with empty metadata.
"""

import logging
import re
from typing import Tuple

import yaml

logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<yaml>.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
TOP_LEVEL_KEY_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*):")


def deduplicate_frontmatter(raw: str, source: str = "") -> str:
    """
    Drop repeated top-level frontmatter keys, keeping the first occurrence.

    Only the ``key:`` line itself is dropped; indented continuation lines of
    a dropped key cannot be attributed reliably and are left in place.

    Args:
        raw: Full article text
        source: Article identity used in log messages (e.g. "ai/post1")

    Returns:
        The article text with a corrected frontmatter block and the body
        untouched. Text without a frontmatter block is returned unchanged.
    """
    match = FRONTMATTER_RE.match(raw)
    if not match:
        return raw

    seen = set()
    kept = []
    for line in match.group("yaml").splitlines():
        key_match = TOP_LEVEL_KEY_RE.match(line)
        if key_match:
            key = key_match.group(1)
            if key in seen:
                logger.warning(
                    f"Duplicate frontmatter key '{key}' in {source or 'article'}, skipping"
                )
                continue
            seen.add(key)
        kept.append(line)

    yaml_block = "\n".join(kept)
    if yaml_block:
        yaml_block += "\n"
    return f"---\n{yaml_block}---\n{raw[match.end():]}"


def split_frontmatter(raw: str, source: str = "") -> Tuple[dict, str]:
    """
    Parse the frontmatter of an article.

    Args:
        raw: Full article text
        source: Article identity used in log messages

    Returns:
        (metadata, body). Never raises: missing or broken frontmatter yields
        ``({}, raw)``.
    """
    text = deduplicate_frontmatter(raw, source)
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, raw

    try:
        metadata = yaml.safe_load(match.group("yaml"))
    except yaml.YAMLError as e:
        logger.warning(
            f"Frontmatter parsing error for {source or 'article'}, using raw content: {e}"
        )
        return {}, raw

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        logger.warning(
            f"Frontmatter of {source or 'article'} is not a mapping, using raw content"
        )
        return {}, raw

    return metadata, text[match.end():]
