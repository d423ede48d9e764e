# blogs/markdown/config.py

from dataclasses import dataclass

from django.conf import settings

DEFAULT_GITHUB_REPO = "ROCm/rocm-blogs"
DEFAULT_GITHUB_BRANCH = "release"
DEFAULT_RAW_BASE = "https://raw.githubusercontent.com"


def get_pandoc_config():
    """
    Configuration for pypandoc/Pandoc markdown rendering.

    The MyST preprocessors hand Pandoc GitHub-flavoured Markdown with raw HTML
    fragments already injected, so the ``gfm`` reader is used: it brings pipe
    tables, strikethrough and raw HTML passthrough without extra extensions.
    Math is never left for Pandoc to interpret; the preprocessors emit
    ``\\[...\\]`` and ``\\(...\\)`` delimiters for the client-side renderer.
    """
    return {
        "from": "gfm",
        "to": "html5",
        "extra_args": [
            # Keep one HTML element per line so rewriting stays predictable
            "--wrap=none",
        ],
        "filters": [],
    }


@dataclass(frozen=True)
class RenderConfig:
    """
    Deployment-dependent values used while rendering an article.

    ``local_mode`` selects same-origin ``/blogs/...`` URLs for images and
    videos; otherwise they point at the raw-content host of the published
    repository.
    """

    local_mode: bool = True
    github_repo: str = DEFAULT_GITHUB_REPO
    github_branch: str = DEFAULT_GITHUB_BRANCH
    raw_base: str = DEFAULT_RAW_BASE

    @property
    def external_base(self) -> str:
        return f"{self.raw_base.rstrip('/')}/{self.github_repo}/{self.github_branch}"


def get_render_config(**overrides) -> RenderConfig:
    """
    Build a RenderConfig from Django settings.

    Settings read (all optional):
        BLOGS_LOCAL_MODE: bool, defaults to settings.DEBUG
        BLOGS_GITHUB_REPO: "owner/name" of the published content repository
        BLOGS_GITHUB_BRANCH: branch the published content is served from
        BLOGS_RAW_BASE: raw-content host

    Keyword overrides win over settings.
    """
    values = {
        "local_mode": bool(
            getattr(settings, "BLOGS_LOCAL_MODE", getattr(settings, "DEBUG", False))
        ),
        "github_repo": getattr(settings, "BLOGS_GITHUB_REPO", DEFAULT_GITHUB_REPO),
        "github_branch": getattr(settings, "BLOGS_GITHUB_BRANCH", DEFAULT_GITHUB_BRANCH),
        "raw_base": getattr(settings, "BLOGS_RAW_BASE", DEFAULT_RAW_BASE),
    }
    values.update(overrides)
    return RenderConfig(**values)
