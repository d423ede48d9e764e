# blogs/content.py
"""
File-system source of raw articles.

Layout:
    <BLOGS_DIR>/<category>/<slug>/README.md
"""

import logging
from pathlib import Path

from django.conf import settings

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    "artificial-intelligence",
    "ecosystems-and-partners",
    "high-performance-computing",
    "software-tools-optimization",
]
ARTICLE_FILENAME = "README.md"
SKIPPED_PREFIXES = ("_", ".", "-")


class ArticleNotFound(Exception):
    """Raised when no README.md exists for a (category, slug) pair."""


def get_blogs_dir() -> Path:
    return Path(getattr(settings, "BLOGS_DIR", Path(settings.BASE_DIR) / "blogs-content"))


def get_categories():
    return list(getattr(settings, "BLOGS_CATEGORIES", DEFAULT_CATEGORIES))


class BlogSource:
    """Reads articles from a blogs directory."""

    def __init__(self, root=None, categories=None):
        self.root = Path(root) if root is not None else get_blogs_dir()
        self.categories = list(categories) if categories is not None else get_categories()

    def article_path(self, category: str, slug: str) -> Path:
        return self.root / category / slug / ARTICLE_FILENAME

    def read_article(self, category: str, slug: str) -> str:
        """
        Return the raw text of an article.

        Raises:
            ArticleNotFound: when the article file does not exist
        """
        # Reject path components that would escape the blogs directory
        if any(part in ("", ".", "..") or "/" in part or "\\" in part for part in (category, slug)):
            raise ArticleNotFound(f"{category}/{slug}")

        path = self.article_path(category, slug)
        if not path.is_file():
            raise ArticleNotFound(f"{category}/{slug}")
        return path.read_text(encoding="utf-8")

    def iter_articles(self):
        """
        Yield (category, slug, path) for every article folder.

        Folders whose name starts with ``_``, ``.`` or ``-`` are drafts or
        assets and are skipped, as are folders without a README.md.
        """
        for category in self.categories:
            category_path = self.root / category
            if not category_path.is_dir():
                logger.warning(f"Category not found: {category_path}")
                continue

            for item in sorted(category_path.iterdir()):
                if not item.is_dir() or item.name.startswith(SKIPPED_PREFIXES):
                    continue
                readme = item / ARTICLE_FILENAME
                if readme.is_file():
                    yield category, item.name, readme
