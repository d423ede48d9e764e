"""
Management command to pre-render every published article to a JSON file.

The output lets a static front end show articles without running the
rendering pipeline:

    {
        "generatedAt": "2025-01-01T00:00:00+00:00",
        "totalBlogs": 42,
        "blogs": [{"category": ..., "slug": ..., "renderedHtml": ..., ...}]
    }

Articles are sorted by date, newest first. An article that fails to render
is reported and skipped.
"""

import datetime
import json
from pathlib import Path

from dateutil import parser as date_parser
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from blogs.articles import render_article
from blogs.content import BlogSource, get_blogs_dir, get_categories
from blogs.markdown.config import get_render_config

DEFAULT_OUTPUT = "blogs-prerendered.json"


def _sort_key(post):
    """Parsed date for sorting; undated or unparsable articles sort last."""
    try:
        date = date_parser.parse(post.date)
    except (ValueError, OverflowError):
        return 0.0
    if date.tzinfo is None:
        date = date.replace(tzinfo=datetime.timezone.utc)
    return date.timestamp()


class Command(BaseCommand):
    help = "Render every published article to a JSON file"

    def add_arguments(self, parser):
        parser.add_argument(
            "--blogs-dir",
            type=str,
            help="Directory holding <category>/<slug>/README.md (default: BLOGS_DIR)",
        )
        parser.add_argument(
            "--output",
            type=str,
            default=DEFAULT_OUTPUT,
            help=f"JSON file to write (default: {DEFAULT_OUTPUT})",
        )
        parser.add_argument(
            "--category",
            action="append",
            dest="categories",
            help="Only render this category (repeatable; default: BLOGS_CATEGORIES)",
        )
        mode = parser.add_mutually_exclusive_group()
        mode.add_argument(
            "--published",
            action="store_true",
            help="Point media URLs at the published repository",
        )
        mode.add_argument(
            "--local",
            action="store_true",
            help="Point media URLs at /blogs/ on this site",
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="List every rendered article",
        )

    def handle(self, *args, **options):
        blogs_dir = Path(options.get("blogs_dir") or get_blogs_dir())
        output = Path(options["output"])
        verbose = options.get("verbose")

        if not blogs_dir.is_dir():
            raise CommandError(f"Blogs directory not found: {blogs_dir}")

        overrides = {}
        if options.get("published"):
            overrides["local_mode"] = False
        elif options.get("local"):
            overrides["local_mode"] = True
        config = get_render_config(**overrides)

        source = BlogSource(blogs_dir, options.get("categories") or get_categories())
        self.stdout.write(f"Pre-rendering blogs from {blogs_dir}")

        posts = []
        failed = 0
        skipped = 0
        for category, slug, path in source.iter_articles():
            try:
                post = render_article(path.read_text(encoding="utf-8"), category, slug, config=config)
            except Exception as e:
                failed += 1
                self.stdout.write(self.style.ERROR(f"  Error pre-rendering {category}/{slug}: {e}"))
                continue

            if not post.published:
                skipped += 1
                continue

            posts.append(post)
            if verbose:
                self.stdout.write(f"  Rendered: {category}/{slug}")

        posts.sort(key=_sort_key, reverse=True)

        payload = {
            "generatedAt": timezone.now().isoformat(),
            "totalBlogs": len(posts),
            "blogs": [post.to_dict() for post in posts],
        }
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")

        self.stdout.write("=" * 60)
        self.stdout.write(self.style.SUCCESS(f"Pre-rendered {len(posts)} blog(s) to {output}"))
        if skipped:
            self.stdout.write(f"Unpublished (skipped): {skipped}")
        if failed:
            self.stdout.write(self.style.WARNING(f"Failed: {failed}"))
        self.stdout.write("=" * 60)
