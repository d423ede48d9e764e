"""
Celery tasks for rendering articles outside the request cycle.

To use Celery, you need to:
1. Install celery: pip install celery redis
2. Configure CELERY_* settings in settings.py
3. Run celery worker: celery -A BlogReader worker -l info
"""

from celery import shared_task


@shared_task(
    bind=True,
    autoretry_for=(OSError,),
    retry_backoff=5,
    retry_kwargs={"max_retries": 3},
)
def prerender_article(self, category: str, slug: str):
    """
    Render one article and store it in the rendered-post cache.

    Missing articles are reported in the result instead of retried; I/O and
    pandoc process errors are retried with backoff.

    Args:
        category: Category folder of the article
        slug: Article folder name

    Returns:
        Dict with the render outcome
    """
    from .content import ArticleNotFound
    from .services import get_rendered_post

    try:
        post = get_rendered_post(category, slug)
    except ArticleNotFound:
        return {"success": False, "error": f"Article {category}/{slug} not found."}

    return {
        "success": True,
        "category": category,
        "slug": slug,
        "title": post.title,
        "published": post.published,
    }
