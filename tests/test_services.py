from unittest import mock

import pytest

from blogs import services
from blogs.content import ArticleNotFound, BlogSource
from blogs.services import get_rendered_post, invalidate_rendered_post
from blogs.tasks import prerender_article


def test_same_input_is_served_from_cache(local_config):
    raw = "---\nblog_title: Cached\n---\nBody"
    with mock.patch.object(services, "render_article", wraps=services.render_article) as render:
        first = get_rendered_post("ai", "post1", raw=raw, config=local_config)
        second = get_rendered_post("ai", "post1", raw=raw, config=local_config)
    assert render.call_count == 1
    assert first == second


def test_changed_input_renders_again(local_config):
    first = get_rendered_post("ai", "post1", raw="---\nblog_title: One\n---\nBody", config=local_config)
    second = get_rendered_post("ai", "post1", raw="---\nblog_title: Two\n---\nBody", config=local_config)
    assert first.title == "One"
    assert second.title == "Two"


def test_mode_change_renders_again(local_config, published_config):
    raw = "![a](./images/a.png)"
    local = get_rendered_post("ai", "post1", raw=raw, config=local_config)
    published = get_rendered_post("ai", "post1", raw=raw, config=published_config)
    assert 'src="/blogs/ai/post1/images/a.png"' in local.content
    assert 'src="https://raw.githubusercontent.com/' in published.content


def test_invalidate(local_config):
    raw = "Body"
    with mock.patch.object(services, "render_article", wraps=services.render_article) as render:
        get_rendered_post("ai", "post1", raw=raw, config=local_config)
        invalidate_rendered_post("ai", "post1")
        get_rendered_post("ai", "post1", raw=raw, config=local_config)
    assert render.call_count == 2


def test_reads_from_source(blogs_dir, local_config):
    post = get_rendered_post("artificial-intelligence", "newer", config=local_config, source=BlogSource(blogs_dir))
    assert post.title == "newer"
    assert post.date == "2024-06-01"


def test_missing_article_raises(blogs_dir, local_config):
    with pytest.raises(ArticleNotFound):
        get_rendered_post("artificial-intelligence", "missing", config=local_config, source=BlogSource(blogs_dir))


def test_prerender_task_warms_cache(settings, blogs_dir):
    settings.BLOGS_DIR = blogs_dir
    result = prerender_article.apply(args=("high-performance-computing", "hpc-post")).get()
    assert result["success"] is True
    assert result["published"] is True

    with mock.patch.object(services, "render_article") as render:
        post = get_rendered_post("high-performance-computing", "hpc-post")
    render.assert_not_called()
    assert post.slug == "hpc-post"


def test_prerender_task_reports_missing_article(settings, blogs_dir):
    settings.BLOGS_DIR = blogs_dir
    result = prerender_article.apply(args=("high-performance-computing", "missing")).get()
    assert result["success"] is False
