"""Tests for the markdown template tags."""

from django.template import Context, Template


def render(source, **context):
    return Template("{% load markdown_tags %}" + source).render(Context(context))


def test_myst_filter_renders_markdown():
    html = render("{{ text|myst }}", text="Some **bold** text")

    assert "<strong>bold</strong>" in html


def test_myst_filter_drops_frontmatter():
    html = render("{{ text|myst }}", text="---\nauthor: Jane\n---\nBody text\n")

    assert "Body text" in html
    assert "author" not in html


def test_myst_filter_is_not_escaped():
    html = render("{{ text|myst }}", text=":::{note}\nCareful.\n:::\n")

    assert "&lt;" not in html
    assert "admonition" in html


def test_myst_article_tag_resolves_media(settings):
    settings.BLOGS_LOCAL_MODE = True
    html = render(
        '{% myst_article text "artificial-intelligence" "post1" %}',
        text="![chart](./images/chart.png)",
    )

    assert "/blogs/artificial-intelligence/post1/images/chart.png" in html


def test_blog_date_filter():
    assert render("{{ value|blog_date }}", value="2024-10-31") == "October 31, 2024"
    assert render("{{ value|blog_date }}", value="") == ""
    assert render("{{ value|blog_date }}", value="not a date") == "not a date"
