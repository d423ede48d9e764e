# blogs/templatetags/markdown_tags.py

from django import template
from django.utils.safestring import mark_safe

from blogs.articles import format_date
from blogs.markdown.frontmatter import split_frontmatter
from blogs.markdown.renderer import build_render_context, render_markdown

register = template.Library()


@register.filter(name="myst")
def myst_filter(value):
    """Render a MyST article (frontmatter allowed) to HTML"""
    metadata, body = split_frontmatter(value or "")
    return mark_safe(render_markdown(body, context=build_render_context(metadata=metadata)))


@register.simple_tag
def myst_article(value, category, slug):
    """Render with article identity so relative media paths resolve"""
    metadata, body = split_frontmatter(value or "", f"{category}/{slug}")
    context = build_render_context(category, slug, metadata)
    return mark_safe(render_markdown(body, context=context))


@register.filter(name="blog_date")
def blog_date_filter(value):
    return format_date(value)
