import datetime

from blogs.articles import RenderedBlogPost, format_date, parse_tags, render_article
from blogs.markdown.preprocessors import apply_preprocessors
from blogs.markdown.renderer import build_render_context, render_markdown

EXTERNAL = "https://raw.githubusercontent.com/ROCm/rocm-blogs/release"


def test_render_article_metadata(article, local_config):
    post = render_article(article, "artificial-intelligence", "post1", config=local_config)

    assert isinstance(post, RenderedBlogPost)
    assert post.title == "Fast attention on MI300X"
    assert post.date == "2024-10-31"
    assert post.author == "Jane Doe"
    assert post.tags == ("PyTorch", "LLM", "AI")
    assert post.description == "Speeding up attention kernels."
    assert post.language == "English"
    assert post.published is True
    assert post.path == "blogs/artificial-intelligence/post1"
    assert post.thumbnail == "chart.png"
    assert post.thumbnail_url == "/blogs/artificial-intelligence/post1/images/chart.png"
    assert "blog_title" not in post.raw_content
    assert "An LLM needs fast attention." in post.raw_content


def test_render_article_html(article, local_config):
    html = render_article(article, "artificial-intelligence", "post1", config=local_config).content

    assert '<abbr title="Large Language Model">LLM</abbr>' in html
    assert 'src="/blogs/artificial-intelligence/post1/images/chart.png"' in html
    assert 'class="admonition note"' in html
    assert "<p>Requires ROCm 6.</p>" in html
    assert '<div class="table-wrapper">' in html
    assert "<h1" in html


def test_render_article_published_mode(article, published_config):
    html = render_article(article, "artificial-intelligence", "post1", config=published_config).content
    assert f'src="{EXTERNAL}/blogs/artificial-intelligence/post1/images/chart.png"' in html


def test_strip_title(article, local_config):
    post = render_article(article, "artificial-intelligence", "post1", config=local_config, strip_title=True)
    assert "<h1" not in post.content
    assert "LLM" in post.content


def test_defaults_for_missing_metadata(local_config):
    post = render_article("Just text.", "ai", "my-slug", config=local_config)
    assert post.title == "my-slug"
    assert post.author == "Unknown"
    assert post.language == "English"
    assert post.date == ""
    assert post.tags == ()
    assert post.description == ""
    assert post.thumbnail_url == ""
    assert post.published is False
    assert "<p>Just text.</p>" in post.content


def test_to_dict_shape(article, local_config):
    data = render_article(article, "artificial-intelligence", "post1", config=local_config).to_dict()
    assert list(data) == [
        "category",
        "slug",
        "title",
        "date",
        "author",
        "thumbnail",
        "tags",
        "description",
        "language",
        "renderedHtml",
        "rawContent",
    ]
    assert data["tags"] == ["PyTorch", "LLM", "AI"]


def test_equation_and_reference_end_to_end(context):
    html = render_markdown("```{math}\n:label: eq1\nx=y\n```\n\nAs in {eq}`eq1`.", context)
    assert '<div class="equation-block" id="eq1">\\[x=y\\]<span class="equation-number">(1)</span></div>' in html
    assert '<a href="#eq1" class="eq-ref">(1)</a>' in html


def test_inline_math_reaches_html_as_latex(context):
    html = render_markdown("Energy $E_k = \\frac{1}{2}mv^2$ here.", context)
    assert "\\(E_k = \\frac{1}{2}mv^2\\)" in html


def test_missing_figure_target_end_to_end(context):
    html = render_markdown(":::{figure} #nowhere\nCaption\n:::", context)
    assert "Image target not found" in html
    assert "<img" not in html


def test_code_block_directive_is_highlighted_code(context):
    html = render_markdown("```{code-block} python\nx = 1\n```", context)
    assert 'class="code-block-container"' in html
    assert "<pre" in html
    assert "<code" in html


def test_roles_end_to_end(context):
    html = render_markdown("Press {kbd}`Ctrl+C` to copy H{sub}`2`O.", context)
    assert "<kbd>Ctrl</kbd> + <kbd>C</kbd>" in html
    assert "H<sub>2</sub>O" in html


def test_plain_markdown_passes_preprocessors_unchanged():
    plain = (
        "# Heading\n\n"
        "Some *emphasis* and a [link](https://example.com).\n\n"
        "- one\n- two\n\n"
        "| a | b |\n|---|---|\n| 1 | 2 |\n\n"
        "```python\nprint('hi')\n```\n"
    )
    assert apply_preprocessors(plain, build_render_context()) == plain


def test_renders_are_independent(local_config):
    raw = "$$ a $$ (x)\n\n{eq}`x`"
    first = render_article(raw, "ai", "one", config=local_config).content
    second = render_article(raw, "ai", "two", config=local_config).content
    assert first == second
    assert '<span class="equation-number">(1)</span>' in second


def test_parse_tags():
    assert parse_tags("a, b ,, c") == ("a", "b", "c")
    assert parse_tags(["x", " y ", ""]) == ("x", "y")
    assert parse_tags(None) == ()


def test_format_date():
    assert format_date("2024-10-31") == "October 31, 2024"
    assert format_date(datetime.date(2024, 1, 5)) == "January 5, 2024"
    assert format_date("not a date") == "not a date"
    assert format_date("") == ""


def test_math_macros_are_frozen(local_config):
    raw = '---\nmath:\n  "\\\\R": "\\\\mathbb{R}"\n---\nText\n'
    post = render_article(raw, "ai", "macros", config=local_config)
    assert post.math == (("\\R", "\\mathbb{R}"),)
    assert isinstance(hash(post), int)


def test_inline_math_in_titles_and_captions_is_literal(context):
    html = render_markdown(
        ":::{figure} ./images/a.png\nThe $\\alpha$ curve\n:::\n\n"
        ":::{note} Case $\\beta$\nBody $\\gamma$\n:::\n",
        context,
    )
    assert "<figcaption>The \\(\\alpha\\) curve</figcaption>" in html
    assert 'alt="The \\(\\alpha\\) curve"' in html
    assert '<div class="admonition-title">Case \\(\\beta\\)</div>' in html
    assert "\\(\\gamma\\)" in html
    assert "\\\\(" not in html


def test_display_math_inside_paragraph_stays_a_block(context):
    html = render_markdown("Let a and $$x$$ (e1) see it.", context)
    assert '<div class="equation-block" id="e1">\\[x\\]<span class="equation-number">(1)</span></div>' in html
    assert "see it." in html


def test_abbreviations_do_not_touch_figure_paths(local_config):
    context = build_render_context(
        "artificial-intelligence", "post1", {"abbreviations": {"GPU": "Graphics Processing Unit"}}, local_config
    )
    html = render_markdown(":::{figure} ./images/GPU.png\nThe GPU die.\n:::", context)
    assert 'src="/blogs/artificial-intelligence/post1/images/GPU.png"' in html
    assert '<abbr title="Graphics Processing Unit">GPU</abbr>' in html
