from types import SimpleNamespace

from blogs.similarity import compute_related_posts, text_similarity


def post(slug, title, description="", tags=(), raw_content="", category="ai"):
    return SimpleNamespace(
        slug=slug,
        category=category,
        title=title,
        description=description,
        tags=tags,
        raw_content=raw_content,
    )


def test_identical_text_is_fully_similar():
    assert abs(text_similarity("GPU kernels tuning", "GPU kernels tuning") - 1.0) < 1e-9


def test_unrelated_text_has_zero_similarity():
    assert text_similarity("attention transformer", "weather forecast") == 0.0


def test_stopwords_and_short_tokens_are_ignored():
    assert text_similarity("the and of to a", "the and of to a") == 0.0
    assert text_similarity("AI on GPU", "AI on CPU") == 0.0


def test_html_tags_are_ignored():
    assert text_similarity("<div class='kernel'>matrix</div>", "matrix") == 1.0


def test_related_posts_ranked_and_limited():
    current = post("flash", "Flash attention", "Attention kernels", raw_content="attention kernels on GPUs")
    candidates = [
        post("weather", "Weather models", tags=("climate",)),
        post("flash", "Flash attention", tags=("attention",)),
        post("attn", "Attention kernels", tags=("attention", "kernels")),
        post("gemm", "Tuning GEMM kernels", tags=("kernels",)),
        post("other", "Another attention post", tags=("llm",)),
    ]
    related = compute_related_posts(current, candidates, limit=3)
    assert [p.slug for p in related] == ["attn", "gemm", "other"]
