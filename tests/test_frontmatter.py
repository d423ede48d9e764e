import logging

from blogs.markdown.frontmatter import deduplicate_frontmatter, split_frontmatter


def test_split_basic():
    metadata, body = split_frontmatter("---\nblog_title: Hello\nblogpost: true\n---\n# Body\n")
    assert metadata == {"blog_title": "Hello", "blogpost": True}
    assert body == "# Body\n"


def test_no_frontmatter_returns_input():
    raw = "# Just a body\n\nText."
    assert split_frontmatter(raw) == ({}, raw)


def test_empty_frontmatter_block():
    metadata, body = split_frontmatter("---\n---\nBody")
    assert metadata == {}
    assert body == "Body"


def test_duplicate_key_first_wins(caplog):
    raw = "---\ntitle: A\ntitle: B\n---\nbody"
    with caplog.at_level(logging.WARNING):
        metadata, body = split_frontmatter(raw, "ai/post1")
    assert metadata == {"title": "A"}
    assert body == "body"
    assert "Duplicate frontmatter key 'title' in ai/post1" in caplog.text


def test_deduplicate_keeps_nested_lines():
    raw = "---\nmyst:\n  html_meta:\n    x: 1\nauthor: A\nauthor: B\n---\nbody"
    assert deduplicate_frontmatter(raw) == "---\nmyst:\n  html_meta:\n    x: 1\nauthor: A\n---\nbody"


def test_deduplicate_without_block_is_identity():
    assert deduplicate_frontmatter("no frontmatter") == "no frontmatter"


def test_unparsable_yaml_falls_back_to_whole_input(caplog):
    raw = "---\ntitle: [unclosed\n---\nbody"
    with caplog.at_level(logging.WARNING):
        metadata, body = split_frontmatter(raw, "ai/broken")
    assert metadata == {}
    assert body == raw
    assert "ai/broken" in caplog.text


def test_non_mapping_yaml_falls_back():
    raw = "---\n- a\n- b\n---\nbody"
    assert split_frontmatter(raw) == ({}, raw)


def test_crlf_line_endings():
    metadata, body = split_frontmatter("---\r\nauthor: A\r\n---\r\nBody")
    assert metadata == {"author": "A"}
    assert body == "Body"
