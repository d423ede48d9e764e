"""Shared fixtures for the blogs test suite."""

import pytest
from django.core.cache import cache

from blogs.markdown.config import RenderConfig
from blogs.markdown.renderer import build_render_context

ARTICLE = """---
blogpost: true
blog_title: "Fast attention on MI300X"
date: 2024-10-31
author: Jane Doe
thumbnail: chart.png
tags: PyTorch, LLM, , AI
language: English
abbreviations:
  LLM: Large Language Model
myst:
  html_meta:
    "description lang=en": "Speeding up attention kernels."
---

# Fast attention on MI300X

An LLM needs fast attention.

![chart](./images/chart.png)

:::{note}
Requires ROCm 6.
:::

| GPU | TFLOPS |
|-----|--------|
| MI300X | 1307 |
"""


@pytest.fixture
def local_config():
    return RenderConfig(local_mode=True)


@pytest.fixture
def published_config():
    return RenderConfig(local_mode=False)


@pytest.fixture
def context(local_config):
    return build_render_context("artificial-intelligence", "post1", {}, local_config)


@pytest.fixture
def article():
    return ARTICLE


@pytest.fixture
def blogs_dir(tmp_path):
    """A blogs tree with two published articles, a draft and skipped folders."""

    def write(category, slug, text):
        folder = tmp_path / category / slug
        folder.mkdir(parents=True)
        (folder / "README.md").write_text(text, encoding="utf-8")

    write("artificial-intelligence", "older", "---\nblogpost: true\ndate: 2023-01-15\n---\n# Older\n")
    write("artificial-intelligence", "newer", "---\nblogpost: true\ndate: 2024-06-01\n---\n# Newer\n")
    write("artificial-intelligence", "draft", "---\nblogpost: false\n---\n# Draft\n")
    write("artificial-intelligence", "_template", "---\nblogpost: true\n---\n# Template\n")
    write("artificial-intelligence", ".hidden", "---\nblogpost: true\n---\n# Hidden\n")
    write("high-performance-computing", "hpc-post", "---\nblogpost: true\ndate: 2024-01-10\n---\n# HPC\n")
    (tmp_path / "artificial-intelligence" / "no-readme").mkdir()
    return tmp_path


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()
