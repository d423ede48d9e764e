from blogs.markdown.preprocessors.abbreviations import expand_abbreviations

LLM = '<abbr title="Large Language Model">LLM</abbr>'


def expand(text, abbreviations):
    return expand_abbreviations(text, {"abbreviations": abbreviations})


def test_whole_words_only():
    result = expand("An LLM, not LLMs.", {"LLM": "Large Language Model"})
    assert result == f"An {LLM}, not LLMs."


def test_no_abbreviations_is_identity():
    assert expand_abbreviations("An LLM.", {}) == "An LLM."


def test_expansion_is_not_expanded_again():
    result = expand("GPU and HIP", {"GPU": "Graphics Processing Unit", "HIP": "HIP for GPU"})
    assert result == (
        '<abbr title="Graphics Processing Unit">GPU</abbr> and '
        '<abbr title="HIP for GPU">HIP</abbr>'
    )


def test_longest_abbreviation_wins():
    result = expand("ROCm SMI", {"ROCm": "Radeon Open Compute", "ROCm SMI": "System Management Interface"})
    assert result == '<abbr title="System Management Interface">ROCm SMI</abbr>'


def test_code_is_untouched():
    text = "Use `LLM` here\n\n```python\nLLM = load()\n```\nLLM"
    result = expand(text, {"LLM": "Large Language Model"})
    assert result == f"Use `LLM` here\n\n```python\nLLM = load()\n```\n{LLM}"


def test_links_and_html_are_untouched():
    text = '[LLM guide](https://example.com/LLM) <img alt="LLM">'
    result = expand(text, {"LLM": "Large Language Model"})
    assert result == f'[{LLM} guide](https://example.com/LLM) <img alt="LLM">'


def test_expansion_is_escaped():
    result = expand("R&D", {"R&D": 'Research "and" Development'})
    assert result == '<abbr title="Research &quot;and&quot; Development">R&D</abbr>'


GPU = {"GPU": "Graphics Processing Unit"}
GPU_ABBR = '<abbr title="Graphics Processing Unit">GPU</abbr>'


def test_directive_argument_is_untouched():
    text = ":::{figure} ./images/GPU.png\nThe GPU die.\n:::"
    result = expand(text, GPU)
    assert result == f":::{{figure}} ./images/GPU.png\nThe {GPU_ABBR} die.\n:::"


def test_directive_options_are_untouched():
    text = ":::{card} Title\n:link: https://example.com/GPU\n:alt: A GPU\n\nBody about the GPU.\n:::"
    result = expand(text, GPU)
    assert ":link: https://example.com/GPU\n" in result
    assert ":alt: A GPU\n" in result
    assert f"Body about the {GPU_ABBR}." in result


def test_multiline_display_math_is_untouched():
    text = "$$\n\\text{GPU} = x\n$$\n\nThe GPU."
    result = expand(text, GPU)
    assert result == f"$$\n\\text{{GPU}} = x\n$$\n\nThe {GPU_ABBR}."


def test_math_directive_bodies_are_untouched():
    backtick = "```{math}\n:label: g\n\\text{GPU} = y\n```"
    colon = ":::{math}\n\\text{GPU} = z\n:::"
    assert expand(backtick, GPU) == backtick
    assert expand(colon, GPU) == colon


def test_ams_environment_is_untouched():
    text = "\\begin{align}\n\\text{GPU} &= w\n\\end{align}\nA GPU."
    result = expand(text, GPU)
    assert result == f"\\begin{{align}}\n\\text{{GPU}} &= w\n\\end{{align}}\nA {GPU_ABBR}."
