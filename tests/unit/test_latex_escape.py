"""Unit tests for LaTeX escaping."""

import pytest

from tagbook.contexts.templating import escape_latex, latex_path
from tagbook.contexts.templating.latex_escape import LATEX_SPECIAL_CHARACTERS


@pytest.mark.unit
@pytest.mark.parametrize(
    "char, escaped",
    [
        ("\\", r"\textbackslash{}"),
        ("{", r"\{"),
        ("}", r"\}"),
        ("_", r"\_"),
        ("^", r"\^{}"),
        ("&", r"\&"),
        ("%", r"\%"),
        ("$", r"\$"),
        ("#", r"\#"),
        ("~", r"\textasciitilde{}"),
    ],
)
def test_escape_each_reserved_character(char, escaped):
    assert escape_latex(char) == escaped


@pytest.mark.unit
def test_table_covers_ten_reserved_characters():
    assert set(LATEX_SPECIAL_CHARACTERS) == set("\\{}_^&%$#~")


@pytest.mark.unit
def test_backslash_replacement_is_not_escaped_again():
    """The braces introduced by \\textbackslash{} survive untouched."""
    assert escape_latex("a\\b") == r"a\textbackslash{}b"
    assert escape_latex("~\\") == r"\textasciitilde{}\textbackslash{}"


@pytest.mark.unit
def test_mixed_text():
    assert escape_latex("50% of R&D costs $5 #1") == r"50\% of R\&D costs \$5 \#1"
    assert escape_latex("{x_1^2}") == r"\{x\_1\^{}2\}"


@pytest.mark.unit
def test_plain_text_unchanged():
    text = "Cats, dogs (and birds!) - 2025/05/01"
    assert escape_latex(text) == text


@pytest.mark.unit
def test_unicode_passes_through():
    assert escape_latex("Café_猫") == r"Café\_猫"


@pytest.mark.unit
@pytest.mark.parametrize("empty", [None, ""])
def test_empty_input(empty):
    assert escape_latex(empty) == ""


@pytest.mark.unit
def test_escaping_is_not_idempotent():
    """Escaping twice escapes the escapes; callers escape exactly once."""
    once = escape_latex("a_b")
    assert once == r"a\_b"
    assert escape_latex(once) == r"a\textbackslash{}\_b"


@pytest.mark.unit
def test_latex_path_detokenizes_upload_names():
    path = "Uploads/0b7e9c2a-1f3d-4c5b-8e6f-7a8b9c0d1e2f_my cat~1.png"
    assert latex_path(path) == r"\detokenize{" + path + "}"


@pytest.mark.unit
@pytest.mark.parametrize("name", ["100%.png", "#1.png", "a{b}.png", "a\\b.png"])
def test_latex_path_falls_back_to_escaping(name):
    assert latex_path(f"Uploads/{name}") == escape_latex(f"Uploads/{name}")


@pytest.mark.unit
def test_latex_path_empty():
    assert latex_path("") == ""
