"""Unit tests for core/transform/tex.py"""

import pytest

from mdsite.core.transform import tex
from mdsite.core.transform.tex import render_math, tex_to_mathml
from mdsite.errors import MathRenderError


def test_inline_math_becomes_mathml(parse):
    """The wrapper span stays; its TeX source is replaced by inline MathML."""
    tree = render_math(parse("Inline $x^2$ here.\n"))
    span = tree.select_one("span.math.inline")
    math = span.find("math")
    assert math is not None
    assert math["display"] == "inline"
    assert "x^2" not in str(span)
    assert math.find("msup") is not None


def test_block_math_becomes_display_mathml(parse):
    tree = render_math(parse("$$\n\\frac{a}{b}\n$$\n"))
    math = tree.select_one("div.math.block math")
    assert math["display"] == "block"
    assert math.find("mfrac") is not None


def test_text_without_math_untouched(parse):
    tree = parse("Costs 5 dollars.\n")
    before = str(tree)
    assert str(render_math(tree)) == before


def test_converter_failure_names_snippet(parse, monkeypatch):
    """Converter errors surface as MathRenderError carrying only the offending TeX."""
    def boom(latex, display="inline"):
        raise ValueError("unsupported")

    monkeypatch.setattr(tex, "convert", boom)
    with pytest.raises(MathRenderError) as exc_info:
        render_math(parse("Fine text, then $\\oops{x}$.\n"))
    assert exc_info.value.snippet == "\\oops{x}"
    assert "\\oops{x}" in str(exc_info.value)
    assert "Fine text" not in str(exc_info.value)


def test_empty_snippet_rejected():
    with pytest.raises(MathRenderError):
        tex_to_mathml("")


def test_unknown_command_rejected(parse):
    """Control sequences the converter does not know fail instead of leaking into the page."""
    with pytest.raises(MathRenderError, match="notacommand") as exc_info:
        render_math(parse("A $\\notacommand{x}$ b.\n"))
    assert exc_info.value.snippet == "\\notacommand{x}"


def test_unknown_environment_rejected(parse):
    with pytest.raises(MathRenderError, match="tikzpicture"):
        render_math(parse("A $\\begin{tikzpicture}x\\end{tikzpicture}$ b.\n"))


def test_supported_environment_renders():
    mathml = tex_to_mathml("\\begin{pmatrix}a & b\\\\c & d\\end{pmatrix}", "block")
    assert "<mtable" in mathml


def test_missing_argument_rejected():
    with pytest.raises(MathRenderError, match="mfrac"):
        tex_to_mathml("\\frac{a}")


def test_converter_error_without_message_names_its_type():
    with pytest.raises(MathRenderError) as exc_info:
        tex_to_mathml("x^")
    assert not str(exc_info.value).endswith(": ")
    assert "Error" in str(exc_info.value)
