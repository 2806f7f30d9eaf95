"""Math rendering: TeX spans and blocks to MathML"""

import re

from bs4 import BeautifulSoup
from latex2mathml.commands import MATRICES
from latex2mathml.converter import convert

from mdsite.core.parse import TREE_BUILDER, fragment
from mdsite.errors import MathRenderError


MATH_SELECTOR = "span.math.inline, div.math.block"
ENVIRONMENT_RE = re.compile(r"\\begin\{([^}]*)\}")

# latex2mathml emits these with fewer children when an argument is missing
ARITY = {"mfrac": 2, "mroot": 2, "msup": 2, "msub": 2, "mover": 2, "munder": 2,
         "msubsup": 3, "munderover": 3}


def _check_environments(tex: str) -> None:
    for name in ENVIRONMENT_RE.findall(tex):
        if f"\\{name}" not in MATRICES:
            raise MathRenderError(tex, f"unsupported environment {name!r}")


def _check_mathml(tex: str, mathml: str) -> None:
    """Reject output the converter produced from input it did not understand."""
    tree = BeautifulSoup(mathml, TREE_BUILDER)
    for token in tree.find_all(["mi", "mo"]):
        if token.get_text().startswith("\\"):
            raise MathRenderError(tex, f"unsupported command {token.get_text()!r}")
    for name, arity in ARITY.items():
        for node in tree.find_all(name):
            if len(node.find_all(recursive=False)) != arity:
                raise MathRenderError(tex, f"missing argument in <{name}>")


def tex_to_mathml(tex: str, display: str = "inline") -> str:
    """Convert one TeX snippet; failures name the snippet, not the document."""
    if not tex:
        raise MathRenderError(tex)
    _check_environments(tex)
    try:
        mathml = convert(tex, display=display)
    except Exception as e:  # latex2mathml raises a variety of unrelated exception types
        raise MathRenderError(tex, e) from e
    _check_mathml(tex, mathml)
    return mathml


def render_math(tree: BeautifulSoup) -> BeautifulSoup:
    """Replace the TeX source inside each math wrapper with rendered MathML."""
    for node in tree.select(MATH_SELECTOR):
        display = "block" if node.name == "div" else "inline"
        mathml = tex_to_mathml(node.get_text().strip(), display)
        node.clear()
        for child in fragment(mathml):
            node.append(child)
    return tree
