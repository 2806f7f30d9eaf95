"""Code block syntax highlighting with Pygments"""

import re

from bs4 import BeautifulSoup, Tag
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from mdsite.core.parse import fragment
from mdsite.errors import HighlightError, UnknownLanguageError


LANG_PREFIX = "language-"
LANG_CLASS_RE = re.compile(rf'^{LANG_PREFIX}')


def _language(node: Tag) -> str:
    """Return the language named by the first language-* class, else ''."""
    for cls in node.get("class") or []:
        if cls.startswith(LANG_PREFIX):
            return cls[len(LANG_PREFIX):]
    return ""


def highlight_source(code: str, language: str) -> str:
    """Highlight code as HTML spans (no wrapper); raises HighlightError for unknown languages."""
    try:
        lexer = get_lexer_by_name(language, stripnl=False, ensurenl=False)
    except ClassNotFound as e:
        raise HighlightError(f"no highlighter for language {language!r}") from e
    return highlight(code, lexer, HtmlFormatter(nowrap=True))


def highlight_code(tree: BeautifulSoup, css_class: str = "highlight") -> BeautifulSoup:
    """Highlight every language-tagged element in place and mark it with css_class."""
    for code in tree.select("pre > code"):
        if not _language(code):
            snippet = code.get_text()[:40]
            raise UnknownLanguageError(f"code block without a language tag: {snippet!r}")

    for node in tree.find_all(class_=LANG_CLASS_RE):
        language = _language(node)
        if not language:
            raise UnknownLanguageError(f"empty language class on <{node.name}>")
        markup = highlight_source(node.get_text(), language)
        node.clear()
        for child in fragment(markup):
            node.append(child)
        if css_class not in node["class"]:
            node["class"].append(css_class)
    return tree
