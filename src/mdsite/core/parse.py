"""Frontmatter extraction and markdown-it parsing into a BeautifulSoup tree"""

import re
from typing import Any

import yaml
from bs4 import BeautifulSoup
from markdown_it import MarkdownIt
from mdit_py_plugins.dollarmath import dollarmath_plugin
from pydantic import ValidationError

from mdsite.core.models import Frontmatter
from mdsite.errors import MetadataParseError, RawHtmlDisabledError


FRONTMATTER_OPEN_RE = re.compile(r'^---[ \t]*\r?\n')
FRONTMATTER_RE = re.compile(r'^---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)
TREE_BUILDER = "html.parser"


def strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with the YAML header removed."""
    if not FRONTMATTER_OPEN_RE.match(text):
        return {}, text
    m = FRONTMATTER_RE.match(text)
    if not m:
        raise MetadataParseError("Unterminated frontmatter: missing closing '---'")
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        raise MetadataParseError(f"Invalid YAML frontmatter: {e}") from e
    if not isinstance(fm, dict):
        raise MetadataParseError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
    return fm, text[m.end():]


def validate_frontmatter(data: dict[str, Any]) -> Frontmatter:
    """Check required fields; errors name the offending key."""
    try:
        return Frontmatter.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise MetadataParseError(f"Invalid frontmatter: {problems}") from e


def make_parser(preset: str = 'commonmark') -> MarkdownIt:
    """Build a MarkdownIt instance with strikethrough, dollar math and raw HTML."""
    md = MarkdownIt(preset, options_update={"linkify": False})
    if not md.options.get("html"):
        raise RawHtmlDisabledError(f"Parser preset {preset!r} does not allow raw HTML")
    md.enable("strikethrough")
    dollarmath_plugin(md, allow_labels=False, double_inline=False)
    return md


def parse_markdown(body: str, parser: MarkdownIt = None) -> BeautifulSoup:
    """Render body with raw HTML passed through and load it as a mutable tree.

    Unknown tags (e.g. the <fn> footnote marker) come out as plain element nodes
    carrying their children.
    """
    parser = parser or make_parser()
    return BeautifulSoup(parser.render(body), TREE_BUILDER)


def fragment(markup: str) -> list:
    """Parse trusted markup into a list of detached nodes ready for insertion."""
    return list(BeautifulSoup(markup, TREE_BUILDER).contents)
