"""Document pipeline: frontmatter -> markdown tree -> transforms -> HTML + metadata"""

import logging
from pathlib import Path

from bs4 import BeautifulSoup
from markdown_it import MarkdownIt

from mdsite.core.models import RenderedPage
from mdsite.core.parse import make_parser, parse_markdown, strip_frontmatter, validate_frontmatter
from mdsite.core.transform.footnotes import render_footnotes
from mdsite.core.transform.highlight import highlight_code
from mdsite.core.transform.links import annotate_links
from mdsite.core.transform.tex import render_math
from mdsite.errors import BuildError, MissingTitleError


logger = logging.getLogger(__name__)


def serialize(tree: BeautifulSoup) -> str:
    """Render the tree to HTML; text is escaped exactly once, attributes keep insertion order."""
    return tree.decode(formatter="minimal")


def extract_title(tree: BeautifulSoup) -> str:
    """Text of the first <h1>."""
    heading = tree.find("h1")
    if heading is None:
        raise MissingTitleError("document has no level-1 heading")
    return heading.get_text().strip()


def transform(tree: BeautifulSoup, highlight_class: str = "highlight") -> BeautifulSoup:
    """Apply the tree transformers in their fixed order."""
    render_math(tree)
    annotate_links(tree)
    highlight_code(tree, highlight_class)
    render_footnotes(tree)
    return tree


def render_document(
    raw: str,
    parser: MarkdownIt = None,
    highlight_class: str = "highlight",
    ) -> RenderedPage:
    """Run one document through the whole pipeline."""
    data, body = strip_frontmatter(raw)
    frontmatter = validate_frontmatter(data)
    tree = transform(parse_markdown(body, parser or make_parser()), highlight_class)
    return RenderedPage(
        html=serialize(tree),
        title=extract_title(tree),
        description=frontmatter.description,
        publish_date=frontmatter.publish_date,
    )


def render_file(
    path: Path,
    parser: MarkdownIt = None,
    highlight_class: str = "highlight",
    ) -> RenderedPage:
    """Read and render a source file; build errors are tagged with the file path."""
    logger.debug("rendering %s", path)
    try:
        return render_document(path.read_text(encoding="utf-8"), parser, highlight_class)
    except BuildError as e:
        e.path = path
        raise
