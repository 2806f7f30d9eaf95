"""Site assembly: render homepage and posts, write pages and the RSS feed"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup, Tag
from markdown_it import MarkdownIt

from mdsite.config import Settings
from mdsite.core.assets import prepare_output
from mdsite.core.models import Post
from mdsite.core.parse import TREE_BUILDER, make_parser
from mdsite.core.render import render_file, serialize
from mdsite.core.templates import render_page, render_rss
from mdsite.errors import BuildError, MissingPublishDateError, NonMarkdownEntryError


logger = logging.getLogger(__name__)


@dataclass
class SiteResult:
    """Paths written by a build, in write order per kind."""
    posts: list[Post] = field(default_factory=list)
    pages: list[Path] = field(default_factory=list)
    feed:  Optional[Path] = None


def discover_posts(blog_dir: Path, extension: str = '.md') -> list[Path]:
    """Return sorted post sources; anything that is not a regular markdown file is fatal."""
    if not blog_dir.is_dir():
        logger.info("no blog directory at %s", blog_dir)
        return []
    sources = []
    for entry in sorted(blog_dir.iterdir()):
        if not entry.is_file() or entry.suffix != extension:
            raise NonMarkdownEntryError(f"non-markdown entry in blog directory: {entry.name}", entry)
        sources.append(entry)
    return sources


def sort_posts(posts: list[Post]) -> list[Post]:
    """Newest first by plain string comparison of ISO publish dates."""
    return sorted(posts, key=lambda p: p.publish_date, reverse=True)


def _time_element(tree: BeautifulSoup, publish_date: str) -> Tag:
    time = tree.new_tag("time", datetime=publish_date)
    time.string = publish_date
    return time


def post_body(html: str, publish_date: str) -> str:
    """Wrap a rendered post in <article> and put its publish date right after the title."""
    tree = BeautifulSoup(f"<article>\n{html}\n</article>", TREE_BUILDER)
    heading = tree.find("h1")
    para = tree.new_tag("p")
    strong = tree.new_tag("strong")
    strong.append(_time_element(tree, publish_date))
    para.append(strong)
    heading.insert_after(para)
    return serialize(tree)


def home_body(html: str, posts: list[Post], settings: Settings) -> str:
    """Fill the blog entries element (if any) with the post list and the feed link."""
    tree = BeautifulSoup(html, TREE_BUILDER)
    target = tree.find(id=settings.blog_entries_id)
    if target is None:
        logger.warning("homepage has no #%s element; post list omitted", settings.blog_entries_id)
        return html

    entries = tree.new_tag("ul")
    for post in posts:
        item = tree.new_tag("li")
        item.append(_time_element(tree, post.publish_date))
        item.append(" - ")
        link = tree.new_tag("a", href=f"/{post.folder}")
        link.string = post.title
        item.append(link)
        entries.append("\n")
        entries.append(item)
    entries.append("\n")

    feed = tree.new_tag("a", href=f"/{settings.rss_file}")
    feed.string = "RSS Feed"
    target.clear()
    target.append(entries)
    target.append("\n")
    target.append(feed)
    return serialize(tree)


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding='utf-8')
    return path


def build_post(source: Path, settings: Settings, parser: MarkdownIt) -> tuple[Post, Path]:
    """Render one post and write its page. Returns the post and the written path."""
    page = render_file(source, parser, settings.highlight_class)
    if not page.publish_date:
        raise MissingPublishDateError(f"post [{page.title}] has no publish date", source)

    folder = f"{settings.blog_dir}/{source.stem}"
    post = Post(
        title=page.title,
        folder=folder,
        url=f"{settings.site_url}/{folder}",
        publish_date=page.publish_date,
        description=page.description,
        html=page.html,
    )
    html = render_page(
        settings,
        title=post.title,
        body_html=post_body(post.html, post.publish_date),
        description=post.description,
        canonical_url=post.url,
        og_type="article",
        og_extras=[("article:published_time", post.publish_date)],
    )
    out = _write(Path(settings.build_dir) / folder / "index.html", html)
    logger.info("wrote %s", out)
    return post, out


def build_home(source: Path, posts: list[Post], settings: Settings, parser: MarkdownIt) -> Path:
    """Render the homepage with the (already sorted) post list."""
    if not source.is_file():
        raise BuildError("homepage source not found", source)
    page = render_file(source, parser, settings.highlight_class)

    og_extras = [
        (prop, value)
        for prop, value in (
            ("profile:first_name", settings.author_first_name),
            ("profile:last_name", settings.author_last_name),
        )
        if value
    ]
    html = render_page(
        settings,
        title=page.title,
        body_html=home_body(page.html, posts, settings),
        description=page.description,
        canonical_url=settings.site_url,
        og_type="profile",
        og_extras=og_extras,
    )
    out = _write(Path(settings.build_dir) / "index.html", html)
    logger.info("wrote %s", out)
    return out


def build_site(settings: Settings) -> SiteResult:
    """Full build: assets, posts, homepage, feed. The first error aborts everything."""
    src_dir = Path(settings.src_dir)
    build_dir = Path(settings.build_dir)
    parser = make_parser(settings.parser_config)

    prepare_output(
        build_dir, Path(settings.assets_dir), settings.css_dir,
        settings.highlight_style, settings.highlight_class,
    )

    sources = discover_posts(src_dir / settings.blog_dir, settings.markdown_extension)
    with ThreadPoolExecutor(max_workers=settings.workers) as pool:
        built = list(pool.map(lambda s: build_post(s, settings, parser), sources))

    result = SiteResult()
    result.posts = sort_posts([post for post, _ in built])
    result.pages = [out for _, out in built]

    home_source = src_dir / f"{settings.index_name}{settings.markdown_extension}"
    result.pages.append(build_home(home_source, result.posts, settings, parser))

    result.feed = _write(build_dir / settings.rss_file, render_rss(settings, result.posts))
    logger.info("wrote %s with %d item(s)", result.feed, len(result.posts))
    return result
