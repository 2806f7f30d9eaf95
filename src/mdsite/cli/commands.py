"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdsite.config import CONFIG_FILE, Settings, load_config
from mdsite.core.parse import make_parser
from mdsite.core.render import render_file
from mdsite.core.site import build_site
from mdsite.errors import BuildError


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None, config_file: str = CONFIG_FILE) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides, config_file=config_file)
    except ValueError as e:
        _fail(str(e))


def _logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_cmd(
    src: Annotated[Optional[str], typer.Option("--src-dir", help="Source directory (index.md + blog/)")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory, wiped before writing")] = None,
    assets: Annotated[Optional[str], typer.Option("--assets-dir", help="Static assets copied into the output")] = None,
    site_url: Annotated[Optional[str], typer.Option("--site-url", help="Canonical site URL")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Threads used to render posts")] = None,
    config: Annotated[str, typer.Option("--config", help="YAML config file")] = CONFIG_FILE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log each build step")] = False,
    ):
    """Build the whole site: assets, posts, homepage and RSS feed."""
    _logging(verbose)
    settings = _settings(overrides={
        "src_dir": src, "build_dir": out, "assets_dir": assets,
        "site_url": site_url, "workers": workers,
    }, config_file=config)

    try:
        result = build_site(settings)
    except BuildError as e:
        _fail("Build failed", e)

    for page in result.pages:
        typer.echo(f"  {page}")
    typer.echo(f"  {result.feed}")
    typer.echo(f"Built {len(result.posts)} post(s) and the homepage into {settings.build_dir}/")


def render_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Markdown file to render")],
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    config: Annotated[str, typer.Option("--config", help="YAML config file")] = CONFIG_FILE,
    ):
    """Render one document and print its HTML body; metadata goes to stderr."""
    settings = _settings(overrides={"parser_config": parser}, config_file=config)
    try:
        page = render_file(path, make_parser(settings.parser_config), settings.highlight_class)
    except BuildError as e:
        _fail("Render failed", e)

    typer.echo(f"title: {page.title}", err=True)
    typer.echo(f"description: {page.description}", err=True)
    if page.publish_date:
        typer.echo(f"publish_date: {page.publish_date}", err=True)
    typer.echo(page.html)
