"""Output tree preparation: wipe build dir, copy static assets, write highlighter CSS"""

import logging
import shutil
from pathlib import Path

from pygments.formatters import HtmlFormatter


logger = logging.getLogger(__name__)


def reset_dir(path: Path) -> Path:
    """Remove path if it exists and recreate it empty."""
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)
    return path


def copy_assets(assets_dir: Path, build_dir: Path) -> list[Path]:
    """Copy the contents of assets_dir into build_dir. Missing assets_dir copies nothing."""
    if not assets_dir.is_dir():
        logger.info("no assets directory at %s", assets_dir)
        return []
    shutil.copytree(assets_dir, build_dir, dirs_exist_ok=True)
    return sorted(build_dir / p.relative_to(assets_dir) for p in assets_dir.rglob('*') if p.is_file())


def write_highlight_css(css_dir: Path, style: str, css_class: str) -> Path:
    """Write the Pygments stylesheet targeting elements marked with css_class."""
    css_dir.mkdir(parents=True, exist_ok=True)
    out = css_dir / "highlight.css"
    out.write_text(HtmlFormatter(style=style).get_style_defs(f".{css_class}"), encoding='utf-8')
    return out


def prepare_output(build_dir: Path, assets_dir: Path, css_dir: str, style: str, css_class: str) -> None:
    """Run the asset pipeline; must finish before any page is written."""
    reset_dir(build_dir)
    copied = copy_assets(assets_dir, build_dir)
    css = write_highlight_css(build_dir / css_dir, style, css_class)
    logger.info("copied %d asset(s), wrote %s", len(copied), css)
