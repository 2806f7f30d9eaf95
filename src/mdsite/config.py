"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pygments.styles import get_all_styles


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:          str = "mdsite"
    site_url:          str = Field(default="https://example.com", description="Canonical site origin, no trailing slash")
    site_title:        str = Field(default="My Site",          description="RSS channel title")
    site_description:  str = Field(default="Website and blog", description="RSS channel description")
    language:          str = Field(default="en-us",            description="RSS channel language")
    author:            str = ""
    author_first_name: str = Field(default="", description="og profile:first_name on the homepage")
    author_last_name:  str = Field(default="", description="og profile:last_name on the homepage")
    keywords:          list[str] = Field(default_factory=list)
    src_dir:           str = Field(default="src",    description="Directory holding index.md and the blog directory")
    build_dir:         str = Field(default="build",  description="Output directory; wiped on every build")
    assets_dir:        str = Field(default="assets", description="Static files copied verbatim into build_dir")
    blog_dir:          str = "blog"
    css_dir:           str = "css"
    index_name:        str = "index"
    markdown_extension: str = Field(default=".md", pattern=r"^\.\w+$")
    rss_file:          str = "rss.xml"
    blog_entries_id:   str = Field(default="blog-entries", description="Homepage element id filled with the post list")
    parser_config:     str = Field(default="commonmark",   description="MarkdownIt parser preset name")
    highlight_style:   str = Field(default="gruvbox-dark", description="Pygments style for css/highlight.css")
    highlight_class:   str = Field(default="highlight",    description="Class added to highlighted code elements")
    extra_stylesheets: list[str] = Field(default_factory=list, description="Additional stylesheet hrefs for every page")
    workers:           int = Field(default=1, ge=1, description="Threads used to render blog posts")

    @field_validator("site_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("highlight_style")
    @classmethod
    def _known_style(cls, value: str) -> str:
        if value not in set(get_all_styles()):
            raise ValueError(f"unknown Pygments style: {value}")
        return value

    @property
    def highlight_css(self) -> str:
        """Site-absolute href of the generated highlighter stylesheet."""
        return f"/{self.css_dir}/highlight.css"

    @property
    def rss_url(self) -> str:
        return f"{self.site_url}/{self.rss_file}"


def load_config(overrides: dict[str, Any] = None, config_file: str = CONFIG_FILE) -> Settings:
    """Load Settings from config.yaml, then MDSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(config_file).exists():
        try:
            data = yaml.safe_load(Path(config_file).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {config_file}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {config_file}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDSITE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
