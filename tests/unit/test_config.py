"""Unit tests for config.py"""

import pytest

from mdsite.config import load_config


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each test from an empty directory so no stray config.yaml is picked up."""
    monkeypatch.chdir(tmp_path)


def test_load_config_defaults(monkeypatch):
    """Settings defaults are used when no config.yaml, env var, or CLI override exists."""
    monkeypatch.delenv("MDSITE_SITE_URL", raising=False)
    settings = load_config()
    assert settings.site_url == "https://example.com"
    assert settings.build_dir == "build"
    assert settings.workers == 1


def test_load_config_uses_env_site_url(monkeypatch):
    """MDSITE_SITE_URL env var is picked up and its trailing slash dropped."""
    monkeypatch.setenv("MDSITE_SITE_URL", "https://env.example/")
    settings = load_config()
    assert settings.site_url == "https://env.example"


def test_load_config_reads_config_yaml(tmp_path):
    """Values from config.yaml are applied."""
    (tmp_path / "config.yaml").write_text("site_title: From File\nkeywords: [a, b]\n")
    settings = load_config()
    assert settings.site_title == "From File"
    assert settings.keywords == ["a", "b"]


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """MDSITE_BUILD_DIR takes precedence over config.yaml build_dir."""
    (tmp_path / "config.yaml").write_text("build_dir: from-file\n")
    monkeypatch.setenv("MDSITE_BUILD_DIR", "from-env")
    settings = load_config()
    assert settings.build_dir == "from-env"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.setenv("MDSITE_BUILD_DIR", "from-env")
    settings = load_config(overrides={"build_dir": "from-cli", "src_dir": None})
    assert settings.build_dir == "from-cli"
    assert settings.src_dir == "src"


def test_load_config_env_workers_coerced(monkeypatch):
    """MDSITE_WORKERS env var is coerced to int."""
    monkeypatch.setenv("MDSITE_WORKERS", "4")
    assert load_config().workers == 4


def test_load_config_custom_file(tmp_path):
    """An explicit config file path is honoured."""
    (tmp_path / "site.yaml").write_text("blog_dir: posts\n")
    assert load_config(config_file="site.yaml").blog_dir == "posts"


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_rejects_unknown_highlight_style():
    """An unknown Pygments style is a configuration error."""
    with pytest.raises(ValueError, match="unknown Pygments style"):
        load_config(overrides={"highlight_style": "no-such-style"})


def test_load_config_rejects_zero_workers():
    with pytest.raises(ValueError):
        load_config(overrides={"workers": 0})


def test_settings_derived_urls():
    """highlight_css and rss_url are derived from css_dir, site_url and rss_file."""
    settings = load_config(overrides={"site_url": "https://x.test/", "css_dir": "styles"})
    assert settings.highlight_css == "/styles/highlight.css"
    assert settings.rss_url == "https://x.test/rss.xml"
