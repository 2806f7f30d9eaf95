"""Root test configuration: a throwaway site source tree and matching settings"""

from pathlib import Path

import pytest

from mdsite.config import Settings


HOME_MD = """\
---
description: Personal homepage
---

# Jane Doe

Welcome. See [the source](https://example.org/code) or [about](/about).

<div id="blog-entries"></div>
"""

NEW_POST_MD = """\
---
description: The newer post
publish_date: "2024-01-01"
---

# New Year

Some $e^{i\\pi} + 1 = 0$ math<fn>Euler, of course.</fn>.

```python
def f():
    return 1
```
"""

OLD_POST_MD = """\
---
description: The older post
publish_date: "2023-12-31"
---

# Last Day

~~Draft~~ final text.
"""


def write_site(root: Path, posts: dict[str, str] = None, home: str = HOME_MD) -> Path:
    """Write src/index.md, src/blog/<name>.md and an assets dir under root."""
    src = root / "src"
    blog = src / "blog"
    blog.mkdir(parents=True)
    (src / "index.md").write_text(home, encoding="utf-8")
    if posts is None:
        posts = {"new-year.md": NEW_POST_MD, "last-day.md": OLD_POST_MD}
    for name, text in posts.items():
        (blog / name).write_text(text, encoding="utf-8")
    css = root / "assets" / "css"
    css.mkdir(parents=True)
    (css / "site.css").write_text("body { margin: 0; }\n")
    (root / "assets" / "favicon.ico").write_bytes(b"\x00")
    return src


@pytest.fixture(name="site_root")
def site_root_fixture(tmp_path):
    write_site(tmp_path)
    return tmp_path


@pytest.fixture(name="settings")
def settings_fixture(tmp_path):
    return Settings(
        site_url="https://example.com/",
        site_title="Jane Doe",
        author_first_name="Jane",
        author_last_name="Doe",
        src_dir=str(tmp_path / "src"),
        build_dir=str(tmp_path / "build"),
        assets_dir=str(tmp_path / "assets"),
    )


@pytest.fixture(name="make_site")
def make_site_fixture(tmp_path):
    """Write a custom site tree under tmp_path (same layout as site_root)."""
    return lambda **kwargs: write_site(tmp_path, **kwargs)
