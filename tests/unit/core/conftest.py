"""Shared fixtures for core unit tests"""

import pytest

from mdsite.core.parse import make_parser, parse_markdown


SAMPLE_MD = """\
---
description: A sample page
publish_date: "2024-02-03"
---

# Sample *Title*

A paragraph with a [link](https://example.com) and a [local one](/about).

Inline $x^2$ math and a note<fn>First note.</fn>.

$$
a + b
$$

```python
if a < b and c & d:
    pass
```

Closing words<fn>Second note with [a ref](https://ref.example).</fn>.
"""


@pytest.fixture(name="parser")
def parser_fixture():
    return make_parser()


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="parse")
def parse_fixture(parser):
    """Parse a markdown body into a tree with the default parser."""
    return lambda body: parse_markdown(body, parser)
