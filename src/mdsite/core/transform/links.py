"""External link annotation"""

import re

from bs4 import BeautifulSoup

from mdsite.errors import MissingHrefError


EXTERNAL_RE = re.compile(r'^(?:https?:)?//', re.IGNORECASE)
EXTERNAL_REL = ("nofollow", "noopener", "noreferrer")


def is_external(href: str) -> bool:
    """True for http(s) and protocol-relative URLs."""
    return bool(EXTERNAL_RE.match(href))


def annotate_links(tree: BeautifulSoup) -> BeautifulSoup:
    """Open external links in a new tab with no-referrer hints; require href everywhere."""
    for link in tree.find_all("a"):
        href = (link.get("href") or "").strip()
        if not href:
            raise MissingHrefError(f"anchor without href: {str(link)[:80]!r}")
        if not is_external(href):
            continue
        link["target"] = "_blank"
        rel = list(link.get("rel") or [])
        rel.extend(token for token in EXTERNAL_REL if token not in rel)
        link["rel"] = rel
    return tree
