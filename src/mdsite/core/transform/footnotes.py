"""Inline <fn> footnote markers: numbered references plus a trailing note list"""

from bs4 import BeautifulSoup, Tag


FOOTNOTE_TAG = "fn"
FOOTNOTE_LIST_STYLE = "list-style-type: none; padding-left: 0;"


def footnote_id(ix: int) -> str:
    return f"fn-{ix}"


def footnote_link_id(ix: int) -> str:
    return f"fn_link-{ix}"


def _link(tree: BeautifulSoup, target: str, label: str) -> Tag:
    a = tree.new_tag("a", href=f"#{target}")
    a.string = label
    return a


def _reference(tree: BeautifulSoup, ix: int) -> Tag:
    """<sup id="fn_link-i"><a href="#fn-i">i+1</a></sup>"""
    sup = tree.new_tag("sup", id=footnote_link_id(ix))
    sup.append(_link(tree, footnote_id(ix), str(ix + 1)))
    return sup


def extract_footnotes(tree: BeautifulSoup) -> list[Tag]:
    """Swap each marker for its numbered reference; return the detached markers in document order.

    find_all walks the tree in pre-order, so a marker nested inside another one
    is numbered after it and its reference travels with the outer note.
    """
    notes = tree.find_all(FOOTNOTE_TAG)
    for ix, note in enumerate(notes):
        note.replace_with(_reference(tree, ix))
    return notes


def append_footnote_list(tree: BeautifulSoup, notes: list[Tag]) -> BeautifulSoup:
    """Append an <hr/> and the unstyled footnote list; no-op without notes."""
    if not notes:
        return tree

    items = tree.new_tag("ul", attrs={"class": ["footnotes"], "style": FOOTNOTE_LIST_STYLE})
    for ix, note in enumerate(notes):
        item = tree.new_tag("li", id=footnote_id(ix))
        para = tree.new_tag("p")
        backref = tree.new_tag("sup")
        backref.append(_link(tree, footnote_link_id(ix), f"{ix + 1}."))
        para.append(backref)
        para.append(" ")
        for child in list(note.contents):
            para.append(child)
        item.append(para)
        items.append("\n")
        items.append(item)
    items.append("\n")

    tree.append("\n")
    tree.append(tree.new_tag("hr"))
    tree.append("\n")
    tree.append(items)
    tree.append("\n")
    return tree


def render_footnotes(tree: BeautifulSoup) -> BeautifulSoup:
    """Run both footnote stages; numbering starts at 1 for every document."""
    return append_footnote_list(tree, extract_footnotes(tree))
