"""
HTML fragment tree helpers.

Parses user-authored fragments into a mutable BeautifulSoup tree and provides
the traversal, serialization and inline-style utilities shared by the
transpiler passes.

Style attribute model
---------------------
An element's ``style`` attribute is an ordered, ``;``-delimited list of
``property: value`` declarations. Duplicate properties are allowed and kept:
the rendering engine applies the last declaration for a property, so merge
helpers only ever add declarations in front of (``prepend_style``) or behind
(``append_style``) the author's own text. Nothing is deduplicated.
"""

import logging
from typing import Callable, List, Optional, Tuple

from bs4 import BeautifulSoup, NavigableString, ParserRejectedMarkup, Tag

logger = logging.getLogger(__name__)

# html.parser ships with the stdlib and is the most permissive builder for
# arbitrary fragments (no implicit <html>/<body> wrapping).
_PARSER = "html.parser"


# ---------------------------------------------------------------------------
# Parsing and serialization
# ---------------------------------------------------------------------------

def parse(fragment: Optional[str]) -> BeautifulSoup:
    """
    Parse an HTML fragment into a tree. Never raises.

    Unknown tags are kept as plain containers and stray text stays as text
    nodes. Markup the parser rejects outright is kept as a single text node.
    """
    fragment = fragment or ""
    try:
        # Keep class/rel as plain strings so attributes round-trip untouched
        return BeautifulSoup(fragment, _PARSER, multi_valued_attributes=None)
    except ParserRejectedMarkup as exc:
        logger.warning("Parser rejected fragment, keeping it as text: %s", exc)
        soup = BeautifulSoup("", _PARSER, multi_valued_attributes=None)
        soup.append(NavigableString(fragment))
        return soup


def serialize(root: Tag) -> str:
    """Render a parsed tree (or any subtree's children) back to markup."""
    return root.decode_contents()


def inner_html(tag: Tag) -> str:
    return tag.decode_contents()


def outer_html(tag: Tag) -> str:
    return str(tag)


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

def walk(node: Tag, visit: Callable[[Tag], None]) -> None:
    """
    Call ``visit`` on ``node`` and every descendant element, parent first.

    The element list is snapshotted before the first visit, so ``visit`` may
    rewrite attributes or styles without affecting which elements get
    visited. Text nodes are skipped. Iterative, so nesting depth is not
    limited by the interpreter stack.
    """
    for el in [node] + list(node.find_all(True)):
        visit(el)


def iter_elements(root: Tag) -> List[Tag]:
    """Every element below ``root`` in document (pre-)order."""
    return list(root.find_all(True))


def element_tags(root: Tag) -> List[str]:
    """Tag-name sequence of all elements under ``root``, pre-order."""
    return [el.name for el in iter_elements(root)]


def top_level_nodes(root: Tag) -> List[object]:
    """
    Immediate children of ``root`` that carry content: elements plus
    non-blank text. Whitespace between blocks is not content.
    """
    nodes = []
    for child in root.children:
        if isinstance(child, Tag):
            nodes.append(child)
        elif isinstance(child, NavigableString) and child.strip():
            # Comments, doctypes etc. are NavigableString subclasses too
            if type(child) is NavigableString:
                nodes.append(child)
    return nodes


# ---------------------------------------------------------------------------
# Inline style helpers
# ---------------------------------------------------------------------------

def parse_style(value: Optional[str]) -> List[Tuple[str, str]]:
    """
    Split a style attribute into (property, value) pairs, in order.

    Property names are lower-cased; empty or malformed fragments are dropped.

        >>> parse_style("color:red; Width: 300px;;")
        [('color', 'red'), ('width', '300px')]
    """
    declarations: List[Tuple[str, str]] = []
    if not value:
        return declarations
    for part in value.split(";"):
        prop, sep, val = part.partition(":")
        prop = prop.strip().lower()
        val = val.strip()
        if not sep or not prop:
            continue
        declarations.append((prop, val))
    return declarations


def style_value(tag: Tag, prop: str) -> Optional[str]:
    """Effective value of ``prop`` in the tag's inline style (last one wins)."""
    found = None
    for name, val in parse_style(tag.get("style")):
        if name == prop:
            found = val
    return found or None


def _existing_style(tag: Tag) -> str:
    return (tag.get("style") or "").strip().rstrip(";").strip()


def prepend_style(tag: Tag, declarations: List[str]) -> None:
    """Put ``declarations`` in front of the author's style (author wins)."""
    if not declarations:
        return
    computed = "; ".join(declarations)
    existing = _existing_style(tag)
    tag["style"] = f"{computed}; {existing}" if existing else computed


def append_style(tag: Tag, declarations: List[str]) -> None:
    """Put ``declarations`` after the author's style (declarations win)."""
    if not declarations:
        return
    added = "; ".join(declarations)
    existing = _existing_style(tag)
    tag["style"] = f"{existing}; {added}" if existing else added
