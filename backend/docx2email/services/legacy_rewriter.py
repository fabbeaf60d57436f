"""
Legacy-dialect pass for Word-engine mail clients (Outlook 2007-2019).

The Word rendering engine ignores several CSS properties unless they are
mirrored elsewhere:

* line heights collapse unless ``mso-line-height-rule: exactly`` is set;
* image sizing is taken from the ``width``/``height`` attributes, not CSS;
* block alignment is taken from the ``align`` attribute.

Hints are appended after the author's style. Block structure is left alone;
the assembler wraps the whole body in a single table cell.

Public API:
  legacy_hints_for(tag_name) -> list[str]
  promote_dimensions(img) -> None
  to_legacy(root) -> root
"""

import logging
import re
from typing import List

from bs4 import Tag

from docx2email.services.html_tree import append_style, parse_style, style_value, walk
from docx2email.services.style_policy import LINK_COLOR

logger = logging.getLogger(__name__)

_LINE_HEIGHT_EXACT = "mso-line-height-rule: exactly"

_PIXEL_RE = re.compile(r"^(\d+)(?:\.\d+)?px$", re.IGNORECASE)


def legacy_hints_for(tag_name: str) -> List[str]:
    """Legacy-engine declarations for a tag; empty for anything unlisted."""
    tag = (tag_name or "").lower()

    if tag == "p":
        return ["margin: 0 0 10px 0", _LINE_HEIGHT_EXACT, "line-height: 150%"]
    if tag in ("h1", "h2", "h3"):
        return ["margin: 0 0 10px 0", _LINE_HEIGHT_EXACT, "line-height: 120%"]
    if tag in ("ul", "ol"):
        return ["margin: 0 0 10px 25px", "padding: 0"]
    if tag == "li":
        return ["margin: 0 0 5px 0", _LINE_HEIGHT_EXACT, "line-height: 150%"]
    if tag == "a":
        return ["mso-style-priority: 99", f"color: {LINK_COLOR}", "text-decoration: underline"]
    if tag == "img":
        return ["border: 0", "outline: none", "text-decoration: none", "-ms-interpolation-mode: bicubic"]
    if tag == "table":
        return ["border-collapse: collapse", "mso-table-lspace: 0pt", "mso-table-rspace: 0pt"]
    if tag == "td":
        return [_LINE_HEIGHT_EXACT]
    return []


def promote_dimensions(img: Tag) -> None:
    """
    Copy inline pixel width/height onto the width/height attributes.

    Only exact ``width``/``height`` properties count (never max-width), the
    last declaration wins, fractions are truncated (attributes take whole
    pixels) and non-pixel values are left in CSS only.
    """
    sizes = {}
    for prop, value in parse_style(img.get("style")):
        if prop in ("width", "height"):
            sizes[prop] = value

    for prop, value in sizes.items():
        match = _PIXEL_RE.match(value)
        if match:
            img[prop] = match.group(1)
            logger.debug("promote_dimensions: %s=%s on <img>", prop, match.group(1))

    if not img.get("border"):
        img["border"] = "0"


def to_legacy(root: Tag) -> Tag:
    """Apply legacy hints and attribute promotion to every element of ``root``."""

    def _visit(el: Tag) -> None:
        tag = el.name.lower()
        append_style(el, legacy_hints_for(tag))
        if tag == "img":
            promote_dimensions(el)
        elif tag == "div":
            align = style_value(el, "text-align")
            if align:
                el["align"] = align

    walk(root, _visit)
    return root
