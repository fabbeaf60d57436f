"""
Per-tag inline style policy for the responsive dialect.

Public API:
  font_rule(font_family) -> list[str]
  styles_for(tag_name, font_family, text_align=None) -> list[str]
"""

from typing import List, Optional

BODY_COLOR = "#333333"
BODY_FONT_SIZE = "11pt"
LINK_COLOR = "#0066cc"

HEADING_SIZES = {
    "h1": "24px",
    "h2": "20px",
    "h3": "16px",
}


def font_rule(font_family: str) -> List[str]:
    """Base typography applied to every text block."""
    return [
        f"font-family: {font_family}",
        f"font-size: {BODY_FONT_SIZE}",
        f"color: {BODY_COLOR}",
    ]


def styles_for(
    tag_name: str,
    font_family: str,
    text_align: Optional[str] = None,
) -> List[str]:
    """
    Return the declarations to inject for an element, in order.

    ``text_align`` is the element's own inline text-align; only ``div`` uses
    it (image wrappers written by the editor carry their alignment there).
    Unrecognized tags get an empty list.
    """
    tag = (tag_name or "").lower()

    if tag == "p":
        return font_rule(font_family) + ["text-align: justify", "padding: 10px 0", "margin: 0"]
    if tag in HEADING_SIZES:
        return font_rule(font_family) + [
            f"font-size: {HEADING_SIZES[tag]}",
            "font-weight: bold",
            "padding: 10px 0",
            "margin: 0",
        ]
    if tag in ("strong", "b"):
        return ["font-weight: bold"]
    if tag in ("em", "i"):
        return ["font-style: italic"]
    if tag == "u":
        return ["text-decoration: underline"]
    if tag == "a":
        return [f"color: {LINK_COLOR}", "text-decoration: underline"]
    if tag in ("ul", "ol"):
        return ["margin: 0", "padding: 0 0 0 20px"]
    if tag == "li":
        return font_rule(font_family) + ["padding: 5px 0", "margin: 0"]
    if tag == "img":
        return ["max-width: 100%", "height: auto", "display: block"]
    if tag == "div" and text_align:
        return [f"text-align: {text_align}", "margin: 10px 0"]
    return []
