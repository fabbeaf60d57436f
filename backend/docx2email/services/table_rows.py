"""
Top-level block reshaping into presentation-table rows.

Each content-bearing child of the root becomes exactly one
<tr><td style="...">...</td></tr>, in document order. Nothing is dropped:
unrecognized tags and stray top-level text fall back to the generic row.

Public API:
  to_rows(root, font_family) -> str
"""

import html
import logging
from typing import Tuple

from bs4 import Tag

from docx2email.models.template import ImageReference
from docx2email.services.html_tree import inner_html, outer_html, top_level_nodes
from docx2email.services.images import image_from_container
from docx2email.services.style_policy import BODY_COLOR, HEADING_SIZES

logger = logging.getLogger(__name__)

_ROW_IMAGE_STYLE = "display: block; max-width: 100%; height: auto;"


def _generic_cell_style(font_family: str) -> str:
    return (
        f"font-family: {font_family}; font-size: 11pt; color: {BODY_COLOR}; "
        "text-align: justify; padding: 10px 0;"
    )


def _heading_cell_style(font_family: str, size: str) -> str:
    return (
        f"font-family: {font_family}; font-size: {size}; font-weight: bold; "
        f"color: {BODY_COLOR}; padding: 10px 0;"
    )


def _list_cell_style(font_family: str) -> str:
    return f"font-family: {font_family}; font-size: 11pt; color: {BODY_COLOR}; padding: 5px 0 5px 20px;"


def _row_image(ref: ImageReference) -> str:
    width_attr = f' width="{ref.width}"' if ref.width else ""
    return (
        f'<img src="{html.escape(ref.src)}"{width_attr} '
        f'style="{_ROW_IMAGE_STYLE}" alt="{html.escape(ref.alt)}" />'
    )


def _cell_for(node, font_family: str) -> Tuple[str, str]:
    """Return (cell style, cell content) for one top-level node."""
    if not isinstance(node, Tag):
        # Stray text directly under the root
        return _generic_cell_style(font_family), html.escape(str(node), quote=False)

    tag = node.name.lower()

    if tag in HEADING_SIZES:
        return (
            _heading_cell_style(font_family, HEADING_SIZES[tag]),
            f"<strong>{inner_html(node)}</strong>",
        )

    if tag in ("ul", "ol"):
        return _list_cell_style(font_family), outer_html(node)

    if tag == "div":
        ref = image_from_container(node)
        if ref is not None:
            return f"padding: 10px 0; text-align: {ref.alignment.value};", _row_image(ref)

    return _generic_cell_style(font_family), outer_html(node)


def to_rows(root: Tag, font_family: str) -> str:
    """Render every top-level child of ``root`` as one table row."""
    rows = []
    for node in top_level_nodes(root):
        cell_style, content = _cell_for(node, font_family)
        rows.append(
            "\n<tr>"
            f'\n    <td style="{cell_style}">'
            f"\n        {content}"
            "\n    </td>"
            "\n</tr>"
        )

    logger.debug("to_rows: emitted %d rows", len(rows))
    return "".join(rows)
