"""
Image references embedded in the content tree.

The editor stores an image as a wrapper <div> whose inline text-align carries
the alignment, with data-alignment / data-width mirrors, around an <img> whose
inline width (if any) carries the pixel width:

    <div style="margin: 10px 0; text-align: right" data-alignment="right" data-width="240">
      <img src="..." alt="Logo" style="height: auto; display: inline-block; width: 240px; max-width: 100%">
    </div>
"""

import html
import logging
import re
from typing import Optional

from bs4 import Tag

from docx2email.models.template import Alignment, ImageReference
from docx2email.services.html_tree import style_value

logger = logging.getLogger(__name__)

_PX_RE = re.compile(r"^\s*(\d+)(?:\.\d+)?\s*(?:px)?\s*$", re.IGNORECASE)


def _to_alignment(value: Optional[str]) -> Alignment:
    try:
        return Alignment((value or "").strip().lower())
    except ValueError:
        return Alignment.CENTER


def parse_pixels(value: Optional[str]) -> int:
    """
    Integer pixel count from "240px" / "240" / "240.5px"; 0 for anything
    else (percentages, auto, empty).
    """
    if not value:
        return 0
    match = _PX_RE.match(value)
    if not match:
        return 0
    return int(match.group(1))


def image_from_img(img: Tag) -> ImageReference:
    """Rebuild a reference from a bare <img> (pasted or imported content)."""
    return ImageReference(
        src=img.get("src") or "",
        alt=img.get("alt") or "Image",
        alignment=Alignment.CENTER,
        width=parse_pixels(img.get("width")),
    )


def image_from_container(container: Tag) -> Optional[ImageReference]:
    """
    Read the image held by a wrapper element, or None if it has no <img>.

    The wrapper decides alignment (inline text-align, then data-alignment);
    width comes from the image's inline style, then data-width, then the
    image's own width attribute.
    """
    img = container.find("img")
    if img is None:
        return None

    ref = image_from_img(img)
    alignment = style_value(container, "text-align") or container.get("data-alignment")
    width = parse_pixels(style_value(img, "width")) or parse_pixels(container.get("data-width"))

    return ref.model_copy(update={
        "alignment": _to_alignment(alignment),
        "width": width or ref.width,
    })


def render_image_block(ref: ImageReference) -> str:
    """Serialize a reference the way the editor stores it in the content."""
    align = ref.alignment.value
    img_style = ["height: auto", "display: inline-block"]
    if ref.width > 0:
        img_style.append(f"width: {ref.width}px")
    img_style.append("max-width: 100%")

    return (
        f'<div style="margin: 10px 0; text-align: {align}" '
        f'data-alignment="{align}" data-width="{ref.width}">'
        f'<img src="{html.escape(ref.src)}" alt="{html.escape(ref.alt)}" '
        f'style="{"; ".join(img_style)}" />'
        "</div>"
    )
