"""
.docx to HTML import.

Produces the semantic fragment the editor works with: headings, paragraphs,
bold/italic/underline runs, hyperlinks, bulleted and numbered lists, simple
tables and embedded pictures (as data URIs). Anything not understood is
flattened to paragraphs and reported in ``messages``, the same way the
editor surfaces converter warnings to the user.

Public API:
  convert_docx_to_html(content: bytes) -> ConversionResult
"""

import html
import io
import logging
from typing import List, Optional, Tuple

from docx import Document
from docx.drawing import Drawing
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.table import Table
from docx.text.hyperlink import Hyperlink
from docx.text.paragraph import Paragraph
from docx.text.run import Run

from docx2email.models.template import ConversionResult, ImageReference
from docx2email.services.image_payload import to_data_uri
from docx2email.services.images import render_image_block

logger = logging.getLogger(__name__)

_EMU_PER_PIXEL = 9525

_HEADING_STYLES = {
    "title": "h1",
    "heading 1": "h1",
    "heading 2": "h2",
    "heading 3": "h3",
    "heading 4": "h4",
    "heading 5": "h5",
    "heading 6": "h6",
}

_PLAIN_STYLES = {"normal", "body text", "default paragraph font", "no spacing", "list paragraph"}


class DocxConversionError(RuntimeError):
    """The upload could not be read as a Word document."""

    def __init__(self, message: str = "Conversion failed"):
        super().__init__(message)


# ---------------------------------------------------------------------------
# Inline content
# ---------------------------------------------------------------------------

def _run_text(text: str) -> str:
    escaped = html.escape(text, quote=False)
    return escaped.replace("\t", " ").replace("\n", "<br />")


def _drawing_image(drawing: Drawing, messages: List[str]) -> Optional[ImageReference]:
    if not drawing.has_picture:
        messages.append("Skipped a drawing that is not an embedded picture")
        return None
    try:
        image = drawing.image
    except (KeyError, ValueError) as exc:
        messages.append(f"Could not read embedded image: {exc}")
        return None

    element = drawing._element
    alt = (element.xpath(".//wp:docPr/@descr") or ["Image"])[0] or "Image"
    extents = element.xpath(".//wp:extent/@cx")
    width = int(int(extents[0]) / _EMU_PER_PIXEL) if extents else 0

    return ImageReference(
        src=to_data_uri(image.blob, image.content_type),
        alt=alt,
        width=width,
    )


def _inline_img(ref: ImageReference) -> str:
    width_attr = f' width="{ref.width}"' if ref.width else ""
    return f'<img src="{ref.src}" alt="{html.escape(ref.alt)}"{width_attr} />'


def _run_html(run: Run, messages: List[str], images: List[ImageReference]) -> str:
    parts = []
    for item in run.iter_inner_content():
        if isinstance(item, str):
            parts.append(_run_text(item))
        elif isinstance(item, Drawing):
            ref = _drawing_image(item, messages)
            if ref is not None:
                images.append(ref)
                parts.append(_inline_img(ref))
    text = "".join(parts)
    if not text:
        return ""

    # Innermost first so the nesting reads <strong><em><u>text</u></em></strong>
    if run.underline:
        text = f"<u>{text}</u>"
    if run.italic:
        text = f"<em>{text}</em>"
    if run.bold:
        text = f"<strong>{text}</strong>"
    return text


def _paragraph_inner(paragraph: Paragraph, messages: List[str]) -> Tuple[str, List[ImageReference]]:
    """Inline HTML of a paragraph plus the pictures found in it."""
    images: List[ImageReference] = []
    parts = []
    for item in paragraph.iter_inner_content():
        if isinstance(item, Hyperlink):
            inner = "".join(_run_html(r, messages, images) for r in item.runs)
            if item.url:
                parts.append(f'<a href="{html.escape(item.url)}">{inner}</a>')
            else:
                parts.append(inner)
        else:
            parts.append(_run_html(item, messages, images))
    return "".join(parts), images


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

def _numbering_root(document):
    try:
        return document.part.part_related_by(RT.NUMBERING).element
    except KeyError:
        return None


def _list_info(paragraph: Paragraph, numbering) -> Optional[Tuple[str, int]]:
    """
    Return (list tag, nesting level) for a list paragraph, else None.

    Direct numbering (w:numPr) is resolved against numbering.xml; the
    built-in "List Bullet"/"List Number" styles are recognized by name.
    """
    style_name = (paragraph.style.name if paragraph.style is not None else "") or ""
    lowered = style_name.lower()

    p_pr = paragraph._p.pPr
    num_pr = p_pr.numPr if p_pr is not None else None
    if num_pr is not None and num_pr.numId is not None and num_pr.numId.val:
        level = num_pr.ilvl.val if num_pr.ilvl is not None else 0
        tag = "ul"
        if numbering is not None:
            abstract_ids = numbering.xpath(
                f'./w:num[@w:numId="{num_pr.numId.val}"]/w:abstractNumId/@w:val'
            )
            if abstract_ids:
                formats = numbering.xpath(
                    f'./w:abstractNum[@w:abstractNumId="{abstract_ids[0]}"]'
                    f'/w:lvl[@w:ilvl="{level}"]/w:numFmt/@w:val'
                )
                if formats and formats[0] not in ("bullet", "none"):
                    tag = "ol"
        return tag, level

    if lowered.startswith("list bullet"):
        return "ul", 0
    if lowered.startswith("list number"):
        return "ol", 0
    return None


class _ListBuilder:
    """Turns a run of list paragraphs into nested <ul>/<ol> markup."""

    def __init__(self):
        self.parts: List[str] = []
        self.stack: List[str] = []

    @property
    def open(self) -> bool:
        return bool(self.stack)

    def add(self, tag: str, level: int, inner: str) -> None:
        depth = level + 1
        while len(self.stack) > depth:
            self.parts.append(f"</li></{self.stack.pop()}>")
        if len(self.stack) == depth and self.stack[-1] != tag:
            self.parts.append(f"</li></{self.stack.pop()}>")
        if len(self.stack) == depth:
            self.parts.append("</li>")
        while len(self.stack) < depth:
            self.stack.append(tag)
            self.parts.append(f"<{tag}>")
        self.parts.append(f"<li>{inner}")

    def close(self) -> str:
        while self.stack:
            self.parts.append(f"</li></{self.stack.pop()}>")
        markup = "".join(self.parts)
        self.parts = []
        return markup


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

def _table_html(table: Table, messages: List[str]) -> str:
    rows = []
    for row in table.rows:
        cells = []
        for cell in row.cells:
            blocks = []
            for paragraph in cell.paragraphs:
                inner, _ = _paragraph_inner(paragraph, messages)
                if inner.strip():
                    blocks.append(f"<p>{inner}</p>")
            cells.append(f"<td>{''.join(blocks)}</td>")
        rows.append(f"<tr>{''.join(cells)}</tr>")
    return f"<table>{''.join(rows)}</table>"


def _paragraph_block(paragraph: Paragraph, messages: List[str], unknown_styles: set) -> str:
    inner, images = _paragraph_inner(paragraph, messages)
    if not inner.strip():
        return ""

    # A paragraph holding nothing but pictures becomes editor image blocks
    text_only = paragraph.text.strip()
    if images and not text_only:
        return "".join(render_image_block(ref) for ref in images)

    style = paragraph.style
    style_name = (style.name if style is not None else "") or ""
    tag = _HEADING_STYLES.get(style_name.lower())
    if tag:
        return f"<{tag}>{inner}</{tag}>"

    if style_name and style_name.lower() not in _PLAIN_STYLES and style_name not in unknown_styles:
        unknown_styles.add(style_name)
        messages.append(
            f"Unrecognised paragraph style: '{style_name}' (Style ID: {style.style_id})"
        )
    return f"<p>{inner}</p>"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def convert_docx_to_html(content: bytes) -> ConversionResult:
    """
    Convert .docx bytes into an HTML fragment plus diagnostic messages.

    Raises:
        DocxConversionError: the bytes are not a readable Word document. No
            partial output is returned.
    """
    try:
        document = Document(io.BytesIO(content))
    except Exception as exc:
        logger.error("Failed to open .docx upload: %s", exc)
        raise DocxConversionError() from exc

    messages: List[str] = []
    unknown_styles: set = set()
    numbering = _numbering_root(document)
    blocks: List[str] = []
    lists = _ListBuilder()

    try:
        for item in document.iter_inner_content():
            if isinstance(item, Paragraph):
                info = _list_info(item, numbering)
                if info is not None:
                    inner, _ = _paragraph_inner(item, messages)
                    lists.add(info[0], info[1], inner)
                    continue
                if lists.open:
                    blocks.append(lists.close())
                block = _paragraph_block(item, messages, unknown_styles)
                if block:
                    blocks.append(block)
            else:
                if lists.open:
                    blocks.append(lists.close())
                blocks.append(_table_html(item, messages))
        if lists.open:
            blocks.append(lists.close())
    except Exception as exc:
        logger.error("Failed to convert .docx body: %s", exc)
        raise DocxConversionError() from exc

    logger.info("Converted .docx: %d blocks, %d messages", len(blocks), len(messages))
    return ConversionResult(html="".join(blocks), messages=messages)
