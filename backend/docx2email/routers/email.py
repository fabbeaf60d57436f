"""
Email template endpoints: HTML export and header/footer image payloads.
"""

import logging
from urllib.parse import quote

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import Response

from docx2email.config import FONT_OPTIONS, MAX_UPLOAD_BYTES, MAX_WIDTH, MIN_WIDTH
from docx2email.models.template import EmailExportRequest, ImagePayloadResponse
from docx2email.services.email_document import assemble, export_filename
from docx2email.services.image_payload import ImagePayloadError, image_to_data_uri

router = APIRouter()

logger = logging.getLogger(__name__)


def _attachment_header(filename: str) -> str:
    # Header values are latin-1; non-ASCII names go in the RFC 5987 form
    if filename.isascii():
        return f'attachment; filename="{filename}"'
    return f"attachment; filename*=UTF-8''{quote(filename)}"


@router.get("/options")
async def template_options():
    """Width bounds and font choices offered by the editor."""
    return {
        "min_width": MIN_WIDTH,
        "max_width": MAX_WIDTH,
        "fonts": FONT_OPTIONS,
    }


@router.post("/export")
async def export_email(request: EmailExportRequest):
    """
    Build the full email document and return it as a downloadable .html file.

    The file is named after the imported document; Outlook exports get an
    "-outlook" suffix so both variants can sit side by side.
    """
    config = request.to_config()
    document = assemble(config, request.body_html)
    filename = export_filename(request.file_name, config.legacy_mode)

    logger.info(
        f"Exported {filename!r}: legacy={config.legacy_mode}, "
        f"width={config.max_width}, {len(document)} chars"
    )

    return Response(
        content=document,
        media_type="text/html; charset=utf-8",
        headers={"Content-Disposition": _attachment_header(filename)},
    )


@router.post("/images", response_model=ImagePayloadResponse)
async def upload_image(file: UploadFile = File(...)):
    """Turn an uploaded header/footer image into a data URI."""
    content_type = (file.content_type or "").lower()
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Please upload a valid image file")

    content = await file.read()
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=400, detail="File too large")

    try:
        data_uri = image_to_data_uri(content, content_type)
    except ImagePayloadError as exc:
        logger.error(f"Image upload rejected ({file.filename!r}): {exc}")
        raise HTTPException(status_code=422, detail="Failed to load image.")

    return ImagePayloadResponse(data_uri=data_uri)
