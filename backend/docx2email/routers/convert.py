"""
Document import endpoint.
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, File, HTTPException, UploadFile

from docx2email.config import MAX_UPLOAD_BYTES
from docx2email.models.template import ConversionResult
from docx2email.services.docx_import import DocxConversionError, convert_docx_to_html

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("/convert", response_model=ConversionResult)
async def convert_document(file: Optional[UploadFile] = File(None)):
    """
    Upload a Word document and get back editor HTML plus converter messages.

    Only .docx is accepted (the legacy binary .doc format is not readable).
    """
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    logger.info(
        f"Convert request received: filename={file.filename!r}, "
        f"content_type={file.content_type!r}"
    )

    if not (file.filename or "").lower().endswith(".docx"):
        raise HTTPException(status_code=400, detail="Please upload a valid .docx file")

    content = await file.read()
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=400, detail="File too large")

    try:
        # python-docx is synchronous; keep the event loop free
        result = await asyncio.to_thread(convert_docx_to_html, content)
    except DocxConversionError as exc:
        logger.error(f"Conversion failed for {file.filename!r}: {exc}")
        raise HTTPException(status_code=500, detail="Conversion failed")

    logger.info(f"Converted {file.filename!r}: {len(result.messages)} message(s)")
    return result
