"""
PDF export endpoint.
"""

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from docx2email.models.template import PdfRenderRequest
from docx2email.services.pdf_renderer import PdfRenderError, render_pdf

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("/pdf")
async def generate_pdf(request: PdfRenderRequest):
    """Render a complete HTML document to an A4 PDF."""
    if not request.html:
        raise HTTPException(status_code=400, detail="No HTML content provided")

    logger.info(f"PDF request received: {len(request.html)} chars of HTML")

    try:
        pdf_bytes = await render_pdf(request.html)
    except PdfRenderError as exc:
        logger.error(f"PDF generation failed: {exc}")
        raise HTTPException(status_code=500, detail="PDF generation failed")

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="document.pdf"'},
    )
