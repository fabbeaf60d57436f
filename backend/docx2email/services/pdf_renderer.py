"""
HTML -> PDF rendering with headless Chromium (Playwright).

A browser is launched per request and always closed, whether rendering
succeeds or not. Rendering is print-media A4 with backgrounds, which is what
the editor's "Export PDF" preview expects.
"""

import logging

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from docx2email.config import PDF_RENDER_TIMEOUT_MS

logger = logging.getLogger(__name__)

_BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class PdfRenderError(RuntimeError):
    """The headless browser could not produce a PDF."""

    def __init__(self, message: str = "render failed"):
        super().__init__(message)


async def render_pdf(html: str) -> bytes:
    """
    Render a complete HTML document to PDF bytes.

    Raises:
        PdfRenderError: browser launch, page load or print failed.
    """
    async with async_playwright() as p:
        browser = None
        try:
            browser = await p.chromium.launch(headless=True, args=_BROWSER_ARGS)
            page = await browser.new_page()
            await page.set_content(html, wait_until="networkidle", timeout=PDF_RENDER_TIMEOUT_MS)
            await page.emulate_media(media="print")
            pdf_bytes = await page.pdf(format="A4", print_background=True)
        except PlaywrightError as exc:
            logger.error("PDF render failed: %s", exc)
            raise PdfRenderError() from exc
        finally:
            if browser is not None:
                try:
                    await browser.close()
                except PlaywrightError as exc:
                    # Must not mask the render outcome
                    logger.warning("Browser close failed: %s", exc)

    logger.info("Rendered PDF: %d bytes", len(pdf_bytes))
    return pdf_bytes
