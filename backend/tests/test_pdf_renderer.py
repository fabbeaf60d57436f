"""
PDF renderer tests.

Playwright is mocked throughout: no browser is launched.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from playwright.async_api import Error as PlaywrightError

from docx2email.services.pdf_renderer import PdfRenderError, render_pdf


def _mock_playwright(page=None, launch_error=None):
    """
    Build an async_playwright() replacement.

    Returns (factory, browser) so tests can assert on browser.close.
    """
    if page is None:
        page = MagicMock()
        page.set_content = AsyncMock()
        page.emulate_media = AsyncMock()
        page.pdf = AsyncMock(return_value=b"%PDF-1.4 test")

    browser = MagicMock()
    browser.new_page = AsyncMock(return_value=page)
    browser.close = AsyncMock()

    p = MagicMock()
    if launch_error is not None:
        p.chromium.launch = AsyncMock(side_effect=launch_error)
    else:
        p.chromium.launch = AsyncMock(return_value=browser)

    manager = MagicMock()
    manager.__aenter__ = AsyncMock(return_value=p)
    manager.__aexit__ = AsyncMock(return_value=False)

    return MagicMock(return_value=manager), browser, page


class TestRenderPdf:
    """render_pdf() drives one browser per call and always closes it."""

    @pytest.mark.asyncio
    async def test_returns_pdf_bytes(self):
        factory, browser, page = _mock_playwright()

        with patch("docx2email.services.pdf_renderer.async_playwright", factory):
            result = await render_pdf("<p>Hi</p>")

        assert result == b"%PDF-1.4 test"
        page.set_content.assert_awaited_once()
        assert page.set_content.await_args.kwargs["wait_until"] == "networkidle"
        page.pdf.assert_awaited_once_with(format="A4", print_background=True)
        browser.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_browser_launched_without_sandbox(self):
        factory, browser, _ = _mock_playwright()

        with patch("docx2email.services.pdf_renderer.async_playwright", factory):
            await render_pdf("<p>Hi</p>")

        p = factory.return_value.__aenter__.return_value
        args = p.chromium.launch.await_args.kwargs["args"]
        assert "--no-sandbox" in args
        assert "--disable-setuid-sandbox" in args

    @pytest.mark.asyncio
    async def test_browser_closed_when_page_load_fails(self):
        page = MagicMock()
        page.set_content = AsyncMock(side_effect=PlaywrightError("Timeout 30000ms exceeded"))
        page.emulate_media = AsyncMock()
        page.pdf = AsyncMock()
        factory, browser, _ = _mock_playwright(page=page)

        with patch("docx2email.services.pdf_renderer.async_playwright", factory):
            with pytest.raises(PdfRenderError):
                await render_pdf("<p>Hi</p>")

        browser.close.assert_awaited_once()
        page.pdf.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_browser_closed_when_print_fails(self):
        page = MagicMock()
        page.set_content = AsyncMock()
        page.emulate_media = AsyncMock()
        page.pdf = AsyncMock(side_effect=PlaywrightError("Target closed"))
        factory, browser, _ = _mock_playwright(page=page)

        with patch("docx2email.services.pdf_renderer.async_playwright", factory):
            with pytest.raises(PdfRenderError):
                await render_pdf("<p>Hi</p>")

        browser.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_launch_failure(self):
        factory, browser, _ = _mock_playwright(launch_error=PlaywrightError("Executable doesn't exist"))

        with patch("docx2email.services.pdf_renderer.async_playwright", factory):
            with pytest.raises(PdfRenderError) as exc_info:
                await render_pdf("<p>Hi</p>")

        assert str(exc_info.value) == "render failed"
        browser.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_close_failure_after_render_failure(self):
        """The render error is reported, not the close error."""
        page = MagicMock()
        page.set_content = AsyncMock(side_effect=PlaywrightError("Timeout 30000ms exceeded"))
        page.emulate_media = AsyncMock()
        page.pdf = AsyncMock()
        factory, browser, _ = _mock_playwright(page=page)
        browser.close = AsyncMock(side_effect=PlaywrightError("Browser has been closed"))

        with patch("docx2email.services.pdf_renderer.async_playwright", factory):
            with pytest.raises(PdfRenderError) as exc_info:
                await render_pdf("<p>Hi</p>")

        assert "Timeout" in str(exc_info.value.__cause__)
        browser.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_failure_after_success(self):
        """A PDF that was produced is still returned."""
        factory, browser, _ = _mock_playwright()
        browser.close = AsyncMock(side_effect=PlaywrightError("Browser has been closed"))

        with patch("docx2email.services.pdf_renderer.async_playwright", factory):
            result = await render_pdf("<p>Hi</p>")

        assert result == b"%PDF-1.4 test"
        browser.close.assert_awaited_once()
