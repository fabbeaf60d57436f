"""
Email document assembly.

Turns an editor body fragment plus template settings into a complete,
standalone HTML email in one of two dialects:

  responsive  <div> layout with a <style> block; body inline-styled and
              reshaped into presentation-table rows
  legacy      nested presentation tables for the Word rendering engine
              (Outlook 2007-2019), MSO conditional comments and VML
              fallbacks for the header/footer images

Everything here is a pure function of its inputs: the same body and config
always produce the same bytes.

Public API:
  assemble(config, body_markup) -> str
  generate_full_email_html(body_html, header_image, footer_image,
                           legacy_mode, max_width, font_family) -> str
  export_filename(source_name, legacy_mode) -> str
"""

import html
import logging
from pathlib import PurePath
from typing import Optional

from docx2email.config import DEFAULT_FONT_FAMILY, DEFAULT_MAX_WIDTH
from docx2email.models.template import EmailTemplateConfig
from docx2email.services.html_tree import parse, serialize
from docx2email.services.inline_styles import inline_styles
from docx2email.services.legacy_rewriter import to_legacy
from docx2email.services.style_policy import BODY_COLOR
from docx2email.services.table_rows import to_rows

logger = logging.getLogger(__name__)

LEGACY_FILENAME_SUFFIX = "-outlook"
DEFAULT_EXPORT_STEM = "email-template"


# ---------------------------------------------------------------------------
# Responsive dialect
# ---------------------------------------------------------------------------

def _responsive_image(src: str, max_width: int, alt: str, css_class: str) -> str:
    return f"""
    <div class="{css_class}">
        <img src="{html.escape(src)}" width="{max_width}" alt="{alt}"
            style="display: block; width: 100%; max-width: {max_width}px; height: auto;">
    </div>"""


def render_responsive_document(config: EmailTemplateConfig, rows: str) -> str:
    """Wrap pre-rendered body rows in the <div>/<style> document."""
    w = config.max_width
    ff = config.font_family

    header_html = (
        _responsive_image(config.header_image, w, "Header", "email-header")
        if config.header_image else ""
    )
    footer_html = (
        _responsive_image(config.footer_image, w, "Footer", "email-footer")
        if config.footer_image else ""
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Email</title>
<style>
    body {{ margin: 0; padding: 0; background-color: #ffffff; font-family: {ff}; }}
    .email-container {{ max-width: {w}px; margin: 0 auto; background-color: #ffffff; }}
    .email-header img, .email-footer img {{ display: block; width: 100%; max-width: {w}px; height: auto; }}
    .email-content {{ font-family: {ff}; font-size: 11pt; line-height: 1.5; color: {BODY_COLOR}; }}
    .email-content img {{ max-width: 100%; height: auto; }}
    @media only screen and (max-width: {w}px) {{
        .email-container {{ width: 100% !important; }}
    }}
</style>
</head>
<body>
<div class="email-container">{header_html}
    <div class="email-content">
        <table role="presentation" width="100%" cellpadding="0" cellspacing="0" border="0"
            style="max-width: {w}px;">{rows}
        </table>
    </div>{footer_html}
</div>
</body>
</html>"""


# ---------------------------------------------------------------------------
# Legacy dialect
# ---------------------------------------------------------------------------

def _legacy_image_row(src: str, max_width: int, alt: str) -> str:
    """
    One image row. The Word engine gets a VML frame fill behind the <img>
    so background-style header artwork still shows when it drops the image.
    """
    src = html.escape(src)
    return f"""
<!-- {alt} Image -->
<tr>
<td width="{max_width}" style="margin: 0; padding: 0;">
<!--[if gte mso 9]>
<v:rect xmlns:v="urn:schemas-microsoft-com:vml" fill="true" stroke="false" style="width:{max_width}px;">
<v:fill type="frame" src="{src}" color="#ffffff" />
<v:textbox inset="0,0,0,0">
<![endif]-->
<img src="{src}" width="{max_width}" alt="{alt}" border="0"
    style="display: block; width: 100%; max-width: {max_width}px; height: auto; border: 0; outline: none; text-decoration: none;" />
<!--[if gte mso 9]>
</v:textbox>
</v:rect>
<![endif]-->
</td>
</tr>"""


def render_legacy_document(config: EmailTemplateConfig, body: str) -> str:
    """Wrap a legacy-rewritten body in the table/MSO document scaffold."""
    w = config.max_width
    ff = config.font_family

    header_row = _legacy_image_row(config.header_image, w, "Header") if config.header_image else ""
    footer_row = _legacy_image_row(config.footer_image, w, "Footer") if config.footer_image else ""

    return f"""<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN" "http://www.w3.org/TR/xhtml1/DTD/xhtml1-transitional.dtd">
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:v="urn:schemas-microsoft-com:vml" xmlns:o="urn:schemas-microsoft-com:office:office">
<head>
<meta http-equiv="Content-Type" content="text/html; charset=UTF-8" />
<meta name="viewport" content="width=device-width, initial-scale=1.0" />
<meta http-equiv="X-UA-Compatible" content="IE=edge" />
<title>Email</title>
<!--[if gte mso 9]>
<xml>
<o:OfficeDocumentSettings>
<o:AllowPNG/>
<o:PixelsPerInch>96</o:PixelsPerInch>
</o:OfficeDocumentSettings>
</xml>
<![endif]-->
<!--[if mso]>
<style type="text/css">
body, table, td, p, a, li, h1, h2, h3 {{ font-family: {ff} !important; }}
table {{ border-collapse: collapse; mso-table-lspace: 0pt; mso-table-rspace: 0pt; }}
img {{ -ms-interpolation-mode: bicubic; }}
</style>
<![endif]-->
<!--[if !mso]><!-->
<style type="text/css">
body {{ margin: 0; padding: 0; -webkit-text-size-adjust: 100%; -ms-text-size-adjust: 100%; }}
img {{ border: 0; outline: none; text-decoration: none; max-width: 100%; height: auto; }}
.email-inner {{ width: 100% !important; max-width: {w}px !important; }}
</style>
<!--<![endif]-->
</head>
<body style="margin: 0; padding: 0; background-color: #ffffff;">
<table role="presentation" width="100%" cellpadding="0" cellspacing="0" border="0" style="background-color: #ffffff;">
<tr>
<td align="center" style="padding: 0;">
<!--[if mso]>
<table role="presentation" width="{w}" align="center" cellpadding="0" cellspacing="0" border="0">
<tr>
<td>
<![endif]-->
<table role="presentation" class="email-inner" width="100%" cellpadding="0" cellspacing="0" border="0"
    style="max-width: {w}px; margin: 0 auto;">{header_row}
<!-- Content -->
<tr>
<td style="font-family: {ff}; font-size: 11pt; color: {BODY_COLOR}; padding: 10px 0;">
{body}
</td>
</tr>{footer_row}
</table>
<!--[if mso]>
</td>
</tr>
</table>
<![endif]-->
</td>
</tr>
</table>
</body>
</html>"""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def assemble(config: EmailTemplateConfig, body_markup: str) -> str:
    """
    Build the full email document for ``config`` from the editor body.

    Responsive: inline styles, then one table row per top-level block.
    Legacy: legacy hints + attribute promotion, body kept block-structured.
    """
    tree = parse(body_markup)

    if config.legacy_mode:
        body = serialize(to_legacy(tree))
        document = render_legacy_document(config, body)
    else:
        styled = inline_styles(tree, config.font_family)
        rows = to_rows(styled, config.font_family)
        document = render_responsive_document(config, rows)

    logger.debug(
        "assemble: dialect=%s width=%d header=%s footer=%s -> %d chars",
        "legacy" if config.legacy_mode else "responsive",
        config.max_width,
        bool(config.header_image),
        bool(config.footer_image),
        len(document),
    )
    return document


def generate_full_email_html(
    body_html: str,
    header_image: Optional[str] = None,
    footer_image: Optional[str] = None,
    legacy_mode: bool = False,
    max_width: int = DEFAULT_MAX_WIDTH,
    font_family: str = DEFAULT_FONT_FAMILY,
) -> str:
    """
    Produce a complete email HTML document.

    Args:
        body_html: Editor content fragment.
        header_image: Data URI or URL shown above the body, or None.
        footer_image: Data URI or URL shown below the body, or None.
        legacy_mode: True for the Outlook (Word engine) table dialect.
        max_width: Content width in pixels. Not validated here; callers clamp.
        font_family: CSS font-family value, used as-is.

    Returns:
        The full document as a string.
    """
    config = EmailTemplateConfig(
        max_width=max_width,
        font_family=font_family,
        legacy_mode=legacy_mode,
        header_image=header_image or None,
        footer_image=footer_image or None,
    )
    return assemble(config, body_html)


def export_filename(source_name: Optional[str], legacy_mode: bool) -> str:
    """
    File name for an exported document.

        export_filename("Newsletter.docx", False) -> "Newsletter.html"
        export_filename("Newsletter.docx", True)  -> "Newsletter-outlook.html"
        export_filename(None, True)               -> "email-template-outlook.html"
    """
    suffix = LEGACY_FILENAME_SUFFIX if legacy_mode else ""
    name = PurePath(source_name).name if source_name else ""
    if name.lower().endswith(".docx"):
        stem = name[: -len(".docx")]
    else:
        stem = PurePath(name).stem if name else ""
    return f"{stem or DEFAULT_EXPORT_STEM}{suffix}.html"
