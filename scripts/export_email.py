#!/usr/bin/env python3
"""
Export a Word document as an email-ready HTML file, without the web UI.

Converts the .docx with the same import the editor uses, optionally adds
header/footer images, and writes the full email document next to the input
(or into --out-dir). Converter messages are logged as warnings.

Usage
-----
# Responsive email, 600px wide, Arial
python scripts/export_email.py newsletter.docx

# Outlook (Word engine) variant -> newsletter-outlook.html
python scripts/export_email.py newsletter.docx --outlook

# Branded header/footer, wider layout, different font
python scripts/export_email.py newsletter.docx --header banner.png \\
    --footer footer.jpg --width 700 --font "Georgia, Times, serif"

Requires the backend package to be installed (pip install -e .).
"""

import argparse
import logging
import mimetypes
import sys
import textwrap
from pathlib import Path
from typing import List, Optional

from docx2email.config import DEFAULT_FONT_FAMILY, DEFAULT_MAX_WIDTH, clamp_width
from docx2email.services.docx_import import DocxConversionError, convert_docx_to_html
from docx2email.services.email_document import export_filename, generate_full_email_html
from docx2email.services.image_payload import ImagePayloadError, image_to_data_uri

logger = logging.getLogger("export_email")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load_image(path: Optional[str]) -> Optional[str]:
    """Read an image file into a data URI; None when no path was given."""
    if not path:
        return None
    image_path = Path(path)
    content_type, _ = mimetypes.guess_type(image_path.name)
    return image_to_data_uri(image_path.read_bytes(), content_type)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="export_email.py",
        description="Convert a .docx file into a standalone HTML email.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            Examples:
              python scripts/export_email.py report.docx
              python scripts/export_email.py report.docx --outlook
              python scripts/export_email.py report.docx --header top.png --width 800
        """),
    )
    parser.add_argument("input", help="Path to the .docx document")
    parser.add_argument("--header", metavar="IMG", help="Header image file")
    parser.add_argument("--footer", metavar="IMG", help="Footer image file")
    parser.add_argument(
        "--outlook",
        action="store_true",
        help="Emit the table-based Outlook variant (file gets an -outlook suffix)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_MAX_WIDTH,
        help=f"Content width in pixels, clamped to 300-1200 (default: {DEFAULT_MAX_WIDTH})",
    )
    parser.add_argument(
        "--font",
        default=DEFAULT_FONT_FAMILY,
        help=f'CSS font-family value (default: "{DEFAULT_FONT_FAMILY}")',
    )
    parser.add_argument(
        "--out-dir",
        metavar="DIR",
        help="Output directory (default: the input file's directory)",
    )
    return parser


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"ERROR: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        result = convert_docx_to_html(input_path.read_bytes())
        header = _load_image(args.header)
        footer = _load_image(args.footer)
    except DocxConversionError as exc:
        print(f"ERROR: {input_path.name}: {exc}", file=sys.stderr)
        return 1
    except (ImagePayloadError, OSError) as exc:
        print(f"ERROR: Could not read image: {exc}", file=sys.stderr)
        return 1

    for message in result.messages:
        logger.warning(message)

    document = generate_full_email_html(
        result.html,
        header_image=header,
        footer_image=footer,
        legacy_mode=args.outlook,
        max_width=clamp_width(args.width),
        font_family=args.font.strip() or DEFAULT_FONT_FAMILY,
    )

    out_dir = Path(args.out_dir) if args.out_dir else input_path.parent
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / export_filename(input_path.name, args.outlook)
    out_path.write_text(document, encoding="utf-8")

    print(out_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
