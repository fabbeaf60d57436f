"""
Tests for scripts/export_email.py.

The script directory is on the pytest pythonpath, so the CLI is imported as
a module and driven through main(argv).
"""

from docx import Document
from PIL import Image

import export_email


def _write_docx(path, *paragraphs):
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    doc.save(str(path))


def _write_png(path):
    Image.new("RGB", (6, 2), (255, 0, 0)).save(str(path), format="PNG")


class TestExportCli:
    """End-to-end runs against files in a temp directory."""

    def test_responsive_export(self, tmp_path, capsys):
        source = tmp_path / "newsletter.docx"
        _write_docx(source, "Hello readers")

        assert export_email.main([str(source)]) == 0

        out = tmp_path / "newsletter.html"
        assert out.exists()
        html = out.read_text(encoding="utf-8")
        assert '<div class="email-content">' in html
        assert "Hello readers" in html
        assert str(out) in capsys.readouterr().out

    def test_outlook_export_with_header_and_clamped_width(self, tmp_path):
        source = tmp_path / "newsletter.docx"
        header = tmp_path / "banner.png"
        _write_docx(source, "Hello")
        _write_png(header)

        assert export_email.main([str(source), "--outlook", "--header", str(header), "--width", "50"]) == 0

        html = (tmp_path / "newsletter-outlook.html").read_text(encoding="utf-8")
        assert '<v:fill type="frame" src="data:image/png;base64,' in html
        assert 'width="300"' in html

    def test_out_dir_and_font(self, tmp_path):
        source = tmp_path / "a.docx"
        _write_docx(source, "x")
        out_dir = tmp_path / "exports"

        assert export_email.main([str(source), "--out-dir", str(out_dir), "--font", "Georgia, serif"]) == 0

        html = (out_dir / "a.html").read_text(encoding="utf-8")
        assert "font-family: Georgia, serif" in html

    def test_missing_input(self, tmp_path, capsys):
        assert export_email.main([str(tmp_path / "nope.docx")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_corrupt_input(self, tmp_path, capsys):
        source = tmp_path / "broken.docx"
        source.write_bytes(b"garbage")

        assert export_email.main([str(source)]) == 1
        assert "Conversion failed" in capsys.readouterr().err

    def test_unreadable_header(self, tmp_path, capsys):
        source = tmp_path / "a.docx"
        header = tmp_path / "banner.png"
        _write_docx(source, "x")
        header.write_bytes(b"not an image")

        assert export_email.main([str(source), "--header", str(header)]) == 1
        assert "Could not read image" in capsys.readouterr().err
