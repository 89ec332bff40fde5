import io

import pytest
from docx import Document
from unittest.mock import patch

from resume_matcher.helpers import parsing
from resume_matcher.models.models import SourceKind
from resume_matcher.utils import settings
from resume_matcher.utils.exceptions import ExtractionError


def _docx_bytes(*paragraphs):
    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


class TestResolveKind:
    """Test cases for file type detection"""

    @pytest.mark.parametrize("media_type,filename,expected", [
        ("application/pdf", None, "pdf"),
        ("text/plain; charset=utf-8", None, "txt"),
        (None, "张三的简历.DOCX", "docx"),
        ("application/octet-stream", "scan.png", "image"),
        ("application/zip", "archive.zip", None),
        (None, None, None),
    ])
    def test_resolve_kind(self, media_type, filename, expected):
        assert parsing.resolve_kind(media_type, filename) == expected


class TestExtractText:
    """Test cases for pulling text out of uploads"""

    def test_plain_text_with_bom(self):
        data = "\ufeff张三\n前端开发".encode("utf-8")
        assert parsing.extract_text(data, "text/plain") == "张三\n前端开发"

    def test_docx(self):
        data = _docx_bytes("张三", "熟悉React")
        text = parsing.extract_text(data, filename="resume.docx")
        assert text.strip() == "张三\n熟悉React"

    def test_unsupported_type(self):
        with pytest.raises(ExtractionError) as exc_info:
            parsing.extract_text(b"PK..", "application/zip", "archive.zip")
        assert exc_info.value.details["filename"] == "archive.zip"

    def test_empty_upload(self):
        with pytest.raises(ExtractionError):
            parsing.extract_text(b"", "text/plain")

    def test_whitespace_only_text(self):
        with pytest.raises(ExtractionError):
            parsing.extract_text(b"  \n\t ", "text/plain")

    def test_corrupt_docx(self):
        with pytest.raises(ExtractionError) as exc_info:
            parsing.extract_text(b"definitely not a zip", filename="broken.docx")
        assert exc_info.value.cause is not None

    def test_image_requires_ocr(self, monkeypatch):
        monkeypatch.setattr(settings, "BAIDU_API_KEY", None)
        with pytest.raises(ExtractionError):
            parsing.extract_text(b"\x89PNG", "image/png", "photo.png")

    @patch('resume_matcher.helpers.parsing.ocr.ocr_image', return_value="张三\n产品经理")
    def test_image_with_ocr(self, mock_ocr, monkeypatch):
        monkeypatch.setattr(settings, "BAIDU_API_KEY", "k")
        monkeypatch.setattr(settings, "BAIDU_SECRET_KEY", "s")

        assert parsing.extract_text(b"\x89PNG", "image/png") == "张三\n产品经理"
        mock_ocr.assert_called_once_with(b"\x89PNG")

    @patch('resume_matcher.helpers.parsing.ocr.ocr_pdf', return_value="扫描件文字")
    @patch('resume_matcher.helpers.parsing.pdf_extract', return_value="  ")
    def test_scanned_pdf_goes_to_ocr(self, mock_pdf, mock_ocr, monkeypatch):
        monkeypatch.setattr(settings, "BAIDU_API_KEY", "k")
        monkeypatch.setattr(settings, "BAIDU_SECRET_KEY", "s")

        assert parsing.extract_text(b"%PDF-1.4", "application/pdf") == "扫描件文字"
        mock_ocr.assert_called_once()

    @patch('resume_matcher.helpers.parsing.ocr.ocr_pdf')
    @patch('resume_matcher.helpers.parsing.pdf_extract', return_value="文字" * 100)
    def test_text_pdf_skips_ocr(self, mock_pdf, mock_ocr):
        assert parsing.extract_text(b"%PDF-1.4", "application/pdf") == "文字" * 100
        mock_ocr.assert_not_called()


class TestLoadFolder:
    """Test cases for bulk folder import"""

    def test_load_folder(self, tmp_path):
        (tmp_path / "张三的简历.txt").write_text("张三\n熟悉React", encoding="utf-8")
        (tmp_path / "notes.md").write_text("ignored", encoding="utf-8")
        (tmp_path / "empty.txt").write_bytes(b"")
        sub = tmp_path / "more"
        sub.mkdir()
        (sub / "李四.docx").write_bytes(_docx_bytes("李四", "熟悉Python"))

        docs = parsing.load_folder(str(tmp_path))

        names = sorted(d.source_name for d in docs)
        assert names == ["张三的简历.txt", "李四.docx"]
        assert all(d.source_kind == SourceKind.FILE for d in docs)
