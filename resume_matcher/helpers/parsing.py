import io
import os
import logging
from pathlib import Path
from typing import List, Optional

from pdfminer.high_level import extract_text as pdf_extract
from docx import Document
from unstructured.partition.auto import partition

from resume_matcher.models.models import RawDocument, SourceKind
from resume_matcher.services import ocr
from resume_matcher.utils.exceptions import ExtractionError, ResumeMatcherError
from resume_matcher.utils.logging_config import get_logger

logging.getLogger("pdfminer").setLevel(logging.ERROR)
logger = get_logger(__name__)

# below this, a PDF is treated as scanned and sent to OCR when available
PDF_MIN_TEXT_CHARS = 100

MEDIA_TYPES = {
    "application/pdf": "pdf",
    "text/plain": "txt",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "image/jpeg": "image",
    "image/png": "image",
    "image/webp": "image",
    "image/gif": "image",
}

EXTENSIONS = {
    ".pdf": "pdf",
    ".txt": "txt",
    ".docx": "docx",
    ".jpg": "image",
    ".jpeg": "image",
    ".png": "image",
    ".webp": "image",
    ".gif": "image",
}

FOLDER_EXTENSIONS = (".txt", ".pdf", ".docx")


def read_txt(data: bytes) -> str:
    return data.decode("utf-8-sig", errors="ignore")


def read_docx(data: bytes) -> str:
    doc = Document(io.BytesIO(data))
    return "\n".join([p.text for p in doc.paragraphs])


def read_pdf(data: bytes) -> str:
    try:
        text = pdf_extract(io.BytesIO(data))
    except Exception:
        # fallback to unstructured
        elems = partition(file=io.BytesIO(data))
        text = "\n".join([e.text for e in elems if hasattr(e, "text") and e.text])

    if len(text.strip()) < PDF_MIN_TEXT_CHARS and ocr.is_configured():
        logger.info("PDF has little embedded text, running OCR")
        text = (text + "\n" + ocr.ocr_pdf(data)).strip()
    return text


def read_image(data: bytes) -> str:
    if not ocr.is_configured():
        raise ExtractionError("Image uploads require OCR credentials", media_type="image")
    return ocr.ocr_image(data)


def resolve_kind(media_type: Optional[str], filename: Optional[str]) -> Optional[str]:
    kind = MEDIA_TYPES.get((media_type or "").split(";")[0].strip().lower())
    if kind:
        return kind
    ext = os.path.splitext(filename or "")[1].lower()
    return EXTENSIONS.get(ext)


def extract_text(data: bytes, media_type: Optional[str] = None, filename: Optional[str] = None) -> str:
    """Pull plain text out of an uploaded file.

    Raises ExtractionError for unsupported types, unreadable bytes or an empty result.
    """
    kind = resolve_kind(media_type, filename)
    if kind is None:
        raise ExtractionError(
            f"Unsupported file type '{media_type or filename}'",
            filename=filename, media_type=media_type
        )
    if not data:
        raise ExtractionError("Uploaded file is empty", filename=filename, media_type=media_type)

    readers = {"pdf": read_pdf, "txt": read_txt, "docx": read_docx, "image": read_image}
    try:
        text = readers[kind](data)
    except ResumeMatcherError:
        raise
    except Exception as e:
        raise ExtractionError(
            f"Could not read {kind} file: {e}",
            filename=filename, media_type=media_type, cause=e
        ) from e

    if not text or not text.strip():
        raise ExtractionError("No text could be extracted from the file", filename=filename, media_type=media_type)

    logger.debug(f"Extracted {len(text)} characters from {filename or kind}")
    return text


def load_folder(folder: str) -> List[RawDocument]:
    out = []
    for root, _, files in os.walk(folder):
        for f in sorted(files):
            p = Path(root) / f
            if p.suffix.lower() not in FOLDER_EXTENSIONS:
                continue
            try:
                t = extract_text(p.read_bytes(), filename=p.name)
            except ResumeMatcherError as e:
                logger.warning(f"Skipping {p}: {e.message}")
                continue
            out.append(RawDocument(text=t, source_name=p.name, source_kind=SourceKind.FILE))
    return out
