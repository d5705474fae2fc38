# file_utils.py
import base64
import logging
from typing import Optional
from io import BytesIO

import docx
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

from errors import MissingInputError, UnsupportedFileTypeError
from schemas import DocumentInput, FileContent

logger = logging.getLogger(__name__)

UNSUPPORTED_MESSAGE = "Unsupported file format. Please use PDF or DOCX."
PDF_MIME_TYPE = "application/pdf"


def file_to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _extension(filename: str) -> str:
    if "." not in (filename or ""):
        return ""
    return filename.rsplit(".", 1)[-1].lower()


def extract_text_from_pdf(file_bytes: bytes) -> Optional[str]:
    """
    Extract text from a PDF (bytes).
    Returns None if extraction fails or is empty.
    """
    try:
        reader = PdfReader(BytesIO(file_bytes))
        texts = []
        for page in reader.pages:
            txt = page.extract_text() or ""
            texts.append(txt)
        full_text = "\n".join(texts).strip()
        return full_text or None
    except (PdfReadError, ValueError, OSError) as e:
        logger.warning("PDF text extraction failed: %s", e)
        return None


def extract_text_from_docx(file_bytes: bytes) -> str:
    """Raw text of a .docx: paragraphs first, then table cells, one per line."""
    try:
        document = docx.Document(BytesIO(file_bytes))
    except Exception as e:
        # python-docx raises a mix of zipfile/KeyError/PackageNotFoundError for bad files
        raise UnsupportedFileTypeError(f"Could not read DOCX file: {e}") from e

    lines = [p.text for p in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            for cell in row.cells:
                if cell.text.strip():
                    lines.append(cell.text)
    return "\n".join(lines).strip()


def parse_document_file(
    filename: str,
    data: bytes,
    content_type: Optional[str] = None,
) -> DocumentInput:
    """
    Turn an uploaded file into model input.

    - PDF  -> base64 + application/pdf, sent to the model as a document.
      The browser-reported content type is not trusted (octet-stream, x-pdf).
    - DOCX -> extracted plain text
    """
    if not data:
        raise MissingInputError(f"The uploaded file '{filename}' is empty.")

    ext = _extension(filename)
    if ext == "pdf":
        if content_type and content_type != PDF_MIME_TYPE:
            logger.info("Treating %s (%s) as %s", filename, content_type, PDF_MIME_TYPE)
        logger.info("Encoding PDF %s (%d bytes)", filename, len(data))
        return DocumentInput(
            format="file",
            content=FileContent(
                data=file_to_base64(data),
                mime_type=PDF_MIME_TYPE,
                filename=filename,
            ),
        )
    if ext == "docx":
        text = extract_text_from_docx(data)
        logger.info("Extracted %d characters from DOCX %s", len(text), filename)
        return DocumentInput.from_text(text)

    raise UnsupportedFileTypeError(UNSUPPORTED_MESSAGE)


def require_document(document: Optional[DocumentInput], label: str) -> DocumentInput:
    if document is None or document.is_empty():
        raise MissingInputError(f"{label} is missing.")
    return document


def document_to_text(document: DocumentInput) -> str:
    """
    Plain-text view of an input, for providers that cannot take files.
    """
    content = document.content
    if isinstance(content, str):
        return content

    if content.mime_type != PDF_MIME_TYPE:
        raise UnsupportedFileTypeError(UNSUPPORTED_MESSAGE)
    text = extract_text_from_pdf(base64.b64decode(content.data))
    if not text:
        raise UnsupportedFileTypeError(
            "We could not extract text from the PDF. "
            "Please upload a text-based PDF (not only a scanned image) or paste the text."
        )
    return text
