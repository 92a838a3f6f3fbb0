import io
import logging

from docx import Document
from docx.table import Table
from pypdf import PdfReader

from models.generation import DOCX_MIME, PDF_MIME
from utils.errors import ExtractionError

logger = logging.getLogger("magiccv.utils.ingest")


def extract_pdf_text(data: bytes) -> str:
    """Extract text from all pages of a PDF in document order."""
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as exc:
        # pypdf raises PyPdfError subclasses as well as bare ValueError/KeyError on damaged xrefs
        raise ExtractionError(f"Could not read PDF file: {exc}") from exc
    return "\n".join(p for p in pages if p)


def extract_docx_text(data: bytes) -> str:
    """Extract raw paragraph and table text from a DOCX in document order, without formatting."""
    try:
        document = Document(io.BytesIO(data))
    except Exception as exc:
        # python-docx surfaces corrupt archives as zipfile/KeyError/ValueError variants
        raise ExtractionError(f"Could not read DOCX file: {exc}") from exc
    lines = []
    for item in document.iter_inner_content():
        if isinstance(item, Table):
            lines.extend(_table_lines(item))
        else:
            lines.append(item.text)
    return "\n".join(lines)


def _table_lines(table: Table) -> list[str]:
    lines = []
    for row in table.rows:
        cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
        if cells:
            lines.append(" | ".join(cells))
    return lines


def extract_text(data: bytes, mime_type: str) -> str:
    """Convert an uploaded CV to plain text.

    Args:
        data: Raw file bytes.
        mime_type: Declared MIME type; must be PDF or DOCX.

    Returns:
        Best-effort plain text of the document.

    Raises:
        ExtractionError: If the type is unsupported, the file is corrupt, or no text was found.
    """
    if mime_type == PDF_MIME:
        text = extract_pdf_text(data)
    elif mime_type == DOCX_MIME:
        text = extract_docx_text(data)
    else:
        raise ExtractionError(f"Unsupported CV file type: {mime_type}")
    text = text.strip()
    if not text:
        raise ExtractionError("No text could be extracted from the uploaded CV")
    logger.info("Extracted CV text type=%s bytes=%d chars=%d", mime_type, len(data), len(text))
    return text
