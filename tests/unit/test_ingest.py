"""Unit tests for CV text extraction."""

import io

import pytest
from docx import Document
from reportlab.lib.pagesizes import LETTER
from reportlab.pdfgen import canvas

from models import DOCX_MIME, PDF_MIME
from utils.errors import ExtractionError
from utils.ingest import extract_text


def make_pdf(*pages):
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=LETTER)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 16
        c.showPage()
    c.save()
    return buffer.getvalue()


@pytest.mark.unit
def test_docx_text_in_order(docx_factory):
    data = docx_factory("Jane Doe", "jane@x.com, 555-1234, Boston")

    text = extract_text(data, DOCX_MIME)

    assert text.splitlines() == ["Jane Doe", "jane@x.com, 555-1234, Boston"]


@pytest.mark.unit
def test_docx_table_cells_are_included():
    document = Document()
    document.add_paragraph("Jane Doe")
    table = document.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "Skills"
    table.cell(0, 1).text = "Python"
    buffer = io.BytesIO()
    document.save(buffer)

    text = extract_text(buffer.getvalue(), DOCX_MIME)

    assert "Skills | Python" in text


@pytest.mark.unit
def test_docx_header_table_keeps_its_place():
    document = Document()
    table = document.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "Jane Doe"
    table.cell(0, 1).text = "jane@x.com"
    document.add_paragraph("Experience: Backend Engineer")
    buffer = io.BytesIO()
    document.save(buffer)

    text = extract_text(buffer.getvalue(), DOCX_MIME)

    assert text.splitlines() == ["Jane Doe | jane@x.com", "Experience: Backend Engineer"]


@pytest.mark.unit
def test_pdf_text_from_every_page():
    data = make_pdf(["Jane Doe", "jane@x.com"], ["Experience at Acme Corp"])

    text = extract_text(data, PDF_MIME)

    assert "Jane Doe" in text
    assert text.index("jane@x.com") < text.index("Acme Corp")


@pytest.mark.unit
@pytest.mark.parametrize("mime", [PDF_MIME, DOCX_MIME])
def test_corrupt_file_raises(mime):
    with pytest.raises(ExtractionError):
        extract_text(b"this is not a real document", mime)


@pytest.mark.unit
def test_unsupported_type_raises():
    with pytest.raises(ExtractionError, match="Unsupported"):
        extract_text(b"plain text", "text/plain")


@pytest.mark.unit
def test_document_without_text_raises(docx_factory):
    with pytest.raises(ExtractionError, match="No text"):
        extract_text(docx_factory("   ", ""), DOCX_MIME)
