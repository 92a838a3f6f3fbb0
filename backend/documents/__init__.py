from .base_writer import BaseWriter
from .blocks import Block, BlockKind, Run, build_resume_document, build_text_document
from .pdf_writer import PdfResumeWriter
from .word_writer import WordResumeWriter
from .writer import ResumeWriter

WRITERS = {
    WordResumeWriter.file_ending: WordResumeWriter,
    PdfResumeWriter.file_ending: PdfResumeWriter,
}


def get_writer(fmt: str) -> BaseWriter:
    """Return a writer for "docx" or "pdf"."""
    try:
        return WRITERS[fmt.lower()]()
    except KeyError:
        raise ValueError(f"Unsupported output format: {fmt}") from None


__all__ = [
    "BaseWriter",
    "Block",
    "BlockKind",
    "PdfResumeWriter",
    "ResumeWriter",
    "Run",
    "WordResumeWriter",
    "build_resume_document",
    "build_text_document",
    "get_writer",
]
