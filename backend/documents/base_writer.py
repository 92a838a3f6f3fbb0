from abc import ABC, abstractmethod
import logging

from models.resume import ResumeData
from utils.errors import RenderError
from .blocks import Block, build_resume_document, build_text_document


class BaseWriter(ABC):
    """
    BaseWriter is an abstract base class for document renderers. Subclasses
    turn a sequence of layout blocks into the bytes of one file format.
    Attributes:
        file_ending (str): Extension without the dot, e.g. "docx".
        mime_type (str): MIME type of the produced bytes.
    Methods:
        write_resume(resume: ResumeData) -> bytes:
            Render a tailored CV.
        write_text(title: str, body: str) -> bytes:
            Render a plain-text document such as a cover letter.
        generate_file(blocks: list[Block]) -> bytes:
            Abstract method producing the binary document.
    """

    file_ending: str = ""
    mime_type: str = ""

    def __init__(self):
        self._logger = logging.getLogger("magiccv.writer")

    def write_resume(self, resume: ResumeData) -> bytes:
        return self.write(build_resume_document(resume), label=f"CV for {resume.candidate_name}")

    def write_text(self, title: str, body: str) -> bytes:
        return self.write(build_text_document(title, body), label=title)

    def write(self, blocks: list[Block], label: str = "document") -> bytes:
        try:
            data = self.generate_file(blocks)
        except RenderError:
            raise
        except Exception as exc:
            self._logger.exception("Rendering %s as %s failed", label, self.file_ending)
            raise RenderError(f"Failed to render {label} as {self.file_ending.upper()}: {exc}") from exc
        self._logger.info("%s generated for %s: %d bytes", self.file_ending.upper(), label, len(data))
        return data

    @abstractmethod
    def generate_file(self, blocks: list[Block]) -> bytes:
        """Generate a file from the layout blocks."""
        pass
