import io
from dataclasses import dataclass
from typing import Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor

from models.generation import DOCX_MIME
from .base_writer import BaseWriter
from .blocks import ACCENT, RULE, Block, BlockKind

FONT_NAME = "Calibri"


@dataclass(frozen=True)
class _Style:
    size: float
    before: float = 0
    after: float = 0
    align: Optional[int] = None
    indent: float = 0  # inches
    border: Optional[tuple[str, int]] = None  # (color, eighths of a point)


STYLES = {
    BlockKind.NAME: _Style(20, after=6, align=WD_ALIGN_PARAGRAPH.CENTER),
    BlockKind.CONTACT: _Style(10, after=15, align=WD_ALIGN_PARAGRAPH.CENTER),
    BlockKind.DIVIDER: _Style(10, after=15, border=(ACCENT, 12)),
    BlockKind.SECTION: _Style(12, before=10, after=6, border=(RULE, 6)),
    BlockKind.ENTRY: _Style(11, before=7.5, after=3),
    BlockKind.META: _Style(10, after=4),
    BlockKind.BULLET: _Style(10.5, after=3, indent=0.25),
    BlockKind.PARAGRAPH: _Style(11, after=10),
    BlockKind.TITLE: _Style(18, after=24, align=WD_ALIGN_PARAGRAPH.CENTER),
    BlockKind.BODY: _Style(12, after=10),
}


class WordResumeWriter(BaseWriter):
    """
    Renders layout blocks into a Word document with python-docx.
    Methods
    -------
    generate_file(blocks: list[Block]) -> bytes:
        Builds the document paragraph by paragraph and returns the saved .docx bytes.
    """

    file_ending = "docx"
    mime_type = DOCX_MIME

    def generate_file(self, blocks: list[Block]) -> bytes:
        document = Document()

        # 0.5 inch margins all round
        for section in document.sections:
            section.top_margin = Inches(0.5)
            section.bottom_margin = Inches(0.5)
            section.left_margin = Inches(0.5)
            section.right_margin = Inches(0.5)

        document.styles["Normal"].font.name = FONT_NAME

        for block in blocks:
            if block.kind is BlockKind.TITLE:
                paragraph = document.add_heading(level=1)
            else:
                paragraph = document.add_paragraph()
            self._add_block(paragraph, block, STYLES[block.kind])

        buffer = io.BytesIO()
        document.save(buffer)
        return buffer.getvalue()

    def _add_block(self, paragraph, block: Block, style: _Style) -> None:
        # pBdr precedes spacing/ind/jc in pPr, so it goes in first
        if style.border:
            _set_bottom_border(paragraph, *style.border)
        fmt = paragraph.paragraph_format
        fmt.space_before = Pt(style.before)
        fmt.space_after = Pt(style.after)
        if style.align is not None:
            paragraph.alignment = style.align
        if style.indent:
            fmt.left_indent = Inches(style.indent)

        for i, styled in enumerate(block.runs):
            text = styled.text
            if block.kind is BlockKind.BULLET and i == 0:
                text = "• " + text
            # Keep single line breaks inside a body paragraph
            lines = text.split("\n")
            for j, line in enumerate(lines):
                run = paragraph.add_run(line)
                run.bold = styled.bold
                run.italic = styled.italic
                run.font.name = FONT_NAME
                run.font.size = Pt(style.size)
                run.font.color.rgb = RGBColor.from_string(styled.color.upper() if styled.color else "000000")
                if j < len(lines) - 1:
                    run.add_break()


def _set_bottom_border(paragraph, color: str, size: int) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    p_bdr = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), str(size))
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), color)
    p_bdr.append(bottom)
    p_pr.append(p_bdr)
