import io
import logging
import os
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import ParagraphStyle
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer

from models.generation import PDF_MIME
from .base_writer import BaseWriter
from .blocks import ACCENT, RULE, Block, BlockKind, Run

logger = logging.getLogger("magiccv.writer")

# Standard Type1 font; WinAnsi only, used when no TrueType family is installed
FALLBACK_FONT = "Helvetica"

# family -> (regular, bold, italic, bold italic) file names
FONT_FAMILIES = {
    "DejaVuSans": ("DejaVuSans.ttf", "DejaVuSans-Bold.ttf", "DejaVuSans-Oblique.ttf", "DejaVuSans-BoldOblique.ttf"),
    "LiberationSans": (
        "LiberationSans-Regular.ttf", "LiberationSans-Bold.ttf",
        "LiberationSans-Italic.ttf", "LiberationSans-BoldItalic.ttf",
    ),
    "NotoSans": ("NotoSans-Regular.ttf", "NotoSans-Bold.ttf", "NotoSans-Italic.ttf", "NotoSans-BoldItalic.ttf"),
}

FONT_DIRS = [
    "/usr/share/fonts/truetype/dejavu",
    "/usr/share/fonts/dejavu",
    "/usr/share/fonts/truetype/liberation",
    "/usr/share/fonts/liberation",
    "/usr/share/fonts/truetype/noto",
    "/usr/share/fonts/noto",
    "/usr/share/fonts/TTF",
    "/Library/Fonts",
]


def _font_dirs() -> list[str]:
    dirs = list(FONT_DIRS)
    if os.getenv("PDF_FONT_DIR"):
        dirs.insert(0, os.environ["PDF_FONT_DIR"])
    return dirs


def register_unicode_font() -> str:
    """Register the first installed TrueType family with reportlab and return its name.

    Missing italic faces fall back to the upright ones so <b>/<i> markup
    always resolves. Returns the Helvetica fallback when nothing is found.
    """
    for family, files in FONT_FAMILIES.items():
        for directory in _font_dirs():
            paths = [os.path.join(directory, name) for name in files]
            if not os.path.isfile(paths[0]):
                continue
            regular = paths[0]
            bold = paths[1] if os.path.isfile(paths[1]) else regular
            italic = paths[2] if os.path.isfile(paths[2]) else regular
            bold_italic = paths[3] if os.path.isfile(paths[3]) else bold
            faces = {
                family: regular,
                f"{family}-Bold": bold,
                f"{family}-Italic": italic,
                f"{family}-BoldItalic": bold_italic,
            }
            if family not in pdfmetrics.getRegisteredFontNames():
                for name, path in faces.items():
                    pdfmetrics.registerFont(TTFont(name, path))
                pdfmetrics.registerFontFamily(
                    family,
                    normal=family,
                    bold=f"{family}-Bold",
                    italic=f"{family}-Italic",
                    boldItalic=f"{family}-BoldItalic",
                )
            logger.info("PDF font family %s loaded from %s", family, directory)
            return family
    logger.warning("No TrueType font found (set PDF_FONT_DIR); PDF text is limited to WinAnsi characters")
    return FALLBACK_FONT


FONT = register_unicode_font()


def _style(name: str, size: float, leading_gap: float = 2, **kwargs) -> ParagraphStyle:
    return ParagraphStyle(name, fontName=FONT, fontSize=size, leading=size + leading_gap, **kwargs)


STYLES = {
    BlockKind.NAME: _style("Name", 22, alignment=TA_CENTER, spaceAfter=4),
    BlockKind.CONTACT: _style("Contact", 10, alignment=TA_CENTER, spaceAfter=14),
    BlockKind.SECTION: _style("Section", 13, spaceBefore=6, spaceAfter=2),
    BlockKind.ENTRY: _style("Entry", 11, spaceBefore=4, spaceAfter=2),
    BlockKind.META: _style("Meta", 9.5, spaceAfter=5),
    BlockKind.BULLET: _style("Bullet", 10.5, leading_gap=3.5, leftIndent=15, spaceAfter=1.5),
    BlockKind.PARAGRAPH: _style("Body", 10.5, leading_gap=4, alignment=TA_LEFT, spaceAfter=12),
    BlockKind.TITLE: _style("Title", 18, alignment=TA_CENTER, spaceAfter=24),
    BlockKind.BODY: _style("Letter", 12, leading_gap=5, alignment=TA_LEFT, spaceAfter=10),
}

# Documents without a header (letters, emails) get a roomier margin
RESUME_MARGIN = 40
TEXT_MARGIN = 50


def _markup(run: Run) -> str:
    text = escape(run.text).replace("\n", "<br/>")
    if run.bold:
        text = f"<b>{text}</b>"
    if run.italic:
        text = f"<i>{text}</i>"
    if run.color:
        text = f'<font color="#{run.color}">{text}</font>'
    return text


class PdfResumeWriter(BaseWriter):
    """
    Renders layout blocks into a PDF with reportlab's platypus flow.

    Each block becomes a Paragraph flowing down a fixed-margin LETTER page;
    rules are HRFlowable strokes. Page breaks are left to the frame.
    """

    file_ending = "pdf"
    mime_type = PDF_MIME

    def generate_file(self, blocks: list[Block]) -> bytes:
        is_letter = any(b.kind is BlockKind.TITLE for b in blocks)
        margin = TEXT_MARGIN if is_letter else RESUME_MARGIN
        title = next((b.text for b in blocks if b.kind in (BlockKind.NAME, BlockKind.TITLE)), "")

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer, pagesize=LETTER,
            leftMargin=margin, rightMargin=margin, topMargin=margin, bottomMargin=margin,
            title=title, author="Magic CV",
        )
        doc.build(self._story(blocks))
        return buffer.getvalue()

    def _story(self, blocks: list[Block]) -> list:
        story = []
        previous = None
        for block in blocks:
            if block.kind is BlockKind.DIVIDER:
                story.append(HRFlowable(width="100%", thickness=2, color=HexColor(f"#{ACCENT}"), spaceBefore=2, spaceAfter=16))
            else:
                if block.kind is BlockKind.ENTRY and previous is BlockKind.BULLET:
                    story.append(Spacer(1, 8))
                text = "".join(_markup(run) for run in block.runs)
                if block.kind is BlockKind.BULLET:
                    text = "• " + text
                story.append(Paragraph(text, STYLES[block.kind]))
                if block.kind is BlockKind.SECTION:
                    story.append(HRFlowable(width="100%", thickness=1, color=HexColor(f"#{RULE}"), spaceBefore=1, spaceAfter=8))
            previous = block.kind
        return story
