"""Format-agnostic document tree shared by the DOCX and PDF writers.

A document is a flat sequence of typed blocks. Builders here decide section
order and which text runs carry emphasis; writers only decide how a block
kind looks in their format, so both outputs keep the same structure.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from models.resume import ResumeData

ACCENT = "1a365d"
MUTED = "4a5568"
SUBTLE = "718096"
SEPARATOR = "a0aec0"
RULE = "e2e8f0"

SKILL_JOINER = "  •  "


class BlockKind(str, Enum):
    NAME = "name"  # centered candidate name
    CONTACT = "contact"  # centered contact line under the name
    DIVIDER = "divider"  # thick accent rule under the header
    SECTION = "section"  # section header with a thin underline rule
    ENTRY = "entry"  # job or degree header line
    META = "meta"  # muted location/dates line under an entry
    BULLET = "bullet"
    PARAGRAPH = "paragraph"
    TITLE = "title"  # heading of a plain-text document
    BODY = "body"  # paragraph of a plain-text document


# Control characters XML 1.0 cannot carry; vertical tab and form feed become spaces
_XML_ILLEGAL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def _replace_control(match: re.Match) -> str:
    return " " if match.group() in "\x0b\x0c" else ""


@dataclass(frozen=True)
class Run:
    text: str
    bold: bool = False
    italic: bool = False
    color: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "text", _XML_ILLEGAL.sub(_replace_control, self.text))


@dataclass(frozen=True)
class Block:
    kind: BlockKind
    runs: tuple[Run, ...] = ()

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


def _block(kind: BlockKind, text: str = "", **style) -> Block:
    return Block(kind, (Run(text, **style),) if text else ())


def _joined(*parts: str) -> str:
    return " | ".join(p for p in parts if p)


def section(title: str) -> Block:
    return _block(BlockKind.SECTION, title, bold=True, color=ACCENT)


def build_resume_document(resume: ResumeData) -> list[Block]:
    """Lay out a tailored CV: header, divider, then summary, experience, skills, education."""
    info = resume.personal_info
    blocks = [_block(BlockKind.NAME, info.full_name.upper(), bold=True, color=ACCENT)]
    contact = info.contact_line()
    if contact:
        blocks.append(_block(BlockKind.CONTACT, contact, color=MUTED))
    blocks.append(Block(BlockKind.DIVIDER))

    if resume.summary:
        blocks.append(section("PROFESSIONAL SUMMARY"))
        blocks.append(_block(BlockKind.PARAGRAPH, resume.summary))

    if resume.experience:
        blocks.append(section("PROFESSIONAL EXPERIENCE"))
        for job in resume.experience:
            runs = [Run(job.title, bold=True)]
            if job.company:
                if job.title:
                    runs.append(Run("  |  ", color=SEPARATOR))
                runs.append(Run(job.company, italic=True))
            blocks.append(Block(BlockKind.ENTRY, tuple(runs)))
            meta = _joined(job.location, job.dates)
            if meta:
                blocks.append(_block(BlockKind.META, meta, color=SUBTLE))
            blocks.extend(_block(BlockKind.BULLET, a) for a in job.achievements if a)

    if resume.skills:
        blocks.append(section("SKILLS"))
        blocks.append(_block(BlockKind.PARAGRAPH, SKILL_JOINER.join(resume.skills)))

    if resume.education:
        blocks.append(section("EDUCATION"))
        for edu in resume.education:
            blocks.append(_block(BlockKind.ENTRY, edu.degree, bold=True))
            meta = _joined(edu.institution, edu.dates)
            if meta:
                blocks.append(_block(BlockKind.META, meta, color=SUBTLE))
            if edu.details:
                blocks.append(_block(BlockKind.PARAGRAPH, edu.details))
    return blocks


def build_text_document(title: str, body: str) -> list[Block]:
    """Lay out a cover letter or email: one title, one block per paragraph of the body."""
    blocks = [_block(BlockKind.TITLE, title, bold=True)]
    for paragraph in re.split(r"\n\s*\n", body.replace("\r\n", "\n").strip()):
        paragraph = paragraph.strip()
        if paragraph:
            blocks.append(_block(BlockKind.BODY, paragraph))
    return blocks
