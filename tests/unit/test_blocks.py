"""Unit tests for the shared document tree."""

import pytest

from documents import BlockKind, build_resume_document, build_text_document
from documents.blocks import ACCENT
from models import ResumeData


@pytest.mark.unit
def test_resume_sections_in_order(sample_resume):
    """Test header, divider and section order of a full CV."""
    blocks = build_resume_document(ResumeData.model_validate(sample_resume))

    assert [b.kind for b in blocks[:3]] == [BlockKind.NAME, BlockKind.CONTACT, BlockKind.DIVIDER]
    assert blocks[0].text == "JANE DOE"
    assert blocks[1].text == "jane@x.com | 555-1234 | Boston"
    sections = [b.text for b in blocks if b.kind is BlockKind.SECTION]
    assert sections == ["PROFESSIONAL SUMMARY", "PROFESSIONAL EXPERIENCE", "SKILLS", "EDUCATION"]


@pytest.mark.unit
def test_section_headers_share_one_style(sample_resume):
    blocks = build_resume_document(ResumeData.model_validate(sample_resume))

    for block in blocks:
        if block.kind is BlockKind.SECTION:
            assert block.runs[0].bold
            assert block.runs[0].color == ACCENT


@pytest.mark.unit
def test_experience_entry_runs(sample_resume):
    """Test that a job header carries bold title, separator and italic company."""
    blocks = build_resume_document(ResumeData.model_validate(sample_resume))
    entry = next(b for b in blocks if b.kind is BlockKind.ENTRY)

    assert entry.text == "Backend Engineer  |  Acme Corp"
    assert entry.runs[0].bold
    assert entry.runs[2].italic
    meta = blocks[blocks.index(entry) + 1]
    assert meta.kind is BlockKind.META
    assert meta.text == "Boston, MA | 2019 - Present"
    bullets = [b.text for b in blocks if b.kind is BlockKind.BULLET]
    assert bullets == sample_resume["experience"][0]["achievements"]


@pytest.mark.unit
def test_skills_joined_on_one_line(sample_resume):
    blocks = build_resume_document(ResumeData.model_validate(sample_resume))
    skills_index = next(i for i, b in enumerate(blocks) if b.text == "SKILLS")

    assert blocks[skills_index + 1].text == "Python  •  PostgreSQL  •  Kubernetes"


@pytest.mark.unit
def test_empty_sections_are_omitted(sample_resume):
    sample_resume["experience"] = []
    sample_resume["summary"] = ""
    blocks = build_resume_document(ResumeData.model_validate(sample_resume))

    sections = [b.text for b in blocks if b.kind is BlockKind.SECTION]
    assert sections == ["SKILLS", "EDUCATION"]


@pytest.mark.unit
def test_text_document_splits_paragraphs():
    """Test that blank lines separate paragraphs and single newlines are kept."""
    blocks = build_text_document("Cover Letter", "Dear Team,\n\nFirst line\nsecond line\n\n\nRegards,\nJane")

    assert blocks[0].kind is BlockKind.TITLE
    assert blocks[0].text == "Cover Letter"
    assert [b.text for b in blocks[1:]] == ["Dear Team,", "First line\nsecond line", "Regards,\nJane"]


@pytest.mark.unit
def test_control_characters_are_dropped_from_runs(sample_resume):
    sample_resume["summary"] = "line\x0bbreak\x00 and\ttab"

    blocks = build_resume_document(ResumeData.model_validate(sample_resume))

    summary = next(b for b in blocks if b.kind is BlockKind.PARAGRAPH)
    assert summary.text == "line break and\ttab"
