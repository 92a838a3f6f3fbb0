"""Shared fixtures: a scripted completion backend and sample CV inputs."""

import asyncio
import io
import json

import pytest
from docx import Document

from api.config import Settings
from llm.base import BaseLLM


SAMPLE_RESUME = {
    "personalInfo": {
        "fullName": "Jane Doe",
        "email": "jane@x.com",
        "phone": "555-1234",
        "location": "Boston",
        "linkedin": "",
    },
    "summary": "Backend engineer with eight years building reliable Python services.",
    "experience": [
        {
            "title": "Backend Engineer",
            "company": "Acme Corp",
            "location": "Boston, MA",
            "dates": "2019 - Present",
            "achievements": [
                "Cut p99 latency of the billing API by 40%",
                "Led migration of 30 services to Kubernetes",
            ],
        },
    ],
    "skills": ["Python", "PostgreSQL", "Kubernetes"],
    "education": [
        {
            "degree": "BSc Computer Science",
            "institution": "Boston University",
            "dates": "2011 - 2015",
            "details": "",
        },
    ],
}

COVER_LETTER_TEXT = "Dear Hiring Manager,\n\nI am excited to apply for the Senior Backend Engineer role.\n\nSincerely,\nJane Doe"
EMAIL_TEXT = "Subject: Senior Backend Engineer application\n\nHello,\nPlease find my application attached.\n\nBest regards,\nJane Doe"


class ScriptedLLM(BaseLLM):
    """
    Completion backend that answers from a script and records every call.

    The kind of document is inferred from the system prompt. With
    ``barrier=True`` the cover letter and email calls each wait until the
    other one has started, which only succeeds if they run concurrently.
    """

    model = "scripted"

    def __init__(self, cv_response=None, barrier=False, fail_on=None):
        self.cv_response = cv_response if cv_response is not None else "```json\n" + json.dumps(SAMPLE_RESUME) + "\n```"
        self.barrier = barrier
        self.fail_on = fail_on
        self.calls = []
        self.events = []
        self._started = {}

    @staticmethod
    def kind_of(system_prompt: str) -> str:
        if "JSON" in system_prompt:
            return "cv"
        if "cover letter" in system_prompt:
            return "coverLetter"
        return "email"

    async def complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str:
        kind = self.kind_of(system_prompt)
        self.calls.append({"kind": kind, "system": system_prompt, "user": user_prompt, "max_tokens": max_tokens})
        self.events.append(f"start:{kind}")
        if self.barrier and kind != "cv":
            self._started.setdefault(kind, asyncio.Event()).set()
            other = "email" if kind == "coverLetter" else "coverLetter"
            await asyncio.wait_for(self._started.setdefault(other, asyncio.Event()).wait(), timeout=2)
        else:
            await asyncio.sleep(0)
        self.events.append(f"end:{kind}")
        if self.fail_on == kind:
            raise RuntimeError(f"{kind} generation exploded")
        if kind == "cv":
            return self.cv_response
        return COVER_LETTER_TEXT if kind == "coverLetter" else EMAIL_TEXT


@pytest.fixture
def sample_resume():
    return json.loads(json.dumps(SAMPLE_RESUME))


@pytest.fixture
def scripted_llm():
    return ScriptedLLM()


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=str(tmp_path), upload_dir=str(tmp_path / "uploads"), api_key="test-key")


def make_docx(*lines: str) -> bytes:
    document = Document()
    for line in lines:
        document.add_paragraph(line)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def jane_docx():
    return make_docx("Jane Doe", "jane@x.com, 555-1234, Boston", "Backend Engineer at Acme Corp")


@pytest.fixture
def docx_factory():
    return make_docx


@pytest.fixture
def llm_factory():
    return ScriptedLLM
