import asyncio
import base64
import logging
import re
from typing import Callable, Optional

from langgraph.graph import END, START, StateGraph

from api.config import Settings
from documents import BaseWriter, ResumeWriter, get_writer
from llm.base import BaseLLM
from llm.prompts import build_cover_letter_prompt, build_cv_prompt, build_email_prompt
from llm.state import TailorState
from models.generation import (
    ALLOWED_UPLOAD_TYPES,
    DocumentKind,
    GeneratedDocument,
    GenerationRequest,
)
from utils.errors import RequestValidationFailed
from utils.ingest import extract_text

# Heading of each plain-text document
TEXT_TITLES = {
    DocumentKind.COVER_LETTER: "Cover Letter",
    DocumentKind.EMAIL: "Application Email",
}

# Phase 2 node per document kind; names must not clash with state keys
PHASE_TWO_NODES = {
    DocumentKind.CV: "write_cv",
    DocumentKind.COVER_LETTER: "write_cover_letter",
    DocumentKind.EMAIL: "write_email",
}


def validate_request(request: GenerationRequest) -> None:
    """Reject a request before any extraction or model call happens."""
    if not request.cv_file_bytes:
        raise RequestValidationFailed("No CV file uploaded")
    if request.cv_mime_type not in ALLOWED_UPLOAD_TYPES:
        raise RequestValidationFailed("Invalid file type. Only PDF and DOCX files are allowed.")
    if not (request.job_description or "").strip():
        raise RequestValidationFailed("Job description is required")
    if not request.options.selected():
        raise RequestValidationFailed("Select at least one document to generate")


def document_file_name(candidate_name: str, kind: DocumentKind, fmt: str) -> str:
    safe_name = re.sub(r"[\\/:*?\"<>|]+", "_", candidate_name).strip() or "Candidate"
    return f"{safe_name}_{kind.file_suffix}.{fmt}"


class TailorPipeline:
    """
    Turns one uploaded CV and a job description into the requested documents.

    The work is a two-phase task graph. Phase 1 (``tailor_cv``) always runs
    first because every other document needs the candidate's name from the
    structured CV. Phase 2 fans out to the selected writers, which run
    concurrently and share nothing but the read-only phase 1 output. Any
    failure aborts the whole request; no partial results are returned.
    Attributes:
        llm (BaseLLM): Completion backend used for every model call.
        settings (Settings): Token budgets and other knobs.
        extractor (Callable): bytes + MIME type -> CV text.
    Methods:
        run(request: GenerationRequest) -> dict[str, GeneratedDocument]:
            Executes the pipeline and returns documents keyed by kind.
    """

    def __init__(
        self,
        llm: BaseLLM,
        settings: Optional[Settings] = None,
        extractor: Callable[[bytes, str], str] = extract_text,
    ):
        self.llm = llm
        self.settings = settings or Settings()
        self.extractor = extractor
        self.logger = logging.getLogger("magiccv.pipeline")
        self.graph = self._build_graph()

    def _build_graph(self):
        graph = StateGraph(TailorState)
        graph.add_node("tailor_cv", self._tailor_cv)
        graph.add_node(PHASE_TWO_NODES[DocumentKind.CV], self._write_cv)
        graph.add_node(PHASE_TWO_NODES[DocumentKind.COVER_LETTER], self._write_cover_letter)
        graph.add_node(PHASE_TWO_NODES[DocumentKind.EMAIL], self._write_email)
        graph.add_edge(START, "tailor_cv")
        graph.add_conditional_edges("tailor_cv", self._route, [*PHASE_TWO_NODES.values(), END])
        for node in PHASE_TWO_NODES.values():
            graph.add_edge(node, END)
        return graph.compile()

    async def run(self, request: GenerationRequest) -> dict[str, GeneratedDocument]:
        validate_request(request)
        selected = request.options.selected()
        self.logger.info(
            "Pipeline start; selected=%s format=%s jd_chars=%d",
            ",".join(k.value for k in selected), request.options.format, len(request.job_description),
        )
        cv_text = await asyncio.to_thread(self.extractor, request.cv_file_bytes, request.cv_mime_type)
        state = await self.graph.ainvoke({
            "cv_text": cv_text,
            "job_description": request.job_description,
            "options": request.options,
        })
        results = {kind.value: state[kind.value] for kind in selected}
        self.logger.info("Pipeline complete; documents=%d", len(results))
        return results

    # ---- graph nodes ----

    def _route(self, state: TailorState) -> list[str]:
        targets = [PHASE_TWO_NODES[kind] for kind in state["options"].selected()]
        return targets or [END]

    async def _tailor_cv(self, state: TailorState) -> dict:
        prompt = build_cv_prompt(state["cv_text"], state["job_description"])
        raw = await self.llm.complete(prompt.system, prompt.user, self.settings.cv_max_tokens)
        resume = ResumeWriter.to_resume(raw)
        self.logger.info("Tailored CV ready; candidate name resolved")
        return {"cv_raw": raw, "resume": resume}

    async def _write_cv(self, state: TailorState) -> dict:
        writer = get_writer(state["options"].format)
        data = await asyncio.to_thread(writer.write_resume, state["resume"])
        return {DocumentKind.CV.value: self._package(DocumentKind.CV, state, state["cv_raw"], data, writer)}

    async def _write_cover_letter(self, state: TailorState) -> dict:
        prompt = build_cover_letter_prompt(
            state["resume"].candidate_name, state["job_description"], state["cv_text"]
        )
        text = await self.llm.complete(prompt.system, prompt.user, self.settings.cover_letter_max_tokens)
        return await self._write_text(DocumentKind.COVER_LETTER, state, text)

    async def _write_email(self, state: TailorState) -> dict:
        prompt = build_email_prompt(state["resume"].candidate_name, state["job_description"])
        text = await self.llm.complete(prompt.system, prompt.user, self.settings.email_max_tokens)
        return await self._write_text(DocumentKind.EMAIL, state, text)

    async def _write_text(self, kind: DocumentKind, state: TailorState, text: str) -> dict:
        writer = get_writer(state["options"].format)
        data = await asyncio.to_thread(writer.write_text, TEXT_TITLES[kind], text)
        return {kind.value: self._package(kind, state, text, data, writer)}

    def _package(self, kind: DocumentKind, state: TailorState, preview: str, data: bytes, writer: BaseWriter) -> GeneratedDocument:
        name = document_file_name(state["resume"].candidate_name, kind, writer.file_ending)
        self.logger.info("Document ready kind=%s file=%s bytes=%d", kind.value, name, len(data))
        return GeneratedDocument(
            preview=preview,
            file_name=name,
            file_data=base64.b64encode(data).decode("ascii"),
            mime_type=writer.mime_type,
        )
