from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_MIME = "application/pdf"

ALLOWED_UPLOAD_TYPES = {
    PDF_MIME: ".pdf",
    DOCX_MIME: ".docx",
}


class DocumentKind(str, Enum):
    """Documents a single request can produce, keyed as in the response payload."""

    CV = "cv"
    COVER_LETTER = "coverLetter"
    EMAIL = "email"

    @property
    def file_suffix(self) -> str:
        return {
            DocumentKind.CV: "CV",
            DocumentKind.COVER_LETTER: "Cover_Letter",
            DocumentKind.EMAIL: "Email",
        }[self]


class GenerationOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cv: bool = False
    cover_letter: bool = Field(default=False, alias="coverLetter")
    email: bool = False
    format: Literal["docx", "pdf"] = "docx"

    def selected(self) -> list[DocumentKind]:
        kinds = []
        if self.cv:
            kinds.append(DocumentKind.CV)
        if self.cover_letter:
            kinds.append(DocumentKind.COVER_LETTER)
        if self.email:
            kinds.append(DocumentKind.EMAIL)
        return kinds


class GenerationRequest(BaseModel):
    """One upload plus the job it should be tailored to. Never persisted."""

    job_description: str
    cv_file_bytes: bytes
    cv_mime_type: str
    options: GenerationOptions


class GeneratedDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    preview: Annotated[str, "Text the model produced for this document"]
    file_name: Annotated[str, "Suggested download name"] = Field(alias="fileName")
    file_data: Annotated[str, "Base64 of the rendered file"] = Field(alias="fileData")
    mime_type: Annotated[str, "MIME type of the rendered file"] = Field(alias="mimeType")
