from .education import Education
from .generation import (
    ALLOWED_UPLOAD_TYPES,
    DOCX_MIME,
    PDF_MIME,
    DocumentKind,
    GeneratedDocument,
    GenerationOptions,
    GenerationRequest,
)
from .job_experience import JobExperience
from .personal_info import PersonalInfo
from .resume import ResumeData

__all__ = [
    "ALLOWED_UPLOAD_TYPES",
    "DOCX_MIME",
    "PDF_MIME",
    "DocumentKind",
    "Education",
    "GeneratedDocument",
    "GenerationOptions",
    "GenerationRequest",
    "JobExperience",
    "PersonalInfo",
    "ResumeData",
]
