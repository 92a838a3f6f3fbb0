from typing_extensions import TypedDict

from models.generation import GeneratedDocument, GenerationOptions
from models.resume import ResumeData


class TailorState(TypedDict, total=False):
    cv_text: str
    job_description: str
    options: GenerationOptions
    # Written by the phase 1 node
    cv_raw: str
    resume: ResumeData
    # Each phase 2 node owns exactly one key, so parallel writes never collide
    cv: GeneratedDocument
    coverLetter: GeneratedDocument
    email: GeneratedDocument
