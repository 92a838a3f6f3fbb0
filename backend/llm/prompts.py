from typing import NamedTuple

from utils.file_io import load_prompt


class PromptPair(NamedTuple):
    system: str
    user: str


def _pair(name: str, **values: str) -> PromptPair:
    system = load_prompt(f"{name}_system").template.strip()
    user = load_prompt(f"{name}_user").substitute(**values).strip()
    return PromptPair(system, user)


def build_cv_prompt(cv_text: str, job_description: str) -> PromptPair:
    """Prompt for the structured CV; the model must answer with JSON only."""
    return _pair("cv", cv_text=cv_text, job_description=job_description)


def build_cover_letter_prompt(candidate_name: str, job_description: str, cv_text: str) -> PromptPair:
    return _pair("cover_letter", candidate_name=candidate_name, job_description=job_description, cv_text=cv_text)


def build_email_prompt(candidate_name: str, job_description: str) -> PromptPair:
    return _pair("email", candidate_name=candidate_name, job_description=job_description)
