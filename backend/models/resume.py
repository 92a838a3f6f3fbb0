from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .education import Education
from .job_experience import JobExperience
from .personal_info import PersonalInfo


class ResumeData(BaseModel):
    """Structured CV produced by the model and consumed by the writers."""

    model_config = ConfigDict(populate_by_name=True)

    personal_info: Annotated[PersonalInfo, "Exact contact details from the original CV"] = Field(alias="personalInfo")
    summary: Annotated[str, "Professional summary (3-4 sentences)"] = ""
    experience: Annotated[list[JobExperience], "List of job experiences."] = Field(default_factory=list)
    skills: Annotated[list[str], "List of skills."] = Field(default_factory=list)
    education: Annotated[list[Education], "List of educational qualifications."] = Field(default_factory=list)

    @field_validator("summary", mode="before")
    @classmethod
    def _blank_if_missing(cls, value):
        return "" if value is None else value

    @field_validator("experience", "skills", "education", mode="before")
    @classmethod
    def _empty_if_missing(cls, value):
        return [] if value is None else value

    @property
    def candidate_name(self) -> str:
        return self.personal_info.full_name
