from typing import Annotated

from pydantic import BaseModel, Field, field_validator


class JobExperience(BaseModel):
    title: Annotated[str, "Job position title"] = ""
    company: Annotated[str, "Company name"] = ""
    location: Annotated[str, "City, State/Country"] = ""
    dates: Annotated[str, "Start - End dates as written on the CV"] = ""
    achievements: Annotated[list[str], "Bullets rewritten toward the target job"] = Field(default_factory=list)

    @field_validator("title", "company", "location", "dates", mode="before")
    @classmethod
    def _blank_if_missing(cls, value):
        return "" if value is None else value

    @field_validator("achievements", mode="before")
    @classmethod
    def _empty_if_missing(cls, value):
        return [] if value is None else value
