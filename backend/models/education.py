from typing import Annotated

from pydantic import BaseModel, field_validator


class Education(BaseModel):
    degree: Annotated[str, "Degree obtained or pursued"] = ""
    institution: Annotated[str, "Name of the educational institution"] = ""
    dates: Annotated[str, "Start - End dates"] = ""
    details: Annotated[str, "Honours, thesis or other notes"] = ""

    @field_validator("degree", "institution", "dates", "details", mode="before")
    @classmethod
    def _blank_if_missing(cls, value):
        return "" if value is None else value
