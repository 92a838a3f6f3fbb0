from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PersonalInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: Annotated[str, "Candidate's exact full name as written on the CV"] = Field(alias="fullName", min_length=1)
    email: Annotated[str, "Contact email"] = ""
    phone: Annotated[str, "Contact phone number"] = ""
    location: Annotated[str, "City, State/Country"] = ""
    linkedin: Annotated[str, "LinkedIn profile URL or handle"] = ""

    @field_validator("email", "phone", "location", "linkedin", mode="before")
    @classmethod
    def _blank_if_missing(cls, value):
        return "" if value is None else value

    def contact_line(self) -> str:
        """Join the populated contact fields the way the CV header shows them."""
        return " | ".join(part for part in (self.email, self.phone, self.location, self.linkedin) if part)
