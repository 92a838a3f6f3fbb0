import json
import logging

from pydantic import ValidationError

from models.resume import ResumeData
from utils.errors import ResumeParseError

logger = logging.getLogger("magiccv.writer")


class ResumeWriter:
    """
    Turn the model's CV answer into structured resume data.
    """
    @staticmethod
    def clean_tools_output(raw: str) -> str:
        # strip markdown fences the model may wrap its JSON in
        return raw.replace("```json", "").replace("```JSON", "").replace("```", "").strip()

    @staticmethod
    def to_json(raw: str) -> dict:
        cleaned = ResumeWriter.clean_tools_output(raw)
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise ResumeParseError(f"JSON parsing of the tailored CV failed: {e}", raw=raw)
        if not isinstance(data, dict):
            raise ResumeParseError("JSON parsing of the tailored CV failed: expected an object", raw=raw)
        return data

    @staticmethod
    def to_resume(raw: str) -> ResumeData:
        data = ResumeWriter.to_json(raw)
        try:
            resume = ResumeData.model_validate(data)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise ResumeParseError(f"Tailored CV JSON is missing or has invalid fields: {fields}", raw=raw)
        logger.info(
            "Parsed tailored CV; experience=%d skills=%d education=%d",
            len(resume.experience), len(resume.skills), len(resume.education),
        )
        return resume
