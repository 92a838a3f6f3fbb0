import asyncio
import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from api.config import Settings
from api.schemas import ErrorResponse, TailorResponse
from api.state import get_pipeline, get_settings
from api.utils import parse_options, temporary_upload
from models.generation import GenerationRequest
from pipeline import TailorPipeline
from utils.errors import RequestValidationFailed, TailorError

logger = logging.getLogger("magiccv.api.tailor")
router = APIRouter()


@router.post(
    "/api/tailor-cv",
    response_model=TailorResponse,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse, "description": "Any failure; no partial results"}},
)
async def tailor_cv(
    cv: Optional[UploadFile] = File(None),
    jobDescription: Optional[str] = Form(None),
    options: Optional[str] = Form(None),
    settings: Settings = Depends(get_settings),
    pipeline: TailorPipeline = Depends(get_pipeline),
):
    """Tailor the uploaded CV to a job and return the selected documents base64-encoded."""
    # Cheap checks first so nothing touches disk or the model on a bad request
    if cv is None:
        raise RequestValidationFailed("No CV file uploaded")
    if not (jobDescription or "").strip():
        raise RequestValidationFailed("Job description is required")
    opts = parse_options(options)
    logger.info(
        "Tailor requested; file=%s type=%s format=%s selected=%s",
        cv.filename, cv.content_type, opts.format, ",".join(k.value for k in opts.selected()),
    )
    try:
        async with temporary_upload(cv, settings.uploads_path, settings.max_upload_bytes) as path:
            data = await asyncio.to_thread(Path(path).read_bytes)
            results = await pipeline.run(GenerationRequest(
                job_description=jobDescription,
                cv_file_bytes=data,
                cv_mime_type=cv.content_type,
                options=opts,
            ))
    except TailorError:
        raise
    except Exception as e:
        logger.exception("Unexpected error while tailoring CV")
        raise TailorError(str(e) or "Internal server error") from e
    response = TailorResponse(success=True, **results)
    return JSONResponse(content=response.model_dump(by_alias=True, exclude_none=True))
