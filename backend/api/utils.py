import os
import json
import time
import random
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import UploadFile
from pydantic import ValidationError

from models.generation import ALLOWED_UPLOAD_TYPES, GenerationOptions
from utils.errors import RequestValidationFailed

logger = logging.getLogger("magiccv.api.utils")

CHUNK_SIZE = 1024 * 1024


def parse_options(raw: Optional[str]) -> GenerationOptions:
    """Parse the multipart ``options`` field (a JSON string) into GenerationOptions."""
    if raw is None or not raw.strip():
        raise RequestValidationFailed("Generation options are required")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise RequestValidationFailed(f"Options must be valid JSON: {e}")
    if not isinstance(data, dict):
        raise RequestValidationFailed("Options must be a JSON object")
    try:
        options = GenerationOptions.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise RequestValidationFailed(f"Invalid options: {fields}")
    if not options.selected():
        raise RequestValidationFailed("Select at least one document to generate")
    return options


def _upload_filename(file: UploadFile) -> str:
    ext = os.path.splitext(file.filename or "")[1].lower() or ALLOWED_UPLOAD_TYPES[file.content_type]
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"


async def save_upload(file: UploadFile, upload_dir: str, max_bytes: int) -> str:
    """Stream an uploaded CV into upload_dir, enforcing type and size limits.

    Returns the path of the written file. Nothing is left behind on failure.
    """
    if file.content_type not in ALLOWED_UPLOAD_TYPES:
        raise RequestValidationFailed("Invalid file type. Only PDF and DOCX files are allowed.")
    os.makedirs(upload_dir, exist_ok=True)
    path = os.path.join(upload_dir, _upload_filename(file))
    written = 0
    try:
        with open(path, "wb") as fh:
            while chunk := await file.read(CHUNK_SIZE):
                written += len(chunk)
                if written > max_bytes:
                    raise RequestValidationFailed(
                        f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB."
                    )
                fh.write(chunk)
    except BaseException:
        _remove(path)
        raise
    if not written:
        _remove(path)
        raise RequestValidationFailed("Uploaded CV file is empty")
    logger.info("Stored upload filename=%s size=%d bytes", file.filename, written)
    return path


@asynccontextmanager
async def temporary_upload(file: UploadFile, upload_dir: str, max_bytes: int) -> AsyncIterator[str]:
    """Hold an uploaded CV on disk for the duration of the block, then delete it."""
    path = await save_upload(file, upload_dir, max_bytes)
    try:
        yield path
    finally:
        _remove(path)


def _remove(path: str) -> None:
    try:
        os.remove(path)
        logger.info("Removed upload %s", os.path.basename(path))
    except FileNotFoundError:
        pass
