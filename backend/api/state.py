from fastapi import Request

from api.config import Settings
from pipeline import TailorPipeline


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_pipeline(request: Request) -> TailorPipeline:
    return request.app.state.pipeline
