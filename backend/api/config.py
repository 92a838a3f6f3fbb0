import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

MB = 1024 * 1024


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw not in (None, "") else default


class Settings(BaseModel):
    """Process configuration, read once at startup and handed to the app explicitly."""

    api_key: Optional[str] = None
    llm_base_url: str = "https://api.deepseek.com"
    llm_model: str = "deepseek-chat"
    llm_temperature: float = 0.5
    llm_timeout_seconds: float = 120.0
    llm_max_retries: int = 2
    llm_retry_base_delay: float = 0.5

    cv_max_tokens: int = 4000
    cover_letter_max_tokens: int = 2048
    email_max_tokens: int = 1024

    data_dir: str = "./data"
    upload_dir: Optional[str] = None
    max_upload_bytes: int = 10 * MB
    static_dir: Optional[str] = None
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @property
    def uploads_path(self) -> str:
        return self.upload_dir or os.path.join(self.data_dir, "uploads")

    def ensure_dirs(self) -> None:
        os.makedirs(self.uploads_path, exist_ok=True)

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()
        origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
        return cls(
            api_key=os.getenv("DEEPSEEK_API_KEY") or None,
            llm_base_url=os.getenv("LLM_BASE_URL", "https://api.deepseek.com"),
            llm_model=os.getenv("LLM_MODEL", "deepseek-chat"),
            llm_temperature=_env_float("LLM_TEMPERATURE", 0.5),
            llm_timeout_seconds=_env_float("LLM_TIMEOUT_SECONDS", 120.0),
            llm_max_retries=_env_int("LLM_MAX_RETRIES", 2),
            llm_retry_base_delay=_env_float("LLM_RETRY_BASE_DELAY", 0.5),
            cv_max_tokens=_env_int("CV_MAX_TOKENS", 4000),
            cover_letter_max_tokens=_env_int("COVER_LETTER_MAX_TOKENS", 2048),
            email_max_tokens=_env_int("EMAIL_MAX_TOKENS", 1024),
            data_dir=os.getenv("DATA_DIR", "./data"),
            upload_dir=os.getenv("UPLOAD_DIR") or None,
            max_upload_bytes=_env_int("MAX_UPLOAD_BYTES", 10 * MB),
            static_dir=os.getenv("STATIC_DIR") or None,
            cors_origins=origins or ["*"],
            host=os.getenv("HOST", "0.0.0.0"),
            port=_env_int("PORT", 3000),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
