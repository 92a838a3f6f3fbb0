import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

BASE_LOGGER = "magiccv"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s req=%(request_id)s - %(message)s"

# asyncio tasks and to_thread calls copy the current context, so phase 2 log lines keep the id
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class ContextFilter(logging.Filter):
    """Stamp each record with the id of the request being served, or "-"."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.request_id = request_id_var.get() or "-"
        return True


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Configure the ``magiccv`` logger tree once; later calls only adjust the level.

    Module loggers are children of ``magiccv`` and propagate to its single
    stream handler, which Uvicorn leaves on stdout.
    """
    base = logging.getLogger(BASE_LOGGER)
    base.setLevel(_resolve_level(level))
    if not any(getattr(h, "_magiccv", False) for h in base.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(ContextFilter())
        handler._magiccv = True
        base.addHandler(handler)
        base.propagate = False  # root may carry its own handler under uvicorn --reload
    return base


@contextmanager
def request_context(request_id: Optional[str] = None) -> Iterator[str]:
    """Bind a request id for the duration of the block and restore the previous one after."""
    rid = request_id or uuid.uuid4().hex
    token = request_id_var.set(rid)
    try:
        yield rid
    finally:
        request_id_var.reset(token)
