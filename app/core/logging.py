import logging
import os
from typing import Optional


DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | video=%(video_id)s task=%(task)s | %(message)s"
)

# Request-level chatter from HTTP clients; their URLs carry API query params.
NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "cohere")


class ContextFilter(logging.Filter):
    """Fills ``video_id``/``task`` for records logged without them."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        for field in ("video_id", "task"):
            if not hasattr(record, field):
                setattr(record, field, "-")
        return True


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure the root logger once: one stream handler, context-aware format."""
    resolved_level = getattr(logging, (level or DEFAULT_LEVEL).upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(resolved_level)

    # Uvicorn reloads re-run this; drop handlers from the previous run
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    handler.addFilter(ContextFilter())
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Module logger; sets up the root logger on first use."""
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
