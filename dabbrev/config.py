import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from rich.logging import RichHandler

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
TRACE_LOGGER = "dabbrev.trace"


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    # Logging
    log_level: str = Field(default="WARNING", alias="DABBREV_LOG_LEVEL")
    trace: bool = Field(default=False, alias="DABBREV_TRACE")

    # Sources
    wrap_width: int | None = Field(default=None, ge=2, alias="DABBREV_WRAP_WIDTH")
    history_lines: int = Field(default=2000, ge=1, alias="DABBREV_HISTORY_LINES")

    # Completion menu
    max_completions: int = Field(default=26, ge=1, alias="DABBREV_MAX_COMPLETIONS")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = str(value).upper()
        if level == "WARN":
            level = "WARNING"
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    def tracer(self) -> logging.Logger | None:
        """Logger for tokenizer tracing, or None when tracing is off."""
        if not self.trace:
            return None
        return logging.getLogger(TRACE_LOGGER)


def setup_logging(level: str = "WARNING", trace: bool = False) -> logging.Logger:
    """Attach a rich handler to the ``dabbrev`` logger once."""
    logger = logging.getLogger("dabbrev")
    logger.setLevel(level)
    if not logger.handlers:
        handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    logging.getLogger(TRACE_LOGGER).setLevel(logging.DEBUG if trace else logging.NOTSET)
    return logger
