import logging
import logging.handlers
from rich.logging import RichHandler
from rich.console import Console

from .config import Settings

# Structured fields attached via `extra=` by the alert evaluator and config watcher
STRUCTURED_FIELDS = (
    "operation",
    "alert_tag",
    "path",
    "total_bytes",
    "free_bytes",
    "min_free_bytes",
    "setting",
    "old_value",
    "new_value",
)

FILE_FORMAT = (
    "%(asctime)s - %(levelname)s - "
    "%(filename)s:%(lineno)d in %(funcName)s() - "
    "%(message)s"
)


class StructuredFieldsFormatter(logging.Formatter):
    """Appends known `extra` fields to the line as `key=value` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = [
            f"{name}={getattr(record, name)}"
            for name in STRUCTURED_FIELDS
            if hasattr(record, name)
        ]
        if not fields:
            return line
        return f"{line} [{' '.join(fields)}]"


def setup_logging(settings: Settings) -> None:
    log_dir = settings.log_directory
    log_dir.mkdir(parents=True, exist_ok=True)

    # Console shows the message only; alert fields go to the file log
    rich_handler = RichHandler(
        console=Console(width=120),
        show_time=True,
        show_level=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(settings.log_level)

    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=settings.log_file_path,
        when="midnight",
        backupCount=settings.log_retention_days,
        encoding="utf-8",
    )
    file_handler.setLevel(settings.log_level)
    file_handler.setFormatter(StructuredFieldsFormatter(FILE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(rich_handler)
    root_logger.addHandler(file_handler)

    # Silence noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.info(
        f"Logging initialized - File: {settings.log_file_path}, "
        f"Level: {settings.log_level}, "
        f"Retention: {settings.log_retention_days} days, "
        f"Alert repeat interval: {settings.storage_space_alert_despam_interval_seconds}s"
    )
