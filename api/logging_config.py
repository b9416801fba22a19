"""Logging setup for the AspScope API.

The API layer logs through stdlib ``logging`` under the ``aspscope`` namespace.
The processor modules (normalizer, SQL queries) log through loguru; their
records get a separate dated file so normalization drift warnings stay
searchable apart from request logs.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from loguru import logger as loguru_logger

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
# Set to 1 to log every statement, including the generated normalization CASE
SQL_ECHO = os.getenv("ASP_SQL_ECHO", "0") == "1"

API_LOGGER = "aspscope"

_processor_sink_id: int | None = None

_FORMAT = logging.Formatter(
    "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def setup_logging(log_dir: Path | None = None, level: str | None = None) -> logging.Logger:
    """Attach console/file handlers to the ``aspscope`` logger and a loguru file sink.

    Safe to call more than once: handlers are only added the first time.
    """
    global _processor_sink_id

    log_dir = Path(log_dir or LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)

    api_logger = logging.getLogger(API_LOGGER)
    api_logger.setLevel(log_level)
    api_logger.propagate = False

    if not api_logger.handlers:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(_FORMAT)
        api_logger.addHandler(console)

        file_handler = RotatingFileHandler(
            log_dir / "aspscope-api.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(_FORMAT)
        api_logger.addHandler(file_handler)

        _processor_sink_id = loguru_logger.add(
            str(log_dir / "asp_processor_{time:YYYY-MM-DD}.log"),
            rotation="1 day",
            retention="7 days",
            level="DEBUG" if log_level <= logging.DEBUG else "INFO",
            filter=lambda record: record["name"].startswith("processor."),
            encoding="utf-8",
        )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if SQL_ECHO else logging.WARNING)
    return api_logger


def shutdown_logging():
    """Detach what ``setup_logging`` attached and close the log files."""
    global _processor_sink_id

    api_logger = logging.getLogger(API_LOGGER)
    for handler in list(api_logger.handlers):
        api_logger.removeHandler(handler)
        handler.close()
    if _processor_sink_id is not None:
        loguru_logger.remove(_processor_sink_id)
        _processor_sink_id = None
