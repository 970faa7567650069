import json
import logging
import os
import sys
from logging import Logger
from typing import Optional

LOG_LEVEL_ENV_VARS = ("ONLINE_LEARNING_LOG_LEVEL", "LOG_LEVEL")


class JsonFormatter(logging.Formatter):
    """Structured JSON formatter for log records."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%SZ"),
        }
        if record.exc_info:
            log["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log)


def resolve_log_level(level: Optional[str] = None) -> str:
    """Explicit level first, then the environment, then INFO."""
    if level:
        return level.upper()
    for name in LOG_LEVEL_ENV_VARS:
        env_level = os.getenv(name)
        if env_level:
            return env_level.upper()
    return "INFO"


def configure_logging(level: Optional[str] = None, json_output: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configure global logging. Uses stdout by default; can additionally tee to a file.

    The library itself never calls this; training scripts do.
    """
    effective_level = resolve_log_level(level)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    formatter: logging.Formatter
    if json_output:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    for handler in handlers:
        handler.setFormatter(formatter)
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.INFO),
        handlers=handlers,
        force=True,
    )


def get_logger(name: str) -> Logger:
    return logging.getLogger(f"online_learning.{name}")
