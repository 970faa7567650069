from .logging import configure_logging, get_logger, resolve_log_level

__all__ = [
    "configure_logging",
    "get_logger",
    "resolve_log_level",
]
