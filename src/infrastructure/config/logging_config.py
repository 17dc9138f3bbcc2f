"""
Logging configuration.

Стандартный logging: один stream handler на корневом логгере,
модули получают логгер через logging.getLogger(__name__).
"""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Настроить корневой логгер (повторный вызов не дублирует handler)."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    if not any(getattr(h, "_newspaper_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._newspaper_handler = True
        root.addHandler(handler)
