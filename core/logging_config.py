"""Logging configuration for the Call Center Dashboard"""

import logging
import sys
from pathlib import Path
from pythonjsonlogger import jsonlogger
from typing import Iterable, Optional


# Record attributes set by DialogLoggerAdapter
DIALOG_FIELDS = ("dialog", "session")

# Libraries that log every rerun or file event at INFO
NOISY_LOGGERS = ("streamlit", "asyncio", "watchdog")


class DialogTextFormatter(logging.Formatter):
    """Plain text formatter that appends dialog context when a record carries it"""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = [f"{key}={getattr(record, key)}" for key in DIALOG_FIELDS if hasattr(record, key)]
        if context:
            line = f"{line} [{' '.join(context)}]"
        return line


def build_formatter(json_format: bool, app_name: Optional[str] = None) -> logging.Formatter:
    """
    Formatter shared by every handler

    JSON records keep adapter extras (dialog, session) as top-level keys and
    carry the application name when one is given.
    """
    if json_format:
        return jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "asctime": "timestamp"},
            static_fields={"app": app_name} if app_name else {}
        )
    return DialogTextFormatter(
        "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = True,
    app_name: Optional[str] = None,
    quiet_loggers: Iterable[str] = NOISY_LOGGERS
) -> None:
    """
    Configure the root logger for the dashboard and the CLI

    Args:
        log_level: Logging level name, case-insensitive
        log_file: Optional file that receives the same records as stdout
        json_format: Emit python-json-logger records instead of text lines
        app_name: Added to every JSON record as ``app``
        quiet_loggers: Loggers raised to WARNING
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Reconfiguring replaces, never stacks, handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = build_formatter(json_format, app_name)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module (pass ``__name__``)"""
    return logging.getLogger(name)


class DialogLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that tags records with the dialog they came from"""

    def process(self, msg, kwargs):
        """Add dialog context to log messages"""
        extra = dict(kwargs.get("extra") or {})

        for key in DIALOG_FIELDS:
            if key in self.extra:
                extra.setdefault(key, self.extra[key])

        kwargs["extra"] = extra
        return msg, kwargs
