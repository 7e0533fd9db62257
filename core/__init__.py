"""Core module for the Call Center Dashboard"""

from .logging_config import setup_logging, get_logger, DialogLoggerAdapter
from .exceptions import (
    CallCenterException,
    FormException,
    SchemaException,
    FieldNotFoundException,
    DialogStateException,
    SaveException
)

__all__ = [
    "setup_logging",
    "get_logger",
    "DialogLoggerAdapter",
    "CallCenterException",
    "FormException",
    "SchemaException",
    "FieldNotFoundException",
    "DialogStateException",
    "SaveException"
]
