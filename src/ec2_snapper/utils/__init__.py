# utils/__init__.py

from .logger import setup_logger, set_console_level
from .exceptions import (
    CLIError,
    SnapperError,
    ValidationError,
    AuthError,
    NotFoundError,
    InvalidFormatError,
    ExternalServiceError,
    ValidationRules,
)
from .session import SessionManager, assume_role
from .config import ConfigManager

__all__ = [
    "setup_logger",
    "set_console_level",
    "CLIError",
    "SnapperError",
    "ValidationError",
    "AuthError",
    "NotFoundError",
    "InvalidFormatError",
    "ExternalServiceError",
    "ValidationRules",
    "SessionManager",
    "assume_role",
    "ConfigManager",
]
