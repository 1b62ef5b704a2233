"""Core types: results, exit codes, configuration."""

from .config import ConfigError, LaunchConfig, Settings, load_settings
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "LaunchConfig",
    "Settings",
    "load_settings",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
