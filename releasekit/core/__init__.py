"""Core types shared by every layer."""

from .config import Configuration, ConfigError, config_from_env, load_config
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "Configuration",
    "ConfigError",
    "config_from_env",
    "load_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
