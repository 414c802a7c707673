"""Configuration for the JSON record module: defaults, loading and validation."""

from .defaults import CodecParams, DefaultConfig, LoggingParams, TokenizerParams, get_default_config
from .loader import ConfigLoader
from .validation import ConfigValidator, ValidationError

__all__ = [
    "CodecParams",
    "ConfigLoader",
    "ConfigValidator",
    "DefaultConfig",
    "LoggingParams",
    "TokenizerParams",
    "ValidationError",
    "get_default_config",
]
