"""Default configuration parameters for the JSON record module."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TokenizerParams:
    """Options handed to the ijson tokenizer."""
    allow_comments: bool = False      # Accept /* */ and // comments (C backends only)
    buf_size: int = 64 * 1024         # Bytes read from the stream per chunk

    def backend_options(self) -> dict[str, Any]:
        """Backend keyword arguments, leaving out ones at their defaults."""
        options: dict[str, Any] = {}
        if self.allow_comments:
            options["allow_comments"] = True
        return options


@dataclass(frozen=True)
class CodecParams:
    """Serialization behaviour."""
    emit_type_hints: bool = True      # Write "__type" for registered contracts


@dataclass(frozen=True)
class LoggingParams:
    """Arguments for configure_logging."""
    level: str = "INFO"
    format_json: bool = False
    include_timestamp: bool = True
    include_caller: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    tokenizer: TokenizerParams
    codec: CodecParams
    logging: LoggingParams
    types: dict[str, str]


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        tokenizer=TokenizerParams(),
        codec=CodecParams(),
        logging=LoggingParams(),
        types={},
    )
