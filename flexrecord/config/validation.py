"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from typing import Any

from .defaults import CodecParams, DefaultConfig, LoggingParams, TokenizerParams

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
_SECTIONS = frozenset(f.name for f in fields(DefaultConfig))


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _section_errors(section: str, params: Any,
                    params_type: type) -> list[ValidationError]:
    """A section must be a mapping holding only the fields of params_type."""
    if not isinstance(params, dict):
        return [ValidationError(
            field=section,
            message="Must be a mapping",
            value=params
        )]

    known = {f.name for f in fields(params_type)}
    return [
        ValidationError(
            field=f"{section}.{name}",
            message=f"Unknown option; expected one of {', '.join(sorted(known))}",
            value=params[name]
        )
        for name in params if name not in known
    ]


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_tokenizer_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate tokenizer parameters."""
        errors = _section_errors("tokenizer", params, TokenizerParams)
        if not isinstance(params, dict):
            return errors

        if "allow_comments" in params:
            value = params["allow_comments"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="tokenizer.allow_comments",
                    message="Must be a boolean",
                    value=value
                ))

        if "buf_size" in params:
            value = params["buf_size"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="tokenizer.buf_size",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_codec_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate codec parameters."""
        errors = _section_errors("codec", params, CodecParams)
        if not isinstance(params, dict):
            return errors

        if "emit_type_hints" in params:
            value = params["emit_type_hints"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="codec.emit_type_hints",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = _section_errors("logging", params, LoggingParams)
        if not isinstance(params, dict):
            return errors

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in _LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {', '.join(sorted(_LOG_LEVELS))}",
                    value=value
                ))

        for name in ("format_json", "include_timestamp", "include_caller"):
            if name in params and not isinstance(params[name], bool):
                errors.append(ValidationError(
                    field=f"logging.{name}",
                    message="Must be a boolean",
                    value=params[name]
                ))

        return errors

    @staticmethod
    def validate_types(types: Any) -> list[ValidationError]:
        """Validate the wire name -> "module:ContractName" table."""
        if not isinstance(types, dict):
            return [ValidationError(
                field="types",
                message="Must be a mapping of wire names to 'module:ContractName'",
                value=types
            )]

        errors = []
        for name, reference in types.items():
            if not isinstance(name, str) or not name:
                errors.append(ValidationError(
                    field="types",
                    message="Wire names must be non-empty strings",
                    value=name
                ))
            if not isinstance(reference, str) or reference.count(":") != 1 \
                    or not all(reference.split(":")):
                errors.append(ValidationError(
                    field=f"types.{name}",
                    message="Must be of the form 'module:ContractName'",
                    value=reference
                ))

        # The registry is a bijection, so contracts may not repeat either
        references = [r for r in types.values() if isinstance(r, str)]
        for reference in sorted({r for r in references if references.count(r) > 1}):
            errors.append(ValidationError(
                field="types",
                message="Contract registered under more than one name",
                value=reference
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        for section in config:
            if section not in _SECTIONS:
                errors.append(ValidationError(
                    field=section,
                    message=f"Unknown section; expected one of {', '.join(sorted(_SECTIONS))}",
                    value=config[section]
                ))

        if "tokenizer" in config:
            errors.extend(ConfigValidator.validate_tokenizer_params(config["tokenizer"]))

        if "codec" in config:
            errors.extend(ConfigValidator.validate_codec_params(config["codec"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        if "types" in config and config["types"] is not None:
            errors.extend(ConfigValidator.validate_types(config["types"]))

        return errors
