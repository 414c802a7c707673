"""
Centralized logging configuration for flexrecord.

This module provides standardized logging configuration using structlog
for all components. Library code obtains loggers from here so binder and
codec events share one structured format.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_binder_logger(name: str) -> FilteringBoundLogger:
    """Get a logger bound to the contract binder subsystem."""
    return get_logger(name).bind(subsystem="binder")


def get_codec_logger(name: str) -> FilteringBoundLogger:
    """Get a logger bound to the serialization subsystem."""
    return get_logger(name).bind(subsystem="codec")


def log_contract_bound(
    logger: FilteringBoundLogger,
    contract: type,
    members: dict[str, Any],
    accessors: int
) -> None:
    """
    Log the one-time binding of a record contract.

    Args:
        logger: Structlog logger instance
        contract: The contract class that was bound
        members: Member name to declared type table
        accessors: Number of accessor methods generated
    """
    logger.debug(
        "Contract bound",
        contract=contract.__qualname__,
        members=sorted(members),
        accessors=accessors,
    )


def log_lenient_fallback(
    logger: FilteringBoundLogger,
    strategy: str,
    reason: str,
    target: Any,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a deserialization fallback that kept a best-effort value.

    Args:
        logger: Structlog logger instance
        strategy: Name of the deserializer that fell back
        reason: Why the preferred representation could not be produced
        target: The requested target type
        context: Additional context data
    """
    bound_logger = logger.bind(
        strategy=strategy,
        reason=reason,
        target=getattr(target, "__name__", repr(target)),
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.warning("Deserialization fell back to raw value")
