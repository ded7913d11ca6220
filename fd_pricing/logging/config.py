"""
Centralized logging configuration for the FD pricing engine.

This module provides standardized logging configuration using structlog
for all components. Rate lookups and quote calculations log through the
loggers returned here so that every decision carries the same structured
context.
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
        processors.append(structlog.processors.JSONRenderer(default=str))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

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


def get_rate_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for rate resolution decisions.

    Base-rate matches, classification bonuses and cap applications are
    logged through this logger so they can be audited per quote.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for rate decisions
    """
    return get_logger(name).bind(
        subsystem="rate_resolution",
        audit_trail=True
    )


def get_calculation_logger(name: str) -> FilteringBoundLogger:
    """Get a logger for compounding and quote calculations."""
    return get_logger(name).bind(subsystem="calculation")


def log_rate_decision(
    logger: FilteringBoundLogger,
    decision: str,
    matched: bool,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a rate resolution decision with standardized format.

    Matches are logged at debug level; misses are warnings since they either
    fall back to a default rate or drop a requested bonus.

    Args:
        logger: Structlog logger instance
        decision: Which lookup was made (e.g. "base_rate", "classification")
        matched: Whether a slab matched
        reason: Detailed reason for the outcome
        context: Additional context data
    """
    bound_logger = logger.bind(
        decision=decision,
        decision_result="MATCH" if matched else "MISS",
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if matched:
        bound_logger.debug("Rate slab matched")
    else:
        bound_logger.warning("Rate slab not matched")
