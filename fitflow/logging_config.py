"""
Logging configuration for FitFlow.

Provides centralized structured logging setup with JSON output for log files
and human-readable output for development. Supports correlation IDs so every
log line emitted while handling one intent can be traced together.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import structlog
from structlog.types import EventDict


# Context variable for correlation ID
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add correlation ID to log events if present in context.

    Args:
        logger: Logger instance
        method_name: Name of the logging method
        event_dict: Event dictionary to modify

    Returns:
        Modified event dictionary with correlation_id if available
    """
    correlation_id = correlation_id_var.get()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """
    Set correlation ID for the current context.

    Args:
        correlation_id: Optional correlation ID. If None, generates a new UUID.

    Returns:
        The correlation ID that was set
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    """Clear correlation ID from the current context."""
    correlation_id_var.set(None)


def get_correlation_id() -> Optional[str]:
    """
    Get the current correlation ID from context.

    Returns:
        Current correlation ID or None if not set
    """
    return correlation_id_var.get()


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    json_format: bool = True,
) -> None:
    """
    Configure structured logging for FitFlow.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If None, logs only to stderr.
        json_format: If True, use JSON format. If False, use human-readable format.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(file_handler)
    else:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(numeric_level)
        stderr_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(stderr_handler)

    processors: list = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=log_file is None))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance for a specific module.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        Structured logger instance.
    """
    if name.startswith("fitflow."):
        return structlog.get_logger(name)
    return structlog.get_logger(f"fitflow.{name}")


# Convenience functions for common logging patterns

def log_session_resolved(
    logger: structlog.stdlib.BoundLogger,
    phase: str,
    has_completed_onboarding: bool,
    is_logged_in: bool,
    read_failed: bool = False,
    **kwargs: Any,
) -> None:
    """
    Log the outcome of the startup session resolve.

    Args:
        logger: Logger instance
        phase: Resolved phase name
        has_completed_onboarding: Flag value as interpreted
        is_logged_in: Flag value as interpreted
        read_failed: Whether the store read failed and the fail-safe applied
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "session_resolved",
        "phase": phase,
        "has_completed_onboarding": has_completed_onboarding,
        "is_logged_in": is_logged_in,
        "read_failed": read_failed,
    }

    log_data.update(kwargs)

    if read_failed:
        logger.warning("session_resolved", **log_data)
    else:
        logger.info("session_resolved", **log_data)


def log_intent_transition(
    logger: structlog.stdlib.BoundLogger,
    intent: str,
    from_phase: str,
    to_phase: str,
    success: bool,
    reason: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Log the handling of a session intent.

    Args:
        logger: Logger instance
        intent: Intent name ("start_onboarding", "complete_onboarding", ...)
        from_phase: Phase before the intent
        to_phase: Phase after the intent (equal to from_phase on failure)
        success: Whether the intent was applied
        reason: Failure reason if not successful
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "intent_transition",
        "intent": intent,
        "from_phase": from_phase,
        "to_phase": to_phase,
        "success": success,
    }

    if reason is not None:
        log_data["reason"] = reason

    log_data.update(kwargs)

    if success:
        logger.info("intent_transition", **log_data)
    else:
        logger.warning("intent_transition_failed", **log_data)


def log_store_operation(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    keys: Sequence[str],
    duration_ms: float,
    success: bool = True,
    **kwargs: Any,
) -> None:
    """
    Log a session store operation.

    Args:
        logger: Logger instance
        operation: Store operation ("get", "multi_get", "multi_set", "multi_remove")
        keys: Keys touched by the operation
        duration_ms: Operation duration in milliseconds
        success: Whether the operation succeeded
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "store_operation",
        "operation": operation,
        "keys": list(keys),
        "duration_ms": duration_ms,
        "success": success,
    }

    log_data.update(kwargs)

    if success:
        logger.debug("store_operation", **log_data)
    else:
        logger.error("store_operation_failed", **log_data)


def log_navigation_directive(
    logger: structlog.stdlib.BoundLogger,
    directive: str,
    route: str,
    stack_depth: int,
    **kwargs: Any,
) -> None:
    """
    Log a navigation directive issued to the navigation stack.

    Args:
        logger: Logger instance
        directive: Directive type ("push", "reset", "back")
        route: Target route name
        stack_depth: Stack depth after the directive
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "navigation_directive",
        "directive": directive,
        "route": route,
        "stack_depth": stack_depth,
    }

    log_data.update(kwargs)

    logger.info("navigation_directive", **log_data)
