"""
Structured Logging Utilities

Adds structured context (operation, order/client/week ids) to log records.
"""

import inspect
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from functools import wraps
from typing import Any, Dict, Optional


# Context variable for command-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

_CONTEXT_KEYS = ("order_id", "client_id", "week_id")


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Order created", extra={"order_id": 12, "week_id": week_id})
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.debug(message, extra=self._add_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.info(message, extra=self._add_context(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.warning(message, extra=self._add_context(extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self.logger.error(message, extra=self._add_context(extra), exc_info=exc_info)


@contextmanager
def logging_context(**kwargs):
    """
    Add key-value pairs to every structured log record emitted inside the block.

    Example:
        with logging_context(command="create_order"):
            service.create_order(...)
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    token = _logging_context.set(context)
    try:
        yield
    finally:
        _logging_context.reset(token)


def log_operation(operation_name: str):
    """
    Decorator to log command start, outcome and failure with structured context.

    Arguments named order_id, client_id or week_id are copied into
    the context. A returned CommandResult that did not succeed is logged as
    a warning with its message.

    Example:
        @log_operation("mark_delivered")
        def mark_delivered(self, order_id: int): ...
    """
    def decorator(func):
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)

            context = {"operation": operation_name}
            arguments = signature.bind_partial(*args, **kwargs).arguments
            for key in _CONTEXT_KEYS:
                if key in arguments:
                    context[key] = arguments[key]

            logger.debug(f"Starting {operation_name}", extra=context)

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                context["error"] = str(e)
                context["error_type"] = type(e).__name__
                logger.error(f"Failed {operation_name}", extra=context, exc_info=True)
                raise

            succeeded = getattr(result, "succeeded", True)
            if succeeded:
                logger.info(f"Completed {operation_name}", extra=context)
            else:
                context["outcome"] = result.outcome.value
                logger.warning(f"{operation_name} not applied: {result.message}", extra=context)
            return result

        return wrapper

    return decorator
