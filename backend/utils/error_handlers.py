"""
Error handling decorators and utilities for API endpoints.

Centralizes the mapping from command outcomes and application exceptions
to HTTP responses.
"""

from functools import wraps
from typing import Callable
from fastapi import HTTPException
import logging

from constants import HTTPStatus, Messages
from dtos.internal import CommandOutcome, CommandResult
from exceptions import (
    ApplicationError,
    ConfigurationError,
    DatabaseError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def raise_for_result(result: CommandResult, operation: str) -> CommandResult:
    """
    Turn a command outcome that did not succeed into an exception.

    Raises:
        ValidationError: The command was rejected
        DatabaseError: The store failed
    """
    if result.outcome is CommandOutcome.REJECTED:
        raise ValidationError(result.message)
    if result.outcome is CommandOutcome.FAILED:
        raise DatabaseError(operation, result.message or Messages.UNEXPECTED_ERROR)
    return result


def handle_api_errors(operation_name: str):
    """
    Decorator to handle common API errors consistently across endpoints.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Order creation")

    Example:
        @router.post("/orders")
        @handle_api_errors("Order creation")
        def create_order(...):
            ...
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (ConfigurationError, ValidationError) as e:
                logger.warning(f"{operation_name} - {type(e).__name__}: {e.message}")
                raise HTTPException(
                    status_code=HTTPStatus.BAD_REQUEST,
                    detail=e.message
                )
            except DatabaseError as e:
                logger.error(f"{operation_name} - Database error: {e.message}", exc_info=True)
                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail=f"Database operation failed: {e.message}"
                )
            except ApplicationError as e:
                logger.error(f"{operation_name} - Application error: {e.message}", exc_info=True)
                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail=f"{operation_name} failed: {e.message}"
                )
            except HTTPException:
                # Re-raise HTTPException as-is to preserve status code and detail
                raise
            except Exception as e:
                logger.error(f"{operation_name} - Unexpected error: {e}", exc_info=True)
                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail=f"{operation_name} failed. {Messages.UNEXPECTED_ERROR}"
                )

        return wrapper

    return decorator
