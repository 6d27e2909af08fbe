"""
Public operation boundary.

Converts exceptions raised inside handlers into plain-string results so
that no public operation ever raises past its own surface.
"""

import functools
import logging
import uuid
from typing import Any, Awaitable, Callable, Iterable, List, TypeVar, Union

from core.domain.exceptions import DomainException, UnexpectedError, ValidationError
from core.domain.results import OperationResult, VoidResult
from core.metrics import operation_errors_total

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

Identifier = Union[uuid.UUID, str]


def parse_id(value: Identifier, label: str = "ID") -> uuid.UUID:
    """
    Parse an identifier passed in by a caller.

    Raises:
        ValidationError: If the value is missing or not a UUID
    """
    if isinstance(value, uuid.UUID):
        return value
    if not value:
        raise ValidationError(f"{label} is required")
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {label}: {value}")


def parse_ids(values: Iterable[Identifier], label: str = "ID") -> List[uuid.UUID]:
    return [parse_id(value, label) for value in values or []]


def error_message(exc: Exception, operation: str) -> str:
    """
    Map an exception to the message returned to callers.

    Args:
        exc: Exception raised inside the operation
        operation: Operation name, used for logging and metrics

    Returns:
        Human-readable error string
    """
    if isinstance(exc, DomainException):
        logger.warning(
            "Domain exception in %s: %s - %s", operation, exc.code, exc.message
        )
        operation_errors_total.labels(operation=operation, code=exc.code).inc()
        return exc.message

    if isinstance(exc, ValueError):
        logger.warning("Validation failed in %s: %s", operation, exc)
        operation_errors_total.labels(operation=operation, code="VALIDATION_ERROR").inc()
        return str(exc)

    # Persistence-layer messages are surfaced verbatim.
    unexpected = UnexpectedError(str(exc)) if str(exc) else UnexpectedError()
    logger.error("Unexpected error in %s: %s", operation, exc, exc_info=True)
    operation_errors_total.labels(operation=operation, code=unexpected.code).inc()
    return unexpected.message


def returns_result(func: F) -> F:
    """Wrap an async operation so it returns an OperationResult."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> OperationResult:
        try:
            data = await func(*args, **kwargs)
        except Exception as e:  # pylint: disable=broad-exception-caught
            return OperationResult.failure(error_message(e, func.__name__))
        return OperationResult.success(data)

    return wrapper  # type: ignore[return-value]


def returns_void_result(func: F) -> F:
    """Wrap an async operation so it returns a VoidResult."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> VoidResult:
        try:
            await func(*args, **kwargs)
        except Exception as e:  # pylint: disable=broad-exception-caught
            return VoidResult.failure(error_message(e, func.__name__))
        return VoidResult.success()

    return wrapper  # type: ignore[return-value]
