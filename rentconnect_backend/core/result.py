"""Result discriminator returned by every public service operation."""

import enum
import functools
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, ParamSpec, TypeVar

from .exceptions import NotFoundError, RentConnectException

logger = logging.getLogger(__name__)

T = TypeVar("T")
P = ParamSpec("P")


class ResultStatus(str, enum.Enum):
    """Outcome of a service operation."""

    SUCCESS = "Success"
    FAILURE = "Failure"
    NOT_FOUND = "NotFound"


@dataclass
class Result(Generic[T]):
    """Status, human-readable message and optional payload."""

    status: ResultStatus
    message: str
    entity: T | None = None

    @property
    def is_success(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    @classmethod
    def success(
        cls, entity: T | None = None, message: str = "Operation completed successfully"
    ) -> "Result[T]":
        return cls(ResultStatus.SUCCESS, message, entity)

    @classmethod
    def failure(cls, message: str, entity: T | None = None) -> "Result[T]":
        return cls(ResultStatus.FAILURE, message, entity)

    @classmethod
    def not_found(cls, message: str = "Resource not found") -> "Result[T]":
        return cls(ResultStatus.NOT_FOUND, message)


def operation_boundary(
    failure_prefix: str,
) -> Callable[[Callable[P, Awaitable[Result[T]]]], Callable[P, Awaitable[Result[T]]]]:
    """Convert anything raised by a service operation into a Result.

    NotFoundError becomes a NotFound result and other RentConnect errors keep
    their message. Unexpected errors are logged with their traceback and
    reported as ``"{failure_prefix}: {exc}"``.
    """

    def decorator(
        func: Callable[P, Awaitable[Result[T]]],
    ) -> Callable[P, Awaitable[Result[T]]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T]:
            try:
                return await func(*args, **kwargs)
            except NotFoundError as exc:
                return Result.not_found(exc.message)
            except RentConnectException as exc:
                logger.info(f"{func.__name__} rejected: {exc.message}")
                return Result.failure(exc.message)
            except Exception as exc:
                logger.exception(f"{func.__name__} failed: {exc}")
                return Result.failure(f"{failure_prefix}: {exc}")

        return wrapper

    return decorator
