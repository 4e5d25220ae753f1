"""Explicit success/failure return values for multi-step operations."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .exceptions import DomainError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation that reports failures instead of raising them.

    Exactly one of ``value`` or ``error`` is meaningful: ``error`` is set on
    failure, otherwise ``value`` holds the outcome (which may itself be
    ``None``, e.g. for "not found").

    Example:
        ```python
        result = await service.upload_document(...)
        if not result.ok:
            logger.warning(f"Upload rejected: {result.error}")
        document = result.unwrap()
        ```
    """

    value: Optional[T] = None
    error: Optional[DomainError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DomainError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Optional[T]:
        """Return the value, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.value
