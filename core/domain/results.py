"""
Operation results.

Every public operation returns one of these instead of raising. The error
is always a plain string (or None) so a result can cross a process or
serialization boundary without special handling.
"""
from dataclasses import asdict, dataclass, is_dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


def _plain(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Result of a query or of a mutation that produces a value."""

    data: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, data: Optional[T] = None) -> "OperationResult[T]":
        return cls(data=data, error=None)

    @classmethod
    def failure(cls, message: str) -> "OperationResult[T]":
        return cls(data=None, error=message)

    @property
    def ok(self) -> bool:
        """True when the operation did not fail."""
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize as ``{"data": ..., "error": ...}``; DTOs become dicts."""
        return {"data": _plain(self.data), "error": self.error}


@dataclass(frozen=True)
class VoidResult:
    """Result of a mutation that produces no value."""

    error: Optional[str] = None

    @classmethod
    def success(cls) -> "VoidResult":
        return cls(error=None)

    @classmethod
    def failure(cls, message: str) -> "VoidResult":
        return cls(error=message)

    @property
    def ok(self) -> bool:
        """True when the operation did not fail."""
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize as ``{"error": ...}``."""
        return {"error": self.error}
