"""
Result types returned by every use case.

Use cases never raise for business outcomes: they return ``Return.ok(value)``
or ``Return.err(error)`` and the API layer decides how to present them.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Error:
    """Business error with a stable machine-readable code"""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message

    def __eq__(self, other):
        if not isinstance(other, Error):
            return NotImplemented
        return self.code == other.code and self.message == other.message

    def __hash__(self):
        return hash((self.code, self.message))

    def __repr__(self):
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[Error] = None

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return self.error is not None


class Return:
    @staticmethod
    def ok(value: Optional[T] = None) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result:
        return Result(error=error)
