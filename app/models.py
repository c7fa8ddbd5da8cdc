from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ErrorInfo:
    message: str
    status_code: int
    status_text: str
    raw_body: Any = None

    def to_dict(self):
        return {
            "message": self.message,
            "status": self.status_code,
            "statusText": self.status_text,
            "response": self.raw_body,
        }


@dataclass(frozen=True)
class APIResult(Generic[T]):
    """Either a value (`ok=True`) or an ErrorInfo (`ok=False`), never both."""

    ok: bool
    value: T | None = None
    error: ErrorInfo | None = None

    def __post_init__(self):
        if self.ok and self.error is not None:
            raise ValueError("successful APIResult cannot carry an error")
        if not self.ok and self.error is None:
            raise ValueError("failed APIResult requires an error")

    @classmethod
    def success(cls, value: T) -> "APIResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ErrorInfo) -> "APIResult[T]":
        return cls(ok=False, error=error)


@dataclass(frozen=True)
class Credential:
    token: str
    issued_at: datetime
    expires_at: datetime

    def is_valid(self, now: datetime) -> bool:
        return bool(self.token) and now < self.expires_at
