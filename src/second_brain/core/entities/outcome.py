"""Result of a best-effort call to an external service."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class RemoteOutcome(Generic[T]):
    """
    Whether the remote side effect happened.

    The local mutation that triggered the call is never rolled back on
    failure; callers report ``reason`` instead.
    """

    ok: bool
    value: T | None = None
    reason: str | None = None

    @classmethod
    def succeeded(cls, value: T | None = None) -> "RemoteOutcome[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failed(cls, reason: str) -> "RemoteOutcome[T]":
        return cls(ok=False, reason=reason)
