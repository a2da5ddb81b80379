"""Tagged results returned by the order engine instead of raised errors."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class RejectionKind(str, Enum):
    """Why a request was turned down."""

    VALIDATION = "validation"
    REFERENTIAL = "referential"
    CONSISTENCY = "consistency"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Accepted(Generic[T]):
    """A check passed; ``value`` is the parsed, normalized value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """A check failed. ``reason`` is the message shown to the operator."""

    reason: str
    field: str | None = None
    kind: RejectionKind = RejectionKind.VALIDATION

    @property
    def ok(self) -> bool:
        return False


Result = Accepted[T] | Rejected
