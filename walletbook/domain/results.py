"""Tagged result values and the error taxonomy of the ledger core.

Mutating operations return ``Ok(value)`` or ``Err(kind, message)`` instead of
raising, so callers handle the failure path explicitly. ``unwrap()`` converts
an ``Err`` into the matching exception for callers that prefer to propagate.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, NoReturn, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Kinds of failure a core operation can report."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    MALFORMED_INPUT = "malformed_input"


class LedgerError(Exception):
    """Base class for all errors raised by the ledger core."""

    kind: ErrorKind


class ValidationError(LedgerError):
    """A single proposed operation violates an invariant."""

    kind = ErrorKind.VALIDATION


class NotFoundError(LedgerError):
    """A referenced category or user does not exist."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(LedgerError):
    """Reserved for layers above the core (roles, registration)."""

    kind = ErrorKind.CONFLICT


class MalformedInputError(LedgerError):
    """An imported snapshot is not structurally valid."""

    kind = ErrorKind.MALFORMED_INPUT


_ERRORS: dict[ErrorKind, type[LedgerError]] = {
    ErrorKind.VALIDATION: ValidationError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.CONFLICT: ConflictError,
    ErrorKind.MALFORMED_INPUT: MalformedInputError,
}


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying the error kind and a specific reason."""

    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        """Raise the exception matching this error kind.

        Raises:
            LedgerError: Always, the subclass matching ``kind``.
        """
        raise _ERRORS[self.kind](self.message)


Result = Ok[T] | Err


def invalid(message: str) -> Err:
    """Shorthand for a validation failure."""
    return Err(ErrorKind.VALIDATION, message)
