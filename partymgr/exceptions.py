"""Exception hierarchy.

Every failure is recoverable: operations raise before any state is replaced,
so callers report the message and let the user retry.
"""

from __future__ import annotations

from typing import Optional


class PartyError(Exception):
    """Base class for all errors raised by ``partymgr``."""


class ValidationError(PartyError, ValueError):
    """Input rejected before any state change."""


class PrizeNotSelectedError(ValidationError):
    def __init__(self, message: str = "A prize must be selected before drawing") -> None:
        super().__init__(message)


class InsufficientPoolError(ValidationError):
    """Fewer eligible employees than the requested batch size."""

    def __init__(self, eligible: int, requested: int) -> None:
        self.eligible = eligible
        self.requested = requested
        super().__init__(
            f"Not enough eligible employees: {eligible} remaining, {requested} requested"
        )


class PrizeExhaustedError(ValidationError):
    """The draw would push a prize past its winner count."""

    def __init__(self, prize_id: str, remaining: int, requested: int) -> None:
        self.prize_id = prize_id
        self.remaining = remaining
        self.requested = requested
        super().__init__(
            f"Prize '{prize_id}' has {remaining} slot(s) left, {requested} requested"
        )


class DrawClosedError(ValidationError):
    """A pending draw was already committed or abandoned."""


class NotFoundError(PartyError, KeyError):
    """A referenced record does not exist."""

    kind = "Record"

    def __init__(self, record_id: Optional[str]) -> None:
        self.record_id = record_id
        super().__init__(f"{self.kind} '{record_id}' not found")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class EmployeeNotFoundError(NotFoundError):
    kind = "Employee"


class TableNotFoundError(NotFoundError):
    kind = "Table"


class PrizeNotFoundError(NotFoundError):
    kind = "Prize"


class ImportFormatError(PartyError, ValueError):
    """Roster import text could not be parsed."""


__all__ = [
    "PartyError",
    "ValidationError",
    "PrizeNotSelectedError",
    "InsufficientPoolError",
    "PrizeExhaustedError",
    "DrawClosedError",
    "NotFoundError",
    "EmployeeNotFoundError",
    "TableNotFoundError",
    "PrizeNotFoundError",
    "ImportFormatError",
]
