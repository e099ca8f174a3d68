"""Prize and winner-log records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .utils import read_int, read_str


@dataclass(frozen=True)
class Prize:
    """A prize that can be drawn up to ``count`` times.

    Attributes
    ----------
    id : str
        Prize key referenced by :class:`WinnerRecord`.
    name : str
        Display name, copied onto winners as ``prize_won``.
    count : int
        Maximum number of winners for this prize.
    image : Optional[str]
        Optional image URL.
    """

    id: str
    name: str
    count: int
    image: Optional[str] = None

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "name": self.name, "count": self.count}
        if self.image is not None:
            data["image"] = self.image
        return data

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Prize":
        return cls(
            id=read_str(data, "id", "Prize", required=True),
            name=read_str(data, "name", "Prize", required=True),
            count=read_int(data, "count", "Prize"),
            image=read_str(data, "image", "Prize"),
        )


@dataclass(frozen=True)
class WinnerRecord:
    """Append-only log entry recording one draw outcome.

    Attributes
    ----------
    id : str
        Record key.
    employee_id : str
        Winning employee; may dangle once the employee is deleted.
    prize_id : str
        Prize drawn.
    timestamp : int
        Draw instant in epoch milliseconds, shared by a whole batch.
    """

    id: str
    employee_id: str
    prize_id: str
    timestamp: int

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "prizeId": self.prize_id,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "WinnerRecord":
        record = "Winner record"
        return cls(
            id=read_str(data, "id", record, required=True),
            employee_id=read_str(data, "employeeId", record, required=True),
            prize_id=read_str(data, "prizeId", record, required=True),
            timestamp=read_int(data, "timestamp", record),
        )


__all__ = ["Prize", "WinnerRecord"]
