"""Employee roster record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .utils import read_bool, read_str

DEFAULT_DEPARTMENT = "General"
DEFAULT_TITLE = "Staff"


@dataclass(frozen=True)
class Employee:
    """A person on the event roster.

    Attributes
    ----------
    id : str
        Opaque unique key owned by the application.
    staff_id : str
        Human-readable staff code. Not guaranteed to be unique.
    name : str
        Display name.
    department : str
        Department name, used by department-ordered seating.
    title : str
        Job title.
    gender : Optional[str]
        Optional free-form gender label.
    table_id : Optional[str]
        Id of the table the employee is seated at; ``None`` means unassigned.
    is_winner : bool
        ``True`` once the employee has won any prize.
    prize_won : Optional[str]
        Display name of the most recent prize won.
    """

    id: str
    staff_id: str
    name: str
    department: str = DEFAULT_DEPARTMENT
    title: str = DEFAULT_TITLE
    gender: Optional[str] = None
    table_id: Optional[str] = None
    is_winner: bool = False
    prize_won: Optional[str] = None

    def to_json(self) -> dict[str, Any]:
        """Return the stored-document representation (camelCase keys).

        Unset optional fields are omitted.
        """
        data: dict[str, Any] = {
            "id": self.id,
            "staffId": self.staff_id,
            "name": self.name,
            "department": self.department,
            "title": self.title,
            "isWinner": self.is_winner,
        }
        if self.gender is not None:
            data["gender"] = self.gender
        if self.table_id is not None:
            data["tableId"] = self.table_id
        if self.prize_won is not None:
            data["prizeWon"] = self.prize_won
        return data

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Employee":
        """Build an employee from its stored-document representation.

        Defaults apply only when ``department`` or ``title`` is absent, so a
        stored empty value survives a round trip.

        Raises
        ------
        ValueError
            If ``id``, ``staffId`` or ``name`` are missing or empty, or any
            field has the wrong type.
        """
        record = "Employee"
        return cls(
            id=read_str(data, "id", record, required=True),
            staff_id=read_str(data, "staffId", record, required=True),
            name=read_str(data, "name", record, required=True),
            department=read_str(data, "department", record, default=DEFAULT_DEPARTMENT),
            title=read_str(data, "title", record, default=DEFAULT_TITLE),
            gender=read_str(data, "gender", record),
            table_id=read_str(data, "tableId", record),
            is_winner=read_bool(data, "isWinner", record),
            prize_won=read_str(data, "prizeWon", record),
        )


__all__ = ["DEFAULT_DEPARTMENT", "DEFAULT_TITLE", "Employee"]
