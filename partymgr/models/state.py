"""Aggregate application state: the unit of persistence."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Optional

from .employee import Employee
from .prize import Prize, WinnerRecord
from .table import Table


@dataclass(frozen=True)
class AppState:
    """Immutable snapshot of employees, tables, prizes and winner records.

    Operations never mutate a snapshot; they return a new one via
    :meth:`evolve`. References between collections are not enforced, so the
    lookup helpers return ``None`` for dangling ids.
    """

    employees: tuple[Employee, ...] = ()
    tables: tuple[Table, ...] = ()
    prizes: tuple[Prize, ...] = ()
    winners: tuple[WinnerRecord, ...] = ()

    @classmethod
    def empty(cls) -> "AppState":
        return cls()

    def evolve(
        self,
        *,
        employees: Optional[Iterable[Employee]] = None,
        tables: Optional[Iterable[Table]] = None,
        prizes: Optional[Iterable[Prize]] = None,
        winners: Optional[Iterable[WinnerRecord]] = None,
    ) -> "AppState":
        """Return a copy with the given collections replaced."""
        changes: dict[str, tuple] = {}
        if employees is not None:
            changes["employees"] = tuple(employees)
        if tables is not None:
            changes["tables"] = tuple(tables)
        if prizes is not None:
            changes["prizes"] = tuple(prizes)
        if winners is not None:
            changes["winners"] = tuple(winners)
        return replace(self, **changes)

    def employee_by_id(self, employee_id: Optional[str]) -> Optional[Employee]:
        for employee in self.employees:
            if employee.id == employee_id:
                return employee
        return None

    def table_by_id(self, table_id: Optional[str]) -> Optional[Table]:
        for table in self.tables:
            if table.id == table_id:
                return table
        return None

    def prize_by_id(self, prize_id: Optional[str]) -> Optional[Prize]:
        for prize in self.prizes:
            if prize.id == prize_id:
                return prize
        return None

    def winners_for_prize(self, prize_id: str) -> tuple[WinnerRecord, ...]:
        return tuple(w for w in self.winners if w.prize_id == prize_id)

    def to_json(self) -> dict[str, Any]:
        return {
            "employees": [e.to_json() for e in self.employees],
            "tables": [t.to_json() for t in self.tables],
            "prizes": [p.to_json() for p in self.prizes],
            "winners": [w.to_json() for w in self.winners],
        }

    def to_json_str(self) -> str:
        return json.dumps(self.to_json(), ensure_ascii=False)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "AppState":
        """Build a state from a stored document.

        Missing collections default to empty.

        Raises
        ------
        ValueError
            If ``data`` is not a mapping or any record is malformed.
        """
        if not isinstance(data, Mapping):
            raise ValueError("State document must be a JSON object")
        return cls(
            employees=tuple(
                Employee.from_json(item) for item in _as_list(data, "employees")
            ),
            tables=tuple(Table.from_json(item) for item in _as_list(data, "tables")),
            prizes=tuple(Prize.from_json(item) for item in _as_list(data, "prizes")),
            winners=tuple(
                WinnerRecord.from_json(item) for item in _as_list(data, "winners")
            ),
        )

    @classmethod
    def from_json_str(cls, text: str) -> "AppState":
        return cls.from_json(json.loads(text))


def _as_list(data: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise ValueError(f"State document field {key!r} must be a list")
    for item in value:
        if not isinstance(item, Mapping):
            raise ValueError(f"State document field {key!r} must contain objects")
    return value


__all__ = ["AppState"]
