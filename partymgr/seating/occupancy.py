"""Occupancy reporting, always recomputed from current membership."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..exceptions import ValidationError
from ..models import AppState, Employee, Table


@dataclass(frozen=True)
class TableOccupancy:
    table: Table
    members: tuple[Employee, ...]

    @property
    def occupied(self) -> int:
        return len(self.members)

    @property
    def is_over_capacity(self) -> bool:
        return self.occupied > self.table.capacity


@dataclass(frozen=True)
class SeatingSummary:
    """Counts shown alongside the table grid.

    ``assigned`` only counts employees whose ``table_id`` resolves to an
    existing table; dangling ids count as unassigned.
    """

    total: int
    assigned: int
    unassigned: int
    required_tables: int
    over_capacity_tables: tuple[str, ...]


def table_occupancy(state: AppState) -> list[TableOccupancy]:
    """Return one entry per table, in table order."""
    return [
        TableOccupancy(
            table=table,
            members=tuple(e for e in state.employees if e.table_id == table.id),
        )
        for table in state.tables
    ]


def seating_summary(state: AppState, capacity: int) -> SeatingSummary:
    if capacity < 1:
        raise ValidationError("Table capacity must be a positive integer")
    table_ids = {t.id for t in state.tables}
    total = len(state.employees)
    assigned = sum(1 for e in state.employees if e.table_id in table_ids)
    return SeatingSummary(
        total=total,
        assigned=assigned,
        unassigned=total - assigned,
        required_tables=math.ceil(total / capacity),
        over_capacity_tables=tuple(
            occ.table.id for occ in table_occupancy(state) if occ.is_over_capacity
        ),
    )


__all__ = ["TableOccupancy", "SeatingSummary", "table_occupancy", "seating_summary"]
