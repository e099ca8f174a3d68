"""Table assignment: partition the roster into capacity-bounded tables."""

from __future__ import annotations

import enum
import logging
import math
import random
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Union

from ..exceptions import EmployeeNotFoundError, TableNotFoundError, ValidationError
from ..models import Employee, Table

logger = logging.getLogger(__name__)


class SortMode(str, enum.Enum):
    """How employees are ordered before being cut into tables."""

    DEPARTMENT = "department"
    RANDOM = "random"


@dataclass(frozen=True)
class SeatingPlan:
    """Value object returned by :func:`assign_tables`.

    Attributes
    ----------
    tables : tuple[Table, ...]
        Fresh tables replacing any previous set.
    employees : tuple[Employee, ...]
        Every employee with its new ``table_id``, in seating order.
    """

    tables: tuple[Table, ...]
    employees: tuple[Employee, ...]


def table_name(number: int) -> str:
    return f"Table {number}"


def _coerce_mode(mode: Union[SortMode, str]) -> SortMode:
    try:
        return SortMode(mode)
    except ValueError as exc:
        raise ValidationError(f"Unknown seating mode '{mode}'") from exc


def order_employees(
    employees: Sequence[Employee],
    mode: Union[SortMode, str],
    rng: Optional[random.Random] = None,
) -> list[Employee]:
    """Return the roster ordered for seating.

    ``department`` is a stable sort on the department name; ``random`` is a
    uniform shuffle.
    """
    resolved = _coerce_mode(mode)
    ordered = list(employees)
    if resolved is SortMode.DEPARTMENT:
        ordered.sort(key=lambda e: e.department)
    else:
        (rng or random.Random()).shuffle(ordered)
    return ordered


def assign_tables(
    employees: Sequence[Employee],
    capacity: int,
    mode: Union[SortMode, str] = SortMode.DEPARTMENT,
    *,
    rng: Optional[random.Random] = None,
) -> SeatingPlan:
    """Seat every employee, replacing all previous tables and assignments.

    Parameters
    ----------
    employees : Sequence[Employee]
        Full current roster.
    capacity : int
        Seats per table, shared by every table in this run.
    mode : SortMode or str, default: SortMode.DEPARTMENT
        Ordering applied before cutting the list into tables.
    rng : Optional[random.Random], default: None
        Random source for ``random`` mode.

    Returns
    -------
    SeatingPlan
        ``ceil(N / capacity)`` tables with ids ``"1".."T"``; the employee at
        ordered position ``k`` sits at table ``k // capacity + 1``.

    Raises
    ------
    ValidationError
        If ``capacity`` is not a positive integer or ``mode`` is unknown.
    """
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
        raise ValidationError("Table capacity must be a positive integer")
    resolved = _coerce_mode(mode)

    if not employees:
        return SeatingPlan(tables=(), employees=())

    ordered = order_employees(employees, resolved, rng)
    table_count = math.ceil(len(ordered) / capacity)
    tables = tuple(
        Table(id=str(i + 1), name=table_name(i + 1), capacity=capacity)
        for i in range(table_count)
    )
    seated = tuple(
        replace(emp, table_id=tables[k // capacity].id) for k, emp in enumerate(ordered)
    )

    logger.info(
        f"Seated {len(seated)} employee(s) at {table_count} table(s) "
        f"of {capacity} ({resolved.value})"
    )
    return SeatingPlan(tables=tables, employees=seated)


def clear_assignments(employees: Sequence[Employee]) -> tuple[Employee, ...]:
    """Unset every employee's ``table_id``."""
    return tuple(replace(e, table_id=None) for e in employees)


def move_employee(
    employees: Sequence[Employee],
    tables: Sequence[Table],
    employee_id: str,
    table_id: str,
) -> tuple[Employee, ...]:
    """Move one employee to another existing table.

    Capacity is not checked; occupancy is reported by
    :func:`partymgr.seating.table_occupancy` instead.
    """
    if not any(t.id == table_id for t in tables):
        raise TableNotFoundError(table_id)

    moved = False
    result: list[Employee] = []
    for employee in employees:
        if employee.id == employee_id:
            employee = replace(employee, table_id=table_id)
            moved = True
        result.append(employee)
    if not moved:
        raise EmployeeNotFoundError(employee_id)

    logger.info(f"Moved employee {employee_id} to table {table_id}")
    return tuple(result)


__all__ = [
    "SortMode",
    "SeatingPlan",
    "table_name",
    "order_employees",
    "assign_tables",
    "clear_assignments",
    "move_employee",
]
