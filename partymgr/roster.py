"""Roster store operations.

Every function takes the current employee sequence and returns a new tuple;
inputs are never mutated. Uniqueness is owned by ``Employee.id`` only, so
duplicate staff codes are accepted.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable, Mapping, Optional, Sequence

from .exceptions import EmployeeNotFoundError, ValidationError
from .models import DEFAULT_DEPARTMENT, DEFAULT_TITLE, Employee
from .models.utils import clean_text, generate_id

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"staff_id", "name", "department", "title", "gender"})

# Placeholder the import parser emits for rows without a name.
UNKNOWN_NAME = "Unknown"


def _require_identity(name: Optional[str], staff_id: Optional[str]) -> None:
    if not name or not staff_id:
        raise ValidationError("Name and staff ID are required")


def _find_index(employees: Sequence[Employee], employee_id: str) -> int:
    for idx, employee in enumerate(employees):
        if employee.id == employee_id:
            return idx
    raise EmployeeNotFoundError(employee_id)


def add_employee(
    employees: Sequence[Employee],
    *,
    staff_id: Optional[str],
    name: Optional[str],
    department: Optional[str] = None,
    title: Optional[str] = None,
    gender: Optional[str] = None,
    id: Optional[str] = None,
) -> tuple[tuple[Employee, ...], Employee]:
    """Append a manually entered employee.

    Parameters
    ----------
    employees : Sequence[Employee]
        Current roster.
    staff_id, name : Optional[str]
        Required; rejected when blank.
    department, title : Optional[str]
        Default to ``"General"`` and ``"Staff"``.
    gender : Optional[str]
        Optional label.
    id : Optional[str]
        Explicit id; a fresh one is generated when omitted.

    Returns
    -------
    tuple[tuple[Employee, ...], Employee]
        The new roster and the added record.

    Raises
    ------
    ValidationError
        If ``name`` or ``staff_id`` is blank, or ``id`` is already taken.
    """
    clean_name = clean_text(name)
    clean_staff_id = clean_text(staff_id)
    _require_identity(clean_name, clean_staff_id)

    existing_ids = {e.id for e in employees}
    if id is not None and id in existing_ids:
        raise ValidationError(f"Employee id '{id}' already exists")

    employee = Employee(
        id=id or generate_id(existing_ids),
        staff_id=clean_staff_id,  # type: ignore[arg-type]
        name=clean_name,  # type: ignore[arg-type]
        department=clean_text(department) or DEFAULT_DEPARTMENT,
        title=clean_text(title) or DEFAULT_TITLE,
        gender=clean_text(gender),
    )
    logger.info(f"Added employee {employee.id} ({employee.staff_id})")
    return tuple(employees) + (employee,), employee


def update_employee(
    employees: Sequence[Employee],
    employee_id: str,
    **changes: Any,
) -> tuple[tuple[Employee, ...], Employee]:
    """Apply a partial edit to one employee.

    Only identity fields (``staff_id``, ``name``, ``department``, ``title``,
    ``gender``) are editable here; seating and draw fields change through their
    own operations.
    """
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Cannot edit field(s): {', '.join(sorted(unknown))}")

    idx = _find_index(employees, employee_id)
    current = employees[idx]

    cleaned = {key: clean_text(value) for key, value in changes.items()}
    if "department" in cleaned and cleaned["department"] is None:
        cleaned["department"] = DEFAULT_DEPARTMENT
    if "title" in cleaned and cleaned["title"] is None:
        cleaned["title"] = DEFAULT_TITLE

    updated = replace(current, **cleaned)
    _require_identity(updated.name, updated.staff_id)

    result = list(employees)
    result[idx] = updated
    logger.info(f"Updated employee {employee_id}: {', '.join(sorted(changes))}")
    return tuple(result), updated


def remove_employee(
    employees: Sequence[Employee], employee_id: str
) -> tuple[Employee, ...]:
    """Remove one employee. Winner records and seating are left as they are."""
    idx = _find_index(employees, employee_id)
    logger.info(f"Removed employee {employee_id}")
    return tuple(employees[:idx]) + tuple(employees[idx + 1 :])


def clear_employees() -> tuple[Employee, ...]:
    return ()


def employee_from_row(
    row: Mapping[str, Any],
    existing_ids: Optional[set[str]] = None,
) -> Optional[Employee]:
    """Map one external row to an employee, or ``None`` if it has no usable name."""
    name = clean_text(row.get("name"))
    if name is None or name == UNKNOWN_NAME:
        return None
    taken = existing_ids if existing_ids is not None else set()
    employee_id = generate_id(taken)
    taken.add(employee_id)
    return Employee(
        id=employee_id,
        staff_id=clean_text(row.get("staff_id")) or generate_id(),
        name=name,
        department=clean_text(row.get("department")) or DEFAULT_DEPARTMENT,
        title=clean_text(row.get("title")) or DEFAULT_TITLE,
        gender=clean_text(row.get("gender")),
    )


def bulk_append(
    employees: Sequence[Employee],
    rows: Iterable[Mapping[str, Any]],
    *,
    existing_ids: Optional[Iterable[str]] = None,
) -> tuple[tuple[Employee, ...], tuple[Employee, ...]]:
    """Append imported rows to the roster.

    Rows lacking a usable name are discarded. Generated ids avoid the roster
    ids plus any ``existing_ids`` (e.g. ids held elsewhere). Returns the new
    roster and the records that were appended.
    """
    taken = {e.id for e in employees}
    if existing_ids is not None:
        taken.update(existing_ids)
    appended: list[Employee] = []
    skipped = 0
    for row in rows:
        employee = employee_from_row(row, taken)
        if employee is None:
            skipped += 1
            continue
        appended.append(employee)

    logger.info(f"Imported {len(appended)} employee(s), skipped {skipped} row(s)")
    return tuple(employees) + tuple(appended), tuple(appended)


def search_employees(
    employees: Iterable[Employee], query: Optional[str]
) -> list[Employee]:
    """Case-insensitive substring search over name, department and staff ID."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(employees)
    return [
        e
        for e in employees
        if needle in e.name.lower()
        or needle in e.department.lower()
        or needle in e.staff_id.lower()
    ]


__all__ = [
    "EDITABLE_FIELDS",
    "add_employee",
    "update_employee",
    "remove_employee",
    "clear_employees",
    "employee_from_row",
    "bulk_append",
    "search_employees",
]
