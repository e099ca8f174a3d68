"""Roster import and winner export as comma-separated text."""

from __future__ import annotations

import csv
import io
import logging
from datetime import timezone
from pathlib import Path
from typing import Optional, Union

from .db.utils import epoch_ms_to_local
from .exceptions import ImportFormatError
from .models import AppState

logger = logging.getLogger(__name__)

BOM = "\ufeff"

# Header tokens, matched case-insensitively as substrings; the first header
# containing any token claims the column.
COLUMN_TOKENS: dict[str, tuple[str, ...]] = {
    "staff_id": ("工號", "id"),
    "name": ("姓名", "name"),
    "department": ("部門", "dept", "department"),
    "title": ("職稱", "title"),
    "gender": ("性別", "gender"),
}
# Positional fallback used when a header cannot be matched.
COLUMN_ORDER = ("staff_id", "name", "department", "title", "gender")

EXPORT_HEADER = ("Prize", "Staff ID", "Name", "Department", "Draw Time")
UNKNOWN_LABEL = "Unknown"


def _match_columns(headers: list[str]) -> dict[str, int]:
    normalized = [h.strip().strip('"').lower() for h in headers]
    columns: dict[str, int] = {}
    for field, tokens in COLUMN_TOKENS.items():
        for idx, header in enumerate(normalized):
            if any(token in header for token in tokens):
                columns[field] = idx
                break
    return columns


def parse_roster_csv(content: Union[str, bytes]) -> list[dict[str, Optional[str]]]:
    """Parse roster text into row dicts keyed by employee field.

    The first non-blank line names the columns. Columns whose header cannot be
    matched fall back to the conventional position (staff id, name,
    department, title, gender). Rows without a name are dropped; filling in
    defaults is left to :func:`partymgr.roster.bulk_append`.

    Raises
    ------
    ImportFormatError
        If ``content`` cannot be decoded or the CSV is malformed.
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ImportFormatError("Roster file is not valid UTF-8 text") from exc
    content = content.lstrip(BOM)

    lines = [line for line in content.splitlines() if line.strip()]
    if len(lines) < 2:
        return []

    try:
        reader = csv.reader(lines, skipinitialspace=True, strict=True)
        headers = next(reader)
        columns = _match_columns(headers)
        rows: list[dict[str, Optional[str]]] = []
        for values in reader:
            cleaned = [v.strip() for v in values]
            row: dict[str, Optional[str]] = {}
            for position, field in enumerate(COLUMN_ORDER):
                idx = columns.get(field, position)
                value = cleaned[idx] if idx < len(cleaned) else ""
                row[field] = value or None
            if row["name"]:
                rows.append(row)
    except csv.Error as exc:
        raise ImportFormatError(f"Roster file is not valid CSV: {exc}") from exc

    logger.info(f"Parsed {len(rows)} roster row(s) from {len(lines) - 1} line(s)")
    return rows


def export_winners_csv(state: AppState, tz: Optional[timezone] = None) -> str:
    """Render the winner log as BOM-prefixed CSV text.

    Dangling references are rendered as ``"Unknown"`` (prize) or blank
    (employee fields).
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    for record in state.winners:
        employee = state.employee_by_id(record.employee_id)
        prize = state.prize_by_id(record.prize_id)
        drawn_at = epoch_ms_to_local(record.timestamp, tz)
        writer.writerow(
            (
                prize.name if prize is not None else UNKNOWN_LABEL,
                employee.staff_id if employee is not None else "",
                employee.name if employee is not None else "",
                employee.department if employee is not None else "",
                drawn_at.strftime("%H:%M:%S"),
            )
        )
    return BOM + buffer.getvalue()


def write_winners_csv(
    state: AppState, path: Union[str, Path], tz: Optional[timezone] = None
) -> Path:
    """Write :func:`export_winners_csv` output to ``path``."""
    target = Path(path)
    target.write_text(export_winners_csv(state, tz), encoding="utf-8", newline="")
    logger.info(f"Exported {len(state.winners)} winner record(s) to {target}")
    return target


__all__ = [
    "COLUMN_TOKENS",
    "EXPORT_HEADER",
    "parse_roster_csv",
    "export_winners_csv",
    "write_winners_csv",
]
