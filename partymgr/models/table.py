"""Seating table record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .utils import read_int, read_str


@dataclass(frozen=True)
class Table:
    """A table produced by one assignment run.

    The whole set of tables is replaced on every run, so tables are never
    edited individually.
    """

    id: str
    name: str
    capacity: int

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "capacity": self.capacity}

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Table":
        return cls(
            id=read_str(data, "id", "Table", required=True),
            name=read_str(data, "name", "Table", required=True),
            capacity=read_int(data, "capacity", "Table"),
        )


__all__ = ["Table"]
