"""Table assignment and occupancy reporting."""

from .engine import (
    SeatingPlan,
    SortMode,
    assign_tables,
    clear_assignments,
    move_employee,
    order_employees,
)
from .occupancy import SeatingSummary, TableOccupancy, seating_summary, table_occupancy

__all__ = [
    "SeatingPlan",
    "SeatingSummary",
    "SortMode",
    "TableOccupancy",
    "assign_tables",
    "clear_assignments",
    "move_employee",
    "order_employees",
    "seating_summary",
    "table_occupancy",
]
