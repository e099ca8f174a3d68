"""State container tying the roster, seating and draw operations to the store.

:class:`PartyManager` owns the current :class:`AppState` snapshot. Each
operation computes a new snapshot with the pure helpers in
:mod:`partymgr.roster`, :mod:`partymgr.seating` and
:mod:`partymgr.prize_draw`, swaps it in, and writes the full snapshot through
:class:`~partymgr.persistence.StateRepository`. Operations that raise leave
both the snapshot and the store untouched.
"""

from __future__ import annotations

import logging
import random
from datetime import timezone
from typing import Any, Optional, Union

from .config import Settings, settings as default_settings
from .csv_io import export_winners_csv, parse_roster_csv
from .models import AppState, Employee, Prize
from .models.utils import Clock
from .persistence import StateRepository
from .prize_draw import (
    DrawEngine,
    DrawOutcome,
    PendingDraw,
    SpinPhase,
    add_prize,
    remaining_slots,
)
from .roster import (
    add_employee,
    bulk_append,
    clear_employees,
    remove_employee,
    search_employees,
    update_employee,
)
from .seating import (
    SeatingSummary,
    SortMode,
    TableOccupancy,
    assign_tables,
    clear_assignments,
    move_employee,
    seating_summary,
    table_occupancy,
)

logger = logging.getLogger(__name__)


class PartyManager:
    """Explicit state container for one event."""

    def __init__(
        self,
        repository: StateRepository,
        state: Optional[AppState] = None,
        *,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        """Create a manager around an already loaded snapshot.

        Parameters
        ----------
        repository : StateRepository
            Store every mutation is written to.
        state : Optional[AppState], default: None
            Initial snapshot; empty when omitted. Use :meth:`open` to load it
            from ``repository`` instead.
        rng : Optional[random.Random], default: None
            Random source for seating shuffles, draws and the spin display.
        clock : Optional[Clock], default: None
            Epoch-millisecond clock used to stamp winner records.
        settings : Optional[Settings], default: None
            Overrides the process-wide settings.
        """

        self._repository = repository
        self._state = state if state is not None else AppState.empty()
        self._settings = settings or default_settings
        self._rng = rng or random.SystemRandom()
        self._draw_engine = DrawEngine(
            rng=self._rng,
            clock=clock,
            max_batch=self._settings.max_draw_batch,
        )

    @classmethod
    def open(
        cls,
        repository: StateRepository,
        *,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
        settings: Optional[Settings] = None,
    ) -> "PartyManager":
        """Load the stored snapshot (seeding default prizes on first run)."""
        state = repository.load_or_seed()
        return cls(repository, state, rng=rng, clock=clock, settings=settings)

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def settings(self) -> Settings:
        return self._settings

    def _commit(self, state: AppState) -> AppState:
        self._repository.save(state)
        self._state = state
        return state

    # -- roster -----------------------------------------------------------

    def add_employee(
        self,
        *,
        staff_id: Optional[str],
        name: Optional[str],
        department: Optional[str] = None,
        title: Optional[str] = None,
        gender: Optional[str] = None,
    ) -> Employee:
        employees, employee = add_employee(
            self._state.employees,
            staff_id=staff_id,
            name=name,
            department=department,
            title=title,
            gender=gender,
        )
        self._commit(self._state.evolve(employees=employees))
        return employee

    def update_employee(self, employee_id: str, **changes: Any) -> Employee:
        employees, employee = update_employee(
            self._state.employees, employee_id, **changes
        )
        self._commit(self._state.evolve(employees=employees))
        return employee

    def remove_employee(self, employee_id: str) -> None:
        employees = remove_employee(self._state.employees, employee_id)
        self._commit(self._state.evolve(employees=employees))

    def clear_employees(self) -> None:
        logger.info(f"Clearing roster of {len(self._state.employees)} employee(s)")
        self._commit(self._state.evolve(employees=clear_employees()))

    def import_employees(self, content: Union[str, bytes]) -> tuple[Employee, ...]:
        """Parse roster CSV text and append the usable rows.

        Raises
        ------
        ImportFormatError
            If the text cannot be parsed; nothing is imported in that case.
        """
        rows = parse_roster_csv(content)
        employees, appended = bulk_append(self._state.employees, rows)
        if appended:
            self._commit(self._state.evolve(employees=employees))
        return appended

    def search_employees(self, query: Optional[str]) -> list[Employee]:
        return search_employees(self._state.employees, query)

    # -- seating ----------------------------------------------------------

    def assign_tables(
        self,
        capacity: Optional[int] = None,
        mode: Union[SortMode, str] = SortMode.DEPARTMENT,
    ) -> AppState:
        """Replace all tables and seat every employee.

        With an empty roster nothing changes and no tables are produced.
        """
        size = capacity if capacity is not None else self._settings.default_table_capacity
        plan = assign_tables(self._state.employees, size, mode, rng=self._rng)
        if not plan.employees:
            return self._state
        return self._commit(
            self._state.evolve(tables=plan.tables, employees=plan.employees)
        )

    def clear_tables(self) -> AppState:
        logger.info(f"Clearing {len(self._state.tables)} table(s)")
        return self._commit(
            self._state.evolve(
                tables=(), employees=clear_assignments(self._state.employees)
            )
        )

    def move_employee(self, employee_id: str, table_id: str) -> TableOccupancy:
        """Move one employee; returns the target table's recomputed occupancy."""
        employees = move_employee(
            self._state.employees, self._state.tables, employee_id, table_id
        )
        self._commit(self._state.evolve(employees=employees))
        occupancy = next(
            occ for occ in table_occupancy(self._state) if occ.table.id == table_id
        )
        if occupancy.is_over_capacity:
            logger.warning(
                f"Table {table_id} is over capacity: "
                f"{occupancy.occupied}/{occupancy.table.capacity}"
            )
        return occupancy

    def table_occupancy(self) -> list[TableOccupancy]:
        return table_occupancy(self._state)

    def seating_summary(self, capacity: Optional[int] = None) -> SeatingSummary:
        size = capacity if capacity is not None else self._settings.default_table_capacity
        return seating_summary(self._state, size)

    # -- prizes & draws ---------------------------------------------------

    def add_prize(
        self, name: Optional[str], count: int = 1, image: Optional[str] = None
    ) -> Prize:
        prizes, prize = add_prize(self._state.prizes, name, count, image)
        self._commit(self._state.evolve(prizes=prizes))
        return prize

    def remaining_slots(self, prize_id: str) -> int:
        return remaining_slots(self._state, prize_id)

    def start_draw(
        self,
        prize_id: Optional[str],
        batch_size: int = 1,
        allow_repeat: bool = False,
    ) -> PendingDraw:
        """Validate a draw and return it pending, ready to spin and commit.

        Validation errors are raised here, before any spin starts.
        """
        request = self._draw_engine.prepare(
            self._state, prize_id, batch_size, allow_repeat
        )
        spin = SpinPhase(request.pool, request.batch_size, rng=random.Random())
        return PendingDraw(
            self._draw_engine,
            request,
            spin,
            current_state=lambda: self._state,
            on_commit=lambda outcome: self._commit(outcome.state),
        )

    def draw(
        self,
        prize_id: Optional[str],
        batch_size: int = 1,
        allow_repeat: bool = False,
    ) -> DrawOutcome:
        """Draw and commit immediately, without a spin phase."""
        return self.start_draw(prize_id, batch_size, allow_repeat).commit()

    def reset_draw(self) -> AppState:
        return self._commit(self._draw_engine.reset(self._state))

    def export_winners_csv(self, tz: Optional[timezone] = None) -> str:
        return export_winners_csv(self._state, tz)


__all__ = ["PartyManager"]
