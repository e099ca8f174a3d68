"""Draw engine: pick distinct winners for a prize and record the outcome."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Optional

from ..config import settings
from ..exceptions import (
    InsufficientPoolError,
    PrizeExhaustedError,
    PrizeNotFoundError,
    PrizeNotSelectedError,
    ValidationError,
)
from ..models import AppState, Employee, Prize, WinnerRecord
from ..models.utils import Clock, generate_id, now_ms
from .prizes import remaining_slots
from .sampling import eligible_pool, sample_without_replacement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawOutcome:
    """Value object describing one committed draw batch.

    Attributes
    ----------
    state : AppState
        Snapshot with the new winner records and updated employees.
    prize : Prize
        Prize that was drawn.
    winners : tuple[Employee, ...]
        Winning employees (updated copies) in the order they were drawn.
    records : tuple[WinnerRecord, ...]
        Records appended to the winner log, sharing one timestamp.
    """

    state: AppState
    prize: Prize
    winners: tuple[Employee, ...]
    records: tuple[WinnerRecord, ...]


@dataclass(frozen=True)
class DrawRequest:
    """A validated draw: the prize and the eligible pool at validation time."""

    prize: Prize
    batch_size: int
    allow_repeat: bool
    pool: tuple[Employee, ...]
    remaining: int


class DrawEngine:
    """Engine that validates draws, samples winners and records outcomes."""

    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
        max_batch: Optional[int] = None,
    ) -> None:
        """Create a draw engine.

        Parameters
        ----------
        rng : Optional[random.Random], default: None
            Random source used for the final selection. A fresh
            ``random.SystemRandom`` is used when omitted.
        clock : Optional[Clock], default: None
            Callable returning epoch milliseconds; stamps winner records.
        max_batch : Optional[int], default: None
            Largest batch size accepted. Defaults to ``settings.max_draw_batch``.
        """

        self._rng = rng or random.SystemRandom()
        self._clock = clock or now_ms
        self._max_batch = settings.max_draw_batch if max_batch is None else max_batch

    @property
    def rng(self) -> random.Random:
        return self._rng

    def prepare(
        self,
        state: AppState,
        prize_id: Optional[str],
        batch_size: int,
        allow_repeat: bool = False,
    ) -> DrawRequest:
        """Check every precondition of a draw without touching ``state``.

        Raises
        ------
        PrizeNotSelectedError
            If ``prize_id`` is empty.
        PrizeNotFoundError
            If the prize does not exist.
        ValidationError
            If ``batch_size`` is outside ``1..max_batch``.
        PrizeExhaustedError
            If the prize has fewer remaining slots than ``batch_size``.
        InsufficientPoolError
            If fewer than ``batch_size`` employees are eligible.
        """
        if not prize_id:
            raise PrizeNotSelectedError()
        prize = state.prize_by_id(prize_id)
        if prize is None:
            raise PrizeNotFoundError(prize_id)
        if (
            isinstance(batch_size, bool)
            or not isinstance(batch_size, int)
            or not 1 <= batch_size <= self._max_batch
        ):
            raise ValidationError(
                f"Draw batch size must be between 1 and {self._max_batch}"
            )

        remaining = remaining_slots(state, prize_id)
        if batch_size > remaining:
            raise PrizeExhaustedError(prize_id, remaining, batch_size)

        pool = tuple(eligible_pool(state.employees, allow_repeat))
        if len(pool) < batch_size:
            raise InsufficientPoolError(len(pool), batch_size)

        return DrawRequest(
            prize=prize,
            batch_size=batch_size,
            allow_repeat=allow_repeat,
            pool=pool,
            remaining=remaining,
        )

    def draw(
        self,
        state: AppState,
        prize_id: Optional[str],
        batch_size: int = 1,
        allow_repeat: bool = False,
    ) -> DrawOutcome:
        """Select ``batch_size`` distinct winners for ``prize_id``.

        Parameters
        ----------
        state : AppState
            Current snapshot. It is never mutated.
        prize_id : Optional[str]
            Prize to draw.
        batch_size : int, default: 1
            Number of winners in this batch.
        allow_repeat : bool, default: False
            Whether employees who already won are eligible.

        Returns
        -------
        DrawOutcome
            New snapshot plus the winners and records of this batch.

        Notes
        -----
        The outcome is computed in three steps:

        1. Re-validate against ``state`` (see :meth:`prepare`).
        2. Sample without replacement from the eligible pool.
        3. Append one record per winner with a shared timestamp, and mark each
           winner with ``is_winner`` and the prize name (overwriting any
           earlier ``prize_won``).
        """
        request = self.prepare(state, prize_id, batch_size, allow_repeat)
        picked = sample_without_replacement(request.pool, request.batch_size, self._rng)

        timestamp = self._clock()
        taken_ids = {w.id for w in state.winners}
        records: list[WinnerRecord] = []
        for employee in picked:
            record_id = generate_id(taken_ids)
            taken_ids.add(record_id)
            records.append(
                WinnerRecord(
                    id=record_id,
                    employee_id=employee.id,
                    prize_id=request.prize.id,
                    timestamp=timestamp,
                )
            )

        winner_ids = {e.id for e in picked}
        employees = tuple(
            replace(e, is_winner=True, prize_won=request.prize.name)
            if e.id in winner_ids
            else e
            for e in state.employees
        )
        by_id = {e.id: e for e in employees}
        winners = tuple(by_id[e.id] for e in picked)

        new_state = state.evolve(
            employees=employees,
            winners=state.winners + tuple(records),
        )
        logger.info(
            f"Drew {len(winners)} winner(s) for prize {request.prize.id} "
            f"from a pool of {len(request.pool)}"
        )
        return DrawOutcome(
            state=new_state,
            prize=request.prize,
            winners=winners,
            records=tuple(records),
        )

    def reset(self, state: AppState) -> AppState:
        """Clear the winner log and every winner flag; tables and prizes stay."""
        employees = tuple(
            replace(e, is_winner=False, prize_won=None) for e in state.employees
        )
        logger.info(f"Reset draw: cleared {len(state.winners)} winner record(s)")
        return state.evolve(employees=employees, winners=())


__all__ = ["DrawEngine", "DrawOutcome", "DrawRequest"]
