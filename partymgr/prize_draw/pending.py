"""Two-phase draw: a cosmetic spin followed by a single commit."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..config import settings
from ..exceptions import DrawClosedError
from ..models import AppState
from .engine import DrawEngine, DrawOutcome, DrawRequest
from .spin import Render, SpinPhase

logger = logging.getLogger(__name__)


class PendingDraw:
    """A validated draw whose winners have not been picked yet.

    The spin phase may run any number of frames; :meth:`commit` cancels it
    unconditionally and only then computes the winners from the state current
    at commit time.
    """

    def __init__(
        self,
        engine: DrawEngine,
        request: DrawRequest,
        spin: SpinPhase,
        *,
        current_state: Callable[[], AppState],
        on_commit: Callable[[DrawOutcome], None],
    ) -> None:
        self._engine = engine
        self.request = request
        self.spin = spin
        self._current_state = current_state
        self._on_commit = on_commit
        self._closed = False
        self.outcome: Optional[DrawOutcome] = None

    @property
    def closed(self) -> bool:
        return self._closed

    def run_spin(
        self,
        render: Render,
        *,
        duration: Optional[float] = None,
        fps: Optional[int] = None,
        **loop_kwargs,
    ) -> int:
        """Run the display-only spin loop; returns the number of frames shown."""
        if self._closed:
            raise DrawClosedError("Draw is no longer pending")
        return self.spin.run(
            render,
            duration=settings.spin_duration_seconds if duration is None else duration,
            fps=settings.spin_fps if fps is None else fps,
            **loop_kwargs,
        )

    def commit(self) -> DrawOutcome:
        """Stop the spin and record the real winners.

        Raises
        ------
        DrawClosedError
            If the draw was already committed or abandoned.
        ValidationError
            If the draw is no longer valid against the current state.
        """
        if self._closed:
            raise DrawClosedError("Draw is no longer pending")
        self.spin.cancel()

        outcome = self._engine.draw(
            self._current_state(),
            self.request.prize.id,
            self.request.batch_size,
            self.request.allow_repeat,
        )
        # Stays pending if the draw or the save fails, so commit can be retried.
        self._on_commit(outcome)
        self._closed = True
        self.outcome = outcome
        return outcome

    def abandon(self) -> None:
        """Cancel the spin without drawing (e.g. the view was torn down)."""
        self.spin.cancel()
        if not self._closed:
            logger.info(f"Abandoned pending draw for prize {self.request.prize.id}")
        self._closed = True


__all__ = ["PendingDraw"]
