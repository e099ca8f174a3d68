"""Cosmetic "spin" phase shown before a draw resolves.

The spin only cycles through display names sampled with replacement; it holds
a snapshot of names and has no access to application state. The real winners
are computed once, after the spin's token is cancelled.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Iterator, Optional, Sequence

from ..models import Employee
from .sampling import sample_with_replacement

logger = logging.getLogger(__name__)

Render = Callable[[tuple[str, ...]], None]


class CancellationToken:
    """One-way flag shared between the spin loop and the resolution step."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class SpinPhase:
    """Frame source cycling random names from the eligible pool.

    Parameters
    ----------
    pool : Sequence[Employee]
        Eligible employees; only their names are kept.
    batch_size : int
        Number of names shown per frame.
    rng : Optional[random.Random], default: None
        Random source for the display names. Independent of the draw's rng.
    token : Optional[CancellationToken], default: None
        Token that stops the phase; a fresh one is created when omitted.
    """

    def __init__(
        self,
        pool: Sequence[Employee],
        batch_size: int,
        *,
        rng: Optional[random.Random] = None,
        token: Optional[CancellationToken] = None,
    ) -> None:
        self._names = tuple(e.name for e in pool)
        self._batch_size = batch_size
        self._rng = rng or random.Random()
        self.token = token or CancellationToken()
        self.frames_rendered = 0

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    def cancel(self) -> None:
        self.token.cancel()

    def next_frame(self) -> tuple[str, ...]:
        return tuple(sample_with_replacement(self._names, self._batch_size, self._rng))

    def frames(self) -> Iterator[tuple[str, ...]]:
        """Yield frames until the token is cancelled."""
        while not self.token.cancelled:
            yield self.next_frame()

    def run(
        self,
        render: Render,
        *,
        duration: float,
        fps: int,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Drive a frame-paced loop until ``duration`` elapses or cancellation.

        ``render`` is never called once the token is cancelled, including by
        ``render`` itself. Returns the number of frames rendered.
        """
        interval = 1.0 / fps if fps > 0 else 0.0
        deadline = clock() + duration
        rendered = 0
        for frame in self.frames():
            if clock() >= deadline:
                break
            render(frame)
            rendered += 1
            if self.token.cancelled:
                break
            sleep(interval)
        self.frames_rendered += rendered
        logger.debug(f"Spin phase rendered {rendered} frame(s)")
        return rendered


__all__ = ["CancellationToken", "SpinPhase", "Render"]
