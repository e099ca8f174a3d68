"""Prize catalogue helpers and remaining-slot accounting."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..exceptions import PrizeNotFoundError, ValidationError
from ..models import AppState, Prize
from ..models.utils import clean_text, generate_id

logger = logging.getLogger(__name__)


def add_prize(
    prizes: Sequence[Prize],
    name: Optional[str],
    count: int = 1,
    image: Optional[str] = None,
) -> tuple[tuple[Prize, ...], Prize]:
    """Append a prize with ``count`` winner slots."""
    clean_name = clean_text(name)
    if clean_name is None:
        raise ValidationError("Prize name is required")
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ValidationError("Prize count must be a positive integer")

    prize = Prize(
        id=generate_id({p.id for p in prizes}),
        name=clean_name,
        count=count,
        image=clean_text(image),
    )
    logger.info(f"Added prize {prize.id} ({prize.name}) x{prize.count}")
    return tuple(prizes) + (prize,), prize


def remaining_slots(state: AppState, prize_id: str) -> int:
    """``max(0, prize.count - winner records for the prize)``."""
    prize = state.prize_by_id(prize_id)
    if prize is None:
        raise PrizeNotFoundError(prize_id)
    return max(0, prize.count - len(state.winners_for_prize(prize_id)))


def can_draw(state: AppState, prize_id: str) -> bool:
    """Whether the draw action for ``prize_id`` should be enabled."""
    return remaining_slots(state, prize_id) > 0


__all__ = ["add_prize", "remaining_slots", "can_draw"]
