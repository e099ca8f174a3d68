"""Eligibility and sampling helpers for the draw engine."""

from __future__ import annotations

import random
from typing import Iterable, Sequence, TypeVar

from ..models import Employee

T = TypeVar("T")


def eligible_pool(employees: Iterable[Employee], allow_repeat: bool) -> list[Employee]:
    """Return employees allowed to win under the repeat-winner policy.

    Parameters
    ----------
    employees : Iterable[Employee]
        Full roster.
    allow_repeat : bool
        When ``True`` everyone is eligible; otherwise only employees that have
        not won yet.
    """
    if allow_repeat:
        return list(employees)
    return [e for e in employees if not e.is_winner]


def sample_without_replacement(
    pool: Sequence[T], k: int, rng: random.Random
) -> list[T]:
    """Pick ``k`` distinct items from ``pool``.

    Works on a copy: each round draws a uniform index into what is left and
    removes the chosen item, so nobody is picked twice in one batch.

    Raises
    ------
    ValueError
        If ``k`` is negative or larger than the pool.
    """
    if k < 0:
        raise ValueError("k must be non-negative")
    if k > len(pool):
        raise ValueError("k must not exceed the pool size")

    remaining = list(pool)
    picked: list[T] = []
    for _ in range(k):
        idx = rng.randrange(len(remaining))
        picked.append(remaining.pop(idx))
    return picked


def sample_with_replacement(
    pool: Sequence[T], k: int, rng: random.Random
) -> list[T]:
    """Pick ``k`` items independently; repeats are allowed (display only)."""
    if not pool:
        return []
    return [pool[rng.randrange(len(pool))] for _ in range(k)]


__all__ = ["eligible_pool", "sample_without_replacement", "sample_with_replacement"]
