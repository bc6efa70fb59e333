from __future__ import annotations

from typing import Iterable

from .types import Card


def unseen_monster_total(cards: Iterable[Card]) -> int:
    return sum(c.rank for c in cards if c.role == "monster")


def final_score(
    *,
    won: bool,
    health: int,
    max_health: int,
    unseen: Iterable[Card],
    last_heal: int | None,
) -> int:
    """Score a finished game.

    A loss subtracts every monster still in the dungeon or room from the
    remaining health. A win scores the remaining health, plus the rank of
    the last potion if it was the final successful action and health is full.
    """
    if won:
        score = health
        if health == max_health and last_heal is not None:
            score += last_heal
        return score
    return health - unseen_monster_total(unseen)
