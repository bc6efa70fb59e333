from __future__ import annotations

from scoundrel.engine.scoring import final_score, unseen_monster_total
from scoundrel.engine.types import Card


def test_loss_subtracts_unseen_monsters() -> None:
    unseen = [
        Card.of("spades", 10),
        Card.of("clubs", 10),
        Card.of("spades", 9),
        Card.of("clubs", 7),
        Card.of("hearts", 8),
        Card.of("diamonds", 6),
    ]
    assert unseen_monster_total(unseen) == 36
    assert final_score(won=False, health=0, max_health=20, unseen=unseen, last_heal=None) == -36


def test_win_scores_health() -> None:
    assert final_score(won=True, health=13, max_health=20, unseen=[], last_heal=None) == 13


def test_win_bonus_needs_full_health_and_potion() -> None:
    assert final_score(won=True, health=20, max_health=20, unseen=[], last_heal=4) == 24
    assert final_score(won=True, health=19, max_health=20, unseen=[], last_heal=4) == 19
    assert final_score(won=True, health=20, max_health=20, unseen=[], last_heal=None) == 20


def test_win_ignores_leftover_cards() -> None:
    leftovers = [Card.of("spades", 14)]
    assert final_score(won=True, health=7, max_health=20, unseen=leftovers, last_heal=None) == 7
