from __future__ import annotations

import random
from collections import Counter
from typing import Iterable

from .types import ROLE_RANKS, SUIT_ROLES, Card, Suit

DECK_SIZE = 44

_SUIT_ORDER: tuple[Suit, ...] = ("spades", "clubs", "hearts", "diamonds")


def build_deck() -> list[Card]:
    """Return the fixed 44-card dungeon in canonical (unshuffled) order.

    Black suits keep the full 2-14 range and become monsters; red suits
    lose their faces and aces.
    """
    cards: list[Card] = []
    for suit in _SUIT_ORDER:
        for rank in ROLE_RANKS[SUIT_ROLES[suit]]:
            cards.append(Card.of(suit, rank))
    return cards


def shuffled_deck(rng: random.Random) -> list[Card]:
    cards = build_deck()
    rng.shuffle(cards)
    return cards


def is_standard_deck(cards: Iterable[Card]) -> bool:
    return Counter(cards) == Counter(build_deck())
