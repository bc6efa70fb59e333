from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Suit = Literal["spades", "clubs", "hearts", "diamonds"]
Role = Literal["monster", "weapon", "potion"]
CombatMode = Literal["barehanded", "weapon"]
ErrorCode = Literal["InvalidIndex", "InvalidAction", "IllegalWeaponUse"]

SUIT_ROLES: dict[Suit, Role] = {
    "spades": "monster",
    "clubs": "monster",
    "hearts": "potion",
    "diamonds": "weapon",
}

SUIT_SYMBOLS: dict[Suit, str] = {
    "spades": "♠",
    "clubs": "♣",
    "hearts": "♥",
    "diamonds": "♦",
}

ROLE_RANKS: dict[Role, range] = {
    "monster": range(2, 15),
    "weapon": range(2, 11),
    "potion": range(2, 11),
}

_FACE_LABELS = {11: "J", 12: "Q", 13: "K", 14: "A"}


@dataclass(frozen=True)
class Card:
    suit: Suit
    rank: int
    role: Role

    def __post_init__(self) -> None:
        if SUIT_ROLES.get(self.suit) != self.role:
            raise ValueError(f"Suit {self.suit!r} cannot carry role {self.role!r}")
        if self.rank not in ROLE_RANKS[self.role]:
            raise ValueError(f"Rank {self.rank} out of range for {self.role}")

    @staticmethod
    def of(suit: Suit, rank: int) -> "Card":
        """Build a card, deriving its role from the suit."""
        role = SUIT_ROLES.get(suit)
        if role is None:
            raise ValueError(f"Unknown suit: {suit!r}")
        return Card(suit=suit, rank=rank, role=role)

    @property
    def rank_label(self) -> str:
        return _FACE_LABELS.get(self.rank, str(self.rank))

    def display(self) -> str:
        return f"{self.rank_label}{SUIT_SYMBOLS[self.suit]}"

    def label(self) -> str:
        return self.role.upper()

    def describe(self) -> str:
        if self.role == "monster":
            return f"Take {self.rank} damage"
        if self.role == "weapon":
            return f"{self.rank} attack power"
        return f"Heal {self.rank} HP"

    def __str__(self) -> str:
        return self.display()


@dataclass
class WeaponSlot:
    card: Card
    last_slain: int | None = None

    def can_use_against(self, monster_rank: int) -> bool:
        # Strictly less than: each kill lowers the ceiling.
        if self.last_slain is None:
            return True
        return monster_rank < self.last_slain

    @property
    def ceiling(self) -> int | None:
        """Highest monster rank this weapon may still slay; None means unlimited."""
        if self.last_slain is None:
            return None
        return self.last_slain - 1

    @property
    def broken(self) -> bool:
        return self.last_slain is not None and self.last_slain <= 2


@dataclass
class RoomFlags:
    potion_used: bool = False
    just_skipped: bool = False
    last_heal: int | None = None  # rank of the last non-wasted potion, for the victory bonus


@dataclass(frozen=True)
class ActivePhase:
    kind: Literal["active"] = "active"
    played: int = 0


@dataclass(frozen=True)
class FinalCardPhase:
    kind: Literal["final_card"] = "final_card"


@dataclass(frozen=True)
class OverPhase:
    won: bool
    score: int
    kind: Literal["over"] = "over"


Phase = ActivePhase | FinalCardPhase | OverPhase


@dataclass(frozen=True)
class LogEntry:
    turn: int
    message: str

    def __str__(self) -> str:
        return f"[Turn {self.turn}] {self.message}"
