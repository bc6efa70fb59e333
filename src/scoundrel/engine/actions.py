from __future__ import annotations

from dataclasses import dataclass

from .types import CombatMode


@dataclass(frozen=True)
class PlayCardAction:
    room_index: int


@dataclass(frozen=True)
class ChooseCombatModeAction:
    room_index: int
    mode: CombatMode


@dataclass(frozen=True)
class CancelCombatAction:
    pass


@dataclass(frozen=True)
class SkipRoomAction:
    pass


Action = PlayCardAction | ChooseCombatModeAction | CancelCombatAction | SkipRoomAction
