"""Deterministic, headless rules engine for Scoundrel.

IMPORTANT: This package must never import presentation code.
"""

from .actions import Action, CancelCombatAction, ChooseCombatModeAction, PlayCardAction, SkipRoomAction
from .game import GameConfig, GameState, StepResult, new_game, step
from .types import Card, CombatMode, ErrorCode, Role

__all__ = [
    "Action",
    "CancelCombatAction",
    "Card",
    "ChooseCombatModeAction",
    "CombatMode",
    "ErrorCode",
    "GameConfig",
    "GameState",
    "PlayCardAction",
    "Role",
    "SkipRoomAction",
    "StepResult",
    "new_game",
    "step",
]
