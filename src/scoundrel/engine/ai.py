from __future__ import annotations

from dataclasses import dataclass

from .actions import Action, ChooseCombatModeAction, PlayCardAction, SkipRoomAction
from .game import GameState, can_skip, get_valid_combat_modes, step
from .types import Card


@dataclass(frozen=True)
class AISpec:
    """Simple autoplayer tuning parameters.

    difficulty:
      0 = easy (makes mistakes)
      1 = normal
      2 = hard (never wastes a weapon fight)
    """

    difficulty: int = 1


def _monster_cost(state: GameState, card: Card) -> int:
    w = state.weapon
    if w is not None and w.can_use_against(card.rank):
        return max(0, card.rank - w.card.rank)
    return card.rank


def _card_value(state: GameState, card: Card) -> float:
    if card.role == "potion":
        if state.flags.potion_used:
            return -1.0
        return float(min(card.rank, state.max_health - state.health))

    if card.role == "weapon":
        w = state.weapon
        if w is None:
            return float(card.rank)
        v = float(card.rank - w.card.rank)
        # a dulled weapon is worth replacing
        if w.ceiling is not None:
            v += (14 - w.ceiling) / 2.0
        return v

    return -float(_monster_cost(state, card))


def _forced_damage(state: GameState) -> int:
    costs = sorted(_monster_cost(state, c) for c in state.room if c.role == "monster")
    # we choose which card stays behind, so the worst monster can be left
    plays = state.config.plays_per_room
    if len(state.room) > plays and costs:
        costs = costs[:-1]
    return sum(costs)


def _pick_combat_mode(state: GameState, spec: AISpec) -> ChooseCombatModeAction | None:
    idx = state.pending_combat
    if idx is None:
        return None
    modes = get_valid_combat_modes(state, idx)
    card = state.room[idx]
    if "weapon" in modes:
        assert state.weapon is not None
        dulling_waste = state.weapon.card.rank >= card.rank and card.rank <= 3
        if spec.difficulty >= 2 and dulling_waste and card.rank < state.health:
            return ChooseCombatModeAction(room_index=idx, mode="barehanded")
        if spec.difficulty <= 0 and state.rng.random() < 0.25:
            return ChooseCombatModeAction(room_index=idx, mode="barehanded")
        return ChooseCombatModeAction(room_index=idx, mode="weapon")
    return ChooseCombatModeAction(room_index=idx, mode="barehanded")


def choose_action(state: GameState, spec: AISpec | None = None) -> Action | None:
    """Pick the next command for the current room, or None once the game is over.

    The autoplayer uses the engine RNG (`state.rng`) so it remains deterministic
    for a given seed.
    """
    spec = spec or AISpec()
    if state.is_over:
        return None

    combat = _pick_combat_mode(state, spec)
    if combat is not None:
        return combat

    if can_skip(state) and _forced_damage(state) >= state.health:
        if spec.difficulty > 0 or state.rng.random() < 0.5:
            return SkipRoomAction()

    best: tuple[float, int] | None = None
    for idx, card in enumerate(state.room):
        value = _card_value(state, card)
        if best is None or value > best[0]:
            best = (value, idx)
    if best is None:
        return None
    return PlayCardAction(room_index=best[1])


def autoplay(state: GameState, spec: AISpec | None = None, max_steps: int = 500) -> int:
    """Drive the game until it ends; returns the number of commands applied."""
    spec = spec or AISpec()
    steps = 0
    while not state.is_over and steps < max_steps:
        action = choose_action(state, spec)
        if action is None:
            break
        res = step(state, action)
        if not res.ok:
            raise RuntimeError(f"Autoplayer chose an illegal action: {res.error}")
        steps += 1
    return steps
