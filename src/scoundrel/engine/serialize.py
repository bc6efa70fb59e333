from __future__ import annotations


from .actions import Action, CancelCombatAction, ChooseCombatModeAction, PlayCardAction, SkipRoomAction
from .game import GameState, can_skip, get_valid_combat_modes
from .types import Card, WeaponSlot


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, PlayCardAction):
        return {"type": "play", "room_index": a.room_index}
    if isinstance(a, ChooseCombatModeAction):
        return {"type": "combat", "room_index": a.room_index, "mode": a.mode}
    if isinstance(a, CancelCombatAction):
        return {"type": "cancel_combat"}
    if isinstance(a, SkipRoomAction):
        return {"type": "skip"}
    # should be unreachable
    return {"type": "unknown"}


def card_to_dict(c: Card) -> dict[str, object]:
    return {
        "suit": c.suit,
        "rank": c.rank,
        "role": c.role,
        "display": c.display(),
    }


def _weapon_to_dict(w: WeaponSlot | None) -> dict[str, object] | None:
    if w is None:
        return None
    return {
        "card": card_to_dict(w.card),
        "last_slain": w.last_slain,
        "ceiling": w.ceiling,
        "broken": w.broken,
    }


def snapshot(state: GameState) -> dict[str, object]:
    """Return a JSON-serializable, read-only view of the game for presentation code."""
    pending = state.pending_combat
    return {
        "seed": state.seed,
        "health": state.health,
        "max_health": state.max_health,
        "weapon": _weapon_to_dict(state.weapon),
        "room": [card_to_dict(c) for c in state.room],
        "dungeon_count": len(state.dungeon),
        "discard_count": len(state.discard),
        "trophies": [card_to_dict(c) for c in state.trophies],
        "played_this_turn": state.played_this_turn,
        "potion_used_this_room": state.flags.potion_used,
        "just_skipped": state.flags.just_skipped,
        "can_skip": can_skip(state),
        "turn_number": state.turn_number,
        "phase": state.phase.kind,
        "won": state.won,
        "score": state.score,
        "pending_combat": pending,
        "combat_modes": get_valid_combat_modes(state, pending) if pending is not None else [],
        "log": [str(e) for e in state.log],
        "action_log": [action_to_dict(a) for a in state.action_log],
    }
