from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .actions import Action, CancelCombatAction, ChooseCombatModeAction, PlayCardAction, SkipRoomAction
from .deck import DECK_SIZE, is_standard_deck, shuffled_deck
from .scoring import final_score
from .types import (
    ActivePhase,
    Card,
    CombatMode,
    ErrorCode,
    FinalCardPhase,
    LogEntry,
    OverPhase,
    Phase,
    RoomFlags,
    WeaponSlot,
)

Event = dict[str, object]


@dataclass(frozen=True)
class GameConfig:
    max_health: int = 20
    room_size: int = 4
    plays_per_room: int = 3


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None
    code: ErrorCode | None = None


@dataclass
class GameState:
    config: GameConfig
    seed: int
    rng: random.Random
    health: int
    dungeon: list[Card]  # index 0 is the next card drawn
    room: list[Card] = field(default_factory=list)
    discard: list[Card] = field(default_factory=list)
    trophies: list[Card] = field(default_factory=list)
    weapon: WeaponSlot | None = None
    flags: RoomFlags = field(default_factory=RoomFlags)
    phase: Phase = field(default_factory=ActivePhase)
    turn_number: int = 1
    pending_combat: int | None = None
    action_log: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)
    log: list[LogEntry] = field(default_factory=list)

    @property
    def max_health(self) -> int:
        return self.config.max_health

    @property
    def played_this_turn(self) -> int:
        if isinstance(self.phase, ActivePhase):
            return self.phase.played
        return 0

    @property
    def is_over(self) -> bool:
        return isinstance(self.phase, OverPhase)

    @property
    def won(self) -> bool | None:
        if isinstance(self.phase, OverPhase):
            return self.phase.won
        return None

    @property
    def score(self) -> int | None:
        if isinstance(self.phase, OverPhase):
            return self.phase.score
        return None

    def card_count(self) -> int:
        return (
            len(self.dungeon)
            + len(self.room)
            + len(self.discard)
            + len(self.trophies)
            + (1 if self.weapon is not None else 0)
        )


def _reject(code: ErrorCode, msg: str) -> StepResult:
    return StepResult(ok=False, events=[], error=msg, code=code)


def _accepted() -> StepResult:
    return StepResult(ok=True, events=[])


def _log(state: GameState, msg: str) -> None:
    state.log.append(LogEntry(turn=state.turn_number, message=msg))


def _names(cards: Iterable[Card]) -> str:
    return ", ".join(c.display() for c in cards)


def _deal(state: GameState) -> None:
    drawn: list[Card] = []
    while len(state.room) < state.config.room_size and state.dungeon:
        card = state.dungeon.pop(0)
        state.room.append(card)
        drawn.append(card)

    state.flags.potion_used = False
    state.flags.last_heal = None
    if not state.dungeon and len(state.room) == 1:
        state.phase = FinalCardPhase()
    else:
        state.phase = ActivePhase(played=0)

    if state.room:
        _log(state, f"Entered room: {_names(state.room)}")
    state.event_log.append(
        {"type": "ROOM_DEALT", "drawn": [c.display() for c in drawn], "room": [c.display() for c in state.room]}
    )


def _finish(state: GameState, won: bool) -> None:
    score = final_score(
        won=won,
        health=state.health,
        max_health=state.config.max_health,
        unseen=[*state.dungeon, *state.room],
        last_heal=state.flags.last_heal,
    )
    state.phase = OverPhase(won=won, score=score)
    state.pending_combat = None
    if won:
        _log(state, f"VICTORY! Score: {score}")
    else:
        _log(state, f"DIED! Score: {score}")
    state.event_log.append({"type": "GAME_OVER", "won": won, "score": score})


def _complete_play(state: GameState) -> None:
    """Count one played card and advance the room/turn state machine."""
    played = state.played_this_turn + 1
    dungeon_empty = not state.dungeon

    if played >= state.config.plays_per_room:
        state.turn_number += 1
        if dungeon_empty and len(state.room) == 1:
            state.phase = FinalCardPhase()
            state.flags.potion_used = False
            _log(state, "Final card! You must face it.")
            state.event_log.append({"type": "FINAL_CARD", "card": state.room[0].display()})
        elif dungeon_empty and not state.room:
            _finish(state, won=True)
        else:
            state.flags.just_skipped = False
            _deal(state)
        return

    if dungeon_empty and not state.room:
        _finish(state, won=True)
        return
    state.phase = ActivePhase(played=played)


def _play_potion(state: GameState, index: int) -> None:
    card = state.room.pop(index)
    if state.flags.potion_used:
        state.flags.last_heal = None
        _log(state, f"Wasted {card.display()} (already used potion)")
        state.event_log.append({"type": "POTION_WASTED", "card": card.display()})
    else:
        heal = min(card.rank, state.config.max_health - state.health)
        state.health += heal
        state.flags.potion_used = True
        state.flags.last_heal = card.rank
        _log(state, f"Drank {card.display()}, healed {heal} HP (now {state.health} HP)")
        state.event_log.append({"type": "POTION_DRUNK", "card": card.display(), "healed": heal})
    state.discard.append(card)
    _complete_play(state)


def _equip_weapon(state: GameState, index: int) -> None:
    card = state.room.pop(index)
    old = state.weapon
    if old is not None:
        state.discard.append(old.card)
        state.discard.extend(state.trophies)
        state.trophies.clear()
        _log(state, f"Discarded {old.card.display()}, equipped {card.display()}")
    else:
        _log(state, f"Equipped {card.display()}")
    state.weapon = WeaponSlot(card=card)
    state.flags.last_heal = None
    state.event_log.append(
        {
            "type": "WEAPON_EQUIPPED",
            "card": card.display(),
            "replaced": old.card.display() if old is not None else None,
        }
    )
    _complete_play(state)


def _fight(state: GameState, index: int, mode: CombatMode) -> None:
    card = state.room.pop(index)
    state.pending_combat = None

    if mode == "weapon":
        assert state.weapon is not None
        weapon = state.weapon
        damage = max(0, card.rank - weapon.card.rank)
        weapon.last_slain = card.rank
        state.trophies.append(card)
        after = max(0, state.health - damage)
        _log(state, f"Killed {card.display()} with {weapon.card.display()}, took {damage} dmg (now {after} HP)")
    else:
        damage = card.rank
        state.discard.append(card)
        after = max(0, state.health - damage)
        _log(state, f"Fought {card.display()} barehanded, took {damage} dmg (now {after} HP)")

    state.health -= damage
    state.flags.last_heal = None
    state.event_log.append({"type": "MONSTER_FOUGHT", "card": card.display(), "mode": mode, "damage": damage})

    if state.health <= 0:
        state.health = 0
        _finish(state, won=False)
        return
    _complete_play(state)


def _check_can_act(state: GameState) -> StepResult | None:
    if state.is_over:
        return _reject("InvalidAction", "The game is over.")
    if not state.room:
        return _reject("InvalidAction", "The room is empty.")
    return None


def _play_card(state: GameState, action: PlayCardAction) -> StepResult:
    chk = _check_can_act(state)
    if chk:
        return chk
    if action.room_index < 0 or action.room_index >= len(state.room):
        return _reject("InvalidIndex", "No card at that position.")

    card = state.room[action.room_index]
    if card.role == "potion":
        state.pending_combat = None
        _play_potion(state, action.room_index)
    elif card.role == "weapon":
        state.pending_combat = None
        _equip_weapon(state, action.room_index)
    elif state.weapon is None:
        _fight(state, action.room_index, "barehanded")
    else:
        # Armed: the caller must pick a combat mode next.
        state.pending_combat = action.room_index
        state.event_log.append(
            {
                "type": "COMBAT_PENDING",
                "room_index": action.room_index,
                "card": card.display(),
                "modes": list(get_valid_combat_modes(state, action.room_index)),
            }
        )
    return _accepted()


def _choose_combat_mode(state: GameState, action: ChooseCombatModeAction) -> StepResult:
    chk = _check_can_act(state)
    if chk:
        return chk
    if state.pending_combat is None:
        return _reject("InvalidAction", "No fight is waiting for a combat mode.")
    if action.room_index != state.pending_combat:
        return _reject("InvalidAction", "That card is not the monster being fought.")

    card = state.room[action.room_index]
    if action.mode == "weapon":
        if state.weapon is None:
            return _reject("IllegalWeaponUse", "No weapon equipped.")
        if not state.weapon.can_use_against(card.rank):
            return _reject(
                "IllegalWeaponUse",
                f"{state.weapon.card.display()} is too dull to fight {card.display()}.",
            )
    elif action.mode != "barehanded":
        return _reject("InvalidAction", f"Unknown combat mode: {action.mode}")

    _fight(state, action.room_index, action.mode)
    return _accepted()


def _cancel_combat(state: GameState) -> StepResult:
    if state.is_over:
        return _reject("InvalidAction", "The game is over.")
    if state.pending_combat is None:
        return _reject("InvalidAction", "No fight to back out of.")
    state.pending_combat = None
    state.event_log.append({"type": "COMBAT_CANCELLED"})
    return _accepted()


def _skip_room(state: GameState) -> StepResult:
    chk = _check_can_act(state)
    if chk:
        return chk
    if state.flags.just_skipped:
        return _reject("InvalidAction", "Cannot skip two rooms in a row!")
    if state.played_this_turn > 0:
        return _reject("InvalidAction", "Cannot skip after playing cards!")

    skipped = list(state.room)
    state.dungeon.extend(skipped)
    state.room.clear()
    state.pending_combat = None
    state.flags.just_skipped = True
    _log(state, f"Skipped room ({_names(skipped)})")
    state.event_log.append({"type": "ROOM_SKIPPED", "cards": [c.display() for c in skipped]})
    _deal(state)
    return _accepted()


def step(state: GameState, action: Action) -> StepResult:
    """Apply a single command to the game state.

    Accepted commands mutate `state` in place and are appended to the
    action log; rejected ones leave it untouched. Deterministic for a given
    (seed, action sequence).
    """
    before = len(state.event_log)

    if isinstance(action, PlayCardAction):
        result = _play_card(state, action)
    elif isinstance(action, ChooseCombatModeAction):
        result = _choose_combat_mode(state, action)
    elif isinstance(action, CancelCombatAction):
        result = _cancel_combat(state)
    elif isinstance(action, SkipRoomAction):
        result = _skip_room(state)
    else:
        return _reject("InvalidAction", "Unknown action.")

    if result.ok:
        state.action_log.append(action)
        result.events = state.event_log[before:]
    return result


def play_card(state: GameState, room_index: int) -> StepResult:
    return step(state, PlayCardAction(room_index=room_index))


def choose_combat_mode(state: GameState, room_index: int, mode: CombatMode) -> StepResult:
    return step(state, ChooseCombatModeAction(room_index=room_index, mode=mode))


def cancel_combat(state: GameState) -> StepResult:
    return step(state, CancelCombatAction())


def skip_room(state: GameState) -> StepResult:
    return step(state, SkipRoomAction())


def get_valid_combat_modes(state: GameState, room_index: int) -> list[CombatMode]:
    """Combat modes legal against the card at room_index right now.

    Empty when the card is not a monster or the game is over.
    """
    if state.is_over or room_index < 0 or room_index >= len(state.room):
        return []
    card = state.room[room_index]
    if card.role != "monster":
        return []
    if state.weapon is not None and state.weapon.can_use_against(card.rank):
        return ["weapon", "barehanded"]
    return ["barehanded"]


def can_skip(state: GameState) -> bool:
    return (
        not state.is_over
        and bool(state.room)
        and not state.flags.just_skipped
        and state.played_this_turn == 0
    )


def new_game(
    seed: int | None = None,
    config: GameConfig | None = None,
    dungeon: Sequence[Card] | None = None,
) -> GameState:
    cfg = config or GameConfig()
    if seed is None:
        seed = random.SystemRandom().randrange(2**32)
    rng = random.Random(seed)

    if dungeon is not None:
        if len(dungeon) != DECK_SIZE or not is_standard_deck(dungeon):
            raise ValueError(f"Dungeon must be an ordering of the standard {DECK_SIZE}-card deck.")
        cards = list(dungeon)
    else:
        cards = shuffled_deck(rng)

    state = GameState(config=cfg, seed=seed, rng=rng, health=cfg.max_health, dungeon=cards)
    _log(state, f"Entered the dungeon with {cfg.max_health} HP")
    state.event_log.append({"type": "GAME_STARTED", "seed": seed, "health": cfg.max_health})
    _deal(state)
    return state


def reset(state: GameState) -> GameState:
    """Throw the current game away and start a freshly shuffled one."""
    return new_game(config=state.config)


def replay(
    seed: int,
    actions: Iterable[Action],
    config: GameConfig | None = None,
    dungeon: Sequence[Card] | None = None,
) -> GameState:
    state = new_game(seed=seed, config=config, dungeon=dungeon)
    for a in actions:
        step(state, a)
        if state.is_over:
            break
    return state
