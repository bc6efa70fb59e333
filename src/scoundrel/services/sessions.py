from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field

from scoundrel.engine.game import (
    GameConfig,
    GameState,
    StepResult,
    cancel_combat,
    choose_combat_mode,
    new_game,
    play_card,
    skip_room,
)
from scoundrel.engine.serialize import snapshot
from scoundrel.engine.types import CombatMode


class SessionError(RuntimeError):
    pass


class GameSession:
    """One player's game plus the lock that serializes commands against it.

    The engine itself does no locking; every command here runs to completion
    under the session lock before the next one is accepted.
    """

    def __init__(self, session_id: str, config: GameConfig | None = None, seed: int | None = None) -> None:
        self.session_id = session_id
        self._config = config or GameConfig()
        self._lock = threading.Lock()
        self._state: GameState = new_game(seed=seed, config=self._config)

    def new_game(self, seed: int | None = None) -> dict[str, object]:
        with self._lock:
            self._state = new_game(seed=seed, config=self._config)
            return snapshot(self._state)

    def reset(self) -> dict[str, object]:
        return self.new_game()

    def play_card(self, room_index: int) -> StepResult:
        with self._lock:
            return play_card(self._state, room_index)

    def choose_combat_mode(self, room_index: int, mode: CombatMode) -> StepResult:
        with self._lock:
            return choose_combat_mode(self._state, room_index, mode)

    def cancel_combat(self) -> StepResult:
        with self._lock:
            return cancel_combat(self._state)

    def skip_room(self) -> StepResult:
        with self._lock:
            return skip_room(self._state)

    def query_state(self) -> dict[str, object]:
        with self._lock:
            return snapshot(self._state)


@dataclass
class SessionRegistry:
    config: GameConfig = field(default_factory=GameConfig)
    _sessions: dict[str, GameSession] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def create(self, seed: int | None = None) -> GameSession:
        session = GameSession(uuid.uuid4().hex, config=self.config, seed=seed)
        with self._lock:
            self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> GameSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionError(f"Unknown session: {session_id}")
        return session

    def close(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionError(f"Unknown session: {session_id}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
