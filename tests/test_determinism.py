from __future__ import annotations

from scoundrel.engine.ai import AISpec, autoplay
from scoundrel.engine.game import new_game, replay
from scoundrel.engine.serialize import snapshot


def test_engine_determinism_replay() -> None:
    seed = 424242
    state1 = new_game(seed=seed)
    autoplay(state1, AISpec(difficulty=0))
    assert state1.is_over

    snap1 = snapshot(state1)
    state2 = replay(seed, state1.action_log)
    snap2 = snapshot(state2)

    assert snap1 == snap2


def test_replay_of_partial_game_matches() -> None:
    seed = 77
    state1 = new_game(seed=seed)
    autoplay(state1, max_steps=6)
    state2 = replay(seed, list(state1.action_log))
    assert snapshot(state1) == snapshot(state2)
