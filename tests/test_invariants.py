from __future__ import annotations

from scoundrel.engine.ai import AISpec, choose_action
from scoundrel.engine.game import new_game, play_card, skip_room, step
from scoundrel.engine.serialize import snapshot


def _check_weapon_monotonic(before: tuple[object, int | None] | None, state) -> None:
    if before is None or state.weapon is None:
        return
    card, last = before
    if state.weapon.card != card or last is None:
        return
    if state.weapon.last_slain != last:
        assert state.weapon.last_slain < last


def test_card_conservation_and_weapon_dulling_over_many_games() -> None:
    for seed in range(60):
        spec = AISpec(difficulty=seed % 3)
        state = new_game(seed=seed)
        assert state.card_count() == 44

        for _ in range(500):
            if state.is_over:
                break
            action = choose_action(state, spec)
            assert action is not None
            before = (state.weapon.card, state.weapon.last_slain) if state.weapon else None

            res = step(state, action)
            assert res.ok, res.error
            assert state.card_count() == 44
            assert 0 <= state.health <= state.max_health
            assert 0 <= state.played_this_turn <= 3
            assert len(state.room) <= 4
            _check_weapon_monotonic(before, state)

            # rejected commands leave everything as it was
            frozen = snapshot(state)
            assert not play_card(state, 4).ok
            assert snapshot(state) == frozen
            assert state.card_count() == 44

        assert state.is_over, f"seed {seed} did not finish"
        if state.won:
            assert not state.dungeon and not state.room
            assert state.score is not None and state.score >= state.health
        else:
            assert state.health == 0


def test_skip_then_skip_rejected_for_many_seeds() -> None:
    for seed in range(20):
        state = new_game(seed=seed)
        assert skip_room(state).ok
        before = snapshot(state)
        res = skip_room(state)
        assert res.code == "InvalidAction"
        assert snapshot(state) == before
        assert state.card_count() == 44


def test_log_is_append_only() -> None:
    state = new_game(seed=5)
    seen: list[str] = [str(e) for e in state.log]
    for _ in range(40):
        if state.is_over:
            break
        step(state, choose_action(state))
        current = [str(e) for e in state.log]
        assert current[: len(seen)] == seen
        seen = current
    assert all(e.turn >= 1 for e in state.log)
