from __future__ import annotations

import threading

import pytest

from scoundrel.services.sessions import GameSession, SessionError, SessionRegistry


def test_registry_keeps_sessions_independent() -> None:
    registry = SessionRegistry()
    a = registry.create(seed=1)
    b = registry.create(seed=1)
    assert len(registry) == 2
    assert registry.get(a.session_id) is a

    assert a.skip_room().ok
    assert a.query_state()["just_skipped"] is True
    assert b.query_state()["just_skipped"] is False

    registry.close(a.session_id)
    with pytest.raises(SessionError):
        registry.get(a.session_id)
    with pytest.raises(SessionError):
        registry.close(a.session_id)


def test_session_commands_and_reset() -> None:
    session = GameSession("s1", seed=3)
    snap = session.query_state()
    assert snap["health"] == 20
    assert snap["dungeon_count"] == 40
    assert snap["phase"] == "active"

    res = session.play_card(9)
    assert not res.ok
    assert res.code == "InvalidIndex"

    res = session.choose_combat_mode(0, "weapon")
    assert res.code == "InvalidAction"
    assert session.cancel_combat().code == "InvalidAction"

    assert session.skip_room().ok
    fresh = session.reset()
    assert fresh["action_log"] == []
    assert fresh["just_skipped"] is False

    again = session.new_game(seed=3)
    assert again["room"] == snap["room"]


def test_concurrent_commands_are_serialized() -> None:
    session = GameSession("busy", seed=12)
    errors: list[str] = []

    def worker() -> None:
        for _ in range(30):
            session.play_card(0)
            session.choose_combat_mode(0, "barehanded")
            snap = session.query_state()
            total = (
                snap["dungeon_count"]
                + len(snap["room"])
                + snap["discard_count"]
                + len(snap["trophies"])
                + (1 if snap["weapon"] else 0)
            )
            if total != 44:
                errors.append(f"card count {total}")

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []
