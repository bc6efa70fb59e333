from __future__ import annotations

import json

from scoundrel.cli import main


def test_cli_runs_seeded_games(capsys) -> None:
    assert main(["--seed", "3", "--games", "2", "--quiet"]) == 0
    out = capsys.readouterr().out
    assert "Game 1 (seed 3):" in out
    assert "Game 2 (seed 4):" in out
    assert "Won " in out


def test_cli_prints_log_by_default(capsys) -> None:
    assert main(["--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert "[Turn 1] Entered the dungeon with 20 HP" in out


def test_cli_writes_telemetry(tmp_path, capsys) -> None:
    path = tmp_path / "telemetry.jsonl"
    assert main(["--seed", "5", "--games", "3", "--quiet", "--telemetry", str(path)]) == 0
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    rec = json.loads(lines[0])
    assert rec["type"] == "game_over"
    assert rec["payload"]["seed"] == 5
    assert isinstance(rec["payload"]["score"], int)
