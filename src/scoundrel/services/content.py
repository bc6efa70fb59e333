from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from scoundrel.engine.game import GameConfig


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def _load_schema(path: Path) -> object:
    return _load_json(path)


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: e.path)
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int):
        raise ContentError(f"Expected int for {key}")
    return v


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_rules(self) -> GameConfig:
        path = self._data_dir / "rules.json"
        schema = _load_schema(self._schema_dir / "rules.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError("rules.json must be an object")

        cfg = GameConfig(
            max_health=_require_int(raw, "max_health"),
            room_size=_require_int(raw, "room_size"),
            plays_per_room=_require_int(raw, "plays_per_room"),
        )
        # a room must always leave at least one card behind to carry over
        if cfg.plays_per_room >= cfg.room_size:
            raise ContentError("plays_per_room must be smaller than room_size")
        return cfg

    def validate_snapshot(self, snap: Mapping[str, object], *, context: str = "snapshot") -> None:
        schema = _load_schema(self._schema_dir / "snapshot.schema.json")
        validate_json(dict(snap), schema, context=context)

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_rules()
