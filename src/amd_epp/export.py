from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from .model import CoreEpp

SCHEMA_VERSION = "0.1.0"


def _now_rfc3339() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def _default_snapshot_schema_path() -> Path:
    return Path(__file__).resolve().parent / "schemas" / "epp_snapshot.schema.json"


def validate_snapshot(doc: dict[str, Any], *, schema_path: Path | None = None) -> None:
    schema_path = _default_snapshot_schema_path() if schema_path is None else schema_path
    schema = json.loads(schema_path.read_text())
    Draft202012Validator(schema).validate(doc)


def build_snapshot(
    records: list[CoreEpp],
    *,
    scaling_driver: str | None = None,
    available_preferences: list[str] | None = None,
) -> dict[str, Any]:
    """Build (and validate) the JSON document printed by `--show --json`."""
    doc: dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "captured_at": _now_rfc3339(),
        "scaling_driver": scaling_driver,
        "available_preferences": list(available_preferences or []),
        "cores": [r.to_dict() for r in records],
    }
    validate_snapshot(doc)
    return doc


def render_snapshot(doc: dict[str, Any]) -> str:
    return json.dumps(doc, indent=2, sort_keys=True)
