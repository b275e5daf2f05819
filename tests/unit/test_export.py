from __future__ import annotations

from pathlib import Path

import pytest
from jsonschema import ValidationError

from amd_epp import export
from amd_epp.model import CoreEpp


def test_snapshot_validates() -> None:
    records = [
        CoreEpp(core_id=0, path=Path("/sys/devices/system/cpu/cpu0/cpufreq/energy_performance_preference"), value="power"),
        CoreEpp(core_id=1, path=Path("/sys/devices/system/cpu/cpu1/cpufreq/energy_performance_preference"), error="boom"),
    ]
    doc = export.build_snapshot(records, scaling_driver="amd-pstate-epp", available_preferences=["power"])
    assert doc["schema_version"] == "0.1.0"
    assert doc["captured_at"].endswith("Z")
    assert [c["core_id"] for c in doc["cores"]] == [0, 1]
    assert doc["cores"][1]["value"] is None


def test_snapshot_rejects_unknown_fields() -> None:
    doc = {
        "schema_version": "0.1.0",
        "captured_at": "2026-01-01T00:00:00Z",
        "scaling_driver": None,
        "available_preferences": [],
        "cores": [{"core_id": 0, "path": "/x", "value": "power", "error": None, "extra": 1}],
    }
    with pytest.raises(ValidationError):
        export.validate_snapshot(doc)


def test_snapshot_schema_file_is_packaged() -> None:
    schema_path = Path(export.__file__).resolve().parent / "schemas" / "epp_snapshot.schema.json"
    assert schema_path.exists()
