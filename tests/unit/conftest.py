from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

FakeSysfs = Callable[..., Path]


@pytest.fixture
def fake_sysfs(tmp_path: Path) -> FakeSysfs:
    """Return a factory that lays out `cpuN/cpufreq/*` files under a fake sysfs root."""
    root = tmp_path / "sys" / "devices" / "system" / "cpu"

    def make(
        values: dict[int, str],
        *,
        available: str | None = "default performance balance_performance balance_power power",
        driver: str | None = "amd-pstate-epp",
    ) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        for core_id, value in values.items():
            d = root / f"cpu{core_id}" / "cpufreq"
            d.mkdir(parents=True, exist_ok=True)
            (d / "energy_performance_preference").write_text(f"{value}\n")
            if available is not None:
                (d / "energy_performance_available_preferences").write_text(f"{available}\n")
            if driver is not None:
                (d / "scaling_driver").write_text(f"{driver}\n")
        return root

    return make
