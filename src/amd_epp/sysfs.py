from __future__ import annotations

import errno
import os
import re
from pathlib import Path

DEFAULT_SYSFS_ROOT = Path("/sys/devices/system/cpu")
EPP_RELATIVE_PATH = Path("cpufreq") / "energy_performance_preference"
AVAILABLE_PREFERENCES_RELATIVE_PATH = Path("cpufreq") / "energy_performance_available_preferences"
SCALING_DRIVER_RELATIVE_PATH = Path("cpufreq") / "scaling_driver"

_CPU_DIR_RE = re.compile(r"^cpu(\d+)$")


def _core_dir(*, sysfs_root: Path, core_id: int) -> Path:
    return sysfs_root / f"cpu{core_id}"


def core_index(path: Path) -> int:
    """Return N for a path of the form `.../cpuN/cpufreq/energy_performance_preference`."""
    m = _CPU_DIR_RE.match(path.parent.parent.name)
    if m is None:
        raise ValueError(f"Not a per-core EPP path: {path}")
    return int(m.group(1))


def discover_epp_paths(*, sysfs_root: Path = DEFAULT_SYSFS_ROOT) -> list[tuple[int, Path]]:
    """Return (core_id, path) for every core exposing an EPP file, in ascending core order.

    `cpu*` also matches `cpufreq` and `cpuidle`; those are filtered out by name.
    """
    found: list[tuple[int, Path]] = []
    for p in sysfs_root.glob(f"cpu*/{EPP_RELATIVE_PATH.as_posix()}"):
        if _CPU_DIR_RE.match(p.parent.parent.name) is None:
            continue
        found.append((core_index(p), p))
    found.sort(key=lambda item: item[0])
    return found


def read_epp(path: Path) -> str:
    return path.read_text(errors="replace").strip()


def write_epp(path: Path, value: str) -> None:
    # Never create the attribute.
    if not path.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))
    path.write_text(f"{value}\n")


def read_available_preferences(*, sysfs_root: Path = DEFAULT_SYSFS_ROOT, core_id: int = 0) -> list[str]:
    p = _core_dir(sysfs_root=sysfs_root, core_id=core_id) / AVAILABLE_PREFERENCES_RELATIVE_PATH
    try:
        return p.read_text(errors="replace").split()
    except OSError:
        return []


def read_scaling_driver(*, sysfs_root: Path = DEFAULT_SYSFS_ROOT, core_id: int = 0) -> str | None:
    p = _core_dir(sysfs_root=sysfs_root, core_id=core_id) / SCALING_DRIVER_RELATIVE_PATH
    try:
        return p.read_text(errors="replace").strip() or None
    except OSError:
        return None
