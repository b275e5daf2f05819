from __future__ import annotations

import errno
import sys
from pathlib import Path

from . import export, sysfs
from .model import CoreEpp, EppProfile

COLUMN_SPACING = 2


def _discover_or_raise(sysfs_root: Path) -> list[tuple[int, Path]]:
    found = sysfs.discover_epp_paths(sysfs_root=sysfs_root)
    if not found:
        driver = sysfs.read_scaling_driver(sysfs_root=sysfs_root)
        hint = f" (active scaling driver: {driver})" if driver else ""
        raise FileNotFoundError(f"No CPU energy preference files found under {sysfs_root}{hint}.")
    return found


def apply_profile(profile: EppProfile, *, sysfs_root: Path = sysfs.DEFAULT_SYSFS_ROOT) -> list[CoreEpp]:
    """Write `profile` to every core. A failing core is recorded and the rest are still attempted."""
    records: list[CoreEpp] = []
    for core_id, path in _discover_or_raise(sysfs_root):
        try:
            sysfs.write_epp(path, profile.sysfs_value)
        except OSError as e:
            records.append(CoreEpp(core_id=core_id, path=path, error=str(e), errno=e.errno))
            continue
        records.append(CoreEpp(core_id=core_id, path=path, value=profile.sysfs_value))
    return records


def read_profiles(*, sysfs_root: Path = sysfs.DEFAULT_SYSFS_ROOT) -> list[CoreEpp]:
    records: list[CoreEpp] = []
    for core_id, path in _discover_or_raise(sysfs_root):
        try:
            value = sysfs.read_epp(path)
        except OSError as e:
            records.append(CoreEpp(core_id=core_id, path=path, error=str(e), errno=e.errno))
            continue
        records.append(CoreEpp(core_id=core_id, path=path, value=value))
    return records


def format_listing(records: list[CoreEpp], *, columns: int = 1) -> str:
    """Render `<label>: <value>` entries, `columns` per line, in record order."""
    if columns < 1:
        raise ValueError(f"columns must be >= 1, got {columns}")
    entries = [f"{r.label}: {r.value if r.ok else '<error>'}" for r in records]
    width = max((len(e) for e in entries), default=0)
    lines: list[str] = []
    for start in range(0, len(entries), columns):
        chunk = entries[start : start + columns]
        line = (" " * COLUMN_SPACING).join(e.ljust(width) for e in chunk)
        lines.append(line.rstrip())
    return "\n".join(lines)


def _is_permission_error(r: CoreEpp) -> bool:
    return r.errno in (errno.EACCES, errno.EPERM)


def format_failures(records: list[CoreEpp]) -> str:
    failed = [r for r in records if not r.ok]
    lines: list[str] = [f"Failed on {len(failed)} of {len(records)} CPU cores:"]
    for r in failed:
        lines.append(f"- {r.label} {r.path}: {r.error}")
    if any(_is_permission_error(r) for r in failed):
        lines.append("Ensure you have root privileges to modify EPP settings.")
    return "\n".join(lines)


def set_run(profile: EppProfile, *, sysfs_root: Path = sysfs.DEFAULT_SYSFS_ROOT) -> int:
    """Apply `profile` to all cores. Returns process exit code."""
    print(f"Applying EPP setting: {profile.sysfs_value}")

    available = sysfs.read_available_preferences(sysfs_root=sysfs_root)
    if available and profile.sysfs_value not in available:
        print(
            f"Warning: {profile.sysfs_value!r} is not listed in available preferences: {' '.join(available)}",
            file=sys.stderr,
        )

    try:
        records = apply_profile(profile, sysfs_root=sysfs_root)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        return 1

    if any(not r.ok for r in records):
        print(format_failures(records), file=sys.stderr)
        return 1

    print(f"Successfully set value to {profile.sysfs_value} for all detected CPU cores.")
    return 0


def show_run(*, sysfs_root: Path = sysfs.DEFAULT_SYSFS_ROOT, columns: int = 1, as_json: bool = False) -> int:
    """Print current EPP values for all cores. Returns process exit code."""
    try:
        records = read_profiles(sysfs_root=sysfs_root)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        return 1

    if as_json:
        doc = export.build_snapshot(
            records,
            scaling_driver=sysfs.read_scaling_driver(sysfs_root=sysfs_root),
            available_preferences=sysfs.read_available_preferences(sysfs_root=sysfs_root),
        )
        print(export.render_snapshot(doc))
    else:
        print(format_listing(records, columns=columns))

    if any(not r.ok for r in records):
        print(format_failures(records), file=sys.stderr)
        return 1
    return 0
