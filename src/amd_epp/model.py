from __future__ import annotations

import enum
from pathlib import Path
from typing import Any

import attrs


class EppProfile(enum.Enum):
    """EPP profiles accepted by the amd-pstate-epp driver.

    The enum value is the exact string the kernel expects in
    `energy_performance_preference`.
    """

    PERFORMANCE = "performance"
    BALANCE_PERFORMANCE = "balance_performance"
    BALANCE_POWER = "balance_power"
    POWER = "power"

    @property
    def sysfs_value(self) -> str:
        return self.value

    @property
    def cli_name(self) -> str:
        return self.value.replace("_", "-")

    @property
    def level(self) -> int:
        return _LEVELS.index(self)

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @staticmethod
    def from_level(level: int) -> "EppProfile":
        if not 0 <= level < len(_LEVELS):
            raise ValueError(f"Invalid profile level: {level}. Must be between 0 and {len(_LEVELS) - 1}.")
        return _LEVELS[level]

    @staticmethod
    def from_cli_name(name: str) -> "EppProfile":
        for p in EppProfile:
            if p.cli_name == name:
                return p
        raise ValueError(f"Unknown EPP profile: {name!r}")


# Level order: 0 favours performance, 3 favours power saving.
_LEVELS: tuple[EppProfile, ...] = (
    EppProfile.PERFORMANCE,
    EppProfile.BALANCE_PERFORMANCE,
    EppProfile.BALANCE_POWER,
    EppProfile.POWER,
)

_DESCRIPTIONS: dict[EppProfile, str] = {
    EppProfile.PERFORMANCE: (
        "Prioritizes performance above power saving.\nCPU reaches higher clock speeds aggressively."
    ),
    EppProfile.BALANCE_PERFORMANCE: (
        "Aims for a balance but leans towards performance.\nThis is the default value in many systems."
    ),
    EppProfile.BALANCE_POWER: (
        "Aims for a balance but leans towards power saving.\nMore conservative clock speed increases."
    ),
    EppProfile.POWER: (
        "Strongly prioritizes power saving.\nFavors lower frequencies, may limit peak performance."
    ),
}


@attrs.define(frozen=True, slots=True)
class CoreEpp:
    """Outcome of one read or write against a single core's EPP file."""

    core_id: int
    path: Path
    value: str | None = None
    error: str | None = None
    errno: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def label(self) -> str:
        return f"CPU{self.core_id:02d}"

    def to_dict(self) -> dict[str, Any]:
        return {"core_id": self.core_id, "path": str(self.path), "value": self.value, "error": self.error}
