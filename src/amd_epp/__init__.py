"""AMD Energy Performance Preference (EPP) manager.

This package reads and writes the per-core `energy_performance_preference`
sysfs attribute exposed by the amd-pstate-epp cpufreq driver.
"""

from __future__ import annotations

__version__ = "0.1.0"
