"""
Analysis configuration.
Thresholds, bin widths and the regression sweep used by the report and the entry points.
The analytics functions take these as plain arguments; this dataclass just keeps one copy.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class AnalysisConfig:
    record_limit: int = 50

    # histogram bin widths
    age_bin_width: int = 10
    bmi_bin_width: float = 2.0
    bar_width: int = 50  # longest horizontal bar, in characters

    # cohort thresholds
    old_age: int = 50
    young_age: int = 20
    old_young_factor: float = 2.0
    smoker_factor: float = 1.0
    region_first: str = "south"
    region_second: str = "north"
    fairness_tolerance: float = 0.05

    # regression prediction table (charges vs BMI): 15, 18, ..., 45
    sweep_start: float = 15.0
    sweep_step: float = 3.0
    sweep_points: int = 11

    def __post_init__(self) -> None:
        if self.record_limit <= 0:
            raise ValueError("record_limit must be > 0")
        if self.age_bin_width <= 0 or self.bmi_bin_width <= 0:
            raise ValueError("bin widths must be > 0")
        if self.bar_width <= 0:
            raise ValueError("bar_width must be > 0")
        if self.sweep_points <= 0:
            raise ValueError("sweep_points must be > 0")
        if self.fairness_tolerance < 0:
            raise ValueError("fairness_tolerance must be >= 0")

    def with_overrides(self, **overrides) -> "AnalysisConfig":
        """Copy with the given fields replaced; None values are ignored."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)
