"""Match configuration for the duel simulation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple


class ConfigurationError(ValueError):
    """Raised when a match configuration cannot produce a consistent match."""


@dataclass(frozen=True)
class MatchConfig:
    """Tuning values for a single match.

    Coordinates are in field pixels with ``y`` growing downward; times are
    in milliseconds unless the name says otherwise.
    """

    max_health: int = 100
    direct_hit_damage: int = 35
    near_hit_damage: int = 15
    near_hit_radius: float = 80.0
    min_power: float = 150.0
    max_power: float = 1200.0
    gravity: float = 500.0
    charge_rate: float = 0.8  # meter units per second
    perfect_zone_size: float = 0.1

    base_power: float = 800.0
    field_width: int = 1280
    field_height: int = 720
    ground_y: int = 640
    terrain_cell: int = 4
    spawn_x: Tuple[float, float] = (200.0, 1080.0)
    pivot_height: float = 55.0
    tank_half_width: float = 40.0
    tank_half_height: float = 17.5
    body_offset: float = 20.0
    muzzle_offset: float = 55.0
    collision_radius: float = 8.0
    direct_carve_radius: float = 50.0
    ground_carve_radius: float = 30.0
    low_health_fraction: float = 0.3

    settle_delay_ms: float = 600.0
    ai_think_delay_ms: float = 900.0
    ai_players: Tuple[int, ...] = (1,)
    ai_accuracy: float = 0.45
    ai_angles_deg: Tuple[float, ...] = (35.0, 45.0, 60.0)
    fallback_angle_deg: float = 45.0

    move_step: float = 10.0
    aim_power_scale: float = 4.0
    preview_points: int = 20
    preview_step: float = 0.05
    bounds_margin_x: float = 50.0
    bounds_margin_top: float = 300.0
    bounds_margin_bottom: float = 30.0

    seed: Optional[int] = None

    # ------------------------------------------------------------------
    @property
    def low_health_threshold(self) -> float:
        return self.max_health * self.low_health_fraction

    @property
    def fallback_power(self) -> float:
        return (self.min_power + self.max_power) / 2.0

    @property
    def out_of_bounds(self) -> Tuple[float, float, float, float]:
        """Left, right, top and bottom limits beyond which a shot is lost."""

        return (
            -self.bounds_margin_x,
            self.field_width + self.bounds_margin_x,
            -self.bounds_margin_top,
            self.field_height + self.bounds_margin_bottom,
        )

    def clamp_power(self, power: float) -> float:
        return max(self.min_power, min(self.max_power, power))

    def is_ai(self, player_id: int) -> bool:
        return player_id in self.ai_players

    def with_overrides(self, **changes) -> "MatchConfig":
        updated = replace(self, **changes)
        updated.validate()
        return updated

    def validate(self) -> None:
        """Fail fast on values that would leave the match inconsistent."""

        problems = []
        if not self.gravity > 0:
            problems.append(f"gravity must be positive (got {self.gravity})")
        if not self.min_power < self.max_power:
            problems.append(
                f"min_power ({self.min_power}) must be below max_power ({self.max_power})"
            )
        if self.min_power < 0:
            problems.append("min_power must not be negative")
        if self.max_health <= 0:
            problems.append("max_health must be positive")
        if self.direct_hit_damage < 0 or self.near_hit_damage < 0:
            problems.append("damage values must not be negative")
        for name in (
            "near_hit_radius",
            "collision_radius",
            "direct_carve_radius",
            "ground_carve_radius",
            "base_power",
            "terrain_cell",
        ):
            if not getattr(self, name) > 0:
                problems.append(f"{name} must be positive")
        if not 0 < self.charge_rate:
            problems.append("charge_rate must be positive")
        if not 0 < self.perfect_zone_size <= 1:
            problems.append("perfect_zone_size must lie in (0, 1]")
        if not 0 <= self.low_health_fraction < 1:
            problems.append("low_health_fraction must lie in [0, 1)")
        if self.field_width <= 0 or self.field_height <= 0:
            problems.append("field dimensions must be positive")
        if not 0 < self.ground_y < self.field_height:
            problems.append("ground_y must lie inside the field")
        if len(self.spawn_x) != 2:
            problems.append("exactly two spawn positions are required")
        elif any(not 0 <= x < self.field_width for x in self.spawn_x):
            problems.append("spawn positions must lie inside the field")
        if any(player not in (0, 1) for player in self.ai_players):
            problems.append("ai_players may only name players 0 and 1")
        if not 0 <= self.ai_accuracy <= 1:
            problems.append("ai_accuracy must lie in [0, 1]")
        if not self.ai_angles_deg:
            problems.append("ai_angles_deg must not be empty")
        elif any(not 0 < angle < 90 for angle in self.ai_angles_deg):
            problems.append("ai_angles_deg must lie strictly between 0 and 90")
        if not 0 < self.fallback_angle_deg < 90:
            problems.append("fallback_angle_deg must lie strictly between 0 and 90")
        if self.preview_points < 0 or self.preview_step <= 0:
            problems.append("preview sampling must be positive")
        if self.settle_delay_ms < 0 or self.ai_think_delay_ms < 0:
            problems.append("delays must not be negative")
        if problems:
            raise ConfigurationError("; ".join(problems))


__all__ = ["ConfigurationError", "MatchConfig"]
