"""Tank records owned by the game session."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from tank_duel.core.config import MatchConfig


@dataclass
class Tank:
    """Simulation state of one combatant.

    ``x``/``y`` is the turret pivot. The hull is a box centred
    ``body_offset`` pixels below the pivot.
    """

    id: int
    x: float
    y: float
    max_health: int = 100
    facing_right: bool = True
    half_width: float = 40.0
    half_height: float = 17.5
    body_offset: float = 20.0
    health: int = field(default=-1)
    is_destroyed: bool = False
    smoking: bool = False
    aim_angle: Optional[float] = None

    def __post_init__(self) -> None:
        if self.health < 0:
            self.health = self.max_health
        if self.aim_angle is None:
            self.aim_angle = -0.5 if self.facing_right else -(math.pi - 0.5)

    @property
    def alive(self) -> bool:
        return not self.is_destroyed

    @property
    def body_center(self) -> Tuple[float, float]:
        return self.x, self.y + self.body_offset

    def contains(self, px: float, py: float) -> bool:
        cx, cy = self.body_center
        return abs(px - cx) <= self.half_width and abs(py - cy) <= self.half_height

    def distance_to(self, px: float, py: float) -> float:
        return math.hypot(px - self.x, py - self.y)

    def muzzle(self, angle: float, offset: float) -> Tuple[float, float]:
        return self.x + math.cos(angle) * offset, self.y + math.sin(angle) * offset

    def take_damage(self, amount: int) -> int:
        """Apply ``amount`` and return the health actually removed."""

        if amount <= 0 or self.is_destroyed:
            return 0
        before = self.health
        self.health = max(0, self.health - amount)
        return before - self.health

    def mark_smoking(self, threshold: float) -> bool:
        """Flip the one-way smoking flag; returns ``True`` only on the first flip."""

        if self.smoking or not 0 < self.health <= threshold:
            return False
        self.smoking = True
        return True

    def mark_destroyed(self) -> bool:
        if self.is_destroyed or self.health > 0:
            return False
        self.is_destroyed = True
        return True

    def info_line(self) -> str:
        facing_arrow = ">" if self.facing_right else "<"
        return (
            f"Tank {self.id} HP:{self.health:4d}/{self.max_health}"
            f" Pos:{self.x:6.1f},{self.y:6.1f}{facing_arrow}"
            f" Aim:{math.degrees(self.aim_angle):6.1f}"
        )


def spawn_tank(tank_id: int, x: float, ground_y: float, config: MatchConfig) -> Tank:
    return Tank(
        id=tank_id,
        x=x,
        y=ground_y - config.pivot_height,
        max_health=config.max_health,
        facing_right=tank_id == 0,
        half_width=config.tank_half_width,
        half_height=config.tank_half_height,
        body_offset=config.body_offset,
    )


__all__ = ["Tank", "spawn_tank"]
