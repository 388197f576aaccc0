"""Closed-form projectile motion under constant gravity.

Angles are in radians measured in screen space: ``0`` points right and
``-pi/2`` points straight up because ``y`` grows downward.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

Point = Tuple[float, float]


def launch_velocity(angle: float, speed: float) -> Tuple[float, float]:
    return math.cos(angle) * speed, math.sin(angle) * speed


def position_at(
    x0: float,
    y0: float,
    angle: float,
    speed: float,
    gravity: float,
    t: float,
) -> Point:
    """Position ``t`` seconds after launch from ``(x0, y0)``."""

    vx, vy = launch_velocity(angle, speed)
    return x0 + vx * t, y0 + vy * t + 0.5 * gravity * t * t


def velocity_at(angle: float, speed: float, gravity: float, t: float) -> Tuple[float, float]:
    vx, vy = launch_velocity(angle, speed)
    return vx, vy + gravity * t


def trajectory_preview(
    x0: float,
    y0: float,
    angle: float,
    speed: float,
    gravity: float,
    *,
    points: int = 20,
    step: float = 0.05,
    ground_y: Optional[float] = None,
) -> List[Point]:
    """Sample ``points`` positions at ``step`` second spacing.

    Sampling stops at the first point that would fall below ``ground_y``.
    """

    path: List[Point] = []
    for i in range(1, points + 1):
        x, y = position_at(x0, y0, angle, speed, gravity, i * step)
        if ground_y is not None and y > ground_y:
            break
        path.append((x, y))
    return path


@dataclass
class Projectile:
    """The single live shot of a match."""

    x: float
    y: float
    vx: float
    vy: float
    shooter_id: int
    age: float = 0.0

    @classmethod
    def launch(
        cls,
        x: float,
        y: float,
        angle: float,
        speed: float,
        shooter_id: int,
    ) -> "Projectile":
        vx, vy = launch_velocity(angle, speed)
        return cls(x=x, y=y, vx=vx, vy=vy, shooter_id=shooter_id)

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    def advance(self, dt: float, gravity: float) -> None:
        """Move ``dt`` seconds along the exact parabola."""

        self.x += self.vx * dt
        self.y += self.vy * dt + 0.5 * gravity * dt * dt
        self.vy += gravity * dt
        self.age += dt


__all__ = [
    "Point",
    "Projectile",
    "launch_velocity",
    "position_at",
    "trajectory_preview",
    "velocity_at",
]
