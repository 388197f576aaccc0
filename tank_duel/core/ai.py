"""Computer opponent that inverts the projectile equation."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from tank_duel.core.config import MatchConfig

logger = logging.getLogger(__name__)

EPSILON = 1e-6


def required_speed(dx: float, dy: float, elevation: float, gravity: float) -> Optional[float]:
    """Launch speed that carries a shot ``dx`` across and ``dy`` up.

    ``dx`` is the horizontal distance along the firing direction and ``dy``
    the height gained (positive up). Returns ``None`` when no real solution
    exists for this elevation.
    """

    cos_theta = math.cos(elevation)
    if abs(cos_theta) <= EPSILON:
        return None
    term = dx * math.tan(elevation) - dy
    if term <= EPSILON:
        return None
    return math.sqrt(gravity * dx * dx / (2.0 * cos_theta * cos_theta * term))


def screen_angle(elevation: float, toward_right: bool) -> float:
    """Convert an elevation above the horizon into a screen-space angle."""

    return -elevation if toward_right else elevation - math.pi


@dataclass(frozen=True)
class FiringSolution:
    """Angle and power chosen for a computer-controlled shot."""

    angle: float
    power: float
    elevation: float
    solved_power: Optional[float]
    accurate: bool
    fallback: bool = False


class FiringSolver:
    """Bounded-skill opponent: exact ballistic solve plus a deliberate error."""

    def __init__(self, config: MatchConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self._rng = rng or random.Random()
        self.elevations: Sequence[float] = tuple(math.radians(a) for a in config.ai_angles_deg)

    def choose_elevation(self) -> float:
        return self._rng.choice(self.elevations)

    def plan(
        self,
        pivot: Tuple[float, float],
        target: Tuple[float, float],
    ) -> FiringSolution:
        """Pick an arc, solve for power from the muzzle and perturb it."""

        config = self.config
        toward_right = target[0] >= pivot[0]
        elevation = self.choose_elevation()
        angle = screen_angle(elevation, toward_right)
        x0 = pivot[0] + math.cos(angle) * config.muzzle_offset
        y0 = pivot[1] + math.sin(angle) * config.muzzle_offset
        dx = abs(target[0] - x0)
        dy = y0 - target[1]
        solved = required_speed(dx, dy, elevation, config.gravity)
        if solved is None:
            fallback_elevation = math.radians(config.fallback_angle_deg)
            logger.info(
                "No firing solution at %.0f deg (dx=%.1f, dy=%.1f); using fallback shot",
                math.degrees(elevation),
                dx,
                dy,
            )
            return FiringSolution(
                angle=screen_angle(fallback_elevation, toward_right),
                power=config.clamp_power(config.fallback_power),
                elevation=fallback_elevation,
                solved_power=None,
                accurate=False,
                fallback=True,
            )

        power, accurate = self.perturb(solved)
        logger.debug(
            "Solved %.1f at %.0f deg -> firing %.1f (%s)",
            solved,
            math.degrees(elevation),
            power,
            "accurate" if accurate else "miss",
        )
        return FiringSolution(
            angle=angle,
            power=power,
            elevation=elevation,
            solved_power=solved,
            accurate=accurate,
        )

    def perturb(self, power: float) -> Tuple[float, bool]:
        rng = self._rng
        if rng.random() < self.config.ai_accuracy:
            error = rng.uniform(-5.0, 5.0)
            accurate = True
        else:
            error = rng.uniform(50.0, 200.0) * rng.choice((-1.0, 1.0))
            accurate = False
        return self.config.clamp_power(power + error), accurate


__all__ = ["EPSILON", "FiringSolution", "FiringSolver", "required_speed", "screen_angle"]
