"""Direct and splash damage rules."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from tank_duel.core.config import MatchConfig
from tank_duel.core.events import Event, TankDamaged, TankDestroyed, TankSmoking
from tank_duel.core.tank import Tank

logger = logging.getLogger(__name__)


def near_hit_damage(distance: float, max_damage: float, radius: float) -> int:
    """Linear falloff from ``max_damage`` at the centre to ``0`` at ``radius``."""

    if radius <= 0 or distance >= radius:
        return 0
    falloff = 1.0 - max(0.0, distance) / radius
    return max(0, int(math.floor(max_damage * falloff)))


@dataclass
class DamageReport:
    """Outcome of resolving one impact."""

    events: List[Event] = field(default_factory=list)
    damaged: List[int] = field(default_factory=list)
    destroyed: List[int] = field(default_factory=list)

    @property
    def first_destroyed(self) -> Optional[int]:
        return self.destroyed[0] if self.destroyed else None


class DamageResolver:
    """Apply direct and near-hit damage to the tanks of a match."""

    def __init__(self, config: MatchConfig) -> None:
        self.config = config

    def resolve(
        self,
        tanks: Sequence[Tank],
        impact_x: float,
        impact_y: float,
        shooter_id: int,
        direct_hit_id: Optional[int] = None,
    ) -> DamageReport:
        report = DamageReport()
        if direct_hit_id is not None:
            self.apply(tanks[direct_hit_id], self.config.direct_hit_damage, report, is_direct=True)
            if report.destroyed:
                return report

        # The shooter never takes splash from its own shell.
        # The first destruction decides the match, so resolution stops there.
        for tank in tanks:
            if tank.id in (shooter_id, direct_hit_id) or not tank.alive:
                continue
            distance = tank.distance_to(impact_x, impact_y)
            amount = near_hit_damage(
                distance, self.config.near_hit_damage, self.config.near_hit_radius
            )
            if amount > 0:
                self.apply(tank, amount, report, is_direct=False)
                if report.destroyed:
                    break
        return report

    def apply(self, tank: Tank, amount: int, report: DamageReport, *, is_direct: bool) -> int:
        """Damage one tank and record smoking/destroyed transitions immediately."""

        if not tank.alive:
            return 0
        dealt = tank.take_damage(amount)
        report.damaged.append(tank.id)
        report.events.append(
            TankDamaged(id=tank.id, new_health=tank.health, amount=dealt, is_direct=is_direct)
        )
        logger.debug(
            "Tank %d took %d %s damage (health %d/%d)",
            tank.id,
            dealt,
            "direct" if is_direct else "splash",
            tank.health,
            tank.max_health,
        )
        if tank.mark_smoking(self.config.low_health_threshold):
            report.events.append(TankSmoking(id=tank.id))
        if tank.mark_destroyed():
            report.destroyed.append(tank.id)
            report.events.append(TankDestroyed(id=tank.id))
            logger.info("Tank %d destroyed", tank.id)
        return dealt


__all__ = ["DamageReport", "DamageResolver", "near_hit_damage"]
