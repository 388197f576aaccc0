"""Charge-and-release timing minigame that scales shot power."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

TARGET_MIN = 0.25
TARGET_MAX = 0.85


class MeterPhase(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    CHARGING = "charging"
    RELEASED = "released"
    AUTO_FIRED = "auto_fired"


class AccuracyZone(str, Enum):
    PERFECT = "perfect"
    WEAK = "weak"
    STRONG = "strong"


@dataclass(frozen=True)
class ChargeResult:
    level: float
    target: float
    zone: AccuracyZone
    multiplier: float
    power: float
    auto_fired: bool = False


def power_multiplier(level: float, target: float, zone_size: float) -> tuple[AccuracyZone, float]:
    """Classify a release and compute its multiplier."""

    half_zone = zone_size / 2.0
    miss = abs(level - target)
    if miss <= half_zone:
        perfectness = 1.0 - miss / half_zone if half_zone > 0 else 1.0
        return AccuracyZone.PERFECT, 0.95 + perfectness * 0.05
    if level < target:
        weakness = (target - level) / target
        return AccuracyZone.WEAK, 0.3 + (1.0 - weakness) * 0.5
    excess = (level - target) / (1.0 - target)
    return AccuracyZone.STRONG, 1.1 + excess * 0.4


class PowerMeter:
    """State machine: idle -> active -> charging -> released/auto-fired."""

    def __init__(
        self,
        charge_rate: float,
        perfect_zone_size: float,
        base_power: float,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.charge_rate = charge_rate
        self.perfect_zone_size = perfect_zone_size
        self.base_power = base_power
        self._rng = rng or random.Random()
        self.phase = MeterPhase.IDLE
        self.level = 0.0
        self.target = TARGET_MIN
        self.result: Optional[ChargeResult] = None

    @property
    def is_charging(self) -> bool:
        return self.phase is MeterPhase.CHARGING

    def activate(self) -> float:
        self.target = self._rng.uniform(TARGET_MIN, TARGET_MAX)
        # uniform() may return the upper bound; the target range is half-open.
        if self.target >= TARGET_MAX:
            self.target = TARGET_MIN
        self.level = 0.0
        self.result = None
        self.phase = MeterPhase.ACTIVE
        return self.target

    def start(self) -> bool:
        if self.phase is not MeterPhase.ACTIVE:
            return False
        self.phase = MeterPhase.CHARGING
        return True

    def update(self, dt_seconds: float) -> Optional[ChargeResult]:
        """Advance the meter; returns a result when the meter auto-fires."""

        if self.phase is not MeterPhase.CHARGING:
            return None
        self.level = max(0.0, min(1.0, self.level + self.charge_rate * max(0.0, dt_seconds)))
        if self.level >= 1.0:
            return self._finish(auto_fired=True)
        return None

    def release(self) -> Optional[ChargeResult]:
        if self.phase is not MeterPhase.CHARGING:
            return None
        return self._finish(auto_fired=False)

    def cancel(self) -> None:
        self.phase = MeterPhase.IDLE
        self.level = 0.0
        self.result = None

    def _finish(self, *, auto_fired: bool) -> ChargeResult:
        zone, multiplier = power_multiplier(self.level, self.target, self.perfect_zone_size)
        self.result = ChargeResult(
            level=self.level,
            target=self.target,
            zone=zone,
            multiplier=multiplier,
            power=self.base_power * multiplier,
            auto_fired=auto_fired,
        )
        self.phase = MeterPhase.AUTO_FIRED if auto_fired else MeterPhase.RELEASED
        return self.result


__all__ = [
    "AccuracyZone",
    "ChargeResult",
    "MeterPhase",
    "PowerMeter",
    "TARGET_MAX",
    "TARGET_MIN",
    "power_multiplier",
]
