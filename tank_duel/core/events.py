"""Events emitted by the simulation for rendering, audio and UI layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ExplosionOccurred:
    x: float
    y: float
    is_direct: bool


@dataclass(frozen=True)
class TankDamaged:
    id: int
    new_health: int
    amount: int = 0
    is_direct: bool = True


@dataclass(frozen=True)
class TankDestroyed:
    id: int


@dataclass(frozen=True)
class TankSmoking:
    id: int


@dataclass(frozen=True)
class TankMoved:
    id: int
    x: float
    y: float


@dataclass(frozen=True)
class TurnChanged:
    active_id: int


@dataclass(frozen=True)
class GameOver:
    winner_id: int


@dataclass(frozen=True)
class AimUpdated:
    angle: float


@dataclass(frozen=True)
class ShotFired:
    shooter_id: int
    x: float
    y: float
    angle: float
    power: float


@dataclass(frozen=True)
class ChargeStarted:
    id: int
    target: float


@dataclass(frozen=True)
class ChargeReleased:
    zone: str
    multiplier: float
    power: float


@dataclass(frozen=True)
class TerrainCarved:
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class MatchRestarted:
    epoch: int


Event = Union[
    ExplosionOccurred,
    TankDamaged,
    TankDestroyed,
    TankSmoking,
    TankMoved,
    TurnChanged,
    GameOver,
    AimUpdated,
    ShotFired,
    ChargeStarted,
    ChargeReleased,
    TerrainCarved,
    MatchRestarted,
]


__all__ = [
    "AimUpdated",
    "ChargeReleased",
    "ChargeStarted",
    "Event",
    "ExplosionOccurred",
    "GameOver",
    "MatchRestarted",
    "ShotFired",
    "TankDamaged",
    "TankDestroyed",
    "TankMoved",
    "TankSmoking",
    "TerrainCarved",
    "TurnChanged",
]
