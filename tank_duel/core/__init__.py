"""Core simulation for Tank Duel, independent of rendering."""

from tank_duel.core.ai import FiringSolution, FiringSolver, required_speed
from tank_duel.core.ballistics import Projectile, position_at, trajectory_preview
from tank_duel.core.config import ConfigurationError, MatchConfig
from tank_duel.core.damage import DamageReport, DamageResolver, near_hit_damage
from tank_duel.core.power_meter import AccuracyZone, ChargeResult, PowerMeter, power_multiplier
from tank_duel.core.session import GameSession, MatchState, TurnState
from tank_duel.core.tank import Tank
from tank_duel.core.terrain import TerrainField

__all__ = [
    "AccuracyZone",
    "ChargeResult",
    "ConfigurationError",
    "DamageReport",
    "DamageResolver",
    "FiringSolution",
    "FiringSolver",
    "GameSession",
    "MatchConfig",
    "MatchState",
    "PowerMeter",
    "Projectile",
    "Tank",
    "TerrainField",
    "TurnState",
    "near_hit_damage",
    "position_at",
    "power_multiplier",
    "required_speed",
    "trajectory_preview",
]
