"""Top-level package for the Tank Duel artillery game."""

__version__ = "1.0.0"

from tank_duel.autoplay import AutoplayReport, run_autoplay
from tank_duel.core import (
    ConfigurationError,
    FiringSolver,
    GameSession,
    MatchConfig,
    MatchState,
    PowerMeter,
    Tank,
    TerrainField,
    TurnState,
)

__all__ = [
    "AutoplayReport",
    "ConfigurationError",
    "FiringSolver",
    "GameSession",
    "MatchConfig",
    "MatchState",
    "PowerMeter",
    "Tank",
    "TerrainField",
    "TurnState",
    "run_autoplay",
]

__all__.append("__version__")
