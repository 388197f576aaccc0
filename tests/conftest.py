import math
import random
from typing import List

import pytest

from tank_duel.core.config import MatchConfig
from tank_duel.core.events import Event
from tank_duel.core.session import GameSession, TurnState

FRAME_MS = 16.0


@pytest.fixture
def human_config() -> MatchConfig:
    """Two human players so nothing fires on its own."""

    return MatchConfig(ai_players=(), seed=1234)


@pytest.fixture
def session(human_config: MatchConfig) -> GameSession:
    return GameSession(human_config, rng=random.Random(1234))


def run_until_settled(session: GameSession, max_ticks: int = 2_000) -> List[Event]:
    """Tick until the session is waiting for input again or the match is over."""

    events: List[Event] = []
    for _ in range(max_ticks):
        events.extend(session.tick(FRAME_MS))
        if session.turn_state in (TurnState.AIMING, TurnState.GAME_OVER) and not session.scheduler:
            return events
    raise AssertionError(f"session did not settle (state {session.turn_state})")


def aim_at_angle(session: GameSession, angle: float, distance: float = 100.0) -> None:
    tank = session.current_tank
    session.set_aim_angle(tank.x + math.cos(angle) * distance, tank.y + math.sin(angle) * distance)


def fire_straight_up(session: GameSession, power: float = 1200.0) -> None:
    aim_at_angle(session, -math.pi / 2)
    assert session.fire_direct(power)
