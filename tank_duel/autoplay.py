"""Headless computer-versus-computer matches driven tick by tick."""

from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional

from tank_duel.core.config import MatchConfig
from tank_duel.core.events import Event, GameOver, TankDamaged, TurnChanged
from tank_duel.core.session import GameSession

logger = logging.getLogger(__name__)

FRAME_MS = 1000.0 / 60.0


@dataclass
class AutoplayReport:
    """Summary of an automated match."""

    winner_id: Optional[int]
    turns: int
    ticks: int
    shots: Counter = field(default_factory=Counter)
    events: List[Event] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        return self.winner_id is not None


def run_autoplay(
    config: Optional[MatchConfig] = None,
    *,
    max_turns: int = 200,
    frame_ms: float = FRAME_MS,
    rng: Optional[random.Random] = None,
) -> AutoplayReport:
    """Let both tanks fire at each other until one is destroyed or turns run out."""

    config = (config or MatchConfig()).with_overrides(ai_players=(0, 1))
    session = GameSession(config, rng=rng)
    report = AutoplayReport(winner_id=None, turns=1, ticks=0)
    # Each turn needs at most the think delay, a flight and the settle delay.
    tick_budget = int(max_turns * 20_000 / frame_ms)

    while report.ticks < tick_budget:
        events = session.tick(frame_ms)
        report.ticks += 1
        for event in events:
            report.events.append(event)
            if isinstance(event, TurnChanged):
                report.turns += 1
                logger.debug("---- Turn %03d: tank %d ----", report.turns, event.active_id)
            elif isinstance(event, TankDamaged):
                logger.info("Tank %d hit for %d (health %d)", event.id, event.amount, event.new_health)
            elif isinstance(event, GameOver):
                report.winner_id = event.winner_id
        if session.game_over or report.turns > max_turns:
            break

    report.shots = Counter({idx: count for idx, count in enumerate(session.state.shots_fired)})
    if report.finished:
        logger.info(
            "Autoplay finished: tank %d won after %d turns (%d ticks)",
            report.winner_id,
            report.turns,
            report.ticks,
        )
    else:
        logger.info("Autoplay stopped without a winner after %d turns", report.turns)
    for tank in session.tanks:
        logger.info("%s", tank.info_line())
    return report


__all__ = ["AutoplayReport", "run_autoplay"]
