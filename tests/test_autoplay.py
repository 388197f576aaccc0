import logging
import random

import pytest

from tank_duel import AutoplayReport, MatchConfig, run_autoplay
from tank_duel.core.events import GameOver, ShotFired, TankDestroyed


@pytest.mark.e2e
def test_computer_players_finish_a_match(caplog) -> None:
    caplog.set_level(logging.INFO, logger="tank_duel")

    report = run_autoplay(MatchConfig(seed=7), max_turns=200)

    assert isinstance(report, AutoplayReport)
    assert report.finished
    assert report.winner_id in (0, 1)
    assert report.shots[0] > 0 and report.shots[1] > 0
    shots = [event for event in report.events if isinstance(event, ShotFired)]
    assert len(shots) == sum(report.shots.values())
    destroyed = [event for event in report.events if isinstance(event, TankDestroyed)]
    assert [event.id for event in destroyed] == [1 - report.winner_id]
    assert report.events[-1] == GameOver(winner_id=report.winner_id)
    assert "Autoplay finished" in caplog.text
    assert "Tank 0 HP:" in caplog.text and "Tank 1 HP:" in caplog.text


@pytest.mark.e2e
def test_autoplay_is_reproducible() -> None:
    first = run_autoplay(MatchConfig(), max_turns=6, rng=random.Random(11))
    second = run_autoplay(MatchConfig(), max_turns=6, rng=random.Random(11))

    assert first.events == second.events
    assert first.ticks == second.ticks


def test_turn_limit_stops_an_endless_match() -> None:
    config = MatchConfig(direct_hit_damage=0, near_hit_damage=0, seed=3)

    report = run_autoplay(config, max_turns=4)

    assert not report.finished
    assert report.winner_id is None
    assert report.turns == 5
