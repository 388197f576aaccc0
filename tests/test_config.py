import pytest

from tank_duel.core.config import ConfigurationError, MatchConfig
from tank_duel.core.session import GameSession


def test_defaults_are_valid() -> None:
    config = MatchConfig()
    config.validate()

    assert config.low_health_threshold == pytest.approx(30.0)
    assert config.out_of_bounds == (-50.0, 1330.0, -300.0, 750.0)


@pytest.mark.parametrize(
    "changes",
    [
        {"gravity": 0.0},
        {"gravity": -500.0},
        {"min_power": 1200.0, "max_power": 1200.0},
        {"min_power": 1500.0},
        {"max_health": 0},
        {"near_hit_radius": 0.0},
        {"perfect_zone_size": 0.0},
        {"charge_rate": 0.0},
        {"ai_players": (2,)},
        {"ai_angles_deg": ()},
        {"ground_y": 900},
        {"spawn_x": (200.0, 5000.0)},
    ],
)
def test_invalid_configuration_fails_fast(changes) -> None:
    with pytest.raises(ConfigurationError):
        MatchConfig().with_overrides(**changes)


def test_session_refuses_inconsistent_config() -> None:
    with pytest.raises(ConfigurationError):
        GameSession(MatchConfig(gravity=0.0))


def test_failed_restart_leaves_running_match_untouched() -> None:
    session = GameSession(MatchConfig(ai_players=()))
    state = session.state
    epoch = session.epoch

    with pytest.raises(ConfigurationError):
        session.start_match(MatchConfig(min_power=10.0, max_power=5.0))

    assert session.state is state
    assert session.epoch == epoch
