import hypothesis.strategies as st
import pytest
from hypothesis import given, settings

from tank_duel.core.config import MatchConfig
from tank_duel.core.damage import DamageResolver, near_hit_damage
from tank_duel.core.events import TankDamaged, TankDestroyed, TankSmoking
from tank_duel.core.tank import Tank


def _tanks(config: MatchConfig, left_x: float = 200.0, right_x: float = 1080.0):
    return [
        Tank(id=0, x=left_x, y=585, max_health=config.max_health),
        Tank(id=1, x=right_x, y=585, max_health=config.max_health, facing_right=False),
    ]


def test_near_hit_falls_off_to_zero_at_radius() -> None:
    assert near_hit_damage(0.0, 15, 80) == 15
    assert near_hit_damage(40.0, 15, 80) == 7
    assert near_hit_damage(79.9, 15, 80) == 0
    assert near_hit_damage(80.0, 15, 80) == 0
    assert near_hit_damage(120.0, 15, 80) == 0


@pytest.mark.property
@settings(max_examples=200, deadline=None)
@given(
    a=st.floats(min_value=0, max_value=200),
    b=st.floats(min_value=0, max_value=200),
    damage=st.integers(min_value=0, max_value=500),
    radius=st.floats(min_value=1, max_value=200),
)
def test_near_hit_is_non_increasing_in_distance(a, b, damage, radius) -> None:
    near, far = sorted((a, b))
    assert near_hit_damage(near, damage, radius) >= near_hit_damage(far, damage, radius)
    assert near_hit_damage(radius, damage, radius) == 0


def test_direct_hit_also_splashes_bystanders_but_not_the_shooter() -> None:
    config = MatchConfig()
    resolver = DamageResolver(config)
    tanks = _tanks(config, left_x=200.0, right_x=260.0)

    report = resolver.resolve(tanks, 200.0, 580.0, shooter_id=0, direct_hit_id=0)

    damaged = [event for event in report.events if isinstance(event, TankDamaged)]
    assert [event.id for event in damaged] == [0, 1]
    assert damaged[0].amount == config.direct_hit_damage
    assert 0 < damaged[1].amount < damaged[0].amount
    assert damaged[1].is_direct is False


def test_shooter_is_never_splashed() -> None:
    config = MatchConfig()
    resolver = DamageResolver(config)
    tanks = _tanks(config, left_x=200.0, right_x=1080.0)

    report = resolver.resolve(tanks, 210.0, 590.0, shooter_id=0)

    assert report.events == []
    assert tanks[0].health == config.max_health


def test_lethal_splash_on_bystander_is_reported_immediately() -> None:
    config = MatchConfig()
    resolver = DamageResolver(config)
    tanks = _tanks(config)
    tanks[1].health = 5

    report = resolver.resolve(tanks, 1080.0, 600.0, shooter_id=0)

    assert report.destroyed == [1]
    assert tanks[1].health == 0
    assert tanks[1].is_destroyed
    assert isinstance(report.events[-1], TankDestroyed)


def test_lethal_direct_hit_ends_resolution_before_splash() -> None:
    config = MatchConfig()
    resolver = DamageResolver(config)
    tanks = _tanks(config, left_x=200.0, right_x=260.0)
    tanks[0].health = 10
    tanks[1].health = 2

    report = resolver.resolve(tanks, 200.0, 580.0, shooter_id=0, direct_hit_id=0)

    assert report.destroyed == [0]
    assert report.damaged == [0]
    assert tanks[1].health == 2
    assert not tanks[1].is_destroyed


def test_smoking_event_fires_once_when_crossing_threshold() -> None:
    config = MatchConfig()
    resolver = DamageResolver(config)
    tanks = _tanks(config)
    tanks[1].health = 60

    first = resolver.resolve(tanks, 1080.0, 600.0, shooter_id=0, direct_hit_id=1)
    second = resolver.resolve(tanks, 1080.0, 600.0, shooter_id=0, direct_hit_id=1)

    assert TankSmoking(id=1) in first.events
    assert TankSmoking(id=1) not in second.events


@pytest.mark.property
@settings(max_examples=60, deadline=None)
@given(
    hits=st.lists(
        st.tuples(
            st.floats(min_value=0, max_value=1280),
            st.floats(min_value=400, max_value=700),
            st.sampled_from([None, 0, 1]),
            st.sampled_from([0, 1]),
        ),
        max_size=30,
    )
)
def test_health_stays_within_bounds(hits) -> None:
    config = MatchConfig()
    resolver = DamageResolver(config)
    tanks = _tanks(config)

    for x, y, direct, shooter in hits:
        resolver.resolve(tanks, x, y, shooter_id=shooter, direct_hit_id=direct)
        for tank in tanks:
            assert 0 <= tank.health <= tank.max_health
            assert tank.is_destroyed == (tank.health == 0)
