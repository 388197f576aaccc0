import math

from tank_duel.core.tank import Tank


def test_damage_clamps_at_zero_and_reports_dealt_amount() -> None:
    tank = Tank(id=0, x=200, y=585, max_health=100)

    assert tank.take_damage(35) == 35
    assert tank.take_damage(500) == 65
    assert tank.health == 0


def test_destruction_is_one_way() -> None:
    tank = Tank(id=1, x=1080, y=585, max_health=100, health=10)

    assert tank.mark_destroyed() is False
    tank.take_damage(10)
    assert tank.mark_destroyed() is True
    assert tank.mark_destroyed() is False
    assert tank.take_damage(5) == 0
    assert tank.alive is False


def test_smoking_flag_flips_once() -> None:
    tank = Tank(id=0, x=200, y=585, max_health=100)

    tank.take_damage(60)
    assert tank.mark_smoking(30) is False
    tank.take_damage(15)
    assert tank.mark_smoking(30) is True
    tank.take_damage(5)
    assert tank.mark_smoking(30) is False


def test_hull_box_sits_below_the_pivot() -> None:
    tank = Tank(id=0, x=200, y=585)

    assert tank.contains(200, 605)
    assert tank.contains(239, 621)
    assert not tank.contains(200, 580)
    assert not tank.contains(245, 605)


def test_default_aim_points_toward_opponent() -> None:
    left = Tank(id=0, x=200, y=585, facing_right=True)
    right = Tank(id=1, x=1080, y=585, facing_right=False)

    assert -1.0 < left.aim_angle < 0
    assert right.aim_angle < -2.0


def test_info_line_summarises_health_position_and_aim() -> None:
    tank = Tank(id=1, x=1080, y=585, facing_right=False, aim_angle=-math.pi / 2)
    tank.take_damage(35)

    line = tank.info_line()

    assert line.startswith("Tank 1 HP:  65/100")
    assert "Pos:1080.0, 585.0<" in line
    assert line.endswith("Aim: -90.0")
