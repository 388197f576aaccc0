import hypothesis.strategies as st
import pytest
from hypothesis import given, settings

from tank_duel.core.terrain import TerrainField


@pytest.fixture
def field() -> TerrainField:
    return TerrainField(1280, 720, 640, cell=4)


def test_ground_line_splits_sky_from_soil(field: TerrainField) -> None:
    assert field.is_solid(300, 640) is True
    assert field.is_solid(300, 639) is False
    assert field.is_solid(300, 719) is True
    assert field.surface_y(300) == 640.0


def test_outside_field_is_never_solid(field: TerrainField) -> None:
    assert field.is_solid(-1, 700) is False
    assert field.is_solid(1280, 700) is False
    assert field.is_solid(100, 720) is False
    assert field.surface_y(-5) is None


def test_carve_clears_circle_and_is_idempotent(field: TerrainField) -> None:
    before = field.solid_count()

    cleared = field.carve(400, 640, 30)

    assert cleared > 0
    assert field.solid_count() == before - cleared
    assert field.is_solid(400, 650) is False
    assert field.is_solid(400, 690) is True
    assert field.is_solid(460, 650) is True

    snapshot = list(field.iter_rows())
    assert field.carve(400, 640, 30) == 0
    assert list(field.iter_rows()) == snapshot


def test_probe_ring_catches_ground_beside_the_centre(field: TerrainField) -> None:
    assert field.probe(300, 634, 8) is not None
    assert field.probe(300, 600, 8) is None


def test_surface_drops_after_carving_through_column(field: TerrainField) -> None:
    field.carve(500, 640, 20)

    assert field.surface_y(500) > 640.0


def test_reset_restores_untouched_ground(field: TerrainField) -> None:
    untouched = field.solid_count()
    field.carve(100, 680, 50)

    field.reset()

    assert field.solid_count() == untouched


@pytest.mark.property
@settings(max_examples=40, deadline=None)
@given(
    carves=st.lists(
        st.tuples(
            st.floats(min_value=-50, max_value=250),
            st.floats(min_value=50, max_value=250),
            st.floats(min_value=0, max_value=60),
        ),
        max_size=8,
    )
)
def test_carving_never_restores_cells(carves) -> None:
    field = TerrainField(200, 200, 120, cell=4)
    previous = [list(row) for row in field.iter_rows()]

    for cx, cy, radius in carves:
        field.carve(cx, cy, radius)
        current = [list(row) for row in field.iter_rows()]
        for old_row, new_row in zip(previous, current):
            for old, new in zip(old_row, new_row):
                assert not (old == " " and new == "#")
        previous = current
