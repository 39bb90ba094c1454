from __future__ import annotations

import pytest

from pyutopia._convergence import area_rate, step_toward
from pyutopia._geo import Coordinates, haversine_km, parse_coordinates, planar_distance_deg


def test_area_rate_scales_inversely_with_area() -> None:
    assert area_rate(0.5, 10.0) == pytest.approx(0.5)
    assert area_rate(0.5, 20.0) == pytest.approx(0.25)
    assert area_rate(0.5, 20.0, factor=0.5) == pytest.approx(0.125)


def test_area_rate_rejects_non_positive_area() -> None:
    with pytest.raises(ValueError):
        area_rate(0.5, 0.0)


def test_step_moves_by_rate_toward_target() -> None:
    assert step_toward(20.0, 25.0, 0.5) == pytest.approx(20.5)
    assert step_toward(20.0, 15.0, 0.5) == pytest.approx(19.5)


def test_step_snaps_when_gap_smaller_than_rate() -> None:
    assert step_toward(24.8, 25.0, 0.5) == 25.0
    assert step_toward(25.2, 25.0, 0.5) == 25.0


def test_step_is_stable_at_fixed_point() -> None:
    value = 21.0
    for _ in range(10):
        value = step_toward(value, 21.0, 0.3)
    assert value == 21.0


def test_haversine_home_to_office() -> None:
    home = Coordinates(51.5034, -0.1276)
    office = Coordinates(51.4995, -0.1248)

    distance = haversine_km(home, office)

    assert 0.45 < distance < 0.50
    assert haversine_km(home, home) == 0.0


def test_planar_distance_in_degree_space() -> None:
    assert planar_distance_deg(Coordinates(0.0, 0.0), Coordinates(3.0, 4.0)) == pytest.approx(5.0)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("51.5,-0.12", Coordinates(51.5, -0.12)),
        ("Custom:51.5,-0.12", Coordinates(51.5, -0.12)),
        (" 10 , 20 ", Coordinates(10.0, 20.0)),
        ("Narnia", None),
        ("1,2,3", None),
        ("91,0", None),
    ],
)
def test_parse_coordinates(text: str, expected: Coordinates | None) -> None:
    assert parse_coordinates(text) == expected


def test_coordinates_render_as_pair() -> None:
    assert str(Coordinates(51.5, -0.12)) == "51.5,-0.12"
