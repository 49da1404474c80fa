"""
Tests for node coordinates.
"""

import pytest

from storenav.core.exceptions import ValidationError
from storenav.core.models import Coordinates


def test_coordinates_are_floats():
    coordinates = Coordinates(1, 2)
    assert (coordinates.x, coordinates.y) == (1.0, 2.0)
    assert isinstance(coordinates.x, float)


def test_distance_to():
    assert Coordinates(0, 0).distance_to(Coordinates(3, 4)) == pytest.approx(5.0)
    assert Coordinates(2, 2).distance_to(Coordinates(2, 2)) == 0.0


def test_invalid_coordinates():
    with pytest.raises(ValidationError):
        Coordinates(float("nan"), 0)
    with pytest.raises(ValidationError):
        Coordinates(0, None)  # type: ignore[arg-type]
