"""
Tests for edge models.
"""

import pytest

from storenav.core.exceptions import ValidationError
from storenav.core.models import Edge


def test_edge_creation():
    """Test basic edge creation and properties."""
    edge = Edge(source="A", target="B", weight=2)

    assert edge.source == "A"
    assert edge.target == "B"
    assert edge.weight == pytest.approx(2.0)
    assert isinstance(edge.weight, float)


def test_edge_reversed():
    edge = Edge(source="A", target="B", weight=2.5)
    mirror = edge.reversed()

    assert mirror == Edge(source="B", target="A", weight=2.5)
    assert mirror.reversed() == edge


def test_edge_is_immutable():
    edge = Edge(source="A", target="B", weight=1)
    with pytest.raises(AttributeError):
        edge.weight = 5  # type: ignore[misc]


def test_edge_validation():
    with pytest.raises(ValidationError):
        Edge(source="", target="B", weight=1)
    with pytest.raises(ValidationError, match="cannot be negative"):
        Edge(source="A", target="B", weight=-1)
