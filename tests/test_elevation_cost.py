"""
Unit tests for elevation_cost module.
"""

import pytest
import numpy as np

from house_elevation.elevation_cost import (
    BASE_COST_ITEMS,
    BASE_COST_USD,
    ElevationCostCurve,
    elevation_cost,
    get_elevation_cost_curve,
)
from house_elevation.errors import InvalidElevationError, OutOfRangeError


def test_base_cost_total():
    """Itemised base fees add up to $20,745."""
    assert BASE_COST_USD == pytest.approx(20_745.0)
    assert sum(BASE_COST_ITEMS.values()) == BASE_COST_USD


def test_curve_is_shared():
    """The cost curve is built once and reused."""
    assert get_elevation_cost_curve() is get_elevation_cost_curve()


def test_cost_rate_at_thresholds():
    """Rates at the thresholds match the published table."""
    curve = get_elevation_cost_curve()
    for h, rate in zip([0.0, 5.0, 8.5, 12.0, 14.0], [80.36, 82.5, 86.25, 103.75, 113.75]):
        assert curve.cost_rate(h) == pytest.approx(rate)


def test_cost_rate_interpolates():
    """Rates between thresholds are linear."""
    curve = get_elevation_cost_curve()
    assert curve.cost_rate(13.0) == pytest.approx((103.75 + 113.75) / 2)


@pytest.mark.parametrize("height", [-0.1, 14.01, 20.0, np.nan])
def test_cost_rate_out_of_range(height):
    """No extrapolation beyond [0, 14] ft."""
    with pytest.raises(OutOfRangeError):
        get_elevation_cost_curve().cost_rate(height)


def test_invalid_curve_definition():
    """Thresholds must be increasing and aligned with rates."""
    with pytest.raises(ValueError):
        ElevationCostCurve(thresholds_ft=(0.0, 5.0), rates_per_sqft=(1.0,))
    with pytest.raises(ValueError):
        ElevationCostCurve(thresholds_ft=(0.0, 5.0, 5.0), rates_per_sqft=(1.0, 2.0, 3.0))


def test_zero_elevation_is_free(structure):
    """No elevation, no base fee."""
    assert elevation_cost(structure, 0) == 0.0
    assert elevation_cost(structure, 0.0) == 0.0
    assert elevation_cost(structure, 1e-12) == 0.0


def test_elevation_cost_value(structure):
    """Cost is base fee plus area times rate."""
    assert elevation_cost(structure, 5.0) == pytest.approx(20_745.0 + 1_500.0 * 82.5)
    assert elevation_cost(structure, 14.0) == pytest.approx(20_745.0 + 1_500.0 * 113.75)


def test_elevation_cost_non_decreasing(structure):
    """More elevation never costs less."""
    heights = np.linspace(0.0, 14.0, 57)
    costs = [elevation_cost(structure, h) for h in heights]
    assert all(b >= a for a, b in zip(costs, costs[1:]))
    assert costs[1] > BASE_COST_USD


@pytest.mark.parametrize("height", [20.0, -1.0, 14.5, np.nan])
def test_invalid_elevation(structure, height):
    """Heights outside [0, 14] raise instead of clamping."""
    with pytest.raises(InvalidElevationError):
        elevation_cost(structure, height)
