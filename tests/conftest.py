"""
Pytest configuration and fixtures for the house elevation test suite.
"""

import pytest
import numpy as np

from house_elevation.damage import DamageCurve
from house_elevation.hazard import surge_distribution
from house_elevation.scenario import EvaluationConfig, Scenario
from house_elevation.structure import StructureRecord


class PointMassDistribution:
    """Surge distribution with all mass at a single stage."""

    def __init__(self, stage_ft):
        self.stage_ft = stage_ft

    def ppf(self, q):
        return np.full_like(np.asarray(q, dtype=float), self.stage_ft)


@pytest.fixture
def damage_curve():
    """Simple monotone depth-damage curve (percent of value)."""
    return DamageCurve([0.0, 5.0, 10.0, 15.0], [0.0, 25.0, 60.0, 100.0])


@pytest.fixture
def structure(damage_curve):
    """$300,000 house, 1,500 ft², 3 ft above the gauge."""
    return StructureRecord(
        value_usd=300_000.0,
        area_ft2=1_500.0,
        height_above_gauge_ft=3.0,
        damage_curve=damage_curve
    )


@pytest.fixture
def surge_dist():
    """Annual-maximum surge stage, GEV in feet above gauge."""
    return surge_distribution('gev', loc=4.0, scale=1.0, shape=0.1)


@pytest.fixture
def config(structure, surge_dist):
    """Two evaluation years, 2025 and 2030."""
    return EvaluationConfig(structure=structure, years=(2025, 2030), surge_dist=surge_dist)


@pytest.fixture
def scenario():
    """0.5 ft then 1.0 ft of SLR, 3% discount rate."""
    return Scenario(slr_ft=(0.5, 1.0), discount_rate=0.03)


@pytest.fixture
def point_mass():
    return PointMassDistribution
