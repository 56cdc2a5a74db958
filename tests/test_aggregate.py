"""
Unit tests for aggregate module.
"""

import pytest
import numpy as np

from house_elevation.aggregate import discount_factors, npv_expected_damage, yearly_damage_table
from house_elevation.errors import LengthMismatchError
from house_elevation.hazard import expected_annual_damage
from house_elevation.scenario import EvaluationConfig, Scenario


def test_discount_factors():
    """Factors are relative to the earliest year."""
    factors = discount_factors([2025, 2030, 2035], 0.03)
    np.testing.assert_allclose(factors, [1.0, 1 / 1.03 ** 5, 1 / 1.03 ** 10])
    np.testing.assert_array_equal(discount_factors([2025, 2030], 0.0), [1.0, 1.0])


def test_yearly_table(config, scenario):
    """One row per year with EAD and discounted EAD."""
    table = yearly_damage_table(config, scenario, 0.0)

    assert list(table.columns) == ['year', 'slr_ft', 'ead', 'discount_factor', 'discounted_ead']
    assert table['year'].tolist() == [2025, 2030]
    assert table['slr_ft'].tolist() == [0.5, 1.0]
    np.testing.assert_allclose(table['discounted_ead'], table['ead'] * table['discount_factor'])

    ead_2030 = expected_annual_damage(config.structure, 0.0, 1.0, config.surge_dist)
    assert table['ead'].iloc[1] == pytest.approx(ead_2030)


def test_npv_matches_manual_sum(config, scenario):
    """NPV equals the hand-discounted sum of yearly EADs."""
    eads = [expected_annual_damage(config.structure, 2.0, s, config.surge_dist) for s in scenario.slr_ft]
    expected = eads[0] + eads[1] / 1.03 ** 5

    assert npv_expected_damage(config, scenario, 2.0) == pytest.approx(expected)


def test_zero_discount_is_plain_sum(config):
    """With r = 0 the NPV is the unweighted sum of yearly EADs."""
    scenario = Scenario(slr_ft=(0.5, 1.0), discount_rate=0.0)
    eads = [expected_annual_damage(config.structure, 0.0, s, config.surge_dist) for s in scenario.slr_ft]

    assert npv_expected_damage(config, scenario, 0.0) == pytest.approx(sum(eads))


def test_monotone_in_discount_rate(config):
    """A higher discount rate never increases the NPV."""
    npvs = [
        npv_expected_damage(config, Scenario(slr_ft=(0.5, 1.0), discount_rate=r), 0.0)
        for r in (0.0, 0.01, 0.03, 0.07, 0.15)
    ]
    assert all(b <= a for a, b in zip(npvs, npvs[1:]))
    assert npvs[-1] < npvs[0]


def test_monotone_in_slr(config):
    """A pointwise higher SLR trajectory never lowers the NPV."""
    base = npv_expected_damage(config, Scenario(slr_ft=(0.5, 1.0), discount_rate=0.03), 0.0)
    higher = npv_expected_damage(config, Scenario(slr_ft=(0.5, 2.0), discount_rate=0.03), 0.0)
    assert higher >= base


def test_single_year(structure, surge_dist):
    """One year means no discounting."""
    config = EvaluationConfig(structure=structure, years=[2040], surge_dist=surge_dist)
    scenario = Scenario(slr_ft=[1.5], discount_rate=0.05)

    expected = expected_annual_damage(structure, 0.0, 1.5, surge_dist)
    assert npv_expected_damage(config, scenario, 0.0) == pytest.approx(expected)


@pytest.mark.parametrize("slr", [(0.5, 1.0, 1.5), (0.5,), ()])
def test_length_mismatch(config, slr):
    """Trajectory length must match the number of evaluation years."""
    scenario = Scenario(slr_ft=slr, discount_rate=0.03)

    with pytest.raises(LengthMismatchError):
        npv_expected_damage(config, scenario, 0.0)
    with pytest.raises(LengthMismatchError):
        yearly_damage_table(config, scenario, 0.0)
