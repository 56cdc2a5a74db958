# src/house_elevation/aggregate.py
"""
Module: aggregate.py
Responsibilities:
- Evaluate expected annual damage for each year of an SLR trajectory
- Discount yearly damages to the base year
- Return the net present value of expected damages
"""
import numpy as np
import pandas as pd
import logging
from typing import Sequence

from house_elevation.errors import LengthMismatchError
from house_elevation.hazard import expected_annual_damage
from house_elevation.scenario import EvaluationConfig, Scenario

# Configure logging
logging.basicConfig(level=logging.INFO,
                   format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def discount_factors(years: Sequence[int], rate: float) -> np.ndarray:
    """
    Discount factors 1 / (1 + rate)^(year - base_year), base_year = min(years).

    Parameters
    ----------
    years : Sequence[int]
        Evaluation years
    rate : float
        Annual discount rate, >= 0

    Returns
    -------
    np.ndarray
        One factor per year, 1.0 for the base year
    """
    years = np.asarray(years, dtype=float)
    if years.size == 0:
        return np.empty(0)
    return 1.0 / (1.0 + rate) ** (years - years.min())


def _check_lengths(config: EvaluationConfig, scenario: Scenario) -> None:
    if len(scenario.slr_ft) != config.n_years:
        raise LengthMismatchError(
            f"SLR trajectory has {len(scenario.slr_ft)} values but there are "
            f"{config.n_years} evaluation years"
        )


def yearly_damage_table(config: EvaluationConfig, scenario: Scenario, delta_h_ft: float) -> pd.DataFrame:
    """
    Per-year expected damages and their discounted values.

    Parameters
    ----------
    config : EvaluationConfig
        Structure, years, surge distribution and grid
    scenario : Scenario
        SLR trajectory aligned with config.years, and discount rate
    delta_h_ft : float
        Elevation applied to the structure, feet

    Returns
    -------
    pd.DataFrame
        Columns ['year', 'slr_ft', 'ead', 'discount_factor', 'discounted_ead']

    Raises
    ------
    LengthMismatchError
        If the trajectory and year counts differ
    """
    _check_lengths(config, scenario)

    eads = [
        expected_annual_damage(config.structure, delta_h_ft, slr, config.surge_dist, config.grid)
        for slr in scenario.slr_ft
    ]
    factors = discount_factors(config.years, scenario.discount_rate)

    return pd.DataFrame({
        'year': np.asarray(config.years, dtype=int),
        'slr_ft': np.asarray(scenario.slr_ft, dtype=float),
        'ead': np.asarray(eads, dtype=float),
        'discount_factor': factors,
        'discounted_ead': np.asarray(eads, dtype=float) * factors
    })


def npv_expected_damage(config: EvaluationConfig, scenario: Scenario, delta_h_ft: float) -> float:
    """
    Net present value (USD, base-year dollars) of expected flood damages.

    Parameters
    ----------
    config : EvaluationConfig
        Structure, years, surge distribution and grid
    scenario : Scenario
        SLR trajectory aligned with config.years, and discount rate
    delta_h_ft : float
        Elevation applied to the structure, feet

    Returns
    -------
    float
        Sum over years of EAD / (1 + r)^(year - base_year)

    Raises
    ------
    LengthMismatchError
        If the trajectory and year counts differ
    """
    table = yearly_damage_table(config, scenario, delta_h_ft)
    npv = float(table['discounted_ead'].sum())
    logger.debug(f"NPV expected damage over {len(table)} years at Δh={delta_h_ft:g} ft: ${npv:,.2f}")
    return npv
