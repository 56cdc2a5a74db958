# src/house_elevation/policy.py
"""
Module: policy.py
Responsibilities:
- Define the elevation policy (a single raise height)
- Evaluate a policy: construction cost + NPV of expected damages
"""
import logging
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional

from house_elevation.aggregate import npv_expected_damage
from house_elevation.elevation_cost import elevation_cost
from house_elevation.scenario import EvaluationConfig, Scenario

# Configure logging
logging.basicConfig(level=logging.INFO,
                   format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Bounds searched by the outer framework; not re-validated here
POLICY_MIN_HEIGHT_FT = 0.0
POLICY_MAX_HEIGHT_FT = 14.0


@dataclass(frozen=True)
class ElevationPolicy:
    """Raise the structure by height_ft feet."""
    height_ft: float


class PolicyResult(NamedTuple):
    """Outcome of one policy evaluation, all in USD (lower is better)."""
    investment: float
    expected_damage: float
    total_cost: float


def evaluate(
    config: EvaluationConfig,
    scenario: Scenario,
    policy: ElevationPolicy,
    rng: Optional[Any] = None
) -> PolicyResult:
    """
    Total cost of an elevation policy under one SLR scenario.

    Parameters
    ----------
    config : EvaluationConfig
        Structure, years, surge distribution and grid
    scenario : Scenario
        SLR trajectory and discount rate
    policy : ElevationPolicy
        Candidate raise height
    rng : optional
        Accepted for compatibility with simulation frameworks that pass a
        random generator. Unused: the evaluation is deterministic.

    Returns
    -------
    PolicyResult
        (investment, expected_damage, total_cost)

    Raises
    ------
    InvalidElevationError
        If the height cannot be costed
    LengthMismatchError
        If the scenario trajectory does not match config.years
    """
    h = float(policy.height_ft)
    investment = elevation_cost(config.structure, h)
    expected_damage = npv_expected_damage(config, scenario, h)
    result = PolicyResult(
        investment=investment,
        expected_damage=expected_damage,
        total_cost=investment + expected_damage
    )
    logger.debug(f"Policy Δh={h:g} ft: investment=${investment:,.0f}, "
                 f"expected damage=${expected_damage:,.0f}, total=${result.total_cost:,.0f}")
    return result


def compute_total_cost(config: EvaluationConfig, scenario: Scenario, height_ft: float) -> float:
    """Total cost (construction + NPV of expected damages) for a given elevation height."""
    return evaluate(config, scenario, ElevationPolicy(height_ft=height_ft)).total_cost
