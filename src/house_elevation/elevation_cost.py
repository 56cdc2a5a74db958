# src/house_elevation/elevation_cost.py
"""
Module: elevation_cost.py
Responsibilities:
- Hold the process-wide elevation cost curve (rate per square foot vs. height)
- Compute the one-time cost of elevating a structure by a given height

Cost figures follow Zarekarizi et al. (2020).
"""
import numpy as np
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from house_elevation.errors import InvalidElevationError, OutOfRangeError

# Configure logging
logging.basicConfig(level=logging.INFO,
                   format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Constants
COST_THRESHOLDS_FT = (0.0, 5.0, 8.5, 12.0, 14.0)
COST_RATES_PER_SQFT = (80.36, 82.5, 86.25, 103.75, 113.75)
MIN_ELEVATION_FT = 0.0
MAX_ELEVATION_FT = 14.0
ZERO_ELEVATION_TOL_FT = 1e-9  # Below this a request counts as "no elevation"

# Fixed fees owed whenever any elevation work is done (USD)
BASE_COST_ITEMS = {
    'permits_and_inspection': 10_000.0,
    'survey': 300.0,
    'engineering': 470.0,
    'mobilization': 4_300.0,
    'utility_reconnection': 2_175.0,
    'demolition_and_debris': 3_500.0,
}
BASE_COST_USD = sum(BASE_COST_ITEMS.values())  # 20,745


@dataclass(frozen=True)
class ElevationCostCurve:
    """Piecewise-linear cost rate (USD per square foot) over raise height."""

    thresholds_ft: Tuple[float, ...] = COST_THRESHOLDS_FT
    rates_per_sqft: Tuple[float, ...] = COST_RATES_PER_SQFT

    def __post_init__(self):
        if len(self.thresholds_ft) != len(self.rates_per_sqft):
            raise ValueError("Thresholds and rates must have the same length")
        if len(self.thresholds_ft) < 2:
            raise ValueError("Cost curve needs at least two thresholds")
        if np.any(np.diff(self.thresholds_ft) <= 0):
            raise ValueError("Cost curve thresholds must be strictly increasing")

    @property
    def min_height(self) -> float:
        return float(self.thresholds_ft[0])

    @property
    def max_height(self) -> float:
        return float(self.thresholds_ft[-1])

    def cost_rate(self, height_ft: float) -> float:
        """
        Construction cost rate for raising a structure by height_ft.

        Parameters
        ----------
        height_ft : float
            Raise height in feet

        Returns
        -------
        float
            Cost in USD per square foot of floor area

        Raises
        ------
        OutOfRangeError
            If height_ft is outside the curve's thresholds (no extrapolation)
        """
        if not self.min_height <= height_ft <= self.max_height:
            raise OutOfRangeError(
                f"Height {height_ft} ft outside cost curve domain "
                f"[{self.min_height:g}, {self.max_height:g}]"
            )
        return float(np.interp(height_ft, self.thresholds_ft, self.rates_per_sqft))


@lru_cache(maxsize=None)
def get_elevation_cost_curve() -> ElevationCostCurve:
    """Return the shared elevation cost curve, building it on first use."""
    curve = ElevationCostCurve()
    logger.info(f"Initialized elevation cost curve over {curve.min_height:g}-{curve.max_height:g} ft")
    return curve


def elevation_cost(structure, delta_h_ft: float) -> float:
    """
    Cost (USD) to elevate a structure by delta_h_ft feet.

    No elevation costs nothing: the base fees are only owed when work is done.

    Parameters
    ----------
    structure : StructureRecord
        Structure being elevated; only its floor area is used
    delta_h_ft : float
        Raise height in feet, within [0, 14]

    Returns
    -------
    float
        BASE_COST_USD + area * rate(delta_h_ft), or 0.0 for no elevation

    Raises
    ------
    InvalidElevationError
        If delta_h_ft is outside [0, 14] or not a number
    """
    if abs(delta_h_ft) < ZERO_ELEVATION_TOL_FT:
        return 0.0
    if not MIN_ELEVATION_FT <= delta_h_ft <= MAX_ELEVATION_FT:
        raise InvalidElevationError(
            f"Elevation must be between {MIN_ELEVATION_FT:g} and {MAX_ELEVATION_FT:g} ft, got {delta_h_ft}"
        )
    rate = get_elevation_cost_curve().cost_rate(delta_h_ft)
    return BASE_COST_USD + structure.area_ft2 * rate
