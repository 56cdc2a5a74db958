# src/house_elevation/scenario.py
"""
Module: scenario.py
Responsibilities:
- Hold the evaluation setup shared by many policy evaluations
  (structure, evaluation years, surge distribution, integration grid)
- Hold a sea-level-rise scenario (SLR trajectory and discount rate)
"""
import numpy as np
import logging
from dataclasses import dataclass, field
from typing import Sequence, Tuple

from house_elevation.hazard import DEFAULT_GRID, ExceedanceGrid, HazardDistribution
from house_elevation.structure import StructureRecord

# Configure logging
logging.basicConfig(level=logging.INFO,
                   format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationConfig:
    """
    Fixed inputs reused across candidate heights and scenarios.

    Attributes
    ----------
    structure : StructureRecord
        Structure under analysis
    years : Tuple[int, ...]
        Evaluation years, strictly ascending; the first is the base year for discounting
    surge_dist : HazardDistribution
        Annual-maximum flood stage distribution (must expose ppf)
    grid : ExceedanceGrid
        Integration grid for EAD
    """
    structure: StructureRecord
    years: Tuple[int, ...]
    surge_dist: HazardDistribution
    grid: ExceedanceGrid = field(default=DEFAULT_GRID)

    def __post_init__(self):
        fractional = [y for y in self.years if not float(y).is_integer()]
        if fractional:
            raise ValueError(f"Evaluation years must be whole numbers, got {fractional}")
        years = tuple(int(y) for y in self.years)
        if not years:
            raise ValueError("At least one evaluation year is required")
        if any(b <= a for a, b in zip(years, years[1:])):
            raise ValueError(f"Evaluation years must be distinct and ascending, got {list(years)}")
        if not callable(getattr(self.surge_dist, 'ppf', None)):
            raise TypeError("surge_dist must expose an inverse CDF as ppf()")
        object.__setattr__(self, 'years', years)
        logger.debug(f"Evaluation config: {len(years)} years from {years[0]} to {years[-1]}, "
                     f"{self.grid.n}-point exceedance grid")

    @property
    def base_year(self) -> int:
        return self.years[0]

    @property
    def n_years(self) -> int:
        return len(self.years)


@dataclass(frozen=True)
class Scenario:
    """
    Sea-level-rise scenario: one SLR offset (ft) per evaluation year and a discount rate.
    """
    slr_ft: Tuple[float, ...]
    discount_rate: float

    def __post_init__(self):
        slr = tuple(float(s) for s in self.slr_ft)
        if not np.isfinite(slr).all():
            raise ValueError("SLR trajectory must contain only finite values")
        rate = float(self.discount_rate)
        if not np.isfinite(rate) or rate < 0:
            raise ValueError(f"Discount rate must be non-negative, got {self.discount_rate}")
        object.__setattr__(self, 'slr_ft', slr)
        object.__setattr__(self, 'discount_rate', rate)

    @classmethod
    def linear(cls, years: Sequence[int], slr_start_ft: float, slr_rate_ft_per_year: float,
               discount_rate: float) -> 'Scenario':
        """Scenario with SLR rising linearly from the first year."""
        years = np.asarray(years, dtype=int)
        slr = slr_start_ft + slr_rate_ft_per_year * (years - years[0])
        return cls(slr_ft=tuple(slr.tolist()), discount_rate=discount_rate)
