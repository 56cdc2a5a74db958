# src/house_elevation/structure.py
"""
Module: structure.py
Responsibilities:
- Describe the structure under analysis (value, floor area, height above gauge)
- Own the structure's depth-damage curve
- Build a structure from a raw depth-damage table row
"""
import numpy as np
import pandas as pd
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Union

from house_elevation.damage import DamageCurve

# Configure logging
logging.basicConfig(level=logging.INFO,
                   format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StructureRecord:
    """
    A single structure exposed to coastal flooding.

    Attributes
    ----------
    value_usd : float
        Replacement value of the structure, USD (> 0)
    area_ft2 : float
        Floor area, square feet (> 0)
    height_above_gauge_ft : float
        Floor elevation relative to the tide gauge datum, feet; may be negative
    damage_curve : DamageCurve
        Depth-damage function returning percent of value lost
    """
    value_usd: float
    area_ft2: float
    height_above_gauge_ft: float
    damage_curve: DamageCurve

    def __post_init__(self):
        for name in ('value_usd', 'area_ft2', 'height_above_gauge_ft'):
            val = float(getattr(self, name))
            if not np.isfinite(val):
                raise ValueError(f"{name} must be finite, got {val}")
            object.__setattr__(self, name, val)

        if self.value_usd <= 0:
            raise ValueError(f"Structure value must be positive, got {self.value_usd}")
        if self.area_ft2 <= 0:
            raise ValueError(f"Structure area must be positive, got {self.area_ft2}")
        if not isinstance(self.damage_curve, DamageCurve):
            raise TypeError("damage_curve must be a DamageCurve")

    @classmethod
    def from_damage_row(
        cls,
        row: Union[Mapping[str, Any], pd.Series],
        value_usd: float,
        area_ft2: float,
        height_above_gauge_ft: float
    ) -> 'StructureRecord':
        """
        Construct a structure from a depth-damage table row and physical parameters.

        Parameters
        ----------
        row : Mapping or pd.Series
            One depth-damage function (ft* columns, 'NA' for missing)
        value_usd : float
            Structure value, USD
        area_ft2 : float
            Floor area, square feet
        height_above_gauge_ft : float
            Floor elevation relative to the gauge, feet

        Returns
        -------
        StructureRecord
        """
        curve = DamageCurve.from_row(row)
        record = cls(
            value_usd=value_usd,
            area_ft2=area_ft2,
            height_above_gauge_ft=height_above_gauge_ft,
            damage_curve=curve
        )
        logger.info(
            f"Built structure: value=${record.value_usd:,.0f}, area={record.area_ft2:,.0f} ft², "
            f"height above gauge={record.height_above_gauge_ft:g} ft, {curve.depths.size} damage points"
        )
        return record
