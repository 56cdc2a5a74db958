# src/house_elevation/damage.py
"""
Module: damage.py
Responsibilities:
- Parse raw depth-damage table rows into depth / damage sequences
- Build piecewise-linear depth-damage curves with flat extrapolation
- Evaluate damage (percent of structure value) for scalar or array depths
"""
import numpy as np
import pandas as pd
import logging
from typing import Any, List, Mapping, Sequence, Tuple, Union

from house_elevation.errors import DuplicateDepthError

# Configure logging
logging.basicConfig(level=logging.INFO,
                   format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Constants
DEPTH_PREFIX = 'ft'  # Depth columns look like ft04m, ft00, ft02_5
NEGATIVE_SUFFIX = 'm'  # Trailing 'm' marks a depth below the gauge ("minus")
NA_SENTINEL = 'NA'  # Marker for missing damage values
MAX_DAMAGE_PCT = 100.0

ArrayLike = Union[float, Sequence[float], np.ndarray]


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == NA_SENTINEL or value.strip() == ''
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def parse_depth_label(label: str) -> float:
    """
    Convert a depth column label to a depth in feet.

    Parameters
    ----------
    label : str
        Column label such as 'ft04m' (-4 ft), 'ft00' (0 ft) or 'ft02_5' (2.5 ft)

    Returns
    -------
    float
        Depth in feet, negative below the gauge

    Raises
    ------
    ValueError
        If the label does not carry a parseable depth
    """
    if not label.startswith(DEPTH_PREFIX):
        raise ValueError(f"Not a depth column: {label!r}")

    depth_str = label[len(DEPTH_PREFIX):]
    is_neg = depth_str.endswith(NEGATIVE_SUFFIX)
    if is_neg:
        depth_str = depth_str[:-len(NEGATIVE_SUFFIX)]
    depth_str = depth_str.replace('_', '.')

    try:
        depth = float(depth_str)
    except ValueError:
        raise ValueError(f"Cannot parse depth from column label {label!r}")

    return -depth if is_neg else depth


def parse_damage_table(raw_row: Union[Mapping[str, Any], pd.Series]) -> Tuple[List[float], List[float]]:
    """
    Extract depth and damage sequences from one row of a depth-damage table.

    Only keys starting with 'ft' are read; entries holding the 'NA' sentinel
    (or None / NaN) are skipped. The order of the row is preserved, sorting
    is left to DamageCurve.

    Parameters
    ----------
    raw_row : Mapping or pd.Series
        One depth-damage function, keyed by column label

    Returns
    -------
    Tuple[List[float], List[float]]
        (depths_ft, damages_pct)
    """
    depths: List[float] = []
    damages: List[float] = []

    for col, val in raw_row.items():
        col_str = str(col)
        if not col_str.startswith(DEPTH_PREFIX):
            continue
        if _is_missing(val):
            continue
        depths.append(parse_depth_label(col_str))
        damages.append(float(val))

    return depths, damages


class DamageCurve:
    """
    Piecewise-linear depth-damage function.

    Damage is expressed in percent of structure value. Depths outside the
    calibrated range take the value of the nearest endpoint, so the curve is
    defined over the whole real line.
    """

    __slots__ = ('_depths', '_damages')

    def __init__(self, depths_ft: Sequence[float], damages_pct: Sequence[float]):
        depths = np.asarray(depths_ft, dtype=float)
        damages = np.asarray(damages_pct, dtype=float)

        if depths.ndim != 1 or damages.ndim != 1:
            raise ValueError("Depths and damages must be one-dimensional sequences")
        if depths.size != damages.size:
            raise ValueError(f"Depths ({depths.size}) and damages ({damages.size}) differ in length")
        if depths.size < 2:
            raise ValueError(f"At least two control points are required, got {depths.size}")
        if not (np.isfinite(depths).all() and np.isfinite(damages).all()):
            raise ValueError("Depths and damages must be finite")
        if np.any(damages < 0) or np.any(damages > MAX_DAMAGE_PCT):
            raise ValueError(f"Damage values must lie in [0, {MAX_DAMAGE_PCT:g}] percent")

        order = np.argsort(depths, kind='stable')
        depths = depths[order]
        damages = damages[order]

        dup = np.diff(depths) == 0
        if dup.any():
            raise DuplicateDepthError(f"Duplicate depths in damage curve: {np.unique(depths[1:][dup]).tolist()}")

        depths.flags.writeable = False
        damages.flags.writeable = False
        self._depths = depths
        self._damages = damages

        logger.debug(f"Built damage curve with {depths.size} points over [{depths[0]:g}, {depths[-1]:g}] ft")

    @classmethod
    def from_row(cls, raw_row: Union[Mapping[str, Any], pd.Series]) -> 'DamageCurve':
        """Build a curve straight from a raw depth-damage table row."""
        depths, damages = parse_damage_table(raw_row)
        return cls(depths, damages)

    @property
    def depths(self) -> np.ndarray:
        return self._depths

    @property
    def damages(self) -> np.ndarray:
        return self._damages

    @property
    def min_depth(self) -> float:
        return float(self._depths[0])

    @property
    def max_depth(self) -> float:
        return float(self._depths[-1])

    def evaluate(self, depth_ft: ArrayLike) -> Union[float, np.ndarray]:
        """
        Damage in percent of structure value at the given depth(s).

        Parameters
        ----------
        depth_ft : float or array-like
            Flood depth relative to the structure, in feet

        Returns
        -------
        float or np.ndarray
            Damage percentage; a float for scalar input
        """
        # np.interp holds the endpoint values outside the range
        result = np.interp(depth_ft, self._depths, self._damages)
        if np.ndim(result) == 0:
            return float(result)
        return result

    __call__ = evaluate

    def __getstate__(self):
        return {'depths': self._depths.tolist(), 'damages': self._damages.tolist()}

    def __setstate__(self, state):
        self.__init__(state['depths'], state['damages'])

    def __eq__(self, other):
        if not isinstance(other, DamageCurve):
            return NotImplemented
        return (np.array_equal(self._depths, other._depths)
                and np.array_equal(self._damages, other._damages))

    def __hash__(self):
        return hash((self._depths.tobytes(), self._damages.tobytes()))

    def __repr__(self):
        return (f"DamageCurve(n_points={self._depths.size}, "
                f"depth_range=[{self.min_depth:g}, {self.max_depth:g}] ft)")
