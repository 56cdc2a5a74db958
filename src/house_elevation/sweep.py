# src/house_elevation/sweep.py
"""
Module: sweep.py
Responsibilities:
- Evaluate many candidate elevation heights for one scenario (optionally in parallel)
- Evaluate a grid of scenarios x heights into an xarray Dataset
"""
import os
import time
import logging
import concurrent.futures
import numpy as np
import pandas as pd
import xarray as xr
from functools import partial
from tqdm import tqdm
from typing import List, Mapping, Optional, Sequence, Tuple

from house_elevation.policy import (
    POLICY_MAX_HEIGHT_FT,
    POLICY_MIN_HEIGHT_FT,
    ElevationPolicy,
    PolicyResult,
    evaluate,
)
from house_elevation.scenario import EvaluationConfig, Scenario

# Configure logging
logging.basicConfig(level=logging.INFO,
                   format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

RESULT_FIELDS = list(PolicyResult._fields)


def default_heights(step: float = 1.0) -> np.ndarray:
    """Candidate heights from POLICY_MIN_HEIGHT_FT to POLICY_MAX_HEIGHT_FT inclusive."""
    if step <= 0:
        raise ValueError(f"Step must be positive, got {step}")
    n = int(np.floor((POLICY_MAX_HEIGHT_FT - POLICY_MIN_HEIGHT_FT) / step + 1e-9)) + 1
    return POLICY_MIN_HEIGHT_FT + step * np.arange(n)


def _evaluate_pair(pair: Tuple[Scenario, float], config: EvaluationConfig) -> PolicyResult:
    """Top-level helper for ProcessPoolExecutor."""
    scenario, height_ft = pair
    return evaluate(config, scenario, ElevationPolicy(height_ft=float(height_ft)))


def resolve_workers(workers: int) -> int:
    """Number of worker processes to use (0=all cores)."""
    if workers < 0:
        raise ValueError(f"Workers must be non-negative (0=all cores), got {workers}")
    return workers if workers > 0 else (os.cpu_count() or 1)


def _run_evaluations(
    config: EvaluationConfig,
    pairs: List[Tuple[Scenario, float]],
    workers: int,
    progress: bool,
    desc: str
) -> List[PolicyResult]:
    """Evaluate (scenario, height) pairs in order, sharing a single process pool."""
    n_workers = resolve_workers(workers)
    func = partial(_evaluate_pair, config=config)
    start_time = time.time()

    if n_workers == 1 or len(pairs) <= 1:
        results = [func(p) for p in tqdm(pairs, desc=desc, disable=not progress)]
    else:
        logger.info(f"Evaluating {len(pairs)} policies with {n_workers} worker(s)...")
        with concurrent.futures.ProcessPoolExecutor(max_workers=n_workers) as executor:
            chunk_size = max(1, len(pairs) // (n_workers * 4))
            results = list(tqdm(
                executor.map(func, pairs, chunksize=chunk_size),
                total=len(pairs),
                desc=desc,
                disable=not progress
            ))

    logger.info(f"Evaluated {len(pairs)} policies in {time.time() - start_time:.2f} seconds")
    return results


def evaluate_heights(
    config: EvaluationConfig,
    scenario: Scenario,
    heights: Optional[Sequence[float]] = None,
    workers: int = 1,
    progress: bool = False
) -> pd.DataFrame:
    """
    Evaluate each candidate height under one scenario.

    Parameters
    ----------
    config : EvaluationConfig
        Shared evaluation setup
    scenario : Scenario
        SLR trajectory and discount rate
    heights : Sequence[float], optional
        Candidate raise heights in feet; defaults to default_heights()
    workers : int, default=1
        Number of worker processes (1=serial, 0=all cores)
    progress : bool, default=False
        Show a tqdm progress bar

    Returns
    -------
    pd.DataFrame
        Columns ['height_ft', 'investment', 'expected_damage', 'total_cost'],
        in the order of `heights`

    Raises
    ------
    ValueError
        If workers is negative
    InvalidElevationError, LengthMismatchError
        Propagated unchanged from the first failing evaluation
    """
    heights = [float(h) for h in (default_heights() if heights is None else heights)]
    results = _run_evaluations(config, [(scenario, h) for h in heights], workers, progress,
                               desc="Evaluating heights")

    df = pd.DataFrame([r._asdict() for r in results], columns=RESULT_FIELDS)
    df.insert(0, 'height_ft', np.asarray(heights, dtype=float))
    return df


def evaluate_scenarios(
    config: EvaluationConfig,
    scenarios: Mapping[str, Scenario],
    heights: Optional[Sequence[float]] = None,
    workers: int = 1,
    progress: bool = False
) -> xr.Dataset:
    """
    Evaluate every (scenario, height) pair.

    All pairs share one process pool when workers > 1.

    Parameters
    ----------
    config : EvaluationConfig
        Shared evaluation setup
    scenarios : Mapping[str, Scenario]
        Named scenarios
    heights : Sequence[float], optional
        Candidate raise heights in feet; defaults to default_heights()
    workers : int, default=1
        Number of worker processes (1=serial, 0=all cores)
    progress : bool, default=False
        Show a tqdm progress bar

    Returns
    -------
    xr.Dataset
        Variables investment, expected_damage, total_cost with dims (scenario, height_ft)
    """
    if not scenarios:
        raise ValueError("At least one scenario is required")

    heights = [float(h) for h in (default_heights() if heights is None else heights)]
    names: List[str] = list(scenarios)
    logger.info(f"Evaluating {len(names)} scenario(s) x {len(heights)} height(s)")

    pairs = [(scenarios[name], h) for name in names for h in heights]
    results = _run_evaluations(config, pairs, workers, progress, desc="Evaluating scenarios")

    data_vars = {
        field: (('scenario', 'height_ft'),
                np.array([getattr(r, field) for r in results], dtype=float).reshape(len(names), len(heights)))
        for field in RESULT_FIELDS
    }
    ds = xr.Dataset(
        data_vars=data_vars,
        coords={'scenario': names, 'height_ft': np.asarray(heights, dtype=float)}
    )
    for field in RESULT_FIELDS:
        ds[field].attrs['units'] = 'USD'
    ds['height_ft'].attrs['units'] = 'ft'
    return ds
