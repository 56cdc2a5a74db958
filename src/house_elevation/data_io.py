# src/house_elevation/data_io.py
"""
Module: data_io.py
Responsibilities:
- Load a HAZUS-style depth-damage table CSV into a pandas DataFrame
- Select a single depth-damage function (row) from the table
"""
import os
import pandas as pd
import logging
from typing import Any

from house_elevation.damage import DEPTH_PREFIX

# Configure logging
logging.basicConfig(level=logging.INFO,
                   format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def load_damage_table(path: str) -> pd.DataFrame:
    """
    Load a depth-damage table CSV.

    Missing-value markers ('NA') are kept as text so parse_damage_table can
    drop them per row.

    Parameters
    ----------
    path : str
        Path to the CSV file

    Returns
    -------
    pd.DataFrame
        One row per depth-damage function

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist
    ValueError
        If the file is empty, unparseable, or has no depth columns
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Depth-damage table not found: {path}")

    try:
        df = pd.read_csv(path, keep_default_na=False)
    except pd.errors.EmptyDataError:
        raise ValueError(f"Depth-damage table is empty: {path}")
    except pd.errors.ParserError as e:
        raise ValueError(f"Error parsing depth-damage table: {e}")

    if df.empty:
        raise ValueError(f"Depth-damage table contains no data: {path}")

    depth_cols = [c for c in df.columns if str(c).startswith(DEPTH_PREFIX)]
    if not depth_cols:
        raise ValueError(f"Depth-damage table has no '{DEPTH_PREFIX}*' depth columns: {path}")

    logger.info(f"Loaded depth-damage table: {len(df)} functions, {len(depth_cols)} depth columns")
    return df


def select_damage_row(table: pd.DataFrame, column: str, value: Any) -> pd.Series:
    """
    Return the single row of `table` whose `column` equals `value`.

    Raises
    ------
    KeyError
        If the column is missing
    ValueError
        If no row, or more than one row, matches
    """
    if column not in table.columns:
        raise KeyError(f"Depth-damage table missing '{column}' column")

    matches = table[table[column].astype(str) == str(value)]
    if matches.empty:
        raise ValueError(f"No depth-damage function with {column} == {value!r}")
    if len(matches) > 1:
        raise ValueError(f"{len(matches)} depth-damage functions match {column} == {value!r}")

    return matches.iloc[0]


if __name__ == '__main__':
    import argparse
    import sys

    from house_elevation.damage import DamageCurve, parse_damage_table

    parser = argparse.ArgumentParser(description='Smoke-test data_io module')
    parser.add_argument('--table', required=True, help='Path to depth-damage CSV')
    parser.add_argument('--column', default='DmgFnId', help='Column used to select a function')
    parser.add_argument('--value', required=True, help='Value identifying the function')
    args = parser.parse_args()

    try:
        table = load_damage_table(args.table)
        print(f"✓ Table loaded successfully: {len(table)} functions")

        row = select_damage_row(table, args.column, args.value)
        depths, damages = parse_damage_table(row)
        curve = DamageCurve(depths, damages)
        print(f"✓ Damage curve built: {curve}")
        for d in (curve.min_depth, 0.0, curve.max_depth):
            print(f"  damage at {d:g} ft: {curve(d):.1f}%")
    except Exception as e:
        print(f"Error during test: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)
