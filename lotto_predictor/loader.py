"""
Lotto Predictor - Draw Loader
==============================

Converts tabular draw data into an oldest-first tuple of Draw records.
Accepted column layouts:
- draw_date, n1..n6, bonus
- Date, B1..B6, BB
"""

from typing import List, Optional, Tuple

import pandas as pd
from loguru import logger

from .config import EngineConfig
from .history_stats import parse_draw_date
from .models import Draw, InvalidDrawError

NUMBER_COLUMNS = ['n1', 'n2', 'n3', 'n4', 'n5', 'n6']
EXPECTED_COLUMNS = ['draw_date'] + NUMBER_COLUMNS + ['bonus']

COLUMN_ALIASES = {
    'Date': 'draw_date',
    'B1': 'n1', 'B2': 'n2', 'B3': 'n3', 'B4': 'n4', 'B5': 'n5', 'B6': 'n6',
    'BB': 'bonus',
}


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    df = df.rename(columns={k: v for k, v in COLUMN_ALIASES.items() if k in df.columns})
    missing = [col for col in EXPECTED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")
    return df


def _row_to_draw(row: pd.Series, config: EngineConfig) -> Optional[Draw]:
    try:
        numbers = tuple(int(row[col]) for col in NUMBER_COLUMNS)
        bonus = int(row['bonus'])
    except (TypeError, ValueError):
        logger.warning(f"Skipping draw {row.get('draw_date')}: non-numeric values")
        return None

    try:
        return Draw(draw_date=str(row['draw_date']), numbers=numbers, bonus=bonus).validate(config.max_number)
    except InvalidDrawError as e:
        logger.warning(f"Skipping invalid draw: {e}")
        return None


def draws_from_dataframe(df: pd.DataFrame, config: Optional[EngineConfig] = None,
                         sort_by_date: bool = True) -> Tuple[Draw, ...]:
    """
    Build an oldest-first draw history from a DataFrame.

    Args:
        df: Draw rows in either accepted column layout
        config: Domain bound used for validation
        sort_by_date: Sort chronologically by parsed date label (stable)

    Returns:
        Tuple of valid Draw records; invalid rows are dropped with a warning

    Raises:
        ValueError: required columns are missing
    """
    config = config or EngineConfig()
    if df.empty:
        logger.warning("Empty draw table supplied")
        return ()

    df = _normalize_columns(df)
    draws: List[Draw] = []
    for _, row in df.iterrows():
        draw = _row_to_draw(row, config)
        if draw is not None:
            draws.append(draw)

    if sort_by_date:
        draws.sort(key=lambda d: parse_draw_date(d.draw_date))

    skipped = len(df) - len(draws)
    logger.info(f"Loaded {len(draws)} draws" + (f" (skipped {skipped} invalid rows)" if skipped else ""))
    return tuple(draws)


def draws_to_dataframe(draws) -> pd.DataFrame:
    rows = [
        {'draw_date': d.draw_date, **dict(zip(NUMBER_COLUMNS, d.numbers)), 'bonus': d.bonus}
        for d in draws
    ]
    return pd.DataFrame(rows, columns=EXPECTED_COLUMNS)


def load_draws_csv(path: str, config: Optional[EngineConfig] = None) -> Tuple[Draw, ...]:
    """Read a CSV file of draws into an oldest-first history."""
    logger.info(f"Reading draws from {path}")
    df = pd.read_csv(path, dtype=str).dropna(how='all')
    return draws_from_dataframe(df, config=config)
