"""
Lotto Predictor - History Statistics
=====================================

Descriptive statistics over the raw draw history, independent of the
prediction engine:
- Plain frequency (main + bonus) and bonus-only frequency
- Per-number and per-pair details with the most recent dates seen
- Hot/cold lists by all-time frequency
- Advanced sum statistics (moments, quartiles, coefficient of variation)
- Frequency-pool quick pick
"""

from dataclasses import dataclass
from datetime import datetime
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from loguru import logger
from scipy import stats

from .config import EngineConfig
from .models import PICK_SIZE, Draw, RandomSource, random_index
from .selection import uniform_sample

LAST_SEEN_COUNT = 3
EPOCH = datetime(1970, 1, 1)


def parse_draw_date(value: str) -> datetime:
    """
    Parse a ``DD/MM/YYYY`` (or ISO ``YYYY-MM-DD``) date label.

    Unparseable labels map to the epoch so they sort after every real date
    in a descending sort.
    """
    if not value or not isinstance(value, str):
        return EPOCH
    for fmt in ('%d/%m/%Y', '%Y-%m-%d'):
        try:
            return datetime.strptime(value.strip(), fmt)
        except ValueError:
            continue
    return EPOCH


def _most_recent(dates: List[str], count: int = LAST_SEEN_COUNT) -> List[str]:
    return sorted(dates, key=parse_draw_date, reverse=True)[:count]


def calculate_frequency(draws: Sequence[Draw]) -> Dict[int, int]:
    """Plain count of every main and bonus number"""
    values = [num for draw in draws for num in (*draw.numbers, draw.bonus)]
    counts = pd.Series(values, dtype=int).value_counts()
    return {int(num): int(count) for num, count in counts.sort_index().items()}


def calculate_bonus_frequency(draws: Sequence[Draw]) -> Dict[int, int]:
    counts = pd.Series([draw.bonus for draw in draws], dtype=int).value_counts()
    return {int(num): int(count) for num, count in counts.sort_index().items()}


@dataclass(frozen=True)
class NumberDetails:
    num: int
    frequency: int
    last_seen: List[str]


@dataclass(frozen=True)
class PairDetails:
    pair: Tuple[int, int]
    frequency: int
    last_seen: List[str]

    @property
    def label(self) -> str:
        return f"{self.pair[0]}-{self.pair[1]}"


def analyze_number_details(draws: Sequence[Draw]) -> List[NumberDetails]:
    """Frequency and three most recent dates for every number seen (main + bonus)"""
    dates: Dict[int, List[str]] = {}
    for draw in draws:
        for num in (*draw.numbers, draw.bonus):
            dates.setdefault(num, []).append(draw.draw_date)

    return [
        NumberDetails(num=num, frequency=len(seen), last_seen=_most_recent(seen))
        for num, seen in sorted(dates.items())
    ]


def get_hot_and_cold_detailed(details: Sequence[NumberDetails],
                              count: int) -> Tuple[List[NumberDetails], List[NumberDetails]]:
    """
    Split number details into the ``count`` most and least frequent.

    Returns:
        Tuple (hot, cold); hot is sorted by frequency descending, cold ascending
    """
    by_frequency = sorted(details, key=lambda d: (-d.frequency, d.num))
    hot = by_frequency[:count]
    cold = sorted(by_frequency[-count:], key=lambda d: (d.frequency, d.num)) if count > 0 else []
    return hot, cold


def analyze_pair_details(draws: Sequence[Draw]) -> List[PairDetails]:
    """Every pair of main numbers drawn together, most frequent first"""
    dates: Dict[Tuple[int, int], List[str]] = {}
    for draw in draws:
        for pair in combinations(sorted(draw.numbers), 2):
            dates.setdefault(pair, []).append(draw.draw_date)

    details = [
        PairDetails(pair=pair, frequency=len(seen), last_seen=_most_recent(seen))
        for pair, seen in dates.items()
    ]
    details.sort(key=lambda d: (-d.frequency, d.pair))
    return details


@dataclass(frozen=True)
class AdvancedStats:
    mean: float
    variance: float
    std_dev: float
    skewness: float
    kurtosis: float
    median: float
    q1: float
    q3: float
    iqr: float
    cv: float
    min: float
    max: float


def calculate_advanced_stats(draws: Sequence[Draw]) -> AdvancedStats:
    """
    Descriptive statistics of per-draw sums.

    Quartiles use the index rule ``sorted[floor(n * p)]``; skewness and
    kurtosis (excess) are population moments.
    """
    sums = np.array([draw.total for draw in draws], dtype=float)
    if sums.size == 0:
        logger.warning("No draws for advanced statistics")
        return AdvancedStats(*([0.0] * 12))

    mean = float(sums.mean())
    variance = float(sums.var())
    std_dev = float(np.sqrt(variance))

    if std_dev > 0:
        skewness = float(stats.skew(sums, bias=True))
        kurtosis = float(stats.kurtosis(sums, fisher=True, bias=True))
    else:
        skewness = kurtosis = 0.0

    ordered = np.sort(sums)
    n = len(ordered)
    median = float(ordered[n // 2])
    q1 = float(ordered[int(n * 0.25)])
    q3 = float(ordered[int(n * 0.75)])

    return AdvancedStats(
        mean=mean,
        variance=variance,
        std_dev=std_dev,
        skewness=skewness,
        kurtosis=kurtosis,
        median=median,
        q1=q1,
        q3=q3,
        iqr=q3 - q1,
        cv=std_dev / mean * 100 if mean else 0.0,
        min=float(ordered[0]),
        max=float(ordered[-1]),
    )


def frequency_pool_pick(draws: Sequence[Draw], rng: RandomSource,
                        config: Optional[EngineConfig] = None) -> List[int]:
    """
    Quick pick of 6 distinct numbers with probability proportional to plain
    frequency. Falls back to a uniform pick when the pool holds fewer than 6
    distinct numbers.
    """
    config = config or EngineConfig()
    frequency = calculate_frequency(draws)
    pool = [num for num, count in frequency.items() if 1 <= num <= config.max_number for _ in range(count)]

    if len(set(pool)) < PICK_SIZE:
        logger.warning("Frequency pool too small, using uniform random pick")
        return sorted(uniform_sample(config.domain, PICK_SIZE, rng))

    picked = set()
    while len(picked) < PICK_SIZE:
        picked.add(pool[random_index(rng, len(pool))])
    return sorted(picked)
