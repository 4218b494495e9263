"""
Lotto Predictor - Statistical Core Module
==========================================

Provides recency-weighted frequency, gap theory and pattern analysis over an
oldest-first draw history.

Components:
- FrequencyAggregator: all-time (recency doubled) and windowed frequency
- GapAnalyzer: gap sequences, expected gaps and due numbers
- PatternEngine: sum distribution, positions, consecutives, ranges, trend, cycles
- NumberClassifier: hot / cold / avoid number sets
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from .config import EngineConfig
from .models import PICK_SIZE, Draw, SumRange


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def draws_to_matrix(draws: Sequence[Draw]) -> np.ndarray:
    """Main numbers as an integer array of shape (n_draws, 6)"""
    if not draws:
        return np.zeros((0, PICK_SIZE), dtype=int)
    return np.array([draw.numbers for draw in draws], dtype=int)


def draw_sums(draws: Sequence[Draw]) -> np.ndarray:
    return draws_to_matrix(draws).sum(axis=1)


def rank_numbers(values: np.ndarray) -> List[int]:
    """Numbers ordered by value descending, ties broken by the lower number"""
    order = sorted(range(len(values)), key=lambda i: (-values[i], i))
    return [i + 1 for i in order]


class FrequencyAggregator:
    """
    Weighted frequency tables.

    Each draw inside the most recent ``recency_window`` draws contributes
    ``recency_weight`` (2.0) per number, older draws contribute 1.0.
    Tables are numpy arrays indexed by ``number - 1``.
    """

    def __init__(self, config: EngineConfig):
        self.config = config.validate()

    def recency_weights(self, length: int) -> np.ndarray:
        weights = np.ones(length)
        if length > 0 and self.config.recency_window > 0:
            start = max(0, length - self.config.recency_window)
            weights[start:] = self.config.recency_weight
        return weights

    def all_time_frequency(self, draws: Sequence[Draw]) -> np.ndarray:
        freq = np.zeros(self.config.max_number)
        weights = self.recency_weights(len(draws))

        for draw, weight in zip(draws, weights):
            for num in draw.numbers:
                freq[num - 1] += weight

        return freq

    def recent_frequency(self, draws: Sequence[Draw], window: int) -> np.ndarray:
        """Unweighted counts over the last ``min(window, len(draws))`` draws"""
        freq = np.zeros(self.config.max_number)
        if window <= 0:
            return freq

        for draw in draws[-window:]:
            for num in draw.numbers:
                freq[num - 1] += 1

        return freq

    def bonus_frequency(self, draws: Sequence[Draw]) -> np.ndarray:
        freq = np.zeros(self.config.max_number)
        weights = self.recency_weights(len(draws))

        for draw, weight in zip(draws, weights):
            freq[draw.bonus - 1] += weight

        return freq

    def total_weighted_draws(self, total: int) -> float:
        window = self.config.recency_window
        if total > window:
            return (total - window) + window * self.config.recency_weight
        return total * self.config.recency_weight


@dataclass(frozen=True, eq=False)
class GapAnalysis:
    """Container for gap/due analysis results"""
    gaps: List[Tuple[int, ...]]  # per number, trailing entry is the current gap
    current_gaps: np.ndarray     # draws since last appearance, 0 if never seen
    expected_gaps: np.ndarray
    due_numbers: List[int]
    total_weighted_draws: float


class GapAnalyzer:
    """
    Gap theory analyzer.

    A gap is the index distance between two successive appearances of a
    number. Gaps closed inside the recency window are stored
    ``recency_weight`` times (twice by default) so that a
    plain average leans toward recent behaviour while the raw magnitudes stay
    visible.

    A number is due when its current gap exceeds ``due_threshold`` times its
    expected gap, where expected gap = total weighted draws / weighted frequency.
    """

    def __init__(self, config: EngineConfig, aggregator: Optional[FrequencyAggregator] = None):
        self.config = config
        self.aggregator = aggregator or FrequencyAggregator(config)

    def analyze(self, draws: Sequence[Draw], all_time_freq: Optional[np.ndarray] = None) -> GapAnalysis:
        if all_time_freq is None:
            all_time_freq = self.aggregator.all_time_frequency(draws)

        gaps = self._calculate_gaps(draws)
        current_gaps = np.array([seq[-1] if seq else 0 for seq in gaps], dtype=float)

        total_weighted = self.aggregator.total_weighted_draws(len(draws))
        expected_gaps = np.where(
            all_time_freq > 0,
            total_weighted / np.where(all_time_freq > 0, all_time_freq, 1.0),
            total_weighted,
        )

        due = self._identify_due_numbers(current_gaps, expected_gaps)

        if draws:
            logger.debug(f"Gap analysis complete (due={len(due)}, total_weighted={total_weighted})")
        else:
            logger.warning("No draws available for gap analysis")

        return GapAnalysis(
            gaps=gaps,
            current_gaps=current_gaps,
            expected_gaps=expected_gaps,
            due_numbers=due,
            total_weighted_draws=float(total_weighted),
        )

    def _calculate_gaps(self, draws: Sequence[Draw]) -> List[Tuple[int, ...]]:
        n_draws = len(draws)
        recent_start = n_draws - self.config.recency_window
        recent_copies = int(self.config.recency_weight)
        appearances: Dict[int, List[int]] = {num: [] for num in self.config.domain}

        for idx, draw in enumerate(draws):
            for num in draw.numbers:
                appearances[num].append(idx)

        gaps = []
        for num in self.config.domain:
            seen = appearances[num]
            sequence: List[int] = []

            for prev, idx in zip(seen, seen[1:]):
                gap = idx - prev
                sequence.extend([gap] * (recent_copies if idx >= recent_start else 1))

            if seen:
                last_seen = seen[-1]
                current_gap = n_draws - 1 - last_seen
                sequence.extend([current_gap] * (recent_copies if last_seen >= recent_start else 1))

            gaps.append(tuple(sequence))

        return gaps

    def _identify_due_numbers(self, current_gaps: np.ndarray, expected_gaps: np.ndarray) -> List[int]:
        candidates = []
        for num in self.config.domain:
            current = current_gaps[num - 1]
            expected = expected_gaps[num - 1]
            if expected > 0 and current > expected * self.config.due_threshold:
                candidates.append((current / expected, num))

        candidates.sort(key=lambda item: (-item[0], item[1]))
        return [num for _, num in candidates[:self.config.due_count]]


@dataclass(frozen=True)
class SumDistribution:
    mean: float
    std_dev: float
    minimum: int
    maximum: int


@dataclass(frozen=True)
class TrendSummary:
    recent_trend: float
    volatility: float


@dataclass(frozen=True)
class PatternAnalysis:
    """Container for pattern and distribution results"""
    sum_distribution: SumDistribution
    position_stats: Dict[str, float]
    consecutive_patterns: List[Dict[str, float]]
    range_distribution: Dict[str, float]
    trend: TrendSummary
    cycles: List[int]
    detected_patterns: List[str]


class PatternEngine:
    """
    Pattern and distribution analysis.

    Analyzes:
    - Recency-weighted sum distribution (weighted draws repeated, not scaled)
    - Positional mean/variance per stored slot
    - Consecutive-pair histogram
    - Range-bucket distribution
    - Short-term sum trend and cycle detection
    """

    TREND_WINDOW = 10
    CYCLE_WINDOW = 30
    CYCLE_LENGTHS = range(3, 11)
    CYCLE_TOLERANCE = 10
    BUCKET_WIDTH = 10

    def __init__(self, config: EngineConfig, aggregator: Optional[FrequencyAggregator] = None):
        self.config = config
        self.aggregator = aggregator or FrequencyAggregator(config)

    def analyze(self, draws: Sequence[Draw]) -> PatternAnalysis:
        if not draws:
            logger.warning("No draws for pattern analysis")

        consecutive = self.analyze_consecutive_patterns(draws)
        analysis = PatternAnalysis(
            sum_distribution=self.analyze_sum_distribution(draws),
            position_stats=self.analyze_position_patterns(draws),
            consecutive_patterns=consecutive,
            range_distribution=self.analyze_range_distribution(draws),
            trend=self.analyze_trends(draws),
            cycles=self.detect_cycles(draws),
            detected_patterns=self.detect_patterns(draws, consecutive),
        )

        logger.debug(f"Pattern analysis complete (patterns={len(analysis.detected_patterns)}, "
                     f"cycles={analysis.cycles})")
        return analysis

    def weighted_sums(self, draws: Sequence[Draw]) -> List[int]:
        sums: List[int] = []
        weights = self.aggregator.recency_weights(len(draws))
        for draw, weight in zip(draws, weights):
            sums.extend([draw.total] * int(weight))
        return sums

    def analyze_sum_distribution(self, draws: Sequence[Draw]) -> SumDistribution:
        sums = self.weighted_sums(draws)
        if not sums:
            return SumDistribution(mean=0.0, std_dev=0.0, minimum=0, maximum=0)

        values = np.array(sums, dtype=float)
        return SumDistribution(
            mean=float(values.mean()),
            std_dev=float(values.std()),
            minimum=int(values.min()),
            maximum=int(values.max()),
        )

    def optimal_sum_range(self, distribution: SumDistribution) -> SumRange:
        return SumRange(
            min=round_half_up(distribution.mean - distribution.std_dev),
            max=round_half_up(distribution.mean + distribution.std_dev),
            target=round_half_up(distribution.mean),
        )

    def analyze_position_patterns(self, draws: Sequence[Draw]) -> Dict[str, float]:
        matrix = draws_to_matrix(draws).astype(float)
        patterns = {}
        for pos in range(PICK_SIZE):
            column = matrix[:, pos]
            key = f'B{pos + 1}'
            patterns[f'{key}_mean'] = float(column.mean()) if column.size else 0.0
            patterns[f'{key}_variance'] = float(column.var()) if column.size else 0.0
        return patterns

    @staticmethod
    def count_consecutive(numbers: Sequence[int]) -> int:
        ordered = sorted(numbers)
        return sum(1 for a, b in zip(ordered, ordered[1:]) if b == a + 1)

    def analyze_consecutive_patterns(self, draws: Sequence[Draw]) -> List[Dict[str, float]]:
        counts = np.zeros(PICK_SIZE, dtype=int)
        for draw in draws:
            counts[self.count_consecutive(draw.numbers)] += 1

        total = len(draws)
        return [
            {'count': count, 'frequency': float(counts[count] / total) if total else 0.0}
            for count in range(PICK_SIZE)
        ]

    def range_buckets(self) -> List[Tuple[int, int]]:
        buckets = []
        for low in range(1, self.config.max_number + 1, self.BUCKET_WIDTH):
            buckets.append((low, min(low + self.BUCKET_WIDTH - 1, self.config.max_number)))
        return buckets

    def analyze_range_distribution(self, draws: Sequence[Draw]) -> Dict[str, float]:
        buckets = self.range_buckets()
        ranges = {f'{low}-{high}': 0.0 for low, high in buckets}
        weights = self.aggregator.recency_weights(len(draws))

        for draw, weight in zip(draws, weights):
            for num in draw.numbers:
                low, high = buckets[(num - 1) // self.BUCKET_WIDTH]
                ranges[f'{low}-{high}'] += float(weight)

        return ranges

    def analyze_trends(self, draws: Sequence[Draw]) -> TrendSummary:
        """Compare the average sum of the last 10 draws with the 10 before them"""
        sums = draw_sums(draws).astype(float)
        window = self.TREND_WINDOW
        recent = sums[-window:]
        older = sums[-2 * window:-window] if len(sums) > window else np.array([])

        if recent.size == 0:
            return TrendSummary(recent_trend=0.0, volatility=0.0)

        recent_avg = float(recent.mean())
        trend = recent_avg - float(older.mean()) if older.size else 0.0
        return TrendSummary(recent_trend=trend, volatility=float(recent.std()))

    def detect_cycles(self, draws: Sequence[Draw]) -> List[int]:
        sums = draw_sums(draws[-self.CYCLE_WINDOW:])
        cycles = []

        for length in self.CYCLE_LENGTHS:
            if len(sums) <= length:
                continue
            diffs = np.abs(sums[:-length] - sums[length:])
            if np.all(diffs <= self.CYCLE_TOLERANCE):
                cycles.append(length)

        return cycles

    def detect_patterns(self, draws: Sequence[Draw],
                        consecutive: Optional[List[Dict[str, float]]] = None) -> List[str]:
        patterns = []
        recent = draws[-self.TREND_WINDOW:]
        midpoint = self.config.max_number // 2

        if recent:
            high_counts = [sum(1 for n in draw.numbers if n > midpoint) for draw in recent]
            avg_highs = sum(high_counts) / len(high_counts)
            if avg_highs > 4:
                patterns.append("Recent bias toward high numbers")
            if avg_highs < 2:
                patterns.append("Recent bias toward low numbers")

        if consecutive is None:
            consecutive = self.analyze_consecutive_patterns(draws)
        multi_consecutive = sum(p['frequency'] for p in consecutive if p['count'] >= 2)
        if multi_consecutive > 0.3:
            patterns.append("Higher than normal consecutive number frequency")

        return patterns


@dataclass(frozen=True)
class NumberClasses:
    hot_numbers: List[int]
    cold_numbers: List[int]
    avoid_numbers: List[int]


class NumberClassifier:
    """Hot, cold and avoid sets from short purpose-specific windows"""

    def __init__(self, config: EngineConfig, aggregator: Optional[FrequencyAggregator] = None):
        self.config = config
        self.aggregator = aggregator or FrequencyAggregator(config)

    def classify(self, draws: Sequence[Draw]) -> NumberClasses:
        classes = NumberClasses(
            hot_numbers=self.identify_hot_numbers(draws),
            cold_numbers=self.identify_cold_numbers(draws),
            avoid_numbers=self.identify_avoid_numbers(draws),
        )
        logger.debug(f"Number classes (hot={len(classes.hot_numbers)}, "
                     f"cold={len(classes.cold_numbers)}, avoid={len(classes.avoid_numbers)})")
        return classes

    def identify_hot_numbers(self, draws: Sequence[Draw]) -> List[int]:
        freq = self.aggregator.recent_frequency(draws, self.config.hot_window)
        ranked = [num for num in rank_numbers(freq) if freq[num - 1] > 0]
        return ranked[:self.config.hot_count]

    def identify_cold_numbers(self, draws: Sequence[Draw]) -> List[int]:
        freq = self.aggregator.recent_frequency(draws, self.config.cold_window)
        cold = [num for num in self.config.domain if freq[num - 1] == 0]
        return cold[:self.config.cold_count]

    def identify_avoid_numbers(self, draws: Sequence[Draw]) -> List[int]:
        freq = self.aggregator.recent_frequency(draws, self.config.avoid_window)
        ranked = [num for num in rank_numbers(freq) if freq[num - 1] >= self.config.avoid_threshold]
        return ranked[:self.config.avoid_count]
