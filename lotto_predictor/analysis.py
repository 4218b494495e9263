"""
Lotto Predictor - Analysis Snapshot
====================================

Builds the immutable AnalysisSnapshot consumed by scoring, selection,
confidence and reasoning. One snapshot is created per prediction request.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np
from loguru import logger

from .config import EngineConfig
from .models import Draw, DrawHistory, NumpyRandomSource, PredictionWeights, RandomSource, SumRange
from .statistical_core import (
    FrequencyAggregator,
    GapAnalyzer,
    NumberClassifier,
    PatternEngine,
    SumDistribution,
    TrendSummary,
)


@dataclass(frozen=True)
class PredictionContext:
    """Everything a prediction run depends on, passed explicitly to each step"""
    draws: Tuple[Draw, ...]
    weights: PredictionWeights = field(default_factory=PredictionWeights)
    rng: RandomSource = field(default_factory=NumpyRandomSource)
    config: EngineConfig = field(default_factory=EngineConfig)

    @classmethod
    def build(cls, draw_history: DrawHistory,
              weights: Optional[PredictionWeights] = None,
              rng: Optional[RandomSource] = None,
              config: Optional[EngineConfig] = None) -> 'PredictionContext':
        return cls(
            draws=tuple(draw_history),
            weights=weights or PredictionWeights(),
            rng=rng or NumpyRandomSource(),
            config=config or EngineConfig(),
        )

    @property
    def is_empty(self) -> bool:
        return len(self.draws) == 0


@dataclass(frozen=True, eq=False)
class AnalysisSnapshot:
    """All statistics computed for one scoring run"""
    all_time_frequency: np.ndarray
    recent_frequency: np.ndarray
    gaps: List[Tuple[int, ...]]
    current_gaps: np.ndarray
    expected_gaps: np.ndarray
    hot_numbers: List[int]
    cold_numbers: List[int]
    due_numbers: List[int]
    avoid_numbers: List[int]
    sum_distribution: SumDistribution
    optimal_sum_range: SumRange
    detected_patterns: List[str]
    position_stats: Dict[str, float]
    consecutive_patterns: List[Dict[str, float]]
    range_distribution: Dict[str, float]
    trend: TrendSummary
    cycles: List[int]
    total_draws: int

    def gap_ratio(self, number: int) -> float:
        expected = self.expected_gaps[number - 1]
        if expected <= 0:
            return 0.0
        return float(self.current_gaps[number - 1] / expected)


def perform_complete_analysis(context: PredictionContext) -> AnalysisSnapshot:
    """
    Run every analyzer over the context's draw history.

    Args:
        context: PredictionContext for this request

    Returns:
        Frozen AnalysisSnapshot
    """
    config = context.config
    draws = context.draws

    aggregator = FrequencyAggregator(config)
    all_time = aggregator.all_time_frequency(draws)
    recent = aggregator.recent_frequency(draws, config.scoring_window)

    gap_analysis = GapAnalyzer(config, aggregator).analyze(draws, all_time)
    pattern_engine = PatternEngine(config, aggregator)
    patterns = pattern_engine.analyze(draws)
    classes = NumberClassifier(config, aggregator).classify(draws)

    all_time.setflags(write=False)
    recent.setflags(write=False)
    gap_analysis.current_gaps.setflags(write=False)
    gap_analysis.expected_gaps.setflags(write=False)

    snapshot = AnalysisSnapshot(
        all_time_frequency=all_time,
        recent_frequency=recent,
        gaps=gap_analysis.gaps,
        current_gaps=gap_analysis.current_gaps,
        expected_gaps=gap_analysis.expected_gaps,
        hot_numbers=classes.hot_numbers,
        cold_numbers=classes.cold_numbers,
        due_numbers=gap_analysis.due_numbers,
        avoid_numbers=classes.avoid_numbers,
        sum_distribution=patterns.sum_distribution,
        optimal_sum_range=pattern_engine.optimal_sum_range(patterns.sum_distribution),
        detected_patterns=patterns.detected_patterns,
        position_stats=patterns.position_stats,
        consecutive_patterns=patterns.consecutive_patterns,
        range_distribution=patterns.range_distribution,
        trend=patterns.trend,
        cycles=patterns.cycles,
        total_draws=len(draws),
    )

    logger.info(f"Analysis complete for {len(draws)} draws "
                f"(hot={len(snapshot.hot_numbers)}, due={len(snapshot.due_numbers)}, "
                f"avoid={len(snapshot.avoid_numbers)}, sum_range={snapshot.optimal_sum_range.min}-"
                f"{snapshot.optimal_sum_range.max})")
    return snapshot
