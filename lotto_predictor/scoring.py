"""
Lotto Predictor - Number Scoring Model
=======================================

Fuses the analysis snapshot into one non-negative score per number:

    base = frequency term + recency term + gap term

followed by multiplicative adjustments in fixed order:
avoid x0.3, due x1.5, hot x1.2.

The ``patterns``, ``distribution`` and ``correlation`` weights are accepted
but do not contribute to the score.
"""

from typing import List, Optional

import numpy as np
from loguru import logger

from .analysis import AnalysisSnapshot
from .models import PredictionWeights
from .statistical_core import rank_numbers

AVOID_PENALTY = 0.3
DUE_BOOST = 1.5
HOT_BOOST = 1.2

RECENCY_PER_HIT = 25
GAP_RATIO_SCALE = 50
TERM_CAP = 100


class NumberScoringModel:
    """Weighted per-number scoring"""

    def __init__(self, weights: Optional[PredictionWeights] = None):
        self.weights = (weights or PredictionWeights()).clamped()

    def frequency_terms(self, snapshot: AnalysisSnapshot) -> np.ndarray:
        freq = snapshot.all_time_frequency
        max_freq = freq.max() if freq.size else 0.0
        if max_freq <= 0:
            return np.zeros_like(freq, dtype=float)
        return freq / max_freq * self.weights.frequency * 100

    def recency_terms(self, snapshot: AnalysisSnapshot) -> np.ndarray:
        return np.minimum(snapshot.recent_frequency * RECENCY_PER_HIT, TERM_CAP) * self.weights.recency

    def gap_terms(self, snapshot: AnalysisSnapshot) -> np.ndarray:
        ratios = np.array(
            [snapshot.gap_ratio(num) for num in range(1, len(snapshot.current_gaps) + 1)],
            dtype=float,
        )
        return np.minimum(ratios * GAP_RATIO_SCALE, TERM_CAP) * self.weights.gaps

    def base_scores(self, snapshot: AnalysisSnapshot) -> np.ndarray:
        """Scores before the avoid/due/hot adjustments"""
        return self.frequency_terms(snapshot) + self.recency_terms(snapshot) + self.gap_terms(snapshot)

    def score(self, snapshot: AnalysisSnapshot) -> np.ndarray:
        """
        Calculate the score of every number in the domain.

        Args:
            snapshot: AnalysisSnapshot for this run

        Returns:
            Array indexed by ``number - 1``, every entry >= 0
        """
        scores = self.base_scores(snapshot)

        for num in snapshot.avoid_numbers:
            scores[num - 1] *= AVOID_PENALTY
        for num in snapshot.due_numbers:
            scores[num - 1] *= DUE_BOOST
        for num in snapshot.hot_numbers:
            scores[num - 1] *= HOT_BOOST

        scores = np.maximum(scores, 0.0)
        logger.debug(f"Scored {len(scores)} numbers (max={scores.max() if scores.size else 0:.2f})")
        return scores

    @staticmethod
    def rank(scores: np.ndarray) -> List[int]:
        """Candidate order: score descending, ties broken by the lower number"""
        return rank_numbers(scores)
