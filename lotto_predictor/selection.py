"""
Lotto Predictor - Constrained Selection
========================================

Picks 6 distinct numbers biased toward high score whose sum lies in the
optimal sum range, plus an independently chosen bonus ball.

Sampling weight for the i-th remaining candidate (by rank, not by score) is
``rank_decay ** i``. After ``max_attempts`` unsuccessful attempts the top 6
ranked numbers are returned regardless of the sum constraint.
"""

from typing import List, Sequence

from loguru import logger

from .analysis import AnalysisSnapshot, PredictionContext
from .models import PICK_SIZE, RandomSource, random_index
from .statistical_core import FrequencyAggregator, rank_numbers

BONUS_TOP_RANKED = 10
BONUS_PICK_FROM = 5


def uniform_sample(pool: Sequence[int], count: int, rng: RandomSource) -> List[int]:
    """Uniform sampling without replacement from ``pool``."""
    remaining = list(pool)
    selected = []
    while len(selected) < count and remaining:
        selected.append(remaining.pop(random_index(rng, len(remaining))))
    return selected


def weighted_rank_sample(candidates: Sequence[int], count: int, decay: float,
                         rng: RandomSource) -> List[int]:
    """
    Draw ``count`` numbers sequentially without replacement, each time
    weighting the remaining candidates by ``decay ** position``.
    """
    remaining = list(candidates)
    selected = []

    for _ in range(min(count, len(remaining))):
        weights = [decay ** i for i in range(len(remaining))]
        threshold = rng.next_float() * sum(weights)

        chosen = len(remaining) - 1
        for j, weight in enumerate(weights):
            threshold -= weight
            if threshold <= 0:
                chosen = j
                break

        selected.append(remaining.pop(chosen))

    return selected


class ConstrainedSelector:
    """Sum-constrained weighted selection with bounded retries"""

    def __init__(self, context: PredictionContext):
        self.context = context
        self.config = context.config

    def select(self, ranked: Sequence[int], snapshot: AnalysisSnapshot) -> List[int]:
        """
        Select 6 numbers from the ranked candidate order.

        Args:
            ranked: All domain numbers, best score first
            snapshot: AnalysisSnapshot providing the optimal sum range

        Returns:
            6 distinct numbers (unsorted)
        """
        if self.context.is_empty or len(ranked) < PICK_SIZE:
            logger.warning("No scored candidates available, using uniform random selection")
            return uniform_sample(self.config.domain, PICK_SIZE, self.context.rng)

        sum_range = snapshot.optimal_sum_range
        for attempt in range(1, self.config.max_attempts + 1):
            selected = weighted_rank_sample(ranked, PICK_SIZE, self.config.rank_decay, self.context.rng)
            if sum_range.contains(sum(selected)):
                logger.debug(f"Selection satisfied sum range {sum_range.min}-{sum_range.max} "
                             f"after {attempt} attempts")
                return selected

        logger.warning(f"Sum range {sum_range.min}-{sum_range.max} not met after "
                       f"{self.config.max_attempts} attempts, using top {PICK_SIZE} by score")
        return list(ranked[:PICK_SIZE])


def predict_bonus_ball(context: PredictionContext) -> int:
    """
    Choose the bonus ball from the recency-weighted bonus frequency.

    The bonus candidates are ranked by frequency relative to the maximum; the
    result is picked uniformly from the first 5 of the top 10.
    """
    if context.is_empty:
        return context.config.domain[random_index(context.rng, context.config.max_number)]

    freq = FrequencyAggregator(context.config).bonus_frequency(context.draws)
    max_freq = freq.max()
    bonus_scores = freq / max_freq * 100 if max_freq > 0 else freq

    top_bonus = rank_numbers(bonus_scores)[:BONUS_TOP_RANKED]
    bonus = top_bonus[random_index(context.rng, min(len(top_bonus), BONUS_PICK_FROM))]
    logger.debug(f"Bonus ball {bonus} chosen from {top_bonus[:BONUS_PICK_FROM]}")
    return bonus
