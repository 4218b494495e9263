"""
Lotto Predictor - Alternative Sets
===================================

Three alternative candidate sets, each drawn uniformly without replacement
from a strategy-specific pool:
- conservative: top candidates with all-time weighted frequency > 10
- aggressive: due numbers followed by cold numbers (first 15)
- balanced: top candidates, unfiltered

A pool with fewer than 6 numbers yields no set.
"""

from typing import Callable, Dict, List, Sequence

from loguru import logger

from .analysis import AnalysisSnapshot, PredictionContext
from .models import PICK_SIZE
from .selection import uniform_sample

CONSERVATIVE_MIN_FREQUENCY = 10
AGGRESSIVE_POOL_SIZE = 15

STRATEGIES = ('conservative', 'aggressive', 'balanced')


def conservative_pool(top_candidates: Sequence[int], snapshot: AnalysisSnapshot) -> List[int]:
    return [n for n in top_candidates
            if snapshot.all_time_frequency[n - 1] > CONSERVATIVE_MIN_FREQUENCY]


def aggressive_pool(top_candidates: Sequence[int], snapshot: AnalysisSnapshot) -> List[int]:
    pool: List[int] = []
    for n in list(snapshot.due_numbers) + list(snapshot.cold_numbers):
        if n not in pool:
            pool.append(n)
    return pool[:AGGRESSIVE_POOL_SIZE]


def balanced_pool(top_candidates: Sequence[int], snapshot: AnalysisSnapshot) -> List[int]:
    return list(top_candidates)


POOL_BUILDERS: Dict[str, Callable[[Sequence[int], AnalysisSnapshot], List[int]]] = {
    'conservative': conservative_pool,
    'aggressive': aggressive_pool,
    'balanced': balanced_pool,
}


def generate_alternative_sets(ranked: Sequence[int], snapshot: AnalysisSnapshot,
                              context: PredictionContext) -> List[List[int]]:
    """
    Generate up to 3 alternative sets.

    Args:
        ranked: Domain numbers in score order
        snapshot: AnalysisSnapshot for this run
        context: PredictionContext supplying the random source

    Returns:
        Sorted 6-number sets in strategy order, skipping strategies whose pool
        is too small
    """
    top_candidates = list(ranked[:context.config.alternative_pool_size])
    alternatives = []

    for strategy in STRATEGIES:
        pool = POOL_BUILDERS[strategy](top_candidates, snapshot)
        if len(pool) < PICK_SIZE:
            logger.debug(f"Alternative '{strategy}' skipped (pool size {len(pool)})")
            continue
        alternatives.append(sorted(uniform_sample(pool, PICK_SIZE, context.rng)))

    return alternatives
