"""
Lotto Predictor - Confidence & Reasoning
=========================================

Confidence is a bounded heuristic in [10, 95]; reasoning is a fixed-order
list of template sentences describing how the selection relates to the
analysis.
"""

from typing import Dict, List, Sequence

from .analysis import AnalysisSnapshot
from .config import EngineConfig
from .statistical_core import round_half_up

BASE_CONFIDENCE = 50
DUE_BONUS = 8
HOT_BONUS = 5
COLD_BONUS = 3
AVOID_PENALTY = 15
SUM_DEVIATION_PENALTY = 0.5
MIN_CONFIDENCE = 10
MAX_CONFIDENCE = 95


def _members(selected: Sequence[int], group: Sequence[int]) -> List[int]:
    group_set = set(group)
    return [n for n in selected if n in group_set]


def calculate_confidence(snapshot: AnalysisSnapshot, selected: Sequence[int]) -> float:
    confidence = float(BASE_CONFIDENCE)
    confidence += len(_members(selected, snapshot.due_numbers)) * DUE_BONUS
    confidence += len(_members(selected, snapshot.hot_numbers)) * HOT_BONUS
    confidence += len(_members(selected, snapshot.cold_numbers)) * COLD_BONUS
    confidence -= len(_members(selected, snapshot.avoid_numbers)) * AVOID_PENALTY

    deviation = abs(sum(selected) - snapshot.optimal_sum_range.target)
    confidence -= deviation * SUM_DEVIATION_PENALTY

    return float(max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence)))


def tri_band_edges(max_number: int):
    """Upper bounds of the low and mid bands (16 and 33 for a 49-number domain)"""
    return round_half_up(max_number / 3), round_half_up(2 * max_number / 3)


def tri_band_distribution(selected: Sequence[int], max_number: int) -> Dict[str, int]:
    low_max, mid_max = tri_band_edges(max_number)
    ranges = {'low': 0, 'mid': 0, 'high': 0}
    for n in selected:
        if n <= low_max:
            ranges['low'] += 1
        elif n <= mid_max:
            ranges['mid'] += 1
        else:
            ranges['high'] += 1
    return ranges


def _join(numbers: Sequence[int]) -> str:
    return ', '.join(str(n) for n in numbers)


def generate_reasoning(snapshot: AnalysisSnapshot, selected: Sequence[int],
                       config: EngineConfig) -> List[str]:
    reasoning = [
        f"Analysis uses doubled weight for last {config.recency_window} draws "
        f"vs normal weight for older data"
    ]

    due = _members(selected, snapshot.due_numbers)
    if due:
        reasoning.append(f"Selected {len(due)} statistically due numbers: {_join(due)}")

    hot = _members(selected, snapshot.hot_numbers)
    if hot:
        reasoning.append(f"Included {len(hot)} recently hot numbers: {_join(hot)}")

    cold = _members(selected, snapshot.cold_numbers)
    if cold:
        reasoning.append(f"Balanced with {len(cold)} cold numbers for variety: {_join(cold)}")

    total = sum(selected)
    sum_range = snapshot.optimal_sum_range
    placement = "falls within" if sum_range.contains(total) else "falls outside"
    reasoning.append(
        f"Total sum ({total}) {placement} weighted optimal range {sum_range.min}-{sum_range.max}"
    )

    if snapshot.detected_patterns:
        reasoning.append(f"Considered detected patterns: {'; '.join(snapshot.detected_patterns)}")

    low_max, mid_max = tri_band_edges(config.max_number)
    bands = tri_band_distribution(selected, config.max_number)
    reasoning.append(
        f"Number distribution - Low(1-{low_max}): {bands['low']}, "
        f"Mid({low_max + 1}-{mid_max}): {bands['mid']}, "
        f"High({mid_max + 1}-{config.max_number}): {bands['high']}"
    )

    return reasoning
