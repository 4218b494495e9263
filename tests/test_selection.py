"""
Tests for constrained selection, bonus prediction, alternatives and reasoning
"""

from types import SimpleNamespace

import pytest

from lotto_predictor.alternatives import aggressive_pool, generate_alternative_sets
from lotto_predictor.analysis import PredictionContext, perform_complete_analysis
from lotto_predictor.config import EngineConfig
from lotto_predictor.models import NumpyRandomSource, SumRange
from lotto_predictor.reasoning import (
    calculate_confidence,
    generate_reasoning,
    tri_band_distribution,
    tri_band_edges,
)
from lotto_predictor.scoring import NumberScoringModel
from lotto_predictor.selection import (
    ConstrainedSelector,
    predict_bonus_ball,
    uniform_sample,
    weighted_rank_sample,
)


class FixedRandom:
    """RandomSource that always returns the same value"""

    def __init__(self, value: float):
        self.value = value

    def next_float(self) -> float:
        return self.value


def prepare(draws, rng=None, config=None):
    context = PredictionContext.build(draws, rng=rng or NumpyRandomSource(3), config=config)
    snapshot = perform_complete_analysis(context)
    ranked = NumberScoringModel().rank(NumberScoringModel().score(snapshot))
    return context, snapshot, ranked


class TestSampling:

    def test_weighted_rank_sample_lowest_draw_takes_best(self):
        assert weighted_rank_sample(list(range(1, 50)), 6, 0.8, FixedRandom(0.0)) == [1, 2, 3, 4, 5, 6]

    def test_weighted_rank_sample_distinct(self):
        rng = NumpyRandomSource(11)
        for _ in range(50):
            picked = weighted_rank_sample(list(range(1, 50)), 6, 0.8, rng)
            assert len(set(picked)) == 6

    def test_weighted_rank_sample_favours_top_ranks(self):
        rng = NumpyRandomSource(5)
        candidates = list(range(1, 50))
        top_hits = sum(
            1 for _ in range(200)
            if weighted_rank_sample(candidates, 1, 0.8, rng)[0] <= 10
        )
        # P(first pick within top 10) = 1 - 0.8**10 ~ 0.89
        assert top_hits > 150

    def test_uniform_sample(self):
        picked = uniform_sample(range(1, 10), 6, NumpyRandomSource(1))

        assert len(picked) == 6
        assert len(set(picked)) == 6
        assert all(1 <= n <= 9 for n in picked)

    def test_uniform_sample_small_pool(self):
        assert sorted(uniform_sample([4, 5], 6, NumpyRandomSource(1))) == [4, 5]


class TestConstrainedSelector:

    def test_identical_history_selects_only_valid_sum(self, identical_draws):
        context, snapshot, ranked = prepare(identical_draws)
        selected = ConstrainedSelector(context).select(ranked, snapshot)

        # Sum 21 can only be met by 1-6; the fallback also yields 1-6
        assert sorted(selected) == [1, 2, 3, 4, 5, 6]

    def test_selection_distinct_within_domain(self, rotating_draws):
        context, snapshot, ranked = prepare(rotating_draws)
        selected = ConstrainedSelector(context).select(ranked, snapshot)

        assert len(set(selected)) == 6
        assert all(1 <= n <= 49 for n in selected)

    def test_fallback_to_top_six(self, rotating_draws):
        config = EngineConfig(max_attempts=0)
        context, snapshot, ranked = prepare(rotating_draws, config=config)

        assert ConstrainedSelector(context).select(ranked, snapshot) == ranked[:6]

    def test_empty_history_uniform_fallback(self):
        context, snapshot, ranked = prepare([])
        selected = ConstrainedSelector(context).select(ranked, snapshot)

        assert len(set(selected)) == 6
        assert all(1 <= n <= 49 for n in selected)


class TestBonusBall:

    def test_bonus_from_top_candidates(self, identical_draws):
        context, _, _ = prepare(identical_draws)
        # 7 leads, ties among the rest resolve to the lowest numbers
        assert predict_bonus_ball(context) in [7, 1, 2, 3, 4]

    def test_bonus_lowest_draw_takes_most_frequent(self, identical_draws):
        context, _, _ = prepare(identical_draws, rng=FixedRandom(0.0))
        assert predict_bonus_ball(context) == 7

    def test_bonus_empty_history(self):
        context, _, _ = prepare([])
        assert 1 <= predict_bonus_ball(context) <= 49


class TestAlternativeSets:

    def test_identical_history(self, identical_draws):
        context, snapshot, ranked = prepare(identical_draws)
        alternatives = generate_alternative_sets(ranked, snapshot, context)

        assert len(alternatives) == 3
        conservative, aggressive, balanced = alternatives
        assert conservative == [1, 2, 3, 4, 5, 6]
        assert set(aggressive) <= set(range(7, 22))
        assert set(balanced) <= set(ranked[:20])
        for numbers in alternatives:
            assert numbers == sorted(numbers)
            assert len(set(numbers)) == 6

    def test_small_pools_are_skipped(self):
        context, snapshot, ranked = prepare([])
        alternatives = generate_alternative_sets(ranked, snapshot, context)

        # No number has frequency > 10, so the conservative pool is empty
        assert len(alternatives) == 2

    def test_aggressive_pool_deduplicates(self):
        snapshot = SimpleNamespace(due_numbers=[5, 9], cold_numbers=[1, 5, 7])
        assert aggressive_pool([], snapshot) == [5, 9, 1, 7]


def fake_snapshot(due=(), hot=(), cold=(), avoid=(), target=21, sum_range=(15, 30), patterns=()):
    return SimpleNamespace(
        due_numbers=list(due),
        hot_numbers=list(hot),
        cold_numbers=list(cold),
        avoid_numbers=list(avoid),
        optimal_sum_range=SumRange(min=sum_range[0], max=sum_range[1], target=target),
        detected_patterns=list(patterns),
    )


class TestConfidence:

    def test_bonuses(self):
        snapshot = fake_snapshot(due=[1], hot=[2, 3], cold=[4])
        assert calculate_confidence(snapshot, [1, 2, 3, 4, 5, 6]) == pytest.approx(71.0)

    def test_penalties(self):
        snapshot = fake_snapshot(due=[1], hot=[2, 3], cold=[4], avoid=[5, 6], target=41)
        assert calculate_confidence(snapshot, [1, 2, 3, 4, 5, 6]) == pytest.approx(31.0)

    def test_clamped_low(self):
        snapshot = fake_snapshot(avoid=[1, 2, 3, 4, 5, 6])
        assert calculate_confidence(snapshot, [1, 2, 3, 4, 5, 6]) == 10

    def test_clamped_high(self):
        numbers = [1, 2, 3, 4, 5, 6]
        snapshot = fake_snapshot(due=numbers, hot=numbers, cold=numbers)
        assert calculate_confidence(snapshot, numbers) == 95


class TestReasoning:

    def test_tri_band_edges(self):
        assert tri_band_edges(49) == (16, 33)

    def test_tri_band_distribution(self):
        assert tri_band_distribution([1, 16, 17, 33, 34, 49], 49) == {'low': 2, 'mid': 2, 'high': 2}

    def test_fixed_order(self, config):
        snapshot = fake_snapshot(due=[1], hot=[2], cold=[40], patterns=["Recent bias toward low numbers"])
        reasoning = generate_reasoning(snapshot, [1, 2, 3, 4, 5, 40], config)

        assert reasoning == [
            "Analysis uses doubled weight for last 100 draws vs normal weight for older data",
            "Selected 1 statistically due numbers: 1",
            "Included 1 recently hot numbers: 2",
            "Balanced with 1 cold numbers for variety: 40",
            "Total sum (55) falls outside weighted optimal range 15-30",
            "Considered detected patterns: Recent bias toward low numbers",
            "Number distribution - Low(1-16): 5, Mid(17-33): 0, High(34-49): 1",
        ]

    def test_optional_sentences_omitted(self, config):
        reasoning = generate_reasoning(fake_snapshot(), [1, 2, 3, 4, 5, 6], config)

        assert len(reasoning) == 3
        assert reasoning[1] == "Total sum (21) falls within weighted optimal range 15-30"
