"""
Tests for the statistical core
===============================

Tests for:
- FrequencyAggregator (recency weighting, windows, ordering)
- GapAnalyzer (gap sequences, expected gaps, due numbers)
- PatternEngine (sums, positions, consecutives, ranges, trend, cycles)
- NumberClassifier (hot / cold / avoid)
"""

import math
import random

import numpy as np
import pytest

from lotto_predictor.config import EngineConfig
from lotto_predictor.statistical_core import (
    FrequencyAggregator,
    GapAnalyzer,
    NumberClassifier,
    PatternEngine,
    rank_numbers,
    round_half_up,
)


class TestFrequencyAggregator:
    """Tests for FrequencyAggregator"""

    def test_identical_history_weights_recent_draws_double(self, config, identical_draws):
        freq = FrequencyAggregator(config).all_time_frequency(identical_draws)

        # 100 recent draws at weight 2 plus 50 older draws at weight 1
        assert freq.shape == (49,)
        for num in range(1, 7):
            assert freq[num - 1] == 250
        assert freq[48] == 0

    def test_recency_weights_short_history(self, config):
        weights = FrequencyAggregator(config).recency_weights(5)
        assert weights.tolist() == [2.0] * 5

    def test_recency_weights_empty(self, config):
        assert FrequencyAggregator(config).recency_weights(0).size == 0

    def test_recent_frequency_uses_tail(self, config, draw_factory):
        draws = [draw_factory(0, [1, 2, 3, 4, 5, 6], 7),
                 draw_factory(1, [7, 8, 9, 10, 11, 12], 7)]
        freq = FrequencyAggregator(config).recent_frequency(draws, 1)

        assert freq[6] == 1
        assert freq[0] == 0

    def test_recent_frequency_window_larger_than_history(self, config, identical_draws):
        freq = FrequencyAggregator(config).recent_frequency(identical_draws[:5], 20)
        assert freq[0] == 5

    def test_recent_frequency_zero_window(self, config, identical_draws):
        freq = FrequencyAggregator(config).recent_frequency(identical_draws, 0)
        assert not freq.any()

    def test_permutation_invariant_inside_window(self, config, rotating_draws):
        draws = rotating_draws[:80]
        shuffled = list(draws)
        random.Random(1).shuffle(shuffled)

        aggregator = FrequencyAggregator(config)
        assert np.array_equal(aggregator.all_time_frequency(draws),
                              aggregator.all_time_frequency(shuffled))

    def test_reversing_history_changes_weighting(self, config, draw_factory):
        # Oldest-first: the last 100 draws are the recent window
        draws = ([draw_factory(i, [1, 2, 3, 4, 5, 6], 1) for i in range(50)] +
                 [draw_factory(50 + i, [7, 8, 9, 10, 11, 12], 1) for i in range(100)])
        aggregator = FrequencyAggregator(config)

        forward = aggregator.all_time_frequency(draws)
        backward = aggregator.all_time_frequency(list(reversed(draws)))

        assert forward[0] == 50 and forward[6] == 200
        assert backward[0] == 100 and backward[6] == 150

    def test_bonus_frequency(self, config, identical_draws):
        freq = FrequencyAggregator(config).bonus_frequency(identical_draws)
        assert freq[6] == 250
        assert freq.sum() == 250

    def test_total_weighted_draws(self, config):
        aggregator = FrequencyAggregator(config)
        assert aggregator.total_weighted_draws(0) == 0
        assert aggregator.total_weighted_draws(40) == 80
        assert aggregator.total_weighted_draws(100) == 200
        assert aggregator.total_weighted_draws(150) == 250


class TestGapAnalyzer:
    """Tests for GapAnalyzer"""

    def test_gap_sequence_duplicates_recent_gaps(self, config, due_nine_draws):
        analysis = GapAnalyzer(config).analyze(due_nine_draws)

        # Appearances at 4, 9, 14, 19 in a 40-draw history, all inside the window
        assert analysis.gaps[8] == (5, 5, 5, 5, 5, 5, 20, 20)
        assert analysis.current_gaps[8] == 20

    def test_gap_outside_window_not_duplicated(self, draw_factory):
        config = EngineConfig(recency_window=2)
        draws = [
            draw_factory(0, [1, 2, 3, 4, 5, 6], 1),
            draw_factory(1, [1, 8, 9, 10, 11, 12], 1),
            draw_factory(2, [13, 14, 15, 16, 17, 18], 1),
            draw_factory(3, [19, 20, 21, 22, 23, 24], 1),
        ]
        analysis = GapAnalyzer(config).analyze(draws)

        # Gap 1 closed at index 1 (outside window), current gap 2 from index 1
        assert analysis.gaps[0] == (1, 2)

    def test_gap_copies_follow_recency_weight(self, due_nine_draws):
        config = EngineConfig(recency_weight=3)
        analysis = GapAnalyzer(config).analyze(due_nine_draws)

        assert analysis.gaps[8] == (5,) * 9 + (20, 20, 20)
        assert analysis.total_weighted_draws == 120
        # Weighted frequency of 9 is 4 * 3, so the expected gap is unchanged
        assert analysis.expected_gaps[8] == pytest.approx(10.0)
        assert analysis.due_numbers == [9]

    @pytest.mark.parametrize("weight", [0, -1, 1.5, 2.5])
    def test_fractional_or_non_positive_recency_weight_rejected(self, weight):
        with pytest.raises(ValueError, match="recency_weight"):
            GapAnalyzer(EngineConfig(recency_weight=weight))

    def test_expected_gaps(self, config, due_nine_draws):
        analysis = GapAnalyzer(config).analyze(due_nine_draws)

        assert analysis.total_weighted_draws == 80
        assert analysis.expected_gaps[8] == pytest.approx(10.0)
        # Never-seen numbers fall back to the total weighted draw count
        assert analysis.expected_gaps[48] == pytest.approx(80.0)

    def test_due_numbers(self, config, due_nine_draws):
        analysis = GapAnalyzer(config).analyze(due_nine_draws)
        assert analysis.due_numbers == [9]

    def test_never_seen_number_is_not_due(self, config, identical_draws):
        analysis = GapAnalyzer(config).analyze(identical_draws)

        assert analysis.current_gaps[48] == 0
        assert analysis.gaps[48] == ()
        assert 49 not in analysis.due_numbers

    def test_due_numbers_ranked_and_capped(self, draw_factory):
        # 3 seen 4 times, 1 seen 3 times, 2 seen twice, all at the start of a
        # 40-draw history; gap ratios are 3.6, 2.775 and 1.9
        draws = [
            draw_factory(0, [1, 2, 3, 20, 21, 22], 1),
            draw_factory(1, [1, 2, 3, 23, 24, 25], 1),
            draw_factory(2, [1, 3, 26, 27, 28, 29], 1),
            draw_factory(3, [3, 30, 31, 32, 33, 34], 1),
        ]
        draws += [draw_factory(i, [10, 11, 12, 13, 14, 15], 1) for i in range(4, 40)]

        assert GapAnalyzer(EngineConfig()).analyze(draws).due_numbers == [3, 1, 2]
        assert GapAnalyzer(EngineConfig(due_count=2)).analyze(draws).due_numbers == [3, 1]

    def test_empty_history(self, config):
        analysis = GapAnalyzer(config).analyze([])

        assert analysis.current_gaps.shape == (49,)
        assert not analysis.current_gaps.any()
        assert analysis.due_numbers == []
        assert analysis.total_weighted_draws == 0


class TestPatternEngine:
    """Tests for PatternEngine"""

    def test_weighted_sum_distribution(self, draw_factory):
        config = EngineConfig(recency_window=1)
        draws = [draw_factory(0, [1, 2, 3, 4, 5, 6], 1),
                 draw_factory(1, [10, 11, 12, 13, 14, 15], 1)]
        engine = PatternEngine(config)

        # Recent sum repeated: [21, 75, 75]
        assert engine.weighted_sums(draws) == [21, 75, 75]
        dist = engine.analyze_sum_distribution(draws)
        assert dist.mean == pytest.approx(57.0)
        assert dist.std_dev == pytest.approx(math.sqrt(648))
        assert dist.minimum == 21
        assert dist.maximum == 75

        sum_range = engine.optimal_sum_range(dist)
        assert (sum_range.min, sum_range.max, sum_range.target) == (32, 82, 57)

    def test_weighted_sums_match_total_weighted_draws(self, identical_draws):
        config = EngineConfig(recency_weight=3)
        draws = identical_draws[:10]

        sums = PatternEngine(config).weighted_sums(draws)

        assert len(sums) == FrequencyAggregator(config).total_weighted_draws(len(draws)) == 30

    def test_sum_distribution_empty(self, config):
        dist = PatternEngine(config).analyze_sum_distribution([])
        assert (dist.mean, dist.std_dev, dist.minimum, dist.maximum) == (0.0, 0.0, 0, 0)

    def test_position_patterns(self, config, identical_draws):
        stats = PatternEngine(config).analyze_position_patterns(identical_draws)

        assert stats['B1_mean'] == 1
        assert stats['B6_mean'] == 6
        assert stats['B3_variance'] == 0

    def test_consecutive_patterns(self, config, identical_draws):
        histogram = PatternEngine(config).analyze_consecutive_patterns(identical_draws)

        assert [p['count'] for p in histogram] == [0, 1, 2, 3, 4, 5]
        assert histogram[5]['frequency'] == 1.0
        assert histogram[0]['frequency'] == 0.0

    def test_count_consecutive_sorts_first(self):
        assert PatternEngine.count_consecutive([5, 3, 4, 20, 22, 40]) == 2

    def test_range_distribution(self, config, identical_draws):
        ranges = PatternEngine(config).analyze_range_distribution(identical_draws)

        assert list(ranges) == ['1-10', '11-20', '21-30', '31-40', '41-49']
        assert ranges['1-10'] == 6 * 250
        assert ranges['41-49'] == 0

    def test_trends(self, config, draw_factory):
        draws = ([draw_factory(i, [1, 2, 3, 4, 5, 6], 1) for i in range(10)] +
                 [draw_factory(10 + i, [10, 11, 12, 13, 14, 15], 1) for i in range(10)])
        trend = PatternEngine(config).analyze_trends(draws)

        assert trend.recent_trend == pytest.approx(75 - 21)
        assert trend.volatility == pytest.approx(0.0)

    def test_trends_with_fewer_than_ten_draws(self, config, rotating_draws):
        trend = PatternEngine(config).analyze_trends(rotating_draws[:5])

        assert trend.recent_trend == 0.0
        assert not math.isnan(trend.volatility)

    def test_trends_empty_history(self, config):
        trend = PatternEngine(config).analyze_trends([])
        assert (trend.recent_trend, trend.volatility) == (0.0, 0.0)

    def test_detect_cycles(self, config, cycle_draws):
        assert PatternEngine(config).detect_cycles(cycle_draws) == [3, 6, 9]

    def test_detect_cycles_short_history(self, config, identical_draws):
        # Only lengths with at least one comparable pair qualify
        assert PatternEngine(config).detect_cycles(identical_draws[:5]) == [3, 4]

    def test_detected_patterns(self, config, identical_draws):
        patterns = PatternEngine(config).detect_patterns(identical_draws)
        assert patterns == [
            "Recent bias toward low numbers",
            "Higher than normal consecutive number frequency",
        ]

    def test_detected_high_bias(self, config, draw_factory):
        draws = [draw_factory(i, [30, 32, 34, 36, 38, 40], 1) for i in range(10)]
        assert PatternEngine(config).detect_patterns(draws) == ["Recent bias toward high numbers"]

    def test_analyze_empty(self, config):
        analysis = PatternEngine(config).analyze([])

        assert analysis.cycles == []
        assert analysis.detected_patterns == []
        assert all(p['frequency'] == 0.0 for p in analysis.consecutive_patterns)


class TestNumberClassifier:
    """Tests for NumberClassifier"""

    def test_identical_history(self, config, identical_draws):
        classes = NumberClassifier(config).classify(identical_draws)

        assert classes.hot_numbers == [1, 2, 3, 4, 5, 6]
        assert classes.avoid_numbers == [1, 2, 3, 4, 5, 6]
        # First 15 absent numbers in ascending order
        assert classes.cold_numbers == list(range(7, 22))

    def test_cold_numbers_cap(self, identical_draws):
        config = EngineConfig(cold_count=50)
        classes = NumberClassifier(config).classify(identical_draws)
        assert 49 in classes.cold_numbers

    def test_hot_numbers_capped_and_ranked(self, config, rotating_draws):
        hot = NumberClassifier(config).identify_hot_numbers(rotating_draws)

        assert len(hot) == 12
        freq = FrequencyAggregator(config).recent_frequency(rotating_draws, 15)
        counts = [freq[n - 1] for n in hot]
        assert counts == sorted(counts, reverse=True)

    def test_avoid_requires_three_hits(self, config, draw_factory):
        draws = [draw_factory(i, [1, 2, 3, 4, 5, 6] if i < 3 else [10 + i, 20 + i, 30, 31, 32, 33], 1)
                 for i in range(10)]
        avoid = NumberClassifier(config).identify_avoid_numbers(draws)

        assert avoid[:4] == [30, 31, 32, 33]
        assert set(avoid) == {1, 2, 3, 4, 30, 31, 32, 33}

    def test_empty_history(self, config):
        classes = NumberClassifier(config).classify([])

        assert classes.hot_numbers == []
        assert classes.avoid_numbers == []
        assert classes.cold_numbers == list(range(1, 16))


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(31.544) == 32
    assert round_half_up(-0.5) == 0


def test_rank_numbers_breaks_ties_by_number():
    assert rank_numbers(np.array([1.0, 3.0, 3.0, 0.0])) == [2, 3, 1, 4]
