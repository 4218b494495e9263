"""
Lotto Predictor - Prediction Engine
====================================

Entry point that runs the full pipeline:

    history -> analysis snapshot -> scores -> selection -> result

Also defines the contract shared by pluggable predictors so that alternative
strategies (sequence models, calendar weighting, Markov chains) can feed the
same downstream reasoning and display layer.
"""

from dataclasses import dataclass
from typing import List, Mapping, Optional, Union

from loguru import logger

from .alternatives import generate_alternative_sets
from .analysis import PredictionContext, perform_complete_analysis
from .config import EngineConfig
from .models import (
    PICK_SIZE,
    BonusBall,
    DrawHistory,
    MainNumbers,
    NumpyRandomSource,
    PredictionResult,
    PredictionWeights,
    RandomSource,
    StatisticalBasis,
)
from .reasoning import calculate_confidence, generate_reasoning
from .scoring import NumberScoringModel
from .selection import ConstrainedSelector, predict_bonus_ball

WeightsInput = Union[PredictionWeights, Mapping[str, float], None]


def resolve_weights(weights: WeightsInput, defaults: Optional[PredictionWeights] = None) -> PredictionWeights:
    """Merge a partial override (mapping) or a full PredictionWeights over the defaults."""
    base = defaults or PredictionWeights()
    if weights is None:
        return base
    if isinstance(weights, PredictionWeights):
        return weights.clamped()
    return base.merged(weights)


class LottoPredictionEngine:
    """
    Weighted statistical prediction engine.

    Usage:
        engine = LottoPredictionEngine(draws, {'gaps': 0.3}, rng=NumpyRandomSource(42))
        result = engine.generate_prediction()
    """

    def __init__(self, draw_history: DrawHistory, custom_weights: WeightsInput = None,
                 rng: Optional[RandomSource] = None, config: Optional[EngineConfig] = None):
        config = (config or EngineConfig()).validate()
        self.context = PredictionContext.build(
            draw_history,
            weights=resolve_weights(custom_weights),
            rng=rng or NumpyRandomSource(),
            config=config,
        )
        logger.info(f"LottoPredictionEngine initialized with {len(self.context.draws)} draws "
                    f"(max_number={config.max_number})")

    def generate_prediction(self) -> PredictionResult:
        context = self.context
        if context.is_empty:
            logger.warning("Empty draw history, prediction will use uniform fallbacks")

        snapshot = perform_complete_analysis(context)

        scoring = NumberScoringModel(context.weights)
        scores = scoring.score(snapshot)
        ranked = scoring.rank(scores)

        selected = sorted(ConstrainedSelector(context).select(ranked, snapshot))
        bonus = predict_bonus_ball(context)
        confidence = calculate_confidence(snapshot, selected)
        reasoning = generate_reasoning(snapshot, selected, context.config)
        alternatives = generate_alternative_sets(ranked, snapshot, context)

        result = PredictionResult(
            suggested_numbers=selected,
            bonus_ball=bonus,
            confidence=confidence,
            reasoning=reasoning,
            statistical_basis=StatisticalBasis(
                hot_numbers=list(snapshot.hot_numbers),
                cold_numbers=list(snapshot.cold_numbers),
                due_numbers=list(snapshot.due_numbers),
                avoid_numbers=list(snapshot.avoid_numbers),
                sum_range=snapshot.optimal_sum_range,
                patterns=list(snapshot.detected_patterns),
            ),
            alternative_sets=alternatives,
        )

        logger.info(f"Prediction generated: {selected} + {bonus} "
                    f"(confidence={confidence:.1f}, alternatives={len(alternatives)})")
        return result


def generate_prediction(draw_history: DrawHistory, weights: WeightsInput = None,
                        rng: Optional[RandomSource] = None,
                        config: Optional[EngineConfig] = None) -> PredictionResult:
    """
    Generate a prediction for the next draw.

    Args:
        draw_history: Draws ordered oldest-first (may be empty)
        weights: Partial mapping or full PredictionWeights
        rng: Injectable random source; pass a seeded one for reproducible output
        config: Engine parameters (defaults to a 49-number domain)

    Returns:
        PredictionResult
    """
    return LottoPredictionEngine(draw_history, weights, rng=rng, config=config).generate_prediction()


@dataclass(frozen=True)
class PredictedTicket:
    """Output contract for any pluggable predictor"""
    numbers: MainNumbers
    bonus: Optional[BonusBall] = None
    strategy: str = ''


class BasePredictor:
    """Base class for interchangeable prediction strategies"""

    def __init__(self, name: str, config: Optional[EngineConfig] = None):
        self.name = name
        self.config = config or EngineConfig()

    def predict(self, draw_history: DrawHistory) -> PredictedTicket:
        """Predict a ticket. Must be implemented by subclasses"""
        raise NotImplementedError(f"Predictor {self.name} must implement predict()")

    def validate_ticket(self, numbers: List[int], bonus: Optional[int] = None) -> bool:
        """Validate ticket constraints"""
        if len(numbers) != PICK_SIZE:
            return False
        if len(set(numbers)) != PICK_SIZE:
            return False
        if not all(1 <= n <= self.config.max_number for n in numbers):
            return False
        if bonus is not None and not 1 <= bonus <= self.config.max_number:
            return False
        return True


class StatisticalPredictor(BasePredictor):
    """Adapter exposing LottoPredictionEngine through the BasePredictor contract"""

    def __init__(self, weights: WeightsInput = None, rng: Optional[RandomSource] = None,
                 config: Optional[EngineConfig] = None):
        super().__init__("weighted_statistical", config=config)
        self.weights = weights
        self.rng = rng or NumpyRandomSource()
        self.last_result: Optional[PredictionResult] = None

    def predict(self, draw_history: DrawHistory) -> PredictedTicket:
        self.last_result = generate_prediction(draw_history, self.weights, rng=self.rng, config=self.config)
        ticket = PredictedTicket(
            numbers=tuple(self.last_result.suggested_numbers),
            bonus=self.last_result.bonus_ball,
            strategy=self.name,
        )
        if not self.validate_ticket(list(ticket.numbers), ticket.bonus):
            logger.error(f"{self.name}: engine produced an invalid ticket {ticket}")
        return ticket
