"""
Lotto Predictor - Weighted Statistical Lottery Prediction Engine
=================================================================

Turns a draw history into a ranked, statistically justified 6-number
recommendation:
- Recency-weighted frequency
- Gap/due theory
- Pattern and sum distribution analysis
- Weighted number scoring
- Sum-constrained selection with alternatives, confidence and reasoning

Draw histories are ordered oldest-first.
"""

__version__ = "1.0.0"

from .models import (
    Draw,
    DrawHistory,
    InvalidDrawError,
    NumpyRandomSource,
    PredictionResult,
    PredictionWeights,
    RandomSource,
)
from .config import EngineConfig, load_default_weights, load_engine_config
from .analysis import AnalysisSnapshot, PredictionContext, perform_complete_analysis
from .scoring import NumberScoringModel
from .prediction_engine import (
    BasePredictor,
    LottoPredictionEngine,
    PredictedTicket,
    StatisticalPredictor,
    generate_prediction,
)

__all__ = [
    # Data model
    'Draw',
    'DrawHistory',
    'InvalidDrawError',
    'NumpyRandomSource',
    'PredictionResult',
    'PredictionWeights',
    'RandomSource',

    # Configuration
    'EngineConfig',
    'load_default_weights',
    'load_engine_config',

    # Engine
    'AnalysisSnapshot',
    'PredictionContext',
    'perform_complete_analysis',
    'NumberScoringModel',
    'LottoPredictionEngine',
    'generate_prediction',

    # Pluggable predictors
    'BasePredictor',
    'PredictedTicket',
    'StatisticalPredictor',
]
