"""
Lotto Predictor - HTTP API
===========================

FastAPI router exposing the prediction engine and the history statistics:
- POST /api/v1/predictions
- POST /api/v1/analytics/history
"""

from dataclasses import asdict
from typing import Dict, List, Optional

from fastapi import APIRouter, FastAPI, HTTPException
from loguru import logger
from pydantic import BaseModel, Field

from . import __version__
from .config import load_default_weights, load_engine_config
from .history_stats import (
    analyze_number_details,
    analyze_pair_details,
    calculate_advanced_stats,
    calculate_bonus_frequency,
    calculate_frequency,
    frequency_pool_pick,
    get_hot_and_cold_detailed,
)
from .models import Draw, InvalidDrawError, NumpyRandomSource
from .prediction_engine import generate_prediction, resolve_weights


class DrawPayload(BaseModel):
    draw_date: str = Field(..., description="Draw date label, e.g. 25/12/2024")
    numbers: List[int] = Field(..., description="The 6 main numbers")
    bonus: int = Field(..., description="Bonus ball")


class WeightsPayload(BaseModel):
    frequency: Optional[float] = Field(None, ge=0)
    recency: Optional[float] = Field(None, ge=0)
    gaps: Optional[float] = Field(None, ge=0)
    patterns: Optional[float] = Field(None, ge=0)
    distribution: Optional[float] = Field(None, ge=0)
    correlation: Optional[float] = Field(None, ge=0)


class PredictionRequest(BaseModel):
    draws: List[DrawPayload] = Field(..., description="Draw history, oldest first")
    weights: Optional[WeightsPayload] = None
    seed: Optional[int] = Field(None, description="Seed for reproducible output")


class SumRangeModel(BaseModel):
    min: int
    max: int
    target: int


class StatisticalBasisModel(BaseModel):
    hot_numbers: List[int]
    cold_numbers: List[int]
    due_numbers: List[int]
    avoid_numbers: List[int]
    sum_range: SumRangeModel
    patterns: List[str]


class PredictionResponse(BaseModel):
    suggested_numbers: List[int]
    bonus_ball: int
    confidence: float
    reasoning: List[str]
    statistical_basis: StatisticalBasisModel
    alternative_sets: List[List[int]]


class HistoryRequest(BaseModel):
    draws: List[DrawPayload]
    top_pairs: int = Field(10, ge=0, le=100)
    hot_cold_count: int = Field(10, ge=0, le=100, description="Size of the hot and cold lists")
    seed: Optional[int] = Field(None, description="Seed for the frequency-pool quick pick")


class PairModel(BaseModel):
    pair: str
    frequency: int
    last_seen: List[str]


class NumberDetailModel(BaseModel):
    num: int
    frequency: int
    last_seen: List[str]


class HistoryResponse(BaseModel):
    total_draws: int
    frequency: Dict[int, int]
    bonus_frequency: Dict[int, int]
    sum_stats: Dict[str, float]
    top_pairs: List[PairModel]
    hot_numbers: List[NumberDetailModel]
    cold_numbers: List[NumberDetailModel]
    quick_pick: List[int]


prediction_router = APIRouter(prefix="/api/v1", tags=["Predictions"])


def _to_draws(payloads: List[DrawPayload], max_number: int) -> List[Draw]:
    try:
        return [
            Draw(draw_date=p.draw_date, numbers=tuple(p.numbers), bonus=p.bonus).validate(max_number)
            for p in payloads
        ]
    except InvalidDrawError as e:
        raise HTTPException(status_code=400, detail=str(e))


@prediction_router.post(
    "/predictions",
    response_model=PredictionResponse,
    summary="Generate a weighted statistical prediction",
)
def create_prediction(request: PredictionRequest) -> PredictionResponse:
    config = load_engine_config()
    draws = _to_draws(request.draws, config.max_number)

    overrides = request.weights.model_dump(exclude_none=True) if request.weights else None
    weights = resolve_weights(overrides, defaults=load_default_weights())

    logger.info(f"Prediction requested for {len(draws)} draws (seed={request.seed})")
    result = generate_prediction(draws, weights, rng=NumpyRandomSource(request.seed), config=config)
    return PredictionResponse(**result.to_dict())


@prediction_router.post(
    "/analytics/history",
    response_model=HistoryResponse,
    summary="Descriptive statistics of a draw history",
)
def history_analytics(request: HistoryRequest) -> HistoryResponse:
    config = load_engine_config()
    draws = _to_draws(request.draws, config.max_number)

    sum_stats = calculate_advanced_stats(draws)
    pairs = analyze_pair_details(draws)[:request.top_pairs]
    hot, cold = get_hot_and_cold_detailed(analyze_number_details(draws), request.hot_cold_count)
    quick_pick = frequency_pool_pick(draws, NumpyRandomSource(request.seed), config=config)

    return HistoryResponse(
        total_draws=len(draws),
        frequency=calculate_frequency(draws),
        bonus_frequency=calculate_bonus_frequency(draws),
        sum_stats=asdict(sum_stats),
        top_pairs=[PairModel(pair=p.label, frequency=p.frequency, last_seen=p.last_seen) for p in pairs],
        hot_numbers=[NumberDetailModel(**asdict(d)) for d in hot],
        cold_numbers=[NumberDetailModel(**asdict(d)) for d in cold],
        quick_pick=quick_pick,
    )


def create_app() -> FastAPI:
    app = FastAPI(title="Lotto Predictor", version=__version__)
    app.include_router(prediction_router)

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
