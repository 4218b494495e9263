"""
Lotto Predictor - Data Model
=============================

Immutable records shared by the engine and by any pluggable predictor:
- Draw / DrawHistory: one historical result and an ordered sequence of them
- PredictionWeights: scoring weight vector with partial overrides
- RandomSource: injectable uniform random source
- PredictionResult: externally visible output

Draw histories are ordered oldest-first; the last element is the most recent draw.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

import numpy as np
from loguru import logger

PICK_SIZE = 6

MainNumbers = Tuple[int, ...]
BonusBall = int


class InvalidDrawError(ValueError):
    """Raised when a draw record falls outside the configured number domain"""


@dataclass(frozen=True)
class Draw:
    """A single historical result: date label, 6 main numbers and a bonus ball"""
    draw_date: str
    numbers: MainNumbers
    bonus: BonusBall

    @property
    def total(self) -> int:
        return sum(self.numbers)

    def validate(self, max_number: int) -> 'Draw':
        """
        Check the record against the domain ``[1, max_number]``.

        Raises:
            InvalidDrawError: wrong count, duplicates or out-of-range values
        """
        if len(self.numbers) != PICK_SIZE:
            raise InvalidDrawError(
                f"Draw {self.draw_date}: expected {PICK_SIZE} main numbers, got {len(self.numbers)}"
            )
        if len(set(self.numbers)) != PICK_SIZE:
            raise InvalidDrawError(f"Draw {self.draw_date}: duplicate main numbers {self.numbers}")
        for num in (*self.numbers, self.bonus):
            if not 1 <= num <= max_number:
                raise InvalidDrawError(
                    f"Draw {self.draw_date}: number {num} outside 1-{max_number}"
                )
        return self


DrawHistory = Sequence[Draw]


@dataclass(frozen=True)
class PredictionWeights:
    """
    Weight vector for the number scoring model.

    ``patterns``, ``distribution`` and ``correlation`` are carried for
    extension and do not change the score.
    """
    frequency: float = 0.25
    recency: float = 0.20
    gaps: float = 0.20
    patterns: float = 0.15
    distribution: float = 0.10
    correlation: float = 0.10

    def merged(self, overrides: Optional[Mapping[str, float]]) -> 'PredictionWeights':
        """Return a copy with any subset of components replaced."""
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        updates = {}
        for name, value in overrides.items():
            if name not in known:
                logger.warning(f"Ignoring unknown prediction weight '{name}'")
                continue
            if value is None:
                continue
            updates[name] = float(value)
        return replace(self, **updates).clamped()

    def clamped(self) -> 'PredictionWeights':
        """Replace negative components with 0."""
        updates = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 0:
                logger.warning(f"Negative weight {f.name}={value} clamped to 0")
                updates[f.name] = 0.0
        return replace(self, **updates) if updates else self

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class RandomSource(Protocol):
    def next_float(self) -> float:
        """Return a float uniformly distributed in [0, 1)."""
        ...


class NumpyRandomSource:
    """RandomSource backed by numpy's Generator; a fixed seed reproduces a fixed stream"""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def next_float(self) -> float:
        return float(self._rng.random())


def random_index(rng: RandomSource, size: int) -> int:
    """Uniform index in ``range(size)`` from any RandomSource."""
    return min(int(rng.next_float() * size), size - 1)


@dataclass(frozen=True)
class SumRange:
    min: int
    max: int
    target: int

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class StatisticalBasis:
    """Summary of the analysis that backs a prediction"""
    hot_numbers: List[int]
    cold_numbers: List[int]
    due_numbers: List[int]
    avoid_numbers: List[int]
    sum_range: SumRange
    patterns: List[str]


@dataclass(frozen=True)
class PredictionResult:
    suggested_numbers: List[int]
    bonus_ball: int
    confidence: float
    reasoning: List[str]
    statistical_basis: StatisticalBasis
    alternative_sets: List[List[int]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        basis = self.statistical_basis
        return {
            'suggested_numbers': list(self.suggested_numbers),
            'bonus_ball': self.bonus_ball,
            'confidence': self.confidence,
            'reasoning': list(self.reasoning),
            'statistical_basis': {
                'hot_numbers': list(basis.hot_numbers),
                'cold_numbers': list(basis.cold_numbers),
                'due_numbers': list(basis.due_numbers),
                'avoid_numbers': list(basis.avoid_numbers),
                'sum_range': {
                    'min': basis.sum_range.min,
                    'max': basis.sum_range.max,
                    'target': basis.sum_range.target,
                },
                'patterns': list(basis.patterns),
            },
            'alternative_sets': [list(s) for s in self.alternative_sets],
        }
