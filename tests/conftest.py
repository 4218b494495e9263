import os
import sys
from datetime import date, timedelta

import pytest

# Ensure repository root is on sys.path so `import lotto_predictor` works during tests
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from lotto_predictor.config import EngineConfig
from lotto_predictor.models import Draw

START_DATE = date(2020, 1, 4)
DUE_POOL = [1, 2, 3, 4, 5, 6, 7, 8, 10, 11, 12, 13]
NINE_INDICES = (4, 9, 14, 19)


def draw_date_label(index: int) -> str:
    return (START_DATE + timedelta(days=3 * index)).strftime('%d/%m/%Y')


def make_draw(index: int, numbers, bonus: int) -> Draw:
    return Draw(draw_date=draw_date_label(index), numbers=tuple(numbers), bonus=bonus)


def build_rotating_draws(count: int):
    """Varied but deterministic draws covering the whole 1-49 domain"""
    return [
        make_draw(i, [(i * 7 + k * 8) % 49 + 1 for k in range(6)], (i * 5) % 49 + 1)
        for i in range(count)
    ]


def build_identical_draws(count: int):
    return [make_draw(i, [1, 2, 3, 4, 5, 6], 7) for i in range(count)]


def build_due_nine_draws():
    """
    40 draws alternating two halves of a 12-number pool. Number 9 replaces the
    first pool number at indices 4, 9, 14 and 19, so its current gap (20) is
    twice its expected gap (80 / 8 = 10) while every pool number stays recent.
    """
    draws = []
    for i in range(40):
        numbers = list(DUE_POOL[:6] if i % 2 == 0 else DUE_POOL[6:])
        if i in NINE_INDICES:
            numbers[0] = 9
        draws.append(make_draw(i, numbers, (i % 10) + 1))
    return draws


@pytest.fixture
def config():
    return EngineConfig()


@pytest.fixture
def rotating_draws():
    return build_rotating_draws(120)


@pytest.fixture
def identical_draws():
    return build_identical_draws(150)


@pytest.fixture
def due_nine_draws():
    return build_due_nine_draws()


@pytest.fixture
def draw_factory():
    """Build a Draw from an index (for the date label), numbers and bonus"""
    return make_draw


@pytest.fixture
def cycle_draws():
    """30 draws whose sums repeat with period 3 (21, 75, 255)"""
    templates = [[1, 2, 3, 4, 5, 6], [10, 11, 12, 13, 14, 15], [40, 41, 42, 43, 44, 45]]
    return [make_draw(i, templates[i % 3], 1) for i in range(30)]
