"""
Lotto Predictor - Configuration
================================

Reads engine parameters and default scoring weights from ``config/config.ini``.
The file location can be overridden with the ``LOTTO_PREDICTOR_CONFIG``
environment variable. Every option has a fallback, so a missing or partial
file still yields a complete configuration.
"""

import configparser
import os
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from .models import PICK_SIZE, PredictionWeights

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), '..', 'config', 'config.ini'
)


@dataclass(frozen=True)
class EngineConfig:
    """Tunable parameters of the scoring and selection engine"""
    max_number: int = 49
    recency_window: int = 100
    recency_weight: float = 2.0
    hot_window: int = 15
    hot_count: int = 12
    cold_window: int = 20
    cold_count: int = 15
    scoring_window: int = 20
    avoid_window: int = 10
    avoid_threshold: int = 3
    avoid_count: int = 8
    due_threshold: float = 1.5
    due_count: int = 10
    max_attempts: int = 1000
    rank_decay: float = 0.8
    alternative_pool_size: int = 20

    def validate(self) -> 'EngineConfig':
        """Raise ValueError if a parameter makes the engine unusable."""
        if self.max_number < PICK_SIZE:
            raise ValueError(
                f"max_number must be at least {PICK_SIZE}, got {self.max_number}"
            )
        windows = {
            'recency_window': self.recency_window,
            'hot_window': self.hot_window,
            'cold_window': self.cold_window,
            'scoring_window': self.scoring_window,
            'avoid_window': self.avoid_window,
        }
        for name, value in windows.items():
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        counts = {
            'hot_count': self.hot_count,
            'cold_count': self.cold_count,
            'avoid_count': self.avoid_count,
            'due_count': self.due_count,
            'alternative_pool_size': self.alternative_pool_size,
        }
        for name, value in counts.items():
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        # Recent draws are repeated in the sum multiset and the gap sequences
        if self.recency_weight < 1 or not float(self.recency_weight).is_integer():
            raise ValueError(
                f"recency_weight must be a whole number >= 1, got {self.recency_weight}"
            )
        if self.max_attempts < 0:
            raise ValueError(f"max_attempts must be non-negative, got {self.max_attempts}")
        if not 0 < self.rank_decay <= 1:
            raise ValueError(f"rank_decay must be in (0, 1], got {self.rank_decay}")
        return self

    @property
    def domain(self) -> range:
        return range(1, self.max_number + 1)


def get_config_path() -> str:
    return os.getenv('LOTTO_PREDICTOR_CONFIG', DEFAULT_CONFIG_PATH)


def _read_parser(path: Optional[str]) -> configparser.ConfigParser:
    config = configparser.ConfigParser()
    config_path = path or get_config_path()
    try:
        read_files = config.read(config_path)
        if not read_files:
            logger.warning(f"Config file not found at {config_path}, using defaults")
    except (configparser.Error, OSError) as e:
        logger.error(f"Error reading config file {config_path}: {e}. Using defaults.")
        config = configparser.ConfigParser()
    return config


def load_engine_config(path: Optional[str] = None) -> EngineConfig:
    """
    Load the ``[engine]`` section.

    Args:
        path: Explicit config.ini path; defaults to ``get_config_path()``

    Returns:
        Validated EngineConfig
    """
    config = _read_parser(path)
    defaults = EngineConfig()
    section = 'engine'

    try:
        engine_config = EngineConfig(
            max_number=config.getint(section, 'max_number', fallback=defaults.max_number),
            recency_window=config.getint(section, 'recency_window', fallback=defaults.recency_window),
            recency_weight=config.getfloat(section, 'recency_weight', fallback=defaults.recency_weight),
            hot_window=config.getint(section, 'hot_window', fallback=defaults.hot_window),
            hot_count=config.getint(section, 'hot_count', fallback=defaults.hot_count),
            cold_window=config.getint(section, 'cold_window', fallback=defaults.cold_window),
            cold_count=config.getint(section, 'cold_count', fallback=defaults.cold_count),
            scoring_window=config.getint(section, 'scoring_window', fallback=defaults.scoring_window),
            avoid_window=config.getint(section, 'avoid_window', fallback=defaults.avoid_window),
            avoid_threshold=config.getint(section, 'avoid_threshold', fallback=defaults.avoid_threshold),
            avoid_count=config.getint(section, 'avoid_count', fallback=defaults.avoid_count),
            due_threshold=config.getfloat(section, 'due_threshold', fallback=defaults.due_threshold),
            due_count=config.getint(section, 'due_count', fallback=defaults.due_count),
            max_attempts=config.getint(section, 'max_attempts', fallback=defaults.max_attempts),
            rank_decay=config.getfloat(section, 'rank_decay', fallback=defaults.rank_decay),
            alternative_pool_size=config.getint(
                section, 'alternative_pool_size', fallback=defaults.alternative_pool_size
            ),
        )
    except ValueError as e:
        logger.error(f"Invalid value in [engine] section: {e}. Using defaults.")
        engine_config = defaults

    logger.debug(f"Engine configuration loaded (max_number={engine_config.max_number}, "
                 f"recency_window={engine_config.recency_window})")
    return engine_config.validate()


def load_default_weights(path: Optional[str] = None) -> PredictionWeights:
    """Load the ``[weights]`` section as the default PredictionWeights."""
    config = _read_parser(path)
    defaults = PredictionWeights()
    section = 'weights'

    try:
        return PredictionWeights(
            frequency=config.getfloat(section, 'frequency', fallback=defaults.frequency),
            recency=config.getfloat(section, 'recency', fallback=defaults.recency),
            gaps=config.getfloat(section, 'gaps', fallback=defaults.gaps),
            patterns=config.getfloat(section, 'patterns', fallback=defaults.patterns),
            distribution=config.getfloat(section, 'distribution', fallback=defaults.distribution),
            correlation=config.getfloat(section, 'correlation', fallback=defaults.correlation),
        ).clamped()
    except ValueError as e:
        logger.error(f"Invalid value in [weights] section: {e}. Using defaults.")
        return defaults
