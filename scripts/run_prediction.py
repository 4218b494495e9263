#!/usr/bin/env python3
"""
Generate a prediction from a CSV draw history.

The CSV needs columns draw_date,n1..n6,bonus (or Date,B1..B6,BB).

Usage:
    python scripts/run_prediction.py --csv data/draws.csv
    python scripts/run_prediction.py --csv data/draws.csv --seed 42 --weight gaps=0.3
    python scripts/run_prediction.py --csv data/draws.csv --json
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger

from lotto_predictor.config import load_default_weights, load_engine_config
from lotto_predictor.loader import load_draws_csv
from lotto_predictor.models import NumpyRandomSource
from lotto_predictor.prediction_engine import generate_prediction, resolve_weights


def parse_weight_overrides(items):
    """Parse ``name=value`` pairs into a weight override mapping."""
    overrides = {}
    for item in items or []:
        name, sep, value = item.partition('=')
        if not sep:
            raise argparse.ArgumentTypeError(f"Invalid weight override '{item}', expected name=value")
        overrides[name.strip()] = float(value)
    return overrides


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Weighted statistical lottery prediction")
    parser.add_argument('--csv', required=True, help="Path to the draw history CSV")
    parser.add_argument('--seed', type=int, default=None, help="Seed for reproducible output")
    parser.add_argument('--weight', action='append', metavar='NAME=VALUE',
                        help="Override one scoring weight (repeatable)")
    parser.add_argument('--config', default=None, help="Path to config.ini")
    parser.add_argument('--json', action='store_true', help="Print the full result as JSON")
    args = parser.parse_args(argv)

    config = load_engine_config(args.config)
    weights = resolve_weights(parse_weight_overrides(args.weight), defaults=load_default_weights(args.config))

    draws = load_draws_csv(args.csv, config=config)
    if not draws:
        logger.warning("No valid draws loaded; the prediction will be a uniform random pick")

    result = generate_prediction(draws, weights, rng=NumpyRandomSource(args.seed), config=config)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    print(f"Suggested numbers: {result.suggested_numbers}  Bonus: {result.bonus_ball}")
    print(f"Confidence: {result.confidence:.1f}")
    print("Reasoning:")
    for line in result.reasoning:
        print(f"  - {line}")
    for numbers in result.alternative_sets:
        print(f"Alternative: {numbers}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
