"""
Valuation CLI - Train the price model and estimate property prices.

Usage:
    valuation-cli train --k-folds 10
    valuation-cli predict --size 85 --floor 3 --latitude 40.41 \\
        --longitude -3.70 --rooms 3 --bathrooms 2 --lift
    valuation-cli show
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import (
    add_args,
    check_config,
    config_from_args,
    config_to_dict,
    load_env,
    persist_setting,
    setup_logging,
)
from .data.models import PropertyRecord
from .errors import ValuationError
from .orchestration import ValuationEngine

logger = logging.getLogger(__name__)


def cmd_train(args: argparse.Namespace) -> int:
    """Execute the train command."""
    config = config_from_args(args)
    check_config(config)
    logger.debug(f"Config: {config_to_dict(config)}")

    if args.save_env:
        env_path = persist_setting("K_FOLDS", str(config.k_folds))
        print(f"Saved K_FOLDS={config.k_folds} to {env_path}")

    print(f"Using {config.k_folds} folds.")
    engine = ValuationEngine(config)
    engine.force_retrain()

    result = engine.last_selection
    if result is None:
        print("ERROR: Training finished without a selection result", file=sys.stderr)
        return 1

    print()
    print("Training Results:")
    print(f"  Penalty:   {result.penalty}")
    print(f"  L1 ratio:  {result.l1_ratio}")
    print(f"  CV R²:     {result.cv_score:.4f}")
    if result.metrics is not None:
        print(f"  MAE:       €{result.metrics.mae:,.0f}")
        print(f"  RMSE:      €{result.metrics.rmse:,.0f}")
    print(
        f"  Candidates scored: {len(result.batch.successful_results)}"
        f"/{len(result.batch.results)}"
    )
    print()
    print(f"✓ Model saved to {engine.store.path}")

    return 0


def cmd_predict(args: argparse.Namespace) -> int:
    """Execute the predict command."""
    config = config_from_args(args)
    check_config(config)

    prop = PropertyRecord(
        size=args.size,
        floor=args.floor,
        latitude=args.latitude,
        longitude=args.longitude,
        has_lift=args.has_lift,
        price_per_area=args.price_per_area,
        rooms=args.rooms,
        bathrooms=args.bathrooms,
        swimming_pool=args.swimming_pool,
        garden=args.garden,
        garage=args.garage,
    )

    engine = ValuationEngine(config)
    price = engine.predict_price(prop)

    print(f"💰 Predicted price: €{price:,.2f}")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Execute the show command."""
    config = config_from_args(args)
    engine = ValuationEngine(config)
    model = engine.store.load()

    print(f"Model: {engine.store.path}")
    print(f"  Penalty:   {model.penalty}")
    print(f"  L1 ratio:  {model.l1_ratio}")
    print(f"  Intercept: {model.intercept:,.4f}")
    print("  Coefficients:")
    for name, value in zip(model.feature_names, model.coefficients):
        print(f"    {name:<15} {value:,.6f}")

    return 0


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    common = argparse.ArgumentParser(add_help=False)
    add_args(common)

    parser = argparse.ArgumentParser(
        prog="valuation-cli",
        description="Valuation CLI - Train the price model and estimate prices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        help="Command to execute",
    )

    # ─────────────────────────────────────────────────────────────────────────
    # TRAIN command
    # ─────────────────────────────────────────────────────────────────────────
    train_parser = subparsers.add_parser(
        "train",
        parents=[common],
        help="Train a new model and overwrite the saved one",
        description="Grid-search elastic-net hyperparameters and save the best model.",
    )

    train_parser.add_argument(
        "--save-env",
        dest="save_env",
        action="store_true",
        help="Store the fold count in .env for later runs",
    )

    # ─────────────────────────────────────────────────────────────────────────
    # PREDICT command
    # ─────────────────────────────────────────────────────────────────────────
    predict_parser = subparsers.add_parser(
        "predict",
        parents=[common],
        help="Estimate the price of a property",
        description="Load the saved model (training one if missing) and price a property.",
    )

    predict_parser.add_argument(
        "--size", type=float, required=True, metavar="M2", help="Size in m²"
    )
    predict_parser.add_argument(
        "--floor",
        type=int,
        default=None,
        metavar="N",
        help="Floor number (omit if not applicable)",
    )
    predict_parser.add_argument("--latitude", type=float, required=True)
    predict_parser.add_argument("--longitude", type=float, required=True)
    predict_parser.add_argument(
        "--price-per-area",
        dest="price_per_area",
        type=float,
        default=0.0,
        metavar="EUR",
        help="Price per m² if known (default: 0)",
    )
    predict_parser.add_argument(
        "--rooms", type=int, required=True, metavar="N", help="Number of bedrooms"
    )
    predict_parser.add_argument(
        "--bathrooms", type=int, required=True, metavar="N", help="Number of bathrooms"
    )
    predict_parser.add_argument(
        "--lift", dest="has_lift", action="store_true", help="Property has a lift"
    )
    predict_parser.add_argument(
        "--pool",
        dest="swimming_pool",
        action="store_true",
        help="Property has a swimming pool",
    )
    predict_parser.add_argument(
        "--garden", action="store_true", help="Property has a garden"
    )
    predict_parser.add_argument(
        "--garage", action="store_true", help="Property has a garage"
    )

    # ─────────────────────────────────────────────────────────────────────────
    # SHOW command
    # ─────────────────────────────────────────────────────────────────────────
    subparsers.add_parser(
        "show",
        parents=[common],
        help="Show the saved model",
        description="Print hyperparameters and coefficients of the saved model.",
    )

    return parser.parse_args(args)


def main(args: list[str] | None = None) -> int:
    """CLI entry point."""
    # .env must be loaded before argparse reads env defaults
    load_env()
    config = parse_args(args)
    setup_logging(config.log_level)

    try:
        if config.command == "train":
            return cmd_train(config)
        elif config.command == "predict":
            return cmd_predict(config)
        elif config.command == "show":
            return cmd_show(config)
        else:
            print(f"ERROR: Unknown command: {config.command}", file=sys.stderr)
            return 2

    except ValuationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
