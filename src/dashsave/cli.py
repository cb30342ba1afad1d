from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import StoreConfig
from .errors import SaveError
from .inventory import STOCKABLE_TYPES
from .logging_config import configure_logging
from .rng import RandomProvider
from .store import ProgressStore
from .wallet import Currency

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="dashsave",
        description="Inspect and edit the Trash Dash progression save.",
    )
    parser.add_argument("--config", dest="config_path", type=Path, default=None,
                        help="Path to a YAML config file overriding the defaults.")
    parser.add_argument("--save-dir", dest="save_dir", default=None,
                        help="Directory holding the save record.")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for mission rolls.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("show", help="Print the saved progression as JSON.")
    sub.add_parser("reset", help="Replace the save with first-run progress.")
    sub.add_parser("clear", help="Delete the save record.")
    grant = sub.add_parser("grant", help="Give fishbones and premium currency.")
    grant.add_argument("--coins", type=int, default=1_000_000)
    grant.add_argument("--premium", type=int, default=1000)
    stock = sub.add_parser("stock", help="Set every consumable kind to a count.")
    stock.add_argument("--count", type=int, default=10)
    return parser.parse_args(argv)


def build_store(args) -> ProgressStore:
    config = StoreConfig.load(user_path=args.config_path)
    if args.save_dir is not None:
        config.save_dir = args.save_dir
    seed = args.seed if args.seed is not None else config.rng_seed
    return ProgressStore(config.record_path, rng=RandomProvider(seed))


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(default_level=logging.DEBUG if args.debug else logging.WARNING)
    store = build_store(args)

    try:
        if args.command == "clear":
            store.clear()
            print(f"Cleared {store.path}")
            return 0

        if args.command == "reset":
            store.initialize_defaults()
        else:
            store.load()

        if args.command == "grant":
            store.earn(Currency.SOFT, args.coins)
            store.earn(Currency.PREMIUM, args.premium)
            store.persist()
        elif args.command == "stock":
            for kind in STOCKABLE_TYPES:
                store.inventory.set_count(kind, args.count)
            store.persist()
    except SaveError as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(store.state.to_dict(), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
