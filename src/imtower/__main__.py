#!/usr/bin/env python3
"""
Command line entry point: python -m imtower
"""

import argparse
import logging
import random
import sys

from .constants import DB_FILE, DEFAULT_PROFILE, SCREEN_WIDTH, SCREEN_HEIGHT
from .data_models import TowerConfig
from .score_db import Database, MemoryScoreStore


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Stack the tower as high as you can.")
    parser.add_argument("--db", default=DB_FILE, help="SQLite file holding the best score")
    parser.add_argument("--profile", default=DEFAULT_PROFILE, help="Name the best score is stored under")
    parser.add_argument("--no-save", action="store_true", help="Keep the best score in memory only")
    parser.add_argument("--width", type=int, default=SCREEN_WIDTH, help="Play field width in pixels")
    parser.add_argument("--height", type=int, default=SCREEN_HEIGHT, help="Play field height in pixels")
    parser.add_argument("--seed", type=int, default=None, help="Seed for block appearance")
    parser.add_argument("--share-url", default="", help="Link appended to the share message")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='[IMTOWER] %(asctime)s - %(levelname)s - %(message)s')

    try:
        config = TowerConfig(field_width=args.width, field_height=args.height)
    except ValueError as e:
        logging.error(f"Invalid field size: {e}")
        return 2

    store = MemoryScoreStore() if args.no_save else Database(args.db, args.profile)

    # Imported late so --help works without a display
    from .tower_client import TowerClient

    client = TowerClient(store, config, rng=random.Random(args.seed), share_url=args.share_url)
    try:
        client.run()
    except KeyboardInterrupt:
        logging.info("Interrupted.")
    finally:
        if isinstance(store, Database):
            store.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
