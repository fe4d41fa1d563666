#!/usr/bin/env python3
"""
Generate a galaxy and write it out as JSON.

This runs the full single-pass pipeline:
1. Sector ring layout and planet chains
2. Gateway lanes between neighbouring sectors
3. Realm growth over the space lane graph

Usage:
    python generate_galaxy.py [seed] [--config FILE] [--output FILE] [--save]

If no seed is provided, the configured default seed is used.
"""

import json
import sys
from pathlib import Path

from py_galaxy.config import GenerationConfig, configure_logging, settings
from py_galaxy.core.pipeline import generate_galaxy
from py_galaxy.db.connection import db
from py_galaxy.db.export import export_galaxy_to_db


def main(argv=None):
    """Main function."""
    import argparse

    parser = argparse.ArgumentParser(description="Generate a galaxy")
    parser.add_argument("seed", nargs="?", help="Random seed (overrides the config file)")
    parser.add_argument("--config", help="JSON file with generation options")
    parser.add_argument("--output", help="Write the galaxy JSON here instead of stdout")
    parser.add_argument(
        "--save", action="store_true", help="Also store the galaxy in the database"
    )
    args = parser.parse_args(argv)

    # Logs go to stderr so stdout carries only the JSON payload
    configure_logging(log_format="console", stream=sys.stderr)

    if args.config:
        config = GenerationConfig.from_json_file(args.config)
        if args.seed:
            config = config.model_copy(update={"seed": args.seed})
    else:
        config = GenerationConfig(seed=args.seed or settings.default_seed)

    result = generate_galaxy(config)
    payload = json.dumps(result.to_dict(), indent=2)

    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(
            f"Generated {result.galaxy_map.planet_count} planets and "
            f"{len(result.realm_ids)} realms -> {args.output}",
            file=sys.stderr,
        )
    else:
        print(payload)

    if args.save:
        db.initialize()
        with db.get_session() as session:
            galaxy_id = export_galaxy_to_db(session, f"Galaxy {config.seed}", result)
        print(f"Saved galaxy {galaxy_id}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
