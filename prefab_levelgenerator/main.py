#!/usr/bin/env python3
"""
Prefab Level Generator - Command Line Entry Point

Generates one level from a room template catalog and prints a summary.
Command-line flags override values loaded from a settings file.
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prefab-levelgen",
        description="Assemble a level from prefab room templates.",
    )
    parser.add_argument("--config", help="JSON settings file")
    parser.add_argument("--catalog", help="JSON room template catalog (default: built-in templates)")
    parser.add_argument("--depth", type=int, help="Recursion depth budget")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible output")
    parser.add_argument("--no-rotate", action="store_true", help="Only try the authored orientation")
    parser.add_argument("--max-repeat", type=int, help="Repeat-avoidance window per branch")
    parser.add_argument("--root", help="Template id of the root room")
    parser.add_argument("--random-root", action="store_true", help="Pick the root template at random")
    parser.add_argument("--output-dir", help="Directory for debug graph dumps")
    parser.add_argument("--format", choices=["none", "dot", "json"], help="Debug graph dump format")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def settings_from_args(args):
    from prefab_levelgenerator.src.pipeline import GenerationSettings, load_settings

    settings = load_settings(args.config) if args.config else GenerationSettings()
    if args.catalog is not None:
        settings.catalog_path = args.catalog
    if args.depth is not None:
        settings.depth = args.depth
    if args.seed is not None:
        settings.seed = args.seed
    if args.no_rotate:
        settings.rotate_rooms = False
    if args.max_repeat is not None:
        settings.max_repeat = args.max_repeat
    if args.root is not None:
        settings.root_template = args.root
    if args.random_root:
        settings.random_root = True
    if args.output_dir is not None:
        settings.output_dir = args.output_dir
    if args.format is not None:
        settings.graph_dump_format = args.format
    if args.verbose:
        settings.verbose = True
    settings.validate_values()
    return settings


def print_summary(result) -> None:
    level = result.level
    print(f"Seed: {result.seed}")
    print(f"Rooms: {len(level)}  Connections: {len(level.connections)}  "
          f"Dead ends: {len(level.dead_ends)}  Fallbacks: {len(level.warnings)}")
    for room in level.rooms:
        print(f"  {room.describe()}")
    for path in result.output_files:
        print(f"Wrote {path}")
    print(f"Done in {result.total_time:.3f}s")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    # Ensure package imports work when executed as a script
    project_root = Path(__file__).resolve().parents[1]
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))

    from prefab_levelgenerator.src.pipeline import GenerationPipeline, PipelineError

    args = build_parser().parse_args(argv)
    try:
        settings = settings_from_args(args)
    except PipelineError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 2

    configure_logging(settings.verbose)

    result = GenerationPipeline(settings).run()
    if not result.success:
        for error in result.errors:
            print(error, file=sys.stderr)
        return 1

    print_summary(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
