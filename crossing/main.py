"""
Entry point for Crossing.

Usage:
    crossing
    crossing --settings default --seed 42
    crossing --assets ./images --no-placeholders
    python -m crossing --log-level DEBUG
"""

import argparse
from pathlib import Path
from typing import List, Optional

import yaml

from crossing import DESCRIPTION, NAME, VERSION, config
from crossing.logging import (
    close_all_sinks,
    configure_logging,
    create_sink_for_module,
    get_logger,
    register_sink,
)
from crossing.settings_loader import load_settings

log = get_logger('main')

ARGUMENTS = [
    {
        'name': '--settings',
        'type': str,
        'default': None,
        'help': 'Settings name in crossing/settings/ or path to a .yaml file'
    },
    {
        'name': '--assets',
        'type': Path,
        'default': None,
        'help': f'Sprite directory (default: {config.ASSETS_DIR})'
    },
    {
        'name': '--fps',
        'type': int,
        'default': config.FPS,
        'help': 'Frame rate cap'
    },
    {
        'name': '--seed',
        'type': int,
        'default': None,
        'help': 'Random seed for enemy rows and speeds'
    },
    {
        'name': '--log-level',
        'type': str,
        'default': None,
        'choices': ['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'OFF'],
        'help': 'Default log level (overrides CROSSING_LOG_LEVEL)'
    },
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='crossing', description=f"{NAME} - {DESCRIPTION}")
    parser.add_argument('--version', action='version', version=f'%(prog)s {VERSION}')
    for arg in ARGUMENTS:
        kwargs = {k: v for k, v in arg.items() if k != 'name'}
        parser.add_argument(arg['name'], **kwargs)
    parser.add_argument(
        '--placeholders',
        action=argparse.BooleanOptionalAction,
        default=config.USE_PLACEHOLDERS,
        help='Draw stand-in sprites for missing image files',
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, then create and run the game engine."""
    args = build_parser().parse_args(argv)

    if args.log_level:
        configure_logging(level=args.log_level)

    try:
        settings = load_settings(args.settings)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        log.error("%s", e)
        return 2

    register_sink('session', create_sink_for_module('session'))

    # Imported here so --help and settings errors don't open a window
    from crossing.engine import GameEngine

    engine = GameEngine(
        settings=settings,
        assets_dir=args.assets,
        placeholders=args.placeholders,
        fps=args.fps,
        seed=args.seed,
    )

    try:
        engine.run()
    finally:
        engine.quit()
        close_all_sinks()

    return 0
