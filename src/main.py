"""Main entry point: convert SRTM tiles of a region into Bedrock terrain loaders."""

import argparse
import logging
import os
import sys
from pathlib import Path

from domain.profiles import default_settings, load_profile
from service import generate_terrain
from shared.constants import APP_DIR_NAME, LOG_FILE_NAME, LOG_FORMAT

logger = logging.getLogger(__name__)


def setup_logging(level: str = 'INFO') -> Path:
    """Configure logging to stdout and to LOCALAPPDATA.

    Returns:
        Path of the log file.
    """
    local_base = (
        Path(os.getenv('LOCALAPPDATA') or Path.home() / 'AppData' / 'Local')
        / APP_DIR_NAME
    )
    log_dir = local_base / 'log'
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(str(log_file), encoding='utf-8'),
        ],
        force=True,
    )
    return log_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Generate Minecraft Bedrock terrain loaders from SRTM data'
    )
    parser.add_argument(
        '--profile',
        help='Profile name or path to a TOML profile (default: built-in region)',
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    log_file = setup_logging(args.log_level)
    logger.info('Logging to %s', log_file)

    settings = load_profile(args.profile) if args.profile else default_settings()
    generate_terrain(settings)

    logger.info('=== Usage ===')
    logger.info('1. In Minecraft, run: /function setup_%s', settings.namespace)
    logger.info('2. Stand where you want the terrain origin')
    logger.info('3. Run: /function load_%s (all at once)', settings.namespace)
    logger.info('   Or: /function load_%s_row (progressive)', settings.namespace)
    return 0


if __name__ == '__main__':
    sys.exit(main())
