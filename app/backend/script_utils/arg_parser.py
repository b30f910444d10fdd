"""Argument parser utilities for backend scripts."""

import argparse
import logging

logger = logging.getLogger(__name__)


def get_arg_parser(description: str = None, **kwargs) -> argparse.ArgumentParser:
    """
    Create and return a standardized argument parser for backend scripts.

    Every script gets --dry-run/--no-dry-run (dry-run is the default) and
    --yes to skip the confirmation prompt.

    Args:
        description: Description of the script (typically from __doc__)
        **kwargs: Additional keyword arguments to pass to ArgumentParser

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description=description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        **kwargs
    )

    dry_run_group = parser.add_mutually_exclusive_group()
    dry_run_group.add_argument(
        '--dry-run',
        dest='dry_run',
        action='store_true',
        default=True,
        help='Preview the change without writing to the database (default)'
    )
    dry_run_group.add_argument(
        '--no-dry-run',
        dest='dry_run',
        action='store_false',
        help='Write the change to the database'
    )
    parser.add_argument(
        '--yes', '-y',
        action='store_true',
        help='Skip confirmation prompt'
    )

    return parser


def log_dry_run_mode(args: argparse.Namespace) -> None:
    """Log whether the script will write anything."""
    mode = "dry-run" if args.dry_run else "live"
    logger.info(f"Running in {mode} mode")


def confirm(prompt: str, args: argparse.Namespace) -> bool:
    """Ask for y/N confirmation unless --yes was given."""
    if args.yes:
        return True
    response = input(f"\n{prompt} [y/N]: ")
    return response.strip().lower() == 'y'
