"""Shared helpers for command-line scripts"""

from .arg_parser import get_arg_parser, log_dry_run_mode, confirm

__all__ = ["get_arg_parser", "log_dry_run_mode", "confirm"]
