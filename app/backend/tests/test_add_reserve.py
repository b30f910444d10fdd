"""
Tests for the add_reserve script helpers
"""

import pytest

from geometry import GeometryError
from scripts.add_reserve import build_boundary, parse_vertex
from script_utils import get_arg_parser


def test_parse_vertex():
    assert parse_vertex(" -19.01, 29.10 ") == {"lat": -19.01, "lon": 29.1}


def test_parse_vertex_rejects_single_number():
    with pytest.raises(ValueError, match="lat,lon"):
        parse_vertex("-19.01")


def test_build_boundary_swaps_to_lon_lat_and_closes():
    boundary = build_boundary(["-1,30", "-1,31", "-2,31"])
    assert boundary == "((30, -1),(31, -1),(31, -2),(30, -1))"


def test_build_boundary_needs_three_vertices():
    with pytest.raises(GeometryError):
        build_boundary(["-1,30", "-1,31"])


def test_arg_parser_defaults_to_dry_run():
    args = get_arg_parser().parse_args([])
    assert args.dry_run is True
    assert args.yes is False


def test_arg_parser_live_mode():
    args = get_arg_parser().parse_args(["--no-dry-run", "--yes"])
    assert args.dry_run is False
    assert args.yes is True
