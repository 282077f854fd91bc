"""Tests for the shared command line options."""

import argparse

import pytest

from crawl.floor_gen import DEFAULT_BOUNDS, FloorBounds
from crawl.options import add_floor_options, bounds_from_args, bounds_or_exit


def parse(*argv: str) -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    add_floor_options(parser)
    return parser.parse_args(list(argv))


class TestBoundsFromArgs:
    """Tests for bounds_from_args."""

    def test_defaults(self):
        args = parse()
        assert args.seed is None
        assert bounds_from_args(args) == DEFAULT_BOUNDS

    def test_fixed_size(self):
        assert bounds_from_args(parse("--width", "30", "--height", "12")) == FloorBounds.fixed(30, 12)

    def test_width_needs_height(self):
        with pytest.raises(ValueError, match="together"):
            bounds_from_args(parse("--width", "30"))

    def test_ranges(self):
        bounds = bounds_from_args(parse("--min-width", "10", "--max-width", "15", "--seed", "4"))
        assert (bounds.min_width, bounds.max_width) == (10, 15)
        assert bounds.min_height == DEFAULT_BOUNDS.min_height

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            bounds_from_args(parse("--min-width", "50", "--max-width", "30"))


class TestBoundsOrExit:
    """Tests for the entry scripts' error handling."""

    def test_good_flags_pass_through(self):
        assert bounds_or_exit(parse("--width", "8", "--height", "6")) == FloorBounds.fixed(8, 6)

    def test_bad_flags_exit_with_message(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            bounds_or_exit(parse("--height", "12"))

        assert excinfo.value.code == 1
        assert capsys.readouterr().err.startswith("Error: --width and --height")
