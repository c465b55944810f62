from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. Unset flags map to None so configured values survive the merge.
"""

import pytest

from shrem.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_cli_removal_flags_mapping() -> None:
    args = parse_args(["-r", "-f", "-v", "-n", "7", "--no-zero", "--debug", "a", "b"])

    overrides = args_to_overrides(args)

    assert args.paths == ["a", "b"]
    assert overrides["recursive"] is True
    assert overrides["force"] is True
    assert overrides["verbose"] is True
    assert overrides["passes"] == 7
    assert overrides["zero_pass"] is False
    assert overrides["log_level"] == "DEBUG"


def test_cli_uppercase_recursive_alias() -> None:
    assert parse_args(["-R", "x"]).recursive is True


def test_cli_defaults_are_none() -> None:
    overrides = args_to_overrides(parse_args([]))

    assert overrides["recursive"] is None
    assert overrides["passes"] is None
    assert "zero_pass" not in overrides
    assert "log_level" not in overrides


def test_cli_rejects_non_numeric_iterations() -> None:
    with pytest.raises(SystemExit) as info:
        parse_args(["-n", "many", "x"])

    assert info.value.code == 2
