from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of shrem and translates the parsed argparse
namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the shrem CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="shrem",
        description="Overwrite the specified FILE(s) repeatedly and then remove them. "
                    "Directories are emptied bottom-up and their names obliterated.",
    )

    p.add_argument("paths", nargs="*", metavar="FILE", help="Files or directories to remove.")

    # --- Removal behaviour ---
    p.add_argument(
        "-f", "--force",
        action="store_true",
        default=None,
        help="Ignore nonexistent files and arguments.",
    )
    p.add_argument(
        "-r", "-R", "--recursive",
        action="store_true",
        default=None,
        help="Remove directories and their contents recursively.",
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=None,
        help="Explain what is being done.",
    )
    p.add_argument(
        "-i", "--interactive",
        action="store_true",
        default=None,
        help="Prompt before every removal.",
    )

    # --- Overwrite delegation ---
    p.add_argument(
        "-n", "--iterations",
        dest="passes",
        type=int,
        default=None,
        metavar="N",
        help="Overwrite N times instead of the default (3).",
    )
    p.add_argument(
        "--no-zero",
        action="store_true",
        help="Skip the final overwrite with zeros.",
    )

    # --- Configuration and diagnostics ---
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Read settings from this JSON file instead of ~/.shrem/config.json.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persistent configuration file.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Store the resolved settings as the new persistent configuration.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostic logs to this file ('default': ~/.shrem/logs/shrem.log).",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run summary as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration overrides dictionary.

    Flags left unset map to None so the merge keeps the configured value.
    """
    overrides: Dict[str, Any] = {
        "force": args.force,
        "recursive": args.recursive,
        "verbose": args.verbose,
        "interactive": args.interactive,
        "passes": args.passes,
        "log_file": args.log_file,
    }

    if args.no_zero:
        overrides["zero_pass"] = False
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
