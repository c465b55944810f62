from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates a removal run: argument parsing, logging bootstrap, resolution
of the configuration hierarchy (defaults, persistent file, CLI overrides),
tree obliteration for every root and rendering of the outcome. The exit
status is 0 only if every root was fully obliterated.
"""

import json
import sys
from typing import Any, Dict, List, Optional, TextIO

from shrem.core.obliterator import NameObliterator
from shrem.core.shredder import ContentShredInvoker
from shrem.core.validator import validate_config
from shrem.core.walker import DirectoryWalker
from shrem.domain.config import get_default_config, load_config, save_config
from shrem.domain.models import RunResult
from shrem.infra.fs import normalize_path
from shrem.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from shrem.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Resolve base configuration (Default vs Persistent state)
    if args.use_defaults:
        base_conf = get_default_config()
    else:
        base_conf = load_config(normalize_path(args.config_path) or None)

    # 2. Merge command-line overrides and validate
    overrides = cli_args.args_to_overrides(args)
    conf, warnings = validate_config(_merge_config(base_conf, overrides), strict=False)

    # 3. Logging bootstrap (console on stderr, optional rotating file)
    configure_logging(LoggingConfig.from_settings(conf))

    try:
        for w in warnings:
            logger.warning(f"Configuration Constraint: {w}")

        if args.save_config:
            save_config(conf, normalize_path(args.config_path) or None)

        if args.dump_config:
            print(json.dumps(conf, ensure_ascii=False, indent=2))
            return EXIT_OK

        if not args.paths:
            if args.save_config:
                return EXIT_OK
            parser.print_usage(sys.stderr)
            print("shrem: missing operand", file=sys.stderr)
            return EXIT_USAGE

        return _run(args.paths, conf, json_output=bool(args.json_output))
    finally:
        shutdown_logging()

# -----------------------------------------------------------------------------
# EXECUTION
# -----------------------------------------------------------------------------

def build_walker(conf: Dict[str, Any], out: TextIO = sys.stdout) -> DirectoryWalker:
    """Wire the shredder, the obliterator and the walker from a clean config."""
    reporter = _make_reporter(out) if conf["verbose"] else None
    shredder = ContentShredInvoker(
        passes=conf["passes"],
        zero_pass=conf["zero_pass"],
        command=conf["shred_command"],
        reporter=reporter,
    )
    obliterator = NameObliterator(reporter=reporter)
    return DirectoryWalker(
        shredder,
        obliterator,
        recursive=conf["recursive"],
        force=conf["force"],
        confirm=prompt if conf["interactive"] else None,
    )


def _run(paths: List[str], conf: Dict[str, Any], *, json_output: bool) -> int:
    walker = build_walker(conf)
    result = RunResult()

    logger.debug(f"Obliterating {len(paths)} root(s) with {conf['passes']} pass(es)")
    try:
        for path in paths:
            walker.obliterate_tree(path, result)
    except KeyboardInterrupt:
        logger.warning("Interrupted. The remaining tree was left in its partial state.")
        print("shrem: interrupted; rerun to finish the removal", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(f"Unexpected failure: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if json_output:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return EXIT_OK if result.ok else EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge of non-None overrides restricted to known keys."""
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# INTERACTION AND RENDERING
# -----------------------------------------------------------------------------

def _make_reporter(out: TextIO):
    def report(line: str) -> None:
        print(line, file=out, flush=True)
    return report


def prompt(question: str) -> bool:
    """Ask a yes/no question on stdout; only answers starting with y/Y agree."""
    sys.stdout.write(f"shrem: {question} ")
    sys.stdout.flush()
    answer = sys.stdin.readline()
    return answer[:1] in ("y", "Y")


def _print_human_summary(result: RunResult) -> None:
    """
    Report failures on stderr. A successful run prints nothing, like rm.
    """
    if result.ok:
        return

    first = result.first_failure
    print(f"shrem: cannot remove '{first.path}': {first.reason}", file=sys.stderr)
    print(f"ERROR: first failure: {first.describe()}", file=sys.stderr)
    if len(result.failures) > 1:
        print(f"ERROR: {len(result.failures)} entries could not be obliterated", file=sys.stderr)


# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
