# SPDX-License-Identifier: MIT
"""
secretgate - Command Line Interface

This CLI provides:
- secretgate                          (pre-push hook, reads refs from stdin)
- secretgate --githook pre-commit     (checks staged changes)
- secretgate --scan                   (checks every tracked file)
- secretgate --pattern GLOB           (checks files matching a glob, no git)
- secretgate --checksum GLOB          (prints suppression entries for matching files)

Exit status is 0 when nothing suspicious was found and 1 otherwise.
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence, TextIO

from . import __version__
from .core.additions import Addition, additions_from_glob
from .core.checksum import collective_hash
from .core.exceptions import GitError, SecretGateConfigError
from .detectors import DetectorChain, default_chain
from .git import GitRepo, parse_pre_push_input
from .ignores import SuppressionSpec, load_suppressions
from .logging_config import setup_logging
from .results import DetectionResults

PRE_PUSH = "pre-push"
PRE_COMMIT = "pre-commit"

logger = logging.getLogger(__name__)


def main(argv=None, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
    argv = sys.argv[1:] if argv is None else argv
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    p = argparse.ArgumentParser(
        prog="secretgate",
        description="Block commits and pushes that contain secrets",
    )
    p.add_argument("-v", "--version", action="store_true", help="print version and exit")
    p.add_argument(
        "--githook",
        choices=[PRE_PUSH, PRE_COMMIT],
        default=PRE_PUSH,
        help="hook to behave as (default: pre-push)"
    )
    mode = p.add_mutually_exclusive_group()
    mode.add_argument(
        "--scan",
        action="store_true",
        help="check every file tracked by git"
    )
    mode.add_argument(
        "--pattern",
        help="check files matching a glob such as './**/*.*' (no git needed)"
    )
    mode.add_argument(
        "--checksum",
        help="print suppression entries with checksums for files matching a glob"
    )
    p.add_argument(
        "--ignore-file",
        dest="ignore_file",
        help="suppression file to use instead of ./.secretgaterc"
    )
    p.add_argument("--debug", action="store_true", help="enable debug logging")

    args = p.parse_args(argv)

    if args.version:
        print(__version__, file=stdout)
        return 0

    setup_logging(args.debug)

    if args.checksum:
        return handle_checksum_command(args.checksum, stdout)

    try:
        spec = load_suppressions(args.ignore_file)
        additions = collect_additions(args, stdin)
    except SecretGateConfigError as e:
        print(f"CONFIG ERROR: {e}", file=sys.stderr)
        return 1
    except GitError as e:
        print(f"GIT ERROR: {e}", file=sys.stderr)
        return 1

    return run_detection(additions, spec, out=stdout)


def collect_additions(args, stdin: TextIO) -> List[Addition]:
    """Gather the additions for the selected mode."""
    if args.pattern:
        return additions_from_glob(args.pattern)

    repo = GitRepo()
    if args.scan:
        return repo.tracked_additions()

    if args.githook == PRE_COMMIT:
        return repo.staged_additions()

    additions: List[Addition] = []
    for ref in parse_pre_push_input(stdin.read().splitlines()):
        logger.debug("Checking %s (%s..%s)", ref.local_ref, ref.remote_sha, ref.local_sha)
        additions.extend(repo.additions_between(ref.remote_sha, ref.local_sha))
    return additions


def run_detection(
    additions: Sequence[Addition],
    spec: SuppressionSpec,
    chain: Optional[DetectorChain] = None,
    out: Optional[TextIO] = None,
) -> int:
    """Run the detector chain and print the report if anything failed."""
    out = out or sys.stdout
    results = DetectionResults()
    (chain or default_chain()).run(additions, spec, results)

    if results.successful():
        return 0

    print(results.report(), file=out)
    return 1


def handle_checksum_command(pattern: str, out: TextIO) -> int:
    """Print suppression entries for every file matching *pattern*."""
    paths = [a.path for a in additions_from_glob(pattern)]
    if not paths:
        print(f"No files found matching pattern: {pattern}", file=sys.stderr)
        return 1

    print(f"Collective checksum for {pattern}: {collective_hash(paths)}", file=out)
    print("Suggested .secretgaterc entries:", file=out)
    print(DetectionResults().suggest_suppressions(paths), file=out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
