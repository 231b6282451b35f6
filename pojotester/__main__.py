#!/usr/bin/env python3
# =============================================================================
# pojotester -- CI GATE
# File:   pojotester/__main__.py
# =============================================================================
#
# PURPOSE
# -------
# Runs verify_all() over one or more packages and exits with code 0 (PASS)
# or 1 (FAIL).
#
#   python -m pojotester [-v] PACKAGE [PACKAGE ...]
#
# Exit codes:
#   0 -- every Serializable class in every package passed.
#   1 -- the first failing class; its message is printed to stderr.
# =============================================================================

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from pojotester.exceptions import VerificationFailure
from pojotester.pojo_util import verify_all


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Verify the Serializable data-holder classes of Python packages.",
        prog="python -m pojotester",
    )
    parser.add_argument(
        "packages",
        nargs="+",
        metavar="PACKAGE",
        help="Dotted name of a package to scan recursively.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Log every discovered and verified class.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Verify every package named on the command line.

    Returns:
        0 if all packages pass.
        1 on the first VerificationFailure.
    """
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    for package in args.packages:
        try:
            verify_all(package)
        except VerificationFailure as exc:
            print(f"POJO-GATE: FAIL [{package}] {exc.message}", file=sys.stderr)
            return 1
        print(f"POJO-GATE: PASS [{package}]")

    return 0


if __name__ == "__main__":
    sys.exit(main())
