# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Command-line interface for vermatch.

This module provides the main CLI entry point for the vermatch tool, offering
commands to inspect, compare, match and resolve tool version strings.

Commands:

    parse: Show the structure and validity of a version string
    compare: Order two versions
    match: Check whether a version fits a pattern
    resolve: Resolve the tool versions of a manifest against their catalogs

Example:
    Inspect a version:
        ```bash
        $ vermatch parse 1.0-alpha1
        ```

    Compare two versions:
        ```bash
        $ vermatch compare 1.0-alpha1 1.0
        ```

    Check a pattern:
        ```bash
        $ vermatch match "17*" 17.0.2
        ```

    Resolve every tool of a manifest:
        ```bash
        $ vermatch resolve tools.yaml --debug
        ```

Exit Codes:

- 0: Success (for match: the version matches)
- 1: Error, or for match: the version does not match

Note:
    The CLI uses argparse for command parsing. Each command has its own
    handler function (cmd_<command>). Verbose mode shows full tracebacks on
    errors. A .env file in the working directory is loaded before resolving,
    so catalog headers like "${CATALOG_TOKEN}" can be kept out of manifests.
"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import sys
import traceback

from dotenv import load_dotenv

from vermatch.core import resolve_manifest, resolve_tool
from vermatch.exceptions import VermatchError
from vermatch.logging import get_logger, set_global_logger
from vermatch.versioning import VersionIdentifier


def _package_version() -> str:
    try:
        return version("vermatch")
    except PackageNotFoundError:
        from vermatch import __version__

        return __version__


def cmd_parse(args: argparse.Namespace) -> int:
    """Handler for 'vermatch parse' command.

    Prints the segments of a version together with its validity, development
    phase and pattern flag.

    Returns:
        Exit code (0 for a valid version or pattern, 1 otherwise).
    """
    set_global_logger(get_logger(verbose=args.verbose, debug=False))

    identifier = VersionIdentifier.of(args.version)
    phase = identifier.get_development_phase()
    if phase.undefined:
        phase_text = "undefined (multiple phases)"
    elif phase.is_empty():
        phase_text = "none"
    else:
        phase_text = f"{phase} ({phase.phase.name})"

    print("=" * 70)
    print("VERSION")
    print("=" * 70)
    print(f"Version:     {identifier}")
    print(f"Valid:       {identifier.is_valid()}")
    print(f"Pattern:     {identifier.is_pattern()}")
    print(f"Phase:       {phase_text}")
    print("Segments:")
    for index, segment in enumerate(identifier, start=1):
        flags = []
        if segment.is_pattern():
            flags.append(f"pattern={segment.pattern}")
        if not segment.is_valid() and not segment.is_pattern():
            flags.append("invalid")
        suffix = f"  [{', '.join(flags)}]" if flags else ""
        print(
            f"  {index}. separator={segment.separator!r} number={segment.number} "
            f"letters={str(segment.letters)!r}{suffix}"
        )
    print("=" * 70)

    return 0 if identifier.is_valid() or identifier.is_pattern() else 1


def cmd_compare(args: argparse.Namespace) -> int:
    """Handler for 'vermatch compare' command.

    Returns:
        Exit code (always 0; the ordering is printed).
    """
    set_global_logger(get_logger(verbose=args.verbose, debug=False))

    left = VersionIdentifier.of(args.left)
    right = VersionIdentifier.of(args.right)
    result = left.compare_version(right)
    relation = {-1: "<", 0: "==", 1: ">"}[result.to_int()]
    print(f"{left} {relation} {right}")
    if result.is_unsafe():
        print("[WARNING] Ordering is heuristic (unknown letter suffix involved)")
    return 0


def cmd_match(args: argparse.Namespace) -> int:
    """Handler for 'vermatch match' command.

    Returns:
        Exit code (0 if the version matches the pattern, 1 otherwise).
    """
    set_global_logger(get_logger(verbose=args.verbose, debug=False))

    pattern = VersionIdentifier.of(args.pattern)
    candidate = VersionIdentifier.of(args.version)
    if pattern.matches(candidate):
        print(f"[MATCH] {candidate} matches {pattern}")
        return 0
    print(f"[NO MATCH] {candidate} does not match {pattern}")
    return 1


def cmd_resolve(args: argparse.Namespace) -> int:
    """Handler for 'vermatch resolve' command.

    Loads the manifest, resolves each requested tool version against its
    catalog and prints the chosen versions.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))
    load_dotenv()

    manifest_path = Path(args.manifest).resolve()
    if not manifest_path.exists():
        print(f"Error: Manifest file not found: {manifest_path}")
        return 1

    print(f"Resolving versions for manifest: {manifest_path}")
    print()

    try:
        if args.tool:
            results = [
                resolve_tool(
                    manifest_path, args.tool, include_invalid=args.include_invalid
                )
            ]
        else:
            results = resolve_manifest(
                manifest_path, include_invalid=args.include_invalid
            )
    except VermatchError as err:
        print(f"Error: {err}")
        if args.verbose or args.debug:
            traceback.print_exc()
        return 1

    print("=" * 70)
    print("RESOLUTION RESULTS")
    print("=" * 70)
    for result in results:
        detail = (
            f"{result.requested} of {result.candidate_count} candidate(s)"
            if result.is_pattern
            else "pinned"
        )
        print(f"{result.tool:<20} {result.version:<20} ({detail})")
    print("=" * 70)
    print()
    print(f"[SUCCESS] Resolved {len(results)} tool version(s)")
    return 0


def _add_output_flags(parser: argparse.ArgumentParser, *, debug: bool) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    if debug:
        parser.add_argument(
            "-d",
            "--debug",
            action="store_true",
            help="Show detailed debugging output (implies --verbose)",
        )


def build_parser() -> argparse.ArgumentParser:
    """Builds the argument parser with all subcommands registered."""
    parser = argparse.ArgumentParser(
        prog="vermatch",
        description="vermatch - order, match and resolve tool version strings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"vermatch {_package_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'parse' command
    parser_parse = subparsers.add_parser(
        "parse",
        help="Show the structure and validity of a version",
        description="Split a version into segments and report validity, phase and pattern.",
    )
    parser_parse.add_argument("version", help="Version string (e.g., 1.0-alpha1)")
    _add_output_flags(parser_parse, debug=False)
    parser_parse.set_defaults(func=cmd_parse)

    # 'compare' command
    parser_compare = subparsers.add_parser(
        "compare",
        help="Order two versions",
        description="Print whether the first version is older, equal or newer.",
    )
    parser_compare.add_argument("left", help="First version")
    parser_compare.add_argument("right", help="Second version")
    _add_output_flags(parser_compare, debug=False)
    parser_compare.set_defaults(func=cmd_compare)

    # 'match' command
    parser_match = subparsers.add_parser(
        "match",
        help="Check whether a version fits a pattern",
        description="Exit 0 if the version matches the pattern (e.g., 17*, *, *!), 1 otherwise.",
    )
    parser_match.add_argument("pattern", help="Version pattern (e.g., 17*)")
    parser_match.add_argument("version", help="Concrete version (e.g., 17.0.2)")
    _add_output_flags(parser_match, debug=False)
    parser_match.set_defaults(func=cmd_match)

    # 'resolve' command
    parser_resolve = subparsers.add_parser(
        "resolve",
        help="Resolve manifest tool versions against their catalogs",
        description="Pick the newest catalog version matching each tool's version pattern.",
    )
    parser_resolve.add_argument("manifest", help="Path to the manifest YAML file")
    parser_resolve.add_argument(
        "--tool",
        default=None,
        help="Resolve only this tool (default: all tools)",
    )
    parser_resolve.add_argument(
        "--include-invalid",
        action="store_true",
        help="Also consider catalog versions that are not valid identifiers",
    )
    _add_output_flags(parser_resolve, debug=True)
    parser_resolve.set_defaults(func=cmd_resolve)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the vermatch CLI.

    This function is registered as the 'vermatch' console script in pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
