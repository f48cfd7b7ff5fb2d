"""Command line interface for birdcheck."""

import argparse
import sys
from importlib.metadata import version

from .birdcheck import DEFAULT_URL, BirdCheck
from .fixtures import DEFAULT_FIXTURES_DIR, EXPECTED_LABELS, load_fixtures
from .page_driver import RESULT_TIMEOUT_MS
from .recorder import DEFAULT_RESULTS_DIR


def main(runner_class=BirdCheck):
    """Main function with command line argument parsing."""
    pkg_version = version("birdcheck")

    parser = argparse.ArgumentParser(
        description="birdcheck - End-to-end checks for a bird identification website"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"birdcheck {pkg_version}",
    )
    parser.add_argument(
        "--url",
        type=str,
        default=DEFAULT_URL,
        help=f"Identification page to test (default: {DEFAULT_URL})",
    )
    parser.add_argument(
        "--fixtures-dir",
        type=str,
        default=DEFAULT_FIXTURES_DIR,
        help=f"Directory holding the sample images (default: {DEFAULT_FIXTURES_DIR})",
    )
    parser.add_argument(
        "--results-dir",
        type=str,
        default=DEFAULT_RESULTS_DIR,
        help=f"Directory for diagnostics, screenshots and report (default: {DEFAULT_RESULTS_DIR})",
    )
    parser.add_argument(
        "--fixture",
        action="append",
        default=None,
        choices=sorted(EXPECTED_LABELS),
        help="Only run this fixture (can be repeated)",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=RESULT_TIMEOUT_MS,
        help=f"Time to wait for results, in milliseconds (default: {RESULT_TIMEOUT_MS})",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window",
    )
    parser.add_argument(
        "--slow-mo",
        type=int,
        default=0,
        help="Slow down browser operations by this many milliseconds (default: 0)",
    )
    parser.add_argument(
        "--keep-open",
        action="store_true",
        help="Leave the browser open after the last case",
    )
    parser.add_argument(
        "--report-only",
        action="store_true",
        help="Rebuild the HTML report from the last summary without running cases",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output with each browser step and saved artifact",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show debug output including raw text read from the page",
    )

    args = parser.parse_args()

    runner = runner_class(
        base_url=args.url,
        fixtures_dir=args.fixtures_dir,
        results_dir=args.results_dir,
        headless=not args.headed,
        slow_mo=args.slow_mo,
        timeout_ms=args.timeout,
        keep_open=args.keep_open,
        verbose=args.verbose,
        debug=args.debug,
    )

    if args.report_only:
        runner.regenerate_report()
        return

    fixtures = load_fixtures(args.fixtures_dir, only=args.fixture)
    context = runner.run_suite(fixtures=fixtures)

    if context.failed:
        sys.exit(1)
