"""Main entry point for Career-Scraper."""

import argparse
import asyncio
import sys
from pathlib import Path

from career_scraper import __version__
from career_scraper.config.settings import Settings
from career_scraper.extraction.errors import BrowserLaunchError, ConfigError
from career_scraper.extraction.models import RunResult
from career_scraper.output import FORMATS, detect_format, write_result
from career_scraper.utils.logging import configure_logging

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="career-scraper",
        description="Career-Scraper: selector-driven experience and education extraction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m career_scraper run config.json
  python -m career_scraper run config.yaml --output results.xlsx --yes
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="modes",
        description="Available operating modes",
    )

    run_parser = subparsers.add_parser(
        "run",
        help="Scrape the profiles listed in a config file",
    )
    run_parser.add_argument(
        "config",
        type=Path,
        help="Path to the scrape config (JSON or YAML)",
    )
    run_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file (overrides the config's output_file)",
    )
    run_parser.add_argument(
        "--format",
        choices=list(FORMATS),
        default=None,
        help="Output format (default: from the output file suffix)",
    )
    run_parser.add_argument(
        "--yes",
        action="store_true",
        help="Start scraping immediately instead of waiting for Enter",
    )
    run_parser.add_argument(
        "--headless",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Run the browser headless or headed (overrides settings and config)",
    )

    return parser


def print_summary(result: RunResult) -> None:
    """Print a per-profile summary of the run."""
    print("\n==========================================")
    print("            SCRAPING SUMMARY")
    print("==========================================")
    for outcome in result.profiles:
        print(f"\nURL: {outcome.profile_url}")
        print(f"   Status: {'Success' if outcome.success else 'Failed'}")
        print(f"   Experiences found: {outcome.total_experiences}")
        print(f"   Education found: {outcome.total_education}")
        if not outcome.success:
            print(f"   Error: {outcome.error}")

    skipped = result.total_profiles - len(result.profiles)
    if result.stopped and skipped:
        print(f"\nStopped by user: {skipped} profile(s) not processed")
    print(
        f"\nTotal experiences: {len(result.experience_records())}, "
        f"total education: {len(result.education_records())}"
    )


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, 1 for runtime failures, 2 for config errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    try:
        settings = Settings()
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return EXIT_FAILURE

    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(level=log_level)

    if parsed.mode is None:
        parser.print_help()
        return EXIT_OK

    logger.info(f"Career-Scraper v{__version__} starting in {parsed.mode} mode")

    if parsed.mode == "run":
        from career_scraper.extraction.loader import load_scrape_config
        from career_scraper.service import run_scrape

        try:
            config = load_scrape_config(parsed.config)
        except ConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_CONFIG_ERROR

        logger.info(f"Loaded {len(config.profiles)} profiles from {parsed.config}")
        output_path = parsed.output or config.output_file
        fmt = parsed.format or detect_format(output_path)

        try:
            result = asyncio.run(
                run_scrape(
                    config,
                    settings=settings,
                    headless=parsed.headless,
                    assume_yes=parsed.yes,
                )
            )
        except BrowserLaunchError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_FAILURE
        except Exception as e:
            logger.exception("Scrape run failed")
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_FAILURE

        try:
            written = write_result(result, output_path, fmt)
        except OSError as e:
            print(f"Error writing {output_path}: {e}", file=sys.stderr)
            return EXIT_FAILURE
        print(f"Wrote: {written}")
        print_summary(result)
        return EXIT_OK

    parser.print_help()
    return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
