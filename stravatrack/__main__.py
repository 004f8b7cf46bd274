# pylint: disable=import-outside-toplevel
"""Main entry point for the stravatrack CLI.

This module provides the command-line interface for stravatrack, allowing users
to inspect their Strava athlete and starred segments, list enriched activities
and export them as a GPX track file.
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

load_dotenv()


def _add_activity_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dates",
        nargs="+",
        required=True,
        help="Date ranges as YYYYMMDD-YYYYMMDD, YYYYMMDD or YYYY-MM (home timezone)",
    )
    commute = parser.add_mutually_exclusive_group()
    commute.add_argument("--commute-only", action="store_true", help="Only include commutes")
    commute.add_argument("--non-commute-only", action="store_true", help="Exclude commutes")
    parser.add_argument("--include", help="Comma-separated activity types to include")
    parser.add_argument("--exclude", help="Comma-separated activity types to exclude")


def main(argv=None):
    """Main function for the stravatrack CLI."""
    parser = argparse.ArgumentParser(description="stravatrack CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress messages")
    subparsers = parser.add_subparsers(dest="command", required=True)

    auth_parser = subparsers.add_parser("auth", help="Authorize with Strava and print an access token")
    auth_parser.add_argument("--code", help="Authorization code (or redirect URL); prompts when omitted")
    auth_parser.add_argument(
        "--redirect-uri", default="https://localhost", help="Redirect URI registered for your Strava app"
    )
    subparsers.add_parser("athlete", help="Show the authenticated Strava athlete")
    subparsers.add_parser("segments", help="List starred segments and their aliases")

    list_parser = subparsers.add_parser("list", help="List enriched activities for the given dates")
    _add_activity_arguments(list_parser)

    export_parser = subparsers.add_parser("export", help="Export enriched activities as a GPX file")
    _add_activity_arguments(export_parser)
    export_parser.add_argument("--output", help="GPX file to write (default: from config)")
    export_parser.add_argument(
        "--no-segments", action="store_true", help="Leave starred segment efforts out of the track descriptions"
    )

    subparsers.add_parser("help", help="Show usage and documentation")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    from stravalib.exc import AccessUnauthorized

    from stravatrack.errors import ConfigError

    try:
        if args.command == "auth":
            from stravatrack.commands.auth import run

            run(code=args.code, redirect_uri=args.redirect_uri)
        elif args.command == "athlete":
            from stravatrack.commands.athlete import run

            run()
        elif args.command == "segments":
            from stravatrack.commands.segments import run

            run()
        elif args.command == "list":
            from stravatrack.commands.list_activities import run

            run(args)
        elif args.command == "export":
            from stravatrack.commands.export import run

            run(args)
        elif args.command == "help":
            print(
                """
stravatrack - Export Strava activities, description metadata and starred
segment efforts as GPX tracks.

Usage:
    python -m stravatrack <command>

Commands:
    auth       Authorize with Strava and print an access token
    athlete    Show the authenticated Strava athlete
    segments   List starred segments and their aliases
    list       List enriched activities for the given dates
    export     Export enriched activities as a GPX file
    help       Show this help and usage documentation

Setup:
    1. Set STRAVA_CLIENT_ID and STRAVA_CLIENT_SECRET, run 'python -m stravatrack auth'
       and put the printed STRAVA_ACCESS_TOKEN in your environment or a .env file.
    2. Optionally create stravatrack_config.json and a segments file with an
       "alias" table mapping Strava segment names to your own names.
    3. Run 'python -m stravatrack export --dates 2021-05'.
"""
            )
    except (ConfigError, AccessUnauthorized, RuntimeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
