"""Helpers shared by the activity commands."""

import argparse
from dataclasses import replace

from stravatrack.filters import ActivityFilter, parse_type_list


def activity_filter_from_args(args: argparse.Namespace, default: ActivityFilter) -> ActivityFilter:
    """Overlay command-line filter options on the configured filter."""
    activity_filter = default
    if args.commute_only or args.non_commute_only:
        activity_filter = replace(
            activity_filter, commute_only=args.commute_only, non_commute_only=args.non_commute_only
        )
    if args.include:
        activity_filter = replace(activity_filter, include=parse_type_list(args.include))
    if args.exclude:
        activity_filter = replace(activity_filter, exclude=parse_type_list(args.exclude))
    return activity_filter


def print_skipped(skipped) -> None:
    for item in skipped:
        print(f"  {item}")
