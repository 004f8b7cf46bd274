"""CLI command list: print the enriched activity set for some dates."""

import argparse

from tabulate import tabulate

from stravatrack.commands.common import activity_filter_from_args, print_skipped
from stravatrack.core import Stravatrack
from stravatrack.utils import format_hms


def run(args: argparse.Namespace) -> None:
    with Stravatrack() as st:
        date_ranges = st.parse_date_ranges(args.dates)
        activity_filter = activity_filter_from_args(args, st.activity_filter)
        result = st.collect_activities(date_ranges, activity_filter, coordinates=False)

        rows = []
        for activity in result.activities:
            segments = ", ".join(effort.name for effort in activity.segment_efforts)
            rows.append(
                [
                    activity.id,
                    str(activity),
                    format_hms(activity.moving_time),
                    "✓" if activity.commute else "",
                    segments,
                ]
            )

        if rows:
            print(tabulate(rows, headers=["ID", "Activity", "Moving", "Commute", "Segments"], tablefmt="simple"))
        else:
            print("No activities found.")

        if result.skipped:
            print(f"\nSkipped {len(result.skipped)} activities:")
            print_skipped(result.skipped)
