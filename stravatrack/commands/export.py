"""CLI command export: write enriched activities to a GPX file."""

import argparse

from stravatrack.commands.common import activity_filter_from_args, print_skipped
from stravatrack.core import Stravatrack
from stravatrack.formats.gpx import write_gpx


def run(args: argparse.Namespace) -> None:
    with Stravatrack() as st:
        date_ranges = st.parse_date_ranges(args.dates)
        activity_filter = activity_filter_from_args(args, st.activity_filter)
        result = st.collect_activities(date_ranges, activity_filter)

        output = args.output or st.config.get("output", "activities.gpx")
        include_segments = not args.no_segments
        track_count = write_gpx(output, result.activities, include_segments=include_segments)

        print(f"Found {len(result.activities)} activities, wrote {track_count} tracks to {output}")
        for activity in result.activities:
            print(f"  {activity}")
            if include_segments:
                for effort in activity.segment_efforts:
                    print(f"    {effort}")

        if result.skipped:
            print(f"\nSkipped {len(result.skipped)} activities:")
            print_skipped(result.skipped)
