"""CLI command segments: list starred segments and their aliases."""

from tabulate import tabulate

from stravatrack.core import Stravatrack
from stravatrack.segments import resolve_segment_name


def run() -> None:
    """Print a table of starred segments with the name used in exports."""
    with Stravatrack() as st:
        st.segments_file.read()
        aliases = st.segments_file.aliases
        starred = st.starred_segments()

        rows = []
        for name in starred:
            record = starred.get(name) or {}
            distance = record.get("distance")
            km = f"{float(distance) / 1000:.2f}" if distance else "-"
            alias = resolve_segment_name(name, aliases)
            rows.append([record.get("id", ""), name, alias if alias != name.strip() else "-", km])

        if not rows:
            print("No starred segments.")
            return

        print(tabulate(rows, headers=["ID", "Segment", "Alias", "km"], tablefmt="simple", disable_numparse=True))
