"""Extraction of ``key = value`` metadata from free-text activity descriptions.

Strava descriptions are free text, but lines of the form ``shoes = Speedster``
are treated as structured metadata. Everything else is kept as the residual
description.
"""

from __future__ import annotations

import re
from typing import NamedTuple

KEY_VALUE_LINE = re.compile(r"^([^\s=]+)\s*=\s*(.*)$")
LINE_BREAK = re.compile(r"\r\n|\n|\r")


class DescriptionMetadata(NamedTuple):
    residual_lines: list[str]
    pairs: dict[str, str]

    @property
    def residual(self) -> str | None:
        """Residual free text, or None when every non-blank line was a key/value pair."""
        if not any(line.strip() for line in self.residual_lines):
            return None
        return "\n".join(self.residual_lines)


def extract_metadata(description: str | None) -> DescriptionMetadata:
    """Split *description* into key/value pairs and residual lines.

    Pairs keep line order. A key that appears twice keeps its first position
    and takes the later value.
    """
    if not description or not description.strip():
        return DescriptionMetadata([], {})

    residual_lines: list[str] = []
    pairs: dict[str, str] = {}
    for line in LINE_BREAK.split(description):
        match = KEY_VALUE_LINE.match(line)
        if match:
            pairs[match.group(1)] = match.group(2)
        else:
            residual_lines.append(line)

    return DescriptionMetadata(residual_lines, pairs)
