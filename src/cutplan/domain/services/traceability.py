"""Traceability code formatting.

The core holds no counter state: callers (usually a plan repository)
supply the next sequence number and this module only formats it.
"""

from __future__ import annotations

import re
from typing import Iterable

TRACEABILITY_PREFIX = "PC"
_CODE_PATTERN = re.compile(rf"^{TRACEABILITY_PREFIX}-(\d+)$")


def format_traceability_code(sequence: int) -> str:
    """Format a sequence number as ``PC-NNN``.

    Numbers are zero-padded to three digits and grow past 999.

    Examples:
        >>> format_traceability_code(7)
        'PC-007'
        >>> format_traceability_code(1234)
        'PC-1234'

    Raises:
        ValueError: If ``sequence`` is not an integer >= 1.
    """
    if isinstance(sequence, bool) or not isinstance(sequence, int):
        raise ValueError("Sequence must be an integer")
    if sequence < 1:
        raise ValueError("Sequence must be at least 1")
    return f"{TRACEABILITY_PREFIX}-{sequence:03d}"


def parse_traceability_code(code: str | None) -> int | None:
    """Return the sequence number in a ``PC-NNN`` code, or None."""
    if not code:
        return None
    match = _CODE_PATTERN.match(code.strip())
    if match is None:
        return None
    return int(match.group(1))


def next_sequence_from_codes(codes: Iterable[str | None]) -> int:
    """Return one past the highest sequence found in ``codes``.

    Unparsable codes are ignored. Returns 1 when nothing parses.
    """
    highest = 0
    for code in codes:
        number = parse_traceability_code(code)
        if number is not None and number > highest:
            highest = number
    return highest + 1


class TraceabilityAssigner:
    """Stamps caller-supplied sequence numbers as traceability codes."""

    def assign(self, sequence: int) -> str:
        return format_traceability_code(sequence)
