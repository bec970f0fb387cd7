"""Unit tests for traceability code helpers."""

from __future__ import annotations

import pytest

from cutplan.domain import (
    TraceabilityAssigner,
    format_traceability_code,
    next_sequence_from_codes,
    parse_traceability_code,
)


class TestFormatTraceabilityCode:
    @pytest.mark.parametrize(
        "sequence, expected",
        [(1, "PC-001"), (42, "PC-042"), (999, "PC-999"), (1000, "PC-1000")],
    )
    def test_zero_padded(self, sequence: int, expected: str) -> None:
        assert format_traceability_code(sequence) == expected

    @pytest.mark.parametrize("sequence", [0, -1, 1.0, "3", True, None])
    def test_rejects_invalid_sequence(self, sequence: object) -> None:
        with pytest.raises(ValueError):
            format_traceability_code(sequence)  # type: ignore[arg-type]

    def test_assigner_uses_supplied_sequence(self) -> None:
        assigner = TraceabilityAssigner()
        assert assigner.assign(5) == "PC-005"
        assert assigner.assign(5) == "PC-005"


class TestParsing:
    @pytest.mark.parametrize(
        "code, expected",
        [
            ("PC-001", 1),
            ("PC-1000", 1000),
            (" PC-017 ", 17),
            ("PC-", None),
            ("XX-001", None),
            ("pc-001", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse(self, code: str | None, expected: int | None) -> None:
        assert parse_traceability_code(code) == expected

    def test_next_sequence_is_one_past_highest(self) -> None:
        assert next_sequence_from_codes(["PC-003", "PC-010", "bogus", None, "PC-002"]) == 11

    def test_next_sequence_without_codes(self) -> None:
        assert next_sequence_from_codes([]) == 1
        assert next_sequence_from_codes(["legacy"]) == 1
