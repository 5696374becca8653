"""
Unit tests for the stat record parser.

Covers the two-phase parse (delimited name, then ordinal fields), tolerance
for odd process names, and rejection of malformed records.
"""

import pytest

from procbench.models import ProcessStatRecord
from procbench.procfs.stat_parser import (
    STAT_FIELDS,
    StatLineParser,
    StatOverflowError,
    parse_int64,
    parse_stat_line,
)

from conftest import make_stat_line


@pytest.mark.unit
class TestParseInt64:
    """Test cases for numeric token conversion."""

    def test_plain_and_negative_numbers(self):
        assert parse_int64("0") == 0
        assert parse_int64("12345") == 12345
        assert parse_int64("-7") == -7

    def test_non_numeric_token_returns_none(self):
        assert parse_int64("abc") is None
        assert parse_int64("12a") is None
        assert parse_int64("") is None
        assert parse_int64("+5") is None

    def test_int64_bounds(self):
        assert parse_int64("9223372036854775807") == 2**63 - 1
        assert parse_int64("-9223372036854775808") == -(2**63)

        with pytest.raises(StatOverflowError):
            parse_int64("9223372036854775808")


@pytest.mark.unit
class TestStatLineParser:
    """Test cases for StatLineParser."""

    def test_parses_required_fields(self):
        line = make_stat_line(
            1234, "bash", state="S", utime=150, stime=50,
            starttime=9000, vsize=123456789, rss=321,
        )

        record = parse_stat_line(line)

        assert record == ProcessStatRecord(
            process_name="bash",
            state="S",
            user_cpu_ticks=150,
            kernel_cpu_ticks=50,
            start_time_ticks=9000,
            virtual_memory_bytes=123456789,
            resident_set_pages=321,
        )
        assert record.total_cpu_ticks == 200

    def test_name_with_parentheses_and_spaces(self):
        record = parse_stat_line(make_stat_line(42, "(weird) proc", state="R", utime=3))

        assert record is not None
        assert record.process_name == "(weird) proc"
        assert record.state == "R"
        assert record.user_cpu_ticks == 3

    def test_name_containing_closing_paren_uses_last_one(self):
        record = parse_stat_line(make_stat_line(7, "a) S 1 2 3", state="Z", stime=9))

        assert record is not None
        assert record.process_name == "a) S 1 2 3"
        assert record.state == "Z"
        assert record.kernel_cpu_ticks == 9

    def test_empty_name(self):
        record = parse_stat_line(make_stat_line(8, "", state="S"))

        assert record is not None
        assert record.process_name == ""

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "1234 bash S 1 2 3",
            "1234 (bash S 1 2 3",
            "1234 bash) S 1 2 3",
            "1234 )bash( S 1 2 3",
            "1234 (bash)",
            "1234 (bash) ",
            "1234 (bash)  1 2 3",
            "1234 (bash)XS 1 2 3",
            "1234 (bash)\tS 1 2 3",
        ],
    )
    def test_malformed_delimiters_return_none(self, line):
        assert parse_stat_line(line) is None

    def test_truncated_line_reads_missing_fields_as_zero(self):
        record = parse_stat_line("1234 (bash) S 1 2 3 4 5 6 7 8 9 10 11 12\n")

        assert record is not None
        # field 14 (utime) is the 11th token after the state
        assert record.user_cpu_ticks == 11
        assert record.kernel_cpu_ticks == 12
        assert record.start_time_ticks == 0
        assert record.virtual_memory_bytes == 0
        assert record.resident_set_pages == 0

    def test_non_numeric_required_field_reads_as_zero(self):
        record = parse_stat_line(make_stat_line(5, "x", utime="garbage", stime=4))

        assert record is not None
        assert record.user_cpu_ticks == 0
        assert record.kernel_cpu_ticks == 4

    def test_overflow_in_required_field_rejects_record(self):
        line = make_stat_line(5, "x", vsize="9223372036854775808")

        assert parse_stat_line(line) is None

    def test_overflow_after_last_required_field_is_ignored(self):
        # make_stat_line puts RLIM_INFINITY (> int64) into field 25
        line = make_stat_line(5, "x", rss=12)
        assert "18446744073709551615" in line

        record = parse_stat_line(line)

        assert record is not None
        assert record.resident_set_pages == 12

    def test_negative_cpu_ticks_reject_record(self):
        assert parse_stat_line(make_stat_line(5, "x", utime=-1)) is None
        assert parse_stat_line(make_stat_line(5, "x", stime=-3)) is None

    def test_custom_field_table(self):
        parser = StatLineParser({14: "user_cpu_ticks", 15: "kernel_cpu_ticks",
                                 22: "start_time_ticks", 23: "virtual_memory_bytes",
                                 24: "resident_set_pages"})

        assert parser.fields == STAT_FIELDS
        assert parser.parse(make_stat_line(1, "init", utime=2)).user_cpu_ticks == 2
