"""
Parser for the per-process stat record (`/proc/<pid>/stat`).

The record is a single line of space separated fields whose positions are
fixed by the kernel, except for field 2: the command name, wrapped in
parentheses, which may itself contain spaces and parentheses. Parsing is
therefore done in two phases:

1. Delimiter extraction of the variable-length prefix. The name is taken
   between the first '(' and the *last* ')', and the state code is the
   character following ") ".
2. Ordinal tokenization of the fixed-layout suffix, where the first token
   after the state is kernel field 4.

Only the fields listed in STAT_FIELDS are converted; scanning stops as soon
as the last of them has been seen.
"""

import logging
import re
from typing import Dict, Mapping, Optional

from ..models.process import ProcessStatRecord

logger = logging.getLogger(__name__)

# Kernel field number (1-based, see proc(5)) -> ProcessStatRecord attribute.
STAT_FIELDS: Dict[int, str] = {
    14: "user_cpu_ticks",  # utime
    15: "kernel_cpu_ticks",  # stime
    22: "start_time_ticks",  # starttime
    23: "virtual_memory_bytes",  # vsize
    24: "resident_set_pages",  # rss
}

# Field number of the first token after "(comm) state".
FIRST_TOKEN_FIELD = 4

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INTEGER_RE = re.compile(r"-?[0-9]+", re.ASCII)


class StatOverflowError(ValueError):
    """A required numeric field does not fit in a signed 64-bit integer."""


def parse_int64(token: str) -> Optional[int]:
    """
    Parse a decimal token as a signed 64-bit integer.

    Returns None if the token is not an optional '-' followed by digits.

    Raises:
        StatOverflowError: If the token is numeric but out of int64 range.
    """
    if not _INTEGER_RE.fullmatch(token):
        return None
    value = int(token)
    if value < INT64_MIN or value > INT64_MAX:
        raise StatOverflowError(f"stat field out of int64 range: {token}")
    return value


class StatLineParser:
    """
    Parses stat lines into ProcessStatRecord values.

    The field table is injectable so a change in the kernel's field layout
    only touches STAT_FIELDS (or the table handed to the constructor).
    """

    def __init__(self, fields: Optional[Mapping[int, str]] = None):
        self.fields: Dict[int, str] = dict(fields if fields is not None else STAT_FIELDS)
        self._last_field = max(self.fields)

    def parse(self, line: str) -> Optional[ProcessStatRecord]:
        """
        Parse one stat line.

        Non-numeric tokens at required positions, as well as required fields
        missing from a truncated line, read as 0.

        Returns:
            The parsed record, or None if the name delimiters cannot be
            located, no state follows the name, a required field overflows
            int64, or the CPU tick counters are negative.
        """
        open_paren = line.find("(")
        close_paren = line.rfind(")")
        if open_paren < 0 or close_paren <= open_paren:
            return None

        process_name = line[open_paren + 1:close_paren]

        # ") S ..." -> state sits two characters after the closing paren
        state_index = close_paren + 2
        if state_index >= len(line) or line[close_paren + 1] != " ":
            return None
        state = line[state_index]
        if state.isspace():
            return None

        values = dict.fromkeys(self.fields.values(), 0)
        field_number = FIRST_TOKEN_FIELD - 1
        for token in line[state_index + 1:].split():
            field_number += 1
            attribute = self.fields.get(field_number)
            if attribute is not None:
                try:
                    parsed = parse_int64(token)
                except StatOverflowError as e:
                    logger.debug(f"Rejecting stat record for '{process_name}': {e}")
                    return None
                values[attribute] = parsed if parsed is not None else 0
            if field_number >= self._last_field:
                break

        record = ProcessStatRecord(process_name=process_name, state=state, **values)
        if record.user_cpu_ticks < 0 or record.kernel_cpu_ticks < 0:
            return None
        return record


_default_parser = StatLineParser()


def parse_stat_line(line: str) -> Optional[ProcessStatRecord]:
    """Parse a stat line using the standard kernel field layout."""
    return _default_parser.parse(line)
