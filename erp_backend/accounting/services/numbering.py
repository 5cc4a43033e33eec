# accounting/services/numbering.py

"""
SEQUENTIAL DOCUMENT / CODE NUMBERING

Formats in use:
- Account codes:          <subgroup code><NNN>   e.g. 103001
- Journal entry numbers:  JV-<year>-<NNN>        e.g. JV-2026-004
- System voucher numbers: JV-<NNNN>              e.g. JV-0012
- Supplier codes:         SUP-<NNN>              e.g. SUP-007

The next number is derived from the highest existing numeric suffix for
the prefix (not from a row count), so gaps left by deletions never produce
a duplicate.
"""

from __future__ import annotations

import re


def next_sequence_value(
    *, model, field: str, prefix: str, width: int, filters: dict | None = None
) -> str:
    """
    `filters` narrows the rows the sequence is read from (e.g. one subgroup).
    """
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")

    values = model.objects.filter(
        **{f"{field}__startswith": prefix}, **(filters or {})
    ).values_list(field, flat=True)

    highest = 0
    for value in values:
        match = pattern.match(value or "")
        if match:
            highest = max(highest, int(match.group(1)))

    return f"{prefix}{str(highest + 1).zfill(width)}"
