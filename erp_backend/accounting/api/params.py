# accounting/api/params.py

"""
Query-param parsing shared by the report views.

Invalid values raise ValueError with a message fit for a 400 body.
"""

from __future__ import annotations

from datetime import date

from django.utils.dateparse import parse_date, parse_datetime


def parse_date_param(value: str | None, field_name: str) -> date | None:
    if value is None:
        return None

    s = str(value).strip()
    if s == "":
        return None

    dt = parse_datetime(s)
    if dt is not None:
        return dt.date()

    try:
        d = parse_date(s)
    except ValueError:
        d = None
    if d is not None:
        return d

    raise ValueError(f"Invalid {field_name} (expected YYYY-MM-DD)")


def parse_int_param(value: str | None, field_name: str, *, default: int | None = None):
    if value is None or str(value).strip() == "":
        return default
    try:
        return int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be an integer") from exc


def parse_date_window(query_params, from_key: str, to_key: str):
    """
    (from_date, to_date) with a from > to check.
    """
    from_date = parse_date_param(query_params.get(from_key), from_key)
    to_date = parse_date_param(query_params.get(to_key), to_key)
    if from_date and to_date and from_date > to_date:
        raise ValueError(f"{from_key} cannot be after {to_key}")
    return from_date, to_date
