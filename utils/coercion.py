"""
Best-effort conversions applied to submitted form values.

Every function here is total: malformed input never raises, it falls back
to the field's empty value instead.
"""

import math
from datetime import datetime

import pandas as pd

# Relative words pandas resolves to the current time; none of them is a date
RELATIVE_DATE_WORDS = {"now", "today", "tomorrow", "yesterday"}


def to_text(value) -> str:
    """Stringify a scalar form value; None becomes an empty string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_number(value) -> float:
    """
    Parse a numeric form value.

    Blank, missing, non-numeric and non-finite input all become 0.
    """
    if value is None or isinstance(value, (list, dict)):
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0
    else:
        text = str(value).strip()
        if not text:
            return 0
        # float() accepts "1_000"; form input should not
        if "_" in text:
            return 0
        try:
            number = float(text)
        except ValueError:
            return 0

    if math.isnan(number) or math.isinf(number):
        return 0
    return number


def to_date(value):
    """Parse a date from various formats, returning None when it cannot be parsed."""
    if value is None or isinstance(value, (bool, list, dict)):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and (not value.strip() or value.strip().lower() in RELATIVE_DATE_WORDS):
        return None

    try:
        parsed = pd.to_datetime(value)
    except (ValueError, TypeError, OverflowError):
        return None

    if pd.isna(parsed):
        return None
    if parsed.tzinfo is not None:
        # dates are stored as naive UTC
        parsed = parsed.tz_convert("UTC").tz_localize(None)
    return parsed.floor("us").to_pydatetime()
