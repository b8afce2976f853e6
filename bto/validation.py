"""Parsing and validation helpers shared by the CSV and menu layers."""

import datetime
import re

from bto.errors import InvalidInputError, InvalidNRICError

NRIC_PATTERN = re.compile(r"^[STst][0-9]{7}[A-Za-z]$")

DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y")


def is_valid_nric(nric):
    return bool(nric) and NRIC_PATTERN.match(nric.strip()) is not None


def normalize_nric(nric):
    """Return the upper-cased NRIC or raise InvalidNRICError."""
    if not is_valid_nric(nric):
        raise InvalidNRICError(
            "Invalid NRIC format. It should start with S or T, "
            "followed by 7 digits, and end with a letter."
        )
    return nric.strip().upper()


def parse_date(date_str):
    """Expect YYYY-MM-DD (DD/MM/YYYY also accepted). Return date or None if invalid."""
    if not date_str:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.datetime.strptime(date_str.strip(), fmt).date()
        except ValueError:
            continue
    return None


def format_date(value):
    return value.isoformat() if value else ""


def parse_int(text, field="value", minimum=None, maximum=None):
    """Parse a whole number from user input, enforcing optional bounds."""
    try:
        value = int(str(text).strip())
    except (TypeError, ValueError):
        raise InvalidInputError(f"Invalid {field}: please enter a whole number.")
    if minimum is not None and value < minimum:
        raise InvalidInputError(f"Invalid {field}: must be at least {minimum}.")
    if maximum is not None and value > maximum:
        raise InvalidInputError(f"Invalid {field}: must be at most {maximum}.")
    return value


def periods_overlap(start1, end1, start2, end2):
    """True when two inclusive date ranges share at least one day."""
    if not (start1 and end1 and start2 and end2):
        return False
    return not (end1 < start2 or start1 > end2)
