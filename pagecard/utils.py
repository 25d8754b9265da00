"""
Small helpers shared by the card builders.
"""
import re

from pagecard.errors import NumericFieldError

_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_int(name: str, value: str) -> int:
    """
    Parse a base-10 integer metatag value.

    Only an optional sign followed by ASCII digits is accepted, so values
    like " 10", "1_000" or "10px" are rejected.

    Raises:
        NumericFieldError: If the value is not an integer
    """
    if not _INT_RE.fullmatch(value):
        raise NumericFieldError(name, value)
    return int(value)
