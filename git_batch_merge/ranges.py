"""Parsing of numeric selections such as ``1,3-5,8``."""

from typing import List, Optional


class RangeParseError(ValueError):
    """Raised when a selection string is not a list of numbers and ranges."""
    pass


def _to_int(text: str, token: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise RangeParseError(f"Not a number: '{token}'") from None


def parse_ranges(text: str, limit: Optional[int] = None) -> List[int]:
    """Expand a comma separated list of numbers and ``start-end`` ranges.

    Numbers come back in first-occurrence order with duplicates dropped,
    ranges expanded in ascending order::

        >>> parse_ranges("1,3-5,8")
        [1, 3, 4, 5, 8]
        >>> parse_ranges("2,1-3")
        [2, 1, 3]

    A range reaching past ``limit`` is rejected before it is expanded.

    Raises:
        RangeParseError: naming the offending token when a range does not
            have exactly two parts, its start is greater than its end, it
            ends past ``limit``, or any part is not an integer.
    """
    numbers = {}  # dict keeps insertion order
    for raw in text.split(","):
        token = raw.strip()
        if "-" in token:
            bounds = token.split("-")
            if len(bounds) != 2:
                raise RangeParseError(f"Invalid range format: '{token}'")
            start = _to_int(bounds[0].strip(), token)
            end = _to_int(bounds[1].strip(), token)
            if start > end:
                raise RangeParseError(
                    f"Start of range cannot be greater than end: '{token}'"
                )
            if limit is not None and end > limit:
                raise RangeParseError(f"Index {end} is out of range in '{token}'")
            for number in range(start, end + 1):
                numbers.setdefault(number, None)
        else:
            numbers.setdefault(_to_int(token, token), None)
    return list(numbers)
