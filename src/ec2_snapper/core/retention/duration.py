"""Parsing of relative age expressions such as '30d', '4h' or '5m'."""

import re

from ec2_snapper.utils.exceptions import InvalidFormatError

OLDER_THAN_PATTERN = re.compile(r"([0-9]+)([hdm])")


def parse_older_than(expr: str) -> float:
    """Convert an age expression into a number of hours.

    Accepts a non-negative integer immediately followed by one unit:
    ``h`` (hours), ``d`` (days) or ``m`` (minutes).

    Example:
        parse_older_than("30d")  # 720.0
        parse_older_than("90m")  # 1.5

    Raises:
        InvalidFormatError: the expression does not match the grammar.
    """
    match = OLDER_THAN_PATTERN.fullmatch(expr) if isinstance(expr, str) else None
    if not match:
        raise InvalidFormatError(
            f'The --older-than value of "{expr}" is not formatted properly. '
            "Use formats like 30d or 24h"
        )

    amount, unit = match.groups()
    try:
        hours = float(int(amount))
    except (OverflowError, ValueError) as e:
        raise InvalidFormatError(
            f'The --older-than value of "{expr}" is too large. Use formats like 30d or 24h'
        ) from e
    if unit == "d":
        hours *= 24
    elif unit == "m":
        hours /= 60
    return hours
