"""Shared numeric helpers."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, sending ties toward positive infinity.

    Python's built-in ``round`` uses banker's rounding, which would shift the
    generated dataset and the percentage changes by one on exact halves.

    Example:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
    """
    return int(math.floor(value + 0.5))
