"""Integer rounding shared by every aggregation level."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +infinity.

    2.5 -> 3 and -2.5 -> -2, where round() would give 2 and -2.
    """
    return int(math.floor(value + 0.5))
