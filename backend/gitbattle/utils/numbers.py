import math


def round_half_up(value: float, digits: int = 0):
    """Round halves up (JavaScript ``Math.round`` semantics), not to even."""
    factor = 10**digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded
