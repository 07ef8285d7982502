# htree/engine/decoder.py
import numpy as np

# positions are modeled as int64 counters; the last position of an order-k
# tree is 2**(k+1) - 1, so k may not exceed 62
COUNTER_DTYPE = np.int64
MAX_ORDER = np.iinfo(COUNTER_DTYPE).bits - 2


def max_order_for(dtype) -> int:
    """
    Deepest order whose cell centers a float type can still tell apart.

    The widest grid at level k has H = 2**(k//2 + 1) columns; neighbouring
    centers are 1/H apart, which must not drop below the type's epsilon
    (2**-nmant). That gives k <= 2*nmant - 1, capped by MAX_ORDER.
    """
    nmant = np.finfo(dtype).nmant
    return min(MAX_ORDER, 2 * nmant - 1)


def level_of(position: int) -> int:
    """Recursion level of a (1-based) position: floor(log2(position))."""
    if position < 1:
        raise ValueError(f"Position must be >= 1, got {position}")
    return int(position).bit_length() - 1


def decode_level(position: int, order: int):
    """
    Split a linear position into (level, offset).

    level  = floor(log2(position))
    offset = position - 2**level, i.e. index of the segment within its level

    Returns None once level > order (end of sequence, not an error).
    """
    level = level_of(position)
    if level > order:
        return None
    offset = position - (1 << level)
    return level, offset


def segment_count(order: int) -> int:
    """Total segments of an order-`order` tree: 2**(order+1) - 1."""
    return (1 << (order + 1)) - 1


def level_range(level: int):
    """Half-open position range [2**level, 2**(level+1)) holding one level."""
    return range(1 << level, 1 << (level + 1))
