"""
Tests for position -> (level, offset) decoding.
"""

import pytest
from htree.engine.decoder import (
    MAX_ORDER, decode_level, level_of, level_range, segment_count,
)


def test_level_of_powers_of_two():
    assert level_of(1) == 0
    assert level_of(2) == 1
    assert level_of(3) == 1
    assert level_of(4) == 2
    assert level_of(7) == 2
    assert level_of(8) == 3
    assert level_of(2**62) == 62
    assert level_of(2**63 - 1) == 62


def test_position_zero_is_invalid():
    with pytest.raises(ValueError, match="Position must be >= 1"):
        level_of(0)
    with pytest.raises(ValueError):
        decode_level(0, order=3)


def test_decode_level_offsets():
    assert decode_level(1, order=0) == (0, 0)
    assert decode_level(2, order=1) == (1, 0)
    assert decode_level(3, order=1) == (1, 1)
    assert decode_level(13, order=3) == (3, 5)


def test_decode_level_terminates_past_order():
    assert decode_level(2, order=0) is None
    assert decode_level(4, order=1) is None
    # last position of an order-3 tree is still decoded
    assert decode_level(15, order=3) == (3, 7)
    assert decode_level(16, order=3) is None


@pytest.mark.parametrize("order", [0, 1, 2, 5, 10])
def test_every_level_covers_its_offsets(order):
    """Each level k owns positions [2**k, 2**(k+1)) and offsets 0..2**k-1."""
    for k in range(order + 1):
        offsets = [decode_level(p, order)[1] for p in level_range(k)]
        assert [decode_level(p, order)[0] for p in level_range(k)] == [k] * (2**k)
        assert offsets == list(range(2**k))


def test_segment_count():
    assert segment_count(0) == 1
    assert segment_count(1) == 3
    assert segment_count(14) == 2**15 - 1


def test_max_order_fits_counter():
    # the last position of the largest tree fits a signed 64-bit counter
    assert MAX_ORDER == 62
    assert segment_count(MAX_ORDER) <= 2**63 - 1
