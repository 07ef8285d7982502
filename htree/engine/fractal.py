# htree/engine/fractal.py
import logging
import numpy as np
from dataclasses import dataclass

from htree.engine.decoder import (
    MAX_ORDER, decode_level, level_of, max_order_for, segment_count,
)
from htree.engine.grid_mapper import map_level, map_segment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HTreeSpec:
    """
    H-tree up to recursion depth `order`, with coordinates of numpy type `dtype`.

    Segments live in [0, 1] x [0, 1/sqrt(2)]. Position p (1-based) maps to
    exactly one segment, so any position can be decoded on its own:
        level  = floor(log2(p))
        offset = p - 2**level
    """
    order: int
    dtype: object = np.float64

    def __post_init__(self):
        if isinstance(self.order, bool) or not isinstance(self.order, (int, np.integer)):
            raise TypeError(f"Order must be an integer, got {type(self.order).__name__}")
        if self.order < 0:
            raise ValueError("Order must be non-negative")
        if self.order > MAX_ORDER:
            raise ValueError(f"Order too large: {self.order} > {MAX_ORDER} (int64 position counter)")
        if self.dtype is None:
            # np.dtype(None) would silently mean float64
            raise TypeError("Coordinate dtype must be given, got None")
        try:
            dt = np.dtype(self.dtype)
        except TypeError as e:
            raise TypeError(f"Invalid coordinate dtype: {self.dtype!r}") from e
        if dt.kind != 'f':
            raise TypeError(f"Coordinate dtype must be floating point, got {dt}")
        if self.order > max_order_for(dt):
            raise ValueError(f"Order too large for dtype {dt.name}: "
                             f"{self.order} > {max_order_for(dt)}")
        # frozen: bypass __setattr__ to store the resolved values
        object.__setattr__(self, 'order', int(self.order))
        object.__setattr__(self, 'dtype', dt.type)
        logger.debug("HTreeSpec(order=%d, dtype=%s): %d segments",
                     self.order, dt.name, len(self))

    # ------- sequence -------
    def produce_sequence(self) -> 'HTreeIterator':
        """Fresh cursor over all segments, starting at the root bar."""
        return HTreeIterator(self)

    def __iter__(self):
        return self.produce_sequence()

    def __len__(self):
        return segment_count(self.order)

    # ------- random access -------
    def level_of(self, position: int) -> int:
        return level_of(position)

    def segment_at(self, position: int):
        """Segment at 1-based `position`, decoded without replaying earlier ones."""
        if not 1 <= position <= len(self):
            raise IndexError(f"Position {position} outside [1, {len(self)}]")
        level, offset = decode_level(position, self.order)
        return map_segment(level, offset, self.dtype)

    def segments_between(self, start: int, stop: int):
        """Lazily yield segments for positions in [start, stop), clamped to the tree."""
        start = max(start, 1)
        stop = min(stop, len(self) + 1)
        for position in range(start, stop):
            level, offset = decode_level(position, self.order)
            yield map_segment(level, offset, self.dtype)

    def shards(self, n: int):
        """
        Split all positions into n contiguous half-open ranges (start, stop).
        Decoding every shard and concatenating gives the full sequence.
        """
        if n < 1:
            raise ValueError(f"Shard count must be >= 1, got {n}")
        total = len(self)
        bounds = [1 + (total * k) // n for k in range(n + 1)]
        return [(bounds[k], bounds[k + 1]) for k in range(n)]

    # ------- bulk -------
    def to_array(self) -> np.ndarray:
        """(2**(order+1) - 1, 2, 2) array of all segments, in sequence order."""
        return np.concatenate([map_level(k, self.dtype) for k in range(self.order + 1)])


class HTreeIterator:
    """Cursor over an HTreeSpec. Only state is the position counter."""
    def __init__(self, spec: HTreeSpec):
        self.spec = spec
        self.position = 0

    def advance(self):
        """Next Segment, or None once the tree is exhausted."""
        self.position += 1
        decoded = decode_level(self.position, self.spec.order)
        if decoded is None:
            return None
        level, offset = decoded
        return map_segment(level, offset, self.spec.dtype)

    def seek(self, position: int):
        """Place the cursor so that the next advance() decodes position + 1."""
        if position < 0:
            raise ValueError(f"Position must be non-negative, got {position}")
        self.position = position

    def remaining(self) -> int:
        return max(len(self.spec) - self.position, 0)

    def __iter__(self):
        return self

    def __next__(self):
        seg = self.advance()
        if seg is None:
            raise StopIteration
        return seg
