import numpy as np
from dataclasses import dataclass

# height of the H-tree bounding rectangle relative to its width (1/sqrt(2))
SCALE_HEIGHT = 0.7071067811865475244


def scale_height(ftype=np.float64):
    """1/sqrt(2) computed in floating type ftype (full longdouble precision)."""
    return ftype(1) / np.sqrt(ftype(2))


@dataclass(frozen=True)
class Segment:
    """Line segment between start=(x, y) and end=(x, y), normalized coordinates."""
    start: tuple
    end: tuple

    def __iter__(self):
        # allows: start, end = seg
        yield self.start
        yield self.end

    @property
    def a(self) -> np.ndarray:
        return np.array(self.start)

    @property
    def b(self) -> np.ndarray:
        return np.array(self.end)

    @property
    def is_horizontal(self) -> bool:
        return self.start[1] == self.end[1]

    def scaled(self, factor):
        """Same segment with both endpoints multiplied by factor (e.g. pixel scale)."""
        (x0, y0), (x1, y1) = self.start, self.end
        return Segment((x0 * factor, y0 * factor), (x1 * factor, y1 * factor))
