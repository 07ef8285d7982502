# htree/engine/grid_mapper.py
import numpy as np

from htree.geometry.primitives import Segment, scale_height


def grid_shape(level: int):
    """
    Grid partitions active at a level:
        V = 2**floor((level+1)/2)   rows    (vertical partitions)
        H = 2**floor(level/2 + 1)   columns (horizontal partitions)
    Level 0 -> (1, 2): one row, two columns -> the root bar.
    """
    num_vertical = 1 << ((level + 1) // 2)
    num_horizontal = 1 << (level // 2 + 1)
    return num_vertical, num_horizontal


def cell_indices(level: int, offset):
    """
    Grid-cell coordinates (x_start, y_start, x_end, y_end) of the segment
    `offset` at `level`. Works on python ints and on integer ndarrays.

    Each segment consumes two consecutive cells, starting at 2*offset.
      odd level  -> vertical bar,   column-major: cell = y + V*x
      even level -> horizontal bar, row-major:    cell = x + H*y
    """
    num_v, num_h = grid_shape(level)
    num_cells = num_v * num_h
    # unconditional: must hold even under python -O
    max_offset = int(np.max(offset))
    if num_cells < 2 * max_offset:
        raise AssertionError(
            f"Cell index out of grid at level {level}: "
            f"offset {max_offset} needs {2 * max_offset} cells, grid has {num_cells}")

    cell = 2 * offset
    if level % 2 == 1:
        y_start = cell % num_v
        x_start = (cell - y_start) // num_v
        y_end = (cell + 1) % num_v
        x_end = ((cell + 1) - y_end) // num_v
    else:
        x_start = cell % num_h
        y_start = (cell - x_start) // num_h
        x_end = (cell + 1) % num_h
        y_end = ((cell + 1) - x_end) // num_h
    return x_start, y_start, x_end, y_end


def _wide_type(dtype):
    # cell counts overflow narrow floats (float16 max is 65504): normalize in
    # at least double precision and cast only the result
    return np.result_type(dtype, np.float64).type


def _normalize(c, n, wide):
    # center of cell c out of n partitions
    return (np.asarray(c).astype(wide) + wide(0.5)) / wide(n)


def map_segment(level: int, offset: int, dtype=np.float64) -> Segment:
    """Normalized segment for (level, offset), coordinates of type `dtype`."""
    t = np.dtype(dtype).type
    w = _wide_type(dtype)
    num_v, num_h = grid_shape(level)
    xs, ys, xe, ye = cell_indices(level, offset)

    scale = scale_height(w)
    x_start = t(_normalize(xs, num_h, w))
    x_end = t(_normalize(xe, num_h, w))
    y_start = t(_normalize(ys, num_v, w) * scale)
    y_end = t(_normalize(ye, num_v, w) * scale)
    return Segment((x_start, y_start), (x_end, y_end))


def map_level(level: int, dtype=np.float64) -> np.ndarray:
    """
    All 2**level segments of a level at once.
    Returns (2**level, 2, 2): [i, 0] = start (x, y), [i, 1] = end (x, y).
    """
    w = _wide_type(dtype)
    num_v, num_h = grid_shape(level)
    offsets = np.arange(1 << level, dtype=np.int64)
    xs, ys, xe, ye = cell_indices(level, offsets)

    scale = scale_height(w)
    out = np.empty((offsets.size, 2, 2), dtype=dtype)
    out[:, 0, 0] = _normalize(xs, num_h, w)
    out[:, 0, 1] = _normalize(ys, num_v, w) * scale
    out[:, 1, 0] = _normalize(xe, num_h, w)
    out[:, 1, 1] = _normalize(ye, num_v, w) * scale
    return out
