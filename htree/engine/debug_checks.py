# htree/engine/debug_checks.py
import logging
import numpy as np

from htree.engine.decoder import level_range, segment_count
from htree.geometry.primitives import SCALE_HEIGHT

logger = logging.getLogger(__name__)


def _fmt_pt(p):
    return f"({float(p[0]):.6f}, {float(p[1]):.6f})"


def check_htree_segments(spec, segments=None, *, log_each=False, tol=1e-6):
    """
    Verifies a produced sequence against the H-tree laws:
      1) Count:       exactly 2**(order+1) - 1 segments
      2) Level size:  positions [2**k, 2**(k+1)) hold 2**k segments,
                      horizontal on even k, vertical on odd k
      3) Bounding box: 0 <= x <= 1 and 0 <= y <= 1/sqrt(2) (within tol)

    segments defaults to a fresh pass over spec.
    Returns True if all laws hold, else False.
    """
    segs = list(spec.produce_sequence() if segments is None else segments)
    ok_all = True

    # 1) count
    expected = segment_count(spec.order)
    if len(segs) != expected:
        logger.warning("[count] got %d segments, expected %d", len(segs), expected)
        ok_all = False

    # 2) level size + orientation
    for k in range(spec.order + 1):
        positions = level_range(k)
        level_segs = segs[positions.start - 1:positions.stop - 1]
        if len(level_segs) != len(positions):
            logger.warning("[level %d] %d segments, expected %d", k, len(level_segs), len(positions))
            ok_all = False
            continue
        horizontal = (k % 2 == 0)
        bad = [i for i, s in enumerate(level_segs) if s.is_horizontal != horizontal]
        if bad:
            logger.warning("[level %d] %d segments not %s (first at offset %d)",
                           k, len(bad), 'horizontal' if horizontal else 'vertical', bad[0])
            ok_all = False

    # 3) bounding box
    y_max = SCALE_HEIGHT
    for i, s in enumerate(segs):
        pts = np.array([s.start, s.end], dtype=float)
        inside = (np.all(pts[:, 0] >= -tol) and np.all(pts[:, 0] <= 1.0 + tol)
                  and np.all(pts[:, 1] >= -tol) and np.all(pts[:, 1] <= y_max + tol))
        if log_each:
            logger.debug("[s%d] %s -> %s : %s", i + 1, _fmt_pt(s.start), _fmt_pt(s.end),
                         'OK' if inside else 'BAD')
        if not inside:
            logger.warning("[bbox] segment %d %s -> %s outside [0,1]x[0,%.6f]",
                           i + 1, _fmt_pt(s.start), _fmt_pt(s.end), y_max)
            ok_all = False

    logger.info("H-tree order %d: %d segments checked -> %s",
                spec.order, len(segs), 'OK' if ok_all else 'BAD')
    return ok_all
