# htree/geometry/draw_utils.py
import numpy as np
from matplotlib.collections import LineCollection


class DrawUtils:

    @staticmethod
    def segments_to_lines(segments, scale=1.0):
        """Stack segments into an (N, 2, 2) array, endpoints multiplied by scale."""
        lines = [np.vstack([seg.a, seg.b]) for seg in segments]  # each (2,2)
        if not lines:
            return np.zeros((0, 2, 2))
        return np.asarray(lines, dtype=float) * scale

    @staticmethod
    def draw_segments(ax, segments, scale=1.0, color="k", lw=1.0, zorder=5):
        """Draws the segments as a LineCollection and returns the artist."""
        lines = DrawUtils.segments_to_lines(segments, scale)
        if len(lines) == 0:
            return None
        lc = LineCollection(lines, colors=color, linewidths=lw, zorder=zorder)
        ax.add_collection(lc)
        return lc
