import math
import matplotlib
import matplotlib.pyplot as plt

from htree.engine.fractal import HTreeSpec
from htree.geometry.draw_utils import DrawUtils


def run_plot(order=10, scale=700, save_path=None, dtype="float32"):
    """
    Draw an H-tree of the given order on a scale x scale/sqrt(2) canvas
    (black lines, white background). Saves a PNG if save_path is given,
    otherwise shows the window. Returns the figure.
    """
    htree = HTreeSpec(order, dtype=dtype)

    width = scale
    height = int(scale / math.sqrt(2))
    dpi = 100

    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)   # image convention: y grows downwards
    ax.set_axis_off()
    fig.patch.set_facecolor("white")

    DrawUtils.draw_segments(ax, htree, scale=scale, color="k", lw=0.8)

    if save_path is not None:
        fig.savefig(save_path, dpi=dpi, facecolor="white")
    elif matplotlib.get_backend().lower() != "agg":
        plt.show()
    return fig


if __name__ == "__main__":
    for order in [2, 6, 10, 14]:
        fig = run_plot(order, save_path=f"example_htree_order_{order}.png")
        plt.close(fig)
        print(f"saved example_htree_order_{order}.png")
