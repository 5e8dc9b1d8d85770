__all__ = ["plot_tube", "plot_trajectory", "plot_polygons", "save_figure"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "May 02, 2023"
__status__      = "Completed"

import numpy as np
from os.path import join, expanduser
import matplotlib as mpl
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle, Polygon

# avoid Type 3 fonts for paperplaza submissions ===> See http://phyletica.org/matplotlib-fonts/
mpl.rcParams['pdf.fonttype'] = 42
mpl.rcParams['ps.fonttype'] = 42


def _finite(y, ylim):
    "Clips the bounds of y to ylim so that unbounded slices can be drawn."
    return max(y.lb(), ylim[0]), min(y.ub(), ylim[1])


def plot_tube(ax, tube, derivative=None, color="steelblue", gate_color="navy", ylim=None,
                title=None, _fontdict={'fontsize':18, 'fontweight':'bold'}, lw=1.5, show_gates=True):
    """
        Draws the slices of a tube as boxes, and its gates as segments.
        The tube is only read.

        Inputs:
            ax: matplotlib axis.
            tube: Tube.
            derivative: Tube, when given the envelope of each slice is
                refined with it before being drawn.
            ylim: bounds used for unbounded values (codomain by default).
    """
    codomain = tube.codomain()
    if ylim is None:
        ylim = (-10., 10.) if codomain.is_unbounded() or codomain.is_empty() else (codomain.lb(), codomain.ub())

    for i, s in enumerate(tube.slices()):
        y = s.codomain() if derivative is None else s.interpol(s.domain(), derivative[i].codomain())
        if y.is_empty():
            continue
        lb, ub = _finite(y, ylim)
        ax.add_patch(Rectangle((s.domain().lb(), lb), s.domain().diam(), ub - lb,
                                facecolor=color, edgecolor=color, alpha=0.4, lw=0.))

    if show_gates:
        gates = [(s.domain().lb(), s.input_gate()) for s in tube.slices()]
        gates.append((tube.domain().ub(), tube.last_slice().output_gate()))
        for t, g in gates:
            if not g.is_empty():
                ax.plot([t, t], _finite(g, ylim), color=gate_color, linewidth=lw)

    ax.set_xlim(tube.domain().lb(), tube.domain().ub())
    ax.set_ylim(ylim)
    ax.grid(True)
    if title:
        ax.set_title(title, _fontdict)
    return ax


def plot_trajectory(ax, traj, color="red", lw=2, label=None):
    t, y = traj.times(), traj.values()
    ax.plot(t, y, color=color, linewidth=lw, label=label)
    return ax


def plot_polygons(ax, polygons, color="darkorange", alpha=0.3):
    """
        Draws convex polygons in the plane (None entries, standing for
        unbounded sets, are skipped). Each vertex is drawn at the middle
        of its box.
    """
    for p in polygons:
        if p is None or p.is_empty():
            continue
        pts = np.array([v.mid() for v in p.vertices()])
        if len(pts) < 3:
            ax.plot(pts[:, 0], pts[:, 1], color=color)
        else:
            ax.add_patch(Polygon(pts, closed=True, facecolor=color, edgecolor=color, alpha=alpha))
    ax.autoscale_view()
    return ax


def save_figure(fig, savename, save_dir=join(expanduser("~"), "Documents/pytubex/figures")):
    fig.tight_layout()
    fig.savefig(join(save_dir, savename), bbox_inches='tight', facecolor='None')
    plt.close(fig)
