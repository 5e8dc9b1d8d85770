"""Plotting helpers."""

import matplotlib.pyplot as plt
import numpy as np

from pytubex.arithmetic import Interval, IntervalVector, cos
from pytubex.geometry import ConvexPolygon
from pytubex.tube import Trajectory, Tube
from pytubex.visuals import plot_polygons, plot_trajectory, plot_tube, save_figure


def test_plot_tube_and_trajectory() -> None:
    v = Tube(Interval(0., 5.), 0.5, function=lambda t: cos(t))
    x = v.primitive(0.)
    fig, ax = plt.subplots()
    plot_tube(ax, x, derivative=v, title="x")
    plot_trajectory(ax, Trajectory.from_function(np.sin, x.domain(), 0.1), label="sin")
    assert len(ax.patches) == x.nb_slices()
    assert len(ax.lines) == x.nb_slices() + 2
    plt.close(fig)


def test_plot_unbounded_tube() -> None:
    x = Tube(Interval(0., 2.), 1.)
    fig, ax = plt.subplots()
    plot_tube(ax, x, show_gates=False)
    assert ax.get_ylim() == (-10., 10.)
    plt.close(fig)


def test_plot_and_save_polygons(tmp_path) -> None:
    p = ConvexPolygon.from_box(IntervalVector([Interval(0., 1.), Interval(0., 2.)]))
    fig, ax = plt.subplots()
    plot_polygons(ax, [p, None, ConvexPolygon()])
    assert len(ax.patches) == 1
    save_figure(fig, "polygons.png", save_dir=str(tmp_path))
    assert (tmp_path / "polygons.png").exists()
