"""Linear observer contractor on 2d systems."""

import math

import numpy as np
import pytest

from pytubex.arithmetic import Interval, IntervalVector
from pytubex.contractors import CtcLinobs
from pytubex.geometry import BoolInterval, ConvexPolygon, Point
from pytubex.tube import Tube, TubeVector
from pytubex.utils.config import gv
from pytubex.utils.exceptions import StructureException


def _double_integrator():
    domain = Interval(0., 1.)
    x = TubeVector.from_domain(domain, 0.1, 2)
    x[0].set(Interval(0.), 0.)
    x[1].set(Interval(1.), 0.)
    u = Tube(domain, 0.1, Interval(-0.1, 0.1))
    A = np.array([[0., 1.], [0., 0.]])
    b = np.array([0., 1.])
    return x, u, A, b


def test_double_integrator_from_a_known_state() -> None:
    x, u, A, b = _double_integrator()
    polygons   = []
    assert CtcLinobs(A, b).contract(x, u, polygons)

    # nominal trajectory (t, 1) for a zero input
    for t in (0.5, 1.):
        assert x[0](t).contains(t)
        assert x[1](t).contains(1.)
    assert x[0](1.).diam() < 0.5
    assert x[1](1.).is_subset(Interval(0.7, 1.3))
    assert not x[0][5].codomain().is_unbounded()

    assert len(polygons) == x.nb_slices() + 1
    assert all(isinstance(p, ConvexPolygon) and not p.is_empty() for p in polygons)


def test_static_system_keeps_the_initial_box() -> None:
    domain = Interval(0., 1.)
    x = TubeVector.from_domain(domain, 0.25, 2)
    x[0].set(Interval(0., 1.), 0.)
    x[1].set(Interval(0., 1.), 0.)
    u = Tube(domain, 0.25, Interval(0.))

    CtcLinobs(np.zeros((2, 2)), np.zeros(2)).contract([x, u])
    for xi in x:
        assert xi(1.).is_superset(Interval(0., 1.))
        assert xi(1.).is_subset(Interval(-1e-9, 1. + 1e-9))


def test_unbounded_input_leaves_the_tube_untouched() -> None:
    domain = Interval(0., 1.)
    x = TubeVector.from_domain(domain, 0.5, 2)
    x[0].set(Interval(0.), 0.)
    x[1].set(Interval(0.), 0.)
    u = Tube(domain, 0.5)

    before = x.copy()
    assert not CtcLinobs(np.eye(2), np.ones(2)).contract(x, u)
    assert x == before


def test_input_must_share_the_slicing() -> None:
    x, _, A, b = _double_integrator()
    with pytest.raises(StructureException):
        CtcLinobs(A, b).contract(x, Tube(Interval(0., 1.), 0.5))


def test_forward_gates_keep_the_nominal_state() -> None:
    _, _, A, b = _double_integrator()
    ctc        = CtcLinobs(A, b)
    everywhere = IntervalVector([Interval(), Interval()])

    p = ConvexPolygon([Point(0., 1.)])
    for k in range(1, 11):
        p = ctc.ctc_fwd_gate(None, p, Interval(0.1), Interval(-0.1, 0.1))
        assert p.encloses(Point(0.1*k, 1.)) != BoolInterval.NO
        p = p & everywhere
        assert p.encloses(Point(0.1*k, 1.)) != BoolInterval.NO


def test_gate_polygons_respect_the_vertex_bound() -> None:
    domain = Interval(0., 2.)
    x = TubeVector.from_domain(domain, 0.05, 2)
    x[0].set(Interval(-0.1, 0.1), 0.)
    x[1].set(Interval(0.9, 1.1), 0.)
    u = Tube(domain, 0.05, Interval(-0.5, 0.5))
    A = np.array([[0., 1.], [-1., -0.2]])

    polygons = []
    CtcLinobs(A, np.array([0., 1.])).contract(x, u, polygons)
    assert max(p.nb_vertices() for p in polygons) <= gv.polygon_max_vertices

    # damped oscillator started at (0, 1) with a zero input
    t = 1.
    assert x[0](t).contains(math.exp(-0.1*t)*math.sin(math.sqrt(0.99)*t)/math.sqrt(0.99))
