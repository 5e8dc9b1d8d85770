"""Evaluation contractor: observations z = x(t)."""

import math

import numpy as np
import pytest

from pytubex.arithmetic import Interval
from pytubex.contractors import CtcEval
from pytubex.tube import Tube


@pytest.fixture
def wide_tube():
    x = Tube(Interval(0., 10.), 1., Interval(-10., 10.))
    v = Tube(Interval(0., 10.), 1., Interval(-1., 1.))
    return x, v


def test_observation_at_an_uncertain_date(wide_tube) -> None:
    x, v = wide_tube
    t, z = CtcEval().contract(Interval(4., 5.), Interval(0.), x, v)
    assert t == Interval(4., 5.)
    assert z == Interval(0.)
    assert x(4.5).contains(0.)
    assert x(4.) == Interval(-1., 1.)
    assert x(0.) == Interval(-5., 5.)
    assert x(10.) == Interval(-6., 6.)


def test_observation_with_preserved_slicing(wide_tube) -> None:
    x, v = wide_tube
    ctc  = CtcEval()
    ctc.preserve_slicing()
    t, z = ctc.contract(3.5, 0., x, v)

    assert t == Interval(3.5)
    assert x.nb_slices() == 10
    assert Tube.same_slicing(x, v)
    assert x(3.) == Interval(-0.5, 0.5)
    assert x(4.) == Interval(-0.5, 0.5)


def test_observation_samples_the_tube(wide_tube) -> None:
    x, v = wide_tube
    CtcEval().contract(3.5, 0., x, v)
    assert x.nb_slices() == 11
    assert x(3.5) == Interval(0.)


def test_inconsistent_observation_empties_the_tube() -> None:
    x = Tube(Interval(0., 5.), 0.5, Interval(0., 1.))
    v = Tube(Interval(0., 5.), 0.5, Interval(-1., 1.))
    t, z = CtcEval().contract(Interval(1., 2.), Interval(5., 6.), x, v)
    assert t.is_empty()
    assert z.is_empty()
    assert x.is_empty()


def test_observation_without_derivative() -> None:
    x    = Tube(Interval(0., 3.), 1., Interval(0., 1.))
    t, z = CtcEval().contract(2., Interval(-1., 0.5), x)
    assert t == Interval(2.)
    assert z == Interval(0., 0.5)
    assert x.nb_slices() == 3


def test_list_of_domains(wide_tube) -> None:
    x, v      = wide_tube
    v_domains = [Interval(4., 5.), Interval(-20., 0.), x, v]
    CtcEval().contract(v_domains)
    assert v_domains[0] == Interval(4., 5.)
    assert v_domains[1] == Interval(-10., 0.)


def test_simple_evaluation_scenario() -> None:
    from pytubex.main import simple_eval

    x, xdot = simple_eval()
    assert Tube.same_slicing(x, xdot)
    assert x.nb_slices() == 101
    assert abs(x.volume() - 1.09413453) < 1e-2
    for t in np.linspace(0., 5., 41):
        assert x(float(t)).contains(math.sin(t))
