"""Derivative contractor."""

import math

import numpy as np
import pytest

from pytubex.arithmetic import Interval, cos, sin
from pytubex.contractors import CtcDeriv, TimePropag
from pytubex.tube import Tube, TubeVector
from pytubex.utils.exceptions import StructureException


@pytest.fixture
def sine_problem():
    "Wide tube around sin(t), known at t=0, with derivative cos(t)."
    domain = Interval(0., 5.)
    x = Tube(domain, 0.1, function=lambda t: sin(t) + Interval(-1., 1.))
    x.set(Interval(0.), 0.)
    v = Tube(domain, 0.1, function=lambda t: cos(t))
    return x, v


def test_contraction_keeps_the_solution(sine_problem) -> None:
    x, v = sine_problem
    assert CtcDeriv().contract(x, v)
    for t in np.linspace(0., 5., 37):
        assert x(float(t)).contains(math.sin(t))


def test_contraction_only_narrows(sine_problem) -> None:
    x, v   = sine_problem
    before = x.copy()
    CtcDeriv().contract(x, v)
    assert x.is_subset(before)
    assert x.volume() < before.volume()
    assert x(5.).diam() < 1.


def test_forward_propagation_from_an_initial_value() -> None:
    v = Tube(Interval(0., 3.), 1., Interval(-1., 1.))
    x = Tube(Interval(0., 3.), 1.)
    x.set(Interval(0.), 0.)
    CtcDeriv().contract(x, v, TimePropag.FORWARD)
    assert x(1.) == Interval(-1., 1.)
    assert x(3.) == Interval(-3., 3.)
    assert x[2].codomain() == Interval(-3., 3.)


def test_backward_propagation_from_a_final_value() -> None:
    v = Tube(Interval(0., 3.), 1., Interval(-1., 1.))
    x = Tube(Interval(0., 3.), 1.)
    x.set(Interval(0.), 3.)
    CtcDeriv().contract(x, v, TimePropag.BACKWARD)
    assert x(2.) == Interval(-1., 1.)
    assert x(0.) == Interval(-3., 3.)


def test_fixpoint_is_stable(sine_problem) -> None:
    x, v = sine_problem
    ctc  = CtcDeriv()
    assert ctc.contract_fixpoint(x, v)
    assert not ctc.contract(x, v)


def test_contraction_of_a_tube_vector() -> None:
    x = TubeVector.from_domain(Interval(0., 2.), 0.5, 2)
    v = TubeVector.from_domain(Interval(0., 2.), 0.5, 2, Interval(1.))
    for xi in x:
        xi.set(Interval(0.), 0.)
    assert CtcDeriv().contract([x, v])
    assert x[0](2.) == Interval(2.)
    assert x[1](1.) == Interval(1.)


def test_empty_derivative_empties_the_tube() -> None:
    v = Tube(Interval(0., 2.), 1., Interval.empty_set())
    x = Tube(Interval(0., 2.), 1., Interval(0., 1.))
    CtcDeriv().contract(x, v)
    assert x.is_empty()


def test_slicings_must_match(sine_problem) -> None:
    x, _ = sine_problem
    with pytest.raises(StructureException):
        CtcDeriv().contract(x, Tube(Interval(0., 5.), 0.5))
