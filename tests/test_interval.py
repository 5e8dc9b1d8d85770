"""Outward rounded interval arithmetic."""

import math

import pytest

from pytubex.arithmetic import Interval, cos, sin, sqr, sqrt, exp
from pytubex.utils.exceptions import DegenerateBisectionException


def test_exact_sums_stay_degenerate() -> None:
    assert Interval(1.) + Interval(2.) == Interval(3.)
    assert (Interval(1.) + Interval(2.)).is_degenerated()


def test_inexact_sum_is_rounded_outward() -> None:
    x = Interval(0.1) + Interval(0.2)
    assert not x.is_degenerated()
    assert x.contains(0.1 + 0.2)
    assert x.diam() < 1e-15


def test_empty_interval_handling() -> None:
    assert Interval(2., 1.).is_empty()
    assert Interval.empty_set() == Interval(3., 2.)
    assert (Interval(0., 1.) & Interval(2., 3.)).is_empty()
    assert (Interval(0., 1.) | Interval(2., 3.)) == Interval(0., 3.)
    assert (Interval.empty_set() + Interval(1.)).is_empty()


def test_division_by_intervals_containing_zero() -> None:
    assert (Interval(1., 2.) / Interval(0.)).is_empty()
    assert Interval(1., 2.) / Interval(0., 1.) == Interval(1., math.inf)
    assert Interval(1., 2.) / Interval(-1., 1.) == Interval.all_reals()


def test_zero_times_unbounded_is_zero() -> None:
    assert Interval(0.) * Interval.all_reals() == Interval(0.)


def test_subset_predicates() -> None:
    x = Interval(0., 1.)
    assert Interval(0.2, 0.8).is_interior_subset(x)
    assert Interval(0., 0.5).is_subset(x)
    assert not Interval(0., 0.5).is_interior_subset(x)
    assert x.is_superset(Interval(0.5))
    assert Interval.empty_set().is_subset(x)


def test_bisect_halves_the_interval() -> None:
    x1, x2 = Interval(0., 1.).bisect(0.5)
    assert x1 == Interval(0., 0.5)
    assert x2 == Interval(0.5, 1.)


def test_bisect_degenerate_interval_raises() -> None:
    with pytest.raises(DegenerateBisectionException):
        Interval(1.).bisect()


def test_elementary_functions_enclose_point_values() -> None:
    assert cos(Interval(0., math.pi)) == Interval(-1., 1.)
    y = sin(Interval(0., 0.1))
    assert y.contains(math.sin(0.05))
    assert y.ub() >= math.sin(0.1)
    assert sqr(Interval(-2., 1.)) == Interval(0., 4.)
    assert sqrt(Interval(4.)).contains(2.)
    assert exp(Interval(0., 1.)).contains(math.e)
