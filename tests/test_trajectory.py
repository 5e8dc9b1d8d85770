"""Sampled trajectories."""

import math

import numpy as np

from pytubex.arithmetic import Interval
from pytubex.tube import Trajectory


def test_linear_interpolation_between_samples() -> None:
    traj = Trajectory({0.: 0., 1.: 2., 2.: 0.})
    assert traj(0.5) == 1.
    assert traj(1.5) == 1.
    assert traj.domain() == Interval(0., 2.)
    assert traj.codomain() == Interval(0., 2.)


def test_evaluation_outside_of_the_domain_is_nan() -> None:
    traj = Trajectory({0.: 0., 1.: 2.})
    assert math.isnan(traj(3.))


def test_evaluation_over_an_interval() -> None:
    traj = Trajectory({0.: 0., 1.: 2., 2.: 0.})
    assert traj(Interval(0.5, 1.5)) == Interval(1., 2.)
    assert traj(Interval(0.2, 0.6)) == Interval(0.4, 1.2)
    assert traj(Interval(3., 4.)).is_empty()


def test_sampling_a_function_includes_the_upper_bound() -> None:
    traj = Trajectory.from_function(math.sin, Interval(0., 1.), 0.1)
    assert traj.nb_samples() == 11
    assert traj.domain() == Interval(0., 1.)
    assert traj(1.) == math.sin(1.)
    assert np.all(np.diff(traj.times()) > 0.)


def test_truncate_domain() -> None:
    traj = Trajectory({0.: 0., 1.: 2., 2.: 0.}).truncate_domain(Interval(0.5, 1.5))
    assert traj.domain() == Interval(0.5, 1.5)
    assert traj.items() == [(0.5, 1.), (1., 2.), (1.5, 1.)]


def test_equality() -> None:
    assert Trajectory([(0., 1.), (1., 2.)]) == Trajectory({1.: 2., 0.: 1.})
    assert Trajectory([(0., 1.), (1., 2.)]) != Trajectory({0.: 1., 1.: 3.})
