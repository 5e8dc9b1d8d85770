"""Interval vectors and matrices, enclosure of exp(A.t)."""

import numpy as np
from scipy.linalg import expm

from pytubex.arithmetic import Interval, IntervalVector, IntervalMatrix, expm_enclosure


def test_corners_of_a_box() -> None:
    box = IntervalVector([Interval(0., 1.), Interval(2., 3.)])
    assert sorted(box.corners()) == [(0., 2.), (0., 3.), (1., 2.), (1., 3.)]


def test_identity_product() -> None:
    y = IntervalMatrix(np.eye(2)) @ np.array([1., 2.])
    assert y == IntervalVector([Interval(1.), Interval(2.)])


def test_expm_enclosure_of_a_rotation() -> None:
    A = np.array([[0., 1.], [-1., 0.]])
    E = expm_enclosure(A, Interval(0., 0.1))
    for tau in np.linspace(0., 0.1, 5):
        M = expm(A*tau)
        for i in range(2):
            for j in range(2):
                assert E[i, j].contains(M[i, j])


def test_expm_enclosure_at_a_single_date() -> None:
    A = np.array([[0., 1.], [-1., 0.]])
    E = expm_enclosure(A, 0.5)
    M = expm(A*0.5)
    for i in range(2):
        for j in range(2):
            assert E[i, j].contains(M[i, j])
            assert E[i, j].diam() < 1e-8
