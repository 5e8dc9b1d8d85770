import os

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

from pytubex.arithmetic import Interval, cos
from pytubex.tube import Tube


@pytest.fixture
def constant_tube():
    "Tube of [0,1] over [0,3], one slice per time unit."
    return Tube(Interval(0., 3.), 1., Interval(0., 1.))


@pytest.fixture
def cos_derivative():
    "Derivative tube cos(t) + [-0.1, 0.1] over [0,5]."
    return Tube(Interval(0., 5.), 0.1, function=lambda t: cos(t) + Interval(-0.1, 0.1))
