__all__ = ["Trajectory"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 14, 2023"
__status__      = "Completed"

import numpy as np

from ..arithmetic.interval import Interval
from ..utils.helpers import isnumeric, error
from ..utils.config import gv


class Trajectory():
    def __init__(self, map_values=None):
        """
            A real function of time known through samples. Values between
            two samples are linearly interpolated.

            Inputs:
                map_values: dict {t: value} or iterable of (t, value) pairs.
        """
        if map_values is None:
            map_values = {}
        items = sorted(dict(map_values).items())

        self._t = np.array([t for t, _ in items], dtype=np.float64)
        self._y = np.array([y for _, y in items], dtype=np.float64)

    @classmethod
    def from_function(cls, f, domain, timestep):
        """
            Samples the real function f every timestep over domain; the
            upper bound of the domain is always sampled.
        """
        if timestep <= 0.:
            error(f"Trajectory.from_function: invalid timestep {timestep}")
        times = np.arange(domain.lb(), domain.ub(), timestep)
        times = times[times < domain.ub() - gv.slicing_tolerance*timestep]
        times = np.append(times, domain.ub())
        return cls({float(t): float(f(t)) for t in times})

    def domain(self):
        if self.nb_samples() == 0:
            return Interval.empty_set()
        return Interval(self._t[0], self._t[-1])

    def codomain(self):
        if self.nb_samples() == 0:
            return Interval.empty_set()
        return Interval(np.min(self._y), np.max(self._y))

    def nb_samples(self):
        return len(self._t)

    def items(self):
        return list(zip(self._t.tolist(), self._y.tolist()))

    def times(self):
        return self._t.copy()

    def values(self):
        return self._y.copy()

    def __call__(self, t):
        if isnumeric(t):
            return self._eval_point(float(t))
        return self._eval_interval(t)

    def _eval_point(self, t):
        # nan outside of the domain
        if self.nb_samples() == 0 or not self.domain().contains(t):
            return np.nan
        return float(np.interp(t, self._t, self._y))

    def _eval_interval(self, t):
        "Hull of the values taken over the interval t."
        t = t & self.domain()
        if t.is_empty():
            return Interval.empty_set()

        y    = Interval(self._eval_point(t.lb())) | Interval(self._eval_point(t.ub()))
        mask = (self._t > t.lb()) & (self._t < t.ub())
        if np.any(mask):
            y = y | Interval(np.min(self._y[mask]), np.max(self._y[mask]))
        return y

    def truncate_domain(self, domain):
        "Keeps the samples inside domain; its bounds are interpolated."
        d = self.domain() & domain
        if d.is_empty():
            self._t, self._y = np.array([]), np.array([])
            return self

        y_lb, y_ub = self._eval_point(d.lb()), self._eval_point(d.ub())
        mask       = (self._t > d.lb()) & (self._t < d.ub())
        self._t    = np.concatenate(([d.lb()], self._t[mask], [d.ub()]))
        self._y    = np.concatenate(([y_lb], self._y[mask], [y_ub]))
        if d.is_degenerated():
            self._t, self._y = self._t[:1], self._y[:1]
        return self

    def __eq__(self, x):
        if not isinstance(x, Trajectory):
            return NotImplemented
        return np.array_equal(self._t, x._t) and np.array_equal(self._y, x._y)

    def __ne__(self, x):
        eq = self.__eq__(x)
        return eq if eq is NotImplemented else not eq

    def __repr__(self):
        return f"Trajectory {self.domain()}↦{self.codomain()}, {self.nb_samples()} points"
