__all__         = ["IntervalVector", "IntervalMatrix", "expm_enclosure"]

__author__ 		= "Lekan Molu"
__copyright__ 	= "2023, Set-Membership Tube Analysis in Python"
__credits__  	= "There are None."
__license__ 	= "Molux Licence"
__maintainer__ 	= "Lekan Molu"
__email__ 		= "patlekno@icloud.com"
__date__ 		= "March 18, 2023"
__status__ 		= "Completed"

import math
import itertools
import numpy as np
import numpy.linalg as la
import scipy.linalg as sla

from .interval import Interval
from ..utils.helpers import eps, isnumeric
from ..utils.config import gv


class IntervalVector():
    def __init__(self, values, fill=None):
        """
            A box, i.e. a list of intervals.

            IntervalVector(n, Interval(...)) -> n copies of the interval
            IntervalVector([x1, x2, ...])    -> from intervals or floats
        """
        if isinstance(values, int) and not isinstance(values, bool):
            fill      = Interval.all_reals() if fill is None else Interval(fill)
            self._v   = [fill] * values
        else:
            self._v   = [v if isinstance(v, Interval) else Interval(v) for v in values]

    @classmethod
    def empty(cls, n):
        return cls(n, Interval.empty_set())

    def size(self):
        return len(self._v)

    def __len__(self):
        return len(self._v)

    def __getitem__(self, i):
        return self._v[i]

    def __setitem__(self, i, value):
        self._v[i] = Interval(value)

    def __iter__(self):
        return iter(self._v)

    def lb(self):
        return np.array([v.lb() for v in self._v])

    def ub(self):
        return np.array([v.ub() for v in self._v])

    def mid(self):
        return np.array([v.mid() for v in self._v])

    def diam(self):
        return np.array([v.diam() for v in self._v])

    def volume(self):
        if self.is_empty():
            return 0.
        return float(np.prod(self.diam()))

    def is_empty(self):
        return any(v.is_empty() for v in self._v)

    def is_flat(self):
        "True when at least one component is degenerate."
        return any(v.is_degenerated() for v in self._v)

    def is_unbounded(self):
        return any(v.is_unbounded() for v in self._v)

    def is_subset(self, x):
        if self.is_empty():
            return True
        return all(a.is_subset(b) for a, b in zip(self._v, x))

    def intersects(self, x):
        return not (self & x).is_empty()

    def corners(self):
        "Vertices of a bounded box, as tuples of floats."
        assert not self.is_empty() and not self.is_unbounded(), "corners of an empty or unbounded box"
        bounds = [sorted(set((v.lb(), v.ub()))) for v in self._v]
        return list(itertools.product(*bounds))

    def inflate(self, rad):
        return IntervalVector([v.inflate(rad) for v in self._v])

    def __and__(self, x):
        assert len(x) == len(self), "boxes of different dimensions"
        return IntervalVector([a & b for a, b in zip(self._v, x)])

    def __or__(self, x):
        assert len(x) == len(self), "boxes of different dimensions"
        return IntervalVector([a | b for a, b in zip(self._v, x)])

    def __add__(self, x):
        return IntervalVector([a + b for a, b in zip(self._v, x)])

    def __sub__(self, x):
        return IntervalVector([a - b for a, b in zip(self._v, x)])

    def __eq__(self, x):
        if not isinstance(x, IntervalVector) or len(x) != len(self):
            return False
        if self.is_empty() or x.is_empty():
            return self.is_empty() and x.is_empty()
        return all(a == b for a, b in zip(self._v, x))

    def __ne__(self, x):
        return not self.__eq__(x)

    def __repr__(self):
        return "(" + " ; ".join(str(v) for v in self._v) + ")"


class IntervalMatrix():
    def __init__(self, rows):
        """
            Matrix of intervals.

            rows: a numpy array, or nested lists of floats/intervals.
        """
        if isinstance(rows, np.ndarray):
            assert rows.ndim == 2, "an IntervalMatrix is built from a 2d array"
        self._rows = [[v if isinstance(v, Interval) else Interval(float(v)) for v in row] for row in rows]
        assert len(set(len(r) for r in self._rows)) <= 1, "ragged rows"

    @classmethod
    def identity(cls, n):
        return cls(np.eye(n))

    @property
    def shape(self):
        return (len(self._rows), len(self._rows[0]) if self._rows else 0)

    def __getitem__(self, ij):
        i, j = ij
        return self._rows[i][j]

    def rows(self):
        return [list(r) for r in self._rows]

    def inflate(self, rad):
        return IntervalMatrix([[v.inflate(rad) for v in row] for row in self._rows])

    def __add__(self, M):
        return IntervalMatrix([[a + b for a, b in zip(r1, r2)] for r1, r2 in zip(self._rows, M._rows)])

    def __mul__(self, x):
        "Product by a scalar interval."
        x = Interval(x)
        return IntervalMatrix([[a * x for a in row] for row in self._rows])

    __rmul__ = __mul__

    def __matmul__(self, x):
        if isinstance(x, IntervalMatrix):
            n, m = self.shape
            p    = x.shape[1]
            assert m == x.shape[0], "incompatible shapes"
            out = [[Interval(0.)] * p for _ in range(n)]
            for i in range(n):
                for j in range(p):
                    acc = Interval(0.)
                    for k in range(m):
                        acc = acc + self._rows[i][k] * x._rows[k][j]
                    out[i][j] = acc
            return IntervalMatrix(out)

        # product with a box or a plain vector
        if not isinstance(x, IntervalVector):
            x = IntervalVector(list(np.asarray(x, dtype=float).ravel()))
        assert self.shape[1] == len(x), "incompatible shapes"
        res = []
        for row in self._rows:
            acc = Interval(0.)
            for a, v in zip(row, x):
                acc = acc + a * v
            res.append(acc)
        return IntervalVector(res)

    def __repr__(self):
        return "\n".join("(" + " ; ".join(str(v) for v in row) + ")" for row in self._rows)


def expm_enclosure(A, t, order=None):
    """
        Enclosure of exp(A.tau) for all tau in the interval t.

        exp(A.tau) = exp(A.t0) . exp(A.s), s in [0, diam(t)], t0 = lb(t).

        The first factor is computed by scipy.linalg.expm and inflated to
        cover its floating-point error; the second one is a Taylor series
        evaluated with interval arithmetic, plus the Lagrange-type remainder

            |R| <= (|A|.d)^(K+1) / (K+1)! . 1 / (1 - |A|.d / (K+2)),

        where |A| is the infinity norm and d = diam(t).

        Inputs:
            A: (n, n) float array.
            t: Interval (or float) of times, possibly negative.
            order: number K of Taylor terms; defaults to gv.expm_taylor_order.

        Output:
            IntervalMatrix of shape (n, n).
    """
    A     = np.atleast_2d(np.asarray(A, dtype=float))
    t     = Interval(t) if isnumeric(t) else t
    order = gv.expm_taylor_order if order is None else order
    n     = A.shape[0]

    assert A.shape == (n, n), "A must be a square matrix"
    if t.is_empty():
        return IntervalMatrix([[Interval.empty_set()]*n for _ in range(n)])
    if t.is_unbounded():
        return IntervalMatrix([[Interval.all_reals()]*n for _ in range(n)])

    t0     = t.lb()
    E0     = sla.expm(A*t0)
    E0_err = 64*n*eps*max(1., la.norm(E0, np.inf))*max(1., la.norm(A*t0, np.inf))
    E0     = IntervalMatrix(E0).inflate(E0_err)

    d = t.diam()
    if d == 0.:
        return E0

    norm_A = la.norm(A, np.inf)
    s      = Interval(0., d)
    Ai     = IntervalMatrix(A)
    Ak     = IntervalMatrix.identity(n)
    sk     = Interval(1.)
    series = IntervalMatrix.identity(n)
    for k in range(1, order+1):
        Ak     = Ak @ Ai
        sk     = sk * s
        series = series + Ak * (sk / float(math.factorial(k)))

    ratio = norm_A * d / (order + 2)
    if ratio >= 1.:
        remainder = math.inf
    else:
        remainder = (norm_A*d)**(order+1) / math.factorial(order+1) / (1. - ratio)
        remainder = remainder * (1. + 1e-12)
    series = series.inflate(remainder)

    return E0 @ series
