__all__         = ["Interval", "sqr", "sqrt", "exp", "cos", "sin"]

__author__ 		= "Lekan Molu"
__copyright__ 	= "2023, Set-Membership Tube Analysis in Python"
__credits__  	= "There are None."
__license__ 	= "Molux Licence"
__maintainer__ 	= "Lekan Molu"
__email__ 		= "patlekno@icloud.com"
__comments__    = "Bounds follow the ibex conventions: [] is empty, 0 x oo = 0."
__date__ 		= "March 15, 2023"
__status__ 		= "Completed"

import math
import numpy as np
from ..utils.helpers import realmax, isnumeric

inf         = math.inf
nan         = math.nan
TWO_PI      = 2*math.pi
_SPLITTER   = 134217729.0           # 2**27 + 1, Veltkamp splitting
_TINY       = 2.0**-960             # below this, error-free products may underflow
_HUGE       = 2.0**995              # above this, the splitting may overflow


def _down(x):
    return float(np.nextafter(x, -inf))

def _up(x):
    return float(np.nextafter(x, inf))

def _two_sum(a, b):
    s  = a + b
    bb = s - a
    return s, (a - (s - bb)) + (b - bb)

def _split(a):
    c  = _SPLITTER * a
    hi = c - (c - a)
    return hi, a - hi

def _two_prod(a, b):
    p      = a * b
    ah, al = _split(a)
    bh, bl = _split(b)
    return p, al*bl - (((p - ah*bh) - al*bh) - ah*bl)

def _add(a, b, rnd):
    """
        a + b rounded towards -oo (rnd < 0) or +oo (rnd > 0).

        The error-free transformation tells whether the nearest
        rounding already lies on the right side of the exact sum.
    """
    s = a + b
    if math.isinf(s):
        if math.isinf(a) or math.isinf(b):
            return s
        # finite overflow
        return realmax if (s > 0 and rnd < 0) else (-realmax if (s < 0 and rnd > 0) else s)
    _, err = _two_sum(a, b)
    if rnd < 0 and err < 0:
        return _down(s)
    if rnd > 0 and err > 0:
        return _up(s)
    return s

def _mul(a, b, rnd):
    "a * b with the 0 x oo = 0 convention, rounded towards rnd."
    if a == 0. or b == 0.:
        return 0.
    p = a * b
    if math.isinf(p):
        if math.isinf(a) or math.isinf(b):
            return p
        return realmax if (p > 0 and rnd < 0) else (-realmax if (p < 0 and rnd > 0) else p)
    if abs(p) < _TINY or abs(a) > _HUGE or abs(b) > _HUGE:
        return _down(p) if rnd < 0 else _up(p)
    _, err = _two_prod(a, b)
    if rnd < 0 and err < 0:
        return _down(p)
    if rnd > 0 and err > 0:
        return _up(p)
    return p

def _div(a, b, rnd):
    "a / b for b != 0, rounded towards rnd (outward whenever inexact)."
    if math.isinf(b):
        if math.isinf(a):
            return nan
        return 0.
    if a == 0.:
        return 0.
    q = a / b
    if math.isinf(q):
        if math.isinf(a):
            return q
        return realmax if (q > 0 and rnd < 0) else (-realmax if (q < 0 and rnd > 0) else q)
    if abs(q) < _TINY or abs(q) > _HUGE or abs(b) > _HUGE or abs(b) < _TINY:
        return _down(q) if rnd < 0 else _up(q)
    p, e = _two_prod(q, b)
    if (a - p) - e == 0.:
        return q
    return _down(q) if rnd < 0 else _up(q)


class Interval():
    __slots__ = ("_lb", "_ub")

    def __init__(self, lb=None, ub=None):
        """
            Closed real interval [lb, ub] with outward-rounded arithmetic.

            Interval()       -> ]-oo, +oo[
            Interval(x)      -> [x, x] (an Interval argument is copied)
            Interval(lb, ub) -> [lb, ub], empty when lb > ub

            Instances are immutable: every operation returns a new interval.
            The empty set is stored with NaN bounds, so bounds of an empty
            interval must never be used without checking is_empty() first.
        """
        if lb is None and ub is None:
            lb, ub = -inf, inf
        elif ub is None:
            if isinstance(lb, Interval):
                lb, ub = lb._lb, lb._ub
            else:
                lb = ub = float(lb)
        else:
            lb, ub = float(lb), float(ub)

        if math.isnan(lb) or math.isnan(ub) or lb > ub or lb == inf or ub == -inf:
            lb, ub = nan, nan

        object.__setattr__(self, "_lb", lb)
        object.__setattr__(self, "_ub", ub)

    def __setattr__(self, name, value):
        raise AttributeError("Interval objects are immutable")

    # Static constructors

    @classmethod
    def empty_set(cls):
        return cls(nan, nan)

    @classmethod
    def all_reals(cls):
        return cls(-inf, inf)

    @classmethod
    def pos_reals(cls):
        return cls(0., inf)

    @classmethod
    def neg_reals(cls):
        return cls(-inf, 0.)

    # Bounds

    def lb(self):
        return self._lb

    def ub(self):
        return self._ub

    def diam(self):
        "Width of the interval, rounded upward. 0 for the empty set."
        if self.is_empty():
            return 0.
        if self.is_unbounded():
            return inf
        return _add(self._ub, -self._lb, 1)

    def rad(self):
        return self.diam() / 2.

    def mid(self):
        if self.is_empty():
            return nan
        if self._lb == -inf:
            return 0. if self._ub == inf else -realmax
        if self._ub == inf:
            return realmax
        return 0.5*self._lb + 0.5*self._ub

    def mag(self):
        "Largest absolute value of the interval."
        if self.is_empty():
            return nan
        return max(abs(self._lb), abs(self._ub))

    # Tests

    def is_empty(self):
        return math.isnan(self._lb)

    def is_unbounded(self):
        if self.is_empty():
            return False
        return self._lb == -inf or self._ub == inf

    def is_degenerated(self):
        return self.is_empty() or self._lb == self._ub

    def contains(self, x):
        if self.is_empty():
            return False
        return self._lb <= x <= self._ub

    def interior_contains(self, x):
        if self.is_empty():
            return False
        return self._lb < x < self._ub

    def intersects(self, x):
        return not (self & x).is_empty()

    def is_subset(self, x):
        x = _as_interval(x)
        if self.is_empty():
            return True
        if x.is_empty():
            return False
        return x._lb <= self._lb and self._ub <= x._ub

    def is_strict_subset(self, x):
        return self.is_subset(x) and self != _as_interval(x)

    def is_interior_subset(self, x):
        x = _as_interval(x)
        if self.is_empty():
            return True
        if x.is_empty():
            return False
        return (x._lb == -inf or x._lb < self._lb) and (x._ub == inf or self._ub < x._ub)

    def is_superset(self, x):
        return _as_interval(x).is_subset(self)

    def is_strict_superset(self, x):
        return _as_interval(x).is_strict_subset(self)

    def __contains__(self, x):
        if isinstance(x, Interval):
            return x.is_subset(self)
        return self.contains(x)

    def __eq__(self, x):
        if isnumeric(x):
            x = Interval(x)
        if not isinstance(x, Interval):
            return NotImplemented
        if self.is_empty() or x.is_empty():
            return self.is_empty() and x.is_empty()
        return self._lb == x._lb and self._ub == x._ub

    def __ne__(self, x):
        eq = self.__eq__(x)
        return eq if eq is NotImplemented else not eq

    def __hash__(self):
        if self.is_empty():
            return hash("empty interval")
        return hash((self._lb, self._ub))

    # Set operations

    def __and__(self, x):
        x = _as_interval(x)
        if x is None:
            return NotImplemented
        if self.is_empty() or x.is_empty():
            return Interval.empty_set()
        return Interval(max(self._lb, x._lb), min(self._ub, x._ub))

    __rand__ = __and__

    def __or__(self, x):
        "Interval hull of the union."
        x = _as_interval(x)
        if x is None:
            return NotImplemented
        if self.is_empty():
            return x
        if x.is_empty():
            return self
        return Interval(min(self._lb, x._lb), max(self._ub, x._ub))

    __ror__ = __or__

    # Arithmetic

    def __neg__(self):
        if self.is_empty():
            return self
        return Interval(-self._ub, -self._lb)

    def __pos__(self):
        return self

    def __add__(self, x):
        x = _as_interval(x)
        if x is None:
            return NotImplemented
        if self.is_empty() or x.is_empty():
            return Interval.empty_set()
        lb = -inf if (self._lb == -inf or x._lb == -inf) else _add(self._lb, x._lb, -1)
        ub =  inf if (self._ub ==  inf or x._ub ==  inf) else _add(self._ub, x._ub,  1)
        return Interval(lb, ub)

    __radd__ = __add__

    def __sub__(self, x):
        x = _as_interval(x)
        if x is None:
            return NotImplemented
        return self + (-x)

    def __rsub__(self, x):
        x = _as_interval(x)
        if x is None:
            return NotImplemented
        return x + (-self)

    def __mul__(self, x):
        x = _as_interval(x)
        if x is None:
            return NotImplemented
        if self.is_empty() or x.is_empty():
            return Interval.empty_set()
        pairs = [(self._lb, x._lb), (self._lb, x._ub), (self._ub, x._lb), (self._ub, x._ub)]
        lb = min(_mul(a, b, -1) for a, b in pairs)
        ub = max(_mul(a, b,  1) for a, b in pairs)
        return Interval(lb, ub)

    __rmul__ = __mul__

    def __truediv__(self, y):
        y = _as_interval(y)
        if y is None:
            return NotImplemented
        x = self
        if x.is_empty() or y.is_empty() or (y._lb == 0. and y._ub == 0.):
            return Interval.empty_set()

        if not y.contains(0.):
            bounds = [(x._lb, y._lb), (x._lb, y._ub), (x._ub, y._lb), (x._ub, y._ub)]
            lbs = [v for v in (_div(a, b, -1) for a, b in bounds) if not math.isnan(v)]
            ubs = [v for v in (_div(a, b,  1) for a, b in bounds) if not math.isnan(v)]
            return Interval(min(lbs), max(ubs))

        # the divisor contains zero
        if x.contains(0.) or (y._lb < 0. < y._ub):
            return Interval.all_reals()
        if y._lb == 0.:
            if x._lb > 0.:
                return Interval(_div(x._lb, y._ub, -1), inf)
            return Interval(-inf, _div(x._ub, y._ub, 1))
        # y._ub == 0.
        if x._lb > 0.:
            return Interval(-inf, _div(x._lb, y._lb, 1))
        return Interval(_div(x._ub, y._lb, -1), inf)

    def __rtruediv__(self, x):
        x = _as_interval(x)
        if x is None:
            return NotImplemented
        return x / self

    # Misc

    def inflate(self, rad):
        "Additive inflation by [-rad, rad]."
        return self + Interval(-rad, rad)

    def bisect(self, ratio=0.49):
        """
            Splits the interval at lb + ratio * diam and returns both halves.
            Unbounded intervals are split at 0 or at -/+realmax.
        """
        from ..utils.exceptions import DegenerateBisectionException

        if not (0. < ratio < 1.):
            raise ValueError(f"bisection ratio {ratio} not in ]0,1[")
        if self.is_degenerated():
            raise DegenerateBisectionException("Interval.bisect", f"unable to bisect degenerate interval {self}")

        lb, ub = self._lb, self._ub
        if lb == -inf:
            point = 0. if ub == inf else -realmax
        elif ub == inf:
            point = realmax
        else:
            point = lb + ratio*(ub - lb)
            if not (lb < point < ub):
                point = self.mid()
            if not (lb < point < ub):
                point = _up(lb)
        return Interval(lb, point), Interval(point, ub)

    def __repr__(self):
        if self.is_empty():
            return "[ empty ]"
        return f"[{self._lb}, {self._ub}]"

    __str__ = __repr__


def _as_interval(x):
    if isinstance(x, Interval):
        return x
    if isnumeric(x):
        return Interval(x)
    return None


# Elementary functions

def sqr(x):
    x = _as_interval(x)
    if x.is_empty():
        return x
    if x.contains(0.):
        return Interval(0., max(_mul(x.lb(), x.lb(), 1), _mul(x.ub(), x.ub(), 1)))
    a, b = (x.lb(), x.ub()) if x.lb() > 0. else (-x.ub(), -x.lb())
    return Interval(_mul(a, a, -1), _mul(b, b, 1))

def _sqrt_bound(v, rnd):
    if v == inf or v == 0.:
        return v
    r = math.sqrt(v)
    p, e = _two_prod(r, r)
    if p == v and e == 0.:
        return r
    return _down(r) if rnd < 0 else _up(r)

def sqrt(x):
    x = _as_interval(x) & Interval.pos_reals()
    if x.is_empty():
        return x
    return Interval(max(0., _sqrt_bound(x.lb(), -1)), _sqrt_bound(x.ub(), 1))

def _exp_bound(v, rnd):
    if v == -inf:
        return 0.
    if v == 0.:
        return 1.
    try:
        r = math.exp(v)
    except OverflowError:
        return realmax if rnd < 0 else inf
    return max(0., _down(r)) if rnd < 0 else _up(r)

def exp(x):
    x = _as_interval(x)
    if x.is_empty():
        return x
    return Interval(_exp_bound(x.lb(), -1), _exp_bound(x.ub(), 1))

def _trig(x, f, max_phase, min_phase):
    """
        Enclosure of a 2pi-periodic function f over x, knowing it reaches
        +1 at max_phase + 2k.pi and -1 at min_phase + 2k.pi. Extrema
        detection is tolerant, so an extremum is reported whenever it may
        belong to x up to the rounding of pi.
    """
    x = _as_interval(x)
    if x.is_empty():
        return x
    if x.is_unbounded() or x.diam() >= TWO_PI:
        return Interval(-1., 1.)

    a, b = x.lb(), x.ub()
    tol  = 1e-12*max(1., abs(a), abs(b))
    fa, fb = f(a), f(b)
    lo, hi = max(-1., _down(min(fa, fb))), min(1., _up(max(fa, fb)))

    k = math.ceil((a - tol - max_phase) / TWO_PI)
    if max_phase + k*TWO_PI <= b + tol:
        hi = 1.
    k = math.ceil((a - tol - min_phase) / TWO_PI)
    if min_phase + k*TWO_PI <= b + tol:
        lo = -1.
    return Interval(lo, hi)

def cos(x):
    return _trig(x, math.cos, 0., math.pi)

def sin(x):
    return _trig(x, math.sin, math.pi/2., -math.pi/2.)
