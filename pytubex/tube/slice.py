__all__ = ["Slice"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 14, 2023"
__status__      = "Completed"

import math

from ..arithmetic.interval import Interval
from ..utils.exceptions import DomainException, InvalidComponentException
from ..utils.helpers import isnumeric


class Slice():
    def __init__(self, domain, codomain=None):
        """
            One time step of a tube.

            A slice encloses the unknown function over its domain with an
            envelope, and at the bounds of its domain with two gates. The
            gate between two adjacent slices is stored once, as the input
            gate of the second slice; the output gate is only stored by
            the last slice of a tube.

            Inputs:
                domain: non-empty bounded Interval of time.
                codomain: initial envelope and gates (all reals by default).
        """
        assert not domain.is_empty() and not domain.is_unbounded(), "invalid slice domain"
        codomain = Interval.all_reals() if codomain is None else Interval(codomain)

        self._domain      = domain
        self._envelope    = codomain
        self._input_gate  = codomain
        self._output_gate = codomain
        self._prev        = None
        self._next        = None
        self._owner       = None   # tube whose caches depend on this slice

    @staticmethod
    def chain_slices(first, second):
        "Links two adjacent slices; their common gate becomes the one of second."
        if first.domain().ub() != second.domain().lb():
            raise InvalidComponentException("Slice.chain_slices", f"slices {first.domain()} and {second.domain()} are not adjacent")
        first._next  = second
        second._prev = first
        second._input_gate = second._input_gate & first._output_gate

    def _invalidate(self):
        if self._owner is not None:
            self._owner._invalidate_caches()

    # Access

    def domain(self):
        return self._domain

    def prev_slice(self):
        return self._prev

    def next_slice(self):
        return self._next

    def codomain(self):
        return self._envelope

    def envelope(self):
        return self._envelope

    def input_gate(self):
        return self._input_gate

    def output_gate(self):
        if self._next is not None:
            return self._next._input_gate
        return self._output_gate

    def volume(self):
        if self.is_empty():
            return 0.
        if self._envelope.is_unbounded():
            return math.inf
        return self._domain.diam() * self._envelope.diam()

    def __call__(self, t):
        """
            Evaluation at a time t (gates at the bounds of the domain) or
            over an Interval of time.
        """
        if isnumeric(t):
            DomainException.check(self, t, "Slice.__call__")
            if t == self._domain.lb():
                return self._input_gate
            if t == self._domain.ub():
                return self.output_gate()
            return self._envelope

        t = t & self._domain
        if t.is_empty():
            return Interval.empty_set()
        if t.is_degenerated():
            return self(t.lb())
        return self._envelope

    # Tests

    def is_empty(self):
        return self._envelope.is_empty() or self._input_gate.is_empty() or self.output_gate().is_empty()

    def _zip(self, x):
        return zip((self._domain, self._envelope, self._input_gate, self.output_gate()),
                   (x._domain, x._envelope, x._input_gate, x.output_gate()))

    def __eq__(self, x):
        if not isinstance(x, Slice):
            return NotImplemented
        return all(a == b for a, b in self._zip(x))

    def __ne__(self, x):
        eq = self.__eq__(x)
        return eq if eq is NotImplemented else not eq

    __hash__ = object.__hash__

    def is_subset(self, x):
        return self._domain == x._domain and all(a.is_subset(b) for a, b in list(self._zip(x))[1:])

    def is_strict_subset(self, x):
        return self.is_subset(x) and self != x

    def is_interior_subset(self, x):
        return self._domain == x._domain and all(a.is_interior_subset(b) for a, b in list(self._zip(x))[1:])

    def is_superset(self, x):
        return x.is_subset(self)

    # Setting values

    def set(self, y):
        """
            Sets the envelope to y; the gates are set to y as well, within
            the envelopes of the adjacent slices.
        """
        y = Interval(y)
        self._envelope   = y
        self._input_gate = y if self._prev is None else y & self._prev._envelope
        if self._next is None:
            self._output_gate = y
        else:
            self._next._input_gate = y & self._next._envelope
        self._invalidate()

    def set_envelope(self, y):
        "Sets the envelope; the gates are kept inside it."
        self._envelope   = Interval(y)
        self._input_gate = self._input_gate & self._envelope
        if self._next is None:
            self._output_gate = self._output_gate & self._envelope
        else:
            self._next._input_gate = self._next._input_gate & self._envelope
        self._invalidate()

    def set_input_gate(self, y):
        gate = Interval(y) & self._envelope
        if self._prev is not None:
            gate = gate & self._prev._envelope
        self._input_gate = gate
        self._invalidate()

    def set_output_gate(self, y):
        gate = Interval(y) & self._envelope
        if self._next is None:
            self._output_gate = gate
        else:
            self._next._input_gate = gate & self._next._envelope
        self._invalidate()

    def set_empty(self):
        self.set(Interval.empty_set())

    def inflate_envelope(self, rad):
        self._envelope = self._envelope.inflate(rad)
        self._invalidate()

    def inflate_gates(self, rad, rad_out=None):
        "Inflates the gates, kept inside the envelopes."
        rad_out = rad if rad_out is None else rad_out
        self.set_input_gate(self._input_gate.inflate(rad))
        if self._next is None:
            self.set_output_gate(self._output_gate.inflate(rad_out))

    # Evaluation refined by a derivative

    def _bound_lines(self, v):
        """
            Affine bounds of the function over the slice, as lists of
            (value at s0, slope, s0) where s is the time elapsed since the
            lower bound of the domain. Bounds with an infinite coefficient
            carry no information and are left out.
        """
        dt          = self._domain.diam()
        a, b, c     = self._input_gate, self.output_gate(), self._envelope
        vlb, vub    = (v.lb(), v.ub()) if not v.is_empty() else (-math.inf, math.inf)

        uppers, lowers = [], []
        def add(lines, value, slope, s0):
            if math.isfinite(value) and math.isfinite(slope):
                lines.append((value, slope, s0))

        add(uppers, a.ub(),  vub, 0.)
        add(uppers, b.ub(),  vlb, dt)
        add(uppers, c.ub(),  0.,  0.)
        add(lowers, a.lb(),  vlb, 0.)
        add(lowers, b.lb(),  vub, dt)
        add(lowers, c.lb(),  0.,  0.)
        return uppers, lowers

    @staticmethod
    def _line(line, s):
        value, slope, s0 = line
        return Interval(value) + Interval(slope)*(Interval(s) - s0)

    @staticmethod
    def _meeting_point(l1, l2):
        "Time s at which two bound lines meet, None if they do not cross."
        if l1[1] == l2[1]:
            return None
        return (Interval(l2[0]) - Interval(l1[0]) + Interval(l1[1])*l1[2] - Interval(l2[1])*l2[2]) \
                    / (Interval(l1[1]) - Interval(l2[1]))

    def interpol(self, t, v):
        """
            Values the function can take over the Interval t, knowing that
            its derivative over the slice belongs to the Interval v.

            The upper bound of the function is the minimum of the lines
            leaving the gates with extreme slopes and of the envelope; this
            concave function reaches its maximum over t at a bound of t or
            where two lines meet. The lower bound is handled symmetrically.
        """
        if isnumeric(t):
            t = Interval(t)
        t = t & self._domain
        if t.is_empty() or self.is_empty():
            return Interval.empty_set()
        if t.is_degenerated() and t.lb() in (self._domain.lb(), self._domain.ub()):
            return self(t.lb())

        t0             = self._domain.lb()
        s_lb, s_ub     = (Interval(t.lb()) - t0).lb(), (Interval(t.ub()) - t0).ub()
        s_lb, s_ub     = max(s_lb, 0.), min(s_ub, self._domain.diam())
        uppers, lowers = self._bound_lines(v)

        def candidates(lines):
            pts = [Interval(s_lb), Interval(s_ub)]
            for i in range(len(lines)):
                for j in range(i+1, len(lines)):
                    s = self._meeting_point(lines[i], lines[j])
                    if s is not None and not s.is_empty():
                        s = s & Interval(s_lb, s_ub)
                        if not s.is_empty():
                            pts.append(s)
            return pts

        ub = -math.inf if uppers else math.inf
        for s in candidates(uppers):
            ub = max(ub, min(self._line(l, s).ub() for l in uppers)) if uppers else ub

        lb = math.inf if lowers else -math.inf
        for s in candidates(lowers):
            lb = min(lb, max(self._line(l, s).lb() for l in lowers)) if lowers else lb

        if lb > ub:
            return Interval.empty_set()
        return Interval(lb, ub) & self._envelope

    def invert(self, y, v=None, search_domain=None):
        """
            Hull of the times of search_domain at which the function can
            take a value in y, knowing that its derivative over the slice
            belongs to v.
        """
        v      = Interval.all_reals() if v is None else v
        search = self._domain if search_domain is None else search_domain & self._domain
        if search.is_empty() or y.is_empty() or self.is_empty():
            return Interval.empty_set()
        if search.is_degenerated():
            return search if self.interpol(search, v).intersects(y) else Interval.empty_set()

        t0             = self._domain.lb()
        uppers, lowers = self._bound_lines(v)
        s_set          = (search - t0) & Interval(0., self._domain.diam())

        # upper(s) >= y.lb for every upper line, lower(s) <= y.ub for every lower line
        for lines, bound, sign in ((uppers, y.lb(), 1.), (lowers, y.ub(), -1.)):
            if not math.isfinite(bound):
                continue
            for value, slope, s0 in lines:
                # sign*(value + slope*(s - s0) - bound) >= 0
                if slope == 0.:
                    if sign*(value - bound) < 0.:
                        return Interval.empty_set()
                    continue
                root = (Interval(bound) - value) / slope + s0
                if sign*slope > 0.:
                    s_set = s_set & Interval(root.lb(), math.inf)
                else:
                    s_set = s_set & Interval(-math.inf, root.ub())
                if s_set.is_empty():
                    return Interval.empty_set()

        return (s_set + t0) & search

    def __repr__(self):
        return f"Slice {self._domain}↦({self._input_gate}){self._envelope}({self.output_gate()})"
