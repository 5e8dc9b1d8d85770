__all__ = ["Tube"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 16, 2023"
__status__      = "Completed"

import bisect
import logging
import numpy as np

from ..arithmetic.interval import Interval
from ..utils.config import gv
from ..utils.helpers import isnumeric, error
from ..utils.exceptions import DomainException, StructureException, \
                               DegenerateBisectionException
from .slice import Slice
from .trajectory import Trajectory

logger = logging.getLogger(__name__)


class Tube():
    def __init__(self, domain, timestep=0., codomain=None, function=None):
        """
            Guaranteed enclosure of an unknown real function of time.

            The domain is partitioned into adjacent slices of width
            timestep (the last one may be narrower). Slices are kept in a
            flat list ordered by time; a slice is found by bisection over
            the upper bounds of the slice domains.

            Inputs:
                domain: bounded Interval of time.
                timestep: width of the slices; 0 gives a single slice.
                codomain: initial value of every envelope and gate.
                function: callable mapping an Interval of time to an
                    Interval of values, used to set envelopes and gates.
        """
        if domain.is_empty() or domain.is_unbounded() or domain.is_degenerated():
            error(f"Tube: invalid domain {domain}")
        if timestep < 0.:
            error(f"Tube: invalid timestep {timestep}")

        bounds = [domain.lb()]
        if 0. < timestep < domain.diam():
            k = 1
            while domain.lb() + k*timestep < domain.ub() - gv.slicing_tolerance*timestep:
                bounds.append(domain.lb() + k*timestep)
                k += 1
        bounds.append(domain.ub())
        self._build(bounds)

        if codomain is not None:
            self.set(Interval(codomain))
        if function is not None:
            self.set_function(function)

    def _build(self, bounds):
        self._slices = []
        prev         = None
        for lb, ub in zip(bounds[:-1], bounds[1:]):
            s        = Slice(Interval(lb, ub))
            s._owner = self
            if prev is not None:
                Slice.chain_slices(prev, s)
            self._slices.append(s)
            prev = s
        self._ubs = list(bounds[1:])
        self._invalidate_caches()

    @classmethod
    def _from_bounds(cls, bounds):
        tube = cls.__new__(cls)
        tube._build(list(bounds))
        return tube

    def _invalidate_caches(self):
        self._codomain  = None
        self._primitive = None

    # Other constructors

    @classmethod
    def from_trajectory(cls, traj, thickness=0., timestep=0.):
        "Tube enclosing traj, inflated by thickness."
        tube = cls(traj.domain(), timestep, Interval.empty_set())
        tube |= traj
        return tube.inflate(thickness)

    @classmethod
    def from_trajectories(cls, lb, ub, timestep=0.):
        "Tube enclosing both trajectories lb and ub."
        tube = cls(lb.domain(), timestep, Interval.empty_set())
        tube |= lb
        tube |= ub
        return tube

    @classmethod
    def from_file(cls, path):
        from ..io.serialization import deserialize_tube

        tube, _ = deserialize_tube(path)
        return tube

    def copy(self, codomain=None):
        """
            Deep copy: slices are duplicated, caches are not shared.
            The copy is set to codomain when it is given.
        """
        tube = Tube._from_bounds([self._slices[0].domain().lb()] + self._ubs)
        for s, s_copy in zip(self._slices, tube._slices):
            s_copy._envelope   = s._envelope
            s_copy._input_gate = s._input_gate
        tube._slices[-1]._output_gate = self._slices[-1]._output_gate
        if codomain is not None:
            tube.set(Interval(codomain))
        return tube

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    # Slices structure

    def domain(self):
        return Interval(self._slices[0].domain().lb(), self._ubs[-1])

    def nb_slices(self):
        return len(self._slices)

    def slices(self):
        return list(self._slices)

    def __getitem__(self, i):
        return self._slices[i]

    def __iter__(self):
        return iter(self._slices)

    def first_slice(self):
        return self._slices[0]

    def last_slice(self):
        return self._slices[-1]

    def input2index(self, t):
        """
            Index of the slice containing t. On a boundary between two
            slices, the slice ending at t is chosen.
        """
        DomainException.check(self, t, "Tube.input2index")
        if t == self._slices[0].domain().lb():
            return 0
        return bisect.bisect_left(self._ubs, t)

    def get_slice(self, t):
        return self._slices[self.input2index(t)]

    def index(self, s):
        for i, si in enumerate(self._slices):
            if si is s:
                return i
        raise DomainException("Tube.index", "slice not in tube")

    def slice_domain(self, i):
        DomainException.check_index(self, i, "Tube.slice_domain")
        return self._slices[i].domain()

    def get_wider_slice(self):
        "Slice with the largest time domain (the first one in case of tie)."
        widths = [s.domain().diam() for s in self._slices]
        return self._slices[int(np.argmax(widths))]

    def get_largest_slice(self):
        "Slice with the thickest envelope (the first one in case of tie)."
        thick = [s.codomain().diam() for s in self._slices]
        return self._slices[int(np.argmax(thick))]

    def max_thickness(self):
        return max(s.codomain().diam() for s in self._slices)

    def max_gate_thickness(self):
        gates = [s.input_gate().diam() for s in self._slices] + [self.last_slice().output_gate().diam()]
        return max(gates)

    @staticmethod
    def same_slicing(x1, x2):
        "True iff both tubes have the same ordered slice domains."
        if x1.nb_slices() != x2.nb_slices():
            return False
        return x1._slices[0].domain().lb() == x2._slices[0].domain().lb() and x1._ubs == x2._ubs

    def sample(self, t, gate=None):
        """
            Splits the slice containing t at t. Both parts keep the
            envelope of the original slice, which also becomes the new
            gate at t. Sampling on an existing boundary has no effect on
            the slicing. When given, gate is intersected with the gate at t.
        """
        DomainException.check(self, t, "Tube.sample")
        i = self.input2index(t)
        s = self._slices[i]

        if t != s.domain().lb() and t != s.domain().ub():
            lb, ub        = s.domain().lb(), s.domain().ub()
            new           = Slice(Interval(t, ub), s._envelope)
            new._owner    = self
            new._output_gate = s._output_gate
            new._next     = s._next
            if s._next is not None:
                s._next._prev = new
            s._next       = new
            new._prev     = s
            s._domain     = Interval(lb, t)

            self._slices.insert(i+1, new)
            self._ubs[i]  = t
            self._ubs.insert(i+1, ub)
            self._invalidate_caches()

        if gate is not None:
            self.set(self(t) & Interval(gate), t)

    # Values

    def codomain(self):
        if self._codomain is None:
            codomain = Interval.empty_set()
            for s in self._slices:
                codomain = codomain | s.codomain()
            self._codomain = codomain
        return self._codomain

    def volume(self):
        return sum(s.volume() for s in self._slices)

    def _slices_over(self, t):
        "Indices of the slices whose domain meets the Interval t with a positive width."
        i0, i1 = self.input2index(t.lb()), self.input2index(t.ub())
        return [i for i in range(i0, i1+1) if not (self._slices[i].domain() & t).is_degenerated()]

    def __call__(self, t):
        """
            Value at time t (a gate on a slice boundary), or hull of the
            envelopes over an Interval of time.
        """
        DomainException.check(self, t, "Tube.__call__")
        if isnumeric(t):
            return self.get_slice(t)(t)
        if t.is_degenerated():
            return self(t.lb())

        y = Interval.empty_set()
        for i in self._slices_over(t):
            y = y | self._slices[i].codomain()
        return y

    def eval(self, t):
        """
            Pair of intervals enclosing respectively the lower bounds and
            the upper bounds of the tube over t.
        """
        if isnumeric(t):
            t = Interval(t)
        DomainException.check(self, t, "Tube.eval")
        if t.is_degenerated():
            values = [self(t.lb())]
        else:
            values = [self._slices[i].codomain() for i in self._slices_over(t)]
        values = [y for y in values if not y.is_empty()]
        if not values:
            return Interval.empty_set(), Interval.empty_set()

        lbs = [y.lb() for y in values]
        ubs = [y.ub() for y in values]
        return Interval(min(lbs), max(lbs)), Interval(min(ubs), max(ubs))

    def interpol(self, t, v):
        """
            Evaluation over t refined with the derivative tube v, which
            must share the slicing of this tube.
        """
        StructureException.check(self, v, "Tube.interpol")
        if isnumeric(t):
            t = Interval(t)
        DomainException.check(self, t, "Tube.interpol")

        y      = Interval.empty_set()
        i0, i1 = self.input2index(t.lb()), self.input2index(t.ub())
        for i in range(i0, i1+1):
            y = y | self._slices[i].interpol(t, v[i].codomain())
        return y

    def _local_inversions(self, y, search_domain, v):
        search = self.domain() if search_domain is None else search_domain & self.domain()
        if v is not None:
            StructureException.check(self, v, "Tube.invert")
        if search.is_empty():
            return

        for i in range(self.input2index(search.lb()), self.input2index(search.ub())+1):
            dv = v[i].codomain() if v is not None else Interval.all_reals()
            yield self._slices[i].invert(y, dv, search)

    def invert(self, y, search_domain=None, v=None):
        """
            Hull of the times of search_domain at which the tube may take a
            value in y. The derivative tube v, when given, refines the
            result.
        """
        t = Interval.empty_set()
        for local in self._local_inversions(y, search_domain, v):
            t = t | local
        return t

    def invert_list(self, y, search_domain=None, v=None):
        "Same as invert, as a list of disjoint intervals."
        v_t, t = [], Interval.empty_set()
        for local in self._local_inversions(y, search_domain, v):
            if local.is_empty() and not t.is_empty():
                v_t.append(t)
                t = Interval.empty_set()
            else:
                t = t | local
        if not t.is_empty():
            v_t.append(t)
        return v_t

    # Tests

    def is_empty(self):
        return any(s.is_empty() for s in self._slices)

    def __eq__(self, x):
        if not isinstance(x, Tube):
            return NotImplemented
        return Tube.same_slicing(self, x) and all(a == b for a, b in zip(self._slices, x._slices))

    def __ne__(self, x):
        eq = self.__eq__(x)
        return eq if eq is NotImplemented else not eq

    __hash__ = object.__hash__

    def is_subset(self, x):
        StructureException.check(self, x, "Tube.is_subset")
        return all(a.is_subset(b) for a, b in zip(self._slices, x._slices))

    def is_strict_subset(self, x):
        return self.is_subset(x) and self != x

    def is_interior_subset(self, x):
        StructureException.check(self, x, "Tube.is_interior_subset")
        return all(a.is_interior_subset(b) for a, b in zip(self._slices, x._slices))

    def is_strict_interior_subset(self, x):
        return self.is_interior_subset(x) and self != x

    def is_superset(self, x):
        return x.is_subset(self)

    def is_strict_superset(self, x):
        return x.is_strict_subset(self)

    def contains(self, traj):
        "True if the sampled trajectory stays inside the tube."
        DomainException.check(traj, self.domain(), "Tube.contains")
        for s in self._slices:
            if not traj(s.domain()).is_subset(s.codomain()):
                return False
            if not s.input_gate().contains(traj(s.domain().lb())):
                return False
        last = self.last_slice()
        return last.output_gate().contains(traj(last.domain().ub()))

    # Setting values

    def set(self, y, t=None):
        """
            set(y)           -> every envelope and gate
            set(y, t)        -> gate at time t (the tube is sampled at t)
            set(y, Interval) -> slices over the interval (the tube is sampled at its bounds)
        """
        y = Interval(y)
        if t is None:
            for s in self._slices:
                s.set(y)

        elif isnumeric(t):
            DomainException.check(self, t, "Tube.set")
            self.sample(t)
            if t == self.domain().lb():
                self.first_slice().set_input_gate(y)
            else:
                self.get_slice(t).set_output_gate(y)

        else:
            DomainException.check(self, t, "Tube.set")
            if t.is_degenerated():
                return self.set(y, t.lb())
            self.sample(t.lb())
            self.sample(t.ub())
            for i in self._slices_over(t):
                self._slices[i].set(y)

        self._invalidate_caches()

    def set_empty(self):
        self.set(Interval.empty_set())

    def set_function(self, f):
        """
            Envelopes are set to f(slice domain), then gates to f evaluated
            at the slice bounds.
        """
        for s in self._slices:
            s._envelope = Interval(f(s.domain()))
        for s in self._slices:
            s.set_input_gate(f(Interval(s.domain().lb())))
        last = self.last_slice()
        last.set_output_gate(f(Interval(last.domain().ub())))
        self._invalidate_caches()

    def inflate(self, rad):
        """
            Widens the tube by rad, a non-negative float or a Trajectory
            of radii. Envelopes are inflated before gates.
        """
        if isinstance(rad, Trajectory):
            DomainException.check(rad, self.domain(), "Tube.inflate")
            r_env  = [rad(s.domain()).ub() for s in self._slices]
            r_gate = [rad(s.domain().lb()) for s in self._slices] + [rad(self.domain().ub())]
        else:
            if rad < 0.:
                error(f"Tube.inflate: negative radius {rad}")
            r_env  = [rad]*self.nb_slices()
            r_gate = [rad]*(self.nb_slices()+1)

        for s, r in zip(self._slices, r_env):
            s.inflate_envelope(r)
        for i, s in enumerate(self._slices):
            s.inflate_gates(r_gate[i], r_gate[i+1])
        return self

    def bisect(self, t, ratio=None):
        """
            Two copies of the tube whose values at t are the two halves of
            the bisected value x(t).
        """
        ratio = gv.bisection_ratio if ratio is None else ratio
        DomainException.check(self, t, "Tube.bisect")
        try:
            y1, y2 = self(t).bisect(ratio)
        except DegenerateBisectionException as e:
            raise DegenerateBisectionException("Tube.bisect", f"unable to bisect, degenerated slice at t={t}") from e

        x1, x2 = self.copy(), self.copy()
        x1.set(y1, t)
        x2.set(y2, t)
        return x1, x2

    # Union and intersection

    def _combine(self, x, op, name):
        if isinstance(x, Tube):
            StructureException.check(self, x, name)
            envs  = [s.codomain() for s in x._slices]
            gates = [s.input_gate() for s in x._slices] + [x.last_slice().output_gate()]
        elif isinstance(x, Trajectory):
            DomainException.check(x, self.domain(), name)
            envs  = [x(s.domain()) for s in self._slices]
            gates = [Interval(x(s.domain().lb())) for s in self._slices] + [Interval(x(self.domain().ub()))]
        else:
            x     = Interval(x)
            envs  = [x]*self.nb_slices()
            gates = [x]*(self.nb_slices()+1)

        for i, s in enumerate(self._slices):
            s._envelope   = op(s._envelope, envs[i])
            s._input_gate = op(s._input_gate, gates[i])
        last = self.last_slice()
        last._output_gate = op(last._output_gate, gates[-1])
        self._invalidate_caches()
        return self

    def __ior__(self, x):
        return self._combine(x, lambda a, b: a | b, "Tube.__ior__")

    def __iand__(self, x):
        return self._combine(x, lambda a, b: a & b, "Tube.__iand__")

    def __or__(self, x):
        tube = self.copy()
        tube |= x
        return tube

    def __and__(self, x):
        tube = self.copy()
        tube &= x
        return tube

    @staticmethod
    def hull(tubes):
        tubes = list(tubes)
        assert tubes, "hull of no tube"
        tube  = tubes[0].copy()
        for x in tubes[1:]:
            tube |= x
        return tube

    # Integration

    def _check_primitive(self):
        """
            Partial sums of the integrals of the lower and upper bounds of
            the envelopes, at each slice boundary. Recomputed only after a
            slice has changed.
        """
        if self._primitive is None:
            lo, hi  = [Interval(0.)], [Interval(0.)]
            n_empty, n_unbounded = [0], [0]
            for s in self._slices:
                y  = s.codomain()
                dt = Interval(s.domain().ub()) - s.domain().lb()
                n_empty.append(n_empty[-1] + int(y.is_empty()))
                n_unbounded.append(n_unbounded[-1] + int(y.is_unbounded()))
                if y.is_empty() or y.is_unbounded():
                    lo.append(lo[-1])
                    hi.append(hi[-1])
                else:
                    lo.append(lo[-1] + y.lb()*dt)
                    hi.append(hi[-1] + y.ub()*dt)
            self._primitive = (lo, hi, np.array(n_empty), np.array(n_unbounded))
        return self._primitive

    def partial_integral(self, t, t2=None):
        """
            Pair of intervals enclosing the integral, from the lower bound
            of the domain to any time of t, of respectively the lower and
            the upper bound of the tube.

            partial_integral(t1, t2) returns the same pair for the integral
            from t1 to t2.
        """
        if t2 is not None:
            (lo1, hi1), (lo2, hi2) = self.partial_integral(t), self.partial_integral(t2)
            return lo2 - lo1, hi2 - hi1

        if isnumeric(t):
            t = Interval(t)
        DomainException.check(self, t, "Tube.partial_integral")
        lo, hi, n_empty, n_unbounded = self._check_primitive()

        i0, i1 = self.input2index(t.lb()), self.input2index(t.ub())
        if n_empty[i1+1] > 0:
            return Interval.empty_set(), Interval.empty_set()
        if n_unbounded[i1+1] > 0:
            return Interval.all_reals(), Interval.all_reals()

        def g(i, tau):
            s  = self._slices[i]
            y  = s.codomain()
            ds = Interval(tau) - s.domain().lb()
            return lo[i] + y.lb()*ds, hi[i] + y.ub()*ds

        # piecewise linear in time: extrema on the bounds of t or on slice boundaries
        integral_lb, integral_ub = g(i0, t.lb())
        lb_end, ub_end           = g(i1, t.ub())
        integral_lb, integral_ub = integral_lb | lb_end, integral_ub | ub_end
        for j in range(i0+1, i1+1):
            integral_lb = integral_lb | lo[j]
            integral_ub = integral_ub | hi[j]
        return integral_lb, integral_ub

    def integral(self, t, t2=None):
        """
            integral(t)      -> enclosure of the integral from the lower
                                bound of the domain to any time of t
            integral(t1, t2) -> enclosure of the integral from t1 to t2
        """
        if t2 is None:
            integral_lb, integral_ub = self.partial_integral(t)
            if integral_lb.is_empty() or integral_ub.is_empty():
                return Interval.empty_set()
            return Interval(integral_lb.lb(), integral_ub.ub())

        (lo1, hi1), (lo2, hi2) = self.partial_integral(t), self.partial_integral(t2)
        if lo1.is_empty() or lo2.is_empty():
            return Interval.empty_set()
        lb, ub = (lo2 - lo1).lb(), (hi2 - hi1).ub()
        return Interval(min(lb, ub), max(lb, ub))

    def primitive(self, initial_value=0.):
        """
            Tube enclosing the primitives of this tube that take the value
            initial_value at the lower bound of the domain.
        """
        from ..contractors.ctc import TimePropag
        from ..contractors.ctc_deriv import CtcDeriv

        x = self.copy(Interval.all_reals())
        x.set(Interval(initial_value), x.domain().lb())
        CtcDeriv().contract(x, self, TimePropag.FORWARD)
        return x

    # Serialization

    def serialize(self, path, trajectories=(), version=None):
        from ..io.serialization import serialize_tube

        serialize_tube(path, self, trajectories, version)

    def __repr__(self):
        n = self.nb_slices()
        return f"Tube {self.domain()}↦{self.codomain()}, {n} slice{'s' if n > 1 else ''}"
