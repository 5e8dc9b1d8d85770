__all__ = ["CtcEval"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 22, 2023"
__status__      = "Completed"

import logging

from ..arithmetic.interval import Interval
from ..utils.exceptions import StructureException
from .ctc import Ctc
from .ctc_deriv import CtcDeriv

logger = logging.getLogger(__name__)


class CtcEval(Ctc):
    def __init__(self):
        """
            Contractor for the observation z = x(t), where t and z are
            intervals and x is a tube of derivative v.

            The date t is narrowed to the times at which x can meet z, the
            value z to the values x takes over t. When time propagation is
            enabled, z is injected in x as a gate and propagated to the
            whole tube with CtcDeriv.
        """
        super().__init__()
        self._ctc_deriv = CtcDeriv()

    def contract(self, t, z=None, x=None, v=None):
        """
            Inputs:
                t: float or Interval, date of the observation, or a list
                    [t, z, x, v] whose first two items are replaced by their
                    contracted values.
                z: float or Interval, observed value.
                x: Tube, contracted in place.
                v: Tube, derivative of x (optional without propagation).

            Outputs:
                (t, z): the contracted date and value.
        """
        v_domains = None
        if isinstance(t, list):
            v_domains    = t
            t, z, x, v   = (list(t) + [None])[:4]

        t, z = Interval(t), Interval(z)
        if v is not None:
            StructureException.check(x, v, "CtcEval.contract")

        t, z = self._contract(t, z, x, v)

        if v_domains is not None:
            v_domains[0], v_domains[1] = t, z
        return t, z

    def _contract(self, t, z, x, v):
        t = t & x.domain()
        if t.is_empty() or z.is_empty() or x.is_empty():
            logger.debug(f"CtcEval: inconsistent observation ({t}, {z})")
            x.set_empty()
            return Interval.empty_set(), Interval.empty_set()

        t = t & x.invert(z, t, v)
        if t.is_empty():
            logger.debug(f"CtcEval: no date consistent with value {z}")
            x.set_empty()
            return Interval.empty_set(), Interval.empty_set()

        z = z & (x.interpol(t, v) if v is not None else x(t))
        if z.is_empty():
            x.set_empty()
            return Interval.empty_set(), Interval.empty_set()

        if not self._time_propag or v is None:
            return t, z

        if self._preserve_slicing:
            x_, v_ = x.copy(), v.copy()
            self._propagate(t, z, x_, v_)
            self._restore_slicing(x, x_)
        else:
            self._propagate(t, z, x, v)

        if x.is_empty():
            return Interval.empty_set(), Interval.empty_set()
        return t, z

    def _propagate(self, t, z, x, v):
        if t.is_degenerated():
            x.sample(t.lb(), z)
            v.sample(t.lb())

        else:
            x.sample(t.lb())
            x.sample(t.ub())
            v.sample(t.lb())
            v.sample(t.ub())
            # the observation holds at some unknown time of t
            drift = Interval(0., t.diam()) * v(t)
            x.set(x(t.ub()) & (z + drift), t.ub())
            x.set(x(t.lb()) & (z - drift), t.lb())

        self._ctc_deriv.contract(x, v)

    @staticmethod
    def _restore_slicing(x, x_):
        "Narrows x with x_, a contracted copy of x sampled more finely."
        for s in x.slices():
            s.set_envelope(s.codomain() & x_(s.domain()))
        for s in x.slices():
            s.set_input_gate(s.input_gate() & x_(s.domain().lb()))
        last = x.last_slice()
        last.set_output_gate(last.output_gate() & x_(last.domain().ub()))
