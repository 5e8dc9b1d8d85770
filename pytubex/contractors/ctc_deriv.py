__all__ = ["CtcDeriv"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 20, 2023"
__status__      = "Completed"

import logging

from ..arithmetic.interval import Interval
from ..utils.config import gv
from ..utils.exceptions import StructureException
from ..tube.tube_vector import TubeVector
from .ctc import Ctc, TimePropag

logger = logging.getLogger(__name__)


class CtcDeriv(Ctc):
    """
        Contractor for the constraint dx/dt = v.

        Over a slice of width dt, the value at the output gate lies in
        the value at the input gate plus dt times the derivative, and
        conversely. Gates are narrowed from one slice to the next, then
        the envelope is narrowed to the values reachable from both gates.
    """

    def contract(self, x, v=None, t_propa=TimePropag.FORWARD | TimePropag.BACKWARD):
        """
            One forward sweep followed by one backward sweep (or only one
            of them, per t_propa).

            Inputs:
                x: Tube or TubeVector to contract, or a list [x, v].
                v: derivative of x, with the same slicing.
                t_propa: TimePropag flags.

            Outputs:
                changed: True if x has been narrowed.
        """
        if isinstance(x, list):
            x, v = x[0], x[1]

        if isinstance(x, TubeVector):
            changed = False
            for xi, vi in zip(x, v):
                changed |= self.contract(xi, vi, t_propa)
            return changed

        StructureException.check(x, v, "CtcDeriv.contract")

        changed = False
        if not self._time_propag:
            for sx, sv in zip(x.slices(), v.slices()):
                changed |= self.contract_slice(sx, sv, t_propa)
            return changed

        if TimePropag.FORWARD in t_propa:
            for sx, sv in zip(x.slices(), v.slices()):
                changed |= self.contract_slice(sx, sv, TimePropag.FORWARD)

        if TimePropag.BACKWARD in t_propa:
            for sx, sv in zip(reversed(x.slices()), reversed(v.slices())):
                changed |= self.contract_slice(sx, sv, TimePropag.BACKWARD)

        return changed

    def contract_fixpoint(self, x, v, max_iterations=None):
        """
            Forward/backward sweeps repeated until nothing changes, or
            max_iterations sweeps (gv.fixpoint_max_iterations by default).

            Outputs:
                changed: True if x has been narrowed.
        """
        max_iterations = gv.fixpoint_max_iterations if max_iterations is None else max_iterations

        changed = False
        for k in range(max_iterations):
            if not self.contract(x, v):
                logger.debug(f"CtcDeriv: fixed point reached after {k+1} sweeps")
                break
            changed = True
        else:
            logger.debug(f"CtcDeriv: stopped after {max_iterations} sweeps")
        return changed

    def contract_slice(self, x, v, t_propa=TimePropag.FORWARD | TimePropag.BACKWARD):
        """
            Contracts one slice x of the tube with the slice v of its
            derivative.

            Outputs:
                changed: True if the slice has been narrowed.
        """
        before = (x.input_gate(), x.codomain(), x.output_gate())

        dv = v.codomain()
        if dv.is_empty() or x.is_empty():
            x.set_empty()
            return before != (x.input_gate(), x.codomain(), x.output_gate())

        dt = Interval(x.domain().ub()) - x.domain().lb()
        if TimePropag.FORWARD in t_propa:
            x.set_output_gate(x.output_gate() & (x.input_gate() + dt*dv))
        if TimePropag.BACKWARD in t_propa:
            x.set_input_gate(x.input_gate() & (x.output_gate() - dt*dv))

        x.set_envelope(x.codomain() & x.interpol(x.domain(), dv))

        return before != (x.input_gate(), x.codomain(), x.output_gate())
