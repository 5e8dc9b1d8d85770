__all__ = ["CtcLinobs"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 25, 2023"
__status__      = "Completed"

import logging
import numpy as np

from ..arithmetic.interval import Interval
from ..arithmetic.matrix import IntervalVector, expm_enclosure
from ..geometry.point import Point
from ..geometry.convex_polygon import ConvexPolygon
from ..utils.config import gv
from ..utils.exceptions import StructureException
from .ctc import Ctc

logger = logging.getLogger(__name__)


class CtcLinobs(Ctc):
    def __init__(self, A, b, exp_At=expm_enclosure):
        """
            Contractor for the linear system dx/dt = A.x + b.u, x in R^2.

            The state at each gate is enclosed in a convex polygon, which
            catches the correlation between both components that a box
            would lose. Polygons are transported from one gate to the next
            by the flow of the system, forward then backward in time.

            Inputs:
                A: (2, 2) float array.
                b: (2,) float array.
                exp_At: callable (A, t) -> IntervalMatrix enclosing
                    exp(A.tau) for all tau in the Interval t.
        """
        super().__init__()
        self._A            = np.asarray(A, dtype=np.float64)
        self._b            = np.asarray(b, dtype=np.float64).ravel()
        self._exp_At       = exp_At
        self._max_vertices = gv.polygon_max_vertices

        assert self._A.shape == (2, 2), "CtcLinobs handles 2d systems"
        assert self._b.shape == (2,), "b must be a 2d vector"

    def _transport(self, p, M, d):
        """
            Polygon enclosing {M.x + d} for x in the polygon p, where M is
            an IntervalMatrix and d an IntervalVector.
        """
        points = []
        for v in p.vertices():
            for corner in v.box().corners():
                box = (M @ np.array(corner)) + d
                if box.is_unbounded():
                    return None
                points.append(Point.from_box(box))
        return ConvexPolygon(points)

    def _disturbance(self, dt, u):
        "dt.exp(A.[0,dt]).b.u, enclosing the effect of the input u over a time step dt."
        bu = self._exp_At(self._A, Interval(0., dt.ub())) @ self._b
        return IntervalVector([c * (dt * u) for c in bu])

    def _simplify(self, p):
        if p is not None and p.nb_vertices() > self._max_vertices:
            return p.simplify(self._max_vertices)
        return p

    @staticmethod
    def _narrow(p, q):
        "p & q, where None stands for the whole plane."
        if q is None:
            return p
        if p is None:
            return q
        return p & q

    def ctc_fwd_gate(self, p_k, p_km1, dt_km1_k, u_km1):
        """
            Narrows the polygon p_k of gate k with the polygon p_km1 of
            gate k-1 transported over dt_km1_k.

            Outputs:
                the contracted polygon (None when unbounded).
        """
        if p_km1 is None or u_km1.is_unbounded():
            return p_k
        d = self._disturbance(dt_km1_k, u_km1)
        if p_km1.is_empty() or d.is_empty():
            return ConvexPolygon()

        transported = self._transport(p_km1, self._exp_At(self._A, dt_km1_k), d)
        return self._simplify(self._narrow(transported, p_k))

    def ctc_bwd_gate(self, p_k, p_kp1, dt_k_kp1, u_k):
        """
            Narrows the polygon p_k of gate k with the polygon p_kp1 of
            gate k+1 transported backward over dt_k_kp1.
        """
        if p_kp1 is None or u_k.is_unbounded():
            return p_k
        d = self._disturbance(dt_k_kp1, u_k)
        if p_kp1.is_empty() or d.is_empty():
            return ConvexPolygon()

        # x_k = exp(-A.dt).(x_kp1 - d)
        M      = self._exp_At(self._A, -dt_k_kp1)
        points = []
        for v in p_kp1.vertices():
            for corner in (v.box() - d).corners():
                box = M @ np.array(corner)
                if box.is_unbounded():
                    return p_k
                points.append(Point.from_box(box))
        return self._simplify(self._narrow(ConvexPolygon(points), p_k))

    def polygon_envelope(self, p_k, dt_k_kp1, u_k):
        """
            Polygon enclosing the states reached from p_k over [0, dt_k_kp1].
        """
        tau = Interval(0., dt_k_kp1.ub())
        M   = self._exp_At(self._A, tau)
        bu  = M @ self._b
        d   = IntervalVector([c * (tau * u_k) for c in bu])
        return self._transport(p_k, M, d)

    def contract(self, x, u=None, v_polygons=None):
        """
            Inputs:
                x: TubeVector of dimension 2, or a list [x, u].
                u: Tube of the input, with the slicing of x.
                v_polygons: optional list, filled with the polygon of each
                    gate (None for an unbounded gate).

            Outputs:
                changed: True if x has been narrowed.
        """
        if isinstance(x, list):
            x, u = x[0], x[1]

        assert x.size() == 2, "CtcLinobs contracts 2d tube vectors"
        StructureException.check(x[0], x[1], "CtcLinobs.contract")
        StructureException.check(x[0], u, "CtcLinobs.contract")

        before = x.copy()
        n      = x.nb_slices()
        times  = [s.domain().lb() for s in x[0].slices()] + [x.domain().ub()]
        dts    = [Interval(times[k+1]) - times[k] for k in range(n)]
        u_     = [s.codomain() for s in u.slices()]

        def gate_box(k):
            return IntervalVector([xi(times[k]) for xi in x])

        p = []
        for k in range(n+1):
            box = gate_box(k)
            p.append(None if box.is_unbounded() else ConvexPolygon.from_box(box))

        if self._time_propag:
            for k in range(1, n+1):
                p[k] = self.ctc_fwd_gate(p[k], p[k-1], dts[k-1], u_[k-1])
                p[k] = self._simplify(self._clip(p[k], gate_box(k)))
            for k in range(n-1, -1, -1):
                p[k] = self.ctc_bwd_gate(p[k], p[k+1], dts[k], u_[k])
                p[k] = self._simplify(self._clip(p[k], gate_box(k)))

        for k in range(n+1):
            if p[k] is None:
                continue
            box = p[k].box()
            for i, xi in enumerate(x):
                if k < n:
                    xi[k].set_input_gate(xi[k].input_gate() & box[i])
                else:
                    xi[n-1].set_output_gate(xi[n-1].output_gate() & box[i])

        for k in range(n):
            if p[k] is None or u_[k].is_unbounded():
                continue
            if p[k].is_empty():
                box = IntervalVector.empty(2)
            else:
                envelope = self.polygon_envelope(p[k], dts[k], u_[k])
                if envelope is None:
                    continue
                box = envelope.box()
            for i, xi in enumerate(x):
                xi[k].set_envelope(xi[k].codomain() & box[i])

        if v_polygons is not None:
            v_polygons[:] = p

        changed = x != before
        logger.debug(f"CtcLinobs: contraction over {n} slices, changed={changed}")
        return changed

    @staticmethod
    def _clip(p, box):
        "Polygon p clipped by the gate box."
        if p is None:
            return None
        return p & box
