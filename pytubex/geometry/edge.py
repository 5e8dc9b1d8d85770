__all__ = ["Edge", "push_edges"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 10, 2023"
__status__      = "Completed"

import math

from ..arithmetic.interval import Interval
from ..arithmetic.matrix import IntervalVector
from .point import Point, BoolInterval


class Edge():
    def __init__(self, p1, p2):
        "Oriented segment from p1 to p2."
        self._p1 = p1
        self._p2 = p2

    def p1(self):
        return self._p1

    def p2(self):
        return self._p2

    def box(self):
        return self._p1.box() | self._p2.box()

    def does_not_exist(self):
        return self._p1.does_not_exist() or self._p2.does_not_exist()

    def __eq__(self, e):
        if not isinstance(e, Edge):
            return NotImplemented
        return self._p1 == e._p1 and self._p2 == e._p2

    def __ne__(self, e):
        eq = self.__eq__(e)
        return eq if eq is NotImplemented else not eq

    def __and__(self, x):
        if isinstance(x, Edge):
            return self._inter_edge(x)
        return self._inter_box(x)

    def _inter_box(self, x):
        """
            Box enclosing the part of this edge that lies in the 2d box x.
        """
        assert len(x) == 2, "edges live in the plane"
        if self.does_not_exist() or x.is_empty():
            return IntervalVector.empty(2)

        if self.box().is_flat():
            return x & self.box()

        inter  = IntervalVector.empty(2)
        in_p1  = self._p1.box().is_subset(x)
        in_p2  = self._p2.box().is_subset(x)
        if in_p1:
            inter = inter | self._p1.box()
        if in_p2:
            inter = inter | self._p2.box()
        if in_p1 and in_p2:
            return inter

        # interpolation
        for box_edge in push_edges(x):
            p = self & box_edge
            if not p.does_not_exist():
                inter = inter | p.box()
        return inter & x

    def _inter_edge(self, e):
        """
            Point enclosing the intersection of this edge with e.

            Vertical and horizontal edges are solved without dividing by
            a zero-width interval. Whenever a division by an interval that
            contains zero cannot be avoided, the answer is the intersection
            of the two bounding boxes, which remains a guaranteed enclosure.
        """
        assert not e.does_not_exist(), "intersection with an inexistent edge"
        if self.does_not_exist():
            return Point(Interval.empty_set(), Interval.empty_set())

        box, ebox = self.box(), e.box()
        common    = box & ebox
        if common.is_empty():
            return Point(Interval.empty_set(), Interval.empty_set())

        p1, p2 = self._p1, self._p2
        dx, dy = p2.x() - p1.x(), p2.y() - p1.y()

        if ebox[0].is_degenerated(): # vertical edge e
            if box.is_flat() or dx.contains(0.):
                return Point.from_box(common)
            a = dy / dx # slope
            y = p1.y() + a*(ebox[0] - p1.x())
            return Point(common[0], common[1] & y)

        if ebox[1].is_degenerated(): # horizontal edge e
            if box.is_flat() or dy.contains(0.):
                return Point.from_box(common)
            a = dx / dy # inverse slope
            x = p1.x() + a*(ebox[1] - p1.y())
            return Point(common[0] & x, common[1])

        # oblique edge e
        x1, y1 = p1.x(), p1.y()
        x2, y2 = p2.x(), p2.y()
        x3, y3 = e.p1().x(), e.p1().y()
        x4, y4 = e.p2().x(), e.p2().y()

        det = (x1 - x2)*(y3 - y4) - (y1 - y2)*(x3 - x4)
        if det.contains(0.):
            return Point.from_box(common)

        c12 = x1*y2 - y1*x2
        c34 = x3*y4 - y3*x4
        x   = (c12*(x3 - x4) - (x1 - x2)*c34) / det
        y   = (c12*(y3 - y4) - (y1 - y2)*c34) / det
        return Point(common[0] & x, common[1] & y)

    @staticmethod
    def parallel(e1, e2):
        assert not e1.does_not_exist() and not e2.does_not_exist()

        if e1.box()[0].is_degenerated() and e2.box()[0].is_degenerated():
            return BoolInterval.YES # vertical lines

        if e1.box()[1].is_degenerated() and e2.box()[1].is_degenerated():
            return BoolInterval.YES # horizontal lines

        d1x, d1y = e1.p2().x() - e1.p1().x(), e1.p2().y() - e1.p1().y()
        d2x, d2y = e2.p2().x() - e2.p1().x(), e2.p2().y() - e2.p1().y()
        det      = d1x*d2y - d1y*d2x
        if det.is_degenerated() and det.lb() == 0.:
            return BoolInterval.YES
        # the intersection point cannot be computed
        return BoolInterval.MAYBE if det.contains(0.) else BoolInterval.NO

    def __repr__(self):
        return f"{self._p1}--{self._p2}"


def push_edges(box):
    """
        The four edges of a 2d box, counter-clockwise from the lower-left
        corner. Infinite bounds are kept as half-unbounded intervals.
    """
    assert len(box) == 2, "edges of a 2d box"
    if box.is_empty():
        return []

    x, y = box[0], box[1]
    ylb  = Interval(y.lb()) if y.lb() != -math.inf else Interval(-math.inf, y.ub())
    yub  = Interval(y.ub()) if y.ub() !=  math.inf else Interval(y.lb(), math.inf)
    xlb  = Interval(x.lb()) if x.lb() != -math.inf else Interval(-math.inf, x.ub())
    xub  = Interval(x.ub()) if x.ub() !=  math.inf else Interval(x.lb(), math.inf)

    return [Edge(Point(xlb, ylb), Point(xub, ylb)),
            Edge(Point(xub, ylb), Point(xub, yub)),
            Edge(Point(xub, yub), Point(xlb, yub)),
            Edge(Point(xlb, yub), Point(xlb, ylb))]
