__all__ = ["ConvexPolygon"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 12, 2023"
__status__      = "Completed"

import logging

from ..arithmetic.interval import Interval
from ..arithmetic.matrix import IntervalVector
from .point import Point, BoolInterval, OrientationInterval
from .edge import Edge, push_edges
from .graham_scan import GrahamScan

logger = logging.getLogger(__name__)


def _lines_intersection(a, b, c, d):
    "Meeting point of the lines (ab) and (cd), None when they may be parallel."
    x1, y1, x2, y2 = a.x(), a.y(), b.x(), b.y()
    x3, y3, x4, y4 = c.x(), c.y(), d.x(), d.y()

    det = (x1 - x2)*(y3 - y4) - (y1 - y2)*(x3 - x4)
    if det.contains(0.):
        return None

    c12 = x1*y2 - y1*x2
    c34 = x3*y4 - y3*x4
    return Point((c12*(x3 - x4) - (x1 - x2)*c34) / det,
                 (c12*(y3 - y4) - (y1 - y2)*c34) / det)


class ConvexPolygon():
    def __init__(self, points=()):
        """
            Convex polygon, the convex hull of a set of points with interval
            coordinates.

            The hull is computed on the corners of the point boxes, so the
            stored vertices are exact and counter-clockwise.

            Inputs:
                points: iterable of Point.
        """
        points = GrahamScan.convex_hull(points)
        if len(points) == 3 and GrahamScan.orientation(*points) == OrientationInterval.CLOCKWISE:
            points = points[::-1]
        self._v = points

    @classmethod
    def from_box(cls, box):
        assert len(box) == 2, "a polygon is built from a 2d box"
        assert not box.is_unbounded(), "polygon from an unbounded box"
        if box.is_empty():
            return cls()
        return cls([Point(x, y) for x, y in box.corners()])

    def vertices(self):
        return list(self._v)

    def nb_vertices(self):
        return len(self._v)

    def is_empty(self):
        return len(self._v) == 0

    def edges(self):
        n = len(self._v)
        if n < 2:
            return []
        return [Edge(self._v[i], self._v[(i+1) % n]) for i in range(n)]

    def box(self):
        box = IntervalVector.empty(2)
        for v in self._v:
            box = box | v.box()
        return box

    def area(self):
        "Shoelace formula, evaluated with intervals."
        n = len(self._v)
        if n < 3:
            return Interval(0.)
        s = Interval(0.)
        for i in range(n):
            a, b = self._v[i], self._v[(i+1) % n]
            s = s + a.x()*b.y() - b.x()*a.y()
        return (s / 2.) & Interval.pos_reals()

    def encloses(self, p):
        """
            YES if p certainly lies in the polygon, NO if it certainly
            does not, MAYBE otherwise.
        """
        if self.is_empty() or p.does_not_exist():
            return BoolInterval.NO

        if len(self._v) < 3:
            box = self.box()
            if not p.box().intersects(box):
                return BoolInterval.NO
            if p.is_degenerated() and box == p.box():
                return BoolInterval.YES
            return BoolInterval.MAYBE

        undefined = False
        for e in self.edges():
            o = GrahamScan.orientation(e.p1(), e.p2(), p)
            if o == OrientationInterval.CLOCKWISE:
                return BoolInterval.NO
            if o == OrientationInterval.UNDEFINED:
                undefined = True
        return BoolInterval.MAYBE if undefined else BoolInterval.YES

    def __and__(self, x):
        if isinstance(x, ConvexPolygon):
            return self._inter_polygon(x)
        return self._inter_box(x)

    def _inter_box(self, x):
        assert len(x) == 2, "polygons live in the plane"
        if self.is_empty() or x.is_empty():
            return ConvexPolygon()

        if x.is_unbounded():
            x = x & self.box()
            if x.is_empty():
                return ConvexPolygon()

        pts = []
        for v in self._v:
            if v.box().is_subset(x):
                pts.append(v)
            elif v.box().intersects(x):
                pts.append(Point.from_box(v.box() & x))

        for c in (Point(cx, cy) for cx, cy in x.corners()):
            if self.encloses(c) != BoolInterval.NO:
                pts.append(c)

        box_edges = push_edges(x)
        for e in self.edges():
            for be in box_edges:
                p = e & be
                if not p.does_not_exist():
                    pts.append(p)

        return ConvexPolygon(pts)

    def _inter_polygon(self, q):
        if self.is_empty() or q.is_empty():
            return ConvexPolygon()

        pts  = [v for v in self._v if q.encloses(v) != BoolInterval.NO]
        pts += [v for v in q._v if self.encloses(v) != BoolInterval.NO]

        for e1 in self.edges():
            for e2 in q.edges():
                if Edge.parallel(e1, e2) == BoolInterval.YES:
                    continue # overlapping endpoints are already in pts
                p = e1 & e2
                if not p.does_not_exist():
                    pts.append(p)

        return ConvexPolygon(pts)

    def simplify(self, max_vertices):
        """
            Outer approximation with at most max_vertices vertices.

            An edge is collapsed by extending its two neighbouring edges
            up to their meeting point, which replaces the two end vertices
            of the edge. Among the edges whose neighbours meet outside the
            polygon, the one adding the smallest area is collapsed first.
            The meeting points are intervals: the result is rebuilt from the
            corners of their boxes, and collapsed again with a lower target
            while it has too many vertices. When no edge can be collapsed
            the polygon becomes its bounding box.
        """
        assert max_vertices >= 4, "a simplified polygon keeps at least 4 vertices"

        poly, target = self, max_vertices
        while poly.nb_vertices() > max_vertices:
            v = poly._collapse(target) if target >= 3 else None
            if v is None:
                logger.debug(f"polygon of {self.nb_vertices()} vertices replaced by its box")
                return ConvexPolygon.from_box(self.box())
            poly    = ConvexPolygon(v)
            target -= 1

        return poly

    def _collapse(self, target):
        "Vertex list after edge collapses down to target vertices, None when stuck."
        v = list(self._v)

        while len(v) > target:
            n            = len(v)
            best, best_i = None, None
            for i in range(n):
                a, b = v[(i-1) % n], v[i]
                c, d = v[(i+1) % n], v[(i+2) % n]
                p    = _lines_intersection(a, b, c, d)
                if p is None or GrahamScan.orientation(b, c, p) != OrientationInterval.CLOCKWISE:
                    continue
                added = (Point.cross(b, p, c) / 2.).mag()
                if best is None or added < best[0]:
                    best, best_i = (added, p), i

            if best is None:
                return None

            i = best_i
            if i == n - 1: # the collapsed edge wraps around
                v = [best[1]] + v[1:n-1]
            else:
                v = v[:i] + [best[1]] + v[i+2:]

        return v

    def __eq__(self, p):
        if not isinstance(p, ConvexPolygon):
            return NotImplemented
        return self._v == p._v

    def __ne__(self, p):
        eq = self.__eq__(p)
        return eq if eq is NotImplemented else not eq

    def __repr__(self):
        return "{" + ", ".join(str(v) for v in self._v) + "}"
