__all__ = ["GrahamScan"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 10, 2023"
__status__      = "Completed"

import functools

from ..arithmetic.interval import sqr
from .point import Point, BoolInterval, OrientationInterval


class GrahamScan():
    """
        Convex hull of a set of points with interval coordinates.

        The three-valued orientation test makes the scan robust to
        numerical uncertainty: a turn that cannot be decided (UNDEFINED)
        keeps the point, which may only enlarge the hull.
    """

    @staticmethod
    def dist(p1, p2):
        assert not p1.does_not_exist() and not p2.does_not_exist()
        return sqr(p1.x() - p2.x()) + sqr(p1.y() - p2.y())

    @staticmethod
    def orientation(a, b, c):
        assert not (a.does_not_exist() or b.does_not_exist() or c.does_not_exist())

        val = (b.y() - a.y())*(c.x() - b.x()) - (b.x() - a.x())*(c.y() - b.y())
        if val.contains(0.):
            return OrientationInterval.UNDEFINED # possibly colinear
        return OrientationInterval.CLOCKWISE if val.lb() > 0. else OrientationInterval.COUNTERCLOCKWISE

    @staticmethod
    def convex_hull(points):
        """
            Inputs:
                points: list of Point.

            Outputs:
                hull: list of Point, counter-clockwise, starting from the
                bottom-most (then left-most) point. Inexistent points are
                dropped; three points or fewer are returned as they are.

            A point with a non-degenerate box is replaced by the corners of
            its box: the hull of the boxes is the hull of their corners, and
            every turn between exact points can be decided.
        """
        pts, seen = [], set()
        for p in points:
            if p.does_not_exist():
                continue
            for c in (p.corners() if not p.is_degenerated() else [p]):
                key = (c.x().lb(), c.y().lb())
                if key not in seen:
                    seen.add(key)
                    pts.append(c)

        if len(pts) <= 3:
            return pts

        # bottom-most point, left-most in case of tie
        imin = 0
        for i in range(1, len(pts)):
            y, ymin = pts[i].y(), pts[imin].y()
            if y.lb() < ymin.lb() or (y.lb() == ymin.lb() and pts[i].x().lb() < pts[imin].x().lb()):
                imin = i
        p0   = pts[imin]
        rest = pts[:imin] + pts[imin+1:]

        def compare(p1, p2):
            # polar angle around p0, then distance to p0
            cross = Point.cross(p0, p1, p2).mid()
            if cross != 0.:
                return -1 if cross > 0. else 1
            d1, d2 = GrahamScan.dist(p0, p1).mid(), GrahamScan.dist(p0, p2).mid()
            return (d1 > d2) - (d1 < d2)

        rest = sorted(rest, key=functools.cmp_to_key(compare))

        # same angle with p0: keep the farthest only
        sorted_pts = [p0]
        i = 0
        while i < len(rest):
            while i < len(rest)-1 and Point.aligned(p0, rest[i], rest[i+1]) == BoolInterval.YES:
                i += 1
            sorted_pts.append(rest[i])
            i += 1

        if len(sorted_pts) < 3:
            return sorted_pts

        stack = sorted_pts[:2]
        for p in sorted_pts[2:]:
            # pop on a right turn, or on an exact alignment
            while len(stack) > 1 and \
                (GrahamScan.orientation(stack[-2], stack[-1], p) == OrientationInterval.CLOCKWISE \
                    or Point.aligned(stack[-2], stack[-1], p) == BoolInterval.YES):
                stack.pop()
            stack.append(p)

        return stack
