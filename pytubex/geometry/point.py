__all__ = ["Point", "BoolInterval", "OrientationInterval"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 10, 2023"
__status__      = "Completed"

from enum import Enum

from ..arithmetic.interval import Interval
from ..arithmetic.matrix import IntervalVector


class BoolInterval(Enum):
    "Three-valued answer of a test evaluated with intervals."
    NO    = 0
    YES   = 1
    MAYBE = 2


class OrientationInterval(Enum):
    CLOCKWISE        = 0
    COUNTERCLOCKWISE = 1
    UNDEFINED        = 2   # the cross product straddles zero


class Point():
    def __init__(self, x, y):
        """
            2d point with interval coordinates.

            A point whose coordinates are floats is exact; interval
            coordinates enclose a point known up to numerical uncertainty.
        """
        self._x = Interval(x)
        self._y = Interval(y)

    @classmethod
    def from_box(cls, box):
        assert len(box) == 2, "a point is built from a 2d box"
        return cls(box[0], box[1])

    def x(self):
        return self._x

    def y(self):
        return self._y

    def box(self):
        return IntervalVector([self._x, self._y])

    def mid(self):
        return (self._x.mid(), self._y.mid())

    def does_not_exist(self):
        return self._x.is_empty() or self._y.is_empty()

    def corners(self):
        "Points at the corners of the box of this point."
        return [Point(cx, cy) for cx, cy in self.box().corners()]

    def is_degenerated(self):
        return self._x.is_degenerated() and self._y.is_degenerated()

    @staticmethod
    def cross(a, b, c):
        "(b - a) x (c - a), evaluated with intervals."
        return (b.x() - a.x())*(c.y() - a.y()) - (b.y() - a.y())*(c.x() - a.x())

    @staticmethod
    def aligned(a, b, c):
        """
            YES if a, b, c are certainly aligned, NO if certainly not,
            MAYBE when the cross product straddles zero.
        """
        assert not (a.does_not_exist() or b.does_not_exist() or c.does_not_exist())
        cross = Point.cross(a, b, c)
        if cross.is_degenerated() and cross.lb() == 0.:
            return BoolInterval.YES
        if cross.contains(0.):
            return BoolInterval.MAYBE
        return BoolInterval.NO

    def __eq__(self, p):
        if not isinstance(p, Point):
            return NotImplemented
        return self._x == p._x and self._y == p._y

    def __ne__(self, p):
        eq = self.__eq__(p)
        return eq if eq is NotImplemented else not eq

    def __hash__(self):
        return hash((self._x, self._y))

    def __repr__(self):
        return f"({self._x} ; {self._y})"
