"""Points, edges, convex hulls and convex polygons with interval coordinates."""

import math

import numpy as np
import pytest

from pytubex.arithmetic import Interval, IntervalVector
from pytubex.geometry import (BoolInterval, ConvexPolygon, Edge, GrahamScan,
                              OrientationInterval, Point)


def _points(coords):
    return [Point(x, y) for x, y in coords]


def _box(x, y):
    return IntervalVector([Interval(*x), Interval(*y)])


def test_orientation_of_three_points() -> None:
    a, b, c = _points([(0., 0.), (1., 0.), (1., 1.)])
    assert GrahamScan.orientation(a, b, c) == OrientationInterval.COUNTERCLOCKWISE
    assert GrahamScan.orientation(c, b, a) == OrientationInterval.CLOCKWISE
    assert GrahamScan.orientation(a, b, Point(2., 0.)) == OrientationInterval.UNDEFINED


def test_aligned_points() -> None:
    a, c = Point(0., 0.), Point(2., 2.)
    assert Point.aligned(a, Point(1., 1.), c) == BoolInterval.YES
    assert Point.aligned(a, Point(Interval(0.9, 1.1), 1.), c) == BoolInterval.MAYBE
    assert Point.aligned(a, Point(1., 0.), c) == BoolInterval.NO


def test_hull_drops_interior_and_collinear_points() -> None:
    pts  = _points([(0., 0.), (2., 0.), (2., 2.), (0., 2.), (1., 1.), (1., 0.)])
    hull = GrahamScan.convex_hull(pts)
    assert hull == _points([(0., 0.), (2., 0.), (2., 2.), (0., 2.)])


def test_hull_of_collinear_points() -> None:
    pts = _points([(0., 0.), (1., 1.), (2., 2.), (3., 3.)])
    assert GrahamScan.convex_hull(pts) == _points([(0., 0.), (3., 3.)])


def test_hull_of_random_points_is_convex_and_encloses_them() -> None:
    rng  = np.random.default_rng(0)
    pts  = _points(rng.uniform(0., 10., size=(30, 2)).tolist())
    hull = GrahamScan.convex_hull(pts)

    assert len(hull) >= 3
    assert all(p in pts for p in hull)
    n = len(hull)
    for i in range(n):
        a, b, c = hull[i], hull[(i+1) % n], hull[(i+2) % n]
        assert GrahamScan.orientation(a, b, c) == OrientationInterval.COUNTERCLOCKWISE
    for p in pts:
        for i in range(n):
            assert GrahamScan.orientation(hull[i], hull[(i+1) % n], p) != OrientationInterval.CLOCKWISE


def test_intersection_of_oblique_edges() -> None:
    p = Edge(Point(0., 0.), Point(2., 2.)) & Edge(Point(0., 2.), Point(2., 0.))
    assert p.x().contains(1.) and p.y().contains(1.)
    assert p.x().diam() < 1e-12 and p.y().diam() < 1e-12


def test_intersection_with_a_vertical_edge() -> None:
    p = Edge(Point(0., 0.), Point(2., 2.)) & Edge(Point(1., -1.), Point(1., 3.))
    assert p == Point(1., 1.)


def test_disjoint_edges_do_not_meet() -> None:
    p = Edge(Point(0., 0.), Point(1., 0.)) & Edge(Point(2., 1.), Point(3., 1.))
    assert p.does_not_exist()


def test_parallel_edges() -> None:
    e = Edge(Point(0., 1.), Point(1., 2.))
    assert Edge.parallel(Edge(Point(0., 0.), Point(1., 1.)), e) == BoolInterval.YES
    assert Edge.parallel(Edge(Point(0., 0.), Point(1., 0.5)), e) == BoolInterval.NO
    assert Edge.parallel(Edge(Point(0., 0.), Point(Interval(0.9, 1.1), 1.)), e) == BoolInterval.MAYBE


def test_edge_clipped_by_a_box() -> None:
    inter = Edge(Point(0., 0.), Point(4., 4.)) & _box((1., 2.), (1., 2.))
    assert inter == _box((1., 2.), (1., 2.))


def test_polygon_from_box() -> None:
    square = ConvexPolygon.from_box(_box((0., 2.), (0., 2.)))
    assert square.nb_vertices() == 4
    assert square.box() == _box((0., 2.), (0., 2.))
    assert square.area() == Interval(4.)


def test_polygon_encloses() -> None:
    square = ConvexPolygon.from_box(_box((0., 2.), (0., 2.)))
    assert square.encloses(Point(1., 1.)) == BoolInterval.YES
    assert square.encloses(Point(3., 1.)) == BoolInterval.NO
    assert square.encloses(Point(2., 1.)) == BoolInterval.MAYBE
    assert ConvexPolygon().encloses(Point(0., 0.)) == BoolInterval.NO


def test_polygon_intersection_with_a_box() -> None:
    square = ConvexPolygon.from_box(_box((0., 2.), (0., 2.)))
    inter  = square & _box((1., 3.), (1., 3.))
    assert inter.box() == _box((1., 2.), (1., 2.))
    assert (square & _box((5., 6.), (5., 6.))).is_empty()


def test_polygon_intersection_with_a_polygon() -> None:
    triangle = ConvexPolygon(_points([(0., 0.), (4., 0.), (0., 4.)]))
    square   = ConvexPolygon.from_box(_box((1., 3.), (1., 3.)))
    inter    = triangle & square
    assert inter.nb_vertices() == 3
    assert inter.box() == _box((1., 3.), (1., 3.))
    assert inter.area().contains(2.)


def test_simplified_polygon_encloses_the_original() -> None:
    angles = [2.*math.pi*k/20. + 0.1 for k in range(20)]
    circle = ConvexPolygon(_points([(math.cos(a), math.sin(a)) for a in angles]))
    assert circle.nb_vertices() == 20

    simplified = circle.simplify(15)
    assert simplified.nb_vertices() <= 15
    for v in circle.vertices():
        assert simplified.encloses(v) != BoolInterval.NO
    assert simplified.area().ub() >= circle.area().lb()


def test_simplify_keeps_at_least_four_vertices() -> None:
    square = ConvexPolygon.from_box(_box((0., 2.), (0., 2.)))
    with pytest.raises(AssertionError):
        square.simplify(3)


def _fuzzy_clusters(rng, nb_clusters, rad=1e-3):
    "Points known up to rad, gathered in clusters with overlapping boxes."
    pts = []
    for cx, cy in rng.uniform(0., 10., size=(nb_clusters, 2)):
        for dx, dy in rng.uniform(-2.*rad, 2.*rad, size=(4, 2)):
            x, y = cx + dx, cy + dy
            pts.append(Point(Interval(x - rad, x + rad), Interval(y - rad, y + rad)))
    return pts


def _is_convex(polygon):
    v, n = polygon.vertices(), polygon.nb_vertices()
    return all(GrahamScan.orientation(v[i], v[(i+1) % n], v[(i+2) % n]) != OrientationInterval.CLOCKWISE
               for i in range(n))


def test_hull_of_interval_points_is_built_on_their_corners() -> None:
    pts  = [Point(Interval(0., 1.), Interval(0., 1.)), Point(Interval(2., 3.), Interval(0.5, 1.5))]
    hull = GrahamScan.convex_hull(pts)
    assert all(p.is_degenerated() for p in hull)
    assert hull == _points([(0., 0.), (1., 0.), (3., 0.5), (3., 1.5), (2., 1.5), (0., 1.)])


def test_hull_drops_duplicated_points() -> None:
    pts = _points([(0., 0.), (1., 0.), (0., 0.), (1., 1.), (1., 0.)])
    assert GrahamScan.convex_hull(pts) == _points([(0., 0.), (1., 0.), (1., 1.)])


@pytest.mark.parametrize("nb_clusters", [3, 5, 8])
def test_hull_of_clustered_interval_points_encloses_them(nb_clusters) -> None:
    rng = np.random.default_rng(nb_clusters)
    for _ in range(30):
        pts     = _fuzzy_clusters(rng, nb_clusters)
        polygon = ConvexPolygon(pts)

        assert _is_convex(polygon)
        for p in pts:
            assert polygon.encloses(Point(*p.mid())) != BoolInterval.NO
            assert all(polygon.encloses(c) != BoolInterval.NO for c in p.corners())


def test_clip_of_clustered_interval_points_keeps_the_inner_ones() -> None:
    rng = np.random.default_rng(1)
    box = _box((2., 8.), (2., 8.))
    for _ in range(30):
        pts     = _fuzzy_clusters(rng, 6)
        clipped = ConvexPolygon(pts) & box

        assert _is_convex(clipped)
        assert clipped.box().is_subset(box)
        for p in pts:
            if p.box().is_subset(box):
                assert clipped.encloses(Point(*p.mid())) != BoolInterval.NO


def test_unbounded_clip_keeps_every_interval_point() -> None:
    rng     = np.random.default_rng(2)
    pts     = _fuzzy_clusters(rng, 6)
    polygon = ConvexPolygon(pts)
    clipped = polygon & IntervalVector([Interval(), Interval()])
    for p in pts:
        assert clipped.encloses(Point(*p.mid())) != BoolInterval.NO


def test_intersection_of_clustered_interval_polygons() -> None:
    rng = np.random.default_rng(3)
    for _ in range(30):
        pts_p, pts_q = _fuzzy_clusters(rng, 5), _fuzzy_clusters(rng, 5)
        p, q         = ConvexPolygon(pts_p), ConvexPolygon(pts_q)
        inter        = p & q

        for c in pts_p + pts_q:
            m = Point(*c.mid())
            if p.encloses(m) == BoolInterval.YES and q.encloses(m) == BoolInterval.YES:
                assert inter.encloses(m) != BoolInterval.NO


def test_intersection_of_a_polygon_with_itself() -> None:
    diamond = ConvexPolygon(_points([(1., 0.), (2., 1.), (1., 2.), (0., 1.)]))
    inter   = diamond & diamond
    assert inter.nb_vertices() == 4
    assert inter == diamond


def test_simplified_interval_polygon_respects_the_vertex_bound() -> None:
    rng = np.random.default_rng(4)
    for _ in range(10):
        polygon = ConvexPolygon(_fuzzy_clusters(rng, 12, rad=1e-2))
        if polygon.nb_vertices() <= 6:
            continue
        simplified = polygon.simplify(6)
        assert simplified.nb_vertices() <= 6
        for v in polygon.vertices():
            assert simplified.encloses(v) != BoolInterval.NO
