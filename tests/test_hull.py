"""
Unit tests for the incremental convex hull driver (`chull3d.hull.ConvexHull`).

Covers seeding and degeneracy detection, the structural invariants of the
resulting half-edge mesh (closed twins, outward normals, empty conflict graph,
dense facet indices), classic scenarios (tetrahedron, cube, interior points)
and agreement with SciPy/Qhull on random point clouds.
"""
import math
import random
import unittest

import numpy as np
from scipy.spatial import ConvexHull as QhullHull

from chull3d.errors import DegenerateInputError, HullError, TopologyError
from chull3d.geom import EPSILON, Vertex, dot
from chull3d.hull import ConvexHull

TETRA = [(0., 0., 0.), (1., 0., 0.), (0., 1., 0.), (0., 0., 1.)]
CUBE = [(x, y, z) for x in (0., 1.) for y in (0., 1.) for z in (0., 1.)]


def sphere_points(n, seed):
    rnd = random.Random(seed)
    pts = []
    for _ in range(n):
        x, y, z = rnd.gauss(0, 1), rnd.gauss(0, 1), rnd.gauss(0, 1)
        r = math.sqrt(x*x + y*y + z*z)
        pts.append((x / r, y / r, z / r))
    return pts


def normal_set(facets, ndigits=6):
    return {tuple(round(c, ndigits) + 0.0 for c in f.normal) for f in facets}


class HullTestCase(unittest.TestCase):
    def _build(self, sites, seed=0, bounding=()):
        hull = ConvexHull()
        hull.init(list(bounding), sites)
        facets = hull.compute(rng=random.Random(seed))
        return hull, facets

    def _assert_valid(self, hull):
        report = hull.validate()
        self.assertEqual(report["bad_twins"], [])
        self.assertEqual(report["bad_index"], [])
        self.assertEqual(report["bad_normals"], [])
        self.assertEqual(report["bad_orient_faces"], [])
        self.assertEqual(report["points_outside"], [])
        self.assertEqual(report["unresolved_conflicts"], [])
        # замкнена триангульована сфера: E = 3F/2, V - E + F = 2
        f = report["faces"]
        self.assertEqual(report["unique_vertices"] - 3 * f // 2 + f, 2)
        return report


class TestSeeding(HullTestCase):
    def test_too_few_points(self):
        hull = ConvexHull()
        hull.init([], TETRA[:3])
        with self.assertRaises(DegenerateInputError):
            hull.compute()

    def test_collinear_points(self):
        hull = ConvexHull()
        hull.init([], [(t, 2 * t, 3 * t) for t in range(6)])
        with self.assertRaises(DegenerateInputError) as ctx:
            hull.compute()
        self.assertIn("collinear", str(ctx.exception))

    def test_coincident_points(self):
        hull = ConvexHull()
        hull.init([], [(1., 1., 1.)] * 5)
        with self.assertRaises(DegenerateInputError):
            hull.prep()

    def test_coplanar_points(self):
        hull = ConvexHull()
        hull.init([], [(x, y, 0.) for x in range(3) for y in range(3)])
        with self.assertRaises(DegenerateInputError) as ctx:
            hull.compute()
        self.assertIn("coplanar", str(ctx.exception))

    def test_tiny_tetrahedron_is_not_degenerate(self):
        k = 5e-6
        hull = ConvexHull([(0., 0., 0.), (k, 0., 0.), (0., k, 0.), (0., 0., k), (k, k, k)])
        facets = hull.compute(shuffle=False)
        self.assertEqual(len(facets), 6)
        self._assert_valid(hull)

    def test_tiny_collinear_points(self):
        k = 5e-6
        hull = ConvexHull([(t * k, 0., 0.) for t in range(5)])
        with self.assertRaises(DegenerateInputError):
            hull.compute(shuffle=False)

    def test_degenerate_error_is_value_error(self):
        self.assertTrue(issubclass(DegenerateInputError, ValueError))
        self.assertTrue(issubclass(DegenerateInputError, HullError))

    def test_seed_skips_collinear_prefix(self):
        sites = [(0., 0., 0.), (1., 0., 0.), (2., 0., 0.), (3., 0., 0.),
                 (0., 1., 0.), (0., 2., 0.), (0., 0., 1.)]
        hull = ConvexHull()
        hull.init([], sites)
        hull.prep()
        self.assertEqual(hull.current, 4)
        self.assertEqual(len(hull.facets), 4)
        self.assertEqual(hull.points[2].original, (0., 1., 0.))
        self.assertEqual(hull.points[3].original, (0., 0., 1.))
        for i, p in enumerate(hull.points):
            self.assertEqual(p.index, i)

    def test_seed_normals_point_outward(self):
        hull = ConvexHull()
        hull.init([], TETRA)
        hull.prep()
        seed = hull.points[:4]
        for f in hull.facets:
            opposite = [v for v in seed if all(v is not w for w in f.verts)]
            self.assertEqual(len(opposite), 1)
            self.assertLess(dot(f.normal, opposite[0]), dot(f.normal, f.verts[0]))

    def test_initial_conflicts(self):
        hull = ConvexHull()
        hull.init([], TETRA + [(2., 2., 2.), (0.1, 0.1, 0.1)])
        hull.prep()
        outside, inside = hull.points[4], hull.points[5]
        self.assertEqual(len(outside.conflicts), 1)
        self.assertTrue(inside.conflicts.is_empty())


class TestScenarios(HullTestCase):
    def test_tetrahedron(self):
        hull, facets = self._build(TETRA)
        self.assertEqual(len(facets), 4)
        self._assert_valid(hull)
        for f in facets:
            for g in facets:
                if f is g:
                    continue
                shared = [e for e in f.edges if e.twin.face is g]
                self.assertEqual(len(shared), 1)

    def test_cube(self):
        hull, facets = self._build(CUBE + [(0.5, 0.5, 0.5), (0.2, 0.8, 0.3)], seed=3)
        self.assertEqual(len(facets), 12)
        report = self._assert_valid(hull)
        self.assertEqual(report["unique_vertices"], 8)
        expected = {(1., 0., 0.), (-1., 0., 0.), (0., 1., 0.), (0., -1., 0.), (0., 0., 1.), (0., 0., -1.)}
        self.assertEqual(normal_set(facets), expected)
        for p in hull.points:
            self.assertTrue(p.conflicts.is_empty())

    def test_cube_every_insertion_order(self):
        for seed in range(20):
            hull, facets = self._build(CUBE, seed=seed)
            self.assertEqual(len(facets), 12, f"seed={seed}")
            self._assert_valid(hull)

    def test_interior_point_skipped(self):
        hull = ConvexHull()
        hull.init([], TETRA + [(0.1, 0.1, 0.1)])
        hull.prep()
        inner = hull.points[4]
        self.assertEqual(inner.original, (0.1, 0.1, 0.1))
        self.assertTrue(inner.conflicts.is_empty())
        hull.clear()
        hull.init([], TETRA + [(0.1, 0.1, 0.1)])
        facets = hull.compute(shuffle=False)
        self.assertEqual(len(facets), 4)
        used = {id(v) for f in facets for v in f.verts}
        self.assertNotIn(id(hull.points[4]), used)
        self._assert_valid(hull)

    def test_interior_point_with_random_order(self):
        hull, facets = self._build(TETRA + [(0.1, 0.1, 0.1)], seed=11)
        self.assertEqual(len(facets), 4)
        hull_sites = {v.original for f in facets for v in f.verts}
        self.assertEqual(hull_sites, set(TETRA))

    def test_point_on_face_is_absorbed(self):
        hull = ConvexHull(TETRA + [(0.25, 0.25, 0.)])
        facets = hull.compute(shuffle=False)
        self.assertEqual(len(facets), 4)
        self._assert_valid(hull)

    def test_sphere_all_points_on_hull(self):
        pts = sphere_points(60, seed=5)
        hull, facets = self._build(pts, seed=1)
        report = self._assert_valid(hull)
        self.assertEqual(report["unique_vertices"], 60)
        self.assertEqual(len(facets), 2 * 60 - 4)

    def test_numpy_input(self):
        arr = np.array(CUBE, dtype=float)
        hull = ConvexHull()
        hull.init([], arr)
        facets = hull.compute(rng=random.Random(4))
        self.assertEqual(len(facets), 12)

    def test_constructor_with_points(self):
        hull = ConvexHull(TETRA)
        self.assertEqual(len(hull.points), 4)
        self.assertEqual(len(hull.compute()), 4)
        self.assertEqual(len(hull.faces()), 4)
        self.assertEqual(len(hull.vertices()), 4)


class TestDriverState(HullTestCase):
    def test_bounding_points(self):
        big = [(-10., -10., -10.), (10., -10., -10.), (0., 10., -10.), (0., 0., 10.)]
        sites = [(0., 0., 0.), (1., 1., 1.), (-1., 0.5, 0.)]
        hull, facets = self._build(sites, bounding=big)
        self.assertEqual(len(hull.points), 7)
        self.assertEqual(sum(1 for p in hull.points if p.is_dummy), 4)
        self.assertEqual(len(facets), 4)
        self.assertTrue(all(v.is_dummy for f in facets for v in f.verts))

    def test_bounding_vertex_objects_kept(self):
        dummy = Vertex(5., 5., 5., is_dummy=True)
        hull = ConvexHull()
        hull.init([dummy], TETRA)
        self.assertIs(hull.points[-1], dummy)
        self.assertEqual(dummy.index, 4)

    def test_permutate_keeps_indices(self):
        hull = ConvexHull()
        hull.init([], sphere_points(30, seed=9))
        before = {id(p) for p in hull.points}
        hull.permutate(random.Random(0))
        self.assertEqual({id(p) for p in hull.points}, before)
        for i, p in enumerate(hull.points):
            self.assertEqual(p.index, i)

    def test_remove_facet_swaps_last(self):
        hull = ConvexHull()
        hull.init([], TETRA)
        hull.prep()
        first, last = hull.facets[0], hull.facets[-1]
        hull.remove_conflict(first)
        self.assertEqual(first.index, -1)
        self.assertEqual(len(hull.facets), 3)
        self.assertIs(hull.facets[0], last)
        self.assertEqual(last.index, 0)
        hull.remove_facet(first)        # повторне видалення — без змін
        self.assertEqual(len(hull.facets), 3)

    def test_insert_without_horizon_raises(self):
        hull = ConvexHull(TETRA + [(2., 2., 2.)])
        hull.prep()
        apex = hull.points[4]
        # штучно: точка «бачить» усі 4 грані, отже межі між видимими й невидимими немає
        for f in hull.facets:
            if all(node.face is not f for node in apex.conflicts):
                hull.add_conflict(f, apex)
        with self.assertRaises(TopologyError):
            hull._insert(apex)
        self.assertTrue(all(f.marked for f in hull.visible))
        self.assertEqual(len(hull.visible), 4)

    def test_marks_cleared_after_compute(self):
        hull, facets = self._build(sphere_points(40, seed=2))
        self.assertFalse(any(f.marked for f in facets))
        self.assertEqual(hull.current, len(hull.points))

    def test_clear_resets_state(self):
        hull, _ = self._build(CUBE)
        hull.clear()
        self.assertEqual(hull.points, [])
        self.assertEqual(hull.facets, [])
        self.assertEqual(hull.visible, [])
        self.assertEqual(hull.horizon, [])
        self.assertEqual(hull.created, [])
        self.assertEqual(hull.current, 0)

    def test_restart_gives_same_normals(self):
        pts = sphere_points(80, seed=21)
        hull, facets = self._build(pts, seed=1)
        first = normal_set(facets)
        for seed in (2, 3):
            hull.clear()
            hull.init([], pts)
            facets = hull.compute(rng=random.Random(seed))
            self.assertEqual(normal_set(facets), first)

    def test_custom_eps(self):
        near = (0.34, 0.33, 0.33 + 1e-6)       # зовні грані x+y+z=1 на ~6e-7
        hull = ConvexHull(TETRA + [near], eps=1e-3)
        self.assertEqual(hull.eps, 1e-3)
        self.assertEqual(len(hull.compute(shuffle=False)), 4)
        default = ConvexHull(TETRA + [near])
        self.assertEqual(default.eps, EPSILON)
        self.assertEqual(len(default.compute(shuffle=False)), 6)


class TestAgainstQhull(HullTestCase):
    def test_random_clouds(self):
        for seed in range(5):
            rnd = random.Random(100 + seed)
            pts = [(rnd.uniform(-1, 1), rnd.uniform(-1, 1), rnd.uniform(-1, 1)) for _ in range(150)]
            hull, facets = self._build(pts, seed=seed)
            self._assert_valid(hull)

            qh = QhullHull(np.array(pts))
            self.assertEqual(len(facets), len(qh.simplices))
            ours = {pts.index(v.original) for f in facets for v in f.verts}
            self.assertEqual(ours, {int(i) for i in qh.vertices})

    def test_volume_matches(self):
        rnd = random.Random(7)
        pts = [(rnd.gauss(0, 1), rnd.gauss(0, 2), rnd.gauss(0, 0.5)) for _ in range(200)]
        hull, facets = self._build(pts, seed=7)
        # об'єм як сума тетраедрів (0, грань); нормаль = -(b-a)x(c-a), тож знак мінус
        vol = 0.0
        for f in facets:
            a, b, c = f.verts
            vol -= (a.x * (b.y * c.z - b.z * c.y)
                    - a.y * (b.x * c.z - b.z * c.x)
                    + a.z * (b.x * c.y - b.y * c.x)) / 6.0
        self.assertAlmostEqual(vol, QhullHull(np.array(pts)).volume, places=9)


if __name__ == '__main__':
    unittest.main()
