# tests/test_sphere_partition.py

import math
import unittest

import numpy as np

from ...Geometry.vector import Vector3
from ...Geometry.spherical import great_circle_dist, is_point_on_spherical_triangle
from ..sphere_partition import OctahedronTree, SphericalTriangleNode, MAX_OBJECTS_PER_NODE
from ..GlobalTestPartition import GlobalTestPartition


def random_unit_vectors(n, seed):
    rng = np.random.default_rng(seed)
    v = rng.normal(size=(n, 3))
    v /= np.linalg.norm(v, axis=1, keepdims=True)
    return [Vector3(*row) for row in v.tolist()]


def brute_force(points, q):
    return min((great_circle_dist(p, q) for p in points), default=math.inf)


def first_octant_cluster():
    """
    40 个点，全部落在根节点 1 号三角形（第一卦限）里，
    大致平均分布在它的 4 个子三角形中。
    """
    targets = [(1, 1, 6), (6, 1, 1), (1, 6, 1), (1, 1, 1)]
    pts = []
    for tx, ty, tz in targets:
        for i in range(10):
            pts.append(Vector3(tx + 0.01 * i, ty + 0.02 * i, tz + 0.015 * i).normalize())
    return pts


class TestOctahedronTree(unittest.TestCase):

    def test_root_faces_tile_the_sphere(self):
        tree = OctahedronTree()
        self.assertEqual(len(tree.children), 8)
        for p in random_unit_vectors(500, seed=1):
            hits = [c for c in tree.children
                    if is_point_on_spherical_triangle(p, c.v0, c.v1, c.v2, 1e-6)]
            self.assertEqual(len(hits), 1, msg=f"{p} claimed by {len(hits)} faces")

    def test_node_geometry(self):
        node = SphericalTriangleNode(Vector3(0, 0, 1), Vector3(1, 0, 0), Vector3(0, 1, 0))
        self.assertAlmostEqual(node.arc, math.pi)
        self.assertAlmostEqual(node.c.length(), 1.0)

    def test_split_tiles_parent(self):
        node = SphericalTriangleNode(Vector3(0, 0, 1), Vector3(1, 0, 0), Vector3(0, 1, 0))
        node.split()
        self.assertEqual(len(node.children), 4)
        for c in node.children:
            for v in (c.v0, c.v1, c.v2):
                self.assertAlmostEqual(v.length(), 1.0)
        inside = [p for p in random_unit_vectors(2000, seed=2) if node.contains(p)]
        self.assertGreater(len(inside), 100)
        for p in inside:
            hits = [c for c in node.children if c.contains(p)]
            self.assertEqual(len(hits), 1)

    def test_empty_tree(self):
        tree = OctahedronTree()
        self.assertEqual(tree.nearest(Vector3(0, 0, 1)), math.inf)
        self.assertEqual(tree.nearest(Vector3(0, 0, 1), 0.25), 0.25)
        self.assertEqual(len(tree), 0)

    def test_split_with_40_points_in_one_face(self):
        tree = OctahedronTree()
        pts = first_octant_cluster()
        for p in pts:
            tree.insert(p)

        face = tree.children[1]
        self.assertFalse(face.is_leaf())
        self.assertEqual(len(face.children), 4)
        # 只分裂了一次：四个子节点都是叶子
        for c in face.children:
            self.assertTrue(c.is_leaf())
            self.assertEqual(len(c.objects), 10)
        for i, other in enumerate(tree.children):
            if i != 1:
                self.assertTrue(other.is_leaf())
                self.assertEqual(other.objects, [])

        self.assertEqual(len(tree), 40)
        for p in pts:
            self.assertAlmostEqual(tree.nearest(p), 0.0, places=6)
        self.assertTrue(GlobalTestPartition(tree))

    def test_capacity_invariant(self):
        tree = OctahedronTree()
        pts = random_unit_vectors(1500, seed=3)
        for p in pts:
            tree.insert(p)
        for leaf in tree.leaves():
            self.assertLessEqual(len(leaf.objects), MAX_OBJECTS_PER_NODE)
        self.assertEqual(len(tree), len(pts))
        self.assertGreater(tree.depth(), 1)
        self.assertTrue(GlobalTestPartition(tree))

    def test_nearest_matches_brute_force(self):
        tree = OctahedronTree()
        pts = random_unit_vectors(800, seed=4)
        for p in pts:
            tree.insert(p)
        for q in random_unit_vectors(150, seed=5):
            self.assertAlmostEqual(tree.nearest(q), brute_force(pts, q), places=9)

    def test_nearest_never_exceeds_bound(self):
        tree = OctahedronTree()
        pts = random_unit_vectors(800, seed=6)
        for p in pts:
            tree.insert(p)
        bounds = np.random.default_rng(8).uniform(0.0, 0.3, size=150)
        for q, bound in zip(random_unit_vectors(150, seed=7), bounds):
            d = tree.nearest(q, float(bound))
            self.assertLessEqual(d, bound)
            self.assertGreaterEqual(d, min(bound, brute_force(pts, q)) - 1e-12)

    def test_unclaimed_point_falls_back_to_child_0(self):
        node = SphericalTriangleNode(Vector3(0, 0, 1), Vector3(1, 0, 0), Vector3(0, 1, 0))
        for p in first_octant_cluster()[:MAX_OBJECTS_PER_NODE]:
            node.insert(p)
        self.assertTrue(node.is_leaf())

        # 对跖方向不被任何子三角形认领
        antipode = Vector3(-1, -1, -1).normalize()
        node.insert(antipode)

        self.assertFalse(node.is_leaf())
        self.assertFalse(any(c.contains(antipode) for c in node.children))
        self.assertTrue(any(o is antipode for o in node.children[0].objects))
        self.assertEqual(len(node), MAX_OBJECTS_PER_NODE + 1)
        self.assertTrue(GlobalTestPartition(node))

    def test_global_check_rejects_point_in_wrong_triangle(self):
        node = SphericalTriangleNode(Vector3(0, 0, 1), Vector3(1, 0, 0), Vector3(0, 1, 0))
        node.split()
        # 靠近 z 极点的方向属于 0 号子三角形，却放进 2 号
        p = Vector3(1, 1, 6).normalize()
        self.assertTrue(node.children[0].contains(p))
        node.children[2].objects.append(p)
        self.assertFalse(GlobalTestPartition(node))

        # 放进 0 号子三角形则通过
        node.children[2].objects.clear()
        node.children[0].objects.append(p)
        self.assertTrue(GlobalTestPartition(node))


if __name__ == "__main__":
    unittest.main()
