import math
from bluenoise.Geometry.vector import Vector3
from bluenoise.Geometry.spherical import (great_circle_dist, normalized_sum,
                                          centroid_direction,
                                          is_point_on_spherical_triangle)

MAX_OBJECTS_PER_NODE = 32

# 插入时用的容差与查询排序时用的容差不同
INSERT_EPSILON = 1e-6
QUERY_EPSILON = 1e-5


class _SphereTreeBase:
    """
    八面体树根节点与球面三角形节点的公共部分：子节点定位、插入、最近距离查询。
    children 非空时为内部节点，否则为叶子，objects 保存点。
    """

    def __init__(self):
        self.objects = []
        self.children = []

    def is_leaf(self):
        return not self.children

    def child_index(self, p, epsilon=QUERY_EPSILON):
        """
        返回包含方向 p 的子三角形下标；没有子三角形认领时返回 0。
        """
        for i, c in enumerate(self.children):
            if is_point_on_spherical_triangle(p, c.v0, c.v1, c.v2, epsilon):
                return i
        # 数值上落在三角形缝隙里，退回到 0 号子节点
        return 0

    def _insert_into_child(self, p):
        self.children[self.child_index(p, INSERT_EPSILON)].insert(p)

    def _nearest_in_children(self, p, n):
        nr = n
        count = len(self.children)
        i = self.child_index(p, QUERY_EPSILON)
        for _ in range(count):
            nr = min(self.children[i].nearest(p, nr), nr)
            i = (i + 1) % count
        return nr

    def leaves(self):
        if self.is_leaf():
            yield self
            return
        for c in self.children:
            yield from c.leaves()

    def depth(self):
        if self.is_leaf():
            return 0
        return 1 + max(c.depth() for c in self.children)

    def __len__(self):
        return sum(len(leaf.objects) for leaf in self.leaves())


class SphericalTriangleNode(_SphereTreeBase):
    """
    球面三角形 (v0, v1, v2) 对应的节点。
    c 为中心方向，arc 为最长边大圆弧长的两倍，用于剪枝。
    """

    def __init__(self, v0: Vector3, v1: Vector3, v2: Vector3):
        super().__init__()
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2
        self.c = centroid_direction(v0, v1, v2)
        self.arc = 2.0 * max(great_circle_dist(v0, v1),
                             great_circle_dist(v0, v2),
                             great_circle_dist(v1, v2))

    def contains(self, p, epsilon=INSERT_EPSILON):
        return is_point_on_spherical_triangle(p, self.v0, self.v1, self.v2, epsilon)

    def split(self):
        """
        按边中点把三角形细分为 4 个子三角形（HTM 细分）。
        w0 对着 v0，w1 对着 v1，w2 对着 v2。
        """
        v0, v1, v2 = self.v0, self.v1, self.v2
        w0 = normalized_sum(v1, v2)
        w1 = normalized_sum(v0, v2)
        w2 = normalized_sum(v0, v1)
        self.children = [
            SphericalTriangleNode(v0, w2, w1),
            SphericalTriangleNode(v1, w0, w2),
            SphericalTriangleNode(v2, w1, w0),
            SphericalTriangleNode(w0, w1, w2),
        ]

    def insert(self, p):
        if self.children:
            self._insert_into_child(p)
            return
        if len(self.objects) == MAX_OBJECTS_PER_NODE:
            self.split()
            objects, self.objects = self.objects, []
            for o in objects:
                self._insert_into_child(o)
            self._insert_into_child(p)
        else:
            self.objects.append(p)

    def nearest(self, p, n=math.inf):
        if great_circle_dist(p, self.c) - self.arc > n:
            return n
        if self.children:
            return self._nearest_in_children(p, n)
        nr = n
        for o in self.objects:
            d = great_circle_dist(o, p)
            if d < nr:
                nr = d
        return nr

    def __repr__(self):
        return f"SphericalTriangleNode({self.v0}, {self.v1}, {self.v2})"


class OctahedronTree(_SphereTreeBase):
    """
    单位球面上的空间划分：根节点固定为正八面体的 8 个面，
    每个面再按需递归四分。支持插入与大圆最近距离查询。
    """

    def __init__(self):
        super().__init__()
        s = 1.0
        self.children = [
            SphericalTriangleNode(Vector3(-s, 0, 0), Vector3(0, 0, s), Vector3(0, s, 0)),
            SphericalTriangleNode(Vector3(0, 0, s), Vector3(s, 0, 0), Vector3(0, s, 0)),
            SphericalTriangleNode(Vector3(s, 0, 0), Vector3(0, 0, -s), Vector3(0, s, 0)),
            SphericalTriangleNode(Vector3(0, 0, -s), Vector3(-s, 0, 0), Vector3(0, s, 0)),
            SphericalTriangleNode(Vector3(-s, 0, 0), Vector3(0, -s, 0), Vector3(0, 0, s)),
            SphericalTriangleNode(Vector3(0, 0, s), Vector3(0, -s, 0), Vector3(s, 0, 0)),
            SphericalTriangleNode(Vector3(s, 0, 0), Vector3(0, -s, 0), Vector3(0, 0, -s)),
            SphericalTriangleNode(Vector3(0, 0, -s), Vector3(0, -s, 0), Vector3(-s, 0, 0)),
        ]

    def insert(self, p):
        self._insert_into_child(p)

    def nearest(self, p, n=math.inf):
        """
        p 到树中任意点的最小大圆距离；不会小于真实值，也不会大于 n。
        空树返回 n（默认 inf）。
        """
        return self._nearest_in_children(p, n)
