import math

MAX_OBJECTS_PER_NODE = 32

# 象限编号
PXNY = 0
NXNY = 1
NXPY = 2
PXPY = 3


class QuadTree:
    """
    Simple quadtree over an axis-aligned square, storing points and
    answering 1-nearest-neighbour distance queries.

    The square is given by its minimum corner (min_x, min_y) and its side
    length; the node keeps the half size hs.
    """

    def __init__(self, min_x=-1.0, min_y=-1.0, size=2.0):
        self.min_x = min_x
        self.min_y = min_y
        self.hs = size * 0.5
        self.objects = []
        self.children = []

    def is_leaf(self):
        return not self.children

    def split(self):
        hs = self.hs
        self.children = [None] * 4
        self.children[NXNY] = QuadTree(self.min_x, self.min_y, hs)
        self.children[PXNY] = QuadTree(self.min_x + hs, self.min_y, hs)
        self.children[NXPY] = QuadTree(self.min_x, self.min_y + hs, hs)
        self.children[PXPY] = QuadTree(self.min_x + hs, self.min_y + hs, hs)

    def quadrant(self, x, y):
        if x < self.min_x + self.hs:
            if y < self.min_y + self.hs:
                return NXNY
            return NXPY
        if y < self.min_y + self.hs:
            return PXNY
        return PXPY

    def _insert_into_child(self, p):
        self.children[self.quadrant(p.x, p.y)].insert(p)

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

    def nearest(self, x, y, n=math.inf):
        """
        Distance from (x, y) to the closest stored point, or n if nothing in
        this subtree is closer than n.
        """
        nr = n
        size = self.hs * 2
        if (x < self.min_x - nr or x > self.min_x + size + nr
                or y < self.min_y - nr or y > self.min_y + size + nr):
            return nr
        if self.children:
            i = self.quadrant(x, y)
            for _ in range(4):
                nr = min(self.children[i].nearest(x, y, nr), nr)
                i = (i + 1) % 4
            return nr
        nr2 = nr * nr
        found = False
        for o in self.objects:
            d = o.distance_squared(x, y)
            if d < nr2:
                nr2 = d
                found = True
        # sqrt(n * n) 可能比 n 多一个 ulp，没有更近的点时原样返回 n
        return math.sqrt(nr2) if found else nr

    def contains(self, x, y):
        """半开区间 [min, min + 2hs)，与 quadrant() 的 >= 规则一致"""
        size = self.hs * 2
        return (self.min_x <= x < self.min_x + size
                and self.min_y <= y < self.min_y + size)

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

    def __repr__(self):
        return f"QuadTree(min=({self.min_x}, {self.min_y}), hs={self.hs})"
