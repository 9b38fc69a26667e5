from bluenoise.Partition.disk_partition import QuadTree
from bluenoise.Partition.disk_partition import MAX_OBJECTS_PER_NODE as DISK_CAPACITY
from bluenoise.Partition.sphere_partition import SphericalTriangleNode, INSERT_EPSILON
from bluenoise.Partition.sphere_partition import MAX_OBJECTS_PER_NODE as SPHERE_CAPACITY


def _walk(node, path=()):
    """先序遍历，path 为从根到当前节点的 (节点, 在父节点中的下标) 序列"""
    yield node, path
    for i, c in enumerate(node.children):
        yield from _walk(c, path + ((node, i),))


def _in_region(node, path, p):
    if isinstance(node, QuadTree):
        return node.contains(p.x, p.y)
    if not isinstance(node, SphericalTriangleNode):
        return True
    # 球面节点：点要么被本三角形包含，要么是一路经 0 号子节点回退下来的
    current = node
    for parent, i in reversed(path):
        if current.contains(p, INSERT_EPSILON):
            return True
        if i != 0:
            return False
        current = parent
    # 回退链一直到达被检查的树根
    return True


def GlobalTestPartition(tree):
    """
    遍历整棵划分树，检查：
      1. 叶子最多 MAX_OBJECTS_PER_NODE 个点；
      2. 节点不会同时有点和子节点；
      3. 每个点只属于一个叶子；
      4. 叶子里的点落在该节点的区域内（球面允许 0 号子节点回退）。
    发现问题时打印出错节点并返回 False。
    """
    capacity = DISK_CAPACITY if isinstance(tree, QuadTree) else SPHERE_CAPACITY

    seen = set()
    for node, path in _walk(tree):
        if node.objects and node.children:
            print("Node", node, "holds points and children at the same time")
            return False
        if len(node.objects) > capacity:
            print("Leaf", node, "holds", len(node.objects), "points, capacity is", capacity)
            return False
        for p in node.objects:
            if id(p) in seen:
                print("Point", p, "is stored in more than one leaf")
                return False
            seen.add(id(p))
            if not _in_region(node, path, p):
                print("Point", p, "is outside of", node)
                return False
    return True
