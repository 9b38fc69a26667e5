import math
from bluenoise.Geometry.vector import Vector3


def great_circle_dist(a, b):
    """
    两个单位向量 a, b 之间的大圆距离（弧度）。
    点积先截断到 [-1, 1]，避免舍入误差让 acos 返回 NaN。
    """
    d = a.x * b.x + a.y * b.y + a.z * b.z
    if d > 1.0:
        d = 1.0
    elif d < -1.0:
        d = -1.0
    return abs(math.acos(d))


def normalized_sum(a, b):
    """
    返回 a + b 归一化后的单位向量，即大圆弧 ab 的中点。
    """
    return Vector3(a.x + b.x, a.y + b.y, a.z + b.z).normalize()


def centroid_direction(v0, v1, v2):
    """
    球面三角形的中心方向：三个顶点平均值归一化。
    """
    c = Vector3((v0.x + v1.x + v2.x) / 3.0,
                (v0.y + v1.y + v2.y) / 3.0,
                (v0.z + v1.z + v2.z) / 3.0)
    return c.normalize()


def is_point_on_spherical_triangle(p, v0, v1, v2, epsilon=1e-6):
    """
    判断从球心出发、方向为 p 的射线是否穿过球面三角形 (v0, v1, v2)。

    做法是对三个顶点张成的平面三角形做 Möller–Trumbore 射线求交：
      det 落在 (-epsilon, epsilon) 内视为射线与平面平行，返回 False；
      重心坐标 u, v 必须满足 u >= 0, v >= 0, u + v <= 1；
      射线参数 t >= epsilon 才算命中（交点在 p 的同侧）。

    参数
    ----
    p : Vector3
        查询方向（不要求单位长度）
    v0, v1, v2 : Vector3
        三角形顶点
    epsilon : float
        行列式与射线参数的容差

    返回
    ----
    bool
    """
    edge1x = v1.x - v0.x
    edge1y = v1.y - v0.y
    edge1z = v1.z - v0.z
    edge2x = v2.x - v0.x
    edge2y = v2.y - v0.y
    edge2z = v2.z - v0.z

    # pvec = p × edge2
    pvecx = p.y * edge2z - p.z * edge2y
    pvecy = p.z * edge2x - p.x * edge2z
    pvecz = p.x * edge2y - p.y * edge2x
    det = edge1x * pvecx + edge1y * pvecy + edge1z * pvecz
    if -epsilon < det < epsilon:
        return False

    # 射线起点是球心，所以 tvec = 0 - v0
    tvecx = -v0.x
    tvecy = -v0.y
    tvecz = -v0.z
    inv_det = 1.0 / det
    u = (tvecx * pvecx + tvecy * pvecy + tvecz * pvecz) * inv_det
    if u < 0.0 or u > 1.0:
        return False

    qvecx = tvecy * edge1z - tvecz * edge1y
    qvecy = tvecz * edge1x - tvecx * edge1z
    qvecz = tvecx * edge1y - tvecy * edge1x
    v = (p.x * qvecx + p.y * qvecy + p.z * qvecz) * inv_det
    if v < 0.0 or u + v > 1.0:
        return False

    t = (edge2x * qvecx + edge2y * qvecy + edge2z * qvecz) * inv_det
    return t >= epsilon
