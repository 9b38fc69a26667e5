import numpy as np
from scipy.spatial import cKDTree
from scipy.spatial.distance import pdist

from bluenoise.Geometry.vector import Vector2, Vector3
from bluenoise.Sampling.random_source import RandomSource
from bluenoise.Sampling.best_candidate import random_point_in_disk, random_point_on_sphere


def min_pairwise_distance(points):
    """最小两两欧氏距离；少于两个点时为 inf"""
    P = np.asarray(points, dtype=float)
    if P.shape[0] < 2:
        return float("inf")
    return float(pdist(P).min())


def min_angular_distance(points):
    """
    单位向量之间的最小大圆距离（弧度）。
    """
    P = np.asarray(points, dtype=float)
    if P.shape[0] < 2:
        return float("inf")
    P = P / np.linalg.norm(P, axis=1, keepdims=True)
    cos = np.clip(1.0 - pdist(P, "cosine"), -1.0, 1.0)
    return float(np.arccos(cos).min())


def nearest_neighbor_distances(points):
    """每个点到其最近邻的欧氏距离"""
    P = np.asarray(points, dtype=float)
    if P.shape[0] < 2:
        return np.full(P.shape[0], np.inf)
    dist, _ = cKDTree(P).query(P, k=2)
    return dist[:, 1]


def uniform_disk_points(seed, n):
    """与 Disk 相同的随机源和拒绝采样，但不做 best candidate 选择"""
    rnd = RandomSource(seed)
    return np.array([tuple(random_point_in_disk(rnd, Vector2())) for _ in range(n)],
                    dtype=float).reshape(-1, 2)


def uniform_sphere_points(seed, n):
    rnd = RandomSource(seed)
    return np.array([tuple(random_point_on_sphere(rnd, Vector3())) for _ in range(n)],
                    dtype=float).reshape(-1, 3)


def dispersion_summary(points):
    """
    点集分散程度的统计量。

    返回
    ----
    dict : n, min_dist, mean_nn, std_nn
    """
    P = np.asarray(points, dtype=float)
    nn = nearest_neighbor_distances(P)
    finite = nn[np.isfinite(nn)]
    return {
        "n": int(P.shape[0]),
        "min_dist": min_pairwise_distance(P),
        "mean_nn": float(finite.mean()) if finite.size else float("inf"),
        "std_nn": float(finite.std()) if finite.size else 0.0,
    }
