"""
Best Candidate 采样：每一步生成 K 个随机候选点，保留离已接受点集最远的那个。

    Sphere(seed, n, k, callback)   单位球面上的样本 (x, y, z)
    Disk(seed, n, k, callback)     单位圆盘内的样本 (x, y)

最近距离查询交给空间划分：球面用八面体树 OctahedronTree，圆盘用 QuadTree。
"""
import math
import numbers
import numpy as np

from bluenoise.Geometry.vector import Vector2, Vector3
from bluenoise.Partition.sphere_partition import OctahedronTree
from bluenoise.Partition.disk_partition import QuadTree
from bluenoise.Sampling.random_source import RandomSource


def random_point_in_disk(rnd: RandomSource, out: Vector2) -> Vector2:
    """拒绝采样：在 [-1,1)^2 中取点，直到落在单位圆内"""
    while True:
        x = rnd.next_symmetric()
        y = rnd.next_symmetric()
        if x * x + y * y <= 1.0:
            return out.set(x, y)


def random_point_on_sphere(rnd: RandomSource, out: Vector3) -> Vector3:
    """Marsaglia (1972)：单位圆内的 (x1, x2) 映射到球面"""
    while True:
        x1 = rnd.next_symmetric()
        x2 = rnd.next_symmetric()
        s = x1 * x1 + x2 * x2
        if s <= 1.0:
            break
    root = math.sqrt(1.0 - s)
    return out.set(2.0 * x1 * root, 2.0 * x2 * root, 1.0 - 2.0 * s)


def _check_count(name, value, minimum):
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")


class BestCandidateSampling:
    """
    Best-candidate driver shared by the sphere and disk variants.

    Subclasses provide the candidate generator (_random_candidate) and the
    distance query against the partition (_nearest).

    A driver is single use: samples() may be consumed once, after which the
    partition holds every accepted point.
    """

    def __init__(self, rnd: RandomSource, partition, num_samples: int,
                 num_candidates: int, callback):
        _check_count("num_samples", num_samples, 0)
        _check_count("num_candidates", num_candidates, 1)
        if callback is None or not callable(callback):
            raise ValueError("callback must be a callable receiving each sample")
        self.rnd = rnd
        self.partition = partition
        self.num_samples = num_samples
        self.num_candidates = num_candidates
        self.callback = callback
        self._started = False

    def _random_candidate(self):
        raise NotImplementedError

    def _nearest(self, candidate):
        raise NotImplementedError

    def best_candidate(self):
        """
        一轮候选：K 个候选各自独立查询（上界从 inf 开始），
        严格大于才替换，距离相同保留先出现的候选。
        分区为空时第一个候选就是 inf，直接接受。
        """
        best = None
        best_dist = -math.inf
        for _ in range(self.num_candidates):
            candidate = self._random_candidate()
            min_dist = self._nearest(candidate)
            if min_dist > best_dist:
                best_dist = min_dist
                best = candidate
            if min_dist == math.inf:
                break
        return best

    def samples(self):
        """
        Lazily yield exactly num_samples accepted points in generation order.
        Each winner is passed to the callback, then inserted into the
        partition, then yielded as a plain tuple so the caller cannot move
        points that live in the partition.
        """
        if self._started:
            raise RuntimeError("sampler already run; create a new one with the seed")
        self._started = True
        for _ in range(self.num_samples):
            sample = self.best_candidate()
            self.callback(*sample)
            self.partition.insert(sample)
            yield tuple(sample)

    def generate(self):
        for _ in self.samples():
            pass
        return self


class Sphere(BestCandidateSampling):
    """
    Best Candidate samples on the unit sphere. callback(x, y, z) is called
    once per sample.

    References:
      Indexing the Sphere with the Hierarchical Triangular Mesh,
      https://www.microsoft.com/en-us/research/wp-content/uploads/2005/09/tr-2005-123.pdf
    """

    def __init__(self, seed: int, num_samples: int, num_candidates: int, callback):
        super().__init__(RandomSource(seed), OctahedronTree(),
                         num_samples, num_candidates, callback)

    def _random_candidate(self):
        return random_point_on_sphere(self.rnd, Vector3())

    def _nearest(self, candidate):
        return self.partition.nearest(candidate, math.inf)


class Disk(BestCandidateSampling):
    """
    Best Candidate samples on the unit disk. callback(x, y) is called once
    per sample.
    """

    def __init__(self, seed: int, num_samples: int, num_candidates: int, callback):
        super().__init__(RandomSource(seed), QuadTree(-1.0, -1.0, 2.0),
                         num_samples, num_candidates, callback)

    def _random_candidate(self):
        return random_point_in_disk(self.rnd, Vector2())

    def _nearest(self, candidate):
        return self.partition.nearest(candidate.x, candidate.y, math.inf)


def sample_sphere(seed, num_samples, num_candidates=30):
    """
    生成 num_samples 个球面 Best Candidate 样本。

    返回
    ----
    np.ndarray, shape (num_samples, 3)
    """
    out = []
    Sphere(seed, num_samples, num_candidates, lambda x, y, z: out.append((x, y, z))).generate()
    return np.array(out, dtype=float).reshape(-1, 3)


def sample_disk(seed, num_samples, num_candidates=30):
    """
    生成 num_samples 个圆盘 Best Candidate 样本。

    返回
    ----
    np.ndarray, shape (num_samples, 2)
    """
    out = []
    Disk(seed, num_samples, num_candidates, lambda x, y: out.append((x, y))).generate()
    return np.array(out, dtype=float).reshape(-1, 2)
