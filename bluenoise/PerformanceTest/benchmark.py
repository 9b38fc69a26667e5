import math
import time
import pandas as pd

from bluenoise.Geometry.spherical import great_circle_dist
from bluenoise.Sampling.best_candidate import Sphere, Disk


def _brute_force_disk(points, x, y):
    return min((p.distance(x, y) for p in points), default=math.inf)


def _brute_force_sphere(points, q):
    return min((great_circle_dist(p, q) for p in points), default=math.inf)


def benchmark_nearest(ns, num_candidates=30, seed=42, csv_filename="benchmark_results.csv"):
    """
    对每个 n：生成 n 个样本并计时，然后用同一组样本比较
    树查询与暴力查询的耗时，结果写入 csv。
    """
    results = []

    for n in ns:
        for domain in ("disk", "sphere"):
            cls = Disk if domain == "disk" else Sphere
            start = time.perf_counter()
            sampler = cls(seed, n, num_candidates, lambda *p: None).generate()
            generate_s = time.perf_counter() - start

            queries = [sampler._random_candidate() for _ in range(200)]
            points = [p for leaf in sampler.partition.leaves() for p in leaf.objects]

            start = time.perf_counter()
            for q in queries:
                sampler._nearest(q)
            tree_s = time.perf_counter() - start

            start = time.perf_counter()
            for q in queries:
                if domain == "disk":
                    _brute_force_disk(points, q.x, q.y)
                else:
                    _brute_force_sphere(points, q)
            brute_s = time.perf_counter() - start

            print(f"{domain} n={n}: generate {generate_s:.6f}s, "
                  f"tree {tree_s:.6f}s, brute force {brute_s:.6f}s")
            results.append({"domain": domain, "n": n, "k": num_candidates,
                            "generate_s": generate_s, "tree_query_s": tree_s,
                            "brute_query_s": brute_s,
                            "depth": sampler.partition.depth()})

    df = pd.DataFrame(results)
    if csv_filename:
        df.to_csv(csv_filename, index=False)
        print(f"Benchmark results saved to {csv_filename}")
    return df


if __name__ == "__main__":
    ns = [100, 500, 1000, 2000, 4000]
    benchmark_nearest(ns)
