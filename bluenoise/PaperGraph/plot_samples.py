import numpy as np
import matplotlib.pyplot as plt

from bluenoise.Partition.disk_partition import QuadTree
from bluenoise.Sampling.best_candidate import Disk, sample_sphere
from bluenoise.Sampling.metrics import (uniform_disk_points, uniform_sphere_points,
                                        dispersion_summary, min_angular_distance)


def plot_disk_samples(points, ax=None, title=None, color="tab:blue"):
    """
    在 ax 上画出圆盘内的样本点和单位圆边界。
    """
    P = np.asarray(points, dtype=float)
    if ax is None:
        plt.figure(figsize=(5, 5))
        ax = plt.gca()
    t = np.linspace(0.0, 2.0 * np.pi, 256)
    ax.plot(np.cos(t), np.sin(t), 'k-', lw=1)
    ax.scatter(P[:, 0], P[:, 1], s=6, c=color)
    ax.set_aspect('equal')
    ax.set_xlim(-1.05, 1.05)
    ax.set_ylim(-1.05, 1.05)
    if title:
        ax.set_title(title)
    return ax


def plot_quadtree(tree: QuadTree, ax=None):
    """画出四叉树所有叶子的方框"""
    if ax is None:
        plt.figure(figsize=(5, 5))
        ax = plt.gca()
    for leaf in tree.leaves():
        x0, y0, s = leaf.min_x, leaf.min_y, leaf.hs * 2
        ax.plot([x0, x0 + s, x0 + s, x0, x0], [y0, y0, y0 + s, y0 + s, y0],
                'c-', lw=0.5)
    ax.set_aspect('equal')
    return ax


def plot_sphere_samples(points, ax=None, title=None, color="tab:red"):
    """
    3D 散点图，附带一个线框单位球。
    """
    P = np.asarray(points, dtype=float)
    if ax is None:
        fig = plt.figure(figsize=(6, 6))
        ax = fig.add_subplot(111, projection='3d')
    u, v = np.mgrid[0:2 * np.pi:30j, 0:np.pi:15j]
    ax.plot_wireframe(np.cos(u) * np.sin(v), np.sin(u) * np.sin(v), np.cos(v),
                      color='lightgray', lw=0.3)
    ax.scatter(P[:, 0], P[:, 1], P[:, 2], s=6, c=color)
    ax.set_box_aspect((1, 1, 1))
    if title:
        ax.set_title(title)
    return ax


def main():
    seed = 42
    n = 1000
    k = 30

    # 1) 圆盘：best candidate 与纯随机对比，右边画出四叉树
    disk_pts = []
    disk = Disk(seed, n, k, lambda x, y: disk_pts.append((x, y))).generate()
    uniform_pts = uniform_disk_points(seed, n)
    print("disk best candidate:", dispersion_summary(disk_pts))
    print("disk uniform       :", dispersion_summary(uniform_pts))

    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    plot_disk_samples(disk_pts, axes[0], title=f"Best Candidate (k={k})")
    plot_disk_samples(uniform_pts, axes[1], title="Uniform", color="tab:gray")
    plot_quadtree(disk.partition, axes[2])
    plot_disk_samples(disk_pts, axes[2], title="QuadTree leaves")
    plt.tight_layout()

    # 2) 球面
    sphere_pts = sample_sphere(seed, n, k)
    print("sphere min angle best candidate:", min_angular_distance(sphere_pts))
    print("sphere min angle uniform       :", min_angular_distance(uniform_sphere_points(seed, n)))
    plot_sphere_samples(sphere_pts, title=f"Best Candidate on the sphere (k={k})")
    plt.show()


if __name__ == '__main__':
    main()
