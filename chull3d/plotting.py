"""
Візуалізація оболонки (matplotlib): грані у 3D та дуальні точки граней на площині z=0.
"""
from __future__ import annotations
from typing import Any, Iterable, List, Optional

import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d.art3d import Poly3DCollection


def _set_equal_limits(ax, pts) -> None:
    """Однакові масштаби по всіх осях."""
    xs = [p.x for p in pts]
    ys = [p.y for p in pts]
    zs = [p.z for p in pts]
    if not xs:
        return
    max_range = max(max(xs) - min(xs), max(ys) - min(ys), max(zs) - min(zs))
    if max_range == 0:
        max_range = 1.0
    mx = 0.5 * (min(xs) + max(xs))
    my = 0.5 * (min(ys) + max(ys))
    mz = 0.5 * (min(zs) + max(zs))
    ax.set_xlim(mx - max_range / 2, mx + max_range / 2)
    ax.set_ylim(my - max_range / 2, my + max_range / 2)
    ax.set_zlim(mz - max_range / 2, mz + max_range / 2)


def plot_hull_3d(
    facets: List[Any],
    points: Optional[Iterable[Any]] = None,
    ax=None,
    title: str = "Convex hull",
):
    """
    Намалювати грані оболонки (Poly3DCollection) і, за бажанням, вхідні точки.
    facets — грані з атрибутом verts (результат ConvexHull.compute()).
    Повертає осі.
    """
    if ax is None:
        fig = plt.figure()
        ax = fig.add_subplot(111, projection="3d")

    if not facets:
        ax.set_title("Немає граней")
        return ax

    polys = [[(v.x, v.y, v.z) for v in f.verts] for f in facets]
    coll = Poly3DCollection(polys, edgecolors="k", linewidths=0.5,
                            facecolors=(0.2, 0.5, 0.9, 0.25))
    ax.add_collection3d(coll)

    hull_pts = [v for f in facets for v in f.verts]
    if points is not None:
        pts = list(points)
        ax.scatter([p.x for p in pts], [p.y for p in pts], [p.z for p in pts], s=6, color="red")
        hull_pts = hull_pts + pts
    _set_equal_limits(ax, hull_pts)

    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.set_zlabel("Z")
    ax.set_title(title)
    return ax


def plot_dual_points(facets: List[Any], ax=None, title: str = "Dual points (faces visible from below)"):
    """Дуальні точки граней, видимих знизу (нижня оболонка), на площині."""
    if ax is None:
        fig, ax = plt.subplots()

    lower = [f for f in facets if f.is_visible_from_below()]
    duals = [f.get_dual_point() for f in lower]
    if duals:
        ax.plot([d.x for d in duals], [d.y for d in duals], "o", color="blue")
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_title(title)
    return ax
