from __future__ import annotations
import random
from typing import Any, Iterable, List, Optional, Tuple

from .geom import Pt, add, unique_points
from .predicates import orient3d
from .hull import ConvexHull


def convex_hull(
    points: Iterable[Any],
    backend: str = "incremental",
    seed: Optional[int] = None,
) -> Tuple[List[Pt], List[Tuple[int, int, int]]]:
    """
    Повний пайплайн:
      - прибирає дублікати точок;
      - будує опуклу оболонку: нашим ConvexHull ("incremental") або SciPy/Qhull ("scipy").

    Повертає:
      pts       — список Pt після дедуплікації;
      triangles — трикутники оболонки (індекси у pts), обхід проти годинникової стрілки,
                  якщо дивитись ззовні (нормаль за правилом правої руки — назовні).
    """
    pts: List[Pt] = unique_points(points)
    key = backend.lower()

    if key == "incremental":
        hull = ConvexHull()
        hull.init([], pts)
        hull.compute(rng=random.Random(seed))
        pos = {p: i for i, p in enumerate(pts)}
        # у ConvexHull нормаль = -(b-a)x(c-a), тож розвертаємо обхід
        triangles = [(pos[f.verts[0].original], pos[f.verts[2].original], pos[f.verts[1].original])
                     for f in hull.facets]
        return pts, triangles

    if key == "scipy":
        try:
            import numpy as np
            from scipy.spatial import ConvexHull as QhullHull
        except ImportError as e:
            raise RuntimeError(
                "backend='scipy', але SciPy не встановлено. "
                "Встанови scipy або використай backend='incremental'."
            ) from e

        arr = np.array([(p.x, p.y, p.z) for p in pts], dtype=float)
        qh = QhullHull(arr)
        triangles = []
        # Qhull не гарантує орієнтацію simplices — вирівнюємо за equations (зовнішні нормалі)
        for simplex, eq in zip(qh.simplices, qh.equations):
            a, b, c = (int(i) for i in simplex)
            if orient3d(pts[a], pts[b], pts[c], add(pts[a], Pt(*eq[:3]))) < 0:
                b, c = c, b
            triangles.append((a, b, c))
        return pts, triangles

    raise ValueError(f"Невідомий backend: {backend}")
