"""
chull3d — мінімальна бібліотека для 3D опуклої оболонки.
Рандомізований інкрементальний алгоритм + conflict graph + half-edge сітка.
"""

__version__ = "0.1.0"

from chull3d.geom import Pt, Vertex, EPSILON, centroid, unique_points
from chull3d.predicates import orient3d, linear_dependent
from chull3d.errors import HullError, DegenerateInputError, TopologyError
from chull3d.mesh import Face, HEdge
from chull3d.hull import ConvexHull
from chull3d.pipeline import convex_hull

__all__ = [
    "Pt", "Vertex", "EPSILON", "centroid", "unique_points",
    "orient3d", "linear_dependent",
    "HullError", "DegenerateInputError", "TopologyError",
    "Face", "HEdge", "ConvexHull", "convex_hull", "__version__",
]
