"""
Дуальне відображення граней оболонки у площину z=0.

Грань із площиною z = a'x + b'y + c' відповідає точці (a'/2, b'/2) — це
потрібно лише для візуалізації (нижня оболонка параболоїда -> діаграма на площині),
на коректність самої оболонки не впливає.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float
    def __iter__(self):
        yield self.x; yield self.y


class Plane3D:
    """Площина a*x + b*y + c*z + d = 0 через три вершини грані."""

    def __init__(self, face):
        p1, p2, p3 = face.verts
        self.a = p1.y*(p2.z - p3.z) + p2.y*(p3.z - p1.z) + p3.y*(p1.z - p2.z)
        self.b = p1.z*(p2.x - p3.x) + p2.z*(p3.x - p1.x) + p3.z*(p1.x - p2.x)
        self.c = p1.x*(p2.y - p3.y) + p2.x*(p3.y - p1.y) + p3.x*(p1.y - p2.y)
        self.d = -1.0 * (p1.x*(p2.y*p3.z - p3.y*p2.z)
                         + p2.x*(p3.y*p1.z - p1.y*p3.z)
                         + p3.x*(p1.y*p2.z - p2.y*p1.z))

    def get_norm_z_plane(self) -> Tuple[float, float, float]:
        """(a', b', c') для z = a'x + b'y + c'. Вертикальна площина (c == 0) — ZeroDivisionError."""
        return (-self.a / self.c, -self.b / self.c, -self.d / self.c)

    def get_dual_point_mapped_to_plane(self) -> Point2D:
        nz = self.get_norm_z_plane()
        return Point2D(nz[0] / 2.0, nz[1] / 2.0)
