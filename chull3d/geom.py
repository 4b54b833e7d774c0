from __future__ import annotations
from dataclasses import dataclass
from math import sqrt
from typing import Any, Iterable, Optional, Tuple

from .conflict import ConflictList

EPSILON = 1e-10  # допуск для конфлікт-тесту «точка над площиною грані»
BELOW_EPS = 1.4259414393190911e-9  # поріг для is_visible_from_below (не нуль!)


@dataclass(frozen=True)
class Pt:
    x: float
    y: float
    z: float
    def __iter__(self):
        yield self.x; yield self.y; yield self.z


def approx_zero(v: float, eps: float = EPSILON) -> bool:
    """|v| <= eps."""
    return -eps <= v <= eps


def sub(a, b) -> Pt:
    return Pt(a.x - b.x, a.y - b.y, a.z - b.z)

def add(a, b) -> Pt:
    return Pt(a.x + b.x, a.y + b.y, a.z + b.z)

def neg(a) -> Pt:
    return Pt(-a.x, -a.y, -a.z)

def dot(a, b) -> float:
    return a.x*b.x + a.y*b.y + a.z*b.z

def cross(a, b) -> Pt:
    return Pt(a.y*b.z - a.z*b.y,
              a.z*b.x - a.x*b.z,
              a.x*b.y - a.y*b.x)

def norm(a) -> float:
    return sqrt(dot(a, a))

def normalize(a) -> Pt:
    n = norm(a)
    if n == 0.0:
        raise ValueError("cannot normalize a zero vector")
    inv = 1.0 / n
    return Pt(a.x*inv, a.y*inv, a.z*inv)


def centroid(points: Iterable[Any]) -> Pt:
    xs = ys = zs = 0.0
    n = 0
    for p in points:
        xs += p.x; ys += p.y; zs += p.z; n += 1
    if n == 0:
        raise ValueError("empty set")
    inv = 1.0 / n
    return Pt(xs*inv, ys*inv, zs*inv)


def as_xyz(p: Any) -> Tuple[float, float, float]:
    """Координати з Pt/Vertex/будь-якого об'єкта з x,y,z або з трійки (tuple, рядок numpy)."""
    if hasattr(p, "x") and hasattr(p, "y") and hasattr(p, "z"):
        return float(p.x), float(p.y), float(p.z)
    x, y, z = p
    return float(x), float(y), float(z)


def unique_points(points: Iterable[Any], scale: float = 1e9) -> list[Pt]:
    """
    Груба дедуплікація з квантуванням (стабільніше для float).
    `scale=1e9` ≈ 1e-9 на координату. Порядок першої появи зберігається.
    """
    seen: dict[Tuple[int, int, int], Pt] = {}
    for p in points:
        x, y, z = as_xyz(p)
        key = (int(round(x*scale)), int(round(y*scale)), int(round(z*scale)))
        if key not in seen:
            seen[key] = Pt(x, y, z)
    return list(seen.values())


class Vertex:
    """
    Вершина оболонки.
    index: позиція у масиві точок драйвера (драйвер перепризначає його при перестановках).
    conflicts: список конфліктних ребер (ті самі вузли, що й у списках граней).
    original: об'єкт, з якого створено вершину; is_dummy: обмежувальна/службова точка.
    """
    __slots__ = ("x", "y", "z", "index", "conflicts", "original", "is_dummy")

    def __init__(self, x: float, y: float, z: float,
                 original: Optional[Any] = None, is_dummy: bool = False):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.index = -1
        self.conflicts = ConflictList(for_face=False)
        self.original = original
        self.is_dummy = is_dummy

    def __iter__(self):
        yield self.x; yield self.y; yield self.z

    def __repr__(self) -> str:
        return f"Vertex({self.x}, {self.y}, {self.z}, index={self.index})"

    def equals(self, other: Any) -> bool:
        return self.x == other.x and self.y == other.y and self.z == other.z

