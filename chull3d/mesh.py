from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .conflict import ConflictList
from .dual import Plane3D, Point2D
from .errors import TopologyError
from .geom import EPSILON, BELOW_EPS, Pt, dot, cross, sub, neg, normalize


@dataclass(eq=False)
class HEdge:
    """
    Напівребро orig -> dest грані face.
    next/prev: цикл ребер усередині грані; twin: протилежне напівребро сусідньої грані (або None).
    Порівняння — лише за ідентичністю (eq=False), бо горизонт шукається через `is`.
    """
    orig: object
    dest: object
    face: "Face" = field(repr=False)
    next: Optional["HEdge"] = field(default=None, repr=False)
    prev: Optional["HEdge"] = field(default=None, repr=False)
    twin: Optional["HEdge"] = field(default=None, repr=False)

    def is_horizon(self) -> bool:
        """Ребро межує видиму (marked) грань через twin, а саме лежить на невидимій."""
        return self.twin is not None and self.twin.face.marked and not self.face.marked

    def find_horizon(self, horizon: List["HEdge"]) -> None:
        """
        Обхід горизонту (ітеративно, без рекурсії):
          - на ребрі горизонту: якщо це horizon[0] — цикл замкнувся; інакше додаємо і йдемо в next;
          - на звичайному ребрі: переходимо через twin.next (обертання навколо вершини).
        Результат: horizon[i].dest is horizon[i+1].orig, останнє ребро замикається на перше.
        """
        e: Optional[HEdge] = self
        while e is not None:
            if e.is_horizon():
                if horizon and e is horizon[0]:
                    return
                horizon.append(e)
                e = e.next
            elif e.twin is not None:
                e = e.twin.next
            else:
                return

    def is_equal(self, orig, dest) -> bool:
        return ((self.orig.equals(orig) and self.dest.equals(dest))
                or (self.orig.equals(dest) and self.dest.equals(orig)))


class Face:
    """
    Трикутна грань оболонки.
    verts: 3 вершини з узгодженою орієнтацією; normal: одинична зовнішня нормаль.
    edges: 3 напівребра (verts[0]->verts[1], verts[1]->verts[2], verts[2]->verts[0]).
    marked: грань видима з поточної точки (лише всередині одного кроку вставки).
    index: позиція в масиві facets драйвера (-1 після видалення).
    conflicts: точки, що лежать зовні площини грані.
    """

    def __init__(self, a, b, c, orient=None):
        self.conflicts = ConflictList(for_face=True)
        self.verts = [a, b, c]
        self.marked = False
        self.index = -1
        t = cross(sub(a, b), sub(b, c))
        self.normal: Pt = normalize(neg(t))
        self.edges: List[HEdge] = []
        self.create_edges()
        self.dual_point: Optional[Point2D] = None

        if orient is not None:
            self.orient(orient)

    def __repr__(self) -> str:
        ids = tuple(getattr(v, "index", None) for v in self.verts)
        return f"Face(verts={ids}, index={self.index})"

    def create_edges(self) -> None:
        v = self.verts
        self.edges = [HEdge(v[0], v[1], self), HEdge(v[1], v[2], self), HEdge(v[2], v[0], self)]
        for i in range(3):
            self.edges[i].next = self.edges[(i + 1) % 3]
            self.edges[i].prev = self.edges[(i + 2) % 3]

    def orient(self, ref) -> None:
        """Якщо ref не по внутрішній стороні — міняємо обхід (verts[1] <-> verts[2]) і нормаль."""
        if not (dot(self.normal, ref) < dot(self.normal, self.verts[0])):
            self.verts[1], self.verts[2] = self.verts[2], self.verts[1]
            self.normal = neg(self.normal)
            self.create_edges()

    def get_edge(self, v0, v1) -> Optional[HEdge]:
        for e in self.edges:
            if e.is_equal(v0, v1):
                return e
        return None

    def link(self, other, v0=None, v1=None) -> None:
        """
        Зшити twin-ребра цієї грані з other.
        other — Face (тоді ребро шукаємо за (v0, v1)) або вже відоме HEdge.
        """
        if isinstance(other, Face):
            twin = other.get_edge(v0, v1)
            if twin is None:
                raise TopologyError(f"twin edge {v0!r}-{v1!r} not found in {other!r}")
        else:
            twin = other
            v0, v1 = twin.orig, twin.dest
        edge = self.get_edge(v0, v1)
        if edge is None:
            raise TopologyError(f"edge {v0!r}-{v1!r} not found in {self!r}")
        twin.twin = edge
        edge.twin = twin

    def conflict(self, v, eps: float = EPSILON) -> bool:
        """v строго над площиною грані (з допуском eps)."""
        return dot(self.normal, v) > dot(self.normal, self.verts[0]) + eps

    def is_visible_from_below(self) -> bool:
        return self.normal.z < -BELOW_EPS

    def get_horizon(self) -> Optional[HEdge]:
        for e in self.edges:
            if e.twin is not None and e.twin.is_horizon():
                return e
        return None

    def remove_conflict(self) -> None:
        self.conflicts.remove_all()

    def get_dual_point(self) -> Point2D:
        if self.dual_point is None:
            self.dual_point = Plane3D(self).get_dual_point_mapped_to_plane()
        return self.dual_point

    def tri(self):
        return tuple(v.index for v in self.verts)
