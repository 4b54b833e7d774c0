from __future__ import annotations
import logging
import random
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .conflict import ConflictNode
from .errors import DegenerateInputError, TopologyError
from .geom import EPSILON, Vertex, approx_zero, as_xyz, centroid, dot, norm, sub
from .mesh import Face, HEdge
from .predicates import linear_dependent

logger = logging.getLogger(__name__)


class ConvexHull:
    """
    Рандомізований інкрементальний 3D convex hull із conflict graph (Clarkson–Shor / de Berg).

    Використання:
        hull = ConvexHull()
        hull.init([], points)        # обмежувальні точки + вхідні точки
        facets = hull.compute()      # список Face (verts, normal)

    Стан:
      points  — масив Vertex, завжди points[i].index == i;
      facets  — щільний масив живих граней, завжди facets[i].index == i;
      visible / horizon / created — робочі списки поточного кроку вставки;
      current — курсор: точки [0, current) уже оброблені.
    """

    def __init__(self, points: Optional[Iterable[Any]] = None, eps: float = EPSILON):
        self.eps = eps
        self.points: List[Vertex] = []
        self.facets: List[Face] = []
        self.created: List[Face] = []
        self.horizon: List[HEdge] = []
        self.visible: List[Face] = []
        self.current = 0
        if points is not None:
            self.init([], points)

    # ---------------- Публічний API ----------------
    def init(self, bounding_points: Iterable[Any], sites: Iterable[Any]) -> None:
        """Побудувати робочий набір вершин: спершу sites, потім обмежувальні (dummy) точки."""
        self.points = []
        for site in sites:
            x, y, z = as_xyz(site)
            self.points.append(Vertex(x, y, z, original=site))
        for b in bounding_points:
            if isinstance(b, Vertex):
                self.points.append(b)
            else:
                x, y, z = as_xyz(b)
                self.points.append(Vertex(x, y, z, original=b, is_dummy=True))
        for i, v in enumerate(self.points):
            v.index = i

    def permutate(self, rng: Optional[random.Random] = None) -> None:
        """Випадковий порядок вставки (Fisher–Yates), index слідує за позицією."""
        rnd = rng if rng is not None else random
        pts = self.points
        for i in range(len(pts) - 1, 0, -1):
            j = rnd.randint(0, i)
            self._swap(i, j)

    def compute(self, shuffle: bool = True, rng: Optional[random.Random] = None) -> List[Face]:
        """Повний прогін: (перестановка) -> prep -> вставка всіх точок. Повертає живі грані."""
        if shuffle:
            self.permutate(rng)
        self.prep()
        while self.current < len(self.points):
            nxt = self.points[self.current]
            if nxt.conflicts.is_empty():
                # точка всередині (або на межі) поточної оболонки
                self.current += 1
                continue
            self._insert(nxt)
            self.current += 1
        logger.debug("hull done: %d points, %d facets", len(self.points), len(self.facets))
        return self.facets

    def clear(self) -> None:
        self.points = []
        self.facets = []
        self.created = []
        self.horizon = []
        self.visible = []
        self.current = 0

    def faces(self) -> List[Tuple[int, int, int]]:
        """Живі грані як трійки index вершин (позиції в self.points)."""
        return [f.tri() for f in self.facets]

    def vertices(self) -> List[Vertex]:
        """Різні вершини оболонки у порядку index."""
        seen: Dict[int, Vertex] = {}
        for f in self.facets:
            for v in f.verts:
                seen[v.index] = v
        return [seen[i] for i in sorted(seen)]

    # ---------------- Ініціалізація ----------------
    def prep(self) -> None:
        """
        Стартовий тетраедр:
          v0 = points[0]; v1 — перша точка, відмінна від v0;
          v2 — перша точка, не колінеарна з (v0, v1);
          v3 — перша точка, не копланарна з площиною (v0, v1, v2).
        Обрані точки переставляються в слоти 0..3, решта точок отримує початкові конфлікти.
        """
        n = len(self.points)
        if n < 4:
            logger.error("need at least 4 points, got %d", n)
            raise DegenerateInputError(f"Need at least 4 points, got {n}")
        # повторний прогін на тих самих вершинах: старі конфлікти та грані недійсні
        self.facets = []
        for i, v in enumerate(self.points):
            v.index = i
            v.conflicts.head = None

        v0 = self.points[0]
        v1 = self._find_and_swap(1, lambda p: not p.equals(v0))
        if v1 is None:
            logger.error("all %d points coincide", n)
            raise DegenerateInputError("All points coincide: cannot form a base triangle")
        d01 = sub(v1, v0)
        v2 = self._find_and_swap(2, lambda p: not linear_dependent(d01, sub(p, v0), self.eps))
        if v2 is None:
            logger.error("all %d points collinear", n)
            raise DegenerateInputError("All points collinear: cannot form a base triangle")

        f0 = Face(v0, v1, v2)
        off = dot(f0.normal, v0)
        v3 = self._find_and_swap(3, lambda p: not approx_zero(dot(f0.normal, p) - off, self.eps))
        if v3 is None:
            logger.error("all %d points coplanar", n)
            raise DegenerateInputError("All points coplanar: 3D hull is impossible")

        f0.orient(v3)
        f1 = Face(v0, v2, v3, v1)
        f2 = Face(v0, v1, v3, v2)
        f3 = Face(v1, v2, v3, v0)
        for f in (f0, f1, f2, f3):
            self.add_facet(f)
        # склеїти 6 ребер тетраедра
        f0.link(f1, v0, v2)
        f0.link(f2, v0, v1)
        f0.link(f3, v1, v2)
        f1.link(f2, v0, v3)
        f1.link(f3, v2, v3)
        f2.link(f3, v3, v1)
        self.current = 4

        for i in range(self.current, n):
            v = self.points[i]
            for f in (f0, f1, f2, f3):
                if f.conflict(v, self.eps):
                    self.add_conflict(f, v)
        logger.debug("seed tetrahedron %s", [v.index for v in (v0, v1, v2, v3)])

    def _swap(self, i: int, j: int) -> None:
        pts = self.points
        pts[i], pts[j] = pts[j], pts[i]
        pts[i].index = i
        pts[j].index = j

    def _find_and_swap(self, slot: int, ok) -> Optional[Vertex]:
        """Перша точка з індексом >= slot, що задовольняє ok, переставляється у slot."""
        for i in range(slot, len(self.points)):
            if ok(self.points[i]):
                self._swap(slot, i)
                return self.points[slot]
        return None

    # ---------------- Conflict graph ----------------
    def add_conflict(self, face: Face, vert: Vertex) -> None:
        node = ConflictNode(face, vert)
        face.conflicts.add(node)
        vert.conflicts.add(node)

    def add_conflicts(self, old1: Face, old2: Face, fn: Face) -> None:
        """
        Кандидати для нової грані fn — об'єднання конфліктів двох старих граней,
        що сходяться на ребрі горизонту. Обидва списки впорядковані за index спаданням,
        тож зливаємо за O(|l1| + |l2|); спільна вершина береться один раз.
        """
        l1 = old1.conflicts.get_vertices()
        l2 = old2.conflicts.get_vertices()
        merged: List[Vertex] = []
        i = j = 0
        while i < len(l1) or j < len(l2):
            if i < len(l1) and j < len(l2):
                a, b = l1[i], l2[j]
                if a.index == b.index:
                    merged.append(a); i += 1; j += 1
                elif a.index > b.index:
                    merged.append(a); i += 1
                else:
                    merged.append(b); j += 1
            elif i < len(l1):
                merged.append(l1[i]); i += 1
            else:
                merged.append(l2[j]); j += 1
        # додаємо у зростаючому порядку — вставка на початок зберігає спадання
        for v in reversed(merged):
            if fn.conflict(v, self.eps):
                self.add_conflict(fn, v)

    def remove_conflict(self, face: Face) -> None:
        """Зняти конфлікти грані та вилучити її з facets (swap-remove)."""
        face.remove_conflict()
        self.remove_facet(face)

    def add_facet(self, face: Face) -> None:
        face.index = len(self.facets)
        self.facets.append(face)

    def remove_facet(self, face: Face) -> None:
        index = face.index
        face.index = -1
        if index < 0 or index >= len(self.facets) or self.facets[index] is not face:
            return
        last = self.facets.pop()
        if last is not face:
            last.index = index
            self.facets[index] = last

    # ---------------- Вставка точки ----------------
    def _insert(self, nxt: Vertex) -> None:
        """
        Додати точку nxt, що має конфлікти:
          1) видимі грані = конфліктні грані nxt (позначаються marked);
          2) горизонт — впорядкований цикл ребер між видимими та невидимими гранями;
          3) віяло нових граней (nxt, hE.orig, hE.dest) вздовж горизонту;
          4) видалити видимі грані разом із їхніми конфліктами.
        """
        self.created = []
        self.horizon = []
        self.visible = []
        nxt.conflicts.fill(self.visible)

        for f in self.visible:
            e = f.get_horizon()
            if e is not None:
                e.find_horizon(self.horizon)
                break
        if not self.horizon:
            raise TopologyError(f"no horizon found for point {nxt!r}")

        first: Optional[Face] = None
        last: Optional[Face] = None
        for hE in self.horizon:
            # третя вершина видимої грані за горизонтом — гарантовано «всередині» нової грані
            fn = Face(nxt, hE.orig, hE.dest, hE.twin.next.dest)
            self.add_facet(fn)
            self.created.append(fn)
            self.add_conflicts(hE.face, hE.twin.face, fn)
            fn.link(hE)
            if last is not None:
                fn.link(last, nxt, hE.orig)
            last = fn
            if first is None:
                first = fn
        # замкнути віяло навколо nxt
        last.link(first, nxt, self.horizon[0].orig)

        for f in self.visible:
            self.remove_conflict(f)
        logger.debug("point %d: %d visible, %d new facets, %d live",
                     nxt.index, len(self.visible), len(self.created), len(self.facets))
        self.created = []

    # ---------------- Діагностика ----------------
    def validate(self) -> dict:
        """
        Перевірка коректності:
          - кожне напівребро має twin, twin симетричний і йде в протилежному напрямку;
          - twin лежить на живій грані;
          - нормалі одиничні, facets[i].index == i;
          - нормаль кожної грані дивиться від центроїда вершин оболонки (внутрішня точка);
          - жодна точка не лежить зовні жодної грані (з допуском eps);
          - у жодної точки не лишилось конфліктів.
        Повертає словник із діагностикою (порожні списки = все ок).
        """
        bad_twins: List[Tuple[int, int, str]] = []
        bad_index: List[int] = []
        bad_normal: List[int] = []
        outside: List[Tuple[int, int]] = []
        bad_orient: List[int] = []
        inner = centroid([v for f in self.facets for v in f.verts]) if self.facets else None

        for i, f in enumerate(self.facets):
            if f.index != i:
                bad_index.append(i)
            if abs(norm(f.normal) - 1.0) > 1e-9:
                bad_normal.append(i)
            if not dot(f.normal, inner) < dot(f.normal, f.verts[0]):
                bad_orient.append(i)
            for ei, e in enumerate(f.edges):
                t = e.twin
                if t is None:
                    bad_twins.append((i, ei, "missing_twin"))
                    continue
                if t.twin is not e:
                    bad_twins.append((i, ei, "asymmetric_twin"))
                if t.orig is not e.dest or t.dest is not e.orig:
                    bad_twins.append((i, ei, "same_direction_twin"))
                k = t.face.index
                if not (0 <= k < len(self.facets)) or self.facets[k] is not t.face:
                    bad_twins.append((i, ei, "twin_on_dead_face"))
            for p in self.points:
                if f.conflict(p, self.eps):
                    outside.append((i, p.index))

        unresolved = [p.index for p in self.points if not p.conflicts.is_empty()]

        return {
            "faces": len(self.facets),
            "unique_vertices": len({v.index for f in self.facets for v in f.verts}),
            "bad_twins": bad_twins,
            "bad_index": bad_index,
            "bad_normals": bad_normal,
            "bad_orient_faces": bad_orient,
            "points_outside": outside,
            "unresolved_conflicts": unresolved,
        }
