"""
Conflict graph: двочастковий граф (жива грань, зовнішня точка).

Кожне ребро графа — один об'єкт ConflictNode, який одночасно лежить у двох
інтрузивних двозв'язних списках: у списку грані (next_f/prev_f) і в списку
вершини (next_v/prev_v). Тому видалення ребра з обох боків — O(1).
"""
from __future__ import annotations
from typing import Iterator, List, Optional


class ConflictNode:
    """Одне ребро conflict graph: face <-> vert."""
    __slots__ = ("face", "vert", "next_f", "prev_f", "next_v", "prev_v")

    def __init__(self, face, vert):
        self.face = face
        self.vert = vert
        self.next_f: Optional[ConflictNode] = None
        self.prev_f: Optional[ConflictNode] = None
        self.next_v: Optional[ConflictNode] = None
        self.prev_v: Optional[ConflictNode] = None

    def unlink_from_vertex(self) -> None:
        lst = self.vert.conflicts
        if self.prev_v is None:
            lst.head = self.next_v
        else:
            self.prev_v.next_v = self.next_v
        if self.next_v is not None:
            self.next_v.prev_v = self.prev_v
        self.next_v = self.prev_v = None

    def unlink_from_face(self) -> None:
        lst = self.face.conflicts
        if self.prev_f is None:
            lst.head = self.next_f
        else:
            self.prev_f.next_f = self.next_f
        if self.next_f is not None:
            self.next_f.prev_f = self.prev_f
        self.next_f = self.prev_f = None


class ConflictList:
    """
    Список конфліктів однієї грані (for_face=True) або однієї вершини (for_face=False).
    add() вставляє на початок. Вершини додаються у зростаючому порядку index,
    отже список грані відсортований за index спаданням (на цьому тримається злиття в add_conflicts).
    """
    __slots__ = ("for_face", "head")

    def __init__(self, for_face: bool):
        self.for_face = for_face
        self.head: Optional[ConflictNode] = None

    def add(self, node: ConflictNode) -> None:
        if self.for_face:
            node.prev_f = None
            node.next_f = self.head
            if self.head is not None:
                self.head.prev_f = node
        else:
            node.prev_v = None
            node.next_v = self.head
            if self.head is not None:
                self.head.prev_v = node
        self.head = node

    def is_empty(self) -> bool:
        return self.head is None

    def __iter__(self) -> Iterator[ConflictNode]:
        cur = self.head
        if self.for_face:
            while cur is not None:
                nxt = cur.next_f
                yield cur
                cur = nxt
        else:
            while cur is not None:
                nxt = cur.next_v
                yield cur
                cur = nxt

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def remove_all(self) -> None:
        """Зняти всі ребра грані: кожен вузол вилучається і зі списку своєї вершини."""
        if not self.for_face:
            raise TypeError("remove_all() is defined for face conflict lists only")
        cur = self.head
        while cur is not None:
            nxt = cur.next_f
            cur.unlink_from_vertex()
            cur.next_f = cur.prev_f = None
            cur = nxt
        self.head = None

    def get_vertices(self) -> List:
        """Вершини списку грані у порядку списку (index спаданням)."""
        return [node.vert for node in self]

    def fill(self, visible: List) -> None:
        """Для списку вершини: скласти всі конфліктні грані у visible і позначити їх (marked=True)."""
        if self.for_face:
            raise TypeError("fill() is defined for vertex conflict lists only")
        for node in self:
            node.face.marked = True
            visible.append(node.face)
