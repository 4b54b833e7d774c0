from __future__ import annotations
from .geom import sub, cross, dot, norm, EPSILON

def orient3d(a, b, c, d) -> float:
    """((b-a) x (c-a)) . (d-a): > 0, якщо d по той бік площини (a,b,c), куди дивиться права нормаль."""
    ab = sub(b, a)
    ac = sub(c, a)
    ad = sub(d, a)
    return dot(cross(ab, ac), ad)

def linear_dependent(u, v, eps: float = EPSILON) -> bool:
    """
    Чи колінеарні вектори u та v: ||u x v|| <= eps * ||u|| * ||v|| (синус кута між ними <= eps).
    Відносний допуск — не залежить від масштабу. Симетрично щодо u/v;
    нульовий вектор залежний з будь-яким.
    """
    return norm(cross(u, v)) <= eps * norm(u) * norm(v)
