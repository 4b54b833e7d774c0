class HullError(Exception):
    """Базовий виняток chull3d."""


class DegenerateInputError(HullError, ValueError):
    """Менше 4 точок або всі точки колінеарні/копланарні — 3D оболонку не побудувати."""


class TopologyError(HullError, RuntimeError):
    """Не знайдено очікуване twin-ребро під час зшивання граней (баг побудови, не даних)."""
