# examples/main.py
from __future__ import annotations

import logging
import random
import sys

import matplotlib.pyplot as plt

from chull3d.errors import DegenerateInputError
from chull3d.hull import ConvexHull
from chull3d.plotting import plot_dual_points, plot_hull_3d


def generate_random_points(n: int, seed: int | None = None):
    """
    Генерує n випадкових точок на/біля сфери радіуса 1 (більшість потрапляє на оболонку).
    """
    rnd = random.Random(seed)
    pts = []
    for _ in range(n):
        x, y, z = rnd.gauss(0, 1), rnd.gauss(0, 1), rnd.gauss(0, 1)
        r = (x*x + y*y + z*z) ** 0.5 or 1.0
        k = rnd.uniform(0.8, 1.0) / r
        pts.append((x*k, y*k, z*k))
    return pts


def parse_points_from_text(text: str):
    """
    Парсить точки з багаторядкового тексту.
    Кожен рядок: x y z або x, y, z.
    Повертає список (x,y,z) як float.
    """
    points = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue  # пропускаємо пусті строки і коментарі
        parts = line.replace(",", " ").split()
        if len(parts) != 3:
            raise ValueError(f"Рядок {lineno}: очікується 3 числа, отримано: {len(parts)}")
        try:
            x, y, z = map(float, parts)
        except ValueError:
            raise ValueError(f"Рядок {lineno}: не вдалось прочитати числа '{line}'")
        points.append((x, y, z))
    return points


def main():
    logging.basicConfig(level=logging.INFO)

    # --- 1) Вхідні дані: файл з точками або рандом ---
    if len(sys.argv) > 1:
        with open(sys.argv[1], encoding="utf-8") as f:
            points = parse_points_from_text(f.read())
    else:
        points = generate_random_points(200, seed=7)

    # --- 2) Оболонка ---
    hull = ConvexHull()
    hull.init([], points)
    try:
        facets = hull.compute()
    except DegenerateInputError as e:
        print(f"Неможливо побудувати оболонку: {e}")
        return

    report = hull.validate()
    print(f"Точок:   {len(hull.points)}")
    print(f"Граней:  {report['faces']}")
    print(f"Вершин:  {report['unique_vertices']}")
    print("VALIDATION:", report)

    # --- 3) Картинки ---
    fig = plt.figure(figsize=(11, 5))
    ax3d = fig.add_subplot(121, projection="3d")
    plot_hull_3d(facets, hull.points, ax=ax3d)
    plot_dual_points(facets, ax=fig.add_subplot(122))
    plt.show()


if __name__ == "__main__":
    main()
