import logging

from chull3d.geom import unique_points
from chull3d.hull import ConvexHull

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    raw = [
        (0,0,0), (1,0,0), (1,1,0), (0,1,0),
        (0,0,1), (1,0,1), (1,1,1), (0,1,1),
        (0.5,0.5,0.5), (0.2,0.8,0.3), (0.8,0.2,0.7)
    ]
    pts = unique_points(raw)
    hull = ConvexHull(pts)
    facets = hull.compute()

    for f in facets:
        print(f.tri(), f.normal)

    report = hull.validate()
    print("VALIDATION:", report)
