# examples/demo_pipeline.py
from chull3d.pipeline import convex_hull

if __name__ == "__main__":
    cube = [
        (0,0,0), (1,0,0), (1,1,0), (0,1,0),
        (0,0,1), (1,0,1), (1,1,1), (0,1,1),
        (0.5,0.5,0.5), (0.2,0.8,0.3), (0.8,0.2,0.7)
    ]

    pts, surface = convex_hull(cube, backend="incremental", seed=1)
    print("Vertices:", len(pts))
    print("Surface triangles (incremental):", len(surface))

    _, surface_qh = convex_hull(cube, backend="scipy")
    print("Surface triangles (scipy):", len(surface_qh))
