"""Regular-polygon geometry for the chaos game."""
import math
from typing import List, Tuple

Vec2 = Tuple[float, float]


def polygon_vertices(count: int, radius: float = 1.0) -> List[Vec2]:
    """
    Place `count` vertices on a circle of `radius` around the origin.

    Vertex i sits at angle 2*pi*i/count, so the list is in ascending-angle
    order starting on the +x axis.
    """
    step = 2.0 * math.pi / count
    return [
        (radius * math.cos(step * i), radius * math.sin(step * i))
        for i in range(count)
    ]


def rotate_point(px: float, py: float, cx: float, cy: float, deg: float) -> Vec2:
    rad = math.radians(deg)
    s = math.sin(rad)
    c = math.cos(rad)
    tx = px - cx
    ty = py - cy
    rx = tx * c - ty * s
    ry = tx * s + ty * c
    return (rx + cx, ry + cy)


def barycentric(p: Vec2, a: Vec2, b: Vec2, c: Vec2) -> Tuple[float, float, float]:
    """Barycentric coordinates of p relative to triangle abc."""
    (px, py), (ax, ay), (bx, by), (cx, cy) = p, a, b, c
    det = (by - cy) * (ax - cx) + (cx - bx) * (ay - cy)
    if abs(det) < 1e-12:
        raise ValueError("degenerate triangle")
    l1 = ((by - cy) * (px - cx) + (cx - bx) * (py - cy)) / det
    l2 = ((cy - ay) * (px - cx) + (ax - cx) * (py - cy)) / det
    return (l1, l2, 1.0 - l1 - l2)
