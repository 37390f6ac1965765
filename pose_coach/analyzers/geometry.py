"""
Geometry Module
===============

Pure 2D helpers used by the analyzers. Every function accepts any object
with ``x`` and ``y`` attributes (``Point`` or ``Landmark``).
"""

import numpy as np

from .models import Point


def angle_at(a, b, c) -> int:
    """
    Calculate the angle at vertex ``b`` formed by rays b->a and b->c.

    Args:
        a: First point
        b: Middle point (vertex)
        c: Third point

    Returns:
        Angle in whole degrees within [0, 180]. A zero-length ray has no
        direction, so the angle is reported as 0.
    """
    if (a.x == b.x and a.y == b.y) or (c.x == b.x and c.y == b.y):
        return 0
    radians = np.arctan2(c.y - b.y, c.x - b.x) - np.arctan2(a.y - b.y, a.x - b.x)
    angle = np.abs(radians * 180.0 / np.pi)
    if angle > 180.0:
        angle = 360 - angle
    # Round half up
    return int(np.floor(angle + 0.5))


def midpoint(a, b) -> Point:
    """Arithmetic mean of two points."""
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def distance(a, b) -> float:
    """Euclidean distance between two points."""
    return float(np.hypot(a.x - b.x, a.y - b.y))


def segment_angle(p, q) -> float:
    """Direction of the segment p->q in degrees, in (-180, 180]."""
    return float(np.degrees(np.arctan2(q.y - p.y, q.x - p.x)))


def alignment_deviation(p1, p2, p3) -> float:
    """
    Bend of the chain p1->p2->p3 in degrees.

    Compares the direction of p1->p2 with the direction of p2->p3 and
    returns the absolute difference within [0, 180]; a straight chain
    gives 0. Zero-length segments have direction 0.
    """
    diff = abs(segment_angle(p2, p3) - segment_angle(p1, p2)) % 360.0
    if diff > 180.0:
        diff = 360.0 - diff
    return diff
