import math
import numpy as np


def as_position(position):
    """
    Convert an (x, y) or (x, y, z) sequence into a float numpy array.

    Topology works in the plan (x, y); a third coordinate is carried along
    (e.g. elevation) and only contributes to lengths.
    """
    try:
        p = np.array(position, dtype=float)
    except (TypeError, ValueError) as e:
        raise ValueError(f"position must be a numeric sequence, got {position!r}") from e
    if p.ndim != 1 or p.shape[0] not in (2, 3):
        raise ValueError(f"position must have 2 or 3 coordinates, got {position!r}")
    if not np.all(np.isfinite(p)):
        raise ValueError(f"position has non-finite coordinates: {position!r}")
    return p


def bearing(p, q):
    """
    Compass bearing in degrees [0, 360) from p towards q: 0 is +y (north),
    90 is +x (east). Increasing bearing turns clockwise.
    """
    dx = q[0] - p[0]
    dy = q[1] - p[1]
    return math.degrees(math.atan2(dx, dy)) % 360.0


def absolute_bearing_difference(b1, b2):
    """Unsigned turn between two bearings, folded into [0, 180]."""
    delta = abs(b1 - b2) % 360.0
    if delta > 180.0:
        delta = 360.0 - delta
    return delta


def signed_area_term(p, q):
    """One shoelace term; summing it around a closed ring gives the signed area."""
    return (p[0] * q[1] - q[0] * p[1]) / 2.0


def signed_area(points):
    """
    Signed area of a closed ring (last point joins the first).
    Counter-clockwise rings are positive, clockwise rings negative.
    """
    n = len(points)
    return sum(signed_area_term(points[i], points[(i + 1) % n]) for i in range(n))


def distance(p, q):
    return float(np.linalg.norm(np.asarray(q, dtype=float) - np.asarray(p, dtype=float)))


def midpoint(points):
    """
    Mean of a list of positions.
    :param points: non-empty list of positions
    :return: numpy array
    """
    return np.mean(np.asarray(points, dtype=float), axis=0)
