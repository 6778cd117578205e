"""
Line filtering, pairwise line intersection and point aggregation for the
naive vanishing point estimator.

Line segments are handled as rows of an N x 4 array in the same layout that
`cv2.HoughLinesP` produces: (x1, y1, x2, y2).
"""
import logging

from enum import Enum, auto
from itertools import combinations

import numpy as np

logger = logging.getLogger(__name__)

# Determinant threshold below which two lines are treated as parallel
PARALLEL_TOL = 1e-10


class Estimator(Enum):
    MEAN = auto()
    MEDIAN = auto()


def as_lines(lines):
    """
    Coerce line segments into an N x 4 float array

    Args:
        lines: Anything array-like holding (x1, y1, x2, y2) rows, including
        the N x 1 x 4 output of `cv2.HoughLinesP` or None

    Returns:
        An N x 4 numpy array of floats (N may be 0)
    """
    if lines is None:
        return np.zeros((0, 4), dtype=float)
    lines = np.asarray(lines, dtype=float)
    if lines.size == 0:
        return np.zeros((0, 4), dtype=float)
    return lines.reshape(-1, 4)


def line_angles(lines):
    """
    Orientation of each segment in degrees, in the range (-180, 180]
    """
    lines = as_lines(lines)
    dx = lines[:, 2] - lines[:, 0]
    dy = lines[:, 3] - lines[:, 1]
    return np.degrees(np.arctan2(dy, dx))


def filter_lines(lines, min_angle=20.0, max_angle=160.0):
    """
    Removes the segments that are close to horizontal

    A segment is kept when the magnitude of its angle with the horizontal
    axis lies strictly between `min_angle` and `max_angle`. Near vertical
    segments survive.

    Args:
        lines: N x 4 array of segments
        min_angle: Lower bound on |angle| in degrees (exclusive)
        max_angle: Upper bound on |angle| in degrees (exclusive)

    Returns:
        The surviving segments as an M x 4 array, in input order
    """
    lines = as_lines(lines)
    ang = np.abs(line_angles(lines))
    mask = np.logical_and(ang > min_angle, ang < max_angle)
    return lines[mask]


def _implicit_form(lines):
    # A * x + B * y = C for the infinite line through both endpoints
    A = lines[:, 3] - lines[:, 1]
    B = lines[:, 0] - lines[:, 2]
    C = A * lines[:, 0] + B * lines[:, 1]
    return A, B, C


def intersect_lines(lines_a, lines_b):
    """
    Intersects row i of `lines_a` with row i of `lines_b`

    Both inputs are treated as infinite lines. Intersections are solved
    with Cramer's rule.

    Args:
        lines_a: N x 4 array of segments
        lines_b: N x 4 array of segments

    Returns:
        A tuple (points, mask). points is N x 2; mask is False for every
        pair whose determinant is below `PARALLEL_TOL`, and the matching
        rows of points are NaN
    """
    lines_a = as_lines(lines_a)
    lines_b = as_lines(lines_b)
    A1, B1, C1 = _implicit_form(lines_a)
    A2, B2, C2 = _implicit_form(lines_b)

    det = A1 * B2 - A2 * B1
    mask = np.abs(det) >= PARALLEL_TOL

    points = np.full((lines_a.shape[0], 2), np.nan)
    d = det[mask]
    points[mask, 0] = (B2[mask] * C1[mask] - B1[mask] * C2[mask]) / d
    points[mask, 1] = (A1[mask] * C2[mask] - A2[mask] * C1[mask]) / d
    return points, mask


def compute_intersection(a, b):
    """
    Intersection of the two infinite lines through segments a and b

    Args:
        a: First segment (x1, y1, x2, y2)
        b: Second segment (x1, y1, x2, y2)

    Returns:
        A numpy array (x, y), or None when the lines are parallel or nearly
        so. The point may lie outside both segments.
    """
    points, mask = intersect_lines(a, b)
    if not mask[0]:
        return None
    return points[0]


def intersect_pairs(lines):
    """
    Intersects every unordered pair (i < j) of lines

    Returns:
        A tuple (points, mask) as in `intersect_lines`, one row per pair in
        the order given by `itertools.combinations`
    """
    lines = as_lines(lines)
    if lines.shape[0] < 2:
        return np.zeros((0, 2), dtype=float), np.zeros(0, dtype=bool)

    combos = np.asarray(list(combinations(range(lines.shape[0]), 2)),
                        dtype=int)
    return intersect_lines(lines[combos[:, 0]], lines[combos[:, 1]])


def collect_intersections(lines, width, height):
    """
    Gathers the pairwise intersections that fall inside the search region

    The search region is [0, 2 * width) x [0, 2 * height), which leaves room
    for vanishing points lying off the canvas to the right or below.

    Args:
        lines: M x 4 array of filtered segments
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        A K x 2 array of retained intersection points
    """
    points, mask = intersect_pairs(lines)
    if points.shape[0] == 0:
        return points

    points = points[mask]
    x = points[:, 0]
    y = points[:, 1]
    inside = (x >= 0) & (y >= 0) & (x < 2 * width) & (y < 2 * height)
    logger.debug('%d of %d pairwise intersections retained',
                 int(np.count_nonzero(inside)), mask.shape[0])
    return points[inside]


def estimate_vp(points, estimator=Estimator.MEAN):
    """
    Reduces the retained intersections to a single point

    Args:
        points: K x 2 array of intersection points
        estimator: `Estimator.MEAN` (arithmetic mean, the default) or
        `Estimator.MEDIAN` (component-wise median)

    Returns:
        A numpy array (x, y), or None when there are no points
    """
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    if points.shape[0] == 0:
        return None

    if estimator == Estimator.MEAN:
        return points.mean(axis=0)
    elif estimator == Estimator.MEDIAN:
        return np.median(points, axis=0)

    raise ValueError('Unknown estimator: {}'.format(estimator))
