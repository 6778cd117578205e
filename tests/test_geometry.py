import numpy as np
import pytest

from naive_vp_detect.geometry import (Estimator, collect_intersections,
                                      compute_intersection, estimate_vp,
                                      filter_lines, intersect_pairs,
                                      line_angles)


def _implicit(line):
    x1, y1, x2, y2 = [float(v) for v in line]
    A = y2 - y1
    B = x1 - x2
    return A, B, A * x1 + B * y1


def test_crossing_diagonals_meet_in_the_middle():
    a = (0, 0, 10, 10)
    b = (0, 10, 10, 0)
    assert filter_lines([a, b]).shape == (2, 4)

    pt = compute_intersection(a, b)
    assert pt is not None
    np.testing.assert_allclose(pt, [5.0, 5.0])


def test_horizontal_parallel_lines_are_filtered_and_do_not_intersect():
    a = (0, 0, 10, 0)
    b = (0, 5, 10, 5)
    assert filter_lines([a, b]).shape == (0, 4)
    assert compute_intersection(a, b) is None


@pytest.mark.parametrize('a, b', [
    ((1, 2, 4, 8), (10, 0, 13, 6)),
    ((0, 0, 5, 5), (1, 1, 3, 3)),
    ((3, 0, 3, 9), (7, 2, 7, 4)),
])
def test_same_direction_gives_no_intersection(a, b):
    assert compute_intersection(a, b) is None


def test_intersection_satisfies_both_line_equations():
    rng = np.random.RandomState(1337)
    checked = 0
    for _ in range(200):
        a, b = rng.randint(0, 500, size=(2, 4))
        pt = compute_intersection(a, b)
        if pt is None:
            continue
        for line in (a, b):
            A, B, C = _implicit(line)
            scale = abs(A * pt[0]) + abs(B * pt[1]) + abs(C) + 1.0
            assert abs(A * pt[0] + B * pt[1] - C) <= 1e-9 * scale
        checked += 1
    assert checked > 150


def test_intersection_is_not_bounded_by_segments():
    pt = compute_intersection((0, 0, 1, 1), (10, 0, 9, 1))
    np.testing.assert_allclose(pt, [5.0, 5.0])


def test_filter_keeps_order_and_near_vertical_lines():
    lines = np.array([
        [0, 0, 0, 10],  # 90 deg
        [0, 0, 10, 1],  # ~5.7 deg
        [0, 0, 10, 10],  # 45 deg
        [10, 0, 0, 0],  # 180 deg
        [10, 10, 0, 0],  # -135 deg
        [10, 1, 0, 0],  # ~-174 deg
    ])
    out = filter_lines(lines)
    np.testing.assert_array_equal(out, lines[[0, 2, 4]])


def test_filter_is_idempotent():
    rng = np.random.RandomState(7)
    lines = rng.randint(0, 300, size=(50, 4))
    once = filter_lines(lines)
    np.testing.assert_array_equal(filter_lines(once), once)


def test_filter_accepts_hough_layout_and_empty_input():
    hough = np.array([[[0, 0, 10, 10]], [[0, 0, 10, 0]]])
    np.testing.assert_array_equal(filter_lines(hough), [[0, 0, 10, 10]])
    assert filter_lines([]).shape == (0, 4)
    assert filter_lines(None).shape == (0, 4)


def test_filter_thresholds_are_exclusive():
    lines = np.array([[0, 0, 10, 0], [0, 0, 0, 10]])
    ang = np.abs(line_angles(lines))
    # Using the exact angles of the lines as bounds drops both
    assert filter_lines(lines, ang[0], ang[1]).shape == (0, 4)


def test_intersect_pairs_covers_each_unordered_pair_once():
    lines = np.array([
        [0, 0, 10, 10],
        [0, 10, 10, 0],
        [5, 0, 5, 10],
        [0, 0, 10, 10],
    ])
    points, mask = intersect_pairs(lines)
    assert points.shape == (6, 2)
    # (0, 3) are the same line
    np.testing.assert_array_equal(mask, [True, True, False, True, True, True])
    assert np.all(np.isnan(points[2]))


def test_intersect_pairs_with_fewer_than_two_lines():
    points, mask = intersect_pairs([[0, 0, 10, 10]])
    assert points.shape == (0, 2)
    assert mask.shape == (0,)


def test_collect_intersections_keeps_points_in_search_region():
    lines = np.array([
        [0, 0, 10, 10],  # y = x
        [0, -20, -20, 0],  # x + y = -20, meets y = x at (-10, -10)
        [400, 0, 0, 400],  # x + y = 400, meets y = x at (200, 200)
    ])
    pts = collect_intersections(lines, 100, 100)
    assert pts.shape == (0, 2)

    pts = collect_intersections(lines, 101, 101)
    np.testing.assert_allclose(pts, [[200.0, 200.0]])


def test_collected_points_respect_bounds():
    rng = np.random.RandomState(3)
    lines = filter_lines(rng.randint(-200, 600, size=(40, 4)))
    width, height = 320, 240
    pts = collect_intersections(lines, width, height)
    assert pts.shape[0] > 0
    assert np.all(pts[:, 0] >= 0) and np.all(pts[:, 0] < 2 * width)
    assert np.all(pts[:, 1] >= 0) and np.all(pts[:, 1] < 2 * height)


def test_estimate_is_the_mean_of_retained_points():
    pts = np.array([[1.0, 2.0], [3.0, 4.0], [8.0, 0.0]])
    np.testing.assert_allclose(estimate_vp(pts), [4.0, 2.0])
    np.testing.assert_allclose(estimate_vp(pts[::-1]), estimate_vp(pts))


def test_estimate_is_undefined_without_points():
    assert estimate_vp(np.zeros((0, 2))) is None
    assert estimate_vp([]) is None


def test_median_estimator():
    pts = np.array([[0.0, 0.0], [1.0, 1.0], [100.0, 50.0]])
    np.testing.assert_allclose(estimate_vp(pts, Estimator.MEDIAN), [1.0, 1.0])


def test_unknown_estimator_raises():
    with pytest.raises(ValueError):
        estimate_vp([[1.0, 1.0]], 'mode')


def test_three_nearly_concurrent_lines():
    lines = np.array([
        [0, 0, 200, 200],
        [200, 0, 0, 200],
        [101, 0, 101, 200],
    ])
    filtered = filter_lines(lines)
    assert filtered.shape == (3, 4)
    vp = estimate_vp(collect_intersections(filtered, 200, 200))
    assert np.linalg.norm(vp - np.array([100.0, 100.0])) < 1.0
