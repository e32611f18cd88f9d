import numpy as np
import pytest

from csgkit.core.geometry import (
    Classification, area_of_triangle, area_of_triangle_squared, as_point,
    classify_point_with_plane, distance_to_plane_signed, is_point_in_triangle,
    normal_from_points, plane_from_points, split_line_segment_with_plane,
)

Z_UP = np.array([0.0, 0.0, 1.0])


def test_as_point_copies_and_validates():
    src = [1, 2, 3]
    p = as_point(src)
    assert p.dtype == np.float64
    assert p.tolist() == [1.0, 2.0, 3.0]
    arr = np.array([1.0, 2.0, 3.0])
    q = as_point(arr)
    q[0] = 9.0
    assert arr[0] == 1.0
    with pytest.raises(ValueError):
        as_point([1.0, 2.0])
    with pytest.raises(ValueError):
        as_point([1.0, np.nan, 0.0])


def test_normal_is_not_normalized():
    a, b, c = (0, 0, 0), (2, 0, 0), (0, 2, 0)
    n = normal_from_points(a, b, c)
    assert n.tolist() == [0.0, 0.0, 4.0]
    # length encodes twice the area
    assert np.linalg.norm(n) == pytest.approx(2.0 * area_of_triangle(a, b, c))
    assert area_of_triangle_squared(a, b, c) == pytest.approx(4.0)


def test_plane_from_points_offset():
    n, w = plane_from_points((0, 0, 3), (1, 0, 3), (0, 1, 3))
    assert n.tolist() == [0.0, 0.0, 1.0]
    assert w == pytest.approx(3.0)
    assert distance_to_plane_signed((5, 5, 4), (0, 0, 3), n) == pytest.approx(1.0)


def test_classify_point_with_plane():
    assert classify_point_with_plane((0, 0, 1), Z_UP, 0.0) is Classification.FRONT
    assert classify_point_with_plane((0, 0, -1), Z_UP, 0.0) is Classification.BACK
    assert classify_point_with_plane((3, 4, 1e-7), Z_UP, 0.0) is Classification.COPLANAR
    # the tolerance is an explicit argument
    assert classify_point_with_plane((0, 0, 1e-3), Z_UP, 0.0) is Classification.FRONT
    assert classify_point_with_plane((0, 0, 1e-3), Z_UP, 0.0, eps=1e-2) is Classification.COPLANAR


def test_classification_flipped():
    assert Classification.FRONT.flipped() is Classification.BACK
    assert Classification.BACK.flipped() is Classification.FRONT
    assert Classification.SPANNING.flipped() is Classification.SPANNING
    assert Classification.UNDEFINED.flipped() is Classification.UNDEFINED


def test_split_line_segment_with_plane_crossing():
    p = split_line_segment_with_plane((0, 0, -1), (0, 0, 3), Z_UP, 0.0)
    assert p is not None
    assert np.allclose(p, [0.0, 0.0, 0.0])


def test_split_line_segment_with_plane_same_side():
    assert split_line_segment_with_plane((0, 0, 1), (1, 0, 2), Z_UP, 0.0) is None
    assert split_line_segment_with_plane((0, 0, 0), (1, 0, 0), Z_UP, 0.0) is None


def test_split_line_segment_with_plane_endpoint_on_plane():
    p = split_line_segment_with_plane((2, 3, 0), (0, 0, 1), Z_UP, 0.0)
    assert p.tolist() == [2.0, 3.0, 0.0]
    q = split_line_segment_with_plane((0, 0, -1), (4, 4, 0), Z_UP, 0.0)
    assert q.tolist() == [4.0, 4.0, 0.0]


def test_is_point_in_triangle():
    a, b, c = (0, 0, 0), (1, 0, 0), (0, 1, 0)
    assert is_point_in_triangle((0.2, 0.2, 0), a, b, c)
    assert not is_point_in_triangle((0.8, 0.8, 0), a, b, c)
    # boundary counts as inside
    assert is_point_in_triangle((0.5, 0.0, 0), a, b, c)
    # slightly outside, accepted only with a widened edge
    outside = (0.5, -1e-7, 0)
    assert not is_point_in_triangle(outside, a, b, c)
    assert is_point_in_triangle(outside, a, b, c, eps=1e-6)
    # orientation taken from the supplied normal
    assert is_point_in_triangle((0.2, 0.2, 0), a, c, b, normal=(0, 0, -1))


def test_is_point_in_degenerate_triangle():
    assert not is_point_in_triangle((0.5, 0, 0), (0, 0, 0), (1, 0, 0), (2, 0, 0))
