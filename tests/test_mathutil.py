import math

import numpy as np
import pytest

from cpframe import mathutil as mu


@pytest.mark.parametrize("v", [[3.0, 4.0], [1.0, -2.0, 2.0], [1.0, 2.0, 3.0, 4.0]])
def test_normalize_unit_length_same_direction(v):
    n = mu.normalize(v)
    assert mu.length(n) == pytest.approx(1.0, abs=1e-6)
    assert np.allclose(n * mu.length(v), v, atol=1e-5)


@pytest.mark.parametrize("v", [[3.0, 4.0], [1.0, -2.0, 2.0], [1.0, 2.0, 3.0, 4.0]])
def test_length_squared_is_dot(v):
    assert mu.length(v) ** 2 == pytest.approx(mu.dot(v, v), rel=1e-6)


def test_cross_orthogonal_and_anticommutative():
    a = [1.0, 2.0, 3.0]
    b = [-4.0, 0.5, 2.0]
    c = mu.cross(a, b)
    assert mu.dot(c, a) == pytest.approx(0.0, abs=1e-5)
    assert mu.dot(c, b) == pytest.approx(0.0, abs=1e-5)
    assert np.allclose(mu.cross(b, a), -c)


def test_translate_moves_point():
    v = [1.0, -2.0, 3.5]
    p = np.array([0.5, 0.5, 0.5, 1.0], dtype=np.float32)
    moved = mu.translate(mu.identity(), v) @ p
    assert np.allclose(moved[:3], p[:3] + np.array(v))
    assert moved[3] == pytest.approx(1.0)


def test_translate_composes_on_right():
    m = mu.scale(mu.identity(), [2.0, 3.0, 4.0])
    v = [1.0, 1.0, 1.0]
    assert np.allclose(mu.translate(m, v), m @ mu.translate(mu.identity(), v))


def test_scale_point():
    s = [2.0, 3.0, 4.0]
    p = np.array([1.0, -1.0, 0.5, 1.0], dtype=np.float32)
    scaled = mu.scale(mu.identity(), s) @ p
    assert np.allclose(scaled[:3], p[:3] * np.array(s))


def test_rotate_quarter_turn_matches_cross():
    axis = np.array([0.0, 0.0, 1.0])
    x = np.array([1.0, 0.0, 0.0])
    r = mu.rotate(mu.identity(), math.pi / 2, axis)
    result = r @ np.append(x, 1.0)
    assert np.allclose(result[:3], mu.cross(axis, x), atol=1e-6)


def test_rotate_preserves_length_and_normalizes_axis():
    p = np.array([1.0, 2.0, 3.0, 1.0])
    r1 = mu.rotate(mu.identity(), 0.7, [0.0, 5.0, 0.0])
    r2 = mu.rotate(mu.identity(), 0.7, [0.0, 1.0, 0.0])
    assert np.allclose(r1, r2)
    assert mu.length((r1 @ p)[:3]) == pytest.approx(mu.length(p[:3]), rel=1e-5)


def test_inverse_4x4_and_3x3():
    m = mu.rotate(mu.translate(mu.identity(), [1.0, 2.0, 3.0]), 0.3, [1.0, 1.0, 0.0])
    assert np.allclose(m @ mu.inverse(m), mu.identity(), atol=1e-5)
    m3 = np.array([[2.0, 0.0, 1.0], [1.0, 3.0, 0.0], [0.0, 1.0, 4.0]])
    assert np.allclose(m3 @ mu.inverse(m3), mu.identity3(), atol=1e-5)


def test_inverse_singular_raises():
    with pytest.raises(np.linalg.LinAlgError):
        mu.inverse(np.zeros((4, 4)))


def test_transpose_twice_is_original():
    m = mu.translate(mu.identity(), [1.0, 2.0, 3.0])
    t = mu.transpose(m)
    assert np.allclose(t[3, :3], m[:3, 3])
    assert np.allclose(mu.transpose(t), m)


def test_reflect_properties():
    n = mu.normalize([0.0, 1.0, 1.0])
    i = np.array([1.0, -2.0, 0.5])
    assert np.allclose(mu.reflect(mu.reflect(i, n), n), i, atol=1e-5)
    assert np.allclose(mu.reflect(n, n), -n, atol=1e-6)


def test_angle_conversions():
    assert mu.to_radians(180.0) == pytest.approx(math.pi)
    assert mu.to_degrees(mu.to_radians(37.5)) == pytest.approx(37.5)


def test_identities():
    assert np.array_equal(mu.identity(), np.eye(4))
    assert np.array_equal(mu.identity3(), np.eye(3))


def test_distance_symmetric_and_matches_length():
    a = [1.0, 2.0, 3.0]
    b = [-1.0, 0.0, 7.0]
    assert mu.distance(a, b) == pytest.approx(mu.distance(b, a))
    assert mu.distance(a, b) == pytest.approx(mu.length(np.subtract(a, b)), rel=1e-6)
    assert mu.distance([1.0, 1.0], [4.0, 5.0]) == pytest.approx(mu.length([3.0, 4.0]))


def test_ortho_maps_box_to_cube():
    left, right, bottom, top, near, far = -4.0, 2.0, -1.0, 3.0, 0.5, 10.0
    m = mu.ortho(left, right, bottom, top, near, far)
    low = m @ np.array([left, bottom, -near, 1.0])
    high = m @ np.array([right, top, -far, 1.0])
    assert np.allclose(low, [-1.0, -1.0, -1.0, 1.0], atol=1e-6)
    assert np.allclose(high, -low * np.array([1, 1, 1, -1]), atol=1e-6)


def test_perspective_depth_range():
    near, far = 0.1, 100.0
    m = mu.perspective(mu.to_radians(60.0), 16 / 9, near, far)
    near_clip = m @ np.array([0.0, 0.0, -near, 1.0])
    far_clip = m @ np.array([0.0, 0.0, -far, 1.0])
    assert near_clip[2] / near_clip[3] == pytest.approx(-1.0, abs=1e-4)
    assert far_clip[2] / far_clip[3] == pytest.approx(-(near_clip[2] / near_clip[3]), abs=1e-4)


def test_look_at_places_eye_at_origin_and_center_ahead():
    eye = np.array([3.0, 4.0, 5.0])
    center = np.array([0.0, 1.0, 0.0])
    m = mu.look_at(eye, center, [0.0, 1.0, 0.0])
    at_eye = m @ np.append(eye, 1.0)
    assert np.allclose(at_eye[:3], np.zeros(3), atol=1e-5)
    at_center = m @ np.append(center, 1.0)
    assert np.allclose(at_center[:2], np.zeros(2), atol=1e-5)
    assert at_center[2] == pytest.approx(-mu.distance(eye, center), rel=1e-5)