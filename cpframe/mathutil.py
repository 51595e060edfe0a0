"""Vector and matrix helpers on float32 numpy arrays.

Matrices use the usual mathematical layout (``m[row, col]``) and act on column
vectors; projections are right-handed with a depth range of -1 to 1.
"""

from __future__ import annotations

import math

import numpy as np

_DTYPE = np.float32


def _arr(value) -> np.ndarray:
    return np.asarray(value, dtype=_DTYPE)


def normalize(v) -> np.ndarray:
    """``v`` scaled to unit length (NaN for a zero vector)."""
    vec = _arr(v)
    with np.errstate(divide="ignore", invalid="ignore"):
        return (vec / np.sqrt(np.dot(vec, vec))).astype(_DTYPE)


def length(v) -> float:
    vec = _arr(v)
    return float(np.sqrt(np.dot(vec, vec)))


def dot(a, b) -> float:
    return float(np.dot(_arr(a), _arr(b)))


def cross(a, b) -> np.ndarray:
    return np.cross(_arr(a), _arr(b)).astype(_DTYPE)


def translate(m, v) -> np.ndarray:
    """``m`` followed by a translation by ``v``."""
    t = np.eye(4, dtype=_DTYPE)
    t[:3, 3] = _arr(v)
    return _arr(m) @ t


def rotate(m, angle, axis) -> np.ndarray:
    """``m`` followed by a rotation of ``angle`` radians about ``axis``."""
    k = normalize(axis).astype(np.float64)
    c = math.cos(angle)
    s = math.sin(angle)
    skew = np.array([[0.0, -k[2], k[1]],
                     [k[2], 0.0, -k[0]],
                     [-k[1], k[0], 0.0]])
    r = np.eye(4, dtype=_DTYPE)
    r[:3, :3] = c * np.eye(3) + s * skew + (1.0 - c) * np.outer(k, k)
    return _arr(m) @ r


def scale(m, s) -> np.ndarray:
    """``m`` followed by a scale by ``s`` along each axis."""
    factors = _arr(s)
    d = np.diag(np.array([factors[0], factors[1], factors[2], 1.0], dtype=_DTYPE))
    return _arr(m) @ d


def ortho(left, right, bottom, top, near, far) -> np.ndarray:
    """Orthographic projection."""
    m = np.eye(4, dtype=_DTYPE)
    m[0, 0] = 2.0 / (right - left)
    m[1, 1] = 2.0 / (top - bottom)
    m[2, 2] = -2.0 / (far - near)
    m[0, 3] = -(right + left) / (right - left)
    m[1, 3] = -(top + bottom) / (top - bottom)
    m[2, 3] = -(far + near) / (far - near)
    return m


def perspective(fov, aspect, near, far) -> np.ndarray:
    """Perspective projection with vertical field of view ``fov`` in radians."""
    tan_half = math.tan(fov / 2.0)
    m = np.zeros((4, 4), dtype=_DTYPE)
    m[0, 0] = 1.0 / (aspect * tan_half)
    m[1, 1] = 1.0 / tan_half
    m[2, 2] = -(far + near) / (far - near)
    m[3, 2] = -1.0
    m[2, 3] = -(2.0 * far * near) / (far - near)
    return m


def look_at(eye, center, up) -> np.ndarray:
    """View matrix placing the camera at ``eye`` looking at ``center``."""
    eye_v = _arr(eye)
    f = normalize(_arr(center) - eye_v)
    s = normalize(cross(f, up))
    u = cross(s, f)
    m = np.eye(4, dtype=_DTYPE)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -dot(s, eye_v)
    m[1, 3] = -dot(u, eye_v)
    m[2, 3] = dot(f, eye_v)
    return m


def to_radians(degrees) -> float:
    return math.radians(degrees)


def to_degrees(radians) -> float:
    return math.degrees(radians)


def inverse(m) -> np.ndarray:
    """Inverse of a square matrix; raises numpy.linalg.LinAlgError if singular."""
    return np.linalg.inv(_arr(m)).astype(_DTYPE)


def transpose(m) -> np.ndarray:
    return _arr(m).T.copy()


def reflect(i, n) -> np.ndarray:
    """Reflect incident vector ``i`` about the normal ``n``."""
    iv = _arr(i)
    nv = _arr(n)
    return (iv - 2.0 * np.dot(nv, iv) * nv).astype(_DTYPE)


def identity() -> np.ndarray:
    return np.eye(4, dtype=_DTYPE)


def identity3() -> np.ndarray:
    return np.eye(3, dtype=_DTYPE)


def distance(a, b) -> float:
    return length(_arr(a) - _arr(b))