# SPDX-FileCopyrightText: 2026 Giovanni MARIANO
#
# SPDX-License-Identifier: MPL-2.0

"""
Affine transforms and 3D vector helpers.

Points are plain ``numpy`` arrays of shape ``(3,)`` (anything accepted by
``np.asarray`` works as input). Transforms are 4x4 homogeneous matrices:

    t = Transform3D.from_translation(0, 0, 500) @ Transform3D.from_rotation_z(0.1)
    global_point = t.apply(local_point)
    local_point = t.inverse().apply(global_point)
"""

from __future__ import annotations
from typing import Iterable, Optional, Sequence, Union
import math

import numpy as np

Point = Union[Sequence[float], np.ndarray]


def as_point(point: Point) -> np.ndarray:
    """Convert a 3-sequence to a float array of shape (3,)."""
    arr = np.asarray(point, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3D point, got shape {arr.shape}")
    return arr


def mag(point: Point) -> float:
    """Length of the vector."""
    return float(np.linalg.norm(point))


def perp(point: Point) -> float:
    """Transverse distance from the z axis."""
    return math.hypot(point[0], point[1])


def phi(point: Point) -> float:
    """Azimuthal angle in (-pi, pi]."""
    return math.atan2(point[1], point[0])


def theta(point: Point) -> float:
    """Polar angle measured from +z, in [0, pi]."""
    return math.atan2(perp(point), point[2])


def eta(point: Point) -> float:
    """Pseudorapidity -ln(tan(theta/2))."""
    t = theta(point)
    if t <= 0.0:
        return math.inf
    if t >= math.pi:
        return -math.inf
    return -math.log(math.tan(0.5 * t))


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return float(np.linalg.norm(np.asarray(a, dtype=float) - np.asarray(b, dtype=float)))


def cylindrical_to_cartesian(r: float, angle: float, z: float) -> np.ndarray:
    """Point at radius r, azimuth angle and height z."""
    return np.array([r * math.cos(angle), r * math.sin(angle), z])


class Transform3D:
    """Rigid (or general affine) 3D transform stored as a 4x4 matrix.

    Transforms compose with ``@``: ``(a @ b).apply(p) == a.apply(b.apply(p))``.
    """

    __slots__ = ('_matrix',)

    def __init__(self, matrix: Optional[np.ndarray] = None):
        """
        Args:
            matrix: 4x4 homogeneous matrix (identity if None).
        """
        if matrix is None:
            self._matrix = np.eye(4)
        else:
            m = np.array(matrix, dtype=float)
            if m.shape != (4, 4):
                raise ValueError(f"Transform matrix must be 4x4, got {m.shape}")
            self._matrix = m

    @classmethod
    def identity(cls) -> 'Transform3D':
        return cls()

    @classmethod
    def from_translation(cls, x: float, y: float, z: float) -> 'Transform3D':
        m = np.eye(4)
        m[:3, 3] = (x, y, z)
        return cls(m)

    @classmethod
    def from_rotation_z(cls, angle: float) -> 'Transform3D':
        """Rotation by angle (radians) around the z axis."""
        c, s = math.cos(angle), math.sin(angle)
        m = np.eye(4)
        m[0, 0], m[0, 1] = c, -s
        m[1, 0], m[1, 1] = s, c
        return cls(m)

    @classmethod
    def from_rotation_translation(cls, rotation: Iterable[Iterable[float]],
                                  translation: Point) -> 'Transform3D':
        """Build from a 3x3 rotation matrix and a translation vector."""
        rot = np.asarray(rotation, dtype=float)
        if rot.shape != (3, 3):
            raise ValueError(f"Rotation must be 3x3, got {rot.shape}")
        m = np.eye(4)
        m[:3, :3] = rot
        m[:3, 3] = as_point(translation)
        return cls(m)

    @property
    def matrix(self) -> np.ndarray:
        """Copy of the 4x4 matrix."""
        return self._matrix.copy()

    @property
    def rotation(self) -> np.ndarray:
        return self._matrix[:3, :3].copy()

    @property
    def translation(self) -> np.ndarray:
        return self._matrix[:3, 3].copy()

    def inverse(self) -> 'Transform3D':
        return Transform3D(np.linalg.inv(self._matrix))

    def apply(self, point: Point) -> np.ndarray:
        """Transform a single point."""
        p = as_point(point)
        return self._matrix[:3, :3] @ p + self._matrix[:3, 3]

    def apply_many(self, points: np.ndarray) -> np.ndarray:
        """Transform an array of points with trailing dimension 3."""
        pts = np.asarray(points, dtype=float)
        return pts @ self._matrix[:3, :3].T + self._matrix[:3, 3]

    def __call__(self, point: Point) -> np.ndarray:
        return self.apply(point)

    def __matmul__(self, other: 'Transform3D') -> 'Transform3D':
        if not isinstance(other, Transform3D):
            return NotImplemented
        return Transform3D(self._matrix @ other._matrix)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transform3D):
            return NotImplemented
        return bool(np.allclose(self._matrix, other._matrix))

    __hash__ = None

    def __repr__(self) -> str:
        t = self._matrix[:3, 3]
        return f"Transform3D(translation=({t[0]:g}, {t[1]:g}, {t[2]:g}))"
