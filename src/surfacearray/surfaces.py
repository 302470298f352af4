# SPDX-FileCopyrightText: 2026 Giovanni MARIANO
#
# SPDX-License-Identifier: MPL-2.0

"""
Sensor surface definitions.

A surface is placed in space by a local-to-global transform and exposes a
*binning position*: the representative point used to sort it into a bin of a
surface array. Surfaces backed by a readout module carry a link to their
:class:`~surfacearray.detector.DetectorElement`; bare surfaces (passive
material, boundaries) carry none.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional, TYPE_CHECKING
import math

import numpy as np

from .binning import BinningValue
from .geometry import Transform3D, cylindrical_to_cartesian

if TYPE_CHECKING:
    from .detector import DetectorElement


class Surface(ABC):
    """Abstract base class for sensor surfaces.

    Attributes:
        id: Surface ID (auto-assigned unless given).
        name: Optional human-readable name.
        transform: Local-to-global placement (identity if None).
    """

    _next_id = 1  # Auto-increment ID counter

    def __init__(self, transform: Optional[Transform3D] = None,
                 detector_element: Optional['DetectorElement'] = None,
                 name: Optional[str] = None,
                 surface_id: Optional[int] = None):
        """
        Args:
            transform: Local-to-global placement of the surface.
            detector_element: Readout element behind the surface, if any.
            name: Optional name for the surface.
            surface_id: Optional explicit surface ID.
        """
        self.transform = transform if transform is not None else Transform3D()
        self.name = name
        self._element = None

        if surface_id is not None:
            self.id = surface_id
        else:
            self.id = Surface._next_id
            Surface._next_id += 1

        if detector_element is not None:
            self.attach(detector_element)

    @property
    def center(self) -> np.ndarray:
        """Global position of the local origin."""
        return self.transform.translation

    @property
    def detector_element(self) -> Optional['DetectorElement']:
        """Linked detector element, None for a bare surface."""
        return self._element

    @property
    def is_bare(self) -> bool:
        return self._element is None

    def attach(self, element: 'DetectorElement') -> None:
        """Link this surface to a detector element (both directions)."""
        if self._element is not None and self._element is not element:
            raise ValueError(f"{self!r} is already linked to {self._element!r}")
        self._element = element
        element.surface = self

    @abstractmethod
    def binning_position(self, value: BinningValue) -> np.ndarray:
        """Representative global point used to classify the surface."""
        pass

    def __repr__(self) -> str:
        if self.name:
            return f"{self.__class__.__name__}({self.id}, name='{self.name}')"
        return f"{self.__class__.__name__}({self.id})"


class PlaneSurface(Surface):
    """Rectangular planar module, local x/y span [-half_x, half_x] x [-half_y, half_y]."""

    def __init__(self, half_x: float, half_y: float,
                 transform: Optional[Transform3D] = None, **kwargs):
        """
        Args:
            half_x, half_y: Half lengths of the rectangle.
            transform: Placement of the module center.
        """
        super().__init__(transform=transform, **kwargs)
        if half_x <= 0 or half_y <= 0:
            raise ValueError("Plane half lengths must be positive")
        self.half_x = half_x
        self.half_y = half_y

    def binning_position(self, value: BinningValue) -> np.ndarray:
        return self.center


class DiscSurface(Surface):
    """Annulus sector in the local x/y plane.

    The sector spans ``avg_phi +- half_phi``.
    """

    def __init__(self, r_min: float, r_max: float,
                 avg_phi: float = 0.0, half_phi: float = math.pi,
                 transform: Optional[Transform3D] = None, **kwargs):
        """
        Args:
            r_min, r_max: Inner and outer radius.
            avg_phi: Central azimuth of the sector.
            half_phi: Half opening angle of the sector.
        """
        super().__init__(transform=transform, **kwargs)
        if r_min < 0 or r_max <= r_min:
            raise ValueError("Disc radii must satisfy 0 <= r_min < r_max")
        self.r_min = r_min
        self.r_max = r_max
        self.avg_phi = avg_phi
        self.half_phi = half_phi

    def binning_position(self, value: BinningValue) -> np.ndarray:
        if value in (BinningValue.R, BinningValue.PHI, BinningValue.RPHI):
            r_mid = 0.5 * (self.r_min + self.r_max)
            return self.transform.apply(
                cylindrical_to_cartesian(r_mid, self.avg_phi, 0.0))
        return self.center


class CylinderSurface(Surface):
    """Cylinder segment around the local z axis."""

    def __init__(self, radius: float, half_z: float,
                 avg_phi: float = 0.0, half_phi: float = math.pi,
                 transform: Optional[Transform3D] = None, **kwargs):
        """
        Args:
            radius: Cylinder radius.
            half_z: Half length along local z.
            avg_phi: Central azimuth of the segment.
            half_phi: Half opening angle of the segment.
        """
        super().__init__(transform=transform, **kwargs)
        if radius <= 0:
            raise ValueError("Cylinder radius must be positive")
        if half_z <= 0:
            raise ValueError("Cylinder half length must be positive")
        self.radius = radius
        self.half_z = half_z
        self.avg_phi = avg_phi
        self.half_phi = half_phi

    def binning_position(self, value: BinningValue) -> np.ndarray:
        if value in (BinningValue.R, BinningValue.PHI, BinningValue.RPHI):
            return self.transform.apply(
                cylindrical_to_cartesian(self.radius, self.avg_phi, 0.0))
        return self.center
