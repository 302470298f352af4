# SPDX-FileCopyrightText: 2026 Giovanni MARIANO
#
# SPDX-License-Identifier: MPL-2.0

"""
Surface array creation for cylindrical, disc and planar layers.

Each build follows the same steps:

1. Build the binning scheme for the layer shape.
2. Compute a representative global point for every bin.
3. Sort every surface into the bin of its anchor position. Surfaces landing
   in an occupied bin overwrite the previous occupant.
4. Complete the grid with the closest surface (see :mod:`.completion`).
5. Register the detector element neighbourhood (see :mod:`.neighbours`).

Example:
    import surfacearray as sa

    creator = sa.SurfaceArrayCreator()
    barrel = creator.surface_array_on_cylinder(
        modules, radius=100., min_phi=-math.pi, max_phi=math.pi,
        half_z=400., bins_phi=16, bins_z=8)
    barrel.object_at_position((0., 100., 12.))
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Tuple
import logging

import numpy as np

from .array import SurfaceArray
from .binning import BinningData, BinningOption, BinningValue, BinUtility
from .completion import anchor_positions, complete_binning
from .config import CreatorConfig
from .geometry import Transform3D, cylindrical_to_cartesian
from .grid import SurfaceGrid
from .log import TRACE
from .neighbours import register_neighbourhood
from .surfaces import Surface

logger = logging.getLogger(__name__)


class SurfaceArrayCreator:
    """Builds :class:`~surfacearray.array.SurfaceArray` objects for detector layers.

    Surfaces and their detector elements must outlive the arrays built from
    them. Builds are synchronous and all-or-nothing: inputs are validated
    before any detector element is touched.
    """

    def __init__(self, config: Optional[CreatorConfig] = None):
        """
        Args:
            config: Creator options (defaults to ``CreatorConfig()``).
        """
        self.config = config if config is not None else CreatorConfig()

    # =====================================================================
    # Public builds
    # =====================================================================

    def surface_array_on_cylinder(self, surfaces: Iterable[Surface],
                                  radius: float,
                                  min_phi: float, max_phi: float,
                                  half_z: float,
                                  bins_phi: int, bins_z: int,
                                  transform: Optional[Transform3D] = None) -> SurfaceArray:
        """Surface array on a cylinder, phi (closed) x z (open).

        Args:
            surfaces: Surfaces of the layer (non-empty).
            radius: Cylinder radius used for the bin centers.
            min_phi, max_phi: Azimuthal range.
            half_z: Half length of the layer along z.
            bins_phi, bins_z: Number of bins per axis.
            transform: Optional local-to-global transform of the layer.

        Returns:
            The populated SurfaceArray, axis 0 = phi, axis 1 = z.
        """
        logger.debug("Creating a SurfaceArray on a cylinder with grid in phi x z = %d x %d",
                     bins_phi, bins_z)
        surfaces = self._check_surfaces(surfaces)
        if radius <= 0:
            raise ValueError(f"Cylinder radius must be positive, got {radius}")
        if half_z <= 0:
            raise ValueError(f"Cylinder half length must be positive, got {half_z}")

        bin_utility = BinUtility.equidistant(bins_phi, min_phi, max_phi,
                                             BinningOption.CLOSED, BinningValue.PHI,
                                             transform)
        bin_utility += BinUtility.equidistant(bins_z, -half_z, half_z,
                                              BinningOption.OPEN, BinningValue.Z)
        phi_data, z_data = bin_utility.binning_data

        centers = np.zeros(bin_utility.shape + (3,))
        for iz in range(bins_z):
            z = z_data.center_value(iz)
            for iphi in range(bins_phi):
                centers[0, iz, iphi] = cylindrical_to_cartesian(
                    radius, phi_data.center_value(iphi), z)

        grid, _ = self._prefill(surfaces, bin_utility)
        return self._finish(grid, bin_utility, self._to_global(centers, transform), surfaces)

    def surface_array_on_disc(self, surfaces: Iterable[Surface],
                              min_r: float, max_r: float,
                              min_phi: float, max_phi: float,
                              bins_r: int, bins_phi: int,
                              transform: Optional[Transform3D] = None) -> SurfaceArray:
        """Surface array on a disc, r (open, or a single bin) x phi (closed).

        The z of every bin center is the mean anchor z of the surfaces.

        Args:
            surfaces: Surfaces of the layer (non-empty).
            min_r, max_r: Radial range.
            min_phi, max_phi: Azimuthal range.
            bins_r, bins_phi: Number of bins per axis.
            transform: Optional local-to-global transform of the layer.

        Returns:
            The populated SurfaceArray, axis 0 = r, axis 1 = phi.
        """
        logger.debug("Creating a SurfaceArray on a disc with grid in r x phi = %d x %d",
                     bins_r, bins_phi)
        surfaces = self._check_surfaces(surfaces)
        if min_r < 0:
            raise ValueError(f"Disc inner radius must not be negative, got {min_r}")

        if bins_r == 1:
            # only phi binning necessary, r is a pass-through axis
            bin_utility = BinUtility(BinningData.single(BinningValue.R, min_r, max_r),
                                     transform)
        else:
            bin_utility = BinUtility.equidistant(bins_r, min_r, max_r,
                                                 BinningOption.OPEN, BinningValue.R,
                                                 transform)
        bin_utility += BinUtility.equidistant(bins_phi, min_phi, max_phi,
                                              BinningOption.CLOSED, BinningValue.PHI)
        r_data, phi_data = bin_utility.binning_data

        grid, anchors = self._prefill(surfaces, bin_utility)
        if transform is not None:
            anchors = transform.inverse().apply_many(anchors)
        z = float(np.mean(anchors[:, 2]))
        logger.debug("- z-position of disk estimated as %g", z)

        centers = np.zeros(bin_utility.shape + (3,))
        for iphi in range(bins_phi):
            phi = phi_data.center_value(iphi)
            for ir in range(bins_r):
                centers[0, iphi, ir] = cylindrical_to_cartesian(
                    r_data.center_value(ir), phi, z)

        return self._finish(grid, bin_utility, self._to_global(centers, transform), surfaces)

    def surface_array_on_plane(self, surfaces: Iterable[Surface],
                               half_x: float, half_y: float,
                               bins_x: int, bins_y: int,
                               transform: Optional[Transform3D] = None) -> SurfaceArray:
        """Surface array on a plane, x (open) x y (open) in the local frame.

        Args:
            surfaces: Surfaces of the layer (non-empty).
            half_x, half_y: Half lengths of the plane.
            bins_x, bins_y: Number of bins per axis.
            transform: Optional local-to-global transform of the plane.

        Returns:
            The populated SurfaceArray, axis 0 = x, axis 1 = y.
        """
        logger.debug("Creating a SurfaceArray on a plane with grid in x x y = %d x %d",
                     bins_x, bins_y)
        surfaces = self._check_surfaces(surfaces)
        if half_x <= 0 or half_y <= 0:
            raise ValueError(f"Plane half lengths must be positive, got ({half_x}, {half_y})")

        bin_utility = BinUtility.equidistant(bins_x, -half_x, half_x,
                                             BinningOption.OPEN, BinningValue.X,
                                             transform)
        bin_utility += BinUtility.equidistant(bins_y, -half_y, half_y,
                                              BinningOption.OPEN, BinningValue.Y)
        x_data, y_data = bin_utility.binning_data

        centers = np.zeros(bin_utility.shape + (3,))
        for iy in range(bins_y):
            for ix in range(bins_x):
                centers[0, iy, ix] = (x_data.center_value(ix), y_data.center_value(iy), 0.0)

        grid, _ = self._prefill(surfaces, bin_utility)
        return self._finish(grid, bin_utility, self._to_global(centers, transform), surfaces)

    # =====================================================================
    # Pipeline steps
    # =====================================================================

    def complete_binning(self, bin_utility: BinUtility, bin_centers: np.ndarray,
                         surfaces: List[Surface], grid: SurfaceGrid) -> int:
        """Fill bins with the closest surface. See :func:`.completion.complete_binning`."""
        return complete_binning(bin_utility, bin_centers, surfaces, grid,
                                check=self.config.completion_check,
                                anchor=self.config.anchor)

    def register_neighbourhood(self, surface_array: SurfaceArray) -> int:
        """Register element neighbours. See :func:`.neighbours.register_neighbourhood`."""
        return register_neighbourhood(surface_array)

    def _check_surfaces(self, surfaces: Iterable[Surface]) -> List[Surface]:
        surfaces = list(surfaces)
        if not surfaces:
            raise ValueError("Cannot create a surface array without surfaces")
        for surface in surfaces:
            if not isinstance(surface, Surface):
                raise TypeError(f"Expected Surface, got {type(surface).__name__}")
        return surfaces

    def _prefill(self, surfaces: List[Surface],
                 bin_utility: BinUtility) -> Tuple[SurfaceGrid, np.ndarray]:
        """Sort surfaces into their bins; returns the grid and the anchor positions."""
        grid = SurfaceGrid.from_shape(bin_utility.shape)
        anchors = anchor_positions(surfaces, self.config.anchor)
        for handle, position in enumerate(anchors):
            bin_triple = bin_utility.bin_triple(position)
            previous = grid[bin_triple]
            if previous is not None:
                logger.log(TRACE, "- %r replaces %r in bin %s",
                           surfaces[handle], surfaces[previous], bin_triple)
            grid[bin_triple] = handle
        return grid, anchors

    @staticmethod
    def _to_global(centers: np.ndarray, transform: Optional[Transform3D]) -> np.ndarray:
        if transform is None:
            return centers
        return transform.apply_many(centers)

    def _finish(self, grid: SurfaceGrid, bin_utility: BinUtility,
                centers: np.ndarray, surfaces: List[Surface]) -> SurfaceArray:
        if self.config.complete:
            self.complete_binning(bin_utility, centers, surfaces, grid)
        surface_array = SurfaceArray(grid, bin_utility, surfaces)
        if self.config.register_neighbours:
            self.register_neighbourhood(surface_array)
        return surface_array
