# SPDX-FileCopyrightText: 2026 Giovanni MARIANO
#
# SPDX-License-Identifier: MPL-2.0

"""Fill empty grid bins with the closest surface.

:class:`~surfacearray.creator.SurfaceArrayCreator` forwards its
``complete_binning`` method to this module.
"""

from __future__ import annotations
from typing import Sequence
import logging

import numpy as np

from .binning import BinningValue, BinUtility
from .grid import SurfaceGrid
from .log import TRACE
from .surfaces import Surface

logger = logging.getLogger(__name__)

COMPLETION_CHECKS = ('count', 'filled')


def anchor_positions(surfaces: Sequence[Surface],
                     anchor: BinningValue = BinningValue.R) -> np.ndarray:
    """Binning positions of all surfaces as an ``(n, 3)`` array."""
    return np.array([s.binning_position(anchor) for s in surfaces],
                    dtype=float).reshape(len(surfaces), 3)


def complete_binning(bin_utility: BinUtility,
                     bin_centers: np.ndarray,
                     surfaces: Sequence[Surface],
                     grid: SurfaceGrid,
                     check: str = 'count',
                     anchor: BinningValue = BinningValue.R) -> int:
    """Assign every bin the surface closest to the bin center.

    The pass is skipped when the grid looks complete. With ``check='count'``
    that means the number of bins equals the number of surfaces, which
    assumes the surfaces landed one per bin without verifying it. With
    ``check='filled'`` it means no bin is empty.

    Otherwise *every* bin is reassigned, filled ones included, so a
    surface sorted into a bin by its anchor can lose that bin to a surface
    whose anchor is closer to the bin center. Ties go to the surface that
    comes first in ``surfaces``.

    Args:
        bin_utility: Binning scheme of the grid.
        bin_centers: Representative global point per bin, shape
            ``grid.shape + (3,)`` (or any shape with the same size).
        surfaces: Candidate surfaces; grid handles index into this sequence.
        grid: Grid to complete in place.
        check: 'count' or 'filled', see above.
        anchor: Binning value used for the surface anchor positions.

    Returns:
        Number of bins visited (0 when the pass was skipped).
    """
    if check not in COMPLETION_CHECKS:
        raise ValueError(f"check must be one of {COMPLETION_CHECKS}, got {check!r}")
    if not surfaces:
        raise ValueError("Cannot complete a binning without surfaces")
    if grid.shape != bin_utility.shape:
        raise ValueError(
            f"Grid shape {grid.shape} does not match binning {bin_utility.shape}"
        )

    logger.debug("Complete binning by filling closest neighbour surfaces into empty bins.")
    n_surfaces = len(surfaces)
    n_bins = grid.size

    if check == 'count':
        done = n_bins == n_surfaces
    else:
        done = grid.empty_count() == 0
    if done:
        logger.log(TRACE, " - Nothing to do, no empty bins present.")
        return 0

    logger.log(TRACE, "- Object count : %d number of surfaces", n_surfaces)
    logger.log(TRACE, "- Surface grid : %d number of bins", n_bins)
    logger.log(TRACE, "       to fill : %d", grid.empty_count())

    centers = np.asarray(bin_centers, dtype=float).reshape(-1, 3)
    if centers.shape[0] != n_bins:
        raise ValueError(f"Expected {n_bins} bin centers, got {centers.shape[0]}")
    anchors = anchor_positions(surfaces, anchor)

    # Brute force: (bins, surfaces) distance table, argmin keeps the first minimum
    distances = np.linalg.norm(centers[:, np.newaxis, :] - anchors[np.newaxis, :, :], axis=2)
    nearest = np.argmin(distances, axis=1)
    grid.fill(nearest.reshape(grid.shape))

    logger.debug("       filled  : %d", n_bins)
    return n_bins
