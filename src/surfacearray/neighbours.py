# SPDX-FileCopyrightText: 2026 Giovanni MARIANO
#
# SPDX-License-Identifier: MPL-2.0

"""Register neighbouring detector elements from a surface array."""

from __future__ import annotations
from typing import TYPE_CHECKING
import logging

from .log import TRACE

if TYPE_CHECKING:
    from .array import SurfaceArray

logger = logging.getLogger(__name__)


def register_neighbourhood(surface_array: 'SurfaceArray') -> int:
    """Set the neighbour handles of every detector element in the array.

    For each bin whose surface has a detector element, the elements of the
    surrounding bin cluster (other surfaces only, bare surfaces skipped)
    replace the element's neighbour set. A surface occupying several bins is
    registered once per bin, in grid order, and the last registration wins.

    Returns:
        Total number of neighbour links registered.
    """
    logger.debug("Register neighbours to the elements.")
    neighbours_set = 0
    for bin_triple in surface_array.object_grid.bins():
        surface = surface_array.object_at(bin_triple)
        if surface is None or surface.detector_element is None:
            continue
        element = surface.detector_element
        handles = set()
        for other in surface_array.object_cluster(bin_triple):
            if other is None or other is surface or other.detector_element is None:
                continue
            handles.add(other.detector_element.handle)
        # An element shared by two surfaces is not its own neighbour
        handles.discard(element.handle)
        element.register_neighbours(handles)
        neighbours_set += len(handles)
        logger.log(TRACE, "- bin %s: %r has %d neighbours", bin_triple, element, len(handles))
    logger.debug("Neighbours set for this layer: %d", neighbours_set)
    return neighbours_set
