# SPDX-FileCopyrightText: 2026 Giovanni MARIANO
#
# SPDX-License-Identifier: MPL-2.0

"""
Binned surface array: a binning scheme plus a populated surface grid.

The array owns its :class:`~surfacearray.binning.BinUtility` and
:class:`~surfacearray.grid.SurfaceGrid`. It does not own the surfaces: the
grid stores handles into the ``surfaces`` tuple given at construction.
"""

from __future__ import annotations
from itertools import product
from typing import Iterator, List, Optional, Sequence, Tuple

from .binning import BinTriple, BinUtility
from .geometry import Point
from .grid import SurfaceGrid
from .surfaces import Surface


class SurfaceArray:
    """Surfaces on a binned grid with position lookup and adjacency queries.

    Intended to be read-only once built.
    """

    def __init__(self, grid: SurfaceGrid, bin_utility: BinUtility,
                 surfaces: Sequence[Surface]):
        """
        Args:
            grid: Populated grid of surface handles.
            bin_utility: Binning scheme; its shape must match the grid.
            surfaces: Surfaces the grid handles index into.
        """
        if grid.shape != bin_utility.shape:
            raise ValueError(
                f"Grid shape {grid.shape} does not match binning {bin_utility.shape}"
            )
        self._grid = grid
        self._bin_utility = bin_utility
        self._surfaces: Tuple[Surface, ...] = tuple(surfaces)

    @property
    def object_grid(self) -> SurfaceGrid:
        return self._grid

    @property
    def bin_utility(self) -> BinUtility:
        return self._bin_utility

    @property
    def surfaces(self) -> Tuple[Surface, ...]:
        """Input surfaces, in the order their handles were assigned."""
        return self._surfaces

    def _resolve(self, handle: Optional[int]) -> Optional[Surface]:
        return None if handle is None else self._surfaces[handle]

    def object_at(self, bin_triple: BinTriple) -> Optional[Surface]:
        """Surface stored in a bin, None if the bin is empty."""
        return self._resolve(self._grid[bin_triple])

    def bin_triple_for(self, position: Point) -> BinTriple:
        return self._bin_utility.bin_triple(position)

    def object_at_position(self, position: Point) -> Optional[Surface]:
        return self.object_at(self.bin_triple_for(position))

    def object_cluster(self, bin_triple: BinTriple) -> List[Optional[Surface]]:
        """Entries of the bins around ``bin_triple``, the centre included.

        Closed axes wrap across their boundary, open axes stop at the edge.
        Empty bins appear as None.
        """
        ranges = [self._bin_utility.neighbour_range(bin_triple, axis)
                  for axis in range(3)]
        cluster = []
        for i2, i1, i0 in product(ranges[2], ranges[1], ranges[0]):
            cluster.append(self.object_at((i0, i1, i2)))
        return cluster

    def array_objects(self) -> List[Surface]:
        """Distinct surfaces present in the grid, in first-seen bin order."""
        seen = set()
        objects = []
        for surface in self:
            if surface is not None and id(surface) not in seen:
                seen.add(id(surface))
                objects.append(surface)
        return objects

    def __iter__(self) -> Iterator[Optional[Surface]]:
        """Grid entries, axis 2 outermost and axis 0 innermost."""
        for bin_triple in self._grid.bins():
            yield self.object_at(bin_triple)

    def __len__(self) -> int:
        return self._grid.size

    def __repr__(self) -> str:
        return (f"SurfaceArray({self._bin_utility.bins(0)} x "
                f"{self._bin_utility.bins(1)} x {self._bin_utility.bins(2)}, "
                f"surfaces={len(self._surfaces)})")
