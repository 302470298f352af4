# SPDX-FileCopyrightText: 2026 Giovanni MARIANO
#
# SPDX-License-Identifier: MPL-2.0

"""Dense 3D grid of surface handles."""

from __future__ import annotations
from typing import Iterator, Optional, Tuple

import numpy as np

from .binning import BinTriple

EMPTY = -1


class SurfaceGrid:
    """Dense grid indexed by bin triple, storing surface handles.

    The underlying array has shape ``(n2, n1, n0)`` so axis 0 of the binning
    scheme varies fastest. Entries are indices into the surface sequence of
    the owning array, ``EMPTY`` (-1) for unclaimed bins.
    """

    def __init__(self, n0: int, n1: int = 1, n2: int = 1):
        if min(n0, n1, n2) < 1:
            raise ValueError(f"Grid dimensions must be positive, got {(n0, n1, n2)}")
        self._cells = np.full((n2, n1, n0), EMPTY, dtype=np.intp)

    @classmethod
    def from_shape(cls, shape: Tuple[int, int, int]) -> 'SurfaceGrid':
        """Build from an ``(n2, n1, n0)`` shape, e.g. ``BinUtility.shape``."""
        n2, n1, n0 = shape
        return cls(n0, n1, n2)

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self._cells.shape

    @property
    def size(self) -> int:
        return int(self._cells.size)

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the handle array."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def _index(self, bin_triple: BinTriple) -> Tuple[int, int, int]:
        b0, b1, b2 = bin_triple
        n2, n1, n0 = self._cells.shape
        if not (0 <= b0 < n0 and 0 <= b1 < n1 and 0 <= b2 < n2):
            raise IndexError(f"Bin triple {tuple(bin_triple)} outside grid {(n0, n1, n2)}")
        return (b2, b1, b0)

    def __getitem__(self, bin_triple: BinTriple) -> Optional[int]:
        handle = int(self._cells[self._index(bin_triple)])
        return None if handle == EMPTY else handle

    def __setitem__(self, bin_triple: BinTriple, handle: Optional[int]) -> None:
        self._cells[self._index(bin_triple)] = EMPTY if handle is None else handle

    def fill(self, handles: np.ndarray) -> None:
        """Overwrite every cell from an array of the grid's shape."""
        values = np.asarray(handles, dtype=np.intp)
        if values.shape != self._cells.shape:
            raise ValueError(f"Expected shape {self._cells.shape}, got {values.shape}")
        self._cells[...] = values

    def is_empty(self, bin_triple: BinTriple) -> bool:
        return self[bin_triple] is None

    def filled_count(self) -> int:
        return int(np.count_nonzero(self._cells != EMPTY))

    def empty_count(self) -> int:
        return self.size - self.filled_count()

    def bins(self) -> Iterator[BinTriple]:
        """All bin triples, axis 2 outermost and axis 0 innermost."""
        n2, n1, n0 = self._cells.shape
        for i2 in range(n2):
            for i1 in range(n1):
                for i0 in range(n0):
                    yield (i0, i1, i2)

    def copy(self) -> 'SurfaceGrid':
        grid = SurfaceGrid.from_shape(self.shape)
        grid._cells[...] = self._cells
        return grid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SurfaceGrid):
            return NotImplemented
        return bool(np.array_equal(self._cells, other._cells))

    __hash__ = None

    def __repr__(self) -> str:
        n2, n1, n0 = self._cells.shape
        return f"SurfaceGrid({n0} x {n1} x {n2}, filled={self.filled_count()})"
