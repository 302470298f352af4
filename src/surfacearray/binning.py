# SPDX-FileCopyrightText: 2026 Giovanni MARIANO
#
# SPDX-License-Identifier: MPL-2.0

"""
Binning axes and binning schemes.

A :class:`BinningData` describes one axis: which local coordinate it bins
(``BinningValue``), the range, the number of bins and what happens at the
boundary (``BinningOption``):

    - OPEN axes clamp: values outside the range go to the first/last bin.
    - CLOSED axes wrap: the bin index is taken modulo the bin count
      (azimuthal angle).

A :class:`BinUtility` is an ordered scheme of up to three axes plus an
optional transform. Axis 0 is the fastest varying grid dimension. Schemes
concatenate with ``+`` / ``+=``:

    phi = BinUtility.equidistant(16, -math.pi, math.pi, BinningOption.CLOSED,
                                 BinningValue.PHI)
    phi_z = phi + BinUtility.equidistant(10, -500., 500., BinningOption.OPEN,
                                         BinningValue.Z)
    phi_z.bin_triple((100., 0., 20.))  # -> (8, 5, 0)
"""

from __future__ import annotations
from enum import Enum, IntEnum
from typing import List, Optional, Sequence, Tuple, Union
import bisect
import math

from .geometry import Point, Transform3D, as_point, eta, mag, perp, phi, theta

BinTriple = Tuple[int, int, int]

MAX_DIMENSIONS = 3


class BinningValue(IntEnum):
    """Local coordinate binned by an axis."""
    X = 0
    Y = 1
    Z = 2
    R = 3
    PHI = 4
    RPHI = 5
    H = 6
    ETA = 7
    MAG = 8


class BinningOption(Enum):
    """Boundary policy of an axis."""
    OPEN = 'open'
    CLOSED = 'closed'


class BinningType(Enum):
    """Equidistant bins or explicit boundaries."""
    EQUIDISTANT = 'equidistant'
    ARBITRARY = 'arbitrary'


def coordinate(value: BinningValue, position: Point) -> float:
    """Extract the local coordinate ``value`` from a 3D position."""
    if value in (BinningValue.X, BinningValue.Y, BinningValue.Z):
        return float(position[int(value)])
    if value is BinningValue.R:
        return perp(position)
    if value is BinningValue.PHI:
        return phi(position)
    if value is BinningValue.RPHI:
        return perp(position) * phi(position)
    if value is BinningValue.H:
        return theta(position)
    if value is BinningValue.ETA:
        return eta(position)
    if value is BinningValue.MAG:
        return mag(position)
    raise ValueError(f"Unknown binning value: {value!r}")


class BinningData:
    """A single binning axis.

    Attributes:
        value: Local coordinate this axis bins.
        option: OPEN (clamp) or CLOSED (wrap).
        type: EQUIDISTANT or ARBITRARY.
        min: Lower edge of the axis.
        max: Upper edge of the axis.
        bins: Number of bins (>= 1).
        zdim: True for a single pass-through bin that accepts every value.
    """

    def __init__(self, value: BinningValue, bmin: float, bmax: float,
                 bins: int = 1, option: BinningOption = BinningOption.OPEN,
                 boundaries: Optional[Sequence[float]] = None,
                 zdim: bool = False):
        """
        Args:
            value: Local coordinate to bin.
            bmin, bmax: Axis range (bmin < bmax).
            bins: Number of equidistant bins. Ignored when boundaries are given.
            option: Boundary policy.
            boundaries: Explicit ascending bin edges (ARBITRARY binning).
            zdim: Single pass-through bin; prefer :meth:`single`.
        """
        self.value = BinningValue(value)
        self.option = BinningOption(option)
        self.zdim = zdim

        if boundaries is not None:
            edges = [float(b) for b in boundaries]
            if len(edges) < 2:
                raise ValueError("Arbitrary binning needs at least two boundaries")
            if any(upper <= lower for lower, upper in zip(edges, edges[1:])):
                raise ValueError("Bin boundaries must be strictly ascending")
            self.type = BinningType.ARBITRARY
            self.min = edges[0]
            self.max = edges[-1]
            self.bins = len(edges) - 1
            self._boundaries = edges
            self.step = (self.max - self.min) / self.bins
            return

        if bins < 1:
            raise ValueError(f"Number of bins must be at least 1, got {bins}")
        if not bmin < bmax:
            raise ValueError(
                f"Lower bound must be below upper bound, got [{bmin}, {bmax}]"
            )
        self.type = BinningType.EQUIDISTANT
        self.min = float(bmin)
        self.max = float(bmax)
        self.bins = 1 if zdim else int(bins)
        self.step = (self.max - self.min) / self.bins
        self._boundaries = [self.min + i * self.step for i in range(self.bins)]
        self._boundaries.append(self.max)

    @classmethod
    def single(cls, value: BinningValue, bmin: float, bmax: float) -> 'BinningData':
        """Pass-through axis: one bin, every value classified into bin 0."""
        return cls(value, bmin, bmax, bins=1, zdim=True)

    @classmethod
    def from_boundaries(cls, value: BinningValue, boundaries: Sequence[float],
                        option: BinningOption = BinningOption.OPEN) -> 'BinningData':
        """Axis with explicit, strictly ascending bin edges."""
        return cls(value, 0.0, 0.0, option=option, boundaries=boundaries)

    @property
    def boundaries(self) -> List[float]:
        """Bin edges, ``bins + 1`` entries."""
        return list(self._boundaries)

    def value_of(self, position: Point) -> float:
        """Local coordinate of a 3D position for this axis."""
        return coordinate(self.value, position)

    def search(self, value: float) -> int:
        """Bin index for a local coordinate (wrapped or clamped)."""
        if self.zdim:
            return 0
        if not math.isfinite(value):
            if self.option is BinningOption.CLOSED or math.isnan(value):
                raise ValueError(f"Cannot bin {value} on {self.value.name} axis")
            # +-inf, e.g. eta on the beam axis
            return 0 if value < 0 else self.bins - 1
        if self.type is BinningType.EQUIDISTANT:
            raw = math.floor((value - self.min) / self.step)
        else:
            raw = bisect.bisect_right(self._boundaries, value) - 1
        return self._resolve(raw)

    def _resolve(self, raw: int) -> int:
        if self.option is BinningOption.CLOSED:
            return raw % self.bins
        return min(max(raw, 0), self.bins - 1)

    def search_position(self, position: Point) -> int:
        return self.search(self.value_of(position))

    def center_value(self, bin: int) -> float:
        """Representative coordinate inside a bin."""
        if self.zdim:
            return 0.5 * (self.min + self.max)
        self._check_bin(bin)
        return 0.5 * (self._boundaries[bin] + self._boundaries[bin + 1])

    def width(self, bin: int) -> float:
        if self.zdim:
            return self.max - self.min
        self._check_bin(bin)
        return self._boundaries[bin + 1] - self._boundaries[bin]

    def inside(self, value: float) -> bool:
        """Closed axes accept everything; open axes check the range."""
        if self.option is BinningOption.CLOSED or self.zdim:
            return True
        return self.min <= value <= self.max

    def neighbour_range(self, bin: int) -> List[int]:
        """Sorted distinct bins adjacent to (and including) ``bin``."""
        if self.zdim or self.bins == 1:
            return [0]
        self._check_bin(bin)
        if self.option is BinningOption.CLOSED:
            return sorted({(bin - 1) % self.bins, bin, (bin + 1) % self.bins})
        return list(range(max(bin - 1, 0), min(bin + 1, self.bins - 1) + 1))

    def _check_bin(self, bin: int) -> None:
        if not 0 <= bin < self.bins:
            raise IndexError(f"Bin {bin} out of range [0, {self.bins - 1}]")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinningData):
            return NotImplemented
        return (self.value == other.value and self.option == other.option
                and self.zdim == other.zdim
                and self._boundaries == other._boundaries)

    __hash__ = None

    def __repr__(self) -> str:
        kind = 'single' if self.zdim else self.type.value
        return (f"BinningData({self.value.name}, {kind}, {self.option.value}, "
                f"bins={self.bins}, range=[{self.min:g}, {self.max:g}])")


class BinUtility:
    """Ordered binning scheme of one to three axes with an optional transform.

    The transform maps local to global coordinates; positions are brought
    into the local frame with its inverse before classification.
    """

    def __init__(self,
                 binning_data: Union[BinningData, Sequence[BinningData], None] = None,
                 transform: Optional[Transform3D] = None):
        """
        Args:
            binning_data: One axis or a sequence of axes (axis 0 first).
            transform: Optional local-to-global transform.
        """
        if binning_data is None:
            data: List[BinningData] = []
        elif isinstance(binning_data, BinningData):
            data = [binning_data]
        else:
            data = list(binning_data)
        if len(data) > MAX_DIMENSIONS:
            raise ValueError(
                f"A binning scheme has at most {MAX_DIMENSIONS} axes, got {len(data)}"
            )
        self._data = data
        self._set_transform(transform)

    @classmethod
    def equidistant(cls, bins: int, bmin: float, bmax: float,
                    option: BinningOption, value: BinningValue,
                    transform: Optional[Transform3D] = None) -> 'BinUtility':
        """One-axis scheme with equidistant bins."""
        return cls(BinningData(value, bmin, bmax, bins=bins, option=option),
                   transform=transform)

    def _set_transform(self, transform: Optional[Transform3D]) -> None:
        self._transform = transform
        self._itransform = transform.inverse() if transform is not None else None

    @property
    def binning_data(self) -> Tuple[BinningData, ...]:
        return tuple(self._data)

    @property
    def transform(self) -> Optional[Transform3D]:
        return self._transform

    @property
    def dimensions(self) -> int:
        return len(self._data)

    @property
    def shape(self) -> Tuple[int, int, int]:
        """Grid shape (axis 2, axis 1, axis 0) matching ``SurfaceGrid``."""
        return (self.bins(2), self.bins(1), self.bins(0))

    def __len__(self) -> int:
        return len(self._data)

    def __iadd__(self, other: 'BinUtility') -> 'BinUtility':
        if not isinstance(other, BinUtility):
            return NotImplemented
        if len(self._data) + len(other._data) > MAX_DIMENSIONS:
            raise ValueError(
                f"A binning scheme has at most {MAX_DIMENSIONS} axes"
            )
        self._data.extend(other._data)
        if other._transform is not None:
            if self._transform is not None:
                self._set_transform(self._transform @ other._transform)
            else:
                self._set_transform(other._transform)
        return self

    def __add__(self, other: 'BinUtility') -> 'BinUtility':
        if not isinstance(other, BinUtility):
            return NotImplemented
        result = BinUtility(self._data, self._transform)
        result += other
        return result

    def _local(self, position: Point):
        p = as_point(position)
        if self._itransform is not None:
            return self._itransform.apply(p)
        return p

    def bin_triple(self, position: Point) -> BinTriple:
        """Bin index on every axis, 0 for axes the scheme does not have."""
        local = self._local(position)
        triple = [0, 0, 0]
        for axis, bdata in enumerate(self._data):
            triple[axis] = bdata.search_position(local)
        return (triple[0], triple[1], triple[2])

    def bin(self, position: Point, axis: int = 0) -> int:
        """Bin index of a global position on one axis."""
        if axis >= len(self._data):
            return 0
        return self._data[axis].search_position(self._local(position))

    def bins(self, axis: Optional[int] = None) -> int:
        """Bins on one axis (1 for missing axes), or the total without an axis."""
        if axis is None:
            total = 1
            for bdata in self._data:
                total *= bdata.bins
            return total
        if axis >= len(self._data):
            return 1
        return self._data[axis].bins

    def max(self, axis: int = 0) -> int:
        """Highest bin index on an axis."""
        return self.bins(axis) - 1

    def binning_value(self, axis: int = 0) -> BinningValue:
        if axis >= len(self._data):
            raise IndexError(f"Scheme has no axis {axis}")
        return self._data[axis].value

    def inside(self, position: Point) -> bool:
        local = self._local(position)
        return all(b.inside(b.value_of(local)) for b in self._data)

    def neighbour_range(self, bin_triple: BinTriple, axis: int) -> List[int]:
        """Adjacent bins along one axis around ``bin_triple``."""
        if axis >= len(self._data):
            return [0]
        return self._data[axis].neighbour_range(bin_triple[axis])

    def serialize(self, bin_triple: BinTriple) -> int:
        """Flat index of a bin triple, axis 0 fastest."""
        n0, n1 = self.bins(0), self.bins(1)
        return bin_triple[0] + n0 * bin_triple[1] + n0 * n1 * bin_triple[2]

    def __repr__(self) -> str:
        axes = ", ".join(repr(b) for b in self._data)
        return f"BinUtility([{axes}], transform={self._transform!r})"
