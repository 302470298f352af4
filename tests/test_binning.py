# SPDX-FileCopyrightText: 2026 Giovanni MARIANO
#
# SPDX-License-Identifier: MPL-2.0

"""Tests for binning axes and binning schemes."""

import math

import pytest

from surfacearray import Transform3D
from surfacearray.binning import (
    BinningData,
    BinningOption,
    BinningType,
    BinningValue,
    BinUtility,
)


def _axes():
    """One axis of every kind."""
    return [
        BinningData(BinningValue.Z, -100.0, 100.0, bins=7),
        BinningData(BinningValue.PHI, -math.pi, math.pi, bins=12,
                    option=BinningOption.CLOSED),
        BinningData(BinningValue.R, 20.0, 80.0, bins=3),
        BinningData.from_boundaries(BinningValue.R, [0.0, 1.0, 5.0, 5.5, 20.0]),
        BinningData.from_boundaries(BinningValue.PHI, [-3.0, -1.0, 0.5, 3.0],
                                    option=BinningOption.CLOSED),
        BinningData.single(BinningValue.R, 10.0, 30.0),
    ]


# =========================================================================
# BinningData construction
# =========================================================================

class TestBinningDataConstruction:
    """Validation of axis parameters."""

    def test_zero_bins_raises(self):
        with pytest.raises(ValueError, match="at least 1"):
            BinningData(BinningValue.Z, -1.0, 1.0, bins=0)

    def test_inverted_range_raises(self):
        with pytest.raises(ValueError, match="Lower bound"):
            BinningData(BinningValue.Z, 1.0, -1.0, bins=4)

    def test_empty_range_raises(self):
        with pytest.raises(ValueError, match="Lower bound"):
            BinningData(BinningValue.Z, 1.0, 1.0, bins=4)

    def test_non_ascending_boundaries_raise(self):
        with pytest.raises(ValueError, match="ascending"):
            BinningData.from_boundaries(BinningValue.R, [0.0, 2.0, 2.0, 3.0])

    def test_single_boundary_raises(self):
        with pytest.raises(ValueError, match="two boundaries"):
            BinningData.from_boundaries(BinningValue.R, [1.0])

    def test_types(self):
        assert BinningData(BinningValue.Z, 0, 1, bins=2).type is BinningType.EQUIDISTANT
        arbitrary = BinningData.from_boundaries(BinningValue.R, [0.0, 1.0, 3.0])
        assert arbitrary.type is BinningType.ARBITRARY
        assert arbitrary.bins == 2
        assert arbitrary.min == 0.0
        assert arbitrary.max == 3.0

    def test_single_has_one_bin(self):
        axis = BinningData.single(BinningValue.R, 10.0, 30.0)
        assert axis.zdim
        assert axis.bins == 1


# =========================================================================
# Partition and centre values
# =========================================================================

class TestPartition:
    """Bins cover the axis range without gap or overlap."""

    @pytest.mark.parametrize("axis", _axes(), ids=repr)
    def test_boundaries_partition_range(self, axis):
        edges = axis.boundaries
        assert len(edges) == axis.bins + 1
        assert edges[0] == pytest.approx(axis.min)
        assert edges[-1] == pytest.approx(axis.max)
        assert all(b > a for a, b in zip(edges, edges[1:]))
        total = sum(axis.width(b) for b in range(axis.bins))
        assert total == pytest.approx(axis.max - axis.min)

    @pytest.mark.parametrize("axis", _axes(), ids=repr)
    def test_center_inside_range(self, axis):
        for b in range(axis.bins):
            assert axis.min <= axis.center_value(b) <= axis.max

    @pytest.mark.parametrize("axis", _axes(), ids=repr)
    def test_center_maps_to_own_bin(self, axis):
        for b in range(axis.bins):
            assert axis.search(axis.center_value(b)) == b

    def test_single_center_is_midpoint(self):
        axis = BinningData.single(BinningValue.R, 10.0, 30.0)
        assert axis.center_value(0) == pytest.approx(20.0)

    def test_center_out_of_range_raises(self):
        axis = BinningData(BinningValue.Z, 0.0, 1.0, bins=2)
        with pytest.raises(IndexError):
            axis.center_value(2)


# =========================================================================
# Search: wrap and clamp
# =========================================================================

class TestSearch:
    """Value to bin mapping at the boundaries."""

    def test_open_axis_clamps(self):
        axis = BinningData(BinningValue.Z, -10.0, 10.0, bins=4)
        assert axis.search(-1000.0) == 0
        assert axis.search(1000.0) == 3
        assert axis.search(10.0) == 3
        assert axis.search(-10.0) == 0

    def test_open_axis_just_below_min(self):
        axis = BinningData(BinningValue.Z, -10.0, 10.0, bins=4)
        assert axis.search(-10.5) == 0

    def test_closed_axis_wraps(self):
        axis = BinningData(BinningValue.PHI, -math.pi, math.pi, bins=8,
                           option=BinningOption.CLOSED)
        assert axis.search(math.pi - 1e-9) == 7
        assert axis.search(-math.pi + 1e-9) == 0
        assert axis.search(math.pi) == 0
        assert axis.search(-math.pi - 0.1) == 7

    def test_closed_axis_wrap_boundary_positions(self):
        utility = BinUtility.equidistant(8, -math.pi, math.pi,
                                         BinningOption.CLOSED, BinningValue.PHI)
        eps = 1e-9
        below = (math.cos(math.pi - eps), math.sin(math.pi - eps), 0.0)
        above = (math.cos(-math.pi + eps), math.sin(-math.pi + eps), 0.0)
        assert utility.bin_triple(below) == (7, 0, 0)
        assert utility.bin_triple(above) == (0, 0, 0)

    def test_open_axis_clamps_infinite_values(self):
        axis = BinningData(BinningValue.ETA, -2.0, 2.0, bins=4)
        assert axis.search(math.inf) == 3
        assert axis.search(-math.inf) == 0

    def test_eta_on_beam_axis(self):
        utility = BinUtility.equidistant(4, -2.0, 2.0, BinningOption.OPEN, BinningValue.ETA)
        assert utility.bin_triple((0.0, 0.0, 10.0)) == (3, 0, 0)
        assert utility.bin_triple((0.0, 0.0, -10.0)) == (0, 0, 0)

    def test_closed_axis_rejects_infinite_values(self):
        axis = BinningData(BinningValue.ETA, -2.0, 2.0, bins=4,
                           option=BinningOption.CLOSED)
        with pytest.raises(ValueError, match="Cannot bin inf"):
            axis.search(math.inf)

    def test_nan_rejected(self):
        axis = BinningData(BinningValue.Z, -10.0, 10.0, bins=4)
        with pytest.raises(ValueError, match="Cannot bin nan"):
            axis.search(math.nan)

    def test_arbitrary_search(self):
        axis = BinningData.from_boundaries(BinningValue.R, [0.0, 1.0, 5.0, 5.5, 20.0])
        assert axis.search(0.5) == 0
        assert axis.search(1.0) == 1
        assert axis.search(5.2) == 2
        assert axis.search(100.0) == 3
        assert axis.search(-1.0) == 0

    def test_single_accepts_everything(self):
        axis = BinningData.single(BinningValue.R, 10.0, 30.0)
        assert axis.search(-5.0) == 0
        assert axis.search(500.0) == 0

    def test_inside(self):
        open_axis = BinningData(BinningValue.Z, -1.0, 1.0, bins=2)
        closed_axis = BinningData(BinningValue.PHI, -1.0, 1.0, bins=2,
                                  option=BinningOption.CLOSED)
        assert open_axis.inside(0.0)
        assert not open_axis.inside(2.0)
        assert closed_axis.inside(2.0)


class TestNeighbourRange:
    """Adjacent bins along one axis."""

    def test_open_interior(self):
        axis = BinningData(BinningValue.Z, 0.0, 5.0, bins=5)
        assert axis.neighbour_range(2) == [1, 2, 3]

    def test_open_edges_clamp(self):
        axis = BinningData(BinningValue.Z, 0.0, 5.0, bins=5)
        assert axis.neighbour_range(0) == [0, 1]
        assert axis.neighbour_range(4) == [3, 4]

    def test_closed_edges_wrap(self):
        axis = BinningData(BinningValue.PHI, -math.pi, math.pi, bins=8,
                           option=BinningOption.CLOSED)
        assert axis.neighbour_range(0) == [0, 1, 7]
        assert axis.neighbour_range(7) == [0, 6, 7]

    def test_closed_two_bins_no_duplicates(self):
        axis = BinningData(BinningValue.PHI, -math.pi, math.pi, bins=2,
                           option=BinningOption.CLOSED)
        assert axis.neighbour_range(0) == [0, 1]

    def test_single_bin(self):
        axis = BinningData.single(BinningValue.R, 0.0, 1.0)
        assert axis.neighbour_range(0) == [0]


# =========================================================================
# Local coordinates
# =========================================================================

class TestCoordinates:
    """BinningValue extraction from a 3D position."""

    def test_values(self):
        pos = (3.0, 4.0, 12.0)
        assert BinningData(BinningValue.X, -10, 10).value_of(pos) == 3.0
        assert BinningData(BinningValue.Y, -10, 10).value_of(pos) == 4.0
        assert BinningData(BinningValue.Z, -10, 10).value_of(pos) == 12.0
        assert BinningData(BinningValue.R, 0, 10).value_of(pos) == pytest.approx(5.0)
        assert BinningData(BinningValue.MAG, 0, 20).value_of(pos) == pytest.approx(13.0)
        assert BinningData(BinningValue.PHI, -4, 4).value_of(pos) == \
            pytest.approx(math.atan2(4.0, 3.0))
        assert BinningData(BinningValue.RPHI, -40, 40).value_of(pos) == \
            pytest.approx(5.0 * math.atan2(4.0, 3.0))
        assert BinningData(BinningValue.H, 0, 4).value_of(pos) == \
            pytest.approx(math.atan2(5.0, 12.0))


# =========================================================================
# BinUtility
# =========================================================================

class TestBinUtility:
    """Multi-axis schemes."""

    @pytest.fixture
    def phi_z(self):
        utility = BinUtility.equidistant(16, -math.pi, math.pi,
                                         BinningOption.CLOSED, BinningValue.PHI)
        utility += BinUtility.equidistant(10, -500.0, 500.0,
                                          BinningOption.OPEN, BinningValue.Z)
        return utility

    def test_concatenation_order(self, phi_z):
        assert phi_z.dimensions == 2
        assert phi_z.binning_value(0) is BinningValue.PHI
        assert phi_z.binning_value(1) is BinningValue.Z
        assert phi_z.shape == (1, 10, 16)
        assert phi_z.bins() == 160

    def test_bin_triple(self, phi_z):
        assert phi_z.bin_triple((100.0, 0.0, 20.0)) == (8, 5, 0)
        assert phi_z.bin_triple((0.0, -100.0, -499.0)) == (4, 0, 0)
        assert phi_z.bin_triple((0.0, -100.0, 9999.0)) == (4, 9, 0)

    def test_bin_per_axis(self, phi_z):
        assert phi_z.bin((100.0, 0.0, 20.0), 1) == 5
        assert phi_z.bin((100.0, 0.0, 20.0), 2) == 0

    def test_bins_and_max(self, phi_z):
        assert phi_z.bins(0) == 16
        assert phi_z.bins(1) == 10
        assert phi_z.bins(2) == 1
        assert phi_z.max(0) == 15
        assert phi_z.max(2) == 0

    def test_serialize(self, phi_z):
        assert phi_z.serialize((0, 0, 0)) == 0
        assert phi_z.serialize((2, 1, 0)) == 18
        assert phi_z.serialize((15, 9, 0)) == 159

    def test_add_leaves_operands(self, phi_z):
        r = BinUtility.equidistant(2, 0.0, 10.0, BinningOption.OPEN, BinningValue.R)
        combined = phi_z + r
        assert combined.dimensions == 3
        assert phi_z.dimensions == 2
        assert r.dimensions == 1

    def test_too_many_axes_raise(self, phi_z):
        two = BinUtility([BinningData(BinningValue.X, 0, 1), BinningData(BinningValue.Y, 0, 1)])
        with pytest.raises(ValueError, match="at most 3"):
            phi_z += two

    def test_neighbour_range_missing_axis(self, phi_z):
        assert phi_z.neighbour_range((3, 4, 0), 2) == [0]
        assert phi_z.neighbour_range((3, 4, 0), 1) == [3, 4, 5]

    def test_inside(self, phi_z):
        assert phi_z.inside((100.0, 0.0, 0.0))
        assert not phi_z.inside((100.0, 0.0, 600.0))

    def test_transform_applied_before_binning(self):
        shift = Transform3D.from_translation(0.0, 0.0, 100.0)
        utility = BinUtility.equidistant(4, -10.0, 10.0, BinningOption.OPEN,
                                         BinningValue.Z, transform=shift)
        assert utility.bin_triple((0.0, 0.0, 101.0)) == (2, 0, 0)
        assert utility.bin_triple((0.0, 0.0, 1.0)) == (0, 0, 0)

    def test_transforms_compose(self):
        t1 = Transform3D.from_rotation_z(0.3)
        t2 = Transform3D.from_translation(1.0, 2.0, 3.0)
        a = BinUtility.equidistant(2, 0.0, 1.0, BinningOption.OPEN, BinningValue.X, t1)
        b = BinUtility.equidistant(2, 0.0, 1.0, BinningOption.OPEN, BinningValue.Y, t2)
        assert (a + b).transform == t1 @ t2
        c = BinUtility.equidistant(2, 0.0, 1.0, BinningOption.OPEN, BinningValue.Y)
        assert (c + b).transform == t2
