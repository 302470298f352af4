# SPDX-FileCopyrightText: 2026 Giovanni MARIANO
#
# SPDX-License-Identifier: MPL-2.0

"""Pytest fixtures for surfacearray tests."""

import pytest
import math


@pytest.fixture
def registry():
    """Empty detector element registry."""
    import surfacearray as sa
    return sa.DetectorElementRegistry()


@pytest.fixture
def make_module(registry):
    """Factory for a planar module centred at (r, phi, z), facing outwards."""
    import surfacearray as sa

    def _make(r, phi, z=0.0, with_element=True, name=None):
        placement = (sa.Transform3D.from_translation(0.0, 0.0, z)
                     @ sa.Transform3D.from_rotation_z(phi)
                     @ sa.Transform3D.from_translation(r, 0.0, 0.0))
        element = registry.create(name=name) if with_element else None
        return sa.PlaneSurface(5.0, 20.0, transform=placement,
                               detector_element=element, name=name)

    return _make


@pytest.fixture
def barrel_modules(make_module):
    """Eight modules at radius 100 and azimuth 0, 45, ..., 315 degrees."""
    return [make_module(100.0, math.radians(45.0 * k), name=f"barrel_{k}")
            for k in range(8)]


@pytest.fixture
def disc_modules(registry):
    """Three disc sectors around r=50 at azimuth 0, 120 and 240 degrees, z=200."""
    import surfacearray as sa

    modules = []
    for k, angle in enumerate((0.0, 120.0, 240.0)):
        modules.append(sa.DiscSurface(
            40.0, 60.0, avg_phi=math.radians(angle), half_phi=math.radians(30.0),
            transform=sa.Transform3D.from_translation(0.0, 0.0, 200.0),
            detector_element=registry.create(name=f"disc_{k}"),
        ))
    return modules


@pytest.fixture
def creator():
    """Creator with the default configuration."""
    import surfacearray as sa
    return sa.SurfaceArrayCreator()
