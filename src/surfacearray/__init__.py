# SPDX-FileCopyrightText: 2026 Giovanni MARIANO
#
# SPDX-License-Identifier: MPL-2.0

"""
SurfaceArray: binned surface lookup for detector layers

A Python package that sorts the sensor surfaces of a cylindrical, disc or
planar detector layer onto a 2D binned grid, so that "which surface is at
this position" and "which elements are adjacent to this one" are answered in
constant time.

Example:
    import math
    import surfacearray as sa

    registry = sa.DetectorElementRegistry()
    modules = []
    for i in range(8):
        phi = -math.pi + (i + 0.5) * math.pi / 4
        placement = (sa.Transform3D.from_rotation_z(phi)
                     @ sa.Transform3D.from_translation(100., 0., 0.))
        modules.append(sa.PlaneSurface(10., 40., transform=placement,
                                       detector_element=registry.create()))

    creator = sa.SurfaceArrayCreator()
    layer = creator.surface_array_on_cylinder(
        modules, radius=100., min_phi=-math.pi, max_phi=math.pi,
        half_z=40., bins_phi=8, bins_z=1)

    layer.object_at_position((0., 100., 0.))
    registry.neighbours_of(modules[0].detector_element)
"""

__version__ = "0.1.0"

from .geometry import (
    Transform3D,
    distance,
    eta,
    mag,
    perp,
    phi,
    theta,
)

from .binning import (
    BinningValue,
    BinningOption,
    BinningType,
    BinningData,
    BinUtility,
)

from .surfaces import (
    Surface,
    PlaneSurface,
    DiscSurface,
    CylinderSurface,
)

from .detector import (
    DetectorElement,
    DetectorElementRegistry,
)

from .grid import SurfaceGrid
from .array import SurfaceArray
from .completion import complete_binning
from .neighbours import register_neighbourhood
from .config import CreatorConfig
from .creator import SurfaceArrayCreator

from .log import (
    LOG_NONE,
    LOG_ERROR,
    LOG_WARN,
    LOG_INFO,
    LOG_DEBUG,
    LOG_TRACE,
    set_log_level,
    get_log_level,
    setup_logging,
    enable_logging,
    disable_logging,
)

__all__ = [
    # Geometry
    'Transform3D',
    'distance',
    'eta',
    'mag',
    'perp',
    'phi',
    'theta',
    # Binning
    'BinningValue',
    'BinningOption',
    'BinningType',
    'BinningData',
    'BinUtility',
    # Surfaces
    'Surface',
    'PlaneSurface',
    'DiscSurface',
    'CylinderSurface',
    # Detector elements
    'DetectorElement',
    'DetectorElementRegistry',
    # Arrays
    'SurfaceGrid',
    'SurfaceArray',
    'SurfaceArrayCreator',
    'CreatorConfig',
    'complete_binning',
    'register_neighbourhood',
    # Logging
    'LOG_NONE',
    'LOG_ERROR',
    'LOG_WARN',
    'LOG_INFO',
    'LOG_DEBUG',
    'LOG_TRACE',
    'set_log_level',
    'get_log_level',
    'setup_logging',
    'enable_logging',
    'disable_logging',
]
