#!/usr/bin/env python3
"""
Barrel layer example for the surfacearray package.

This example demonstrates how to:
1. Place planar modules on a cylindrical barrel layer
2. Build a surface array on the cylinder
3. Look up modules by position
4. Inspect the registered neighbourhood of a module
"""

import math

import surfacearray as sa

sa.setup_logging(sa.LOG_DEBUG)

# =============================================================================
# 1. Place 16 x 5 modules on a barrel of radius 32
# =============================================================================

print("=" * 60)
print("Placing barrel modules")
print("=" * 60)

RADIUS = 32.0
N_PHI = 16
N_Z = 5
MODULE_HALF_Z = 30.0

registry = sa.DetectorElementRegistry()
modules = []
for iz in range(N_Z):
    z = (iz - (N_Z - 1) / 2) * 2 * MODULE_HALF_Z
    for iphi in range(N_PHI):
        phi = -math.pi + (iphi + 0.5) * 2 * math.pi / N_PHI
        placement = (sa.Transform3D.from_translation(0.0, 0.0, z)
                     @ sa.Transform3D.from_rotation_z(phi)
                     @ sa.Transform3D.from_translation(RADIUS, 0.0, 0.0))
        element = registry.create(name=f"barrel_z{iz}_phi{iphi}")
        modules.append(sa.PlaneSurface(8.0, MODULE_HALF_Z, transform=placement,
                                       detector_element=element,
                                       name=element.name))

print(f"Created {len(modules)} modules")

# =============================================================================
# 2. Build the surface array
# =============================================================================

creator = sa.SurfaceArrayCreator()
layer = creator.surface_array_on_cylinder(
    modules,
    radius=RADIUS,
    min_phi=-math.pi,
    max_phi=math.pi,
    half_z=N_Z * MODULE_HALF_Z,
    bins_phi=N_PHI,
    bins_z=N_Z,
)
print(layer)

# =============================================================================
# 3. Position lookup
# =============================================================================

position = (0.0, RADIUS, 12.0)
print(f"\nModule at {position}: {layer.object_at_position(position)}")
print(f"Bin triple: {layer.bin_triple_for(position)}")

# =============================================================================
# 4. Neighbourhood
# =============================================================================

element = modules[0].detector_element
print(f"\nNeighbours of {element.name}:")
for neighbour in registry.neighbours_of(element):
    print(f"  {neighbour.name}")
