#!/usr/bin/env python3
"""
Endcap disc example for the surfacearray package.

This example demonstrates how to:
1. Build a disc layer with two rings of sectors
2. Compare the grid with and without completion
3. Use the 'filled' completion check
"""

import math

import surfacearray as sa

# =============================================================================
# 1. Two rings of disc sectors at z = 600
# =============================================================================

registry = sa.DetectorElementRegistry()
placement = sa.Transform3D.from_translation(0.0, 0.0, 600.0)

sectors = []
for ring, (r_min, r_max, count) in enumerate(((30.0, 60.0, 12), (60.0, 100.0, 18))):
    half_phi = math.pi / count
    for i in range(count):
        avg_phi = -math.pi + (2 * i + 1) * half_phi
        element = registry.create(name=f"ring{ring}_sector{i}")
        sectors.append(sa.DiscSurface(r_min, r_max, avg_phi=avg_phi, half_phi=half_phi,
                                      transform=placement, detector_element=element,
                                      name=element.name))

print(f"Created {len(sectors)} sectors")

# =============================================================================
# 2. With and without completion
# =============================================================================

def build(config):
    creator = sa.SurfaceArrayCreator(config)
    return creator.surface_array_on_disc(
        sectors, min_r=30.0, max_r=100.0, min_phi=-math.pi, max_phi=math.pi,
        bins_r=2, bins_phi=18, transform=placement)


raw = build(sa.CreatorConfig(complete=False, register_neighbours=False))
print(f"Before completion: {raw.object_grid}")

completed = build(sa.CreatorConfig())
print(f"After completion:  {completed.object_grid}")

# =============================================================================
# 3. 'filled' check
# =============================================================================

strict = build(sa.CreatorConfig(completion_check='filled'))
print(f"Filled check:      {strict.object_grid}")

inner = sectors[0].detector_element
print(f"\n{inner.name} has {len(inner.neighbours)} neighbours:")
for neighbour in registry.neighbours_of(inner):
    print(f"  {neighbour.name}")
