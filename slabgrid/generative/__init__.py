# slabgrid/generative - Slab grid generation
"""
GENERATIVE: Strut-and-Tie Grids Over Trimmed Slabs
==================================================

This package turns a slab region and its supports into a grid:
stations, nodes, tie lines and a quad mesh.

Modules:
--------
- stations:        1-D station sets with control point pivots
- grid:            evaluated/classified nodes and cells
- control_points:  registration of supports and connector ties
- mesh_builder:    quad mesh over the inside cells
- slab_grid:       the generate_slab_grid() entry point

USAGE:
------
    from slabgrid.generative import generate_slab_grid

    result = generate_slab_grid(region, control_points, spacing=1000.0)
    mesh, ortho, diag = result.mesh, result.orthogonal_lines, result.diagonal_lines
"""

from .slab_grid import generate_slab_grid
from .stations import build_stations

__all__ = ['generate_slab_grid', 'build_stations']
