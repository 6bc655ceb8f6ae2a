#!/usr/bin/env python3
"""
RUN_SLAB_GRID: Generate a Strut-and-Tie Grid for a Slab with an Opening
=======================================================================

This demo shows the complete workflow:
1. Define a slab outline with a stair opening
2. Place column points (one of them off the slab)
3. Generate the adaptive grid, tie lines and mesh
4. Print a summary of what was built

Run with:
    python demos/run_slab_grid.py
"""

import logging
import sys
from pathlib import Path

from shapely.geometry import Polygon

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from slabgrid import PlanarRegion, UnitSystem, generate_slab_grid
from slabgrid.logging_config import setup_logging


def print_header(text: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {text}")
    print("=" * 70)


def main():
    setup_logging(logging.INFO)

    print_header("SLAB DEFINITION")
    # 9 m x 7.2 m slab (mm) with a 1.8 m x 2.4 m stair opening
    outline = [(0, 0), (9000, 0), (9000, 7200), (0, 7200)]
    opening = [(3600, 2400), (5400, 2400), (5400, 4800), (3600, 4800)]
    slab = PlanarRegion.from_polygon(Polygon(outline, [opening]))
    print(f"Region: {slab}")

    columns = [
        (0, 0, 0),
        (9000, 0, 0),
        (0, 7200, 0),
        (9000, 7200, 0),
        (2500, 5500, 0),      # interior column between regular stations
        (12000, 3000, 0),     # off the slab, ignored
    ]

    print_header("GRID GENERATION")
    result = generate_slab_grid(
        slab,
        columns,
        unit_system=UnitSystem.METRIC,
        add_diagonals=True,
    )

    print_header("SUMMARY")
    for key, value in result.summary().items():
        print(f"  {key:28s} {value:g}")

    print("\n  u stations:", ", ".join(f"{u:g}" for u in result.u_stations))
    print("  v stations:", ", ".join(f"{v:g}" for v in result.v_stations))

    for cp in result.control_points:
        status = "accepted" if cp.accepted else "rejected"
        print(f"  column at {cp.source[:2]} -> {status}")


if __name__ == "__main__":
    main()
