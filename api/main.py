# api/main.py
"""
FastAPI service for SlabGrid - exposes generate_slab_grid() as a REST API.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
import logging
import math
import sys
from pathlib import Path

# Add project root to path to import slabgrid
sys.path.insert(0, str(Path(__file__).parent.parent))

from slabgrid import PlanarRegion, UnitSystem, SlabGridError, generate_slab_grid
from slabgrid.logging_config import setup_logging
from slabgrid.model import SlabGridResult


logger = logging.getLogger("slabgrid.api")

app = FastAPI(
    title="SlabGrid API",
    description="Strut-and-tie grid generation for trimmed planar slabs",
    version="0.1.0"
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request/Response Models
# =============================================================================

class SlabGridRequest(BaseModel):
    """Slab outline, openings, supports and grid options."""
    outer: List[List[float]] = Field(..., min_length=3, description="Slab outline vertices (x, y[, z])")
    holes: List[List[List[float]]] = Field(default_factory=list, description="Opening outlines")
    control_points: List[List[float]] = Field(..., min_length=1, description="Column / wall points on the slab")
    unit: str = Field("Metric", description='Unit system: "Metric" or "US"')
    mesh_size: Optional[float] = Field(None, description="Grid spacing (null uses 1000 mm or 48 in)")
    add_diagonals: bool = Field(True, description="Generate diagonal ties in addition to ortho lines")
    tolerance: float = Field(1e-4, gt=0, description="Model tolerance")


class LineData(BaseModel):
    """A tie line."""
    start: List[float]
    end: List[float]


class SlabGridResponse(BaseModel):
    """Generated mesh and tie lines."""
    vertices: List[List[float]]
    faces: List[List[int]]
    normals: List[List[float]]
    orthogonal_lines: List[LineData]
    diagonal_lines: List[LineData]
    u_stations: List[float]
    v_stations: List[float]
    summary: Dict[str, float]


# =============================================================================
# Grid Generation
# =============================================================================

def _lines(lines) -> List[LineData]:
    return [LineData(start=list(line.start), end=list(line.end)) for line in lines]


def to_response(result: SlabGridResult) -> SlabGridResponse:
    mesh = result.mesh
    return SlabGridResponse(
        vertices=mesh.vertex_array().tolist(),
        faces=mesh.face_array().tolist(),
        normals=[] if mesh.normals is None else mesh.normals.tolist(),
        orthogonal_lines=_lines(result.orthogonal_lines),
        diagonal_lines=_lines(result.diagonal_lines),
        u_stations=result.u_stations.tolist(),
        v_stations=result.v_stations.tolist(),
        summary=result.summary(),
    )


def run_slab_grid(request: SlabGridRequest) -> SlabGridResult:
    """Build the region from the request and generate the grid in-process."""
    mesh_size = request.mesh_size
    if mesh_size is not None and math.isnan(mesh_size):
        mesh_size = None

    region = PlanarRegion.from_boundary(request.outer, request.holes, tol=request.tolerance)
    return generate_slab_grid(
        region,
        request.control_points,
        unit_system=UnitSystem.parse(request.unit),
        spacing=mesh_size,
        add_diagonals=request.add_diagonals,
        tol=request.tolerance,
    )


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "SlabGrid API"}


@app.post("/api/slab-grid", response_model=SlabGridResponse)
async def slab_grid(request: SlabGridRequest):
    """Generate slab mesh and tie lines."""
    try:
        result = run_slab_grid(request)
    except SlabGridError as e:
        logger.info("Slab grid request rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    return to_response(result)


if __name__ == "__main__":
    setup_logging()
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
