import logging
import os

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import Response
from pydantic import ValidationError

from neighbourhood_visualizer.errors import AreaReconciliationError, InvalidParametersError, PrimitiveBudgetExceeded
from neighbourhood_visualizer.export_dxf import dxf_to_bytes, layout_to_dxf
from neighbourhood_visualizer.geometry import plan_layout
from neighbourhood_visualizer.metrics import compute_statistics, land_use_budget
from neighbourhood_visualizer.pipeline import recompute
from neighbourhood_visualizer.surfaces import FeatureSurface
from neighbourhood_visualizer.utils.query_params import parse_query_params, to_query_params

logger = logging.getLogger(__name__)

DEFAULT_SURFACE_WIDTH = float(os.environ.get("NEIGHBOURHOOD_SURFACE_WIDTH", 800))
DEFAULT_SURFACE_HEIGHT = float(os.environ.get("NEIGHBOURHOOD_SURFACE_HEIGHT", 600))

app = FastAPI(
    title="Neighbourhood Block Visualizer API",
    version="0.1.0"
)


def _parameters_from_request(request: Request):
    try:
        return parse_query_params(request.query_params)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))


def _raise_http_error(e: Exception):
    if isinstance(e, InvalidParametersError):
        raise HTTPException(status_code=422, detail=str(e))
    if isinstance(e, PrimitiveBudgetExceeded):
        raise HTTPException(status_code=400, detail=str(e))
    if isinstance(e, AreaReconciliationError):
        raise HTTPException(status_code=500, detail=str(e))
    logger.exception("Unexpected error")
    raise HTTPException(status_code=500, detail=str(e))


@app.get("/")
def ping():
    return {
        "status": "Ok",
        "message": "Server is running",
    }


@app.get("/statistics")
def get_statistics(request: Request):
    params = _parameters_from_request(request)
    try:
        statistics = compute_statistics(params)
    except Exception as e:
        _raise_http_error(e)

    return {
        "parameters": to_query_params(params),
        "statistics": statistics.model_dump(),
        **land_use_budget(statistics),
    }


@app.get("/layout")
def get_layout(
    request: Request,
    width: float = Query(DEFAULT_SURFACE_WIDTH, gt=0),
    height: float = Query(DEFAULT_SURFACE_HEIGHT, gt=0),
):
    params = _parameters_from_request(request)
    surface = FeatureSurface()
    try:
        result = recompute(params, surface, width, height)
    except Exception as e:
        _raise_http_error(e)

    return surface.to_feature_collection({
        "parameters": to_query_params(params),
        "plan": {**result.plan.model_dump(), "building_count": result.plan.building_count},
        "metrics": land_use_budget(result.statistics),
    })


@app.get("/export/dxf")
def export_dxf_layout(
    request: Request,
    width: float = Query(DEFAULT_SURFACE_WIDTH, gt=0),
    height: float = Query(DEFAULT_SURFACE_HEIGHT, gt=0),
):
    params = _parameters_from_request(request)
    try:
        statistics = compute_statistics(params)
        plan = plan_layout(params, width, height)
        doc = layout_to_dxf(params, plan, statistics)
    except Exception as e:
        _raise_http_error(e)

    return Response(
        content=dxf_to_bytes(doc),
        media_type="application/dxf",
        headers={"Content-Disposition": 'attachment; filename="neighbourhood_layout.dxf"'},
    )
