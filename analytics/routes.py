"""
Program Analytics API Routes

Exposes the analytics engine via REST API.
Every response uses the {success, data} / {success, error} envelope.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from fastapi.responses import JSONResponse

from .logic.adapter import ProgramStore
from .logic.constants import ENGINE_VERSION
from .logic.engine import AnalyticsEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["analytics"])

_engine = AnalyticsEngine()


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_store() -> ProgramStore:
    from db_mongo import db
    return ProgramStore(db)


def get_engine() -> AnalyticsEngine:
    return _engine


def get_organization_id(
    x_organization_id: Optional[str] = Header(default=None)
) -> str:
    """Tenant scope for the request."""
    if not x_organization_id:
        raise HTTPException(status_code=401, detail="Missing organization scope")
    return x_organization_id


def _ok(data) -> dict:
    return {"success": True, "data": data}


def _server_error(e: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": str(e)},
    )


async def _load_program(store: ProgramStore, program_id: str, organization_id: str):
    program = await store.find_program(program_id, organization_id)
    if not program:
        raise HTTPException(status_code=404, detail="Program not found")
    return program


# =============================================================================
# PROGRAM ENDPOINTS
# =============================================================================

@router.get("/programs/{program_id}/effectiveness", summary="Program effectiveness metrics")
async def get_program_effectiveness(
    program_id: str,
    organization_id: str = Depends(get_organization_id),
    store: ProgramStore = Depends(get_store),
    engine: AnalyticsEngine = Depends(get_engine),
):
    """
    Aggregated metrics, weighted effectiveness score and recommendations
    for one program of the caller's organization.
    """
    try:
        program = await _load_program(store, program_id, organization_id)
        students = await store.find_program_students(program.id)
        result = engine.effectiveness(program, students)
        return _ok(result.model_dump(mode="json", by_alias=True))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Effectiveness failed for program {program_id}")
        return _server_error(e)


@router.get("/programs/{program_id}/report", summary="Program performance report")
async def get_program_report(
    program_id: str,
    timeframe: Optional[str] = Query(None, description="Report window, e.g. '6months'"),
    organization_id: str = Depends(get_organization_id),
    store: ProgramStore = Depends(get_store),
    engine: AnalyticsEngine = Depends(get_engine),
):
    try:
        program = await _load_program(store, program_id, organization_id)
        students = await store.find_program_students(program.id)
        report = engine.build_report(program, students, timeframe)
        return _ok(report.model_dump(mode="json", by_alias=True))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Report failed for program {program_id}")
        return _server_error(e)


@router.post("/programs/{program_id}/metrics/refresh", summary="Recompute and store program metrics")
async def refresh_program_metrics(
    program_id: str,
    organization_id: str = Depends(get_organization_id),
    store: ProgramStore = Depends(get_store),
    engine: AnalyticsEngine = Depends(get_engine),
):
    """Recompute the program's metrics snapshot and persist it."""
    try:
        program = await _load_program(store, program_id, organization_id)
        students = await store.find_program_students(program.id)
        snapshot = engine.metrics_snapshot(program, students)
        await store.update_program_metrics(program.id, snapshot)
        return _ok(snapshot.model_dump(mode="json", by_alias=True))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Metrics refresh failed for program {program_id}")
        return _server_error(e)


@router.get(
    "/programs/{program_id}/students/{student_id}/performance",
    summary="Student performance in a program",
)
async def get_student_performance(
    program_id: str,
    student_id: str,
    organization_id: str = Depends(get_organization_id),
    store: ProgramStore = Depends(get_store),
    engine: AnalyticsEngine = Depends(get_engine),
):
    try:
        program = await store.find_program(program_id, organization_id)
        student = await store.find_program_student(student_id, program_id, organization_id)
        if not program or not student:
            raise HTTPException(status_code=404, detail="Program or student not found")
        performance = engine.student_performance(student, program.id)
        return _ok(performance.model_dump(mode="json", by_alias=True))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Performance failed for student {student_id} in program {program_id}")
        return _server_error(e)


# =============================================================================
# ORGANIZATION ANALYTICS
# =============================================================================

@router.get("/analytics/programs", summary="Effectiveness of every program")
async def get_program_metrics(
    organization_id: str = Depends(get_organization_id),
    store: ProgramStore = Depends(get_store),
    engine: AnalyticsEngine = Depends(get_engine),
):
    try:
        programs = await store.find_programs(organization_id)
        overviews = []
        for program in programs:
            students = await store.find_program_students(program.id)
            overview = engine.program_overview(program, students)
            overviews.append(overview.model_dump(mode="json", by_alias=True))
        return _ok(overviews)
    except Exception as e:
        logger.exception("Program metrics listing failed")
        return _server_error(e)


@router.get("/analytics/dashboard", summary="Organization dashboard")
async def get_organization_dashboard(
    organization_id: str = Depends(get_organization_id),
    store: ProgramStore = Depends(get_store),
    engine: AnalyticsEngine = Depends(get_engine),
):
    try:
        programs = await store.find_programs(organization_id)
        students = await store.find_organization_students(organization_id)
        dashboard = engine.organization_dashboard(programs, students)
        return _ok(dashboard.model_dump(mode="json", by_alias=True))
    except Exception as e:
        logger.exception("Dashboard failed")
        return _server_error(e)


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/analytics/health", summary="Analytics engine health check")
def health_check():
    """Check if analytics engine is operational."""
    return {"status": "ok", "engine": "analytics", "version": ENGINE_VERSION}
