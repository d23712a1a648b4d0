"""
Health Check Route
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from netops_core.db.session import Database
from netops_core.utils.datetime import format_iso, utc_now

from netops_api.dependencies import get_database

router = APIRouter()


@router.get("/health")
async def health_check(db: Database = Depends(get_database)):
    """Liveness plus database connectivity; never authenticated."""
    database_ok = await db.ping()
    body = {
        "status": "ok" if database_ok else "error",
        "message": "NetOps API is running" if database_ok else "Database unavailable",
        "database": "connected" if database_ok else "disconnected",
        "timestamp": format_iso(utc_now()),
    }
    return JSONResponse(status_code=200 if database_ok else 503, content=body)
