"""
Site routes: visitor counter and health check
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .config import config
from .db.engine import check_database
from .dependencies import get_storage
from .storage import DatabaseStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["site"])


@router.post("/visitors")
async def count_visit(storage: DatabaseStorage = Depends(get_storage)):
    return {"count": storage.visitor_counter.increment()}


@router.get("/health")
async def health():
    """Liveness plus a database round trip"""
    database_ok = check_database()
    body = {
        "status": "healthy" if database_ok else "unhealthy",
        "service": "film-distribution",
        "version": config.BUILD_VERSION,
        "database": "ok" if database_ok else "unavailable",
    }
    return JSONResponse(status_code=200 if database_ok else 503, content=body)
