from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlmodel import Session
from historyaddress.core.cache import TTLCache, get_cache
from historyaddress.core.db import get_session
from datetime import datetime

router = APIRouter()

@router.get("/")
def health_check():
    """basic liveness check"""
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "service": "historyaddress-backend"
    }

@router.get("/ready")
def readiness_check(session: Session = Depends(get_session), cache: TTLCache = Depends(get_cache)):
    """readiness check - verifies the database answers and reports the cache"""
    checks = {}
    all_healthy = True

    # check database
    try:
        session.exec(text("SELECT 1")).one()
        checks["database"] = {"status": "healthy", "message": "connected"}
    except Exception as e:
        checks["database"] = {"status": "unhealthy", "message": str(e)}
        all_healthy = False

    checks["cache"] = {"status": "healthy", **cache.stats()}

    return {
        "status": "healthy" if all_healthy else "unhealthy",
        "timestamp": datetime.utcnow().isoformat(),
        "checks": checks
    }
