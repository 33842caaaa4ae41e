from fastapi import APIRouter, Depends, HTTPException, status

from historyaddress.api.deps import require_admin
from historyaddress.core import security
from historyaddress.core.cache import TTLCache, get_cache
from historyaddress.schemas import AdminLoginRequest

router = APIRouter()


@router.post("/login")
def admin_login(request: AdminLoginRequest):
    """exchange the admin password for the token the write endpoints expect"""
    if security.admin_gate_open():
        return {"token": security.hash_password(request.password), "protected": False}
    if not security.verify_admin_password(request.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password",
        )
    return {"token": security.hash_password(request.password), "protected": True}


@router.get("/cache", dependencies=[Depends(require_admin)])
def get_cache_stats(cache: TTLCache = Depends(get_cache)):
    """current cache size and hit counters"""
    return cache.stats()


@router.post("/cache/clear", dependencies=[Depends(require_admin)])
def clear_cache(cache: TTLCache = Depends(get_cache)):
    cleared = len(cache)
    cache.clear()
    return {"success": True, "cleared": cleared}
