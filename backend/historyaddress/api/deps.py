from datetime import date
from typing import Optional

from fastapi import Header, HTTPException, status

from historyaddress.core import security


def get_today() -> date:
    return date.today()


def require_admin(x_admin_token: Optional[str] = Header(default=None)) -> None:
    if security.admin_gate_open():
        return None
    if not (x_admin_token or "").strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-Admin-Token header.",
        )
    if not security.verify_admin_token(x_admin_token):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid admin token.",
        )
    return None
