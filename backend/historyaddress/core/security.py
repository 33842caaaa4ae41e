"""
admin gate helpers

the admin page keeps the sha256 hex digest of the password in session
storage and sends it back as a token; the server compares it against
ADMIN_PASSWORD_HASH.
"""
import hashlib
import hmac
import logging

from historyaddress.core.config import settings

logger = logging.getLogger(__name__)

_warned_open = False


def hash_password(plain_password: str) -> str:
    return hashlib.sha256((plain_password or "").encode("utf-8")).hexdigest()


def admin_gate_open() -> bool:
    """true when no admin hash is configured (local development)"""
    global _warned_open
    if settings.ADMIN_PASSWORD_HASH:
        return False
    if not _warned_open:
        logger.warning("ADMIN_PASSWORD_HASH is not set, admin writes are not protected")
        _warned_open = True
    return True


def verify_admin_token(token: str) -> bool:
    expected = settings.ADMIN_PASSWORD_HASH
    candidate = (token or "").strip().lower()
    if not expected or not candidate:
        return False
    return hmac.compare_digest(candidate, expected)


def verify_admin_password(plain_password: str) -> bool:
    if not plain_password:
        return False
    return verify_admin_token(hash_password(plain_password))
