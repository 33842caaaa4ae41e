import os

PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
BACKEND_DIR = os.path.dirname(PACKAGE_DIR)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Settings:
    PROJECT_NAME: str = "History Address"
    PORT: int = _env_int("PORT", 3000)
    SITE_DOMAIN: str = os.getenv("SITE_DOMAIN", "https://historyaddress.bg").rstrip("/")

    # render mounts the persistent disk at /data
    DATA_DIR: str = os.getenv("DATA_DIR", "/data" if os.getenv("RENDER") else ".")
    DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{os.path.join(DATA_DIR, 'database.db')}")

    # static site and seed data
    STATIC_DIR: str = os.getenv("STATIC_DIR", os.path.join(BACKEND_DIR, "static"))
    SEED_FILE: str = os.getenv("SEED_FILE", os.path.join(PACKAGE_DIR, "data", "people.json"))
    MIGRATIONS_DIR: str = os.getenv("MIGRATIONS_DIR", os.path.join(BACKEND_DIR, "alembic"))
    ADMIN_PAGE: str = os.getenv("ADMIN_PAGE", "sys-maintenance-panel-v2.html")

    # sha256 hex of the admin password, empty leaves writes open
    ADMIN_PASSWORD_HASH: str = os.getenv("ADMIN_PASSWORD_HASH", "").strip().lower()

    CORS_ORIGINS: list = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    # pagination
    DEFAULT_PAGE_SIZE: int = _env_int("DEFAULT_PAGE_SIZE", 6)
    MAX_PAGE_SIZE: int = _env_int("MAX_PAGE_SIZE", 20)

    # cache ttl in seconds
    LIST_CACHE_TTL: int = _env_int("LIST_CACHE_TTL", 15)
    RECORD_CACHE_TTL: int = _env_int("RECORD_CACHE_TTL", 60)
    MAP_CACHE_TTL: int = _env_int("MAP_CACHE_TTL", 120)
    TAGS_CACHE_TTL: int = _env_int("TAGS_CACHE_TTL", 300)
    PARTNERS_CACHE_TTL: int = _env_int("PARTNERS_CACHE_TTL", 120)
    CACHE_MAX_SIZE: int = _env_int("CACHE_MAX_SIZE", 500)
    CACHE_PRUNE_INTERVAL: int = _env_int("CACHE_PRUNE_INTERVAL", 60)

    # sqlite pragmas applied on every connection
    SQLITE_BUSY_TIMEOUT_MS: int = _env_int("SQLITE_BUSY_TIMEOUT_MS", 3000)
    SQLITE_JOURNAL_MODE: str = os.getenv("SQLITE_JOURNAL_MODE", "DELETE")
    SQLITE_SYNCHRONOUS: str = os.getenv("SQLITE_SYNCHRONOUS", "NORMAL")
    SQLITE_CACHE_SIZE: int = _env_int("SQLITE_CACHE_SIZE", 50)

    # logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR: str = os.getenv("LOG_DIR", "")

settings = Settings()
