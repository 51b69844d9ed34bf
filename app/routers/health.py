"""Health check router."""

import logging
from pathlib import Path
from typing import Optional

from alembic.config import Config
from alembic.script import ScriptDirectory
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dependencies import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def migration_head() -> Optional[str]:
    """Newest alembic revision shipped with the code, if alembic.ini is present."""
    cfg_path = PROJECT_ROOT / "alembic.ini"
    if not cfg_path.exists():
        return None

    config = Config(str(cfg_path))
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    return ScriptDirectory.from_config(config).get_current_head()


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Database reachability and migration state."""
    db_ok = True
    schema_revision: Optional[str] = None
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database", exc_info=True)
        db_ok = False

    if db_ok:
        try:
            result = await db.execute(text("SELECT version_num FROM alembic_version"))
            schema_revision = result.scalar_one_or_none()
        except SQLAlchemyError:
            # Schema created without alembic (tests, local create_all)
            await db.rollback()

    head = migration_head()
    return {
        "status": "ok" if db_ok else "degraded",
        "app": settings.APP_NAME,
        "db_ok": db_ok,
        "schema_revision": schema_revision,
        "migration_head": head,
        "migrations_current": bool(head and schema_revision == head),
    }
