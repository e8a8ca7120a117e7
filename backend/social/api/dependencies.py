"""Request Dependencies — per-request objects resolved through FastAPI Depends."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from social.config import Settings
from social.infrastructure.database import get_db
from social.store.storage import Storage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_storage(
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
) -> Storage:
    return Storage(db, query_timeout=settings.db_query_timeout)
