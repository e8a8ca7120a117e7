"""Storage — one object bundling every store over a single session."""

from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from social.store.users import UsersStore


class Storage:
    def __init__(self, session: AsyncSession, query_timeout: timedelta | None = None):
        timeout = query_timeout.total_seconds() if query_timeout else None
        self.users = UsersStore(session, query_timeout=timeout)
