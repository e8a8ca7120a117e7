"""Users Store — inserts user records and classifies backend failures.

Invariants:
    - create() fills id and created_at on the caller's record and nothing else
    - Failures surface as ConflictError / UnavailableError / InternalError only
    - A failed create leaves no row behind: commit is the last step, after the
      generated columns have been read back inside the same transaction
    - A failing rollback is logged; the caller still gets the mapped original error
    - CancelledError propagates untouched so a dropped request aborts its query
"""

import asyncio
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from social.infrastructure.database import map_database_error
from social.models.user import User

logger = logging.getLogger(__name__)


class UsersStore:
    def __init__(self, session: AsyncSession, query_timeout: float | None = None):
        self._session = session
        self._query_timeout = query_timeout

    async def create(self, user: User) -> User:
        """Insert user; id and created_at are read back from the database."""
        self._session.add(user)
        try:
            await asyncio.wait_for(
                self._insert_and_commit(user), timeout=self._query_timeout,
            )
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            await self._rollback()
            raise map_database_error(e, "create_user") from e
        logger.info(
            f"Created user {user.id}",
            extra={"operation": "create_user"},
        )
        return user

    async def _insert_and_commit(self, user: User) -> None:
        await self._session.flush()
        await self._session.refresh(user)
        await self._session.commit()

    async def _rollback(self) -> None:
        try:
            await self._session.rollback()
        except (SQLAlchemyError, OSError) as e:
            logger.warning(
                f"Rollback failed during create_user: {e}",
                extra={"operation": "create_user"},
            )
