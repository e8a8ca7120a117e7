"""User ORM — an account record in the `users` table.

Invariants:
    - id and created_at are generated by the database; unset until persisted
    - username and email are unique (enforced by the database, not the app)
    - password holds a hash, never plaintext; it is never serialized
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from social.db.base import Base


class User(Base):
    __tablename__ = "users"

    # SQLite only autoincrements INTEGER PRIMARY KEY
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    username: Mapped[str] = mapped_column(
        String(100), unique=True, nullable=False,
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, username={self.username!r})"
