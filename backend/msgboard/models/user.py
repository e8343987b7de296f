"""User ORM — persists accounts for signup, login, reset and deletion.

Invariants:
    - id is UUID primary key (client-side default)
    - username is unique and non-nullable (uniqueness enforced by the DB index)
    - password is stored verbatim (plain trimmed text, no hashing)
    - date_joined defaults to creation time

Design Decisions:
    - Plaintext password kept to preserve the exact-equality login contract;
      hashing would change that contract and is tracked as a known defect
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from msgboard.db.base import Base


class User(Base):
    """User account."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    date_joined: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
