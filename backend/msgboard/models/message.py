"""Message ORM — flat message board entries.

Invariants:
    - msg and msg_from are non-nullable text
    - msg_date_time is non-nullable: an unparseable client timestamp fails here
    - created_at records insertion time and breaks ties between equal msg_date_time

Design Decisions:
    - No update/delete paths exist: messages are immutable once written
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from msgboard.db.base import Base


class Message(Base):
    """Board message."""
    __tablename__ = "messages"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    msg: Mapped[str] = mapped_column(Text, nullable=False)
    msg_from: Mapped[str] = mapped_column(String(255), nullable=False)
    msg_date_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
