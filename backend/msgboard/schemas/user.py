"""User Schemas — public user shape returned by every account endpoint.

Invariants:
    - SafeUserResponse has no password field; it cannot carry one by construction
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from msgboard.core.domain_types import SafeUser


class SafeUserResponse(BaseModel):
    """SafeUser on the wire: {_id, username, dateJoined}."""
    id: UUID | None = Field(None, serialization_alias="_id")
    username: str | None = None
    date_joined: datetime | None = Field(None, serialization_alias="dateJoined")

    @classmethod
    def from_safe_user(cls, user: SafeUser) -> "SafeUserResponse":
        return cls(
            id=user["id"],
            username=user["username"],
            date_joined=user["date_joined"],
        )
