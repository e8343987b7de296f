"""Message Schemas — board message shape on the wire."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from msgboard.core.domain_types import MessageRecord


class MessageResponse(BaseModel):
    """Message on the wire: {_id, msg, msgFrom, msgDateTime}."""
    id: UUID = Field(serialization_alias="_id")
    msg: str
    msg_from: str = Field(serialization_alias="msgFrom")
    msg_date_time: datetime = Field(serialization_alias="msgDateTime")

    @classmethod
    def from_record(cls, record: MessageRecord) -> "MessageResponse":
        return cls(
            id=record["id"],
            msg=record["msg"],
            msg_from=record["msg_from"],
            msg_date_time=record["msg_date_time"],
        )

    def to_wire(self) -> dict:
        """JSON-safe dict with wire aliases (for SSE payloads)."""
        return self.model_dump(mode="json", by_alias=True)
