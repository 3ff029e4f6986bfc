from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from edutube.app.domain.models import WriteAck


class WriteAckResponse(BaseModel):
    path: str = Field(..., description="Document or record path that was written")
    key: Optional[str] = Field(None, description="Generated child key for appended records")
    updated_at: str = Field(..., description="Write time, ISO-8601 UTC")

    @classmethod
    def from_ack(cls, ack: WriteAck) -> "WriteAckResponse":
        return cls(**ack.as_dict())
