"""Chat transcript models."""

import uuid
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """One message in the cooking assistant conversation."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    content: str
    sender: Literal["user", "bot"]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
