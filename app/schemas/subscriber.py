from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
import uuid


class SubscribeResponse(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    error: str


class Subscriber(BaseModel):
    id: uuid.UUID
    email: str
    interests: str = Field(..., description="Comma-space joined interest tags")
    interest_tags: List[str]
    zip: Optional[str] = None
    source: str
    created_at: datetime

    class Config:
        from_attributes = True


class SubscriberList(BaseModel):
    count: int
    subscribers: List[Subscriber]
