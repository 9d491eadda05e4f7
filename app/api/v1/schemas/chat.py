"""
Shop chat request and response schemas.
"""

from pydantic import BaseModel, Field


class ChatMessageRequest(BaseModel):
    """Message typed by a shopper into the chat widget."""

    message: str = Field(..., max_length=4000, description="Message text")

    class Config:
        json_schema_extra = {"example": {"message": "Do you ship to Poland?"}}


class ChatMessageResponse(BaseModel):
    """Assistant reply to a chat message."""

    message: str = Field(..., description="Assistant reply")
    message_id: str = Field(..., description="Reply identifier")
