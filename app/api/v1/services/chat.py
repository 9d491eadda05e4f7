"""
Shop chat service.

There is no assistant backend yet: every message is rejected with
``ChatServiceUnavailableException`` after validation.
"""

import logging

from app.api.utils.exceptions import ChatServiceUnavailableException, RequestValidationFailedException
from app.api.v1.schemas.chat import ChatMessageResponse

logger = logging.getLogger(__name__)


class ChatService:
    """Relays shopper messages to the chat assistant."""

    @staticmethod
    async def send_message(message: str) -> ChatMessageResponse:
        """
        Send a shopper message to the assistant.

        Args:
            message (str): Message text

        Returns:
            ChatMessageResponse: Assistant reply

        Raises:
            RequestValidationFailedException: If the message is blank
            ChatServiceUnavailableException: Always, until an assistant backend is wired in
        """
        if not message.strip():
            raise RequestValidationFailedException("Message must not be empty")

        logger.info(f"Chat message received ({len(message)} chars), no assistant backend configured")
        raise ChatServiceUnavailableException()
