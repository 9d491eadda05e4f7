"""
Shop chat widget state and HTTP client.

``ChatWindow`` keeps the conversation shown in the widget; ``ChatClient``
posts messages to ``POST /api/v1/chat/send``.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional

import httpx

from config import settings

logger = logging.getLogger(__name__)

SENDER_USER = "user"
SENDER_ASSISTANT = "assistant"

SEND_FAILED_MESSAGE = "Failed to send message"


class ChatClientError(Exception):
    """Raised when the chat endpoint answers with an error."""

    def __init__(self, message: str = SEND_FAILED_MESSAGE, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@dataclass(frozen=True)
class ChatMessage:
    id: str
    content: str
    sender: str
    timestamp: datetime


class ChatClient:
    """
    Client for the chat endpoint.

    Args:
        url (str): Full URL of the send endpoint
        timeout (float): Request timeout in seconds
        transport (httpx.AsyncBaseTransport, optional): Custom transport, e.g. for tests
    """

    def __init__(
        self,
        url: str = settings.CHAT_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def send(self, message: str) -> str:
        """
        Send ``message`` and return the assistant's reply text.

        Raises:
            ChatClientError: If the request fails or the server answers with an error
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.post(self.url, json={"message": message})
        except httpx.HTTPError as e:
            logger.error(f"Chat request failed: {str(e)}", exc_info=True)
            raise ChatClientError(SEND_FAILED_MESSAGE)

        if resp.is_error:
            error_message = SEND_FAILED_MESSAGE
            try:
                error_message = resp.json().get("message") or error_message
            except ValueError:
                pass
            logger.warning(f"Chat endpoint returned {resp.status_code}: {error_message}")
            raise ChatClientError(error_message, status_code=resp.status_code)

        return resp.json()["data"]["message"]


@dataclass
class ChatWindow:
    """Conversation state of the chat widget."""

    messages: List[ChatMessage] = field(default_factory=list)
    input_value: str = ""
    is_loading: bool = False
    error: Optional[str] = None

    def add_message(self, content: str, sender: str) -> ChatMessage:
        message = ChatMessage(
            id=str(uuid.uuid4()),
            content=content,
            sender=sender,
            timestamp=datetime.now(timezone.utc),
        )
        self.messages.append(message)
        return message

    async def send_message(self, send: Callable[[str], Awaitable[str]]) -> Optional[ChatMessage]:
        """
        Send the current input with ``send`` and append the reply.

        Blank input is ignored. On failure the error text is kept and the
        user's message stays in the conversation.

        Returns:
            ChatMessage | None: The assistant reply, if one arrived
        """
        if not self.input_value.strip():
            return None

        text = self.input_value
        self.add_message(text, SENDER_USER)
        self.input_value = ""
        self.is_loading = True
        self.error = None

        try:
            reply = await send(text)
        except ChatClientError as e:
            self.error = e.message
            return None
        except Exception as e:
            logger.error(f"Chat message failed: {str(e)}", exc_info=True)
            self.error = SEND_FAILED_MESSAGE
            return None
        finally:
            self.is_loading = False

        return self.add_message(reply, SENDER_ASSISTANT)
