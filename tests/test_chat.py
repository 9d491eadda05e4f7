import httpx
import pytest

from app.api.utils.exceptions import ChatServiceUnavailableException, RequestValidationFailedException
from app.api.v1.services.chat import ChatService
from app.web.chat import SENDER_ASSISTANT, SENDER_USER, ChatClient, ChatClientError, ChatWindow


async def test_service_rejects_blank_message():
    with pytest.raises(RequestValidationFailedException):
        await ChatService.send_message("   ")


async def test_service_is_not_implemented():
    with pytest.raises(ChatServiceUnavailableException) as exc_info:
        await ChatService.send_message("Do you ship to Poland?")
    assert exc_info.value.status_code == 501


def test_send_endpoint_answers_501(client):
    response = client.post("/api/v1/chat/send", json={"message": "Hello"})

    assert response.status_code == 501
    assert response.json()["detail"] == "CHAT_NOT_IMPLEMENTED"


def test_send_endpoint_rejects_blank_message(client):
    response = client.post("/api/v1/chat/send", json={"message": "  "})

    assert response.status_code == 400
    assert response.json()["detail"] == "VALIDATION_ERROR"


class TestChatWindow:
    async def test_blank_input_is_ignored(self):
        window = ChatWindow(input_value="   ")

        async def send(text):
            raise AssertionError("should not be called")

        assert await window.send_message(send) is None
        assert window.messages == []

    async def test_reply_is_appended(self):
        window = ChatWindow(input_value="Hi there")

        async def send(text):
            assert window.is_loading is True
            assert window.input_value == ""
            return f"You said: {text}"

        reply = await window.send_message(send)

        assert [(m.sender, m.content) for m in window.messages] == [
            (SENDER_USER, "Hi there"),
            (SENDER_ASSISTANT, "You said: Hi there"),
        ]
        assert reply is window.messages[-1]
        assert window.is_loading is False
        assert window.error is None

    async def test_failure_keeps_user_message_and_error(self):
        window = ChatWindow(input_value="Hello")

        async def send(text):
            raise ChatClientError("Chat service not yet implemented", status_code=501)

        assert await window.send_message(send) is None

        assert [m.sender for m in window.messages] == [SENDER_USER]
        assert window.error == "Chat service not yet implemented"
        assert window.is_loading is False


class TestChatClient:
    async def test_returns_reply_text(self):
        def handler(request):
            return httpx.Response(200, json={"status_code": 200, "success": True, "message": "Message sent",
                                             "data": {"message": "Yes, we do", "message_id": "m1"}})

        client = ChatClient(url="http://shop.test/api/v1/chat/send", transport=httpx.MockTransport(handler))

        assert await client.send("Do you ship to Poland?") == "Yes, we do"

    async def test_error_uses_server_message(self):
        def handler(request):
            return httpx.Response(501, json={"status_code": 501, "status": False,
                                             "message": "Chat service not yet implemented"})

        client = ChatClient(url="http://shop.test/api/v1/chat/send", transport=httpx.MockTransport(handler))

        with pytest.raises(ChatClientError) as exc_info:
            await client.send("Hello")

        assert exc_info.value.status_code == 501
        assert exc_info.value.message == "Chat service not yet implemented"
