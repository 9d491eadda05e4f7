import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.api.utils.exceptions import ChatServiceUnavailableException, RequestValidationFailedException
from app.api.utils.response import error_response, success_response
from app.api.v1.schemas.chat import ChatMessageRequest, ChatMessageResponse
from app.api.v1.schemas.response import SuccessResponseModel
from app.api.v1.services.chat import ChatService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/chat", tags=["Chat"])


@router.post(
    "/send",
    response_model=SuccessResponseModel[ChatMessageResponse]
)
async def send_message(payload: ChatMessageRequest) -> JSONResponse:
    """
    Send a message to the shop assistant.

    Currently answers 501 for every non-blank message.
    """
    try:
        reply = await ChatService.send_message(payload.message)

        return success_response(
            status_code=status.HTTP_200_OK,
            message="Message sent",
            data=reply.model_dump()
        )
    except (RequestValidationFailedException, ChatServiceUnavailableException) as e:
        return error_response(
            status_code=e.status_code,
            message=e.message,
            detail=e.error_code
        )
