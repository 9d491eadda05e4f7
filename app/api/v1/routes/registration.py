import logging
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.core.i18n import get_locale_from_request, translate
from app.api.db.database import get_db
from app.api.utils.exceptions import EmailAlreadyInUseException
from app.api.utils.response import error_response, success_response
from app.api.v1.schemas.registration import RegistrationRequest, RegistrationResponse
from app.api.v1.schemas.response import SuccessResponseModel
from app.api.v1.services.registration import RegistrationService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Registration"])


@router.post(
    "/registration",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponseModel[RegistrationResponse]
)
async def register(
    request: Request,
    payload: RegistrationRequest,
    session: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Register a customer account.

    New accounts are created inactive with the customer role.

    Args:
        request (Request): FastAPI request object
        payload (RegistrationRequest): Email, password and terms acceptance
        session (AsyncSession): Database session

    Returns:
        JSONResponse: Response with the new account
    """
    locale = get_locale_from_request(request)
    try:
        user = await RegistrationService.create_user_account(payload, session, locale=locale)

        return success_response(
            status_code=status.HTTP_201_CREATED,
            message=translate("api.registration.success", locale),
            data=RegistrationResponse(id=user.id, email=user.email, role=user.role).model_dump(mode="json")
        )
    except EmailAlreadyInUseException as e:
        return error_response(
            status_code=e.status_code,
            message=e.message,
            detail=e.error_code
        )
    except Exception as e:
        logger.error(f"Registration failed: {str(e)}", exc_info=True)
        return error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=translate("api.registration.failed", locale),
            detail="REGISTRATION_FAILED"
        )
