import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.core.auth import JWTHandler, get_request_token, security
from app.api.core.dependencies import get_current_user
from app.api.db.database import get_db
from app.api.v1.services.auth import AuthService
from app.api.v1.models.user import User
from app.api.utils.response import success_response, error_response
from app.api.v1.schemas.auth import CurrentUserResponse, LoginRequest, LoginResponse, LogoutResponse
from app.api.v1.schemas.response import SuccessResponseModel
from app.api.utils.auth_token import revoke_jwt_token
from app.api.utils.exceptions import InvalidCredentialsException, MissingAuthorizationException
from config import settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=SuccessResponseModel[LoginResponse]
)
async def login(
    payload: LoginRequest,
    session: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Log in with email and password.

    Args:
        payload (LoginRequest): Credentials
        session (AsyncSession): Database session

    Returns:
        JSONResponse: Response with JWT token and user info
    """
    try:
        user = await AuthService.authenticate(payload.email, payload.password, session)

        jwt_token = JWTHandler.create_token(
            user_id=user.id,
            email=user.email,
            role=user.role,
            expires_in_hours=settings.JWT_EXPIRY_HOURS
        )

        logger.info(f"User {user.email} logged in successfully")

        return success_response(
            status_code=status.HTTP_200_OK,
            message="Login successful",
            data=LoginResponse(
                access_token=jwt_token,
                token_type="Bearer",
                expires_in=settings.JWT_EXPIRY_HOURS * 3600,
                user_id=str(user.id),
                email=user.email,
                role=user.role,
            ).model_dump(mode="json")
        )

    except InvalidCredentialsException as e:
        return error_response(
            status_code=e.status_code,
            message=e.message,
            detail=e.error_code
        )
    except Exception as e:
        logger.error(f"Login failed: {str(e)}", exc_info=True)
        return error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="Authentication failed",
            detail="LOGIN_FAILED"
        )


@router.get(
    "/me",
    response_model=SuccessResponseModel[CurrentUserResponse]
)
async def me(current_user: User = Depends(get_current_user)) -> JSONResponse:
    """
    Return the profile of the authenticated user.

    Args:
        current_user (User): Authenticated user from JWT token

    Returns:
        JSONResponse: Response with user profile
    """
    return success_response(
        status_code=status.HTTP_200_OK,
        message="User retrieved successfully",
        data=CurrentUserResponse.model_validate(current_user).model_dump(mode="json")
    )


@router.post(
    "/logout",
    response_model=SuccessResponseModel[LogoutResponse]
)
async def logout(
    request: Request,
    current_user: User = Depends(get_current_user),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> JSONResponse:
    """
    Logout user by revoking their JWT token.

    Revokes the JWT token from the Authorization header (or the CMS session
    cookie) by storing its JTI in Redis with TTL. After logout, the token
    cannot be used for authentication even if not expired.

    Args:
        request (Request): FastAPI request object
        current_user (User): Authenticated user from JWT token
        credentials (HTTPAuthorizationCredentials, optional): Bearer token credentials

    Returns:
        JSONResponse: Response with logout confirmation
    """
    try:
        token = get_request_token(request, credentials)
        if not token:
            raise MissingAuthorizationException()

        result = await revoke_jwt_token(token)

        logger.info(f"User {current_user.email} logged out successfully")

        response = success_response(
            status_code=status.HTTP_200_OK,
            message="Successfully logged out",
            data=LogoutResponse(
                message=result["message"],
                revoked_at=result["revoked_at"]
            ).model_dump()
        )
        response.delete_cookie(settings.SESSION_COOKIE_NAME)
        return response

    except MissingAuthorizationException:
        logger.error("Missing authorization in logout request")
        return error_response(
            status_code=status.HTTP_401_UNAUTHORIZED,
            message="Missing authorization header",
            detail="MISSING_AUTHORIZATION"
        )
    except Exception as e:
        logger.error(f"Logout failed: {str(e)}", exc_info=True)
        return error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="Logout failed",
            detail="LOGOUT_FAILED"
        )
