"""Auth API router: register, login.

Both endpoints open a session: the response carries the bearer token and the
CSRF token that write requests must echo back.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.container import ServiceContainer, get_container
from src.pf_common.database import get_db_session
from src.pf_common.response import ApiResponse, request_id_of, success_response
from src.pf_gateway.user.schemas import AuthResponse, LoginRequest, RegisterRequest, UserInfo
from src.pf_user.domain.models import User

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_data(user: User, access_token: str, csrf_token: str) -> dict:
    return AuthResponse(
        access_token=access_token,
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        csrf_token=csrf_token,
        user=UserInfo.from_domain(user),
    ).model_dump()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    summary="User registration",
)
async def register(
    request: Request,
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
    container: ServiceContainer = Depends(get_container),
) -> ApiResponse:
    user, access_token, csrf_token = await container.user_service.register(
        body.account_name, body.password, db
    )
    return success_response(
        _auth_data(user, access_token, csrf_token),
        request_id_of(request),
        message="User registered successfully",
    )


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="User login",
)
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    container: ServiceContainer = Depends(get_container),
) -> ApiResponse:
    user, access_token, csrf_token = await container.user_service.login(
        body.account_name, body.password, db
    )
    return success_response(
        _auth_data(user, access_token, csrf_token),
        request_id_of(request),
        message="Login successful",
    )
