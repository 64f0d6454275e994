"""Moderation endpoints: moderator authority required."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from src.container import ServiceContainer, get_container
from src.pf_common.database import get_db_session
from src.pf_common.response import ApiResponse, request_id_of, success_response
from src.pf_gateway.auth.dependencies import Session, require_moderator, verify_csrf

router = APIRouter(prefix="/admin", tags=["admin"])


class BanRequest(BaseModel):
    user_ids: list[int] = Field(..., min_length=1)
    csrf_token: str


@router.get("/banned")
async def list_bannable_users(
    request: Request,
    session: Annotated[Session, Depends(require_moderator)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> ApiResponse:
    users = await container.admin_service.list_bannable_users(db)
    data = {"users": [u.model_dump() for u in users], "csrf_token": session.csrf_token}
    return success_response(data, request_id_of(request))


@router.post("/banned")
async def ban_users(
    body: BanRequest,
    request: Request,
    session: Annotated[Session, Depends(require_moderator)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> ApiResponse:
    verify_csrf(session, body.csrf_token)
    banned = await container.admin_service.ban_users(db, body.user_ids)
    return success_response({"banned_user_ids": banned}, request_id_of(request))
