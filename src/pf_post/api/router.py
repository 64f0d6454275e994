"""pf_post REST endpoints.

GET  /feed                          home feed (cached)
GET  /posts?max_created_at=...      older posts page
GET  /posts/{post_id}               single post with all comments
POST /posts                         create post (login + CSRF)
POST /comments                      create comment (login + CSRF)
GET  /users/{account_name}          profile page (cached)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.container import ServiceContainer, get_container
from src.pf_common.database import get_db_session
from src.pf_common.response import ApiResponse, request_id_of, success_response
from src.pf_gateway.auth.dependencies import (
    Session,
    get_current_session,
    get_session,
    verify_csrf,
)
from src.pf_post.application.schemas import CreateCommentRequest, CreatePostRequest

router = APIRouter(tags=["posts"])


@router.get("/feed")
async def get_feed(
    request: Request,
    session: Annotated[Session, Depends(get_session)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> ApiResponse:
    result = await container.post_service.get_feed(db, session.csrf_token)
    return success_response(result.model_dump(), request_id_of(request))


@router.get("/posts")
async def get_timeline(
    request: Request,
    session: Annotated[Session, Depends(get_session)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    container: Annotated[ServiceContainer, Depends(get_container)],
    max_created_at: str = Query(..., description="ISO8601, e.g. 2016-01-02T15:04:05+09:00"),
) -> ApiResponse:
    result = await container.post_service.get_timeline(db, max_created_at, session.csrf_token)
    return success_response(result.model_dump(), request_id_of(request))


@router.get("/posts/{post_id}")
async def get_post(
    request: Request,
    session: Annotated[Session, Depends(get_session)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    container: Annotated[ServiceContainer, Depends(get_container)],
    post_id: int = Path(..., gt=0),
) -> ApiResponse:
    result = await container.post_service.get_post(db, post_id, session.csrf_token)
    return success_response(result.model_dump(), request_id_of(request))


@router.post("/posts", status_code=status.HTTP_201_CREATED)
async def create_post(
    body: CreatePostRequest,
    request: Request,
    session: Annotated[Session, Depends(get_current_session)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> ApiResponse:
    verify_csrf(session, body.csrf_token)
    result = await container.post_service.create_post(
        db, session.user, body.content_type, body.body  # type: ignore[arg-type]
    )
    return success_response(result.model_dump(), request_id_of(request))


@router.post("/comments", status_code=status.HTTP_201_CREATED)
async def create_comment(
    body: CreateCommentRequest,
    request: Request,
    session: Annotated[Session, Depends(get_current_session)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> ApiResponse:
    verify_csrf(session, body.csrf_token)
    result = await container.post_service.create_comment(
        db, session.user, body.post_id, body.comment  # type: ignore[arg-type]
    )
    return success_response(result.model_dump(), request_id_of(request))


@router.get("/users/{account_name}")
async def get_profile(
    request: Request,
    session: Annotated[Session, Depends(get_session)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    container: Annotated[ServiceContainer, Depends(get_container)],
    account_name: str = Path(..., pattern=r"^[0-9a-zA-Z_]+$"),
) -> ApiResponse:
    result = await container.post_service.get_profile(db, account_name, session.csrf_token)
    return success_response(result.model_dump(), request_id_of(request))
