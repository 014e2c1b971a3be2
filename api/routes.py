"""
REST API routes for posts, questions and comments.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import get_current_email
from database.repository import (
    DeleteOutcome,
    PostRepository,
    QuestionRepository,
    ResourceRepository,
)
from database.session import get_db_session
from utils.schemas import (
    CommentCreate,
    PostCreate,
    PostRead,
    QuestionCreate,
    QuestionRead,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_post_repository(session: AsyncSession = Depends(get_db_session)) -> PostRepository:
    return PostRepository(session)


def get_question_repository(session: AsyncSession = Depends(get_db_session)) -> QuestionRepository:
    return QuestionRepository(session)


async def _authorized_delete(
    repo: ResourceRepository,
    requester: str,
    resource_id: str,
    label: str,
) -> Response:
    """Shared delete path: 204 for the owner, JSON 404 / 403 otherwise."""
    outcome = await repo.delete_by_id(requester, resource_id)
    if outcome is DeleteOutcome.NOT_FOUND:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": f"{label.capitalize()} not found"},
        )
    if outcome is DeleteOutcome.FORBIDDEN:
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"error": f"You are not authorized to delete this {label}"},
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── Posts ──────────────────────────────────────────────────────────────


@router.post("/posts", response_model=PostRead, status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: PostCreate,
    repo: PostRepository = Depends(get_post_repository),
    email: str = Depends(get_current_email),
) -> Dict[str, Any]:
    post = await repo.create(email, payload.model_dump())
    return post.to_dict()


@router.get("/posts", response_model=List[PostRead])
async def list_posts(
    repo: PostRepository = Depends(get_post_repository),
) -> List[Dict[str, Any]]:
    return [post.to_dict() for post in await repo.list_all()]


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    repo: PostRepository = Depends(get_post_repository),
    email: str = Depends(get_current_email),
) -> Response:
    return await _authorized_delete(repo, email, post_id, "post")


@router.post(
    "/posts/{post_id}/comments",
    response_model=PostRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: str,
    payload: CommentCreate,
    repo: PostRepository = Depends(get_post_repository),
    email: str = Depends(get_current_email),
) -> Any:
    post = await repo.add_comment(post_id, email, payload.content)
    if post is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Post not found"},
        )
    return post.to_dict()


# ── Questions ──────────────────────────────────────────────────────────


@router.post("/questions", response_model=QuestionRead, status_code=status.HTTP_201_CREATED)
async def create_question(
    payload: QuestionCreate,
    repo: QuestionRepository = Depends(get_question_repository),
    email: str = Depends(get_current_email),
) -> Dict[str, Any]:
    question = await repo.create(email, payload.model_dump())
    return question.to_dict()


@router.get("/questions", response_model=List[QuestionRead])
async def list_questions(
    repo: QuestionRepository = Depends(get_question_repository),
) -> List[Dict[str, Any]]:
    return [question.to_dict() for question in await repo.list_all()]


@router.delete("/questions/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: str,
    repo: QuestionRepository = Depends(get_question_repository),
    email: str = Depends(get_current_email),
) -> Response:
    return await _authorized_delete(repo, email, question_id, "question")


@router.get("/health")
async def health_check() -> Dict[str, str]:
    return {"status": "ok"}
