"""
Owner-scoped persistence shared by posts and questions.

``ResourceRepository`` is parameterised over the ORM model; the same
create / list / authorised-delete logic serves every resource type.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Base, Post, Question

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class DeleteOutcome(str, Enum):
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


class ResourceRepository(Generic[ModelT]):
    def __init__(self, session: AsyncSession, model: Type[ModelT]) -> None:
        self.session = session
        self.model = model

    @property
    def name(self) -> str:
        return self.model.__name__

    async def create(self, owner: str, payload: Dict[str, Any]) -> ModelT:
        """
        Persist a new resource owned by ``owner``.

        Any ``author`` / ``id`` in *payload* is discarded; the owner always
        comes from the verified identity.
        """
        fields = {k: v for k, v in payload.items() if k not in ("id", "author")}
        resource = self.model(**fields, author=owner)
        self.session.add(resource)
        await self.session.commit()
        await self.session.refresh(resource)
        logger.info("Created %s %s for %s", self.name, resource.id, owner)
        return resource

    async def list_all(self) -> List[ModelT]:
        result = await self.session.execute(
            select(self.model).order_by(self.model.created_at.asc())
        )
        return list(result.scalars().all())

    async def get(self, resource_id: str) -> Optional[ModelT]:
        return await self.session.get(self.model, resource_id)

    async def delete_by_id(self, requester: str, resource_id: str) -> DeleteOutcome:
        """Delete the resource only when ``requester`` is its author."""
        resource = await self.get(resource_id)
        if resource is None:
            return DeleteOutcome.NOT_FOUND
        if resource.author != requester:
            logger.warning(
                "%s refused to delete %s %s owned by %s",
                requester, self.name, resource_id, resource.author,
            )
            return DeleteOutcome.FORBIDDEN

        await self.session.delete(resource)
        await self.session.commit()
        logger.info("Deleted %s %s", self.name, resource_id)
        return DeleteOutcome.DELETED


class PostRepository(ResourceRepository[Post]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Post)

    async def add_comment(self, post_id: str, author: str, content: str) -> Optional[Post]:
        """Append a comment; returns ``None`` when the post does not exist."""
        post = await self.get(post_id)
        if post is None:
            return None
        # Reassign so the JSON column is flagged dirty
        post.comments = [*(post.comments or []), {"author": author, "content": content}]
        await self.session.commit()
        await self.session.refresh(post)
        logger.info("Comment by %s added to Post %s", author, post_id)
        return post


class QuestionRepository(ResourceRepository[Question]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Question)
