"""
SQLAlchemy ORM models for users, posts and questions.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, Column, DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase


def _new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))


class Post(Base):
    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    author = Column(String(255), nullable=False, index=True)
    # Embedded [{"author": ..., "content": ...}] in insertion order
    comments = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "comments": list(self.comments or []),
        }


class Question(Base):
    __tablename__ = "questions"

    id = Column(String(36), primary_key=True, default=_new_id)
    question = Column(Text, nullable=False)
    author = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "question": self.question,
            "author": self.author,
        }
