"""
Pydantic request / response schemas for posts and questions.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


# ═══════════════════════════════════════════════════════════════════════════════
# Posts
# ═══════════════════════════════════════════════════════════════════════════════


class PostCreate(BaseModel):
    """Client payload. Unknown fields (e.g. ``author``) are ignored."""

    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1)


class Comment(BaseModel):
    author: str
    content: str


class PostRead(BaseModel):
    id: str
    title: str
    content: str
    author: str
    comments: List[Comment] = Field(default_factory=list)


# ═══════════════════════════════════════════════════════════════════════════════
# Questions
# ═══════════════════════════════════════════════════════════════════════════════


class QuestionCreate(BaseModel):
    question: str = Field(..., min_length=1)


class QuestionRead(BaseModel):
    id: str
    question: str
    author: str
