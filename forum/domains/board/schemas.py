# forum/domains/board/schemas.py

"""
'board' 도메인 (게시글, 좋아요, 댓글)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
요청 본문은 {"post": {...}}, {"comment": {...}} 형태로 감싸서 받습니다.
"""

from typing import Optional, List
from datetime import datetime
from sqlmodel import SQLModel, Field
from pydantic import BaseModel

from forum.core.schemas import CamelModel
from forum.domains.social.schemas import ProfileRead


# =============================================================================
# 1. 게시글 (Post) 스키마
# =============================================================================
class PostCreate(SQLModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., max_length=500)
    content: str = Field(..., min_length=1)


class PostUpdate(SQLModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = Field(None, min_length=1)


class PostCreateRequest(BaseModel):
    post: PostCreate


class PostUpdateRequest(BaseModel):
    post: PostUpdate


class PostRead(CamelModel):
    post_id: int
    title: str
    description: str
    content: str
    created_at: datetime
    liked: bool = False
    liked_count: int = 0
    author: ProfileRead


class PostResponse(CamelModel):
    post: PostRead


class PostListResponse(CamelModel):
    posts: List[PostRead]
    post_count: int


# =============================================================================
# 2. 댓글 (Comment) 스키마
# =============================================================================
class CommentCreate(SQLModel):
    content: str = Field(..., min_length=1)


class CommentCreateRequest(BaseModel):
    comment: CommentCreate


class CommentRead(CamelModel):
    comment_id: int
    content: str
    created_at: datetime
    user: ProfileRead


class CommentResponse(CamelModel):
    comment: CommentRead


class CommentListResponse(CamelModel):
    comments: List[CommentRead]
