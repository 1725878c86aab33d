# forum/domains/board/models.py

"""
'board' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

- posts: 게시글. like_count는 user_like_posts 행 수와 항상 일치해야 합니다.
- post_comments: 게시글 댓글
- user_like_posts: (user_id, post_id) 복합 키로 한 사용자의 중복 좋아요를 막습니다.
"""

from typing import Optional
from datetime import datetime, UTC
from sqlmodel import Field, SQLModel, Column
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


# =============================================================================
# 1. posts 테이블 모델
# =============================================================================
class Post(SQLModel, table=True):
    __tablename__ = "posts"

    id: Optional[int] = Field(default=None, primary_key=True, description="게시글 고유 ID")
    title: str = Field(max_length=200, description="제목")
    description: str = Field(max_length=500, description="요약")
    content: str = Field(description="본문")
    author_id: int = Field(foreign_key="users.id", index=True, description="작성자 ID")
    like_count: int = Field(default=0, description="좋아요 수")

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False, index=True),
        description="작성 일시"
    )


# =============================================================================
# 2. post_comments 테이블 모델
# =============================================================================
class PostComment(SQLModel, table=True):
    __tablename__ = "post_comments"

    id: Optional[int] = Field(default=None, primary_key=True, description="댓글 고유 ID")
    content: str = Field(description="댓글 내용")
    user_id: int = Field(foreign_key="users.id", index=True, description="작성자 ID")
    post_id: int = Field(foreign_key="posts.id", index=True, description="게시글 ID")

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False),
        description="작성 일시"
    )


# =============================================================================
# 3. user_like_posts 테이블 모델
# =============================================================================
class UserLikePost(SQLModel, table=True):
    __tablename__ = "user_like_posts"

    user_id: int = Field(foreign_key="users.id", primary_key=True)
    post_id: int = Field(foreign_key="posts.id", primary_key=True)

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False),
    )
