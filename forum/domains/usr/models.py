# forum/domains/usr/models.py

"""
'usr' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

- users: 계정 및 프로필 정보 (username, email, intro, avatar)
- user_history: 로그인 사용자의 게시글 열람 기록
"""

from typing import Optional
from datetime import datetime, UTC
from sqlmodel import Field, SQLModel, Column
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


# =============================================================================
# 1. users 테이블 모델
# =============================================================================
class User(SQLModel, table=True):
    """
    포럼 사용자 계정입니다. 프로필 정보(intro, avatar)도 함께 가집니다.
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True, description="사용자 고유 ID")
    username: str = Field(max_length=50, sa_column_kwargs={"unique": True}, description="사용자명 (프로필 경로에 사용)")
    email: str = Field(max_length=100, sa_column_kwargs={"unique": True}, description="로그인 이메일")
    password_hash: str = Field(max_length=255, description="해싱된 비밀번호")
    intro: Optional[str] = Field(default=None, description="자기소개")
    avatar: Optional[str] = Field(default=None, max_length=500, description="아바타 이미지 URL")

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False),
        description="가입 일시"
    )


# =============================================================================
# 2. user_history 테이블 모델
# =============================================================================
class UserHistory(SQLModel, table=True):
    """
    로그인 사용자가 게시글을 열람할 때마다 한 행씩 쌓입니다.
    """
    __tablename__ = "user_history"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    post_id: int = Field(foreign_key="posts.id", index=True)

    viewed_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False),
        description="열람 일시"
    )
