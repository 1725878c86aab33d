# forum/domains/social/models.py

"""
'social' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
두 테이블 모두 (주체, 대상) 복합 기본 키를 가지므로 같은 관계가 중복 저장되지 않습니다.
"""

from typing import Optional
from datetime import datetime, UTC
from sqlmodel import Field, SQLModel, Column
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


# =============================================================================
# 1. user_follows 테이블 모델
# =============================================================================
class UserFollow(SQLModel, table=True):
    """follower가 followed를 팔로우합니다."""
    __tablename__ = "user_follows"

    follower_id: int = Field(foreign_key="users.id", primary_key=True)
    followed_id: int = Field(foreign_key="users.id", primary_key=True)

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False),
    )


# =============================================================================
# 2. user_blocks 테이블 모델
# =============================================================================
class UserBlock(SQLModel, table=True):
    """blocker가 blocked를 차단합니다."""
    __tablename__ = "user_blocks"

    blocker_id: int = Field(foreign_key="users.id", primary_key=True)
    blocked_id: int = Field(foreign_key="users.id", primary_key=True)

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False),
    )
