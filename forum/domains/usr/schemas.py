# forum/domains/usr/schemas.py

"""
'usr' 도메인의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
요청 본문은 {"user": {...}} 형태로 감싸서 받고, 응답도 같은 형태로 돌려줍니다.
"""

import re
from typing import Optional, List
from datetime import datetime
from sqlmodel import SQLModel, Field
from pydantic import BaseModel, EmailStr, field_validator

from forum.core.schemas import CamelModel
from forum.domains.board.schemas import PostRead

# 프로필 경로(/profiles/{username})에 그대로 쓰이므로 URL 안전 문자만 허용합니다.
USERNAME_PATTERN = re.compile(r"[A-Za-z0-9_.-]+")


def validate_username(value: Optional[str]) -> Optional[str]:
    if value is not None and not USERNAME_PATTERN.fullmatch(value):
        raise ValueError("Username may only contain letters, digits, '_', '.' and '-'")
    return value


# =============================================================================
# 1. 요청 스키마
# =============================================================================
class UserCreate(SQLModel):
    """회원 가입"""
    email: EmailStr = Field(..., max_length=100)
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=8, max_length=72)

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        return validate_username(v)


class UserUpdate(SQLModel):
    """사용자 정보 수정. 보낸 필드만 반영합니다."""
    email: Optional[EmailStr] = Field(None, max_length=100)
    username: Optional[str] = Field(None, min_length=1, max_length=50)
    password: Optional[str] = Field(None, min_length=8, max_length=72)
    intro: Optional[str] = None
    avatar: Optional[str] = Field(None, max_length=500)

    @field_validator("username")
    @classmethod
    def check_username(cls, v: Optional[str]) -> Optional[str]:
        return validate_username(v)


class UserLogin(SQLModel):
    email: EmailStr
    password: str


class UserCreateRequest(BaseModel):
    user: UserCreate


class UserUpdateRequest(BaseModel):
    user: UserUpdate


class UserLoginRequest(BaseModel):
    user: UserLogin


# =============================================================================
# 2. 응답 스키마
# =============================================================================
class UserRead(CamelModel):
    """사용자 정보와 새로 발급한 토큰"""
    user_id: int
    username: str
    email: str
    intro: Optional[str] = None
    avatar: Optional[str] = None
    created_at: datetime
    token: str


class UserResponse(CamelModel):
    user: UserRead


class HistoryResponse(CamelModel):
    """열람 기록. posts[i]를 열람한 시각이 time_vec[i]입니다."""
    posts: List[PostRead]
    time_vec: List[datetime]
    post_count: int
