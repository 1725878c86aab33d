# forum/core/security.py

"""
애플리케이션의 보안 관련 유틸리티 함수 및 의존성 주입을 정의하는 모듈입니다.

- 비밀번호 해싱 및 검증.
- JWT(JSON Web Token) 생성 및 검증.
- Bearer 토큰으로 현재 사용자 획득 (필수 / 선택).
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel.ext.asyncio.session import AsyncSession

from forum import API_PREFIX
from forum.core.config import settings
from forum.core.database import get_session
from forum.domains.usr import models as usr_models

logger = logging.getLogger(__name__)


# --- 비밀번호 해싱 설정 ---
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    일반 텍스트 비밀번호와 해싱된 비밀번호를 비교하여 일치하는지 확인합니다.
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    주어진 비밀번호를 해싱합니다.
    """
    return pwd_context.hash(password)


# --- Bearer 토큰 스키마 ---
# 로그인은 JSON 본문(POST /users)으로 받지만 Swagger UI의 Authorize 버튼을 위해 tokenUrl을 지정합니다.
# auto_error=False: 헤더가 없을 때의 처리를 아래 의존성에서 직접 결정합니다 (필수 → 401, 선택 → None).
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{API_PREFIX}/users", auto_error=False)


# --- JWT 토큰 생성 및 검증 ---
def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    사용자 ID를 sub 클레임에 담은 Access Token을 생성합니다.
    만료 기간은 기본적으로 JWT_EXPIRATION_VALUE x JWT_EXPIRATION_UNIT 입니다.
    """
    if expires_delta is None:
        expires_delta = timedelta(seconds=settings.JWT_EXPIRATION_SECONDS)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, settings.JWT_SECRET.get_secret_value(), algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> int:
    """
    토큰을 검증하고 사용자 ID를 반환합니다.
    서명/알고리즘/만료 오류는 JWTError, sub 클레임 오류는 ValueError로 전달됩니다.
    """
    payload = jwt.decode(token, settings.JWT_SECRET.get_secret_value(), algorithms=[settings.JWT_ALGORITHM])
    sub = payload.get("sub")
    if sub is None:
        raise ValueError("Token has no subject")
    return int(sub)


def _credentials_exception(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_session),
) -> usr_models.User:
    """
    인증이 필요한 엔드포인트용 의존성입니다.
    토큰이 없거나 유효하지 않으면 401 Unauthorized를 발생시킵니다.
    """
    if token is None:
        raise _credentials_exception("Not authenticated")
    try:
        user_id = decode_access_token(token)
    except ExpiredSignatureError:
        raise _credentials_exception("Token has expired")
    except (JWTError, ValueError) as e:
        logger.debug("Rejected bearer token: %s", e)
        raise _credentials_exception("Could not validate credentials")

    user = await db.get(usr_models.User, user_id)
    if user is None:
        # 토큰 발급 후 탈퇴한 사용자
        raise _credentials_exception("Could not validate credentials")
    return user


async def get_optional_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_session),
) -> Optional[usr_models.User]:
    """
    인증이 선택적인 엔드포인트용 의존성입니다.
    토큰이 없거나 유효하지 않으면 익명 사용자(None)로 처리합니다.
    """
    if token is None:
        return None
    try:
        user_id = decode_access_token(token)
    except (JWTError, ValueError):
        return None
    return await db.get(usr_models.User, user_id)
