# forum/domains/usr/routers.py

"""
'usr' 도메인 (사용자 계정)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
계정 수정/탈퇴는 권한 검사(guard)를 거친 뒤에만 데이터 계층에 도달합니다.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from forum.core.config import settings
from forum.core.database import get_session
from forum.core import dependencies as deps
from forum.core.guard import Action, GuardContext, enforce
from forum.domains.board import crud as board_crud
from forum.utils.times import to_local_time

from . import crud as usr_crud
from . import models as usr_models
from . import schemas as usr_schemas


# 라우터 인스턴스 생성 (prefix는 main.py에서 관리)
router = APIRouter(
    prefix="/users",
    tags=["Users (사용자 계정)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. 인증 (Authentication) 엔드포인트
# =============================================================================
@router.post("", response_model=usr_schemas.UserResponse, summary="로그인 (토큰 발급)")
async def login_user(
    body: usr_schemas.UserLoginRequest,
    db: AsyncSession = Depends(get_session),
):
    user = await usr_crud.user.authenticate(db, email=body.user.email, password=body.user.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return usr_schemas.UserResponse(user=usr_crud.build_user(user))


@router.post("/create", response_model=usr_schemas.UserResponse, status_code=status.HTTP_201_CREATED, summary="회원 가입")
async def create_user(
    body: usr_schemas.UserCreateRequest,
    db: AsyncSession = Depends(get_session),
):
    user = await usr_crud.user.create(db, obj_in=body.user)
    return usr_schemas.UserResponse(user=usr_crud.build_user(user))


# =============================================================================
# 2. 현재 사용자 (Me) 엔드포인트
# =============================================================================
@router.get("", response_model=usr_schemas.UserResponse, summary="현재 사용자 정보 조회")
async def read_current_user(current_user: usr_models.User = Depends(deps.get_current_user)):
    """현재 사용자 정보와 새로 발급한 토큰을 반환합니다."""
    return usr_schemas.UserResponse(user=usr_crud.build_user(current_user))


@router.put("", response_model=usr_schemas.UserResponse, summary="현재 사용자 정보 수정")
async def update_current_user(
    body: usr_schemas.UserUpdateRequest,
    db: AsyncSession = Depends(get_session),
    current_user: usr_models.User = Depends(deps.get_current_user),
):
    enforce(Action.UPDATE_ACCOUNT, GuardContext(actor_id=current_user.id, owner_id=current_user.id))
    user = await usr_crud.user.update(db, db_obj=current_user, obj_in=body.user)
    return usr_schemas.UserResponse(user=usr_crud.build_user(user))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT, summary="회원 탈퇴")
async def delete_current_user(
    db: AsyncSession = Depends(get_session),
    current_user: usr_models.User = Depends(deps.get_current_user),
):
    """
    현재 사용자를 삭제합니다. 작성한 게시글, 댓글, 좋아요, 팔로우/차단 관계도 함께 삭제됩니다.
    """
    enforce(Action.DELETE_ACCOUNT, GuardContext(actor_id=current_user.id, owner_id=current_user.id))
    await usr_crud.user.remove(db, db_obj=current_user)
    return None


# =============================================================================
# 3. 열람 기록 (History) 엔드포인트
# =============================================================================
@router.get("/history", response_model=usr_schemas.HistoryResponse, summary="게시글 열람 기록 조회")
async def read_history(
    db: AsyncSession = Depends(get_session),
    skip: int = Query(0, ge=0, alias="offset"),
    limit: int = Query(20, ge=1, le=100),
    current_user: usr_models.User = Depends(deps.get_current_user),
):
    rows, total = await usr_crud.get_history(db, user_id=current_user.id, skip=skip, limit=limit)
    posts = [await board_crud.build_post(db, db_post=db_post, viewer=current_user) for db_post, _ in rows]
    time_vec = [to_local_time(viewed_at, settings.TZ_EAST_OFFSET_IN_HOURS) for _, viewed_at in rows]
    return usr_schemas.HistoryResponse(posts=posts, time_vec=time_vec, post_count=total)
