# forum/domains/social/routers.py

"""
'social' 도메인 (프로필, 팔로우, 차단)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel.ext.asyncio.session import AsyncSession

from forum.core.database import get_session
from forum.core import dependencies as deps
from forum.core.guard import Action, enforce
from forum.domains.usr import crud as usr_crud
from forum.domains.usr import models as usr_models

from . import crud as social_crud
from . import schemas as social_schemas


router = APIRouter(
    prefix="/profiles",
    tags=["Profiles (프로필 및 팔로우/차단)"],
    responses={404: {"description": "Not found"}},
)


async def _get_target(db: AsyncSession, username: str) -> usr_models.User:
    target = await usr_crud.user.get_by_username(db, username=username)
    if not target:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return target


async def _apply(
    db: AsyncSession, *, action: Action, actor: usr_models.User, target: usr_models.User
) -> social_schemas.ProfileResponse:
    """관계를 조회해 권한을 검사한 뒤 작업을 수행하고 갱신된 프로필을 반환합니다."""
    relations = await social_crud.get_relations(db, viewer_id=actor.id, target_id=target.id)
    enforce(action, relations.guard_context(actor_id=actor.id, owner_id=target.id))

    if action is Action.FOLLOW:
        await social_crud.follow(db, follower_id=actor.id, followed_id=target.id)
    elif action is Action.UNFOLLOW:
        await social_crud.unfollow(db, follower_id=actor.id, followed_id=target.id)
    elif action is Action.BLOCK:
        await social_crud.block(db, blocker_id=actor.id, blocked_id=target.id)
    elif action is Action.UNBLOCK:
        await social_crud.unblock(db, blocker_id=actor.id, blocked_id=target.id)

    profile = await social_crud.build_profile(db, user=target, viewer=actor)
    return social_schemas.ProfileResponse(profile=profile)


@router.get("/{username}", response_model=social_schemas.ProfileResponse, summary="프로필 조회")
async def read_profile(
    username: str,
    db: AsyncSession = Depends(get_session),
    current_user: Optional[usr_models.User] = Depends(deps.get_optional_user),
):
    """로그인한 경우 조회자 기준의 팔로우/차단 관계 플래그가 채워집니다."""
    target = await _get_target(db, username)
    profile = await social_crud.build_profile(db, user=target, viewer=current_user)
    return social_schemas.ProfileResponse(profile=profile)


@router.post("/{username}/follow", response_model=social_schemas.ProfileResponse, summary="팔로우")
async def follow_user(
    username: str,
    db: AsyncSession = Depends(get_session),
    current_user: usr_models.User = Depends(deps.get_current_user),
):
    target = await _get_target(db, username)
    return await _apply(db, action=Action.FOLLOW, actor=current_user, target=target)


@router.delete("/{username}/follow", response_model=social_schemas.ProfileResponse, summary="언팔로우")
async def unfollow_user(
    username: str,
    db: AsyncSession = Depends(get_session),
    current_user: usr_models.User = Depends(deps.get_current_user),
):
    target = await _get_target(db, username)
    return await _apply(db, action=Action.UNFOLLOW, actor=current_user, target=target)


@router.post("/{username}/block", response_model=social_schemas.ProfileResponse, summary="차단")
async def block_user(
    username: str,
    db: AsyncSession = Depends(get_session),
    current_user: usr_models.User = Depends(deps.get_current_user),
):
    """차단하면 두 사용자 사이의 팔로우 관계가 양방향 모두 해제됩니다."""
    target = await _get_target(db, username)
    return await _apply(db, action=Action.BLOCK, actor=current_user, target=target)


@router.delete("/{username}/block", response_model=social_schemas.ProfileResponse, summary="차단 해제")
async def unblock_user(
    username: str,
    db: AsyncSession = Depends(get_session),
    current_user: usr_models.User = Depends(deps.get_current_user),
):
    target = await _get_target(db, username)
    return await _apply(db, action=Action.UNBLOCK, actor=current_user, target=target)
