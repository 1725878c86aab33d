# forum/domains/social/crud.py

"""
'social' 도메인의 CRUD 작업을 담당하는 모듈입니다.

- 두 사용자 사이의 관계(팔로우/차단) 조회
- 팔로우/언팔로우, 차단/차단 해제
- 조회자 기준 프로필(ProfileRead) 구성
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import delete, or_, and_
from sqlmodel.ext.asyncio.session import AsyncSession

from forum.core.guard import GuardContext
from forum.domains.usr import models as usr_models
from . import models as social_models
from . import schemas as social_schemas

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Relations:
    """viewer 기준 target과의 관계"""
    following: bool = False  # viewer → target 팔로우
    followed: bool = False   # target → viewer 팔로우
    blocking: bool = False   # viewer → target 차단
    blocked: bool = False    # target → viewer 차단

    def guard_context(self, actor_id: int, owner_id: int, liked: bool = False) -> GuardContext:
        return GuardContext(
            actor_id=actor_id,
            owner_id=owner_id,
            liked=liked,
            following=self.following,
            blocking=self.blocking,
            blocked_by_owner=self.blocked,
        )


NO_RELATIONS = Relations()


# =============================================================================
# 1. 관계 조회
# =============================================================================
async def is_following(db: AsyncSession, *, follower_id: int, followed_id: int) -> bool:
    return await db.get(social_models.UserFollow, (follower_id, followed_id)) is not None


async def is_blocking(db: AsyncSession, *, blocker_id: int, blocked_id: int) -> bool:
    return await db.get(social_models.UserBlock, (blocker_id, blocked_id)) is not None


async def get_relations(db: AsyncSession, *, viewer_id: Optional[int], target_id: int) -> Relations:
    """익명(viewer_id=None)이거나 자기 자신이면 모든 관계가 False입니다."""
    if viewer_id is None or viewer_id == target_id:
        return NO_RELATIONS
    return Relations(
        following=await is_following(db, follower_id=viewer_id, followed_id=target_id),
        followed=await is_following(db, follower_id=target_id, followed_id=viewer_id),
        blocking=await is_blocking(db, blocker_id=viewer_id, blocked_id=target_id),
        blocked=await is_blocking(db, blocker_id=target_id, blocked_id=viewer_id),
    )


async def build_profile(
    db: AsyncSession, *, user: usr_models.User, viewer: Optional[usr_models.User]
) -> social_schemas.ProfileRead:
    relations = await get_relations(db, viewer_id=viewer.id if viewer else None, target_id=user.id)
    return social_schemas.ProfileRead(
        username=user.username,
        intro=user.intro,
        avatar=user.avatar,
        followed=relations.followed,
        following=relations.following,
        blocked=relations.blocked,
        blocking=relations.blocking,
    )


# =============================================================================
# 2. 팔로우 / 차단 변경
# =============================================================================
async def follow(db: AsyncSession, *, follower_id: int, followed_id: int) -> None:
    db.add(social_models.UserFollow(follower_id=follower_id, followed_id=followed_id))
    await db.commit()
    logger.info("User %s followed user %s", follower_id, followed_id)


async def unfollow(db: AsyncSession, *, follower_id: int, followed_id: int) -> None:
    link = await db.get(social_models.UserFollow, (follower_id, followed_id))
    if link:
        await db.delete(link)
        await db.commit()
        logger.info("User %s unfollowed user %s", follower_id, followed_id)


async def block(db: AsyncSession, *, blocker_id: int, blocked_id: int) -> None:
    """차단하면 두 사람 사이의 팔로우 관계를 양방향 모두 끊습니다."""
    Follow = social_models.UserFollow
    await db.execute(
        delete(Follow).where(
            or_(
                and_(Follow.follower_id == blocker_id, Follow.followed_id == blocked_id),
                and_(Follow.follower_id == blocked_id, Follow.followed_id == blocker_id),
            )
        )
    )
    db.add(social_models.UserBlock(blocker_id=blocker_id, blocked_id=blocked_id))
    await db.commit()
    logger.info("User %s blocked user %s", blocker_id, blocked_id)


async def unblock(db: AsyncSession, *, blocker_id: int, blocked_id: int) -> None:
    link = await db.get(social_models.UserBlock, (blocker_id, blocked_id))
    if link:
        await db.delete(link)
        await db.commit()
        logger.info("User %s unblocked user %s", blocker_id, blocked_id)
