# forum/domains/usr/crud.py

"""
'usr' 도메인의 CRUD 작업을 담당하는 모듈입니다.

- 사용자 가입/인증/수정/탈퇴 (탈퇴 시 연관 데이터 일괄 삭제)
- 게시글 열람 기록 저장, 조회, 정리
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import HTTPException, status

from forum.core.config import settings
from forum.core.crud_base import CRUDBase
from forum.core.security import create_access_token, get_password_hash, verify_password
from forum.domains.board import crud as board_crud
from forum.domains.board import models as board_models
from forum.domains.social import models as social_models
from forum.utils.times import to_local_time
from . import models as usr_models
from . import schemas as usr_schemas

logger = logging.getLogger(__name__)


# =============================================================================
# 1. users 테이블 CRUD
# =============================================================================
class CRUDUser(CRUDBase[usr_models.User, usr_schemas.UserCreate, usr_schemas.UserUpdate]):
    def __init__(self):
        super().__init__(model=usr_models.User)

    async def get_by_email(self, db: AsyncSession, *, email: str) -> Optional[usr_models.User]:
        """이메일로 사용자를 조회합니다."""
        return await self.get_by_attribute(db, attribute="email", value=email)

    async def get_by_username(self, db: AsyncSession, *, username: str) -> Optional[usr_models.User]:
        """사용자명으로 사용자를 조회합니다."""
        return await self.get_by_attribute(db, attribute="username", value=username)

    async def _check_unique(self, db: AsyncSession, *, email: Optional[str], username: Optional[str]) -> None:
        if email is not None and await self.get_by_email(db, email=email):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")
        if username is not None and await self.get_by_username(db, username=username):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already registered")

    async def create(self, db: AsyncSession, *, obj_in: usr_schemas.UserCreate) -> usr_models.User:
        """새로운 사용자를 생성하며 비밀번호를 해싱하고 중복을 검사합니다."""
        await self._check_unique(db, email=obj_in.email, username=obj_in.username)

        user_data = obj_in.model_dump(exclude={"password"})
        db_user = usr_models.User(**user_data, password_hash=get_password_hash(obj_in.password))

        db.add(db_user)
        await db.commit()
        await db.refresh(db_user)
        logger.info("User created: %s (ID: %s)", db_user.username, db_user.id)
        return db_user

    async def authenticate(self, db: AsyncSession, *, email: str, password: str) -> Optional[usr_models.User]:
        """이메일과 비밀번호로 사용자를 인증합니다."""
        user = await self.get_by_email(db, email=email)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    async def update(
        self, db: AsyncSession, *, db_obj: usr_models.User, obj_in: usr_schemas.UserUpdate
    ) -> usr_models.User:
        """
        사용자 정보를 업데이트합니다.
        email/username/password는 null로 지울 수 없으며, 비밀번호는 다시 해싱합니다.
        """
        update_data = obj_in.model_dump(exclude_unset=True)
        for key in ("email", "username", "password"):
            if update_data.get(key) is None:
                update_data.pop(key, None)

        await self._check_unique(
            db,
            email=update_data.get("email") if update_data.get("email") != db_obj.email else None,
            username=update_data.get("username") if update_data.get("username") != db_obj.username else None,
        )

        if "password" in update_data:
            update_data["password_hash"] = get_password_hash(update_data.pop("password"))

        for key, value in update_data.items():
            setattr(db_obj, key, value)

        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def remove(self, db: AsyncSession, *, db_obj: usr_models.User) -> None:
        """
        사용자를 탈퇴 처리합니다.
        작성한 게시글(및 그 댓글/좋아요/열람 기록), 남긴 댓글과 좋아요, 열람 기록,
        팔로우/차단 관계를 모두 삭제합니다.
        """
        user_id = db_obj.id
        Post = board_models.Post
        Like = board_models.UserLikePost
        Follow = social_models.UserFollow
        Block = social_models.UserBlock

        # 1. 작성한 게시글과 딸린 데이터
        own_post_ids = (await db.execute(select(Post.id).where(Post.author_id == user_id))).scalars().all()
        await board_crud.delete_post_dependents(db, post_ids=list(own_post_ids))
        await db.execute(delete(Post).where(Post.author_id == user_id))

        # 2. 다른 게시글에 누른 좋아요: like_count를 DB에서 1씩 줄인 뒤 삭제
        liked_posts = (
            await db.execute(select(Post).where(Post.id.in_(select(Like.post_id).where(Like.user_id == user_id))))
        ).scalars().all()
        if liked_posts:
            await board_crud.shift_like_count(db, post_ids=[p.id for p in liked_posts], delta=-1)
        await db.execute(delete(Like).where(Like.user_id == user_id))

        # 3. 남긴 댓글, 열람 기록, 팔로우/차단 관계
        await db.execute(delete(board_models.PostComment).where(board_models.PostComment.user_id == user_id))
        await db.execute(delete(usr_models.UserHistory).where(usr_models.UserHistory.user_id == user_id))
        await db.execute(delete(Follow).where(or_(Follow.follower_id == user_id, Follow.followed_id == user_id)))
        await db.execute(delete(Block).where(or_(Block.blocker_id == user_id, Block.blocked_id == user_id)))

        await db.delete(db_obj)
        await db.commit()
        for liked_post in liked_posts:
            await db.refresh(liked_post)
        logger.info("User deleted: %s (ID: %s)", db_obj.username, user_id)


user = CRUDUser()


def build_user(db_user: usr_models.User) -> usr_schemas.UserRead:
    """사용자 정보에 새로 발급한 토큰을 담아 반환합니다."""
    return usr_schemas.UserRead(
        user_id=db_user.id,
        username=db_user.username,
        email=db_user.email,
        intro=db_user.intro,
        avatar=db_user.avatar,
        created_at=to_local_time(db_user.created_at, settings.TZ_EAST_OFFSET_IN_HOURS),
        token=create_access_token(db_user.id),
    )


# =============================================================================
# 2. user_history 테이블 (열람 기록)
# =============================================================================
async def record_view(db: AsyncSession, *, user_id: int, post_id: int) -> usr_models.UserHistory:
    entry = usr_models.UserHistory(user_id=user_id, post_id=post_id)
    db.add(entry)
    await db.commit()
    return entry


async def get_history(
    db: AsyncSession, *, user_id: int, skip: int = 0, limit: int = 20
) -> Tuple[List[Tuple[board_models.Post, datetime]], int]:
    """
    최근 열람 순으로 (게시글, 열람 시각) 목록과 전체 열람 기록 수를 반환합니다.
    같은 게시글을 여러 번 열람했다면 각각 한 항목입니다.
    """
    History = usr_models.UserHistory
    count_query = select(func.count()).select_from(History).where(History.user_id == user_id)
    total = (await db.execute(count_query)).scalar_one()

    query = (
        select(board_models.Post, History.viewed_at)
        .join(History, History.post_id == board_models.Post.id)
        .where(History.user_id == user_id)
        .order_by(History.viewed_at.desc(), History.id.desc())
        .offset(skip)
        .limit(limit)
    )
    rows = (await db.execute(query)).all()
    return [(row[0], row[1]) for row in rows], total


async def prune_history(db: AsyncSession, *, before: datetime) -> int:
    """before 이전의 열람 기록을 삭제하고 삭제된 행 수를 반환합니다."""
    result = await db.execute(delete(usr_models.UserHistory).where(usr_models.UserHistory.viewed_at < before))
    await db.commit()
    return result.rowcount
