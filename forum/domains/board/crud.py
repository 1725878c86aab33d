# forum/domains/board/crud.py

"""
'board' 도메인의 CRUD 작업을 담당하는 모듈입니다.
게시글 목록 필터링, 좋아요 수 동기화, 댓글 관리와 응답 DTO 구성을 포함합니다.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from forum.core.config import settings
from forum.core.crud_base import CRUDBase
from forum.domains.social import crud as social_crud
from forum.domains.social import models as social_models
from forum.domains.usr import models as usr_models
from forum.utils.times import to_local_time
from . import models as board_models
from . import schemas as board_schemas

logger = logging.getLogger(__name__)


# =============================================================================
# 1. posts 테이블 CRUD
# =============================================================================
class CRUDPost(CRUDBase[board_models.Post, board_schemas.PostCreate, board_schemas.PostUpdate]):
    def __init__(self):
        super().__init__(model=board_models.Post)

    async def create(self, db: AsyncSession, *, obj_in: board_schemas.PostCreate, author_id: int) -> board_models.Post:
        db_post = await super().create(db, obj_in=obj_in, author_id=author_id)
        logger.info("User %s created post %s", author_id, db_post.id)
        return db_post

    async def update(
        self, db: AsyncSession, *, db_obj: board_models.Post, obj_in: board_schemas.PostUpdate
    ) -> board_models.Post:
        # null 값은 "변경 없음"으로 취급합니다 (모든 컬럼이 NOT NULL).
        changes = {k: v for k, v in obj_in.model_dump(exclude_unset=True).items() if v is not None}
        return await super().update(db, db_obj=db_obj, obj_in=board_schemas.PostUpdate(**changes))

    async def get_multi_filtered(
        self,
        db: AsyncSession,
        *,
        author_id: Optional[int] = None,
        liked_by_id: Optional[int] = None,
        followed_by_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[board_models.Post], int]:
        """
        작성자 / 좋아요 누른 사용자 / 팔로우 중인 작성자 조건으로 게시글을 조회합니다.
        최신순으로 정렬하며, 페이징 전의 전체 개수를 함께 반환합니다.
        """
        Post = board_models.Post
        conditions = []
        if author_id is not None:
            conditions.append(Post.author_id == author_id)
        if liked_by_id is not None:
            liked = select(board_models.UserLikePost.post_id).where(board_models.UserLikePost.user_id == liked_by_id)
            conditions.append(Post.id.in_(liked))
        if followed_by_id is not None:
            followed = select(social_models.UserFollow.followed_id).where(
                social_models.UserFollow.follower_id == followed_by_id
            )
            conditions.append(Post.author_id.in_(followed))

        count_query = select(func.count()).select_from(Post).where(*conditions)
        total = (await db.execute(count_query)).scalar_one()

        query = (
            select(Post)
            .where(*conditions)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await db.execute(query)
        return result.scalars().all(), total

    async def remove(self, db: AsyncSession, *, id: int) -> Optional[board_models.Post]:
        """
        게시글과 그에 딸린 댓글, 좋아요, 열람 기록을 함께 삭제합니다.
        """
        db_post = await self.get(db, id=id)
        if db_post is None:
            return None
        await delete_post_dependents(db, post_ids=[id])
        await db.delete(db_post)
        await db.commit()
        logger.info("Post %s deleted", id)
        return db_post


async def delete_post_dependents(db: AsyncSession, *, post_ids: List[int]) -> None:
    """게시글들에 딸린 행을 삭제합니다. 커밋은 호출 측에서 합니다."""
    if not post_ids:
        return
    await db.execute(delete(board_models.PostComment).where(board_models.PostComment.post_id.in_(post_ids)))
    await db.execute(delete(board_models.UserLikePost).where(board_models.UserLikePost.post_id.in_(post_ids)))
    await db.execute(delete(usr_models.UserHistory).where(usr_models.UserHistory.post_id.in_(post_ids)))


post = CRUDPost()


# =============================================================================
# 2. user_like_posts 테이블 (좋아요)
# =============================================================================
async def is_liked(db: AsyncSession, *, user_id: int, post_id: int) -> bool:
    return await db.get(board_models.UserLikePost, (user_id, post_id)) is not None


async def shift_like_count(db: AsyncSession, *, post_ids: List[int], delta: int) -> None:
    """
    like_count를 DB 안에서 delta만큼 더합니다 (읽고 다시 쓰지 않음).
    감소할 때는 0인 행은 건드리지 않습니다. 커밋은 호출 측에서 합니다.
    """
    Post = board_models.Post
    query = update(Post).where(Post.id.in_(post_ids)).values(like_count=Post.like_count + delta)
    if delta < 0:
        query = query.where(Post.like_count > 0)
    await db.execute(query.execution_options(synchronize_session=False))


async def like(db: AsyncSession, *, db_post: board_models.Post, user_id: int) -> board_models.Post:
    """좋아요를 추가하고 like_count를 1 증가시킵니다 (같은 트랜잭션)."""
    db.add(board_models.UserLikePost(user_id=user_id, post_id=db_post.id))
    await shift_like_count(db, post_ids=[db_post.id], delta=1)
    await db.commit()
    await db.refresh(db_post)
    return db_post


async def unlike(db: AsyncSession, *, db_post: board_models.Post, user_id: int) -> board_models.Post:
    """좋아요를 취소하고 like_count를 1 감소시킵니다 (같은 트랜잭션)."""
    link = await db.get(board_models.UserLikePost, (user_id, db_post.id))
    if link:
        await db.delete(link)
        await shift_like_count(db, post_ids=[db_post.id], delta=-1)
        await db.commit()
        await db.refresh(db_post)
    return db_post


# =============================================================================
# 3. post_comments 테이블 CRUD
# =============================================================================
class CRUDComment(CRUDBase[board_models.PostComment, board_schemas.CommentCreate, board_schemas.CommentCreate]):
    def __init__(self):
        super().__init__(model=board_models.PostComment)

    async def get_for_post(self, db: AsyncSession, *, post_id: int) -> List[board_models.PostComment]:
        """게시글의 댓글을 작성 순서대로 조회합니다."""
        query = (
            select(self.model)
            .where(self.model.post_id == post_id)
            .order_by(self.model.created_at, self.model.id)
        )
        result = await db.execute(query)
        return result.scalars().all()


comment = CRUDComment()


# =============================================================================
# 4. 응답 DTO 구성
# =============================================================================
async def build_post(
    db: AsyncSession, *, db_post: board_models.Post, viewer: Optional[usr_models.User]
) -> board_schemas.PostRead:
    author = await db.get(usr_models.User, db_post.author_id)
    liked = viewer is not None and await is_liked(db, user_id=viewer.id, post_id=db_post.id)
    return board_schemas.PostRead(
        post_id=db_post.id,
        title=db_post.title,
        description=db_post.description,
        content=db_post.content,
        created_at=to_local_time(db_post.created_at, settings.TZ_EAST_OFFSET_IN_HOURS),
        liked=liked,
        liked_count=db_post.like_count,
        author=await social_crud.build_profile(db, user=author, viewer=viewer),
    )


async def build_comment(
    db: AsyncSession, *, db_comment: board_models.PostComment, viewer: Optional[usr_models.User]
) -> board_schemas.CommentRead:
    writer = await db.get(usr_models.User, db_comment.user_id)
    return board_schemas.CommentRead(
        comment_id=db_comment.id,
        content=db_comment.content,
        created_at=to_local_time(db_comment.created_at, settings.TZ_EAST_OFFSET_IN_HOURS),
        user=await social_crud.build_profile(db, user=writer, viewer=viewer),
    )
