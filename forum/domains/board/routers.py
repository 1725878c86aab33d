# forum/domains/board/routers.py

"""
'board' 도메인 (게시글, 좋아요, 댓글)과 관련된 API 엔드포인트를 정의하는 모듈입니다.

- 조회 엔드포인트는 로그인이 선택이며, 로그인한 경우 liked/관계 플래그가 채워집니다.
- 변경 엔드포인트는 로그인이 필수이며, 권한 검사(guard)를 통과해야 합니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from forum.core.database import get_session
from forum.core import dependencies as deps
from forum.core.guard import Action, GuardContext, enforce
from forum.domains.social import crud as social_crud
from forum.domains.usr import crud as usr_crud
from forum.domains.usr import models as usr_models

from . import crud as board_crud
from . import models as board_models
from . import schemas as board_schemas


router = APIRouter(
    prefix="/posts",
    tags=["Posts (게시글, 좋아요, 댓글)"],
    responses={404: {"description": "Not found"}},
)


async def _get_post(db: AsyncSession, post_id: int) -> board_models.Post:
    db_post = await board_crud.post.get(db, id=post_id)
    if not db_post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return db_post


async def _author_context(
    db: AsyncSession, *, actor: usr_models.User, db_post: board_models.Post, liked: bool = False
) -> GuardContext:
    """게시글 작성자와 actor 사이의 관계를 담은 GuardContext를 만듭니다."""
    relations = await social_crud.get_relations(db, viewer_id=actor.id, target_id=db_post.author_id)
    return relations.guard_context(actor_id=actor.id, owner_id=db_post.author_id, liked=liked)


# =============================================================================
# 1. 게시글 (Post) 엔드포인트
# =============================================================================
@router.get("", response_model=board_schemas.PostListResponse, summary="게시글 목록 조회")
async def read_posts(
    db: AsyncSession = Depends(get_session),
    author: Optional[str] = Query(None, description="작성자 username"),
    liked_by: Optional[str] = Query(None, alias="likedBy", description="좋아요를 누른 사용자 username"),
    following: bool = Query(False, description="내가 팔로우하는 작성자의 글만"),
    skip: int = Query(0, ge=0, alias="offset"),
    limit: int = Query(20, ge=1, le=100),
    current_user: Optional[usr_models.User] = Depends(deps.get_optional_user),
):
    """
    최신순 게시글 목록입니다. postCount는 페이징 전 조건에 맞는 전체 개수입니다.
    존재하지 않는 사용자명으로 필터링하면 빈 목록을 반환합니다.
    """
    if following and current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Login to filter following author's post",
            headers={"WWW-Authenticate": "Bearer"},
        )

    author_id = liked_by_id = None
    if author is not None:
        author_user = await usr_crud.user.get_by_username(db, username=author)
        if not author_user:
            return board_schemas.PostListResponse(posts=[], post_count=0)
        author_id = author_user.id
    if liked_by is not None:
        liker = await usr_crud.user.get_by_username(db, username=liked_by)
        if not liker:
            return board_schemas.PostListResponse(posts=[], post_count=0)
        liked_by_id = liker.id

    db_posts, total = await board_crud.post.get_multi_filtered(
        db,
        author_id=author_id,
        liked_by_id=liked_by_id,
        followed_by_id=current_user.id if following else None,
        skip=skip,
        limit=limit,
    )
    posts = [await board_crud.build_post(db, db_post=p, viewer=current_user) for p in db_posts]
    return board_schemas.PostListResponse(posts=posts, post_count=total)


@router.post("", response_model=board_schemas.PostResponse, status_code=status.HTTP_201_CREATED, summary="게시글 작성")
async def create_post(
    body: board_schemas.PostCreateRequest,
    db: AsyncSession = Depends(get_session),
    current_user: usr_models.User = Depends(deps.get_current_user),
):
    db_post = await board_crud.post.create(db, obj_in=body.post, author_id=current_user.id)
    return board_schemas.PostResponse(post=await board_crud.build_post(db, db_post=db_post, viewer=current_user))


@router.get("/{post_id}", response_model=board_schemas.PostResponse, summary="게시글 조회")
async def read_post(
    post_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: Optional[usr_models.User] = Depends(deps.get_optional_user),
):
    """로그인한 사용자가 조회하면 열람 기록에 남습니다."""
    db_post = await _get_post(db, post_id)
    if current_user is not None:
        await usr_crud.record_view(db, user_id=current_user.id, post_id=db_post.id)
    return board_schemas.PostResponse(post=await board_crud.build_post(db, db_post=db_post, viewer=current_user))


@router.put("/{post_id}", response_model=board_schemas.PostResponse, summary="게시글 수정")
async def update_post(
    post_id: int,
    body: board_schemas.PostUpdateRequest,
    db: AsyncSession = Depends(get_session),
    current_user: usr_models.User = Depends(deps.get_current_user),
):
    db_post = await _get_post(db, post_id)
    enforce(Action.UPDATE_POST, GuardContext(actor_id=current_user.id, owner_id=db_post.author_id))
    db_post = await board_crud.post.update(db, db_obj=db_post, obj_in=body.post)
    return board_schemas.PostResponse(post=await board_crud.build_post(db, db_post=db_post, viewer=current_user))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT, summary="게시글 삭제")
async def delete_post(
    post_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: usr_models.User = Depends(deps.get_current_user),
):
    db_post = await _get_post(db, post_id)
    enforce(Action.DELETE_POST, GuardContext(actor_id=current_user.id, owner_id=db_post.author_id))
    await board_crud.post.remove(db, id=post_id)
    return None


# =============================================================================
# 2. 좋아요 (Like) 엔드포인트
# =============================================================================
@router.post("/{post_id}/like", response_model=board_schemas.PostResponse, summary="좋아요")
async def like_post(
    post_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: usr_models.User = Depends(deps.get_current_user),
):
    db_post = await _get_post(db, post_id)
    liked = await board_crud.is_liked(db, user_id=current_user.id, post_id=post_id)
    enforce(Action.LIKE_POST, await _author_context(db, actor=current_user, db_post=db_post, liked=liked))
    db_post = await board_crud.like(db, db_post=db_post, user_id=current_user.id)
    return board_schemas.PostResponse(post=await board_crud.build_post(db, db_post=db_post, viewer=current_user))


@router.delete("/{post_id}/like", response_model=board_schemas.PostResponse, summary="좋아요 취소")
async def unlike_post(
    post_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: usr_models.User = Depends(deps.get_current_user),
):
    db_post = await _get_post(db, post_id)
    liked = await board_crud.is_liked(db, user_id=current_user.id, post_id=post_id)
    enforce(Action.UNLIKE_POST, await _author_context(db, actor=current_user, db_post=db_post, liked=liked))
    db_post = await board_crud.unlike(db, db_post=db_post, user_id=current_user.id)
    return board_schemas.PostResponse(post=await board_crud.build_post(db, db_post=db_post, viewer=current_user))


# =============================================================================
# 3. 댓글 (Comment) 엔드포인트
# =============================================================================
@router.post(
    "/{post_id}/comments",
    response_model=board_schemas.CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="댓글 작성",
)
async def create_comment(
    post_id: int,
    body: board_schemas.CommentCreateRequest,
    db: AsyncSession = Depends(get_session),
    current_user: usr_models.User = Depends(deps.get_current_user),
):
    db_post = await _get_post(db, post_id)
    enforce(Action.CREATE_COMMENT, await _author_context(db, actor=current_user, db_post=db_post))
    db_comment = await board_crud.comment.create(db, obj_in=body.comment, user_id=current_user.id, post_id=post_id)
    comment = await board_crud.build_comment(db, db_comment=db_comment, viewer=current_user)
    return board_schemas.CommentResponse(comment=comment)


@router.get("/{post_id}/comments", response_model=board_schemas.CommentListResponse, summary="댓글 목록 조회")
async def read_comments(
    post_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: Optional[usr_models.User] = Depends(deps.get_optional_user),
):
    await _get_post(db, post_id)
    db_comments = await board_crud.comment.get_for_post(db, post_id=post_id)
    comments = [await board_crud.build_comment(db, db_comment=c, viewer=current_user) for c in db_comments]
    return board_schemas.CommentListResponse(comments=comments)


@router.delete("/{post_id}/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="댓글 삭제")
async def delete_comment(
    post_id: int,
    comment_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: usr_models.User = Depends(deps.get_current_user),
):
    await _get_post(db, post_id)
    db_comment = await board_crud.comment.get(db, id=comment_id)
    if not db_comment or db_comment.post_id != post_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    enforce(Action.DELETE_COMMENT, GuardContext(actor_id=current_user.id, owner_id=db_comment.user_id))
    await board_crud.comment.delete(db, id=comment_id)
    return None
