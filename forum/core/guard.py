# forum/core/guard.py

"""
요청 단위 권한 검사(Authorization Guard) 모듈입니다.

인증된 사용자(actor)가 대상 리소스(계정, 게시글, 댓글, 프로필)에 대해
요청한 작업을 수행할 수 있는지 판단합니다.

- authorize(): 순수 함수. DB를 조회하지 않으며, 호출 측이 관계 정보(GuardContext)를 채워 전달합니다.
- enforce(): authorize() 결과가 거부이면 HTTPException을 발생시킵니다.

상태 코드 규칙:
- 403 Forbidden: 소유자가 아닌 리소스 변경, 작성자에게 차단된 사용자의 상호작용
- 400 Bad Request: 자기 자신 대상 관계 작업, 이미 그 상태인 관계/좋아요의 중복 요청
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


class Action(str, Enum):
    UPDATE_ACCOUNT = "update_account"
    DELETE_ACCOUNT = "delete_account"
    UPDATE_POST = "update_post"
    DELETE_POST = "delete_post"
    LIKE_POST = "like_post"
    UNLIKE_POST = "unlike_post"
    CREATE_COMMENT = "create_comment"
    DELETE_COMMENT = "delete_comment"
    FOLLOW = "follow"
    UNFOLLOW = "unfollow"
    BLOCK = "block"
    UNBLOCK = "unblock"


@dataclass(frozen=True)
class GuardContext:
    """
    권한 판단에 필요한 정보.

    owner_id는 작업 대상의 주인입니다: 계정 본인, 게시글/댓글 작성자, 또는 프로필 사용자.
    관계 플래그는 모두 actor 기준입니다.
    """
    actor_id: int
    owner_id: int
    liked: bool = False             # actor가 게시글에 좋아요를 누른 상태
    following: bool = False         # actor → owner 팔로우
    blocking: bool = False          # actor → owner 차단
    blocked_by_owner: bool = False  # owner → actor 차단


@dataclass(frozen=True)
class Decision:
    allowed: bool
    status_code: int = status.HTTP_200_OK
    detail: Optional[str] = None


ALLOW = Decision(allowed=True)


def _deny(status_code: int, detail: str) -> Decision:
    return Decision(allowed=False, status_code=status_code, detail=detail)


# 소유자만 수행할 수 있는 작업과 거부 메시지
_OWNER_ONLY = {
    Action.UPDATE_ACCOUNT: "You can only update your own account",
    Action.DELETE_ACCOUNT: "You can only delete your own account",
    Action.UPDATE_POST: "You are not the author of this post",
    Action.DELETE_POST: "You are not the author of this post",
    Action.DELETE_COMMENT: "You are not the author of this comment",
}

# 게시글 작성자와의 관계가 필요한 작업
_POST_INTERACTIONS = (Action.LIKE_POST, Action.UNLIKE_POST, Action.CREATE_COMMENT)


def authorize(action: Action, ctx: GuardContext) -> Decision:
    """actor가 action을 수행할 수 있는지 판단합니다."""
    if action in _OWNER_ONLY:
        if ctx.actor_id != ctx.owner_id:
            return _deny(status.HTTP_403_FORBIDDEN, _OWNER_ONLY[action])
        return ALLOW

    if action in _POST_INTERACTIONS:
        if ctx.blocked_by_owner:
            return _deny(status.HTTP_403_FORBIDDEN, "You are blocked by the author of this post")
        if action is Action.LIKE_POST and ctx.liked:
            return _deny(status.HTTP_400_BAD_REQUEST, "You have already liked this post")
        if action is Action.UNLIKE_POST and not ctx.liked:
            return _deny(status.HTTP_400_BAD_REQUEST, "You have not liked this post")
        return ALLOW

    # 프로필 관계 작업 (follow / unfollow / block / unblock)
    if ctx.actor_id == ctx.owner_id:
        return _deny(status.HTTP_400_BAD_REQUEST, f"You cannot {action.value} yourself")

    if action is Action.FOLLOW:
        if ctx.blocked_by_owner:
            return _deny(status.HTTP_403_FORBIDDEN, "You have been blocked by this user")
        if ctx.blocking:
            return _deny(status.HTTP_400_BAD_REQUEST, "You are blocking this user")
        if ctx.following:
            return _deny(status.HTTP_400_BAD_REQUEST, "You are already following this user")
    elif action is Action.UNFOLLOW:
        if not ctx.following:
            return _deny(status.HTTP_400_BAD_REQUEST, "You are not following this user")
    elif action is Action.BLOCK:
        if ctx.blocking:
            return _deny(status.HTTP_400_BAD_REQUEST, "User has already been blocked")
    elif action is Action.UNBLOCK:
        if not ctx.blocking:
            return _deny(status.HTTP_400_BAD_REQUEST, "You have not blocked this user")
    return ALLOW


def enforce(action: Action, ctx: GuardContext) -> None:
    """
    authorize() 결과가 거부이면 해당 상태 코드의 HTTPException을 발생시킵니다.
    """
    decision = authorize(action, ctx)
    if not decision.allowed:
        logger.warning(
            "Denied %s: actor=%s owner=%s (%s)",
            action.value, ctx.actor_id, ctx.owner_id, decision.detail,
        )
        raise HTTPException(status_code=decision.status_code, detail=decision.detail)
