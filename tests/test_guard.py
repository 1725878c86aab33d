# tests/test_guard.py

"""
권한 검사(authorize / enforce) 단위 테스트 모듈입니다.
DB 없이 GuardContext만으로 판단 결과를 검증합니다.
"""

import pytest
from fastapi import HTTPException

from forum.core.guard import ALLOW, Action, GuardContext, authorize, enforce

ACTOR = 1
OTHER = 2


# =============================================================================
# 1. 소유자 전용 작업
# =============================================================================
@pytest.mark.parametrize(
    "action, detail",
    [
        (Action.UPDATE_ACCOUNT, "You can only update your own account"),
        (Action.DELETE_ACCOUNT, "You can only delete your own account"),
        (Action.UPDATE_POST, "You are not the author of this post"),
        (Action.DELETE_POST, "You are not the author of this post"),
        (Action.DELETE_COMMENT, "You are not the author of this comment"),
    ],
)
def test_owner_only_action_denied_for_other_user(action, detail):
    """소유자가 아닌 사용자의 변경 요청은 403으로 거부됩니다."""
    decision = authorize(action, GuardContext(actor_id=ACTOR, owner_id=OTHER))

    assert decision.allowed is False
    assert decision.status_code == 403
    assert decision.detail == detail


@pytest.mark.parametrize(
    "action",
    [Action.UPDATE_ACCOUNT, Action.DELETE_ACCOUNT, Action.UPDATE_POST, Action.DELETE_POST, Action.DELETE_COMMENT],
)
def test_owner_only_action_allowed_for_owner(action):
    assert authorize(action, GuardContext(actor_id=ACTOR, owner_id=ACTOR)) == ALLOW


def test_owner_check_ignores_relation_flags():
    """소유자 검사는 차단 여부와 무관합니다."""
    ctx = GuardContext(actor_id=ACTOR, owner_id=ACTOR, blocked_by_owner=True, blocking=True)
    assert authorize(Action.DELETE_POST, ctx).allowed is True


# =============================================================================
# 2. 게시글 상호작용 (좋아요, 댓글)
# =============================================================================
@pytest.mark.parametrize("action", [Action.LIKE_POST, Action.UNLIKE_POST, Action.CREATE_COMMENT])
def test_post_interaction_denied_when_blocked_by_author(action):
    """작성자에게 차단된 사용자는 좋아요/취소/댓글을 할 수 없습니다."""
    decision = authorize(action, GuardContext(actor_id=ACTOR, owner_id=OTHER, liked=True, blocked_by_owner=True))

    assert decision.status_code == 403
    assert decision.detail == "You are blocked by the author of this post"


def test_like_twice_is_bad_request():
    decision = authorize(Action.LIKE_POST, GuardContext(actor_id=ACTOR, owner_id=OTHER, liked=True))
    assert decision.status_code == 400
    assert decision.detail == "You have already liked this post"


def test_unlike_without_like_is_bad_request():
    decision = authorize(Action.UNLIKE_POST, GuardContext(actor_id=ACTOR, owner_id=OTHER, liked=False))
    assert decision.status_code == 400
    assert decision.detail == "You have not liked this post"


def test_author_can_like_and_comment_own_post():
    ctx = GuardContext(actor_id=ACTOR, owner_id=ACTOR)
    assert authorize(Action.LIKE_POST, ctx).allowed is True
    assert authorize(Action.CREATE_COMMENT, ctx).allowed is True


def test_blocking_author_does_not_prevent_comment():
    """내가 작성자를 차단한 것은 상호작용을 막지 않습니다 (작성자가 나를 차단한 경우만 막음)."""
    ctx = GuardContext(actor_id=ACTOR, owner_id=OTHER, blocking=True)
    assert authorize(Action.CREATE_COMMENT, ctx).allowed is True


# =============================================================================
# 3. 프로필 관계 작업 (팔로우, 차단)
# =============================================================================
@pytest.mark.parametrize("action", [Action.FOLLOW, Action.UNFOLLOW, Action.BLOCK, Action.UNBLOCK])
def test_relation_action_on_self_is_bad_request(action):
    decision = authorize(action, GuardContext(actor_id=ACTOR, owner_id=ACTOR))

    assert decision.status_code == 400
    assert decision.detail == f"You cannot {action.value} yourself"


@pytest.mark.parametrize(
    "action, flags, status_code, detail",
    [
        (Action.FOLLOW, {"blocked_by_owner": True}, 403, "You have been blocked by this user"),
        (Action.FOLLOW, {"blocking": True}, 400, "You are blocking this user"),
        (Action.FOLLOW, {"following": True}, 400, "You are already following this user"),
        (Action.UNFOLLOW, {}, 400, "You are not following this user"),
        (Action.BLOCK, {"blocking": True}, 400, "User has already been blocked"),
        (Action.UNBLOCK, {}, 400, "You have not blocked this user"),
    ],
)
def test_relation_action_denied(action, flags, status_code, detail):
    decision = authorize(action, GuardContext(actor_id=ACTOR, owner_id=OTHER, **flags))

    assert decision.allowed is False
    assert decision.status_code == status_code
    assert decision.detail == detail


@pytest.mark.parametrize(
    "action, flags",
    [
        (Action.FOLLOW, {}),
        (Action.UNFOLLOW, {"following": True}),
        (Action.BLOCK, {}),
        (Action.BLOCK, {"following": True, "blocked_by_owner": True}),
        (Action.UNBLOCK, {"blocking": True}),
    ],
)
def test_relation_action_allowed(action, flags):
    assert authorize(action, GuardContext(actor_id=ACTOR, owner_id=OTHER, **flags)) == ALLOW


def test_follow_blocked_check_precedes_blocking_check():
    """서로 차단한 상태에서 팔로우하면 '차단당함'(403)이 먼저 보고됩니다."""
    ctx = GuardContext(actor_id=ACTOR, owner_id=OTHER, blocking=True, blocked_by_owner=True)
    assert authorize(Action.FOLLOW, ctx).status_code == 403


# =============================================================================
# 4. enforce
# =============================================================================
def test_enforce_raises_http_exception():
    with pytest.raises(HTTPException) as exc_info:
        enforce(Action.UPDATE_POST, GuardContext(actor_id=ACTOR, owner_id=OTHER))

    assert exc_info.value.status_code == 403
    assert exc_info.value.detail == "You are not the author of this post"


def test_enforce_passes_when_allowed():
    assert enforce(Action.FOLLOW, GuardContext(actor_id=ACTOR, owner_id=OTHER)) is None
