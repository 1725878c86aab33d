# forum/domains/models/__init__.py

"""
모든 도메인의 SQLModel 모델을 한 곳에서 임포트하여
SQLModel.metadata가 모든 테이블을 인식하도록 보장합니다.
(create_all, Alembic autogenerate, 테스트 DB 생성에서 사용)
"""

# usr (User, UserHistory)
from forum.domains.usr.models import User, UserHistory

# social (UserFollow, UserBlock)
from forum.domains.social.models import UserFollow, UserBlock

# board (Post, PostComment, UserLikePost)
from forum.domains.board.models import Post, PostComment, UserLikePost

__all__ = [
    "User", "UserHistory",
    "UserFollow", "UserBlock",
    "Post", "PostComment", "UserLikePost",
]
