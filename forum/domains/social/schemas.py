# forum/domains/social/schemas.py

"""
'social' 도메인의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
"""

from typing import Optional

from forum.core.schemas import CamelModel


class ProfileRead(CamelModel):
    """
    조회자(viewer) 기준의 프로필입니다. 익명 조회 시 관계 플래그는 모두 False입니다.

    - following: 조회자가 이 사용자를 팔로우 중
    - followed: 이 사용자가 조회자를 팔로우 중
    - blocking: 조회자가 이 사용자를 차단 중
    - blocked: 이 사용자가 조회자를 차단 중
    """
    username: str
    intro: Optional[str] = None
    avatar: Optional[str] = None
    followed: bool = False
    following: bool = False
    blocked: bool = False
    blocking: bool = False


class ProfileResponse(CamelModel):
    profile: ProfileRead
