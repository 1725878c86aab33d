# forum/core/dependencies.py

"""
FastAPI 라우터에서 사용하는 인증 의존성을 한 곳에 모아 노출하는 모듈입니다.

- get_current_user: 로그인 필수 (없거나 유효하지 않은 토큰이면 401)
- get_optional_user: 로그인 선택 (없거나 유효하지 않은 토큰이면 None)

두 의존성 모두 forum.core.database.get_session을 사용하므로 라우터와 한 요청 안에서 세션을 공유합니다.
"""

# flake8: noqa
from forum.core.security import get_current_user, get_optional_user

__all__ = ["get_current_user", "get_optional_user"]
