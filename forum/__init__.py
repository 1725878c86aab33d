# forum/__init__.py

"""
Trapziu 포럼 FastAPI 애플리케이션의 메인 패키지입니다.

FastAPI 애플리케이션의 진입점 (main.py)과
공통 설정, 데이터베이스 연결, 보안 및 권한 검사를 담는 core 서브패키지,
그리고 사용자(usr), 소셜 관계(social), 게시판(board) 도메인을 담는 domains 서브패키지로 구성됩니다.
"""

APP_NAME = "Trapziu Forum API"
APP_VERSION = "0.1.0"
API_PREFIX = "/api"  # API 라우트의 공통 접두사 (main.py에서 적용)

__version__ = APP_VERSION
__title__ = APP_NAME
__description__ = "CRUD forum backend: users, profiles, posts, likes and comments."
__all__ = []
