# tests/__init__.py

"""
포럼 API의 테스트 스위트 패키지입니다.

- `conftest.py`: 테스트마다 새 SQLite DB, 테스트 클라이언트, 사용자/게시글 팩토리 픽스처
- `test_*.py`: 설정, 보안, 권한 검사, 워커 태스크, CLI 등 공통 구성 요소 테스트
- `domains/`: 도메인(usr, social, board)별 API 통합 테스트
"""

__title__ = "Trapziu Forum API Tests"
__version__ = "0.1.0"
__all__ = []
