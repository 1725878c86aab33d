# tests/domains/__init__.py

"""
도메인별 API 통합 테스트 패키지입니다.

- `test_usr.py`: 가입, 로그인, 계정 수정/탈퇴, 열람 기록
- `test_social.py`: 프로필, 팔로우, 차단
- `test_board.py`: 게시글, 좋아요, 댓글
- `test_authorization.py`: 소유자/차단 여부에 따른 거부
"""

__all__ = []
