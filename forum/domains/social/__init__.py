# forum/domains/social/__init__.py

"""
'social' 도메인: 프로필 조회와 사용자 간 관계(팔로우, 차단)를 다룹니다.
"""
