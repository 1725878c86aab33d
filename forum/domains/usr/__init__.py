# forum/domains/usr/__init__.py

"""
'usr' 도메인: 사용자 계정(가입, 로그인, 정보 수정, 탈퇴)과 게시글 열람 기록을 다룹니다.
"""
