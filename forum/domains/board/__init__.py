# forum/domains/board/__init__.py

"""
'board' 도메인: 게시글, 좋아요, 댓글을 다룹니다.
"""
