"""Blog 도메인 (게시글, 카테고리, 태그)"""
