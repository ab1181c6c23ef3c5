"""Services 도메인 (서비스 소개 페이지와 하위 항목)"""
