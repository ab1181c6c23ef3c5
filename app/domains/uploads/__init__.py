"""Uploads 도메인 (관리자 미디어 업로드)"""
