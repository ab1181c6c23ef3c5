"""Indexing 도메인 (검색 엔진 URL 알림)"""
