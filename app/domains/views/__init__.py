"""Views 도메인 (조회수 추적 및 대시보드 분석)"""
