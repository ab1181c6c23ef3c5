"""AI 도메인

콘텐츠 생성, 이미지 생성, 생성 결과 저장을 담당합니다.
"""
