"""Comments 도메인 (관리자 내부 메모)"""
