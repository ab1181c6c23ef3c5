"""Email 도메인 (템플릿 기반 트랜잭션 메일)"""
