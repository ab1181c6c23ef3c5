"""Contact 도메인 (문의 접수 및 관리)"""
