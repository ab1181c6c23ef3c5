"""Authors 도메인"""
