"""Gallery 도메인 (이미지 및 그룹)"""
