"""Core 유틸리티 모듈"""
