"""Chord sheet finder - 검색어로 첫 번째 코드 악보 페이지를 찾아 iframe용으로 정리합니다."""

__version__ = "1.0.0"
