"""텍스트 통계 유틸리티"""

import math
import re

WORDS_PER_MINUTE = 200

_WORD = re.compile(r"\S+")


def count_words(text: str | None) -> int:
    """공백 기준 단어 수"""
    if not text:
        return 0
    return len(_WORD.findall(text))


def reading_time_minutes(text: str | None) -> int:
    """예상 읽기 시간 (분, 분당 200단어 기준 올림)"""
    return math.ceil(count_words(text) / WORDS_PER_MINUTE)
