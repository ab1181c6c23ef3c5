"""문의 스팸 판별 휴리스틱"""

import re

SPAM_PATTERNS = [
    re.compile(r"viagra|cialis|casino|lottery|winner", re.IGNORECASE),
    re.compile(r"click here|visit now|limited time", re.IGNORECASE),
    re.compile(r"money back guarantee|100% free", re.IGNORECASE),
]
URL_PATTERN = re.compile(r"https?://", re.IGNORECASE)

MAX_URLS = 2
MIN_WORDS_FOR_REPETITION = 10
MIN_UNIQUE_WORD_RATIO = 0.5


def detect_spam(name: str, email: str, message: str) -> bool:
    """스팸 여부 판별

    - 금지 키워드 포함 (이름, 이메일, 본문)
    - 본문 URL 3개 이상
    - 10단어 초과 본문에서 고유 단어 비율 0.5 미만
    """
    text = f"{name} {email} {message}"
    if any(pattern.search(text) for pattern in SPAM_PATTERNS):
        return True

    if len(URL_PATTERN.findall(message)) > MAX_URLS:
        return True

    words = message.lower().split()
    if len(words) > MIN_WORDS_FOR_REPETITION:
        if len(set(words)) / len(words) < MIN_UNIQUE_WORD_RATIO:
            return True

    return False
