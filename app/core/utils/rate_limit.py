"""인메모리 슬라이딩 윈도우 Rate Limiter

프로세스 메모리에만 저장되며 재시작 시 초기화됩니다.
소유하는 서비스 인스턴스에 주입해서 사용합니다.
"""

import time
from collections import deque
from typing import Callable, Deque, Dict, Optional


class InMemoryRateLimiter:
    """키별 요청 수 제한

    Example::

        limiter = InMemoryRateLimiter(max_requests=10, window_seconds=60)
        if not limiter.check("user@example.com"):
            raise TooManyRequestsException()
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._last_sweep = clock()

    def _prune(self, key: str, now: float) -> Deque[float]:
        """윈도우 밖 기록 제거 (비면 키도 제거, 새 키는 등록하지 않음)"""
        hits = self._hits.get(key)
        if hits is None:
            return deque()
        while hits and now - hits[0] >= self.window_seconds:
            hits.popleft()
        if not hits:
            del self._hits[key]
        return hits

    def _sweep(self, now: float) -> None:
        """윈도우마다 한 번, 다시 조회되지 않은 만료 키를 정리"""
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        expired = [
            key
            for key, hits in self._hits.items()
            if not hits or now - hits[-1] >= self.window_seconds
        ]
        for key in expired:
            del self._hits[key]

    def check(self, key: str) -> bool:
        """요청 허용 여부 확인 (허용 시 기록)

        Returns:
            윈도우 내 요청 수가 한도 이하면 True
        """
        now = self._clock()
        self._sweep(now)
        hits = self._prune(key, now)
        if len(hits) >= self.max_requests:
            return False
        hits.append(now)
        self._hits[key] = hits
        return True

    def remaining(self, key: str) -> int:
        """현재 윈도우에서 남은 요청 수 (기록을 만들지 않음)"""
        hits = self._prune(key, self._clock())
        return max(self.max_requests - len(hits), 0)

    @property
    def tracked_keys(self) -> int:
        """추적 중인 키 수"""
        return len(self._hits)

    def reset(self, key: Optional[str] = None) -> None:
        """기록 초기화 (key가 없으면 전체)"""
        if key is None:
            self._hits.clear()
        else:
            self._hits.pop(key, None)
