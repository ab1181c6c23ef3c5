"""인메모리 Rate Limiter 테스트"""

import pytest

from app.core.utils.rate_limit import InMemoryRateLimiter


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_allows_up_to_limit():
    """한도까지 허용 후 차단"""
    limiter = InMemoryRateLimiter(max_requests=3, window_seconds=60, clock=FakeClock())

    assert [limiter.check("ip") for _ in range(4)] == [True, True, True, False]


def test_keys_are_independent():
    limiter = InMemoryRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

    assert limiter.check("a") is True
    assert limiter.check("b") is True
    assert limiter.check("a") is False


def test_window_slides():
    """윈도우가 지나면 다시 허용"""
    clock = FakeClock()
    limiter = InMemoryRateLimiter(max_requests=2, window_seconds=10, clock=clock)
    limiter.check("ip")
    clock.now = 5
    limiter.check("ip")
    assert limiter.check("ip") is False

    clock.now = 10
    assert limiter.check("ip") is True
    assert limiter.check("ip") is False


def test_rejected_requests_are_not_recorded():
    """거절된 요청은 기록하지 않음"""
    clock = FakeClock()
    limiter = InMemoryRateLimiter(max_requests=1, window_seconds=10, clock=clock)
    limiter.check("ip")
    clock.now = 9
    limiter.check("ip")

    clock.now = 10
    assert limiter.check("ip") is True


def test_remaining_and_reset():
    limiter = InMemoryRateLimiter(max_requests=3, window_seconds=60, clock=FakeClock())
    limiter.check("ip")

    assert limiter.remaining("ip") == 2
    assert limiter.remaining("other") == 3

    limiter.reset("ip")
    assert limiter.remaining("ip") == 3

    limiter.check("a")
    limiter.check("b")
    limiter.reset()
    assert limiter.remaining("a") == 3
    assert limiter.remaining("b") == 3


@pytest.mark.parametrize(
    "max_requests, window_seconds", [(0, 10), (1, 0), (1, -5)]
)
def test_invalid_configuration(max_requests, window_seconds):
    with pytest.raises(ValueError):
        InMemoryRateLimiter(max_requests=max_requests, window_seconds=window_seconds)


def test_remaining_does_not_track_new_keys():
    """조회만으로는 키가 생기지 않음"""
    limiter = InMemoryRateLimiter(max_requests=3, window_seconds=60, clock=FakeClock())

    for i in range(100):
        assert limiter.remaining(f"10.0.0.{i}") == 3

    assert limiter.tracked_keys == 0


def test_check_tracks_key():
    limiter = InMemoryRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

    assert limiter.check("ip") is True
    assert limiter.tracked_keys == 1


def test_expired_key_is_removed_on_access():
    clock = FakeClock()
    limiter = InMemoryRateLimiter(max_requests=3, window_seconds=10, clock=clock)
    limiter.check("ip")

    clock.now = 10
    assert limiter.remaining("ip") == 3
    assert limiter.tracked_keys == 0


def test_stale_keys_are_swept():
    """다시 조회되지 않는 키도 윈도우가 지나면 정리"""
    clock = FakeClock()
    limiter = InMemoryRateLimiter(max_requests=3, window_seconds=10, clock=clock)
    for i in range(50):
        limiter.check(f"10.0.0.{i}")
    assert limiter.tracked_keys == 50

    clock.now = 15
    limiter.check("fresh")

    assert limiter.tracked_keys == 1
    assert limiter.remaining("fresh") == 2
