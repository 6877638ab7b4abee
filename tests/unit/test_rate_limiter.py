"""
Unit tests для TokenBucket.
"""

import pytest

from src.infrastructure.ai.rate_limiter import TokenBucket
from src.infrastructure.config.settings import Settings


class FakeClock:
    """Ручные часы: sleep() двигает время вместо ожидания."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, delay):
        self.sleeps.append(delay)
        self.now += delay


@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock()
    monkeypatch.setattr("src.infrastructure.ai.rate_limiter.asyncio.sleep", fake.sleep)
    return fake


def test_invalid_parameters():
    with pytest.raises(ValueError):
        TokenBucket(rate=0)
    with pytest.raises(ValueError):
        TokenBucket(rate=1, capacity=0)


def test_from_settings():
    bucket = TokenBucket.from_settings(Settings(rate_limit_per_minute=120, rate_limit_burst=3))

    assert bucket.rate == pytest.approx(2.0)
    assert bucket.capacity == 3


@pytest.mark.asyncio
async def test_burst_is_free(clock):
    bucket = TokenBucket(rate=1.0, capacity=3, clock=clock)

    for _ in range(3):
        assert await bucket.acquire() == 0.0

    assert clock.sleeps == []
    assert bucket.available == pytest.approx(0.0)


@pytest.mark.asyncio
async def test_waits_for_refill(clock):
    bucket = TokenBucket(rate=2.0, capacity=1, clock=clock)

    await bucket.acquire()
    waited = await bucket.acquire()

    assert waited == pytest.approx(0.5)
    assert clock.sleeps == [pytest.approx(0.5)]
    assert bucket.total_wait_seconds == pytest.approx(0.5)


@pytest.mark.asyncio
async def test_refill_capped_by_capacity(clock):
    bucket = TokenBucket(rate=1.0, capacity=2, clock=clock)
    await bucket.acquire()
    await bucket.acquire()

    clock.now += 100

    assert bucket.available == pytest.approx(2.0)
