from meteora_pool_launcher.utils import rate_limiter as net


def test_acquire_consumes_tokens_without_sleeping(monkeypatch):
    sleeps = []
    monkeypatch.setattr(net.time, "sleep", sleeps.append)
    limiter = net.RateLimiter(max_requests=3, time_window=1000.0)

    for _ in range(3):
        limiter.acquire()

    assert sleeps == []


def test_acquire_sleeps_when_bucket_is_empty(monkeypatch):
    sleeps = []
    monkeypatch.setattr(net.time, "sleep", sleeps.append)
    limiter = net.RateLimiter(max_requests=1, time_window=1000.0)

    limiter.acquire()
    limiter.acquire()

    assert len(sleeps) == 1
    assert 0 < sleeps[0] <= 1000.0


def test_backoff_delay_grows_and_caps():
    assert net.backoff_delay(0, jitter=False) == 1.0
    assert net.backoff_delay(3, jitter=False) == 8.0
    assert net.backoff_delay(10, jitter=False) == 60.0


def test_backoff_delay_jitter_stays_in_range():
    for _ in range(20):
        assert 2.0 <= net.backoff_delay(2) <= 4.0


def test_bucket_refills_over_time(monkeypatch):
    clock = [100.0]
    sleeps = []
    monkeypatch.setattr(net.time, "monotonic", lambda: clock[0])
    monkeypatch.setattr(net.time, "sleep", sleeps.append)
    limiter = net.RateLimiter(max_requests=2, time_window=1.0)

    limiter.acquire()
    limiter.acquire()
    clock[0] += 1.0
    limiter.acquire()

    assert sleeps == []
