from datetime import datetime, timedelta, timezone

from user_portal.core.rate_limit import SlidingWindowLimiter


def test_limit_is_per_client():
    limiter = SlidingWindowLimiter(max_requests=2, window_seconds=60)
    assert limiter.hit("10.0.0.1")
    assert limiter.hit("10.0.0.1")
    assert not limiter.hit("10.0.0.1")
    assert limiter.hit("10.0.0.2")


def test_old_hits_fall_out_of_the_window():
    limiter = SlidingWindowLimiter(max_requests=1, window_seconds=60)
    limiter._hits["10.0.0.1"] = [datetime.now(timezone.utc) - timedelta(seconds=61)]
    assert limiter.hit("10.0.0.1")
    assert not limiter.hit("10.0.0.1")


def test_reset_clears_all_clients():
    limiter = SlidingWindowLimiter(max_requests=1, window_seconds=60)
    limiter.hit("a")
    limiter.reset()
    assert limiter.hit("a")


def test_idle_clients_are_dropped_after_a_window():
    limiter = SlidingWindowLimiter(max_requests=1, window_seconds=60)
    old = datetime.now(timezone.utc) - timedelta(seconds=120)
    for i in range(50):
        limiter._hits[f"10.0.1.{i}"] = [old]
    limiter._last_sweep = old

    assert limiter.hit("10.0.0.9")
    assert limiter.tracked_clients() == 1


def test_active_clients_survive_the_sweep():
    limiter = SlidingWindowLimiter(max_requests=1, window_seconds=60)
    assert limiter.hit("busy")
    limiter._last_sweep = datetime.now(timezone.utc) - timedelta(seconds=120)

    assert limiter.hit("other")
    assert not limiter.hit("busy")
    assert limiter.tracked_clients() == 2
