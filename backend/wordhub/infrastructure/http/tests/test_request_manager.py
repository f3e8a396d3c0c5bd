import asyncio
import random

from wordhub.infrastructure.http.request_manager import (
    ACCEPT_LANGUAGES,
    BROWSER_HEADERS,
    USER_AGENTS,
    RequestManager,
)


class FakeClock:

    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


class RecordingSleep:

    def __init__(self, clock):
        self.clock = clock
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)
        self.clock.now += seconds


class TestRequestManager:

    def make_manager(self, min_delay=2.0, max_delay=2.0):
        clock = FakeClock()
        sleep = RecordingSleep(clock)
        manager = RequestManager(min_delay, max_delay, sleep=sleep, clock=clock, rng=random.Random(7))
        return manager, clock, sleep

    def test_headers_are_browser_like(self):
        manager, _, _ = self.make_manager()
        headers = manager.get_headers()
        assert headers["User-Agent"] in USER_AGENTS
        assert headers["Accept-Language"] in ACCEPT_LANGUAGES
        for key, value in BROWSER_HEADERS.items():
            assert headers[key] == value

    def test_extra_headers_override(self):
        manager, _, _ = self.make_manager()
        headers = manager.get_headers({"Referer": "https://www.google.com/", "DNT": "0"})
        assert headers["Referer"] == "https://www.google.com/"
        assert headers["DNT"] == "0"

    def test_first_request_is_not_delayed(self):
        manager, _, sleep = self.make_manager()
        asyncio.run(manager.wait_for_next_request())
        assert sleep.calls == []

    def test_back_to_back_requests_are_spaced(self):
        manager, clock, sleep = self.make_manager(min_delay=2.0, max_delay=2.0)

        async def run():
            await manager.wait_for_next_request()
            clock.now += 0.5
            await manager.wait_for_next_request()

        asyncio.run(run())
        assert sleep.calls == [1.5]

    def test_no_wait_once_the_gap_has_passed(self):
        manager, clock, sleep = self.make_manager(min_delay=1.0, max_delay=3.0)

        async def run():
            await manager.wait_for_next_request()
            clock.now += 10.0
            await manager.wait_for_next_request()

        asyncio.run(run())
        assert sleep.calls == []

    def test_delay_within_bounds(self):
        manager, clock, _ = self.make_manager(min_delay=1.0, max_delay=3.0)
        asyncio.run(manager.wait_for_next_request())
        for _ in range(20):
            assert 1.0 <= manager.next_delay() <= 3.0
