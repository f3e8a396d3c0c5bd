# infrastructure/http/request_manager.py
"""
请求节流与请求头轮换

每个请求都带上类浏览器的请求头，User-Agent 和 Accept-Language 随机轮换；
同一词典源的相邻请求之间间隔一个随机延迟。
"""

import asyncio
import random
import time
from typing import Awaitable, Callable, Dict, Optional

from loguru import logger

USER_AGENTS = [
    # 桌面端
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/110.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/110.0.0.0 Safari/537.36 Edg/110.0.1587.63",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/110.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:109.0) Gecko/20100101 Firefox/110.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/16.3 Safari/605.1.15",
    # 移动端
    "Mozilla/5.0 (iPhone; CPU iPhone OS 16_3_1 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/16.3 Mobile/15E148 Safari/604.1",
    "Mozilla/5.0 (Linux; Android 13; SM-S901B) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/110.0.0.0 Mobile Safari/537.36",
    "Mozilla/5.0 (iPad; CPU OS 16_3_1 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/16.3 Mobile/15E148 Safari/604.1",
]

ACCEPT_LANGUAGES = [
    "en-US,en;q=0.9",
    "en-GB,en;q=0.9",
    "en-CA,en;q=0.9",
    "en-AU,en;q=0.9",
    "en;q=0.9",
    "en-US,en;q=0.8,fr;q=0.5",
    "en-GB,en;q=0.8,de;q=0.5",
]

BROWSER_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "DNT": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Upgrade-Insecure-Requests": "1",
    "Cache-Control": "max-age=0",
}

SleepFn = Callable[[float], Awaitable[None]]


class RequestManager:
    """
    单个词典源的节流与请求头

    Args:
        min_delay: 请求间随机间隔的下限（秒）
        max_delay: 上限（秒）
        sleep: 可等待的 sleep，测试中可替换
        clock: 单调时钟，测试中可替换
        rng: 随机数生成器
    """

    def __init__(
        self,
        min_delay: float = 1.0,
        max_delay: float = 3.0,
        sleep: SleepFn = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
    ):
        self.min_delay = min_delay
        self.max_delay = max_delay
        self._sleep = sleep
        self._clock = clock
        self._rng = rng or random.Random()
        self._last_request: Optional[float] = None
        self._lock = asyncio.Lock()

    def get_headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """类浏览器请求头，随机 User-Agent 和 Accept-Language"""
        headers = {
            "User-Agent": self._rng.choice(USER_AGENTS),
            "Accept-Language": self._rng.choice(ACCEPT_LANGUAGES),
            **BROWSER_HEADERS,
        }
        if extra:
            headers.update(extra)
        return headers

    def next_delay(self) -> float:
        """下一个请求开始前还需等待的秒数"""
        target = self._rng.uniform(self.min_delay, self.max_delay)
        if self._last_request is None:
            return 0.0
        elapsed = self._clock() - self._last_request
        return max(0.0, target - elapsed)

    async def wait_for_next_request(self) -> None:
        """等待，直到距上一个请求已过随机间隔"""
        async with self._lock:
            delay = self.next_delay()
            if delay > 0:
                logger.debug(f"Pacing request: sleeping {delay:.2f}s")
                await self._sleep(delay)
            self._last_request = self._clock()
