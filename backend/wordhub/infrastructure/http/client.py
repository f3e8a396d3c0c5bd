# infrastructure/http/client.py
"""
HTTP 客户端管理器

职责：
- 管理共享的 httpx.AsyncClient 实例，首次使用时创建
- 在多次查询间复用连接池
- 关闭时优雅释放
"""

import asyncio
from typing import Optional

import httpx
from loguru import logger


class AsyncHTTPClientManager:
    """
    异步 HTTP 客户端管理器

    Attributes:
        _client: 共享的客户端实例
        _lock: 异步锁，保护创建与关闭
    """

    def __init__(
        self,
        timeout: float = 30.0,
        connect_timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._timeout = timeout
        self._connect_timeout = connect_timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._lock = asyncio.Lock()

    async def get_client(self) -> httpx.AsyncClient:
        """获取或创建共享的 HTTP 客户端"""
        async with self._lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    timeout=httpx.Timeout(self._timeout, connect=self._connect_timeout),
                    limits=httpx.Limits(
                        max_keepalive_connections=10,
                        max_connections=20,
                        keepalive_expiry=30.0
                    ),
                    verify=True,
                    follow_redirects=True,
                    transport=self._transport,
                )
                logger.info("Async HTTP client initialized")
            return self._client

    async def close(self) -> None:
        """关闭客户端"""
        async with self._lock:
            if self._client:
                await self._client.aclose()
                self._client = None
                logger.info("Async HTTP client closed")
