# infrastructure/http/fetcher.py
"""
页面抓取器

带节流和轮换请求头的 GET 请求，返回解析好的 Document。
"""

from typing import Iterable

import httpx
from loguru import logger

from wordhub.dictionaries.document import Document

from .client import AsyncHTTPClientManager
from .request_manager import RequestManager


class PageFetcher:
    """
    抓取单个词典源的页面

    Attributes:
        client_manager: 共享的 HTTP 客户端
        request_manager: 该词典源的节流与请求头
    """

    def __init__(self, client_manager: AsyncHTTPClientManager, request_manager: RequestManager):
        self.client_manager = client_manager
        self.request_manager = request_manager

    async def fetch_html(self, url: str, allow_statuses: Iterable[int] = ()) -> str:
        """
        GET 一个页面

        Args:
            url: 页面 URL
            allow_statuses: 仍需要响应体的错误状态码（韦氏词典用 404 返回拼写建议）

        Raises:
            httpx.HTTPStatusError: 其他 4xx/5xx
            httpx.HTTPError: 传输层失败
        """
        await self.request_manager.wait_for_next_request()
        client = await self.client_manager.get_client()

        logger.info(f"GET {url}")
        response = await client.get(url, headers=self.request_manager.get_headers())
        if response.status_code not in set(allow_statuses):
            response.raise_for_status()
        return response.text

    async def fetch_document(self, url: str, allow_statuses: Iterable[int] = ()) -> Document:
        html = await self.fetch_html(url, allow_statuses=allow_statuses)
        return Document.from_html(html)
