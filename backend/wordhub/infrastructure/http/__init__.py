# infrastructure/http/__init__.py
"""
HTTP 抓取层

提供:
- AsyncHTTPClientManager: 共享的异步客户端
- RequestManager: 请求头轮换与请求节流
- PageFetcher: 节流后的 GET 请求，返回解析好的 Document

使用:
    from wordhub.infrastructure.http import AsyncHTTPClientManager, PageFetcher, RequestManager

    fetcher = PageFetcher(AsyncHTTPClientManager(), RequestManager(2.0, 5.0))
    document = await fetcher.fetch_document("https://dictionary.cambridge.org/dictionary/english/run")
"""

from .client import AsyncHTTPClientManager
from .fetcher import PageFetcher
from .request_manager import RequestManager

__all__ = [
    "AsyncHTTPClientManager",
    "PageFetcher",
    "RequestManager",
]
