# infrastructure/__init__.py
"""
基础设施层

提供:
- http: 共享客户端、请求节流、页面抓取

使用:
    from wordhub.infrastructure.http import PageFetcher
"""

from .http import (
    AsyncHTTPClientManager,
    PageFetcher,
    RequestManager,
)

__all__ = [
    "AsyncHTTPClientManager",
    "PageFetcher",
    "RequestManager",
]
