"""
查询服务

- LookupService: 单个词典源、单个 schema 版本
- Aggregator: 多词典源并发查询
"""

from .aggregator import AggregateResult, Aggregator, resolve_sources
from .lookup import LookupService, error_response

__all__ = [
    "AggregateResult",
    "Aggregator",
    "LookupService",
    "error_response",
    "resolve_sources",
]
