"""
多词典聚合查询

把一个单词并发分发给多个查询服务，按请求的顺序汇总每个词典源的结果。
"""

import asyncio
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional

from loguru import logger

from wordhub.dictionaries.common import error_message
from wordhub.enums import DictionarySource
from wordhub.models import LookupResponse
from wordhub.services.lookup import LookupService, error_response


@dataclass
class AggregateResult:
    word: str
    results: List[LookupResponse] = field(default_factory=list)
    sources: List[DictionarySource] = field(default_factory=list)

    def to_dict(self, include_sources: bool = False) -> dict:
        data = {
            "word": self.word,
            "results": [result.to_dict() for result in self.results],
        }
        if include_sources:
            data["sources"] = [source.value for source in self.sources]
        return data


def resolve_sources(
    names: Optional[Iterable[str]],
    available: List[DictionarySource],
    fallback_to_all: bool = True,
) -> List[DictionarySource]:
    """
    把请求中的词典源名称转换为要查询的词典源列表

    Args:
        names: 请求的名称，保持调用方的顺序；空白项忽略
        available: 已配置的词典源，默认顺序
        fallback_to_all: 为 True 时只要有未知名称，整个请求回退为 ``available``；
            为 False 时丢弃未知名称

    Returns:
        去重后的词典源；没有有效名称时返回 ``available``
    """
    requested = [name.strip() for name in (names or []) if name and name.strip()]
    if not requested:
        return list(available)

    resolved: List[DictionarySource] = []
    unknown: List[str] = []
    for name in requested:
        source = DictionarySource.parse(name)
        if source is None or source not in available:
            unknown.append(name)
        elif source not in resolved:
            resolved.append(source)

    if unknown:
        logger.info(f"Ignoring unknown dictionary sources: {', '.join(unknown)}")
        if fallback_to_all:
            return list(available)

    return resolved or list(available)


class Aggregator:
    """
    多词典查询

    Args:
        services: 每个已配置词典源对应一个查询服务
        fallback_to_all_sources: 未知名称的处理策略，见 resolve_sources
    """

    def __init__(
        self,
        services: Mapping[DictionarySource, LookupService],
        fallback_to_all_sources: bool = True,
    ):
        self.services = dict(services)
        self.fallback_to_all_sources = fallback_to_all_sources

    @property
    def available_sources(self) -> List[DictionarySource]:
        return [source for source in DictionarySource.default_order() if source in self.services]

    async def lookup_multiple(self, word: str, sources: Optional[Iterable[str]] = None) -> AggregateResult:
        """
        同时在多个词典源中查询单词

        结果顺序与解析后的词典源顺序一致，与完成先后无关；单个词典源失败不影响其他词典源。
        """
        resolved = resolve_sources(sources, self.available_sources, self.fallback_to_all_sources)
        results = await asyncio.gather(*(self._lookup_one(source, word) for source in resolved))
        return AggregateResult(word=word, results=list(results), sources=resolved)

    async def _lookup_one(self, source: DictionarySource, word: str) -> LookupResponse:
        service = self.services[source]
        try:
            return await service.lookup_word(word)
        except Exception as e:
            logger.error(f"{source.display_name} lookup for '{word}' failed: {e}")
            return error_response(source, service.version, word, error_message(e))
