"""
词典查询路由

v1 和 v2 API 提供相同的三个端点，只有响应 schema 不同，两个路由都由同一个工厂函数构建。
"""

from typing import Callable, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from loguru import logger

from wordhub.enums import DictionarySource, SchemaVersion
from wordhub.services import Aggregator


def parse_sources_param(sources: Optional[str]) -> list:
    """拆分逗号分隔的 ``sources`` 查询参数"""
    if not sources:
        return []
    return [name.strip() for name in sources.split(",") if name.strip()]


def create_router(
    version: SchemaVersion,
    get_aggregator: Callable[[], Aggregator],
    include_sources: bool = False,
) -> APIRouter:
    """
    构建一个 API 版本的路由

    Args:
        version: 提供的 schema 版本
        get_aggregator: 返回该版本聚合器的 FastAPI 依赖
        include_sources: 在聚合响应中附加实际查询的 ``sources`` 列表
    """
    router = APIRouter(prefix=f"/api/{version.value}", tags=[f"dictionary-{version.value}"])

    @router.get("/")
    async def welcome(aggregator: Aggregator = Depends(get_aggregator)):
        """端点概览"""
        names = [source.value for source in aggregator.available_sources]
        endpoints = {name: f"/api/{version.value}/{name}/:word" for name in names}
        endpoints["all"] = f"/api/{version.value}/dictionary/:word?sources=cambridge,oxford"
        return {
            "message": f"Welcome to Dictionary API {version.value}",
            "endpoints": endpoints,
            "availableSources": names,
        }

    @router.get("/dictionary/{word}")
    async def lookup_all(
        word: str,
        sources: Optional[str] = Query(None, description="逗号分隔的词典源名称"),
        aggregator: Aggregator = Depends(get_aggregator),
    ):
        """
        在多个词典中查询单词

        出现未知的词典源名称时，回退为查询所有可用词典源。
        """
        requested = parse_sources_param(sources)
        logger.info(f"[{version.value}] lookup '{word}' sources={requested or 'all'}")
        result = await aggregator.lookup_multiple(word, requested)
        return JSONResponse(content=result.to_dict(include_sources=include_sources))

    @router.get("/{source_name}/{word}")
    async def lookup_single(
        source_name: str,
        word: str,
        aggregator: Aggregator = Depends(get_aggregator),
    ):
        """在单个词典中查询单词"""
        source = DictionarySource.parse(source_name)
        if source is None or source not in aggregator.services:
            return JSONResponse(
                status_code=404,
                content={
                    "error": f"Dictionary source '{source_name}' not found",
                    "availableSources": [s.value for s in aggregator.available_sources],
                },
            )

        logger.info(f"[{version.value}] lookup '{word}' in {source.value}")
        response = await aggregator.services[source].lookup_word(word)
        return JSONResponse(content=response.to_dict())

    return router
