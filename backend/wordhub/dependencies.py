# dependencies.py
"""
依赖注入容器

- 每个进程只构建一次查询服务和聚合器
- 通过 FastAPI 依赖提供给路由
- 关闭时释放共享的 HTTP 客户端
"""

from typing import Dict, Optional

import httpx
from loguru import logger

from wordhub.config import Settings, get_settings, validate_config
from wordhub.enums import DictionarySource, SchemaVersion
from wordhub.infrastructure.http import AsyncHTTPClientManager, PageFetcher, RequestManager
from wordhub.services import Aggregator, LookupService


class DependencyContainer:
    """
    管理服务中所有长生命周期的对象

    Args:
        settings: 配置，默认使用 get_settings()
        transport: 替换 httpx 传输层（测试用）
    """

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._settings = settings
        self._transport = transport
        self._client_manager: Optional[AsyncHTTPClientManager] = None
        self._aggregators: Dict[SchemaVersion, Aggregator] = {}
        self._initialized = False

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def initialize(self) -> None:
        """校验配置，并为两个 schema 版本构建服务"""
        if self._initialized:
            return

        settings = self.settings
        validate_config(settings)

        self._client_manager = AsyncHTTPClientManager(
            timeout=settings.request_timeout,
            connect_timeout=settings.connect_timeout,
            transport=self._transport,
        )

        for version in SchemaVersion:
            min_delay, max_delay = settings.delay_range(version.value)
            services = {}
            for source in DictionarySource.default_order():
                # 每个词典源单独节流
                fetcher = PageFetcher(self._client_manager, RequestManager(min_delay, max_delay))
                services[source] = LookupService(source, fetcher, version)
            self._aggregators[version] = Aggregator(
                services,
                fallback_to_all_sources=settings.fallback_to_all_sources,
            )

        self._initialized = True
        logger.info("[DEPENDENCY] Container initialized")

    async def shutdown(self) -> None:
        """释放 HTTP 客户端"""
        if self._client_manager is not None:
            await self._client_manager.close()
        self._aggregators.clear()
        self._client_manager = None
        self._initialized = False
        logger.info("[DEPENDENCY] Container shutdown")

    def aggregator(self, version: SchemaVersion) -> Aggregator:
        self.initialize()
        return self._aggregators[version]

    def service(self, version: SchemaVersion, source: DictionarySource) -> LookupService:
        return self.aggregator(version).services[source]


_container: Optional[DependencyContainer] = None


def get_container() -> DependencyContainer:
    """获取全局容器"""
    global _container
    if _container is None:
        _container = DependencyContainer()
    return _container


def init_dependencies() -> None:
    """初始化依赖（应用启动时调用）"""
    get_container().initialize()


async def shutdown_dependencies() -> None:
    """关闭依赖（应用关闭时调用）"""
    global _container
    if _container:
        await _container.shutdown()
        _container = None


# ==================== FastAPI 依赖函数 ====================

def get_v1_aggregator() -> Aggregator:
    return get_container().aggregator(SchemaVersion.V1)


def get_v2_aggregator() -> Aggregator:
    return get_container().aggregator(SchemaVersion.V2)
