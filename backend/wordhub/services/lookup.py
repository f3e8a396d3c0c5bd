"""
单词典查询服务

每个 (词典源, schema 版本) 对应一个 LookupService：拼出词典 URL，通过 PageFetcher
抓取页面，调用对应的解析器，并把任何失败转换为带 error 的响应，调用方不需要捕获异常。
"""

from typing import Awaitable, Callable, Dict, Optional, Type
from urllib.parse import quote

import httpx
from loguru import logger

from wordhub.dictionaries.common import (
    CAMBRIDGE_ORIGIN,
    MERRIAM_WEBSTER_ORIGIN,
    OXFORD_ORIGIN,
    error_message,
    make_absolute_url,
)
from wordhub.dictionaries.document import Document
from wordhub.dictionaries.factory import Parser, get_parser
from wordhub.enums import DictionarySource, SchemaVersion
from wordhub.infrastructure.http import PageFetcher
from wordhub.models import (
    CambridgeDictionaryResponse,
    DictionaryResponse,
    LookupResponse,
    MerriamWebsterDictionaryResponse,
    OxfordDictionaryResponse,
)

NO_WORD_PROVIDED = "No word provided"


# ==================== URL ====================

def cambridge_url(word: str) -> str:
    return f"{CAMBRIDGE_ORIGIN}/dictionary/english/{quote(word, safe='')}"


def oxford_direct_url(word: str) -> str:
    """直接跳转到最佳匹配词条的搜索 URL"""
    return f"{OXFORD_ORIGIN}/search/english/direct/?q={quote(word, safe='')}"


def oxford_search_url(word: str) -> str:
    return f"{OXFORD_ORIGIN}/search/english/?q={quote(word, safe='')}"


def merriam_webster_url(word: str) -> str:
    return f"{MERRIAM_WEBSTER_ORIGIN}/dictionary/{quote(word, safe='')}"


# ==================== 页面抓取 ====================

async def fetch_cambridge(fetcher: PageFetcher, word: str) -> Document:
    return await fetcher.fetch_document(cambridge_url(word))


async def fetch_oxford(fetcher: PageFetcher, word: str) -> Document:
    """
    抓取牛津词条页面

    先尝试直接搜索 URL，页面含词条标记时直接采用；否则打开普通搜索结果中的第一个链接。

    Raises:
        LookupError: 两种方式都没有得到页面
    """
    try:
        document = await fetcher.fetch_document(oxford_direct_url(word))
        if document.exists(".entry") or document.exists(".webtop"):
            return document
        logger.info(f"Oxford direct search returned no entry markup for '{word}'")
    except httpx.HTTPError as e:
        logger.warning(f"Oxford direct search failed for '{word}': {e}")

    try:
        search_page = await fetcher.fetch_document(oxford_search_url(word))
        link = search_page.select_one(".search-results .result a")
        href = make_absolute_url(OXFORD_ORIGIN, link.attr("href")) if link is not None else None
        if href:
            logger.info(f"Oxford search result for '{word}': {href}")
            return await fetcher.fetch_document(href)
    except httpx.HTTPError as e:
        logger.warning(f"Oxford search failed for '{word}': {e}")

    raise LookupError(f'Could not find Oxford definition for "{word}" using any known URL pattern')


async def fetch_merriam_webster(fetcher: PageFetcher, word: str) -> Document:
    # 未收录的单词返回 404，响应体里带拼写建议
    return await fetcher.fetch_document(merriam_webster_url(word), allow_statuses=(404,))


PageLoader = Callable[[PageFetcher, str], Awaitable[Document]]

PAGE_LOADERS: Dict[DictionarySource, PageLoader] = {
    DictionarySource.CAMBRIDGE: fetch_cambridge,
    DictionarySource.OXFORD: fetch_oxford,
    DictionarySource.MERRIAM_WEBSTER: fetch_merriam_webster,
}


# ==================== 错误响应 ====================

V2_RESPONSES: Dict[DictionarySource, Type[LookupResponse]] = {
    DictionarySource.CAMBRIDGE: CambridgeDictionaryResponse,
    DictionarySource.OXFORD: OxfordDictionaryResponse,
    DictionarySource.MERRIAM_WEBSTER: MerriamWebsterDictionaryResponse,
}


def error_response(
    source: DictionarySource,
    version: SchemaVersion,
    word: str,
    message: str,
) -> LookupResponse:
    """按 ``version`` 的 schema 构造错误响应"""
    model = DictionaryResponse if version == SchemaVersion.V1 else V2_RESPONSES[source]
    return model(word=word, entries=[], source=source.value, error=message)


# ==================== 服务 ====================

class LookupService:
    """
    单词典查询

    Args:
        source: 词典源
        fetcher: 按该词典源节流的页面抓取器
        version: 响应 schema 版本
        parser: 替换解析器，默认取工厂中的对应项
    """

    def __init__(
        self,
        source: DictionarySource,
        fetcher: PageFetcher,
        version: SchemaVersion = SchemaVersion.V2,
        parser: Optional[Parser] = None,
    ):
        self.source = source
        self.version = version
        self.fetcher = fetcher
        self.parser = parser or get_parser(source, version)
        self._load_page = PAGE_LOADERS[source]

    def __repr__(self) -> str:
        return f"LookupService({self.source.value}, {self.version.value})"

    async def lookup_word(self, word: str) -> LookupResponse:
        """
        查询单词

        Returns:
            该词典源的响应；失败时不抛异常，返回 ``entries`` 为空且带 ``error`` 的响应
        """
        word = (word or "").strip()
        if not word:
            return error_response(self.source, self.version, word, NO_WORD_PROVIDED)

        try:
            document = await self._load_page(self.fetcher, word)
            return self.parser(document, word)
        except Exception as e:
            logger.error(f"Error scraping {self.source.display_name} dictionary for '{word}': {e}")
            return error_response(self.source, self.version, word, error_message(e))
