"""
解析器工厂

把 (schema 版本, 词典源) 映射到将页面转换为响应的函数。
"""

from typing import Callable, Dict, Tuple

from . import cambridge, flat, oxford, webster
from .document import Document
from ..enums import DictionarySource, SchemaVersion
from ..models import LookupResponse

Parser = Callable[[Document, str], LookupResponse]

PARSERS: Dict[Tuple[SchemaVersion, DictionarySource], Parser] = {
    (SchemaVersion.V1, DictionarySource.CAMBRIDGE): flat.parse_cambridge,
    (SchemaVersion.V1, DictionarySource.OXFORD): flat.parse_oxford,
    (SchemaVersion.V1, DictionarySource.MERRIAM_WEBSTER): flat.parse_merriam_webster,
    (SchemaVersion.V2, DictionarySource.CAMBRIDGE): cambridge.parse,
    (SchemaVersion.V2, DictionarySource.OXFORD): oxford.parse,
    (SchemaVersion.V2, DictionarySource.MERRIAM_WEBSTER): webster.parse,
}


def get_parser(source: DictionarySource, version: SchemaVersion = SchemaVersion.V2) -> Parser:
    """
    获取词典源对应的解析函数

    Args:
        source: 词典源
        version: 响应 schema 版本

    Returns:
        函数 (document, word) -> response

    Raises:
        ValueError: 不支持的词典源/版本组合
    """
    key = (SchemaVersion(version), DictionarySource(source))
    if key not in PARSERS:
        raise ValueError(f"Unsupported dictionary: {source} ({version})")
    return PARSERS[key]


def parse_definition(
    source: DictionarySource,
    html: str,
    word: str,
    version: SchemaVersion = SchemaVersion.V2,
) -> LookupResponse:
    """
    把原始页面解析为响应

    Args:
        source: 词典源
        html: 单词页面的原始 HTML
        word: 查询的单词
        version: 响应 schema 版本

    Returns:
        该词典源的响应模型
    """
    parser = get_parser(source, version)
    return parser(Document.from_html(html), word)
