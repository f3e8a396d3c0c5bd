"""
各词典解析器共用的工具

URL 规范化、id 生成、未匹配提示以及查询失败时的错误文本。
"""

import re
from typing import Iterable, List, Optional

CAMBRIDGE_ORIGIN = "https://dictionary.cambridge.org"
OXFORD_ORIGIN = "https://www.oxfordlearnersdictionaries.com"
MERRIAM_WEBSTER_ORIGIN = "https://www.merriam-webster.com"

NO_DEFINITIONS_FOUND = "No definitions found"
UNKNOWN_ERROR = "Unknown error occurred"

_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")
_NON_ID_CHARS = re.compile(r"[^a-z0-9]")


def make_absolute_url(base_url: str, url: Optional[str]) -> Optional[str]:
    """
    把页面中的 URL 补全为词典源站点下的绝对地址

    以 / 开头的相对地址加上站点前缀，带协议的地址原样返回，
    其他相对形式没有可靠的基准路径，原样返回。
    """
    if not url:
        return None
    if _SCHEME.match(url):
        return url
    if url.startswith("/"):
        return f"{base_url}{url}"
    return url


def slug_id(text: str) -> str:
    """小写标识符，非字母数字字符替换为 '_'"""
    return _NON_ID_CHARS.sub("_", text.lower())


def unique(items: Iterable[str]) -> List[str]:
    """去掉空串和重复项，保留首次出现的顺序"""
    seen = set()
    result = []
    for item in items:
        if item and item not in seen:
            seen.add(item)
            result.append(item)
    return result


def differs_from(candidate: Optional[str], word: str) -> bool:
    """页面词头存在且与查询词不同（不区分大小写）时为 True"""
    return bool(candidate) and candidate.lower() != word.lower()


def redirect_message(word: str, source_name: str, alternate: str) -> str:
    return f'No exact match found for "{word}". {source_name} may have redirected to "{alternate}".'


def suggestion_message(suggestions: List[str]) -> str:
    return f"Word not found. Did you mean: {', '.join(suggestions)}?"


def error_message(error: BaseException) -> str:
    return str(error) or UNKNOWN_ERROR
