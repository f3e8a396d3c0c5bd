# enums.py
# 解析器、服务与路由共用的封闭枚举:
#   - 构建时已知的词典源
#   - 响应 schema 版本

from enum import Enum
from typing import Optional


# ==================== 词典源 ====================

class DictionarySource(str, Enum):
    """上游词典网站

    集合是固定的；请求中的名称在边界处用 ``parse`` 解析，未知名称在那里被拒绝。
    """
    CAMBRIDGE = "cambridge"
    OXFORD = "oxford"
    MERRIAM_WEBSTER = "merriam-webster"

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        """面向用户的消息中使用的显示名称"""
        return _DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, name: Optional[str]) -> Optional["DictionarySource"]:
        """不区分大小写地解析词典源名称，未知时返回 None"""
        if not name:
            return None
        key = name.strip().lower()
        key = _ALIASES.get(key, key)
        for source in cls:
            if source.value == key:
                return source
        return None

    @classmethod
    def default_order(cls) -> list["DictionarySource"]:
        return [cls.CAMBRIDGE, cls.OXFORD, cls.MERRIAM_WEBSTER]


_DISPLAY_NAMES = {
    DictionarySource.CAMBRIDGE: "Cambridge",
    DictionarySource.OXFORD: "Oxford",
    DictionarySource.MERRIAM_WEBSTER: "Merriam-Webster",
}

_ALIASES = {
    "merriamwebster": "merriam-webster",
    "merriam_webster": "merriam-webster",
}


# ==================== Schema 版本 ====================

class SchemaVersion(str, Enum):
    """响应 schema 版本

    V1 是所有词典源共用的扁平 schema，V2 是各词典源专用的详细 schema。
    """
    V1 = "v1"
    V2 = "v2"

    def __str__(self) -> str:
        return self.value
