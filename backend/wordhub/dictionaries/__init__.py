"""
词典解析器

把抓取到的剑桥、牛津、韦氏词典页面转换为结构化响应。本包不做任何网络请求。
"""

from .document import Document, Node, clean_text
from .factory import PARSERS, get_parser, parse_definition

__all__ = [
    'Document',
    'Node',
    'clean_text',
    'PARSERS',
    'get_parser',
    'parse_definition',
]
