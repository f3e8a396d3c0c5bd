"""
解析后文档的适配层

把 BeautifulSoup 树包装成各解析器共用的查询接口：CSS 选择、文本与属性读取、相对导航。
查不到时返回空列表或 None，不抛异常，也不修改底层的树。
"""

from typing import Iterator, List, Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag


def clean_text(text: Optional[str]) -> str:
    """合并连续空白并去掉首尾空白"""
    if not text:
        return ""
    return " ".join(text.split())


class Node:
    """文档中的单个元素"""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag):
        self._tag = tag

    def __repr__(self) -> str:
        return f"<Node {self._tag.name} class={self._tag.get('class')}>"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    @property
    def tag(self) -> Tag:
        return self._tag

    @property
    def name(self) -> str:
        return self._tag.name or ""

    # ---------- 选择 ----------

    def select(self, selector: str, stop_at: Optional[str] = None) -> List["Node"]:
        """
        按文档顺序返回所有匹配 ``selector`` 的后代元素

        Args:
            selector: CSS 选择器
            stop_at: 可选的 CSS 选择器；位于匹配它的元素内部（在当前节点与匹配项之间）
                的结果会被跳过，用来把子义项等嵌套块排除在父级结果之外
        """
        matches = [Node(tag) for tag in self._tag.select(selector)]
        if stop_at is None:
            return matches
        return [node for node in matches if not self._is_nested(node, stop_at)]

    def select_one(self, selector: str, stop_at: Optional[str] = None) -> Optional["Node"]:
        if stop_at is None:
            tag = self._tag.select_one(selector)
            return Node(tag) if tag is not None else None
        matches = self.select(selector, stop_at=stop_at)
        return matches[0] if matches else None

    def select_text(self, selector: str, stop_at: Optional[str] = None) -> str:
        """第一个匹配项的文本，没有则返回空串"""
        node = self.select_one(selector, stop_at=stop_at)
        return node.text() if node is not None else ""

    def select_texts(self, selector: str, stop_at: Optional[str] = None) -> List[str]:
        """所有匹配项的非空文本，按文档顺序"""
        texts = []
        for node in self.select(selector, stop_at=stop_at):
            text = node.text()
            if text:
                texts.append(text)
        return texts

    def exists(self, selector: str) -> bool:
        return self._tag.select_one(selector) is not None

    def matches(self, selector: str) -> bool:
        return bool(self._tag.css.match(selector))

    def _is_nested(self, node: "Node", stop_at: str) -> bool:
        for parent in node.ancestors():
            if parent._tag is self._tag:
                return False
            if parent.matches(stop_at):
                return True
        return False

    # ---------- 文本与属性 ----------

    def text(self) -> str:
        """全部后代文本，空白已合并"""
        return clean_text(self._tag.get_text())

    def own_text(self) -> str:
        """只取直接子文本节点，忽略后代标签"""
        parts = [
            str(child)
            for child in self._tag.children
            if isinstance(child, NavigableString) and not isinstance(child, PreformattedString)
        ]
        return clean_text("".join(parts))

    def attr(self, name: str, default: Optional[str] = None) -> Optional[str]:
        value = self._tag.get(name)
        if value is None:
            return default
        if isinstance(value, list):
            return " ".join(value)
        return value

    def has_class(self, class_name: str) -> bool:
        return class_name in (self._tag.get("class") or [])

    def html(self) -> str:
        return str(self._tag)

    # ---------- 导航 ----------

    def ancestors(self) -> Iterator["Node"]:
        for parent in self._tag.parents:
            if isinstance(parent, Tag):
                yield Node(parent)

    def closest(self, selector: str) -> Optional["Node"]:
        """从自身开始向上查找，第一个匹配 ``selector`` 的元素"""
        tag = self._tag.css.closest(selector)
        return Node(tag) if tag is not None else None

    def next_sibling(self, selector: Optional[str] = None) -> Optional["Node"]:
        """紧随其后的兄弟元素，可用 ``selector`` 过滤"""
        tag = self._tag.find_next_sibling()
        if tag is None:
            return None
        node = Node(tag)
        if selector is not None and not node.matches(selector):
            return None
        return node

    def previous_sibling(self, selector: Optional[str] = None) -> Optional["Node"]:
        tag = self._tag.find_previous_sibling()
        if tag is None:
            return None
        node = Node(tag)
        if selector is not None and not node.matches(selector):
            return None
        return node

    def children(self, selector: Optional[str] = None) -> List["Node"]:
        nodes = [Node(child) for child in self._tag.children if isinstance(child, Tag)]
        if selector is None:
            return nodes
        return [node for node in nodes if node.matches(selector)]

    def siblings(self, selector: Optional[str] = None) -> List["Node"]:
        parent = self._tag.parent
        if parent is None:
            return []
        return [node for node in Node(parent).children(selector) if node._tag is not self._tag]


class Document(Node):
    """解析后 HTML 页面的根节点"""

    __slots__ = ()

    @classmethod
    def from_html(cls, html: str) -> "Document":
        return cls(BeautifulSoup(html or "", "html.parser"))
