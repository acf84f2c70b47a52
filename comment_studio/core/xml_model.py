"""
XML 文档注释结构模型

把注释块的内容解析为节点树：
- TextNode: 普通文本
- ElementNode: <name attr="v">...</name> 或 <name/>
- BlankLineNode: 原注释中的空行

解析使用一个小型递归下降解析器，永远不会失败：
未闭合或不匹配的标签会在流末尾隐式关闭，其悬空的标记退化为普通文本。
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Union

from comment_studio.core.scanner import CommentBlock

logger = logging.getLogger(__name__)


# 块级标签：总是从新行开始
BLOCK_TAGS: frozenset[str] = frozenset({
    "summary", "remarks", "returns", "value", "param", "typeparam",
    "exception", "example", "permission", "include", "para",
    "list", "listheader", "item", "term", "description",
})

# 行内标签：可与文本共处一行，换行时作为不可拆分的整体
INLINE_TAGS: frozenset[str] = frozenset({
    "c", "see", "seealso", "paramref", "typeparamref",
})

# 预格式化标签：内容逐行原样保留
PREFORMATTED_TAGS: frozenset[str] = frozenset({"code"})

TAG_PATTERN = re.compile(
    r"<(?P<close>/)?(?P<name>[A-Za-z_][\w:.\-]*)(?P<attrs>(?:\s[^<>]*?)?)\s*(?P<self>/)?>"
)
ATTRIBUTE_PATTERN = re.compile(r"""([\w:.\-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")
BLANK_LINE_PATTERN = re.compile(r"\n[ \t]*(?=\n)")
WHITESPACE_PATTERN = re.compile(r"\s+")


@dataclass(frozen=True)
class TextNode:
    """文本节点"""
    content: str


@dataclass(frozen=True)
class BlankLineNode:
    """原注释中的空行"""


@dataclass(frozen=True)
class ElementNode:
    """
    XML 元素节点

    Attributes:
        tag_name: 标签名（保留原始大小写）
        attributes: 属性名到属性值的映射
        children: 子节点
        is_inline: 是否为行内元素
        self_closing: 是否为 <name/> 形式
        raw_open: 原始起始标签文本（空白已规范化）
    """
    tag_name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: tuple["XmlNode", ...] = ()
    is_inline: bool = False
    self_closing: bool = False
    raw_open: str = ""

    @property
    def kind(self) -> str:
        """元素类别: block / inline / code / generic"""
        return classify_tag(self.tag_name)

    @property
    def open_tag(self) -> str:
        return self.raw_open or f"<{self.tag_name}>"

    @property
    def close_tag(self) -> str:
        return "" if self.self_closing else f"</{self.tag_name}>"

    @property
    def has_block_children(self) -> bool:
        return any(
            isinstance(child, BlankLineNode)
            or (isinstance(child, ElementNode) and not child.is_inline)
            for child in self.children
        )

    @property
    def text_content(self) -> str:
        """拼接所有子文本（用于预格式化内容）"""
        return "".join(_raw_text(child) for child in self.children)


XmlNode = Union[TextNode, ElementNode, BlankLineNode]


def classify_tag(tag_name: str) -> str:
    """按标签名（忽略大小写）分类"""
    lowered = tag_name.lower()
    if lowered in PREFORMATTED_TAGS:
        return "code"
    if lowered in BLOCK_TAGS:
        return "block"
    if lowered in INLINE_TAGS:
        return "inline"
    return "generic"


def parse(block: CommentBlock) -> list[XmlNode]:
    """
    解析注释块为节点树

    Args:
        block: 扫描器产生的注释块

    Returns:
        顶层节点列表
    """
    return parse_text(block.body)


def parse_text(body: str) -> list[XmlNode]:
    """
    解析去掉注释标记后的内容

    Args:
        body: 以换行连接的内容行

    Returns:
        顶层节点列表
    """
    if not body:
        return []
    return _Parser(body).parse()


def serialize(nodes: list[XmlNode] | tuple[XmlNode, ...]) -> str:
    """
    把节点渲染为单行标记文本

    先拼接原始标记文本，再统一压缩空白：空行与相邻文本的空白合并为一个空格。
    """
    return WHITESPACE_PATTERN.sub(" ", "".join(_raw_text(node) for node in nodes))


# ============================================================
# 词法分析
# ============================================================

@dataclass(frozen=True)
class _Lexeme:
    kind: str          # text / open / close / self
    text: str
    start: int
    end: int
    name: str = ""


def _lex(stream: str) -> list[_Lexeme]:
    lexemes: list[_Lexeme] = []
    position = 0

    for match in TAG_PATTERN.finditer(stream):
        if match.start() > position:
            lexemes.append(_Lexeme("text", stream[position:match.start()], position, match.start()))

        if match.group("close"):
            kind = "close"
        elif match.group("self"):
            kind = "self"
        else:
            kind = "open"

        lexemes.append(_Lexeme(kind, match.group(0), match.start(), match.end(), match.group("name")))
        position = match.end()

    if position < len(stream):
        lexemes.append(_Lexeme("text", stream[position:], position, len(stream)))

    return lexemes


# ============================================================
# 递归下降解析
# ============================================================

class _Parser:
    """XML 注释内容解析器"""

    def __init__(self, stream: str):
        self.stream = stream
        self.lexemes = _lex(stream)
        self.pos = 0

    def parse(self) -> list[XmlNode]:
        nodes, _ = self._parse_children([])
        # 顶层遇到的多余关闭标签已在 _parse_children 中退化为文本
        return nodes

    def _parse_children(self, open_names: list[str]) -> tuple[list[XmlNode], bool]:
        """
        解析子节点直到当前元素关闭

        Returns:
            (子节点, 是否遇到了当前元素的关闭标签)
        """
        nodes: list[XmlNode] = []

        while self.pos < len(self.lexemes):
            lexeme = self.lexemes[self.pos]

            if lexeme.kind == "text":
                nodes.extend(_split_text(lexeme.text))
                self.pos += 1

            elif lexeme.kind == "self":
                nodes.append(_make_element(lexeme, (), self_closing=True))
                self.pos += 1

            elif lexeme.kind == "open":
                self.pos += 1
                if lexeme.name.lower() in PREFORMATTED_TAGS:
                    nodes.extend(self._parse_preformatted(lexeme))
                    continue

                children, closed = self._parse_children(open_names + [lexeme.name.lower()])
                if closed:
                    nodes.append(_make_element(lexeme, tuple(children)))
                else:
                    logger.debug("Unterminated <%s> degraded to text", lexeme.name)
                    nodes.append(TextNode(lexeme.text))
                    nodes.extend(children)

            else:
                name = lexeme.name.lower()
                if open_names and name == open_names[-1]:
                    self.pos += 1
                    return nodes, True
                if name in open_names:
                    # 关闭的是祖先元素：当前元素未闭合，交给上层处理
                    return nodes, False
                nodes.append(TextNode(lexeme.text))
                self.pos += 1

        return nodes, False

    def _parse_preformatted(self, opening: _Lexeme) -> list[XmlNode]:
        """<code> 内容原样保留，直到匹配的 </code>"""
        close_pattern = re.compile(rf"</{re.escape(opening.name)}\s*>", re.IGNORECASE)
        match = close_pattern.search(self.stream, opening.end)
        if match is None:
            logger.debug("Unterminated <%s> degraded to text", opening.name)
            return [TextNode(opening.text)]

        content = self.stream[opening.end:match.start()]
        while self.pos < len(self.lexemes) and self.lexemes[self.pos].start < match.end():
            self.pos += 1

        children: tuple[XmlNode, ...] = (TextNode(content),) if content else ()
        return [_make_element(opening, children)]


def _make_element(
    lexeme: _Lexeme,
    children: tuple[XmlNode, ...],
    self_closing: bool = False,
) -> ElementNode:
    attributes = {
        match.group(1): match.group(2) if match.group(2) is not None else match.group(3)
        for match in ATTRIBUTE_PATTERN.finditer(lexeme.text)
    }
    kind = classify_tag(lexeme.name)
    # 未知标签按行内处理，其内部空行折叠为一个空格
    return ElementNode(
        tag_name=lexeme.name,
        attributes=attributes,
        children=children,
        is_inline=kind in ("inline", "generic"),
        self_closing=self_closing,
        raw_open=WHITESPACE_PATTERN.sub(" ", lexeme.text),
    )


def _split_text(text: str) -> list[XmlNode]:
    """把文本按空行拆分为 TextNode 与 BlankLineNode"""
    nodes: list[XmlNode] = []
    position = 0

    for match in BLANK_LINE_PATTERN.finditer(text):
        if match.start() > position:
            nodes.append(TextNode(text[position:match.start()]))
        nodes.append(BlankLineNode())
        position = match.end()

    if position < len(text):
        nodes.append(TextNode(text[position:]))

    return nodes


def _raw_text(node: XmlNode) -> str:
    if isinstance(node, TextNode):
        return node.content
    if isinstance(node, BlankLineNode):
        return "\n"
    return node.open_tag + node.text_content + node.close_tag
