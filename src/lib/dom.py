"""
Host document model

A minimal node tree standing in for the page the math lives in: element
nodes with attributes and children, and text nodes with raw text. Text
serializes verbatim, so a document built from source text serializes back
to exactly that text until math is typeset into it.
"""

from html import escape
from typing import Dict, Iterator, List, Optional, Union


class TextNode:
    """A run of raw document text"""

    def __init__(self, text: str) -> None:
        self.text = text
        self.parent: Optional["ElementNode"] = None

    def serialize(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"TextNode({self.text!r})"


class ElementNode:
    """
    An element with a tag, attributes and ordered children

    Attributes:
        tag: Element tag name (e.g., "span")
        attrs: Attribute name -> value
        children: Child nodes in document order
        parent: Containing element, or None when detached
    """

    def __init__(
        self,
        tag: str,
        attrs: Optional[Dict[str, str]] = None,
        children: Optional[List["Node"]] = None,
    ) -> None:
        self.tag = tag
        self.attrs: Dict[str, str] = dict(attrs or {})
        self.children: List[Node] = []
        self.parent: Optional[ElementNode] = None
        for child in children or []:
            self.child_append(child)

    def child_append(self, child: "Node") -> "Node":
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def text(self) -> str:
        """Concatenated text content of all descendant text nodes"""
        return "".join(node.text for node in _textNodes(self))

    def serialize(self) -> str:
        attrs = "".join(
            f' {name}="{escape(value, quote=True)}"' for name, value in self.attrs.items()
        )
        inner = "".join(child.serialize() for child in self.children)
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"

    def __repr__(self) -> str:
        return f"ElementNode({self.tag!r}, {len(self.children)} children)"


Node = Union[TextNode, ElementNode]


def _textNodes(node: Node) -> Iterator[TextNode]:
    if isinstance(node, TextNode):
        yield node
        return
    for child in node.children:
        yield from _textNodes(child)


class HostDocument:
    """
    The mutable document math is found in and typeset into

    The document body is an element whose children start out as a single
    text node per source string. Scanning works on strings(); promotion
    and insertion work on the nodes.

    Example:
        doc = HostDocument.document_fromText("Area is $x^2$.")
        doc.strings()          # ['Area is $x^2$.']
        doc.serialize()        # 'Area is $x^2$.'
    """

    def __init__(self, body: Optional[ElementNode] = None) -> None:
        self.body = body if body is not None else ElementNode("body")

    @classmethod
    def document_fromText(cls, *strings: str) -> "HostDocument":
        """Build a document with one text node per string"""
        body = ElementNode("body", children=[TextNode(s) for s in strings])
        return cls(body)

    def textNodes_get(self) -> List[TextNode]:
        """Text nodes in document order"""
        return list(_textNodes(self.body))

    def strings(self) -> List[str]:
        """Text of every text node, in document order"""
        return [node.text for node in self.textNodes_get()]

    @staticmethod
    def text_split(node: TextNode, offset: int) -> TextNode:
        """
        Split a text node in two at a character offset

        The node keeps the text before the offset; a new sibling inserted
        right after it receives the rest.

        Returns:
            The new text node holding text[offset:]
        """
        if node.parent is None:
            raise ValueError("Cannot split a detached text node")
        tail = TextNode(node.text[offset:])
        node.text = node.text[:offset]
        HostDocument.node_insertAfter(node, tail)
        return tail

    @staticmethod
    def node_insertAfter(reference: Node, node: Node) -> None:
        parent = reference.parent
        if parent is None:
            raise ValueError("Reference node is not attached to the document")
        if node.parent is not None:
            node.parent.children.remove(node)
        index = parent.children.index(reference)
        parent.children.insert(index + 1, node)
        node.parent = parent

    @staticmethod
    def node_replace(old: Node, new: Node) -> None:
        """Put `new` where `old` is; `old` is left detached"""
        parent = old.parent
        if parent is None:
            raise ValueError("Cannot replace a node that is not in the document")
        if new.parent is not None:
            new.parent.children.remove(new)
        index = parent.children.index(old)
        parent.children[index] = new
        new.parent = parent
        old.parent = None

    @staticmethod
    def node_remove(node: Node) -> None:
        if node.parent is not None:
            node.parent.children.remove(node)
            node.parent = None

    def serialize(self) -> str:
        """Document content without the body wrapper"""
        return "".join(child.serialize() for child in self.body.children)
