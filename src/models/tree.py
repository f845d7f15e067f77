"""
Internal tree model

The input jax compiles source text into a tree of MmlNode objects. The
tree is independent of any rendering target; the output jax walks it to
produce host document nodes.
"""

from dataclasses import dataclass, field
from typing import Iterator, List


# Node kinds understood by the bundled output jax
NODE_KINDS = {"math", "mrow", "mi", "mn", "mo", "mtext", "msup", "msub"}


@dataclass
class MmlNode:
    """
    A node of the compiled internal tree

    Token nodes (mi, mn, mo, mtext) carry `text`; container nodes (math,
    mrow) carry `children`; script nodes (msup, msub) carry exactly two
    children, base then script.

    Attributes:
        kind: Node kind (e.g., "mi", "mrow", "msup")
        text: Token text for leaf nodes
        children: Child nodes for container and script nodes

    Example:
        For source "x^2":
        MmlNode("math", children=[
            MmlNode("msup", children=[MmlNode("mi", "x"), MmlNode("mn", "2")])
        ])
    """
    kind: str
    text: str = ""
    children: List["MmlNode"] = field(default_factory=list)

    @property
    def is_token(self) -> bool:
        return self.kind in ("mi", "mn", "mo", "mtext")

    def walk(self) -> Iterator["MmlNode"]:
        """Yield this node and all descendants, depth first"""
        yield self
        for child in self.children:
            yield from child.walk()
