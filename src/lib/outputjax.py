"""
HTML output jax

Renders the internal MmlNode tree of a MathItem into host document
element nodes. Three entry points:

    typeset(item, document)  normal rendering of a compiled item
    escaped(item, document)  literal source, for items whose display
                             mode could not be resolved
    error(item, err)         error indicator replacing a failed item

No layout is performed; the bounding box is a per-token estimate scaled
by the item's metrics.
"""

from html import escape
from typing import Any, List, Optional

from ..config import AppSettings, appsettings
from ..models.location import BBox
from ..models.tree import NODE_KINDS, MmlNode
from .dom import ElementNode, Node, TextNode
from .errors import RenderError
from .log import LOG


# Estimated advance of one token character, in em
CHAR_WIDTH = 0.5


class HtmlOutputJax:
    """
    Output jax producing span/div element trees

    Attributes:
        settings: Application settings (error class name)
    """

    name = "HTML"

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        self.settings = settings or appsettings

    def typeset(self, item: Any, document: Any) -> ElementNode:
        """
        Render a compiled item

        Args:
            item: MathItem with a compiled root
            document: The MathDocument being rendered

        Returns:
            div.mathitem for display math, span.mathitem for inline math

        Raises:
            RenderError: If the item has no tree or the tree holds a node
                         kind this jax cannot render
        """
        if item.root is None:
            raise RenderError(f"No internal tree to typeset for '{item.math}'")

        tag = "div" if item.display else "span"
        wrapper = ElementNode(tag, {"class": "mathitem", "data-tex": item.math})
        for child in self.node_render(item.root):
            wrapper.child_append(child)

        item.bbox = self.bbox_compute(item.root, item.metrics)
        item.outputData.slot(self)["nodes"] = sum(1 for _ in item.root.walk())
        LOG(f"Typeset '{item.math}' as <{tag}>", level=3)
        return wrapper

    def escaped(self, item: Any, document: Any) -> ElementNode:
        """Render the item's original source, delimiters included"""
        return ElementNode(
            "span",
            {"class": "mathitem-escaped"},
            [TextNode(escape(self.source_get(item), quote=False))],
        )

    def error(self, item: Any, err: Exception) -> ElementNode:
        """Render an indicator showing the source of a failed item"""
        message = getattr(err, "message", "") or str(err)
        return ElementNode(
            "span",
            {"class": self.settings.error_class, "title": message},
            [TextNode(escape(self.source_get(item), quote=False))],
        )

    def node_render(self, node: MmlNode) -> List[Node]:
        """Render one tree node into a list of element nodes"""
        if node.kind not in NODE_KINDS:
            raise RenderError(f"Cannot render node kind '{node.kind}'")

        if node.kind in ("math", "mrow"):
            rendered: List[Node] = []
            for child in node.children:
                rendered.extend(self.node_render(child))
            if node.kind == "mrow" and len(node.children) != 1:
                return [ElementNode("span", {"class": "mrow"}, rendered)]
            return rendered

        if node.kind in ("msup", "msub"):
            if len(node.children) != 2:
                raise RenderError(f"{node.kind} needs a base and a script")
            base, script = node.children
            tag = "sup" if node.kind == "msup" else "sub"
            return self.node_render(base) + [
                ElementNode(tag, children=self.node_render(script))
            ]

        if node.kind == "mi":
            return [ElementNode("i", children=[TextNode(escape(node.text, quote=False))])]

        # mn, mo, mtext
        return [
            ElementNode(
                "span",
                {"class": node.kind},
                [TextNode(escape(node.text, quote=False))],
            )
        ]

    def bbox_compute(self, root: MmlNode, metrics: Any) -> BBox:
        """Estimate the bounding box of a tree, in em"""
        scale = metrics.scale if metrics is not None else 1.0
        chars = sum(len(node.text) for node in root.walk() if node.is_token)
        kinds = {node.kind for node in root.walk()}
        height = 0.75 + (0.25 if "msup" in kinds else 0.0)
        depth = 0.25 + (0.2 if "msub" in kinds else 0.0)
        return BBox(w=chars * CHAR_WIDTH * scale, h=height * scale, d=depth * scale)

    @staticmethod
    def source_get(item: Any) -> str:
        return f"{item.start.delim or ''}{item.math}{item.end.delim or ''}"
