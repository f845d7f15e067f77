"""
Document driver for math rendering

MathDocument owns the math items found in one HostDocument and drives
each of them through the lifecycle:

    find -> promote -> metrics -> compile -> typeset -> update document

Parse and render failures are contained per item: the failed expression
is replaced by an error indicator and the rest of the batch continues.
"""

from typing import Any, Dict, List, Optional

from ..config import AppSettings, appsettings
from ..models.location import Location, ProtoItem
from ..models.mathitem import MathState
from .dom import HostDocument
from .errors import InvalidStateError, ParseError, RenderError
from .findmath import FindMath
from .inputjax import TexInputJax
from .log import LOG
from .mathitem import AbstractMathItem
from .outputjax import HtmlOutputJax


class HostMathItem(AbstractMathItem):
    """
    A MathItem bound to a HostDocument node

    start.node is the text node holding the original source (delimiters
    included). Insertion swaps that node for typesetRoot; removal swaps
    it back, or just drops typesetRoot when not restoring.
    """

    def typeset_insert(self, document: Any) -> None:
        node = self.start.node
        if node is None or node.parent is None:
            raise InvalidStateError(
                f"'{self.math}' has no source node in the document to replace"
            )
        HostDocument.node_replace(node, self.typesetRoot)
        LOG(f"Inserted '{self.math}' into document", level=3)

    def typeset_detach(self, restore: bool) -> None:
        if self.typesetRoot is None or self.typesetRoot.parent is None:
            return
        if restore and self.start.node is not None:
            HostDocument.node_replace(self.typesetRoot, self.start.node)
        else:
            HostDocument.node_remove(self.typesetRoot)


class MathDocument:
    """
    Drives every math item of a host document through its lifecycle

    Attributes:
        document: The HostDocument being processed
        inputJax: Input jax compiling each item
        outputJax: Output jax typesetting each item
        finder: Scanner locating math in the document's strings
        math: Items in document order
        errors: Number of items replaced by an error indicator
    """

    def __init__(
        self,
        document: HostDocument,
        inputJax: Optional[Any] = None,
        outputJax: Optional[Any] = None,
        settings: Optional[AppSettings] = None,
        finder: Optional[FindMath] = None,
    ) -> None:
        self.settings = settings or appsettings
        self.document = document
        self.inputJax = inputJax or TexInputJax()
        self.outputJax = outputJax or HtmlOutputJax(self.settings)
        self.finder = finder or FindMath(self.settings)
        self.math: List[HostMathItem] = []
        self.errors = 0
        self.found = False

    @classmethod
    def document_fromText(cls, *strings: str, **kwargs: Any) -> "MathDocument":
        """Wrap source strings in a HostDocument and a MathDocument"""
        return cls(HostDocument.document_fromText(*strings), **kwargs)

    def math_find(self) -> List[ProtoItem]:
        """Scan the document's strings for math"""
        protos = self.finder.math_find(self.document.strings())
        LOG(f"Found {len(protos)} math expressions", level=2)
        return protos

    def math_promote(self, protos: List[ProtoItem]) -> List[HostMathItem]:
        """
        Turn ProtoItems into HostMathItems

        Each match is split out of its text node into a node of its own,
        which becomes the item's node-based start/end location. Matches
        within a string are split last to first so earlier offsets stay
        valid.

        Args:
            protos: Matches from math_find(), against the current strings

        Returns:
            The new items in document order (also appended to self.math)
        """
        nodes = self.document.textNodes_get()
        items: List[HostMathItem] = []
        for proto in sorted(protos, key=lambda p: (p.n, p.start.n), reverse=True):
            node = nodes[proto.n]
            HostDocument.text_split(node, proto.end.n)
            span = HostDocument.text_split(node, proto.start.n)

            display = proto.display
            if display is None:
                display = self.settings.displayFlag_forDelims(
                    proto.open or "", proto.close or ""
                )
            items.append(
                HostMathItem(
                    proto.math,
                    self.inputJax,
                    display,
                    Location(i=proto.n, n=proto.start.n, delim=proto.open, node=span),
                    Location(i=proto.n, n=proto.end.n, delim=proto.close, node=span),
                )
            )
        items.reverse()
        self.math.extend(items)
        return items

    def metrics_update(self) -> None:
        """Capture the current rendering environment on every item"""
        s = self.settings
        for item in self.math:
            item.metrics_set(s.em_size, s.ex_size, s.container_width, s.line_width, s.scale)

    def math_compile(self) -> None:
        LOG(f"Compiling {len(self.math)} expressions", level=2)
        for item in self.math:
            try:
                item.compile(self)
            except ParseError as e:
                self.item_fail(item, e)

    def math_typeset(self) -> None:
        LOG(f"Typesetting {len(self.math)} expressions", level=2)
        for item in self.math:
            try:
                item.typeset(self)
            except RenderError as e:
                self.item_fail(item, e)

    def document_update(self) -> None:
        """Insert typeset output, last item first"""
        LOG("Updating document", level=2)
        for item in reversed(self.math):
            item.document_update(self)
            item.eventHandlers_add()

    def item_fail(self, item: HostMathItem, err: Exception) -> None:
        """Replace a failed item's output with an error indicator"""
        LOG(f"Math error in '{item.math}': {err}", level=1)
        self.errors += 1
        item.typesetRoot = self.outputJax.error(item, err)
        item.state_transitionTo(MathState.TYPESET)

    def render(self) -> Dict[str, Any]:
        """
        Run every lifecycle stage over the document

        Math is located and promoted on the first call only; later calls
        process whatever items are not yet inserted.

        Returns:
            dict with 'math' (item count), 'inserted' and 'errors'
        """
        if not self.found:
            self.math_promote(self.math_find())
            self.found = True
        self.metrics_update()
        self.math_compile()
        self.math_typeset()
        self.document_update()
        return self.results_get()

    def reset(self, restore: bool = True) -> None:
        """
        Roll every item back to UNPROCESSED

        Without restore the items' source nodes are gone from the document,
        so the items are dropped and the next render() scans for math anew.

        Args:
            restore: True to put the original math source back into the
                     document in place of the typeset output
        """
        LOG(f"Resetting {len(self.math)} expressions (restore={restore})", level=2)
        for item in reversed(self.math):
            item.state_transitionTo(MathState.UNPROCESSED, restore)
        self.errors = 0
        if not restore:
            self.math = []
            self.found = False

    def rerender(self) -> Dict[str, Any]:
        """Reset with the source restored, then render again"""
        self.reset(restore=True)
        return self.render()

    def math_clear(self) -> None:
        """Restore the source and forget all items so math is found anew"""
        self.reset(restore=True)
        self.math = []
        self.found = False

    def results_get(self) -> Dict[str, Any]:
        inserted = sum(1 for item in self.math if item.state == MathState.INSERTED)
        return {
            'math': len(self.math),
            'inserted': inserted,
            'errors': self.errors,
        }
