"""
Location and provenance models

Describes where an expression sits in the host document (Location), the
rendering environment captured at typeset time (Metrics), the typeset
bounding box (BBox), and the provisional match produced by a scanner
(ProtoItem) before it is promoted to a full MathItem.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Location:
    """
    A position inside the host document

    A location is either index-based (`i` is the index into the document's
    string array, `n` the character offset within that string) or
    node-based (`node` is the text or element node holding the math).
    `delim` is the delimiter string found at this boundary.

    Attributes:
        i: Index of the string in the document's string array
        n: Character offset within the string
        delim: Delimiter string at this position (e.g., "$$")
        node: Direct reference to a host document node

    Example:
        Location(i=2, n=14, delim="$")      # index-based
        Location(node=text_node, n=0)        # node-based
    """
    i: Optional[int] = field(default=None)
    n: Optional[int] = field(default=None)
    delim: Optional[str] = field(default=None)
    node: Optional[Any] = field(default=None)

    @property
    def index_based(self) -> bool:
        return self.n is not None and self.node is None

    @property
    def node_based(self) -> bool:
        return self.node is not None


@dataclass(frozen=True)
class Metrics:
    """
    Rendering-environment parameters for one typeset pass

    Attributes:
        em: Size of 1em in pixels
        ex: Size of 1ex in pixels
        containerWidth: Available container width in pixels
        lineWidth: Line-breaking width in pixels
        scale: Unitless scaling factor
    """
    em: float
    ex: float
    containerWidth: float
    lineWidth: float
    scale: float


@dataclass
class BBox:
    """
    Bounding box of the typeset output (filled by the output jax)

    Attributes:
        w: Width in em
        h: Height above the baseline in em
        d: Depth below the baseline in em
    """
    w: Optional[float] = field(default=None)
    h: Optional[float] = field(default=None)
    d: Optional[float] = field(default=None)

    @property
    def is_empty(self) -> bool:
        """True until the output jax has recorded any dimension"""
        return self.w is None and self.h is None and self.d is None


@dataclass(frozen=True)
class ProtoItem:
    """
    A provisional math match returned by the scanner

    Consumed exactly once to build a MathItem (the string-array position
    is translated into a node position at that point).

    Attributes:
        math: The math expression itself (without delimiters)
        start: Starting location of the match (including the open delimiter)
        end: Ending location of the match (after the close delimiter)
        open: Opening delimiter
        close: Closing delimiter
        n: Index of the string in which the math was found
        display: True for display mode, False for inline, None if not
                 yet determined
    """
    math: str
    start: Location
    end: Location
    open: Optional[str] = field(default=None)
    close: Optional[str] = field(default=None)
    n: Optional[int] = field(default=None)
    display: Optional[bool] = field(default=None)


def protoItem_make(
    open: str,
    math: str,
    close: str,
    n: int,
    start: int,
    end: int,
    display: Optional[bool] = None,
) -> ProtoItem:
    """
    Produce a proto math item that can be turned into a MathItem

    Offsets are trusted from the caller; no validation is performed.

    Args:
        open: Opening delimiter (may be empty)
        math: Raw matched math text
        close: Closing delimiter (may be empty)
        n: Index of the string-array entry the match was found in
        start: Character offset of the match start within that entry
        end: Character offset of the match end within that entry
        display: Display mode, or None to resolve it later

    Returns:
        ProtoItem with start=Location(n=start) and end=Location(n=end)

    Example:
        >>> item = protoItem_make("$", "x^2", "$", 0, 4, 9, False)
        >>> item.start.n, item.end.n
        (4, 9)
    """
    return ProtoItem(
        math=math,
        start=Location(n=start),
        end=Location(n=end),
        open=open,
        close=close,
        n=n,
        display=display,
    )
