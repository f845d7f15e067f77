"""
mathitem - Math expression lifecycle for host documents

Finds math in a document, compiles it, typesets it and inserts the
result, with safe rollback of every stage.
"""

__version__ = "1.0.0"

from .mathitem import AbstractMathItem
from .document import MathDocument, HostMathItem
from .dom import HostDocument, ElementNode, TextNode
from .errors import MathItemError, ParseError, RenderError, InvalidStateError
from .findmath import FindMath
from .inputjax import TexInputJax
from .outputjax import HtmlOutputJax
from .log import LOG, state_connectToLogger

__all__ = [
    "AbstractMathItem",
    "MathDocument",
    "HostMathItem",
    "HostDocument",
    "ElementNode",
    "TextNode",
    "MathItemError",
    "ParseError",
    "RenderError",
    "InvalidStateError",
    "FindMath",
    "TexInputJax",
    "HtmlOutputJax",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
