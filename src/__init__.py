"""
mathitem - Math expression lifecycle for host documents

Finds delimited math in a document and carries each expression through
compile, typeset and insertion, with safe rollback of every stage.
"""

__version__ = "1.0.0"

from .lib import (
    AbstractMathItem,
    MathDocument,
    HostMathItem,
    HostDocument,
    ParseError,
    RenderError,
    InvalidStateError,
    LOG,
    state_connectToLogger,
)
from .models import MathState, DisplayMode, Location, ProtoItem, protoItem_make

__all__ = [
    "AbstractMathItem",
    "MathDocument",
    "HostMathItem",
    "HostDocument",
    "ParseError",
    "RenderError",
    "InvalidStateError",
    "LOG",
    "state_connectToLogger",
    "MathState",
    "DisplayMode",
    "Location",
    "ProtoItem",
    "protoItem_make",
    "__version__",
]
