"""
Math item lifecycle models

Defines the lifecycle states a MathItem moves through, the tagged display
mode, and the per-collaborator data maps the input and output jax use to
keep private state on an item.
"""

from enum import Enum, IntEnum
from typing import Any, Dict, Iterator, Optional, Union


class MathState(IntEnum):
    """
    Processing state of a MathItem, in increasing order

    Forward operations advance one level at a time; rolling back to a
    lower state discards the data owned by every abandoned state.
    """
    UNPROCESSED = 0
    COMPILED = 1
    TYPESET = 2
    INSERTED = 3


class DisplayMode(Enum):
    """
    How an expression is laid out relative to the surrounding text

    UNRESOLVED means the mode could not be determined from the source;
    such items are rendered through the output jax's escaped path.
    """
    DISPLAY = "display"
    INLINE = "inline"
    UNRESOLVED = "unresolved"

    @classmethod
    def from_flag(cls, display: Optional[bool]) -> "DisplayMode":
        """Map True/False/None onto DISPLAY/INLINE/UNRESOLVED"""
        if display is None:
            return cls.UNRESOLVED
        return cls.DISPLAY if display else cls.INLINE

    @property
    def flag(self) -> Optional[bool]:
        if self is DisplayMode.UNRESOLVED:
            return None
        return self is DisplayMode.DISPLAY


class JaxData:
    """
    Collaborator-private data attached to a MathItem

    Each input or output jax gets its own slot, keyed by the jax's `name`
    (or class name when it has none), so collaborators never share keys.
    The whole map is discarded when the item rolls back past the state
    that produced it.

    Example:
        data = JaxData()
        data.slot(tex_jax)["tokens"] = 5
        data.get(tex_jax)            # {'tokens': 5}
        len(data)                     # 1
    """

    def __init__(self) -> None:
        self._slots: Dict[str, Dict[str, Any]] = {}

    @staticmethod
    def key(jax: Union[str, Any]) -> str:
        if isinstance(jax, str):
            return jax
        return getattr(jax, "name", None) or type(jax).__name__

    def slot(self, jax: Union[str, Any]) -> Dict[str, Any]:
        """Return the data dict for a collaborator, creating it if needed"""
        return self._slots.setdefault(self.key(jax), {})

    def get(self, jax: Union[str, Any]) -> Optional[Dict[str, Any]]:
        return self._slots.get(self.key(jax))

    def clear(self) -> None:
        self._slots.clear()

    def __contains__(self, jax: Any) -> bool:
        return self.key(jax) in self._slots

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"JaxData({self._slots!r})"
