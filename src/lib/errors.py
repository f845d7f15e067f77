"""
Error taxonomy for the math item lifecycle

ParseError and RenderError are raised by the input and output jax and are
recoverable per item by the document driver. InvalidStateError is raised
by the lifecycle itself when an operation is invoked out of order; it is
a programming error and is never caught by the driver.

Also provides message_format(), the %-template substitution used to build
TeX error messages from an [id, template, *args] list.
"""

import re
from typing import Any, List, Sequence


_pattern = re.compile(
    r"%(\d+|\{\d+\}|\{[a-z]+:%\d+(?:\|(?:%\{\d+\}|%.|[^}])*)+\}|.)",
    re.ASCII,
)
_plural = re.compile(r"^\{([a-z]+):%(\d+)\|(.*)\}$", re.ASCII)


def message_format(template: str, args: Sequence[Any]) -> str:
    """
    Substitute arguments into an error message template

    Recognized forms:
        %n          argument n (1-based)
        %{n}        argument n (1-based)
        %{plural:%n|...}  kept literally (no localization)
        %c          the literal character c (so %% gives %)

    Missing arguments are rendered as '???'.

    Args:
        template: Message template
        args: Substitution arguments

    Returns:
        Formatted message string

    Example:
        >>> message_format("Missing argument for %1", ["sqrt"])
        'Missing argument for sqrt'
    """
    parts: List[Any] = _pattern.split(template)
    for i in range(1, len(parts), 2):
        part = parts[i]
        c = part[0]
        if _isDigit(c):
            parts[i] = _argument(args, int(part))
        elif c == "{":
            if len(part) > 1 and _isDigit(part[1]):
                parts[i] = _argument(args, int(part[1:-1]))
            elif _plural.match(part):
                parts[i] = "%" + part
        if parts[i] is None:
            parts[i] = "???"
    return "".join(parts)


def _isDigit(c: str) -> bool:
    # ASCII only; str.isdigit() also accepts superscripts and other scripts
    return "0" <= c <= "9"


def _argument(args: Sequence[Any], index: int) -> Any:
    if 1 <= index <= len(args):
        value = args[index - 1]
        return None if value is None else str(value)
    return None


class MathItemError(Exception):
    """Base class for math item lifecycle errors"""
    pass


class ParseError(MathItemError):
    """
    Raised by the input jax when it rejects the source text

    Built from an error list [id, template, *args], matching the way TeX
    errors are reported.

    Attributes:
        id: Error identifier (e.g., "MissingCloseBrace")
        message: Formatted, human-readable message
    """

    def __init__(self, *error: Any) -> None:
        if len(error) > 1:
            self.id: str = str(error[0])
            self.message: str = message_format(str(error[1]), error[2:])
        else:
            self.id = ""
            self.message = ""
        super().__init__(self.message)


class RenderError(MathItemError):
    """Raised by the output jax when it cannot render an internal tree"""
    pass


class InvalidStateError(MathItemError):
    """Raised when a lifecycle operation is invoked out of state order"""
    pass
