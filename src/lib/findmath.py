"""
Delimiter scanner

Locates math in the document's string array and reports each match as a
ProtoItem (string index plus character offsets). The scanner never
touches document nodes; promotion to MathItems happens in the document
driver.
"""

import re
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..config import AppSettings, appsettings
from ..models.location import ProtoItem, protoItem_make


class FindMath:
    """
    Find delimited TeX math in a list of strings

    Open delimiters are matched longest first, so "$$" wins over "$".
    Braces inside the math are balanced before a close delimiter counts,
    and backslash pairs are skipped, so "\\}" or "\\$" inside the math
    never end it.

    Example:
        >>> finder = FindMath()
        >>> [p.math for p in finder.math_find(["a $x$ and $$y$$"])]
        ['x', 'y']
    """

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        self.settings = settings or appsettings
        self.delims: Dict[str, Tuple[str, bool]] = {}
        for open, close in self.settings.inline_delimiters:
            self.delims[open] = (close, False)
        for open, close in self.settings.display_delimiters:
            self.delims[open] = (close, True)
        self.start_pattern = self.pattern_build(list(self.delims))

    def pattern_build(self, opens: Sequence[str]) -> "re.Pattern[str]":
        """Regex matching any open delimiter, or an escaped dollar"""
        parts = [re.escape(d) for d in sorted(opens, key=len, reverse=True)]
        if self.settings.process_escapes:
            parts.insert(0, r"\\\$")
        return re.compile("|".join(parts))

    def math_find(self, strings: List[str]) -> List[ProtoItem]:
        """
        Scan every string for delimited math

        Args:
            strings: The document's strings, in document order

        Returns:
            ProtoItems in document order; ProtoItem.n is the string index
        """
        found: List[ProtoItem] = []
        for n, text in enumerate(strings):
            found.extend(self.string_scan(text, n))
        return found

    def string_scan(self, text: str, n: int) -> Iterator[ProtoItem]:
        position = 0
        while True:
            match = self.start_pattern.search(text, position)
            if match is None:
                return
            open = match.group(0)
            if open == "\\$":
                position = match.end()
                continue
            close, display = self.delims[open]
            end = self.close_find(text, match.end(), close)
            if end is None:
                position = match.end()
                continue
            yield protoItem_make(
                open,
                text[match.end():end],
                close,
                n,
                match.start(),
                end + len(close),
                display,
            )
            position = end + len(close)

    @staticmethod
    def close_find(text: str, start: int, close: str) -> Optional[int]:
        """Offset of the close delimiter ending math that starts at `start`"""
        depth = 0
        i = start
        while i < len(text):
            if depth == 0 and text.startswith(close, i):
                return i
            c = text[i]
            if c == "\\":
                i += 2
                continue
            if c == "{":
                depth += 1
            elif c == "}":
                if depth == 0:
                    return None
                depth -= 1
            i += 1
        return None
