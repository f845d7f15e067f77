"""
TeX input jax

Compiles the source text of a MathItem into the internal MmlNode tree.
The tree is shallow: braces become nested rows and ^/_ attach a script
to the preceding atom; everything else is a flat sequence of tokens.
"""

from typing import Any, List, Optional

from pygments.token import Text, Punctuation, Keyword, Number, Operator, Name

from ..models.tree import MmlNode
from .errors import ParseError
from .lexer import TexMathLexer
from .log import LOG


class _Frame:
    """One open brace group while building the tree"""

    def __init__(self) -> None:
        self.children: List[MmlNode] = []
        self.script: Optional[str] = None

    def atom_add(self, atom: MmlNode) -> None:
        if self.script is None:
            self.children.append(atom)
            return
        base = self.children.pop() if self.children else MmlNode("mrow")
        kind = "msup" if self.script == "^" else "msub"
        self.children.append(MmlNode(kind, children=[base, atom]))
        self.script = None


class TexInputJax:
    """
    Input jax for TeX math

    Exposes compile(item) -> MmlNode as required of an input jax. It does
    not touch the document.
    """

    name = "TeX"

    def __init__(self) -> None:
        self.lexer = TexMathLexer()

    def compile(self, item: Any) -> MmlNode:
        """
        Compile an item's math into the internal tree

        Args:
            item: MathItem whose `math` is compiled

        Returns:
            A "math" MmlNode holding the compiled expression

        Raises:
            ParseError: On unbalanced braces or misplaced scripts
        """
        stack: List[_Frame] = [_Frame()]
        count = 0

        for _, token, value in self.lexer.get_tokens_unprocessed(item.math):
            if token in Text:
                continue
            count += 1
            frame = stack[-1]

            if token in Punctuation:
                if value == "{":
                    stack.append(_Frame())
                    continue
                if len(stack) == 1:
                    raise ParseError(
                        "ExtraCloseMissingOpen",
                        "Extra close brace or missing open brace",
                    )
                self.script_check(frame)
                stack.pop()
                stack[-1].atom_add(MmlNode("mrow", children=frame.children))
            elif token in Keyword:
                self.script_begin(frame, value)
            else:
                frame.atom_add(self.token_toNode(token, value))

        if len(stack) > 1:
            raise ParseError("MissingCloseBrace", "Missing close brace")
        self.script_check(stack[0])

        item.inputData.slot(self)["tokens"] = count
        LOG(f"Compiled '{item.math}' ({count} tokens)", level=3)
        return MmlNode("math", children=stack[0].children)

    def script_begin(self, frame: _Frame, script: str) -> None:
        """Record a pending ^ or _ on the current group"""
        if frame.script is not None:
            raise ParseError("MissingArgFor", "Missing argument for %1", frame.script)
        last = frame.children[-1] if frame.children else None
        if last is not None:
            if script == "^" and last.kind == "msup":
                raise ParseError(
                    "DoubleExponent", "Double exponent: use braces to clarify"
                )
            if script == "_" and last.kind == "msub":
                raise ParseError(
                    "DoubleSubscripts", "Double subscripts: use braces to clarify"
                )
        frame.script = script

    def script_check(self, frame: _Frame) -> None:
        """A group may not end while a script still waits for its argument"""
        if frame.script is not None:
            raise ParseError("MissingArgFor", "Missing argument for %1", frame.script)

    def token_toNode(self, token: Any, value: str) -> MmlNode:
        """Map a lexer token onto a leaf node"""
        if token in Number:
            return MmlNode("mn", value)
        if token in Operator:
            return MmlNode("mo", value[1:] if value.startswith("\\") else value)
        if token in Name.Function:
            return MmlNode("mi", value[1:])
        if token in Name:
            return MmlNode("mi", value)
        return MmlNode("mtext", value)
