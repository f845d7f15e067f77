"""
MathItem lifecycle state machine

A MathItem holds everything known about one expression in a document:
its source text, where it sits in the document, its compiled internal
tree, its typeset output, and the metrics and bounding box of that
output. The item enforces the processing order

    UNPROCESSED -> COMPILED -> TYPESET -> INSERTED

and, when rolled back, discards the data owned by every abandoned state.

The compiled tree (root) and the typeset output (typesetRoot) survive a
rollback; only the bbox, outputData and inputData caches are reset.
"""

from typing import Any, Optional

from ..models.location import BBox, Location, Metrics
from ..models.mathitem import DisplayMode, JaxData, MathState
from .errors import InvalidStateError
from .log import LOG


class AbstractMathItem:
    """
    Base implementation of the MathItem lifecycle

    Subclasses bind the item to a concrete host document by overriding
    the typeset_insert() and typeset_detach() hooks; the base class
    handles state ordering and invalidation.

    Attributes:
        inputJax: Input jax used to compile the math
        displayMode: DISPLAY, INLINE or UNRESOLVED
        start: Starting location of the math in the document
        end: Ending location of the math in the document
        root: Compiled internal tree (None until compiled)
        typesetRoot: Typeset output handle (None until typeset)
        metrics: Metrics captured for the current typeset pass
        bbox: Bounding box of the typeset output
        inputData: Input-jax private data
        outputData: Output-jax private data
    """

    STATE = MathState

    def __init__(
        self,
        math: str,
        jax: Any,
        display: Optional[bool] = True,
        start: Optional[Location] = None,
        end: Optional[Location] = None,
    ) -> None:
        """
        Args:
            math: The math expression for this item
            jax: The input jax to use for this item
            display: True for display mode, False for inline, None if
                     undetermined
            start: Starting position of the math in the document
            end: Ending position of the math in the document
        """
        self._math = math
        self.inputJax = jax
        self.displayMode = DisplayMode.from_flag(display)
        self.start = start if start is not None else Location(i=0, n=0, delim="")
        self.end = end if end is not None else Location(i=0, n=0, delim="")
        self.root: Any = None
        self.typesetRoot: Any = None
        self.metrics: Optional[Metrics] = None
        self.bbox = BBox()
        self.inputData = JaxData()
        self.outputData = JaxData()
        self._state = MathState.UNPROCESSED

    @property
    def math(self) -> str:
        return self._math

    @property
    def display(self) -> Optional[bool]:
        return self.displayMode.flag

    @display.setter
    def display(self, value: Optional[bool]) -> None:
        self.displayMode = DisplayMode.from_flag(value)

    @property
    def state(self) -> MathState:
        """Current processing state (pure query)"""
        return self._state

    def compile(self, document: Any) -> None:
        """
        Convert the math into the internal format using the input jax

        No-op when already compiled. A ParseError from the input jax
        propagates and leaves both the state and root untouched.

        Args:
            document: The MathDocument in which the math resides
        """
        if self._state < MathState.COMPILED:
            self.root = self.inputJax.compile(self)
            self.state_transitionTo(MathState.COMPILED)

    def typeset(self, document: Any) -> None:
        """
        Convert the internal format into typeset output using the
        document's output jax

        Items whose display mode is unresolved go through the escaped
        render path. No-op when already typeset. A RenderError propagates
        and leaves the state untouched.

        Args:
            document: The MathDocument in which the math resides
        """
        if self._state < MathState.TYPESET:
            jax = document.outputJax
            if self.displayMode is DisplayMode.UNRESOLVED:
                self.typesetRoot = jax.escaped(self, document)
            else:
                self.typesetRoot = jax.typeset(self, document)
            self.state_transitionTo(MathState.TYPESET)

    def eventHandlers_add(self) -> None:
        """Add any needed event handlers to the typeset output"""
        pass

    def document_update(self, document: Any) -> None:
        """
        Insert the typeset output in place of the original math

        Args:
            document: The MathDocument in which the math resides

        Raises:
            InvalidStateError: If the item has not been typeset
        """
        if self._state < MathState.TYPESET:
            raise InvalidStateError(
                f"Cannot insert '{self.math}' into the document: "
                f"item is {self._state.name}, not TYPESET"
            )
        if self._state < MathState.INSERTED:
            self.typeset_insert(document)
            self.state_transitionTo(MathState.INSERTED)

    def document_remove(self, restore: bool = False) -> None:
        """
        Remove the typeset output from the document

        Leaves the item below INSERTED. No-op if it was never inserted.

        Args:
            restore: True to put the original math and its delimiters
                     back in place of the typeset output
        """
        if self._state >= MathState.INSERTED:
            self.typeset_detach(restore)
            self._state = MathState.TYPESET
            LOG(f"Removed '{self.math}' from document (restore={restore})", level=3)

    def typeset_insert(self, document: Any) -> None:
        """Hook: splice typesetRoot into the host document"""
        pass

    def typeset_detach(self, restore: bool) -> None:
        """Hook: take typesetRoot out of the host document"""
        pass

    def metrics_set(
        self, em: float, ex: float, cwidth: float, lwidth: float, scale: float
    ) -> None:
        """
        Set the metric information for this expression

        Args:
            em: The size of 1 em in pixels
            ex: The size of 1 ex in pixels
            cwidth: The container width in pixels
            lwidth: The line breaking width in pixels
            scale: The scaling factor (unitless)
        """
        self.metrics = Metrics(
            em=em, ex=ex, containerWidth=cwidth, lineWidth=lwidth, scale=scale
        )

    def state_transitionTo(self, state: int, restore: bool = False) -> MathState:
        """
        Move the item to a new processing state

        Moving backwards cleans up after each abandoned state, checked in
        order against the state held on entry:
          - leaving INSERTED removes the output from the document
          - leaving TYPESET resets bbox and outputData
          - leaving COMPILED resets inputData
        Moving forwards (or to the same state) does no cleanup.

        Args:
            state: The state to set for the expression
            restore: True if the original math should be restored when
                     rolling back an inserted item

        Returns:
            The newly set state

        Raises:
            InvalidStateError: If state is not a MathState value
        """
        try:
            target = MathState(state)
        except ValueError:
            raise InvalidStateError(f"Unknown math item state: {state!r}")

        current = self._state
        if target < MathState.INSERTED and current >= MathState.INSERTED:
            self.document_remove(restore)
        if target < MathState.TYPESET and current >= MathState.TYPESET:
            self.bbox = BBox()
            self.outputData = JaxData()
        if target < MathState.COMPILED and current >= MathState.COMPILED:
            self.inputData = JaxData()
        self._state = target

        if target != current:
            LOG(f"'{self.math}': {current.name} -> {target.name}", level=3)
        return self._state

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(math={self.math!r}, "
            f"display={self.displayMode.value}, state={self._state.name})"
        )
