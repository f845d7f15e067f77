"""
Shared fixtures: stand-in input and output jax that count their calls
"""

import pytest

from mathitem.lib.errors import ParseError, RenderError
from mathitem.lib.mathitem import AbstractMathItem
from mathitem.models.location import BBox
from mathitem.models.tree import MmlNode


class CountingInputJax:
    """Input jax returning a fixed tree, or failing on demand"""

    name = "counting-input"

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls = 0

    def compile(self, item):
        self.calls += 1
        if self.fail:
            raise ParseError("Rejected", "Cannot parse %1", item.math)
        item.inputData.slot(self)["compiled"] = True
        return MmlNode("math", children=[MmlNode("mi", item.math)])


class CountingOutputJax:
    """Output jax returning a fresh handle per call, or failing on demand"""

    name = "counting-output"

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.typeset_calls = 0
        self.escaped_calls = 0

    def typeset(self, item, document):
        self.typeset_calls += 1
        if self.fail:
            raise RenderError("cannot render")
        item.bbox = BBox(w=1.0, h=0.75, d=0.25)
        item.outputData.slot(self)["rendered"] = True
        return {"typeset": item.math, "call": self.typeset_calls}

    def escaped(self, item, document):
        self.escaped_calls += 1
        return {"escaped": item.math}


class FakeDocument:
    def __init__(self, outputJax) -> None:
        self.outputJax = outputJax


class RecordingMathItem(AbstractMathItem):
    """Item recording the insert/detach hook calls"""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.inserted = 0
        self.detached = []

    def typeset_insert(self, document):
        self.inserted += 1

    def typeset_detach(self, restore):
        self.detached.append(restore)


@pytest.fixture
def input_jax():
    return CountingInputJax()


@pytest.fixture
def output_jax():
    return CountingOutputJax()


@pytest.fixture
def document(output_jax):
    return FakeDocument(output_jax)


@pytest.fixture
def item(input_jax):
    return RecordingMathItem("x^2", input_jax, display=False)
