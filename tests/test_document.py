"""
Document driver tests

Promotion of matches into items, full render passes, per-item error
recovery, and rollback restoring the original document text.
"""

import pytest

from mathitem.lib.document import HostMathItem, MathDocument
from mathitem.lib.errors import InvalidStateError
from mathitem.models.location import protoItem_make
from mathitem.models.mathitem import DisplayMode, MathState


class TestPromotion:
    """ProtoItems become node-based HostMathItems"""

    def test_promoted_items_in_document_order(self):
        """Matches across strings promote in document order with their display modes"""
        md = MathDocument.document_fromText("a $x$ b $$y$$ c", "d \\(z\\)")
        items = md.math_promote(md.math_find())
        assert [item.math for item in items] == ["x", "y", "z"]
        assert md.math == items
        assert [item.displayMode for item in items] == [
            DisplayMode.INLINE,
            DisplayMode.DISPLAY,
            DisplayMode.INLINE,
        ]

    def test_locations_are_node_based(self):
        """Promoted items point at the text node holding their source"""
        md = MathDocument.document_fromText("a $x$ b")
        item = md.math_promote(md.math_find())[0]
        assert item.start.node_based
        assert item.start.node is item.end.node
        assert item.start.node.text == "$x$"
        assert (item.start.i, item.start.n, item.start.delim) == (0, 2, "$")
        assert (item.end.i, item.end.n, item.end.delim) == (0, 5, "$")

    def test_promotion_preserves_text(self):
        """Splitting text nodes does not change the serialized document"""
        source = "a $x$ b $y$ c"
        md = MathDocument.document_fromText(source)
        md.math_promote(md.math_find())
        assert md.document.serialize() == source

    def test_display_resolved_from_delimiters(self):
        """Undetermined display is resolved from known display delimiters"""
        md = MathDocument.document_fromText("a $$x$$ b")
        item = md.math_promote([protoItem_make("$$", "x", "$$", 0, 2, 7)])[0]
        assert item.display is True

    def test_unknown_delimiters_stay_unresolved(self):
        """Delimiters outside the configuration leave the mode unresolved"""
        md = MathDocument.document_fromText("a x b")
        item = md.math_promote([protoItem_make("", "x", "", 0, 2, 3)])[0]
        assert item.displayMode is DisplayMode.UNRESOLVED


class TestLifecycleScenario:
    """x^2 through every state and back"""

    def test_inline_square(self):
        """x^2 walks UNPROCESSED -> INSERTED and a full rollback restores the source"""
        source = "Area is $x^2$ units"
        md = MathDocument.document_fromText(source)
        item = md.math_promote(md.math_find())[0]
        md.metrics_update()

        assert isinstance(item, HostMathItem)
        assert item.math == "x^2"
        assert item.display is False
        assert item.state == 0

        item.compile(md)
        assert item.state == 1
        assert item.root is not None

        item.typeset(md)
        assert item.state == 2
        assert item.typesetRoot is not None
        assert not item.bbox.is_empty

        item.document_update(md)
        assert item.state == 3
        assert md.document.serialize() == (
            'Area is <span class="mathitem" data-tex="x^2">'
            '<i>x</i><sup><span class="mn">2</span></sup></span> units'
        )

        root = item.root
        typeset_root = item.typesetRoot
        item.state_transitionTo(0, True)
        assert item.state == 0
        assert item.bbox.is_empty
        assert len(item.outputData) == 0
        assert len(item.inputData) == 0
        assert item.root is root
        assert item.typesetRoot is typeset_root
        assert md.document.serialize() == source

    def test_remove_restore_round_trip(self):
        """Removing with restore puts every source back verbatim"""
        source = "one $a$ two $$b$$ three"
        md = MathDocument.document_fromText(source)
        md.render()
        for item in md.math:
            item.document_remove(restore=True)
            assert item.state == MathState.TYPESET
        assert md.document.serialize() == source

    def test_remove_without_restore(self):
        """Removal without restore leaves no position to insert at again"""
        md = MathDocument.document_fromText("a $x$ b")
        md.render()
        item = md.math[0]
        item.document_remove(restore=False)
        assert md.document.serialize() == "a  b"
        with pytest.raises(InvalidStateError):
            item.document_update(md)


class TestRender:
    """Full render passes over a document"""

    def test_render_results(self):
        """A render pass inserts every item and reports counts"""
        md = MathDocument.document_fromText("Let $a+b$ and $$c$$ end.")
        result = md.render()
        assert result == {'math': 2, 'inserted': 2, 'errors': 0}
        html = md.document.serialize()
        assert html.startswith('Let <span class="mathitem" data-tex="a+b">')
        assert '<div class="mathitem" data-tex="c"><i>c</i></div> end.' in html

    def test_metrics_captured(self):
        """Render captures metrics from settings on each item"""
        md = MathDocument.document_fromText("$a$")
        md.render()
        metrics = md.math[0].metrics
        assert metrics.em == md.settings.em_size
        assert metrics.scale == md.settings.scale

    def test_parse_error_recovered_per_item(self):
        """A failing item becomes an error span; the others still render"""
        md = MathDocument.document_fromText("ok $x$ bad $x^2^3$ ok $y$")
        result = md.render()
        assert result == {'math': 3, 'inserted': 3, 'errors': 1}
        html = md.document.serialize()
        assert (
            '<span class="mathitem-error" title="Double exponent: use braces to clarify">'
            '$x^2^3$</span>'
        ) in html
        assert 'data-tex="y"' in html
        assert md.math[1].root is None

    def test_unresolved_item_rendered_escaped(self):
        """Unresolved display mode renders the escaped source"""
        md = MathDocument.document_fromText("a x b")
        md.math_promote([protoItem_make("", "x", "", 0, 2, 3)])
        md.metrics_update()
        md.math_compile()
        md.math_typeset()
        md.document_update()
        assert md.document.serialize() == 'a <span class="mathitem-escaped">x</span> b'

    def test_render_twice_is_stable(self):
        """A second render leaves an already rendered document alone"""
        md = MathDocument.document_fromText("a $x$ b")
        md.render()
        html = md.document.serialize()
        assert md.render() == {'math': 1, 'inserted': 1, 'errors': 0}
        assert md.document.serialize() == html

    def test_reset_restores_source(self):
        """Reset rolls items back and restores the original text"""
        source = "a $x$ b $y^{2}$ c"
        md = MathDocument.document_fromText(source)
        md.render()
        md.reset()
        assert md.document.serialize() == source
        assert all(item.state == MathState.UNPROCESSED for item in md.math)

    def test_reset_without_restore(self):
        """Reset without restore drops the typeset output and the items"""
        md = MathDocument.document_fromText("a $x$ b")
        md.render()
        md.reset(restore=False)
        assert md.document.serialize() == "a  b"
        assert md.math == []

    def test_rerender_after_reset_without_restore(self):
        """Detached items are dropped, so rendering again does not fail"""
        md = MathDocument.document_fromText("a $x$ b")
        md.render()
        md.reset(restore=False)
        assert md.rerender() == {'math': 0, 'inserted': 0, 'errors': 0}
        assert md.document.serialize() == "a  b"

    def test_render_after_reset_without_restore_finds_new_math(self):
        """Math added after a non-restoring reset is found by the next render"""
        md = MathDocument.document_fromText("a $x$ b")
        md.render()
        md.reset(restore=False)
        md.document.textNodes_get()[-1].text = " b $y$"
        assert md.render() == {'math': 1, 'inserted': 1, 'errors': 0}
        assert md.document.serialize() == 'a  b <span class="mathitem" data-tex="y"><i>y</i></span>'

    def test_rerender(self):
        """Rerender reproduces the first render, errors included"""
        md = MathDocument.document_fromText("a $x$ b $y_1_2$")
        first = md.render()
        html = md.document.serialize()
        second = md.rerender()
        assert first == second
        assert md.document.serialize() == html

    def test_math_clear_finds_again(self):
        """math_clear forgets items so the next render finds them again"""
        source = "a $x$ b"
        md = MathDocument.document_fromText(source)
        md.render()
        md.math_clear()
        assert md.math == []
        assert md.document.serialize() == source
        assert md.render()['inserted'] == 1
