"""Tests for lesson content formatting."""

from factortutor.engine.formatter import (
    BlockKind,
    DisplayBlock,
    InlineText,
    Span,
    format_content,
    render_html,
    render_plain,
)


def _texts(items):
    return [i.text for i in items]


class TestFormatContent:
    def test_bold_paragraph_then_ordered_list(self):
        blocks = format_content("**A**\n\n1. one\n2. two")
        assert len(blocks) == 2

        para, ol = blocks
        assert para.kind is BlockKind.PARAGRAPH
        assert para.items == (InlineText((Span("A", bold=True),)),)

        assert ol.kind is BlockKind.ORDERED_LIST
        assert _texts(ol.items) == ["one", "two"]
        assert ol.breaks == ()

    def test_restartable(self):
        text = "Intro **bold** text\nsecond line\n\n* a\n* b\nstray"
        assert format_content(text) == format_content(text)

    def test_unordered_list(self):
        blocks = format_content("* Multiplication: $2 \\times 3 = 6$\n* Factorization")
        assert len(blocks) == 1
        assert blocks[0].kind is BlockKind.UNORDERED_LIST
        assert _texts(blocks[0].items) == ["Multiplication: $2 \\times 3 = 6$", "Factorization"]

    def test_paragraph_line_breaks(self):
        blocks = format_content("So, the numbers are 2 and 5.\nTherefore, done.")
        assert len(blocks) == 1
        assert blocks[0].kind is BlockKind.PARAGRAPH
        assert _texts(blocks[0].items) == ["So, the numbers are 2 and 5.", "Therefore, done."]

    def test_paragraph_with_list_lines_stays_paragraph(self):
        # only the first line of a block decides list-ness
        blocks = format_content("Consider the number 6:\n* Multiplication\n* Factorization")
        assert len(blocks) == 1
        assert blocks[0].kind is BlockKind.PARAGRAPH
        assert len(blocks[0].items) == 3

    def test_non_conforming_list_line_becomes_break(self):
        blocks = format_content("1.  **Focus on 'c'**: What multiplies to 10?\n    * (1, 10), (2, 5)")
        ol = blocks[0]
        assert ol.kind is BlockKind.ORDERED_LIST
        assert _texts(ol.items) == ["Focus on 'c': What multiplies to 10?"]
        assert ol.items[0].spans[0] == Span("Focus on 'c'", bold=True)
        assert _texts(ol.breaks) == ["    * (1, 10), (2, 5)"]

    def test_ordered_marker_with_extra_spaces(self):
        blocks = format_content("1.  **Solving Equations:** Often used.\n2.  Simplifying")
        assert _texts(blocks[0].items) == ["Solving Equations: Often used.", "Simplifying"]

    def test_bold_inside_list_item_first_line(self):
        blocks = format_content("* **Step** one")
        assert blocks[0].kind is BlockKind.UNORDERED_LIST
        assert blocks[0].items[0].spans == (Span("Step", bold=True), Span(" one"))

    def test_bold_line_is_not_a_bullet(self):
        blocks = format_content("**Step 3: Test the sums.**\n* $1 + 15 = 16$ (No)")
        assert blocks[0].kind is BlockKind.PARAGRAPH

    def test_multiple_bold_spans(self):
        (block,) = format_content("a **b** c **d**")
        assert block.items[0].spans == (Span("a "), Span("b", bold=True), Span(" c "), Span("d", bold=True))

    def test_unmatched_bold_left_literal(self):
        (block,) = format_content("a **b")
        assert block.items[0].text == "a **b"

    def test_private_use_characters_do_not_make_bold(self):
        (block,) = format_content("a\ue000b\ue001c **d**")
        assert block.items[0].spans == (Span("abc "), Span("d", bold=True))

    def test_blank_blocks_skipped(self):
        blocks = format_content("one\n\n\n\ntwo\n\n")
        assert [b.items[0].text for b in blocks] == ["one", "two"]

    def test_crlf(self):
        blocks = format_content("one\r\n\r\n1. a")
        assert [b.kind for b in blocks] == [BlockKind.PARAGRAPH, BlockKind.ORDERED_LIST]

    def test_empty(self):
        assert format_content("") == []

    def test_bundled_slides_format(self, bundled_catalog):
        for slide in bundled_catalog.slides:
            assert format_content(slide.content)


class TestRenderers:
    def test_html(self):
        html = render_html(format_content("**A** & b\nnext\n\n1. one\n2. two"))
        assert html == (
            '<div class="mb-4"><strong>A</strong> &amp; b<br />next</div>'
            '<div class="mb-4"><ol class="list-decimal list-inside pl-4">'
            "<li>one</li><li>two</li></ol></div>"
        )

    def test_html_unordered_with_break(self):
        block = DisplayBlock(
            kind=BlockKind.UNORDERED_LIST,
            items=(InlineText((Span("a"),)),),
            breaks=(InlineText((Span("tail"),)),),
        )
        assert render_html([block]) == (
            '<div class="mb-4"><ul class="list-disc list-inside pl-4"><li>a</li></ul>'
            "<br />tail</div>"
        )

    def test_plain(self):
        text = render_plain(format_content("**Intro**\n\n1. one\n2. two\n\n* x"))
        assert text == "Intro\n\n1. one\n2. two\n\n* x"
