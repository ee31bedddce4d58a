from poembook.ingestion.adapter import convert_html
from poembook.ingestion.blocks import Block, BlockKind, PoemSpan, heading, paragraph
from poembook.ingestion.segmentation import (
	HeadingStrategy,
	ParagraphStrategy,
	SegmentationConfig,
	SeparatorStrategy,
	segment_document,
	whole_document_span,
)


def test_headings_one_span_per_heading():
	blocks = [
		heading("First"),
		paragraph("Roses are red, violets are blue"),
		heading("Second", level=2),
		paragraph("Sugar is sweet and so are you"),
	]
	spans = HeadingStrategy().split(blocks, "")
	assert [s.title for s in spans] == ["First", "Second"]
	assert [s.content for s in spans] == [
		"Roses are red, violets are blue",
		"Sugar is sweet and so are you",
	]
	assert spans[0].markup == blocks[1].markup


def test_headings_need_two_headings():
	blocks = [heading("Only"), paragraph("A single poem with enough text")]
	assert HeadingStrategy().split(blocks, "") == []
	assert HeadingStrategy().split([paragraph("no headings at all here")], "") == []


def test_headings_drop_short_spans_and_require_two():
	blocks = [
		heading("A"),
		paragraph("tiny"),
		heading("B"),
		paragraph("long enough body text"),
	]
	assert HeadingStrategy().split(blocks, "") == []


def test_headings_empty_title_is_numbered_and_other_blocks_count():
	other = Block(kind=BlockKind.OTHER, text="a list item", markup="<ul><li>a list item</li></ul>")
	blocks = [
		paragraph("preface text is ignored"),
		heading("   "),
		paragraph("first poem line"),
		other,
		heading("Second"),
		paragraph("second poem body"),
	]
	spans = HeadingStrategy().split(blocks, "")
	assert [s.title for s in spans] == ["Poem 1", "Second"]
	assert spans[0].content == "first poem line\na list item"
	assert "<ul>" in spans[0].markup


def test_paragraphs_title_then_numbered():
	blocks = [
		paragraph("Autumn Leaves"),
		paragraph("The leaves are falling down."),
		paragraph("They cover all the ground."),
		paragraph(""),
		paragraph("winter comes with snow and ice."),
		paragraph("cold nights are long here."),
	]
	spans = ParagraphStrategy().split(blocks, "")
	assert [s.title for s in spans] == ["Autumn Leaves", "Poem 2"]
	# the title paragraph stays part of the poem
	assert spans[0].content.startswith("Autumn Leaves\nThe leaves")


def test_paragraphs_short_line_breaks_once_span_has_content():
	blocks = [
		paragraph("roses bloom in the garden,"),
		paragraph("bees hum in the sun;"),
		paragraph("* *"),
		paragraph("rain falls on the roof,"),
		paragraph("and the day is done;"),
	]
	spans = ParagraphStrategy().split(blocks, "")
	assert [s.title for s in spans] == ["Poem 1", "Poem 2"]
	assert "* *" not in spans[0].content and "* *" not in spans[1].content


def test_paragraphs_short_opening_line_becomes_title():
	blocks = [
		paragraph("Ode"),
		paragraph("sing of the morning sun,"),
		paragraph(""),
		paragraph("Elegy"),
		paragraph("weep for the evening star,"),
	]
	spans = ParagraphStrategy().split(blocks, "")
	assert [s.title for s in spans] == ["Ode", "Elegy"]
	assert spans[1].content == "Elegy\nweep for the evening star,"


def test_paragraphs_numbering_counts_only_kept_spans():
	blocks = [
		paragraph("ab"),
		paragraph(""),
		paragraph("lowercase poem line one,"),
		paragraph("and line two,"),
		paragraph(""),
		paragraph("another lowercase poem,"),
		paragraph("with more lines,"),
	]
	spans = ParagraphStrategy().split(blocks, "")
	assert [s.title for s in spans] == ["Poem 1", "Poem 2"]


def test_paragraphs_bold_or_centered_titles():
	blocks = [
		paragraph("a quiet title", bold=True),
		paragraph("words that follow it here."),
		paragraph(""),
		paragraph("another one.", centered=True),
		paragraph("and its body text too."),
	]
	spans = ParagraphStrategy().split(blocks, "")
	assert [s.title for s in spans] == ["a quiet title", "another one."]


def test_paragraphs_punctuated_opening_line_is_not_a_title():
	blocks = [
		paragraph("The end comes."),
		paragraph("and the night is long,"),
		paragraph(""),
		paragraph("Dawn"),
		paragraph("light returns to the hills,"),
	]
	spans = ParagraphStrategy().split(blocks, "")
	assert [s.title for s in spans] == ["Poem 1", "Dawn"]
	assert spans[0].content == "The end comes.\nand the night is long,"


def test_paragraphs_need_more_than_three():
	blocks = [paragraph("first poem here,"), paragraph(""), paragraph("second poem here,")]
	assert ParagraphStrategy().split(blocks, "") == []


def test_separator_asterisks():
	markup = "<p>Roses are red</p>\n<p>violets are blue</p>\n\n***\n\n<p>Sugar is sweet</p>\n<p>and so are you</p>"
	spans = SeparatorStrategy().split([], markup)
	assert [s.title for s in spans] == ["Roses are red", "Sugar is sweet"]
	assert spans[0].content == "Roses are red\nviolets are blue"
	assert spans[1].markup == "<p>Sugar is sweet</p>\n<p>and so are you</p>"


def test_separator_numbering_keeps_split_index():
	long_line = "word " * 24
	markup = f"tiny\n---\n{long_line}\n---\n<p>Second poem here</p>"
	spans = SeparatorStrategy().split([], markup)
	assert [s.title for s in spans] == ["Poem 2", "Second poem here"]


def test_separator_falls_through_to_later_pattern():
	markup = "<p>tiny</p>\n***\n<p>Long enough first poem</p>\n~~~\n<p>Another long poem</p>"
	spans = SeparatorStrategy().split([], markup)
	assert [s.title for s in spans] == ["tiny", "Another long poem"]


def test_separator_four_newlines():
	markup = "<p>First poem text</p>\n\n\n\n<p>Second poem text</p>"
	spans = SeparatorStrategy().split([], markup)
	assert [s.title for s in spans] == ["First poem text", "Second poem text"]


def test_segment_document_prefers_headings():
	doc = convert_html("<h1>One</h1><p>first poem body text</p>\n***\n<h1>Two</h1><p>second poem body text</p>")
	spans = segment_document(doc.blocks, doc.markup, "mixed.docx")
	assert [s.title for s in spans] == ["One", "Two"]


def test_segment_document_prefers_paragraphs_over_separators():
	markup = (
		"<p>Alpha Poem</p>\n<p>the first poem body line</p>\n***\n<p>still the first poem</p>\n<p></p>\n"
		"<p>Beta Poem</p>\n<p>the second poem body line</p>"
	)
	doc = convert_html(markup)
	assert [s.title for s in SeparatorStrategy().split(doc.blocks, doc.markup)] == [
		"Alpha Poem",
		"still the first poem",
	]
	spans = segment_document(doc.blocks, doc.markup, "mixed.docx")
	assert [s.title for s in spans] == ["Alpha Poem", "Beta Poem"]
	assert spans[0].content == "Alpha Poem\nthe first poem body line\nstill the first poem"


def test_segment_document_uses_separators_when_paragraphs_fail():
	markup = "<p>Roses are red</p>\n<p>violets are blue</p>\n\n***\n\n<p>Sugar is sweet</p>\n<p>and so are you</p>"
	doc = convert_html(markup)
	spans = segment_document(doc.blocks, doc.markup, "sep.docx")
	assert [s.title for s in spans] == ["Roses are red", "Sugar is sweet"]


def test_segment_document_single_poem_returns_empty():
	doc = convert_html("<p>Just one short poem in this file</p>")
	assert segment_document(doc.blocks, doc.markup) == []


def test_segment_document_custom_strategies():
	class Fixed:
		name = "fixed"

		def split(self, blocks, markup):
			return [PoemSpan("a", "aaaaaaaaaaaa", ""), PoemSpan("b", "bbbbbbbbbbbb", "")]

	spans = segment_document([], "", strategies=[Fixed()])
	assert [s.title for s in spans] == ["a", "b"]


def test_config_threshold_changes_acceptance():
	blocks = [heading("A"), paragraph("twelve chars"), heading("B"), paragraph("twelve chars")]
	assert len(HeadingStrategy().split(blocks, "")) == 2
	assert HeadingStrategy(SegmentationConfig(min_content_length=20)).split(blocks, "") == []


def test_whole_document_span():
	blocks = [paragraph("The Only Poem"), paragraph("with a second line")]
	span = whole_document_span(blocks, "<p>x</p>", "The Only Poem\nwith a second line", "only.docx")
	assert span.title == "The Only Poem"
	assert span.content == "The Only Poem\nwith a second line"
	assert span.markup == "<p>x</p>"
	assert whole_document_span(blocks, "", "  ten chars!  ", "x.docx") is None
