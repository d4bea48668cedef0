#  Copyright (c) 2025 Tom Villani, Ph.D.
"""End-to-end tests rendering HTML markup to Markdown-style text."""

import sys

import pytest

from textify import Textify, TextifyOptions, build_tree, render_tree, textify
from textify.exceptions import RenderingError, ValidationError
from textify.tree import DOCUMENT_TAG, NodeTree

BORDERED_TABLE = "\n".join(
    [
        "------------",
        "| a   | bb |",
        "------------",
        "| ccc | d  |",
        "------------",
    ]
)


@pytest.mark.integration
class TestInlineElements:
    """Tests for inline marks."""

    @pytest.mark.parametrize(
        "html, expected",
        [
            ("<em>x</em>", "_x_"),
            ("<i>x</i>", "_x_"),
            ("<strong>x</strong>", "**x**"),
            ("<b>x</b>", "**x**"),
            ("<code>x</code>", "`x`"),
            ("<kbd>x</kbd>", "`x`"),
            ("<del>x</del>", "~~x~~"),
            ("<s>x</s>", "~~x~~"),
        ],
    )
    def test_marks(self, html, expected):
        """Test each inline tag wraps its content in its mark."""
        assert textify(html) == expected

    def test_whitespace_collapsed_across_tags(self):
        """Test runs of whitespace become single spaces."""
        assert textify("<p>Hello   <em>big</em>\n   world</p>") == "Hello _big_ world"

    def test_anchor_with_target(self):
        """Test links show their target."""
        assert textify('<a href="https://example.com">site</a>') == "<site: https://example.com>"

    @pytest.mark.parametrize("html", ['<a href="#top">up</a>', "<a>up</a>"])
    def test_anchor_without_target(self, html):
        """Test fragment links and links without href show only their text."""
        assert textify(html) == "<up>"

    def test_line_break(self):
        """Test br splits the line."""
        assert textify("<p>a<br>b</p>") == "a\n b"

    def test_unknown_tags_pass_through(self):
        """Test unknown tags render their content inline."""
        assert textify("<custom-tag>hi <span>there</span></custom-tag>") == "hi there"

    @pytest.mark.parametrize(
        "html",
        [
            "<html><body>\n  Hello <b>x</b>\n</body></html>",
            "   Hello <b>x</b>",
            "<div><span>  Hello</span> <b>x</b></div>",
        ],
    )
    def test_source_indentation_dropped(self, html):
        """Test whitespace before the first text of a block or document is dropped."""
        assert textify(html) == "Hello **x**"

    def test_inner_spacing_kept(self):
        """Test whitespace after earlier content still separates words."""
        assert textify("<span>a</span><span> b</span>") == "a b"


@pytest.mark.integration
class TestBlockElements:
    """Tests for headings, quotes, rules and preformatted text."""

    def test_h1_underlined(self):
        """Test h1 is underlined with '=' to the title's length."""
        assert textify("<h1>Title</h1>") == "Title\n====="

    def test_h2_underlined(self):
        """Test h2 is underlined with '-'."""
        assert textify("<h2>  Sub title </h2>") == "Sub title\n---------"

    @pytest.mark.parametrize("level", [3, 4, 5, 6])
    def test_hashed_headings(self, level):
        """Test h3-h6 repeat the level marks on both sides."""
        marks = "#" * level
        assert textify(f"<h{level}>Sub</h{level}>") == f"{marks} Sub {marks}"

    def test_blockquote(self):
        """Test every quoted line is prefixed."""
        assert textify("<blockquote>quoted text</blockquote>") == "> quoted text"

    def test_horizontal_rule(self):
        """Test hr renders a dash rule of the configured width."""
        assert textify("<hr>") == "-" * 75
        assert textify("<hr>", hr_width=10) == "-" * 10

    def test_paragraphs_separated_by_blank_line(self):
        """Test paragraph bottom margins separate paragraphs."""
        assert textify("<p>one</p><p>two</p>") == "one\n\ntwo"

    def test_preformatted(self):
        """Test pre keeps whitespace and indents like a code block."""
        html = "<pre>\n<code>x = 1\n  y = 2</code></pre>"
        assert textify(html) == "    x = 1\n      y = 2"

    def test_preformatted_blank_lines_dropped_by_default(self):
        """Test the default blank-line filter applies inside pre."""
        assert textify("<pre>a\n\nb</pre>") == "    a\n    b"

    def test_keep_blank_lines(self):
        """Test blank lines inside pre survive with keep_blank_lines."""
        assert textify("<pre>a\n\nb</pre>", keep_blank_lines=True) == "    a\n\n    b"

    def test_hidden_elements(self):
        """Test head, script and style content never reaches the output."""
        html = "<html><head><title>T</title><style>p {}</style></head><body><p>x</p><script>var y;</script></body></html>"
        assert textify(html) == "x"


@pytest.mark.integration
class TestLists:
    """Tests for list containers and items."""

    def test_unordered(self):
        """Test ul items are bulleted and indented."""
        assert textify("<ul><li>one</li><li>two</li></ul>") == "    * one\n    * two"

    def test_ordered(self):
        """Test ol items are numbered from one."""
        assert textify("<ol><li>a</li><li>b</li><li>c</li></ol>") == "    1. a\n    2. b\n    3. c"

    def test_nested_numbering_restarts(self):
        """Test each list numbers its own items."""
        html = "<ol><li>a<ol><li>x</li><li>y</li></ol></li><li>b</li></ol>"
        assert textify(html) == "    1. a\n        1. x\n        2. y\n\n    2. b"

    def test_whitespace_between_items_ignored(self):
        """Test source formatting between items does not leak into output."""
        html = "<ul>\n  <li>one</li>\n  <li>two</li>\n</ul>"
        assert textify(html) == "    * one\n    * two"

    def test_item_outside_list(self):
        """Test a stray li falls back to a bullet."""
        assert textify("<li>x</li>") == "* x"

    def test_definition_list(self):
        """Test dd is indented under its dt."""
        assert textify("<dl><dt>Term</dt><dd>Definition</dd></dl>") == "Term\n    Definition"


@pytest.mark.integration
class TestTables:
    """Tests for two-pass table layout."""

    def test_bordered_table(self, table_html):
        """Test cells are aligned to shared column widths with shared borders."""
        assert textify(table_html) == BORDERED_TABLE

    def test_formatted_source(self):
        """Test whitespace between rows and cells is ignored."""
        html = """
        <table>
          <tr>
            <td>a</td>
            <td>bb</td>
          </tr>
          <tr>
            <td>ccc</td>
            <td>d</td>
          </tr>
        </table>
        """
        assert textify(html) == BORDERED_TABLE

    def test_table_sections(self):
        """Test thead and tbody rows stack like direct rows."""
        html = (
            "<table><thead><tr><td>a</td><td>bb</td></tr></thead>"
            "<tbody><tr><td>ccc</td><td>d</td></tr></tbody></table>"
        )
        rows = [line for line in textify(html).split("\n") if line.startswith("|")]
        assert rows == ["| a   | bb |", "| ccc | d  |"]

    def test_header_cells(self):
        """Test th content is bracketed and counted in the column width."""
        html = "<table><tr><th>H</th></tr><tr><td>x</td></tr></table>"
        assert textify(html) == "-------\n| [H] |\n-------\n| x   |\n-------"

    def test_without_borders(self, table_html):
        """Test tables without borders are still aligned."""
        assert textify(table_html, table_borders=False) == " a   bb\n ccc d"

    def test_border_corners(self, table_html):
        """Test corner marks at border intersections."""
        expected = "\n".join(
            ["+-----+----+", "| a   | bb |", "+-----+----+", "| ccc | d  |", "+-----+----+"]
        )
        assert textify(table_html, border_corners=True) == expected

    def test_empty_cell(self):
        """Test an empty cell keeps its borders aligned."""
        html = "<table><tr><td></td><td>b</td></tr></table>"
        assert textify(html) == "--------\n|  | b |\n--------"

    def test_cells_of_different_heights(self):
        """Test shorter cells are padded inside their borders to the row height."""
        html = "<table><tr><td>a<br>b</td><td>x</td></tr></table>"
        assert textify(html) == "----------\n| a  | x |\n|  b |   |\n----------"

    def test_cells_of_different_heights_without_borders(self):
        """Test unbordered rows of uneven cells stay aligned."""
        html = "<table><tr><td>a<br>b</td><td>x</td></tr><tr><td>c</td><td>y</td></tr></table>"
        output = textify(html, table_borders=False, trim_output=False)
        rows = [line for line in output.split("\n") if line.strip()]
        assert len(rows) == 3
        assert len({len(line) for line in rows}) == 1

    def test_nested_table(self):
        """Test a table inside a cell keeps the outer row rectangular."""
        html = (
            "<table><tr>"
            "<td><table><tr><td>x</td></tr><tr><td>y</td></tr></table></td>"
            "<td>z</td>"
            "</tr></table>"
        )
        lines = textify(html).split("\n")
        assert len({len(line) for line in lines}) == 1
        assert lines[1].endswith("| z |")
        assert "| x |" in lines[2]
        assert any("| y |" in line for line in lines)

    def test_html5lib_tree(self, table_html):
        """Test the html5lib tree, which inserts tbody, lays out the same."""
        pytest.importorskip("html5lib")
        assert textify(table_html, html_parser="html5lib") == BORDERED_TABLE


@pytest.mark.integration
class TestFieldsets:
    """Tests for fieldset borders and legends."""

    def test_legend_stamped(self):
        """Test the legend is stamped into the fieldset's top border."""
        html = "<fieldset><legend>Info</legend>body</fieldset>"
        assert textify(html) == "--Info--\n| body |\n--------"

    def test_marked_up_legend(self):
        """Test a legend with inline markup is stamped as composed text."""
        html = "<fieldset><legend><b>Info</b></legend>some body text</fieldset>"
        assert textify(html) == "--**Info**--------\n| some body text |\n------------------"

    def test_legend_without_fieldset(self):
        """Test a stray legend renders in brackets."""
        assert textify("<legend>Hi</legend>") == "[Hi]"

    def test_debug_legend(self):
        """Test debug mode stamps tag names instead of legends."""
        html = "<fieldset><legend>Info</legend>some body text</fieldset>"
        first_line = textify(html, debug=True).split("\n")[0]
        assert first_line.startswith("--fieldset")


@pytest.mark.integration
class TestApi:
    """Tests for the public entry points."""

    def test_document(self):
        """Test a full document with formatting whitespace."""
        html = """<!DOCTYPE html>
<html>
<head><title>Ignored</title></head>
<body>
<h1>Main</h1>
<p>Intro with <a href="https://example.com">a link</a>.</p>
</body>
</html>
"""
        assert textify(html) == "Main\n====\n\nIntro with <a link: https://example.com>."

    def test_bytes_markup(self):
        """Test bytes markup is decoded."""
        assert textify('<meta charset="utf-8"><p>naïve</p>'.encode("utf-8")) == "naïve"

    def test_untrimmed_output(self):
        """Test trim_output=False returns the raw layout."""
        assert textify("<h1>T</h1>", trim_output=False) == " \nT\n=\n "

    def test_options_and_overrides(self):
        """Test keyword arguments override an options object."""
        options = TextifyOptions(hr_width=10)
        assert textify("<hr>", options=options) == "-" * 10
        assert textify("<hr>", options=options, hr_width=3) == "---"

    def test_unknown_option(self):
        """Test unknown keyword options raise ValidationError."""
        with pytest.raises(ValidationError):
            textify("<p>x</p>", colour="red")

    def test_textify_object(self):
        """Test the object API parses once and renders repeatedly."""
        doc = Textify("<ol><li>a</li><li>b</li></ol>")
        assert doc.tree.root.tag == DOCUMENT_TAG
        first = doc.render()
        assert first == "    1. a\n    2. b"
        assert doc.render() == first
        assert str(doc) == first

    def test_render_tree(self):
        """Test rendering a prebuilt tree."""
        tree = build_tree("<p><b>x</b></p>")
        assert render_tree(tree) == "**x**"

    def test_empty_document(self):
        """Test empty markup renders to an empty string."""
        assert textify("") == ""

    def test_too_deep_tree(self):
        """Test pathological nesting is reported as a RenderingError."""
        tree = NodeTree()
        node = tree.text("deep")
        for _ in range(sys.getrecursionlimit() * 2):
            node = tree.element("div", children=[node])
        tree.set_root(node)

        with pytest.raises(RenderingError) as exc_info:
            render_tree(tree)
        assert isinstance(exc_info.value.original_error, RecursionError)
