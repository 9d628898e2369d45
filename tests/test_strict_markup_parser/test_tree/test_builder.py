"""Tests for the tree builder.

Covers tag matching, text-run handling, nesting, the error taxonomy and the
configurable extensions of the builder.
"""

import pytest

from strict_markup_parser.shared import (
    ErrorKind,
    GenericError,
    InvalidAttributeValueError,
    InvalidIdentifierError,
    ParserConfig,
    PrematureEndOfFileError,
    UnexpectedTokenError,
)
from strict_markup_parser.tree import Element, Text, TreeBuilder, build_tree


def nested(depth: int) -> str:
    """Well-formed document with ``depth`` nested elements and a text leaf."""
    return "".join(f"<e{i}>" for i in range(depth)) + "leaf" + "".join(
        f"</e{i}>" for i in reversed(range(depth))
    )


class TestWellFormedDocuments:

    def test_single_element_with_text(self):
        assert build_tree("<div>content</div>") == Element("div", {}, [Text("content")])

    def test_empty_element(self):
        assert build_tree("<div></div>") == Element("div", {}, [])

    def test_attributes(self):
        assert build_tree('<a href="x">y</a>') == Element("a", {"href": "x"}, [Text("y")])

    def test_duplicate_attributes_first_wins(self):
        root = build_tree('<a href="1" href="2"></a>')

        assert root.attributes == {"href": "1"}

    def test_nested_elements(self):
        root = build_tree('<ul><li id="1">one</li><li>two</li></ul>')

        assert root == Element(
            "ul",
            {},
            [
                Element("li", {"id": "1"}, [Text("one")]),
                Element("li", {}, [Text("two")]),
            ],
        )

    def test_same_name_nesting(self):
        root = build_tree("<div><div>inner</div></div>")

        assert root == Element("div", {}, [Element("div", {}, [Text("inner")])])

    def test_mixed_content_keeps_document_order(self):
        root = build_tree("<p>before <b>bold</b> after</p>")

        assert root.children == [
            Text("before"),
            Element("b", {}, [Text("bold")]),
            Text("after"),
        ]

    def test_spaces_between_tags_produce_no_nodes(self):
        root = build_tree("<ul>   <li>x</li>   </ul>")

        assert root.children == [Element("li", {}, [Text("x")])]

    def test_text_trims_only_ascii_spaces(self):
        root = build_tree("<pre>  a\tb\n  c  </pre>")

        assert root.children == [Text("a\tb\n  c")]

    def test_leading_tab_is_content(self):
        root = build_tree("<p>\tx </p>")

        assert root.children == [Text("\tx")]

    def test_newline_between_tags_is_a_text_node(self):
        root = build_tree("<ul>\n<li>x</li>\n</ul>")

        assert root.children == [Text("\n"), Element("li", {}, [Text("x")]), Text("\n")]

    def test_boolean_attribute(self):
        root = build_tree("<input disabled></input>")

        assert root.attributes == {"disabled": ""}

    def test_trailing_content_after_root_is_ignored(self):
        assert build_tree("<a>x</a> trailing") == Element("a", {}, [Text("x")])

    def test_tag_names_are_case_sensitive(self):
        with pytest.raises(UnexpectedTokenError):
            build_tree("<Div>x</div>")

    def test_bytes_input(self):
        assert build_tree(b"<div>content</div>") == Element("div", {}, [Text("content")])

    def test_non_ascii_text_passes_through(self):
        root = build_tree("<p> naïve café </p>")

        assert root.children == [Text("naïve café")]


class TestTreeProperties:

    def test_idempotence(self):
        source = '<div id="a"><p>x <i>y</i></p> z</div>'

        assert build_tree(source) == build_tree(source)

    @pytest.mark.parametrize("depth", [1, 2, 5, 40])
    def test_tree_depth_matches_nesting(self, depth):
        assert build_tree(nested(depth)).max_depth == depth

    def test_text_fidelity(self):
        inner = "  keep\tinternal \n whitespace  "
        root = build_tree(f"<p>{inner}</p>")

        assert root.children[0].content == inner.strip(" ")

    def test_deep_nesting_does_not_use_recursion(self):
        builder = TreeBuilder(nested(5000), ParserConfig(max_depth=None))

        root = builder.parse()

        assert builder.deepest_nesting == 5000
        assert root.max_depth == 5000

    def test_builder_statistics(self):
        builder = TreeBuilder("<a><b>x</b><c></c> y</a>")

        builder.parse()

        assert builder.elements_created == 3
        assert builder.text_nodes_created == 2
        assert builder.deepest_nesting == 2


class TestErrors:

    def test_mismatched_closing_tag(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            build_tree("<div>x</span>")

        error = exc_info.value
        assert error.expected == "</div>"
        assert error.found == "</span>"
        assert error.position == 6

    def test_unclosed_tag_interior(self):
        with pytest.raises(PrematureEndOfFileError) as exc_info:
            build_tree("<div")

        assert exc_info.value.position == 4

    def test_missing_closing_tag(self):
        with pytest.raises(PrematureEndOfFileError) as exc_info:
            build_tree("<div><p>x</p>")

        assert exc_info.value.position == 13

    def test_unquoted_attribute_value(self):
        with pytest.raises(InvalidAttributeValueError):
            build_tree("<a href=x></a>")

    def test_root_must_start_with_tag(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            build_tree("hello")

        assert exc_info.value.expected == "<"
        assert exc_info.value.found == "h"
        assert exc_info.value.position == 0

    def test_non_ascii_root_byte_reported_as_escape(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            build_tree("\u00e9<a></a>")

        assert exc_info.value.found == "\\xc3"
        assert exc_info.value.position == 0

    def test_leading_space_before_root_rejected(self):
        with pytest.raises(UnexpectedTokenError):
            build_tree(" <div></div>")

    def test_empty_input(self):
        with pytest.raises(PrematureEndOfFileError) as exc_info:
            build_tree("")

        assert exc_info.value.position == 0

    def test_stray_greater_than_in_text(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            build_tree("<p>a > b</p>")

        assert exc_info.value.position == 5

    def test_invalid_tag_name(self):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            build_tree("<my-tag></my-tag>")

        assert exc_info.value.position == 1

    def test_invalid_nested_tag_name(self):
        with pytest.raises(InvalidIdentifierError):
            build_tree("<div><a_b></a_b></div>")

    def test_closing_tag_with_space_rejected(self):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            build_tree("<div></div >")

        assert exc_info.value.identifier == "div "
        assert exc_info.value.position == 7

    def test_empty_tag(self):
        with pytest.raises(InvalidIdentifierError):
            build_tree("<div><></div>")

    def test_less_than_at_end_of_input(self):
        with pytest.raises(GenericError) as exc_info:
            build_tree("<div><")

        assert exc_info.value.kind is ErrorKind.GENERIC

    def test_unclosed_closing_tag(self):
        with pytest.raises(PrematureEndOfFileError):
            build_tree("<div></div")

    def test_closing_tag_as_root(self):
        with pytest.raises(InvalidIdentifierError):
            build_tree("</div>")


class TestConfiguredBuilder:

    def test_max_depth_enforced(self):
        config = ParserConfig(max_depth=3)

        assert build_tree(nested(3), config).max_depth == 3
        with pytest.raises(GenericError, match="Maximum nesting depth 3 exceeded") as exc_info:
            build_tree(nested(4), config)

        assert exc_info.value.position == len("<e0><e1><e2>")

    def test_default_depth_bound(self):
        with pytest.raises(GenericError):
            build_tree(nested(600))

    def test_text_root_extension(self):
        config = ParserConfig(allow_text_root=True)

        assert build_tree("  just text ", config) == Text("just text")

    def test_text_root_followed_by_markup_rejected(self):
        config = ParserConfig(allow_text_root=True)

        with pytest.raises(UnexpectedTokenError) as exc_info:
            build_tree("text<div></div>", config)

        assert exc_info.value.position == 4

    def test_text_root_extension_keeps_element_roots(self):
        config = ParserConfig(allow_text_root=True)

        assert build_tree("<a>x</a>", config) == Element("a", {}, [Text("x")])

    def test_quote_aware_tag_interior(self):
        source = '<a title="x>y">link</a>'

        with pytest.raises(InvalidAttributeValueError):
            build_tree(source)

        root = build_tree(source, ParserConfig(quote_aware_tag_interior=True))
        assert root == Element("a", {"title": "x>y"}, [Text("link")])

    def test_boolean_attribute_validation(self):
        source = "<input data-x></input>"

        assert build_tree(source).attributes == {"data-x": ""}
        with pytest.raises(InvalidIdentifierError):
            build_tree(source, ParserConfig(validate_boolean_attributes=True))
