"""
Tests for the vimdoc AST printer
"""
import pytest

from vimdoc import VimdocASTDocumentNode, VimdocASTHeadingNode, VimdocASTPrinter, VimdocConverter, parse


@pytest.fixture
def printer():
    """Fixture providing an AST printer instance."""
    return VimdocASTPrinter()


def test_format_document(printer):
    """Test the listing for a document with each kind of block."""
    document = parse("Title\n=====\n\nSome text here.\n\n    code()\n\nx\t*t*\n")
    assert printer.format(document) == (
        "Document: 4 blocks, 1 tags\n"
        "  Heading (level 1) (lines 0-1): 'Title' []\n"
        "  Paragraph (line 3)\n"
        "    Line (line 3): 'Some text ...' <text>\n"
        "  CodeBlock (line 5): language='', 1 lines, 'code()'\n"
        "  TagAnchorLine (line 7): 'x' [t]\n"
    )


def test_format_empty_document(printer):
    """Test the listing for an empty document."""
    assert printer.format(parse("")) == "Document: 0 blocks, 0 tags\n"


def test_format_built_by_hand(printer):
    """Test the listing for nodes with no source lines and a title at the preview limit."""
    document = VimdocASTDocumentNode()
    document.add_child(VimdocASTHeadingNode(2, "0123456789"))
    document.add_child(VimdocASTHeadingNode(3, "0123456789x"))
    assert printer.format(document) == (
        "Document: 2 blocks, 0 tags\n"
        "  Heading (level 2): '0123456789' []\n"
        "  Heading (level 3): '0123456789...' []\n"
    )


def test_format_span_kinds(printer):
    """Test that paragraph lines list the kinds of their spans."""
    listing = printer.format(parse("See |a| and _b_\n"))
    assert "<text,xref,text,emphasis>" in listing


def test_printer_reusable(printer):
    """Test that formatting twice does not accumulate output."""
    document = parse("Title\n=====\n")
    assert printer.format(document) == printer.format(document)


def test_converter_debug_string():
    """Test that the converter exposes the listing."""
    listing = VimdocConverter().debug_string("Usage ~\n")
    assert listing == "Document: 1 blocks, 0 tags\n  Heading (level 4) (line 0): 'Usage' []\n"
