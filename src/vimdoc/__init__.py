"""A converter from Vim help files (vimdoc) to HTML."""

from vimdoc.vimdoc_ast_builder import VimdocASTBuilder
from vimdoc.vimdoc_ast_node import (
    VimdocASTCodeBlockNode,
    VimdocASTDocumentNode,
    VimdocASTHeadingNode,
    VimdocASTNode,
    VimdocASTParagraphNode,
    VimdocASTTagAnchorLineNode,
    VimdocASTVisitor
)
from vimdoc.vimdoc_ast_printer import VimdocASTPrinter
from vimdoc.vimdoc_converter import VimdocConverter, convert, parse, render
from vimdoc.vimdoc_error import VimdocError, VimdocParseError
from vimdoc.vimdoc_html_renderer import VimdocHTMLRenderer
from vimdoc.vimdoc_lexer import (
    VimdocLexer,
    VimdocLine,
    VimdocLineType,
    VimdocSpan,
    VimdocSpanType,
    VimdocTag
)
from vimdoc.vimdoc_settings import VimdocSettings


__all__ = [
    "VimdocASTBuilder",
    "VimdocASTCodeBlockNode",
    "VimdocASTDocumentNode",
    "VimdocASTHeadingNode",
    "VimdocASTNode",
    "VimdocASTParagraphNode",
    "VimdocASTPrinter",
    "VimdocASTTagAnchorLineNode",
    "VimdocASTVisitor",
    "VimdocConverter",
    "VimdocError",
    "VimdocHTMLRenderer",
    "VimdocLexer",
    "VimdocLine",
    "VimdocLineType",
    "VimdocParseError",
    "VimdocSettings",
    "VimdocSpan",
    "VimdocSpanType",
    "VimdocTag",
    "convert",
    "parse",
    "render"
]
