"""
Conversion of vimdoc help text to HTML.

This module ties the lexer, AST builder and HTML renderer together.  Each call
builds fresh instances, so independent conversions never share state.
"""

import logging
from typing import TextIO

from vimdoc.vimdoc_ast_builder import VimdocASTBuilder
from vimdoc.vimdoc_ast_node import VimdocASTDocumentNode
from vimdoc.vimdoc_ast_printer import VimdocASTPrinter
from vimdoc.vimdoc_error import VimdocParseError
from vimdoc.vimdoc_html_renderer import VimdocHTMLRenderer
from vimdoc.vimdoc_lexer import VimdocLexer
from vimdoc.vimdoc_settings import VimdocSettings


class VimdocConverter:
    """Converts vimdoc help text to HTML using an AST-based approach."""

    def __init__(self, settings: VimdocSettings | None = None) -> None:
        """
        Initialize the converter.

        Args:
            settings: Conversion settings, or None for the defaults
        """
        self._settings = settings if settings is not None else VimdocSettings.create_default()
        self._logger = logging.getLogger("VimdocConverter")

    def _decode(self, text: str | bytes) -> str:
        """
        Turn the input into a string.

        Args:
            text: The input, as a string or UTF-8 encoded bytes

        Returns:
            The input text

        Raises:
            VimdocParseError: If the input is not text or is not valid UTF-8
        """
        if isinstance(text, str):
            return text

        if not isinstance(text, (bytes, bytearray)):
            raise VimdocParseError(f"Expected text input, got {type(text).__name__}")

        try:
            return bytes(text).decode('utf-8')

        except UnicodeDecodeError as e:
            line = text.count(b'\n', 0, e.start)
            column = e.start - (text.rfind(b'\n', 0, e.start) + 1)
            raise VimdocParseError("Input is not valid UTF-8", line, column) from e

    def parse(self, text: str | bytes, source_path: str | None = None) -> VimdocASTDocumentNode:
        """
        Parse vimdoc text into a document tree.

        Args:
            text: The vimdoc text, as a string or UTF-8 encoded bytes
            source_path: Optional path to the source file

        Returns:
            The document root node

        Raises:
            VimdocParseError: If the input cannot be interpreted as text
        """
        lexer = VimdocLexer(self._decode(text), self._settings)
        self._logger.debug("Parsing %s", source_path if source_path is not None else "<string>")
        return VimdocASTBuilder().build_ast(lexer, source_path)

    def render(self, document: VimdocASTDocumentNode) -> str:
        """
        Render a document tree to HTML.

        Args:
            document: The document to render

        Returns:
            The HTML text
        """
        return VimdocHTMLRenderer(self._settings).render(document)

    def write(self, document: VimdocASTDocumentNode, sink: TextIO) -> None:
        """
        Render a document tree to HTML and write it to a text sink.

        Args:
            document: The document to render
            sink: Text stream that receives the HTML
        """
        VimdocHTMLRenderer(self._settings).write(document, sink)

    def convert(self, text: str | bytes) -> str:
        """
        Convert vimdoc text to HTML.

        Args:
            text: The vimdoc text, as a string or UTF-8 encoded bytes

        Returns:
            The HTML text

        Raises:
            VimdocParseError: If the input cannot be interpreted as text
        """
        return self.render(self.parse(text))

    def debug_string(self, text: str | bytes) -> str:
        """
        Describe the document tree built from vimdoc text.

        Args:
            text: The vimdoc text, as a string or UTF-8 encoded bytes

        Returns:
            An indented listing of the tree, one node per line

        Raises:
            VimdocParseError: If the input cannot be interpreted as text
        """
        return VimdocASTPrinter().format(self.parse(text))


def parse(text: str | bytes, settings: VimdocSettings | None = None) -> VimdocASTDocumentNode:
    """
    Parse vimdoc text into a document tree.

    Args:
        text: The vimdoc text, as a string or UTF-8 encoded bytes
        settings: Conversion settings, or None for the defaults

    Returns:
        The document root node

    Raises:
        VimdocParseError: If the input cannot be interpreted as text
    """
    return VimdocConverter(settings).parse(text)


def render(document: VimdocASTDocumentNode, settings: VimdocSettings | None = None) -> str:
    """
    Render a document tree to HTML.

    Args:
        document: The document to render
        settings: Conversion settings, or None for the defaults

    Returns:
        The HTML text
    """
    return VimdocConverter(settings).render(document)


def convert(text: str | bytes, settings: VimdocSettings | None = None) -> str:
    """
    Convert vimdoc text to HTML.

    Args:
        text: The vimdoc text, as a string or UTF-8 encoded bytes
        settings: Conversion settings, or None for the defaults

    Returns:
        The HTML text

    Raises:
        VimdocParseError: If the input cannot be interpreted as text
    """
    return VimdocConverter(settings).convert(text)
