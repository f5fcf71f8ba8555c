"""
Visitor class to print vimdoc AST structures for debugging
"""
from typing import List

from vimdoc.vimdoc_ast_node import (
    VimdocASTCodeBlockNode, VimdocASTDocumentNode, VimdocASTHeadingNode, VimdocASTNode,
    VimdocASTParagraphNode, VimdocASTTagAnchorLineNode, VimdocASTVisitor
)


class VimdocASTPrinter(VimdocASTVisitor):
    """Visitor that lists the AST structure for debugging."""

    PREVIEW_LENGTH = 10

    def __init__(self) -> None:
        """Initialize the AST printer with zero indentation."""
        super().__init__()
        self.indent_level = 0
        self._output: List[str] = []

    def format(self, document: VimdocASTDocumentNode) -> str:
        """
        Describe a document tree, one node per line.

        Args:
            document: The document to describe

        Returns:
            The indented listing
        """
        self.indent_level = 0
        self._output = []
        self.visit(document)
        return "\n".join(self._output) + "\n"

    def _indent(self) -> str:
        """
        Get the current indentation string.

        Returns:
            A string of spaces for the current indentation level
        """
        return "  " * self.indent_level

    def _line_range(self, node: VimdocASTNode) -> str:
        """
        Describe the source lines a node came from.

        Args:
            node: The node to describe

        Returns:
            The line or line range in parentheses, or an empty string if unknown
        """
        if node.line_start is None or node.line_end is None:
            return ""

        if node.line_start == node.line_end:
            return f" (line {node.line_start})"

        return f" (lines {node.line_start}-{node.line_end})"

    def _preview(self, text: str) -> str:
        """
        Shorten text for the listing.

        Args:
            text: The text to show

        Returns:
            The quoted text, cut short with '...' when it is too long
        """
        if len(text) <= self.PREVIEW_LENGTH:
            return repr(text)

        return repr(text[:self.PREVIEW_LENGTH] + "...")

    def _emit(self, text: str) -> None:
        """
        Append one indented line to the listing.

        Args:
            text: The line to append
        """
        self._output.append(f"{self._indent()}{text}")

    def visit_VimdocASTDocumentNode(self, node: VimdocASTDocumentNode) -> None:  # pylint: disable=invalid-name
        """
        Visit the document node and list its blocks.

        Args:
            node: The document node to visit
        """
        self._emit(f"Document: {len(node.children)} blocks, {len(node.tags)} tags")
        self.indent_level += 1
        self.generic_visit(node)
        self.indent_level -= 1

    def visit_VimdocASTHeadingNode(self, node: VimdocASTHeadingNode) -> None:  # pylint: disable=invalid-name
        """
        Visit a heading node and print its level, tags and title.

        Args:
            node: The heading node to visit
        """
        tags = " ".join(tag.name for tag in node.tags)
        self._emit(f"Heading (level {node.level}){self._line_range(node)}: {self._preview(node.text)} [{tags}]")

    def visit_VimdocASTTagAnchorLineNode(self, node: VimdocASTTagAnchorLineNode) -> None:  # pylint: disable=invalid-name
        """
        Visit a tag anchor line and print its tags and text.

        Args:
            node: The tag anchor line to visit
        """
        tags = " ".join(tag.name for tag in node.tags)
        self._emit(f"TagAnchorLine{self._line_range(node)}: {self._preview(node.text)} [{tags}]")

    def visit_VimdocASTParagraphNode(self, node: VimdocASTParagraphNode) -> None:  # pylint: disable=invalid-name
        """
        Visit a paragraph node and print each of its lines.

        Args:
            node: The paragraph node to visit
        """
        self._emit(f"Paragraph{self._line_range(node)}")
        self.indent_level += 1
        for line in node.lines:
            span_kinds = ",".join(span.type.name.lower() for span in line.spans)
            self._emit(f"Line (line {line.line_num}): {self._preview(line.text)} <{span_kinds}>")

        self.indent_level -= 1

    def visit_VimdocASTCodeBlockNode(self, node: VimdocASTCodeBlockNode) -> None:  # pylint: disable=invalid-name
        """
        Visit a code block node and print its language and size.

        Args:
            node: The code block node to visit
        """
        first_line = node.lines[0].strip() if node.lines else ""
        self._emit(
            f"CodeBlock{self._line_range(node)}: language='{node.language}', "
            f"{len(node.lines)} lines, {self._preview(first_line)}"
        )
