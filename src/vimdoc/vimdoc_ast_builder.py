"""
Builder that assembles classified vimdoc lines into a document tree.
"""

import logging
from typing import Iterable, Tuple

from vimdoc.vimdoc_ast_node import (
    VimdocASTCodeBlockNode, VimdocASTDocumentNode, VimdocASTHeadingNode,
    VimdocASTParagraphNode, VimdocASTTagAnchorLineNode
)
from vimdoc.vimdoc_lexer import VimdocLine, VimdocLineType, VimdocTag


class VimdocASTBuilder:
    """
    Builder class for constructing an AST from classified vimdoc lines.

    The build is a single forward pass.  At most one paragraph or code block is
    open at a time; any change of line role closes it and appends it to the document.
    """

    def __init__(self) -> None:
        """Initialize the AST builder."""
        self._logger = logging.getLogger("VimdocASTBuilder")
        self._document = VimdocASTDocumentNode()
        self._open_block: VimdocASTParagraphNode | VimdocASTCodeBlockNode | None = None

        # Heading built from a bare rule; the line that follows it may become its title
        self._untitled_heading: VimdocASTHeadingNode | None = None

    def document(self) -> VimdocASTDocumentNode:
        """
        Get the most recently built document.

        Returns:
            The document root node
        """
        return self._document

    def build_ast(self, lines: Iterable[VimdocLine], source_path: str | None = None) -> VimdocASTDocumentNode:
        """
        Build a complete AST from a sequence of classified lines.

        Args:
            lines: The classified lines, in input order
            source_path: Optional path to the source file

        Returns:
            The document root node
        """
        self._document = VimdocASTDocumentNode(source_path)
        self._open_block = None
        self._untitled_heading = None

        for line in lines:
            self._parse_line(line)

        self._close_block()

        self._logger.debug(
            "Built %d blocks, %d tags (%d duplicates)",
            len(self._document.children),
            len(self._document.tags),
            len(self._document.duplicate_tags)
        )
        return self._document

    def _parse_line(self, line: VimdocLine) -> None:
        """
        Fold a single classified line into the document.

        Args:
            line: The line to process
        """
        untitled_heading = self._untitled_heading
        self._untitled_heading = None

        if line.type == VimdocLineType.BLANK:
            self._close_block()
            return

        if line.type == VimdocLineType.HEADING:
            self._parse_heading(line)
            return

        if line.type == VimdocLineType.COLUMN_HEADING:
            self._close_block()
            heading = VimdocASTHeadingNode(4, line.text, is_noise=line.is_noise, spans=line.spans)
            heading.line_start = line.line_num
            heading.line_end = line.line_num
            self._document.add_child(heading)
            return

        if line.type == VimdocLineType.TAG_ANCHOR:
            self._close_block()
            self._register_tags(line.tags)

            if untitled_heading is not None and line.text:
                self._set_heading_title(untitled_heading, line, line.tags)
                return

            self._document.add_child(VimdocASTTagAnchorLineNode(line))
            return

        if line.type == VimdocLineType.CODE:
            if not isinstance(self._open_block, VimdocASTCodeBlockNode):
                self._close_block()
                self._open_block = VimdocASTCodeBlockNode()

            self._open_block.add_line(line)
            return

        self._parse_text(line, untitled_heading)

    def _parse_text(self, line: VimdocLine, untitled_heading: VimdocASTHeadingNode | None) -> None:
        """
        Handle a text line.

        Args:
            line: The text line
            untitled_heading: Heading directly above this line that has no title yet
        """
        if untitled_heading is not None and line.text and not line.code_start:
            self._set_heading_title(untitled_heading, line, ())
            return

        if line.text:
            if not isinstance(self._open_block, VimdocASTParagraphNode):
                self._close_block()
                self._open_block = VimdocASTParagraphNode()

            self._open_block.add_line(line)

        if line.code_start:
            self._close_block()
            self._open_block = VimdocASTCodeBlockNode(line.code_language)

    def _parse_heading(self, line: VimdocLine) -> None:
        """
        Handle a heading rule.

        A rule directly under a single text line, or under a tag line carrying text,
        underlines that line and takes it as its title.  Otherwise the rule starts a
        heading whose title, if any, is the line that follows.

        Args:
            line: The heading rule line
        """
        self._register_tags(line.tags)

        previous_num = line.line_num - 1
        paragraph = self._open_block
        if (
            isinstance(paragraph, VimdocASTParagraphNode) and
            len(paragraph.lines) == 1 and
            paragraph.line_end == previous_num
        ):
            self._open_block = None
            title_line = paragraph.lines[0]
            heading = VimdocASTHeadingNode(line.level, title_line.text, line.tags, title_line.is_noise, title_line.spans)
            heading.line_start = title_line.line_num
            heading.line_end = line.line_num
            self._document.add_child(heading)
            return

        self._close_block()

        last_block = self._document.children[-1] if self._document.children else None
        if (
            isinstance(last_block, VimdocASTTagAnchorLineNode) and
            last_block.text and
            last_block.line_end == previous_num
        ):
            self._document.remove_child(last_block)
            heading = VimdocASTHeadingNode(line.level, last_block.text, last_block.tags + line.tags, last_block.is_noise, last_block.spans)
            heading.line_start = last_block.line_start
            heading.line_end = line.line_num
            self._document.add_child(heading)
            return

        heading = VimdocASTHeadingNode(line.level, "", line.tags)
        heading.line_start = line.line_num
        heading.line_end = line.line_num
        self._document.add_child(heading)
        self._untitled_heading = heading

    def _set_heading_title(self, heading: VimdocASTHeadingNode, line: VimdocLine, tags: Tuple[VimdocTag, ...]) -> None:
        """
        Give a heading built from a bare rule the title on the line below it.

        Args:
            heading: The heading to update
            line: The title line
            tags: Tags declared on the title line
        """
        heading.text = line.text
        heading.spans = line.spans
        heading.tags = heading.tags + tags
        heading.is_noise = line.is_noise
        heading.line_end = line.line_num

    def _close_block(self) -> None:
        """Close the open paragraph or code block, if any, and append it to the document."""
        block = self._open_block
        if block is None:
            return

        self._open_block = None

        if isinstance(block, VimdocASTCodeBlockNode) and block.is_empty():
            return

        self._document.add_child(block)

    def _register_tags(self, tags: Tuple[VimdocTag, ...]) -> None:
        """
        Record tag declarations; the first declaration of a name wins.

        Args:
            tags: The declared tags
        """
        for tag in tags:
            first = self._document.tags.get(tag.name)
            if first is None:
                self._document.tags[tag.name] = tag
                continue

            self._document.duplicate_tags.append(tag)
            self._logger.warning(
                "Duplicate tag '%s' at line %d, column %d (first declared at line %d)",
                tag.name, tag.line, tag.column, first.line
            )
