"""
Abstract syntax tree for vimdoc documents.

The tree is two levels deep: a document node owns an ordered list of block
nodes (headings, paragraphs, code blocks and tag anchor lines).  Blocks own the
lines and spans they were built from.
"""

from typing import Any, Dict, List, Tuple

from vimdoc.vimdoc_lexer import VimdocLine, VimdocSpan, VimdocTag


class VimdocASTNode:
    """Base class for all vimdoc AST nodes."""

    def __init__(self) -> None:
        """Initialize an AST node with no children and no source range."""
        self.children: List["VimdocASTNode"] = []

        # Source range information
        self.line_start: int | None = None
        self.line_end: int | None = None

    def add_child(self, child: "VimdocASTNode") -> "VimdocASTNode":
        """
        Add a child node to this node.

        Args:
            child: The child node to add

        Returns:
            The added child node for method chaining
        """
        self.children.append(child)
        return child

    def remove_child(self, child: "VimdocASTNode") -> None:
        """
        Remove a child node from this node.

        Args:
            child: The child node to remove

        Raises:
            ValueError: If the child is not a child of this node
        """
        if child not in self.children:
            raise ValueError("Node is not a child of this node")

        self.children.remove(child)


class VimdocASTVisitor:
    """
    Base visitor class for vimdoc AST traversal.

    Dispatches each node to a `visit_<ClassName>` method, falling back to
    `generic_visit` when the visitor has no handler for a node type.
    """

    def visit(self, node: VimdocASTNode) -> Any:
        """
        Visit a node and dispatch to the appropriate visit method.

        Args:
            node: The node to visit

        Returns:
            The result of visiting the node
        """
        method_name = f'visit_{node.__class__.__name__}'
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: VimdocASTNode) -> List[Any]:
        """
        Default visit method for nodes without specific handlers.

        Args:
            node: The node to visit

        Returns:
            A list of results from visiting each child
        """
        results = []
        for child in node.children:
            results.append(self.visit(child))

        return results


class VimdocASTDocumentNode(VimdocASTNode):
    """Root node representing an entire help file."""

    def __init__(self, source_path: str | None = None) -> None:
        """
        Initialize a document node.

        Args:
            source_path: Optional path to the source file
        """
        super().__init__()
        self.source_path = source_path

        # First declaration of each tag, and every later redeclaration
        self.tags: Dict[str, VimdocTag] = {}
        self.duplicate_tags: List[VimdocTag] = []

    def has_tag(self, name: str) -> bool:
        """
        Check whether a tag is declared anywhere in the document.

        Args:
            name: The tag name

        Returns:
            True if the tag is declared
        """
        return name in self.tags


class VimdocASTHeadingNode(VimdocASTNode):
    """Node representing a section heading (<h1> through <h6>)."""

    def __init__(
        self,
        level: int,
        text: str = "",
        tags: Tuple[VimdocTag, ...] = (),
        is_noise: bool = False,
        spans: Tuple[VimdocSpan, ...] = ()
    ) -> None:
        """
        Initialize a heading node.

        Args:
            level: The heading level (1-6)
            text: The heading title, empty for a bare rule
            tags: Tags declared on the heading
            is_noise: True if the title came from a help-file title line
            spans: Inline spans of the title
        """
        super().__init__()

        # Level should be 1-6
        self.level = max(1, min(6, level))
        self.text = text
        self.tags = tags
        self.is_noise = is_noise
        self.spans = spans


class VimdocASTParagraphNode(VimdocASTNode):
    """Node representing a run of text lines (<p>)."""

    def __init__(self) -> None:
        """Initialize an empty paragraph node."""
        super().__init__()
        self.lines: List[VimdocLine] = []

    def add_line(self, line: VimdocLine) -> None:
        """
        Append a text line to the paragraph.

        Args:
            line: The classified text line
        """
        if self.line_start is None:
            self.line_start = line.line_num

        self.line_end = line.line_num
        self.lines.append(line)

    def spans(self) -> List[Tuple[VimdocSpan, ...]]:
        """
        Get the spans of each line in the paragraph.

        Returns:
            One tuple of spans per line
        """
        return [line.spans for line in self.lines]


class VimdocASTCodeBlockNode(VimdocASTNode):
    """Node representing verbatim code (<pre><code>)."""

    def __init__(self, language: str = "") -> None:
        """
        Initialize a code block node.

        Args:
            language: Language named by a '>lang' fence marker, if any
        """
        super().__init__()
        self.language = language
        self.lines: List[str] = []

    def add_line(self, line: VimdocLine) -> None:
        """
        Append a raw code line to the block.

        Args:
            line: The classified code line
        """
        if self.line_start is None:
            self.line_start = line.line_num

        self.line_end = line.line_num
        self.lines.append(line.content)

    def is_empty(self) -> bool:
        """
        Check whether the block holds anything other than whitespace.

        Returns:
            True if every line is blank
        """
        return all(not line.strip() for line in self.lines)


class VimdocASTTagAnchorLineNode(VimdocASTNode):
    """Node representing a line that declares tags, with any text that shares the line."""

    def __init__(self, line: VimdocLine) -> None:
        """
        Initialize a tag anchor line node.

        Args:
            line: The classified tag anchor line
        """
        super().__init__()
        self.tags = line.tags
        self.text = line.text
        self.spans = line.spans
        self.is_noise = line.is_noise
        self.line_start = line.line_num
        self.line_end = line.line_num
