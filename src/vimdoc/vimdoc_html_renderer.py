"""
Vimdoc AST visitor to render the AST as HTML.
"""

from html import escape
import logging
from typing import Dict, List, TextIO, Tuple
from urllib.parse import quote

from vimdoc.vimdoc_ast_node import (
    VimdocASTCodeBlockNode, VimdocASTDocumentNode, VimdocASTHeadingNode,
    VimdocASTParagraphNode, VimdocASTTagAnchorLineNode, VimdocASTVisitor
)
from vimdoc.vimdoc_lexer import VimdocSpan, VimdocSpanType, VimdocTag
from vimdoc.vimdoc_settings import VimdocSettings


class VimdocHTMLRenderer(VimdocASTVisitor):
    """
    Visitor that renders a vimdoc AST to HTML.

    All text taken from the input is escaped before any markup is wrapped around it.
    Cross-references are resolved against the tags declared in the document being
    rendered; a reference to an undeclared tag is written out as literal text.
    """

    def __init__(self, settings: VimdocSettings | None = None) -> None:
        """
        Initialize the renderer.

        Args:
            settings: Conversion settings, or None for the defaults
        """
        self._settings = settings if settings is not None else VimdocSettings.create_default()
        self._logger = logging.getLogger("VimdocHTMLRenderer")
        self._tags: Dict[str, VimdocTag] = {}

    def render(self, document: VimdocASTDocumentNode) -> str:
        """
        Render a document to HTML.

        Args:
            document: The document to render

        Returns:
            The HTML text, wrapped in a complete page if the settings ask for one
        """
        body = self.visit(document)
        if not self._settings.standalone:
            return body

        return (
            "<!DOCTYPE html>\n"
            "<html>\n"
            "<head>\n"
            "<meta charset=\"utf-8\">\n"
            f"<title>{escape(self._settings.title)}</title>\n"
            "</head>\n"
            "<body>\n"
            f"{body}"
            "</body>\n"
            "</html>\n"
        )

    def write(self, document: VimdocASTDocumentNode, sink: TextIO) -> None:
        """
        Render a document to HTML and write it to a text sink.

        Args:
            document: The document to render
            sink: Text stream that receives the HTML
        """
        sink.write(self.render(document))

    def visit_VimdocASTDocumentNode(self, node: VimdocASTDocumentNode) -> str:  # pylint: disable=invalid-name
        """
        Render a document node to HTML.

        Args:
            node: The document node to render

        Returns:
            The HTML for every block, one block per line
        """
        self._tags = node.tags
        html_parts = []
        for child in node.children:
            block_html = self.visit(child)
            if block_html:
                html_parts.append(block_html + "\n")

        return "".join(html_parts)

    def visit_VimdocASTHeadingNode(self, node: VimdocASTHeadingNode) -> str:  # pylint: disable=invalid-name
        """
        Render a heading node to HTML.

        Args:
            node: The heading node to render

        Returns:
            The heading with its tag anchors; a heading without a title becomes a rule
        """
        anchors = self._render_anchors(node.tags)
        if not node.text:
            return f"{anchors}<hr>"

        if node.is_noise and self._settings.skip_noise:
            return anchors

        title = self._render_spans(node.spans) if node.spans else escape(node.text)
        return f"<h{node.level}>{anchors}{title}</h{node.level}>"

    def visit_VimdocASTTagAnchorLineNode(self, node: VimdocASTTagAnchorLineNode) -> str:  # pylint: disable=invalid-name
        """
        Render a tag anchor line to HTML.

        Args:
            node: The tag anchor line to render

        Returns:
            One anchor per tag, followed by any text that shares the line
        """
        anchors = self._render_anchors(node.tags)
        if not node.text or (node.is_noise and self._settings.skip_noise):
            return anchors

        inner_html = self._render_spans(node.spans)
        if node.text.isupper():
            return f"{anchors}<h3>{inner_html}</h3>"

        return f"{anchors}<p>{inner_html}</p>"

    def visit_VimdocASTParagraphNode(self, node: VimdocASTParagraphNode) -> str:  # pylint: disable=invalid-name
        """
        Render a paragraph node to HTML.

        Args:
            node: The paragraph node to render

        Returns:
            The paragraph, keeping its line breaks
        """
        lines = [
            self._render_spans(line.spans) for line in node.lines
            if not (line.is_noise and self._settings.skip_noise)
        ]
        if not lines:
            return ""

        inner_html = "\n".join(lines)
        return f"<p>{inner_html}</p>"

    def visit_VimdocASTCodeBlockNode(self, node: VimdocASTCodeBlockNode) -> str:  # pylint: disable=invalid-name
        """
        Render a code block node to HTML.

        Args:
            node: The code block node to render

        Returns:
            The escaped code, verbatim apart from trailing blank lines
        """
        lines = list(node.lines)
        while lines and not lines[-1].strip():
            lines.pop()

        if self._settings.dedent_code:
            lines = self._trim_indent(lines)

        class_attr = f' class="language-{escape(node.language)}"' if node.language else ""
        code = escape("\n".join(lines))
        return f"<pre><code{class_attr}>{code}</code></pre>"

    def _trim_indent(self, lines: List[str]) -> List[str]:
        """
        Remove the indentation common to all non-blank lines.

        Args:
            lines: The raw code lines

        Returns:
            The lines with tabs expanded and common indentation removed
        """
        expanded = [line.expandtabs(self._settings.tab_width) for line in lines]
        indents = [len(line) - len(line.lstrip(' ')) for line in expanded if line.strip()]
        if not indents:
            return expanded

        common = min(indents)
        return [line[common:] if line.strip() else line.strip() for line in expanded]

    def _render_anchors(self, tags: Tuple[VimdocTag, ...]) -> str:
        """
        Render the anchor for each declared tag.

        Args:
            tags: The declared tags

        Returns:
            One empty named anchor per tag; a repeated declaration of a name gets none
        """
        return "".join(
            f'<a name="{escape(tag.name)}"></a>' for tag in tags if self._tags.get(tag.name) is tag
        )

    def _render_link(self, name: str, text: str) -> str:
        """
        Render a link to a tag declared in the document.

        Args:
            name: The tag name
            text: The visible link text

        Returns:
            The link markup
        """
        return f'<a href="#{escape(quote(name))}">{escape(text)}</a>'

    def _render_spans(self, spans: Tuple[VimdocSpan, ...]) -> str:
        """
        Render the inline spans of a line.

        Args:
            spans: The spans to render

        Returns:
            The HTML for the line
        """
        return "".join(self._render_span(span) for span in spans)

    def _render_span(self, span: VimdocSpan) -> str:
        """
        Render one inline span.

        Args:
            span: The span to render

        Returns:
            The HTML for the span
        """
        text = escape(span.text)

        if span.type == VimdocSpanType.XREF:
            if span.text in self._tags:
                return self._render_link(span.text, span.text)

            self._logger.debug("Unresolved reference '%s'", span.text)
            return escape(f"|{span.text}|")

        if span.type == VimdocSpanType.OPTION:
            if span.text in self._tags:
                return self._render_link(span.text, span.text)

            return f"<code>{text}</code>"

        if span.type == VimdocSpanType.EMPHASIS:
            return f"<em>{text}</em>"

        if span.type == VimdocSpanType.TAG:
            return f"<b>{text}</b>"

        if span.type in (VimdocSpanType.CODESPAN, VimdocSpanType.KEYCODE, VimdocSpanType.ARGUMENT):
            return f"<code>{text}</code>"

        if span.type == VimdocSpanType.URL:
            return f'<a href="{text}">{text}</a>'

        return text
