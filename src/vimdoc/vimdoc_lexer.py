"""
Lexer that splits vimdoc text into classified lines and inline spans.
"""

from dataclasses import dataclass
from enum import IntEnum, auto
import re
from typing import Iterator, List, Tuple

from vimdoc.vimdoc_settings import VimdocSettings


class VimdocLineType(IntEnum):
    """Structural role of a line."""
    BLANK = auto()
    HEADING = auto()
    TAG_ANCHOR = auto()
    CODE = auto()
    COLUMN_HEADING = auto()
    TEXT = auto()


class VimdocSpanType(IntEnum):
    """Kind of inline span within a text line."""
    TEXT = auto()
    TAG = auto()
    XREF = auto()
    EMPHASIS = auto()
    CODESPAN = auto()
    OPTION = auto()
    KEYCODE = auto()
    ARGUMENT = auto()
    URL = auto()


@dataclass(frozen=True)
class VimdocSpan:
    """
    An inline region of a line.

    Attributes:
        type: The kind of span
        text: The resolved text, without delimiters
        start: Offset of the first character of the span within the line
        end: Offset just past the last character of the span within the line
    """
    type: VimdocSpanType
    text: str
    start: int
    end: int


@dataclass(frozen=True)
class VimdocTag:
    """
    A tag declaration.

    Attributes:
        name: The tag name, without the surrounding '*' characters
        line: Zero-based line number of the declaration
        column: Offset of the opening '*' within the line
    """
    name: str
    line: int
    column: int


@dataclass(frozen=True)
class VimdocLine:
    """
    A classified line of input.

    Attributes:
        type: The structural role of the line
        content: The raw line, without its line terminator
        line_num: Zero-based line number
        indent: Width of the leading whitespace
        text: The line's text once markers, tags and fence markers are removed
        spans: Inline spans of the text (text, tag anchor and column heading lines)
        tags: Tags declared on the line (heading and tag anchor lines)
        level: Heading level for heading rules
        code_start: True if the line ends with a '>' code fence marker
        code_language: Language named by the fence marker, if any
        is_noise: True for modelines and help-file title lines
    """
    type: VimdocLineType
    content: str
    line_num: int
    indent: int = 0
    text: str = ""
    spans: Tuple[VimdocSpan, ...] = ()
    tags: Tuple[VimdocTag, ...] = ()
    level: int = 0
    code_start: bool = False
    code_language: str = ""
    is_noise: bool = False


class VimdocLexer:
    """
    Lexer for vimdoc help files.

    Lines are classified lazily, one at a time, by an ordered set of checks.  The
    first check that matches decides the role of the line.  Iterating over the lexer
    again restarts classification from the first line.
    """

    def __init__(self, input_text: str, settings: VimdocSettings | None = None) -> None:
        """
        Initialize the lexer.

        Args:
            input_text: The vimdoc text to classify
            settings: Conversion settings, or None for the defaults
        """
        self._input = input_text
        self._settings = settings if settings is not None else VimdocSettings.create_default()

        width = max(1, self._settings.min_rule_width)
        self._rule_pattern = re.compile(
            r'^(?P<rule>={' + str(width) + r',}|-{' + str(width) + r',})(?P<tags>(?:[ \t]+\*[^\s*|]+\*)*)[ \t]*$'
        )
        self._tag_pattern = re.compile(r'\*([^\s*|]+)\*')
        self._column_heading_pattern = re.compile(r'^(?P<text>.*\S)[ \t]+~[ \t]*$')
        self._fence_pattern = re.compile(r'(?:^|[ \t])>(?P<language>[A-Za-z0-9_+-]*)[ \t]*$')
        self._option_pattern = re.compile(r"'(?:[a-z]{2,}|t_[\w#@%&*+-]{2})'")
        self._keycode_pattern = re.compile(r'<(?:[A-Za-z][-A-Za-z0-9]*|[CSMAD]-[^\s<>]+)>')
        self._ctrl_pattern = re.compile(r'CTRL-(?:W_)?(?:<[A-Za-z]+>|[\w\[\]^+\-<>=@\\])')
        self._argument_pattern = re.compile(r'\{[^\s{}]+\}')
        self._url_pattern = re.compile(r'(?:https?|ftp)://[^\s\'"<>|`]+')

        self._noise_patterns = [
            re.compile(r'Type .*gO.* to see the table of contents'),
            re.compile(r'^\s*N?VIM[ \t]*REFERENCE[ \t]*MANUAL'),
            re.compile(r'\s*\*?[a-zA-Z]+\.txt\*?\s+N?[vV]im\s*$'),
            re.compile(r'^\s*vim?:.*ft=help|^\s*vim?:.*filetype=help|[*>]local-additions[*<]')
        ]

    def __iter__(self) -> Iterator[VimdocLine]:
        return self.lines()

    def lines(self) -> Iterator[VimdocLine]:
        """
        Classify the input, one line at a time.

        Yields:
            Each classified line, in input order
        """
        in_fence = False

        for line_num, content in enumerate(self._split_lines()):
            if in_fence:
                # Blank and indented lines stay inside a '>' code fence
                if not content.strip() or content[0] in ' \t':
                    yield VimdocLine(
                        type=VimdocLineType.CODE,
                        content=content,
                        line_num=line_num,
                        indent=self._indent_width(content)
                    )
                    continue

                in_fence = False

                if content.startswith('<'):
                    line = self._classify(content, line_num, start=1, allow_code=False)
                    in_fence = line.code_start
                    yield line
                    continue

            line = self._classify(content, line_num)
            in_fence = line.code_start
            yield line

    def _split_lines(self) -> List[str]:
        """
        Split the input into lines without their terminators.

        Returns:
            The lines of the input; a final line terminator does not start a new line
        """
        if not self._input:
            return []

        lines = self._input.split('\n')
        if lines[-1] == '':
            lines.pop()

        return [line[:-1] if line.endswith('\r') else line for line in lines]

    def _indent_width(self, text: str) -> int:
        """
        Measure the leading whitespace of a line, expanding tabs.

        Args:
            text: The text to measure

        Returns:
            The display width of the leading whitespace
        """
        leading = text[:len(text) - len(text.lstrip(' \t'))]
        return len(leading.expandtabs(self._settings.tab_width))

    def _is_noise(self, text: str) -> bool:
        """
        Check whether a line is one that reads badly once converted.

        Args:
            text: The line to check

        Returns:
            True for table-of-contents hints, manual title lines, first lines and modelines
        """
        return any(pattern.search(text) for pattern in self._noise_patterns)

    def _classify(self, content: str, line_num: int, start: int = 0, allow_code: bool = True) -> VimdocLine:
        """
        Classify a single line.

        Args:
            content: The raw line
            line_num: Zero-based line number
            start: Offset where classification begins (past a '<' fence terminator)
            allow_code: Whether indentation may mark the line as code

        Returns:
            The classified line
        """
        body = content[start:]
        indent = self._indent_width(body)
        is_noise = self._is_noise(content)

        if not body.strip():
            return VimdocLine(type=VimdocLineType.BLANK, content=content, line_num=line_num)

        rule_match = self._rule_pattern.match(body)
        if rule_match:
            level = 1 if rule_match.group('rule')[0] == '=' else 2
            tags = self._find_tags(body, rule_match.start('tags'), rule_match.end('tags'), line_num, start)
            return VimdocLine(
                type=VimdocLineType.HEADING,
                content=content,
                line_num=line_num,
                tags=tags,
                level=level,
                is_noise=is_noise
            )

        anchors = self._find_anchor_tags(body, line_num, start)
        if anchors is not None:
            text_start, text_end, tags = anchors
            text = body[text_start:text_end]
            return VimdocLine(
                type=VimdocLineType.TAG_ANCHOR,
                content=content,
                line_num=line_num,
                indent=indent,
                text=text,
                spans=self._parse_spans(text, start + text_start),
                tags=tags,
                is_noise=is_noise
            )

        leading = body[:len(body) - len(body.lstrip(' \t'))]
        if allow_code and ('\t' in leading or len(leading) >= max(1, self._settings.code_indent)):
            return VimdocLine(type=VimdocLineType.CODE, content=content, line_num=line_num, indent=indent)

        text_start = len(leading)
        column_match = self._column_heading_pattern.match(body[text_start:])
        if column_match:
            text = column_match.group('text')
            return VimdocLine(
                type=VimdocLineType.COLUMN_HEADING,
                content=content,
                line_num=line_num,
                indent=indent,
                text=text,
                spans=self._parse_spans(text, start + text_start),
                is_noise=is_noise
            )

        code_start = False
        code_language = ""
        text_end = len(body.rstrip())
        fence_match = self._fence_pattern.search(body)
        if fence_match:
            code_start = True
            code_language = fence_match.group('language')
            text_end = len(body[:fence_match.start()].rstrip())

        text = body[text_start:text_end] if text_end > text_start else ""
        return VimdocLine(
            type=VimdocLineType.TEXT,
            content=content,
            line_num=line_num,
            indent=indent,
            text=text,
            spans=self._parse_spans(text, start + text_start),
            code_start=code_start,
            code_language=code_language,
            is_noise=is_noise
        )

    def _find_tags(self, body: str, begin: int, end: int, line_num: int, offset: int) -> Tuple[VimdocTag, ...]:
        """
        Collect the tags declared within part of a line.

        Args:
            body: The text being classified
            begin: Start of the region holding the tags
            end: End of the region holding the tags
            line_num: Zero-based line number
            offset: Offset of body within the raw line

        Returns:
            The declared tags, in order
        """
        return tuple(
            VimdocTag(match.group(1), line_num, offset + match.start())
            for match in self._tag_pattern.finditer(body, begin, end)
        )

    def _is_anchor_gap(self, gap: str) -> bool:
        """
        Check whether the whitespace next to a tag sets it apart from the text.

        Args:
            gap: The whitespace between a tag and its neighbouring text

        Returns:
            True if the gap holds a tab or at least two spaces
        """
        return '\t' in gap or len(gap) >= 2

    def _find_anchor_tags(self, body: str, line_num: int, offset: int) -> Tuple[int, int, Tuple[VimdocTag, ...]] | None:
        """
        Find tags declared on a line, either right-aligned at its end or leading it.

        Args:
            body: The text being classified
            line_num: Zero-based line number
            offset: Offset of body within the raw line

        Returns:
            A tuple of (text start, text end, tags) where the text range holds whatever
            is left of the line, or None if the line declares no tags
        """
        stripped_end = len(body.rstrip())
        matches = list(self._tag_pattern.finditer(body, 0, stripped_end))
        if not matches:
            return None

        # Trailing group: tags at the end of the line separated only by whitespace
        trailing: List[re.Match[str]] = []
        if matches[-1].end() == stripped_end:
            trailing.append(matches[-1])
            for match in reversed(matches[:-1]):
                gap = body[match.end():trailing[0].start()]
                if not gap or gap.strip():
                    break

                trailing.insert(0, match)

            # Inline tags at the front of the group stay in the text
            while trailing:
                before = body[:trailing[0].start()]
                if not before.strip() or self._is_anchor_gap(before[len(before.rstrip()):]):
                    break

                trailing.pop(0)

        # Leading tag: the '*file.txt*' form used on the first line of a help file
        leading: re.Match[str] | None = None
        first = matches[0]
        if not trailing or first is not trailing[0]:
            if not body[:first.start()].strip():
                after = body[first.end():]
                gap = after[:len(after) - len(after.lstrip())]
                if not after.strip() or self._is_anchor_gap(gap):
                    leading = first

        if not trailing and leading is None:
            return None

        text_start = leading.end() if leading is not None else 0
        text_end = trailing[0].start() if trailing else stripped_end
        text = body[text_start:text_end]
        stripped_text = text.strip()
        if stripped_text:
            text_start += len(text) - len(text.lstrip())
            text_end = text_start + len(stripped_text)

        else:
            text_end = text_start

        declared = ([leading] if leading is not None else []) + trailing
        tags = tuple(VimdocTag(match.group(1), line_num, offset + match.start()) for match in declared)
        return text_start, text_end, tags

    def _match_delimited(self, text: str, pos: int, delimiter: str, allow_spaces: bool) -> Tuple[str, int] | None:
        """
        Match a span enclosed by a single delimiter character, closing at the first match.

        Args:
            text: The text being scanned
            pos: Position of the opening delimiter
            delimiter: The delimiter character
            allow_spaces: Whether the enclosed text may contain whitespace

        Returns:
            A tuple of (enclosed text, end position), or None if there is no usable match.
            An empty span returns an empty string so the caller can skip both delimiters.
        """
        end_pos = text.find(delimiter, pos + 1)
        if end_pos == -1:
            return None

        inner = text[pos + 1:end_pos]
        if inner and not allow_spaces and any(c.isspace() for c in inner):
            return None

        return inner, end_pos + 1

    def _parse_spans(self, text: str, offset: int) -> Tuple[VimdocSpan, ...]:
        """
        Split a line's text into inline spans.

        Args:
            text: The text to scan
            offset: Offset of the text within the raw line

        Returns:
            The spans covering the text, in order; runs of plain text are merged
        """
        spans: List[VimdocSpan] = []
        text_len = len(text)
        text_start = 0
        i = 0

        def flush_text(end: int) -> None:
            if end > text_start:
                spans.append(VimdocSpan(VimdocSpanType.TEXT, text[text_start:end], offset + text_start, offset + end))

        while i < text_len:
            ch = text[i]
            prev_is_word = i > 0 and text[i - 1].isalnum()
            span_type: VimdocSpanType | None = None
            span_text = ""
            span_end = i

            if ch in '|*`':
                if ch == '|' and i > 0 and text[i - 1] == '\\':
                    i += 1
                    continue

                delimited = self._match_delimited(text, i, ch, allow_spaces=ch == '`')
                if delimited is not None:
                    span_text, span_end = delimited
                    if not span_text:
                        # Empty delimiters are two literal characters
                        i = span_end
                        continue

                    span_type = {
                        '|': VimdocSpanType.XREF,
                        '*': VimdocSpanType.TAG,
                        '`': VimdocSpanType.CODESPAN
                    }[ch]

            elif ch == '_' and not prev_is_word:
                delimited = self._match_delimited(text, i, '_', allow_spaces=True)
                if delimited is not None:
                    span_text, span_end = delimited
                    if not span_text:
                        i = span_end
                        continue

                    followed_by_word = span_end < text_len and text[span_end].isalnum()
                    if span_text.strip() == span_text and not followed_by_word:
                        span_type = VimdocSpanType.EMPHASIS

            elif ch == "'" and not prev_is_word:
                match = self._option_pattern.match(text, i)
                if match:
                    span_type, span_text, span_end = VimdocSpanType.OPTION, match.group(0), match.end()

            elif ch == '<':
                match = self._keycode_pattern.match(text, i)
                if match:
                    span_type, span_text, span_end = VimdocSpanType.KEYCODE, match.group(0), match.end()

            elif ch == 'C' and not prev_is_word:
                match = self._ctrl_pattern.match(text, i)
                if match:
                    span_type, span_text, span_end = VimdocSpanType.KEYCODE, match.group(0), match.end()

            elif ch == '{':
                match = self._argument_pattern.match(text, i)
                if match:
                    span_type, span_text, span_end = VimdocSpanType.ARGUMENT, match.group(0), match.end()

            elif ch in 'hf' and not prev_is_word:
                match = self._url_pattern.match(text, i)
                if match:
                    url = match.group(0)
                    if url.endswith('.'):
                        url = url[:-1]

                    if url.endswith(')'):
                        url = url[:-1]

                    span_type, span_text, span_end = VimdocSpanType.URL, url, i + len(url)

            if span_type is None:
                i += 1
                continue

            flush_text(i)
            spans.append(VimdocSpan(span_type, span_text, offset + i, offset + span_end))
            i = span_end
            text_start = span_end

        flush_text(text_len)
        return tuple(spans)
