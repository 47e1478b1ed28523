"""
Apache httpd Configuration Parser
Parses httpd.conf text (directives, backslash continuations, comments and
<Block> tags) into a nested, immutable Document.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import List, Tuple, Type

from apacheconf.errors import (
    ParseError, MalformedDirective, MalformedBlockHeader,
    UnterminatedBlock, UnexpectedToken,
)
from apacheconf.models import Block, Directive, Document, Entry
from apacheconf.parsers.headers import decode_header


logger = logging.getLogger("apacheconf.parser")

IDENTIFIER = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')
OPEN_TAG = re.compile(r'<([A-Za-z_][A-Za-z0-9_]*)(.*)>[ \t]*$')
CLOSE_TAG = re.compile(r'</([A-Za-z_][A-Za-z0-9_]*)[ \t]*>[ \t]*$')
QUOTED = re.compile(r'"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\'')
BAREWORD = re.compile(r"[^ \t]+")
WHITESPACE = re.compile(r"[ \t]*")
BLANKS = " \t"


@dataclass
class LogicalLine:
    """One or more physical lines joined by trailing-backslash continuations."""
    text: str
    # (offset into text, physical line number, column of that offset)
    segments: List[Tuple[int, int, int]]

    @property
    def line(self) -> int:
        return self.segments[0][1]

    def locate(self, offset: int) -> Tuple[int, int]:
        """Map an offset in the joined text back to (line, column)."""
        start, line, column = self.segments[0]
        for segment in self.segments:
            if segment[0] > offset:
                break
            start, line, column = segment
        return line, column + (offset - start)


@dataclass
class _OpenBlock:
    kind: str
    attributes: dict
    line: int
    column: int
    entries: List[Entry] = field(default_factory=list)


class HttpdParser:
    """Parser for Apache httpd configuration files."""

    def parse(self, content: str) -> Document:
        """
        Parse httpd.conf text into a Document.

        Args:
            content: Full text of the configuration.

        Returns:
            Document with comments and blank lines dropped.

        Raises:
            ParseError: On the first position no grammar alternative matches.
        """
        root: List[Entry] = []
        block_stack: List[_OpenBlock] = []   # Track nested <VirtualHost>, <Directory>, etc.

        for line in self._logical_lines(content):
            text = line.text
            if text.startswith('</'):
                self._close_tag(line, block_stack, root)
            elif text.startswith('<'):
                self._open_tag(line, block_stack, root)
            else:
                entries = block_stack[-1].entries if block_stack else root
                entries.append(self._directive(line))

        if block_stack:
            unclosed = block_stack[-1]
            raise UnterminatedBlock(
                f"<{unclosed.kind}> is never closed",
                unclosed.line, unclosed.column
            )

        logger.debug(f"Parsed {len(root)} top-level entries")
        return Document(entries=tuple(root))

    def _logical_lines(self, content: str):
        pieces: List[str] = []
        segments: List[Tuple[int, int, int]] = []
        length = 0

        for number, raw in enumerate(content.split('\n'), start=1):
            raw = raw.rstrip('\r')

            if pieces:
                # Continuation: keep leading blanks, they only separate tokens
                body, column = raw, 1
            else:
                body = raw.lstrip(BLANKS)
                # Skip empty lines and comments
                if not body or body.startswith('#'):
                    continue
                column = len(raw) - len(body) + 1

            body = body.rstrip(BLANKS)
            continued = body.endswith('\\')
            if continued:
                body = body[:-1]

            segments.append((length, number, column))
            pieces.append(body)
            length += len(body)

            if continued:
                pieces.append(' ')
                length += 1
                continue

            yield LogicalLine(''.join(pieces), segments)
            pieces, segments, length = [], [], 0

        if pieces:
            # Continuation on the last line ends at end of input
            yield LogicalLine(''.join(pieces), segments)

    def _tokenize(
        self,
        line: LogicalLine,
        start: int,
        end: int,
        error_cls: Type[ParseError]
    ) -> List[str]:
        """Split text[start:end] into quoted-string and bareword arguments."""
        text = line.text
        tokens = []
        pos = start

        while True:
            pos = WHITESPACE.match(text, pos, end).end()
            if pos >= end:
                return tokens

            if text[pos] in '"\'':
                match = QUOTED.match(text, pos, end)
                if not match:
                    raise error_cls("Unterminated quoted string", *line.locate(pos))
                if match.end() < end and text[match.end()] not in BLANKS:
                    raise error_cls(
                        "Expected whitespace after quoted argument",
                        *line.locate(match.end())
                    )
            else:
                match = BAREWORD.match(text, pos, end)

            tokens.append(match.group())
            pos = match.end()

    def _directive(self, line: LogicalLine) -> Directive:
        text = line.text
        match = IDENTIFIER.match(text)
        if not match:
            raise UnexpectedToken(f"Unexpected character {text[0]!r}", *line.locate(0))

        name = match.group()
        end = match.end()
        if end < len(text) and text[end] not in BLANKS:
            raise UnexpectedToken(
                f"Unexpected character {text[end]!r} after directive name '{name}'",
                *line.locate(end)
            )

        arguments = self._tokenize(line, end, len(text), MalformedDirective)
        if not arguments:
            raise MalformedDirective(f"Directive '{name}' has no arguments", *line.locate(0))

        return Directive(name=name, arguments=tuple(arguments))

    def _open_tag(self, line: LogicalLine, block_stack: List[_OpenBlock], root: List[Entry]):
        text = line.text
        match = OPEN_TAG.match(text)
        if not match:
            kind_match = IDENTIFIER.match(text, 1)
            if not kind_match:
                raise UnexpectedToken("Expected a block name after '<'", *line.locate(1))
            if '>' in text:
                raise UnexpectedToken(
                    f"Unexpected text after <{kind_match.group()}> tag",
                    *line.locate(text.rindex('>') + 1)
                )
            raise UnexpectedToken(
                f"Opening tag <{kind_match.group()}> is missing its closing '>'",
                *line.locate(len(text))
            )

        kind = match.group(1)
        header_start, header_end = match.span(2)
        if header_start < header_end and text[header_start] not in BLANKS:
            raise UnexpectedToken(
                f"Unexpected character {text[header_start]!r} after block name '{kind}'",
                *line.locate(header_start)
            )

        # A tag occupies the rest of its line, so '</' cannot appear in a header
        nested_close = text.find('</', header_start, header_end)
        if nested_close >= 0:
            raise UnexpectedToken(
                f"Closing tag after <{kind}> must start on its own line",
                *line.locate(nested_close)
            )

        tokens = self._tokenize(line, header_start, header_end, MalformedBlockHeader)

        # Lenient close: a bare <Kind> inside an open <Kind> ends that block
        if not tokens and block_stack and block_stack[-1].kind == kind:
            logger.debug(f"Accepting <{kind}> at line {line.line} as a closing tag")
            self._pop_block(block_stack, root)
            return

        try:
            attributes = decode_header(kind, tokens)
        except MalformedBlockHeader as e:
            e.line, e.column = line.locate(header_start)
            raise

        line_number, column = line.locate(0)
        block_stack.append(_OpenBlock(kind, attributes, line_number, column))

    def _close_tag(self, line: LogicalLine, block_stack: List[_OpenBlock], root: List[Entry]):
        match = CLOSE_TAG.match(line.text)
        if not match:
            raise UnexpectedToken("Malformed closing tag", *line.locate(0))

        kind = match.group(1)
        if not block_stack:
            raise UnexpectedToken(
                f"Closing tag </{kind}> has no matching opening tag", *line.locate(0)
            )
        if block_stack[-1].kind != kind:
            raise UnexpectedToken(
                f"Closing tag </{kind}> does not match <{block_stack[-1].kind}>",
                *line.locate(0)
            )

        self._pop_block(block_stack, root)

    def _pop_block(self, block_stack: List[_OpenBlock], root: List[Entry]):
        frame = block_stack.pop()
        block = Block(kind=frame.kind, attributes=frame.attributes, entries=tuple(frame.entries))
        parent = block_stack[-1].entries if block_stack else root
        parent.append(block)


_default_parser = HttpdParser()


def parse(content: str) -> Document:
    """Parse httpd.conf text with a shared, stateless parser."""
    return _default_parser.parse(content)
