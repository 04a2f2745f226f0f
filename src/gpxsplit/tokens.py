"""Forward-only XML token stream over a GPX byte buffer.

The tokenizer is a thin layer over ``xml.etree.ElementTree.XMLPullParser``.
It turns pull-parser events into the flat token sequence the trackpoint
extractor walks: an opening tag, its attribute key/value pairs in source
order, and the text content of leaf elements when they close.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


class TokenKind(Enum):
    TAG_OPEN = "tag_open"
    ATTR_KEY = "attr_key"
    ATTR_VALUE = "attr_value"
    CONTENT = "content"
    INVALID = "invalid"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str = ""

    @property
    def is_end(self) -> bool:
        return self.kind in (TokenKind.INVALID, TokenKind.EOF)


EOF_TOKEN = Token(TokenKind.EOF)


def _local_name(name: str) -> str:
    return name.rpartition("}")[2]


def _element_tokens(
    event: str, elem: ET.Element, open_elements: list[ET.Element]
) -> Iterator[Token]:
    if event == "start":
        open_elements.append(elem)
        yield Token(TokenKind.TAG_OPEN, _local_name(elem.tag))
        for key, value in elem.attrib.items():
            yield Token(TokenKind.ATTR_KEY, _local_name(key))
            # Values keep their quotes, as they appear in the source.
            yield Token(TokenKind.ATTR_VALUE, f'"{value}"')
        return

    open_elements.pop()
    if len(elem) == 0 and elem.text:
        yield Token(TokenKind.CONTENT, elem.text)
    elem.clear()
    # Detach from the parent so finished elements do not pile up in the tree.
    if open_elements:
        open_elements[-1].remove(elem)


def tokenize(
    buffer: bytes | bytearray | memoryview, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Iterator[Token]:
    """
    Lazily tokenizes an XML document held in a caller-owned buffer.
    The buffer is fed to the parser chunk by chunk and tokens are yielded as soon
    as the parser produces them.
    Args:
        buffer: The XML document bytes.
        chunk_size: Number of bytes fed to the parser per step.
    Returns:
        Iterator of Tokens ending with a single EOF, or INVALID on a parse error.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be greater than 0.")

    view = memoryview(buffer)
    parser = ET.XMLPullParser(events=("start", "end"))
    open_elements: list[ET.Element] = []
    try:
        for offset in range(0, len(view), chunk_size):
            parser.feed(bytes(view[offset : offset + chunk_size]))
            for event, elem in parser.read_events():
                yield from _element_tokens(event, elem, open_elements)
        parser.close()
        for event, elem in parser.read_events():
            yield from _element_tokens(event, elem, open_elements)
    except ET.ParseError as exc:
        logger.debug("XML parse error: %s", exc)
        yield Token(TokenKind.INVALID, str(exc))
        return

    yield EOF_TOKEN


class TokenStream:
    """Cursor over a token sequence that keeps returning EOF once it ends."""

    def __init__(self, tokens: Iterable[Token]):
        self._tokens = iter(tokens)
        self._done = False

    @classmethod
    def from_buffer(
        cls,
        buffer: bytes | bytearray | memoryview,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> "TokenStream":
        return cls(tokenize(buffer, chunk_size))

    def next(self) -> Token:
        if self._done:
            return EOF_TOKEN
        token = next(self._tokens, None)
        if token is None:
            self._done = True
            return EOF_TOKEN
        if token.is_end:
            self._done = True
        return token


def read_gpx(path: Path) -> bytes:
    with path.open("rb") as handle:
        return handle.read()
