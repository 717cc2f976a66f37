"""
Tokenizer for the typegen schema language.

Turns schema source text into a lazy stream of classified tokens. The
tokenizer holds no state besides its cursor, so any saved ``position`` can be
restored to replay the stream from that point.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Optional, Tuple

TYPE_KEYWORD = "type"


class TokenKind(Enum):
    """Token classes, valued with the description used in diagnostics."""

    BRACE_OPEN = "'{'"
    BRACE_CLOSE = "'}'"
    BRACKET_OPEN = "'['"
    BRACKET_CLOSE = "']'"
    PAREN_OPEN = "'('"
    PAREN_CLOSE = "')'"

    COLON = "':'"
    QUESTION_MARK = "'?'"

    COMMA = "','"
    NEWLINE = "newline"

    TYPE_IDENT = "type identifier"
    IDENT = "identifier"

    TYPE_KEYWORD = "'type' keyword"

    INVALID = "invalid character"
    EOF = "end of input"

    @property
    def description(self) -> str:
        return self.value

    @property
    def is_delim(self) -> bool:
        """Whether this kind separates fields."""
        return self in (TokenKind.COMMA, TokenKind.NEWLINE)


PUNCTUATION = {
    "[": TokenKind.BRACKET_OPEN,
    "]": TokenKind.BRACKET_CLOSE,
    "{": TokenKind.BRACE_OPEN,
    "}": TokenKind.BRACE_CLOSE,
    "(": TokenKind.PAREN_OPEN,
    ")": TokenKind.PAREN_CLOSE,
    "?": TokenKind.QUESTION_MARK,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
    "\n": TokenKind.NEWLINE,
}


@dataclass(frozen=True)
class Span:
    """Inclusive range of character offsets into the source."""

    start: int
    end: int

    @classmethod
    def from_range(cls, start: int, stop: int) -> "Span":
        """Build a span from a half-open ``[start, stop)`` range."""
        return cls(start, max(start, stop - 1))

    def __len__(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True)
class Token:
    """A classified slice of the source."""

    kind: TokenKind
    span: Span
    text: str

    def into_keyword(self) -> "Token":
        """
        Lift a contextual keyword into its keyword kind.

        ``type`` is only a keyword where a declaration starts, so it is lexed
        as a plain identifier and lifted here at the sites that expect it.

        Returns:
            A TYPE_KEYWORD token if this is the identifier ``type``,
            otherwise this token unchanged.
        """
        if self.kind is TokenKind.IDENT and self.text == TYPE_KEYWORD:
            return replace(self, kind=TokenKind.TYPE_KEYWORD)
        return self

    def describe(self) -> str:
        """Human-readable form for error messages."""
        if self.kind in (TokenKind.EOF, TokenKind.NEWLINE):
            return self.kind.description
        return f"{self.kind.description} {self.text!r}"


class Tokenizer:
    """Lazy tokenizer over schema source text."""

    def __init__(self, source: str, position: int = 0):
        self.source = source
        self.position = position

    def _scan(self) -> Tuple[TokenKind, int, int]:
        """Classify the token at the cursor without moving it.

        Returns:
            Tuple of (kind, start, stop) where ``[start, stop)`` is the
            matched slice of the source.
        """
        source = self.source
        length = len(source)
        start = self.position

        while start < length and source[start] != "\n" and source[start].isspace():
            start += 1

        if start >= length:
            return TokenKind.EOF, length, length

        char = source[start]
        if char in PUNCTUATION:
            return PUNCTUATION[char], start, start + 1

        if char.isalpha():
            stop = start + 1
            while stop < length and (source[stop].isalnum() or source[stop] == "_"):
                stop += 1
            kind = TokenKind.TYPE_IDENT if char.isupper() else TokenKind.IDENT
            return kind, start, stop

        return TokenKind.INVALID, start, start + 1

    def _make(self, kind: TokenKind, start: int, stop: int) -> Token:
        return Token(kind, Span.from_range(start, stop), self.source[start:stop])

    def peek(self) -> TokenKind:
        """Return the kind of the next token without consuming it."""
        return self._scan()[0]

    def peek_token(self) -> Token:
        """Return the next token without consuming it."""
        return self._make(*self._scan())

    def next(self) -> Token:
        """Consume and return the next token.

        EOF is returned repeatedly once the input is exhausted.
        """
        kind, start, stop = self._scan()
        self.position = stop
        return self._make(kind, start, stop)

    def next_skip_newline(self) -> Token:
        """Consume the next token, skipping any run of newlines first."""
        self.skip_newlines()
        return self.next()

    def skip_newlines(self) -> None:
        while self.peek() is TokenKind.NEWLINE:
            self.next()

    def try_next(self, expected: TokenKind) -> Optional[Token]:
        """Consume the next token only if it has the expected kind.

        Newlines are not skipped. The cursor is left untouched on a mismatch.
        """
        kind, start, stop = self._scan()
        if kind is not expected:
            return None
        self.position = stop
        return self._make(kind, start, stop)

    def location(self, offset: int) -> Tuple[int, int]:
        """Translate a source offset into a 1-based (line, column) pair."""
        offset = min(max(offset, 0), len(self.source))
        line = self.source.count("\n", 0, offset) + 1
        column = offset - (self.source.rfind("\n", 0, offset) + 1) + 1
        return line, column

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens from the cursor up to, but not including, EOF."""
        while True:
            token = self.next()
            if token.kind is TokenKind.EOF:
                return
            yield token


def tokenize(source: str) -> list[Token]:
    """Tokenize a whole source string, EOF excluded."""
    return list(Tokenizer(source))
