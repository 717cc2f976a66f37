"""
Recursive-descent parser for the typegen schema language.

Grammar::

    declaration := 'type' TypeIdent '{' field* '}'
    field       := Ident ':' type_item delim*
    type_item   := ( '{' type_item ':' type_item '}'
                   | '[' type_item ']'
                   | TypeIdent ) '?'*
    delim       := ',' | Newline

There is no error recovery: the first mismatch raises and the whole input is
rejected.
"""

from typing import Optional

from .codegen.core.schema import (
    ArrayItem,
    BasicItem,
    DictItem,
    Field,
    OptionalItem,
    Type,
    TypeItem,
)
from .logging_config import get_logger
from .tokenizer import Token, TokenKind, Tokenizer

logger = get_logger(__name__)


class ParseError(Exception):
    """Raised when the source is not a well-formed schema."""

    def __init__(
        self,
        expected: str,
        token: Token,
        line: int,
        column: int,
        message: Optional[str] = None,
    ):
        self.expected = expected
        self.token = token
        self.line = line
        self.column = column
        detail = message or f"expected {expected}, found {token.describe()}"
        self.message = detail
        super().__init__(f"line {line}, column {column}: {detail}")


class SchemaSyntaxError(ParseError):
    """Wrong token for the current grammar position."""

    pass


class LexError(ParseError):
    """An unclassifiable character was found where a token was required."""

    pass


class Parser:
    """Parses schema source into a list of ``Type`` declarations."""

    def __init__(self, source: str):
        self.lexer = Tokenizer(source)

    def parse(self) -> list[Type]:
        """Parse every declaration in the source.

        Returns:
            Declarations in source order. Empty input yields an empty list.

        Raises:
            ParseError: On the first malformed declaration.
        """
        types = []
        while True:
            self.lexer.skip_newlines()
            if self.lexer.peek() is TokenKind.EOF:
                break
            types.append(self.parse_declaration())

        logger.info("Parsed %d declaration(s)", len(types))
        return types

    def parse_declaration(self) -> Type:
        """Parse a single ``type Name { ... }`` declaration."""
        self.expect(TokenKind.TYPE_KEYWORD)
        ident = self.expect(TokenKind.TYPE_IDENT)
        self.expect(TokenKind.BRACE_OPEN)

        fields = []
        while True:
            self.lexer.skip_newlines()
            kind = self.lexer.peek()
            if kind is TokenKind.BRACE_CLOSE:
                self.lexer.next()
                break
            if kind is TokenKind.EOF:
                self._fail(
                    "'}'",
                    self.lexer.peek_token(),
                    f"missing closing brace for type {ident.text!r}",
                )
            fields.append(self.parse_field())

        logger.debug("Parsed type %s with %d field(s)", ident.text, len(fields))
        return Type(name=ident.text, fields=tuple(fields))

    def parse_field(self) -> Field:
        ident = self.expect(TokenKind.IDENT)
        self.expect(TokenKind.COLON)
        item = self.parse_type_item()

        while self.lexer.peek().is_delim:
            self.lexer.next()

        return Field(name=ident.text, type=item)

    def parse_type_item(self) -> TypeItem:
        """Parse a type expression including any trailing ``?`` suffixes."""
        self.lexer.skip_newlines()
        kind = self.lexer.peek()

        item: TypeItem
        if kind is TokenKind.BRACE_OPEN:
            self.lexer.next()
            key = self.parse_type_item()
            self.expect(TokenKind.COLON)
            value = self.parse_type_item()
            self.expect(TokenKind.BRACE_CLOSE)
            item = DictItem(key=key, value=value)
        elif kind is TokenKind.BRACKET_OPEN:
            self.lexer.next()
            element = self.parse_type_item()
            self.expect(TokenKind.BRACKET_CLOSE)
            item = ArrayItem(element=element)
        elif kind is TokenKind.TYPE_IDENT:
            item = BasicItem(name=self.lexer.next().text)
        elif kind is TokenKind.PAREN_OPEN:
            self._fail(
                "type item", self.lexer.peek_token(), "tuple types are not supported"
            )
        else:
            self._fail("type item", self.lexer.peek_token())

        while self.lexer.try_next(TokenKind.QUESTION_MARK) is not None:
            item = OptionalItem(inner=item)

        return item

    def expect(self, kind: TokenKind) -> Token:
        """Consume the next non-newline token, which must be of ``kind``.

        Contextual keywords are lifted before comparing, so an identifier
        ``type`` satisfies an expected TYPE_KEYWORD.
        """
        token = self.lexer.next_skip_newline()
        if token.kind is not kind:
            token = token.into_keyword()
        if token.kind is not kind:
            self._fail(kind.description, token)
        return token

    def _fail(self, expected: str, token: Token, message: Optional[str] = None):
        line, column = self.lexer.location(token.span.start)
        error_class = LexError if token.kind is TokenKind.INVALID else SchemaSyntaxError
        error = error_class(expected, token, line, column, message)
        logger.error("Parse failed: %s", error)
        raise error


def parse(source: str) -> list[Type]:
    """Parse schema source text into declarations."""
    return Parser(source).parse()
