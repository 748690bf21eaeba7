"""
Base parser class for go-zero API files.

Provides common token manipulation and utility methods used by all parser mixins.
"""

from pathlib import Path

from ..errors import ParseError, extract_snippet, make_parse_error
from ..lexer import KEYWORDS, Token, TokenType

# Keywords that may still be used where a name is expected
KEYWORD_AS_IDENTIFIER_TYPES = {TokenType(keyword) for keyword in KEYWORDS}

# Tokens that end a key/value property line
PROPERTY_TERMINATORS = (TokenType.NEWLINE, TokenType.COMMENT, TokenType.RPAREN, TokenType.EOF)


class BaseParser:
    """
    Base parser class with token manipulation utilities.

    This class provides the foundation for recursive descent parsing,
    including token navigation, matching, and error generation.
    """

    def __init__(self, tokens: list[Token], file: Path, text: str = ""):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer
            file: Source file path (for error reporting)
            text: Source text (for raw property values and snippets)
        """
        self.tokens = tokens
        self.file = file
        self.text = text
        self.pos = 0

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[self.pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current_token().type in token_types

    def error(self, message: str, token: Token | None = None) -> ParseError:
        """Build a ParseError located at ``token`` (default: current token)."""
        token = token or self.current_token()
        snippet = extract_snippet(self.text, token.line) if self.text else None
        return make_parse_error(message, self.file, token.line, token.column, snippet)

    @staticmethod
    def describe(token: Token) -> str:
        if token.type in (TokenType.NEWLINE, TokenType.EOF):
            return token.type.value
        return repr(token.value)

    def expect(self, token_type: TokenType) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            ParseError: If token doesn't match
        """
        token = self.current_token()
        if token.type != token_type:
            raise self.error(f"Expected {token_type.value}, got {self.describe(token)}")
        return self.advance()

    def expect_identifier_or_keyword(self) -> Token:
        """
        Expect an identifier or accept a keyword as an identifier.

        Handler names, property keys and member names may collide with
        keywords (``info``, ``type``, ``map``).
        """
        token = self.current_token()
        if token.type == TokenType.IDENTIFIER or token.type in KEYWORD_AS_IDENTIFIER_TYPES:
            return self.advance()
        raise self.error(f"Expected identifier, got {self.describe(token)}")

    def skip_newlines(self) -> None:
        """Skip newlines and comments that carry no attached meaning."""
        while self.match(TokenType.NEWLINE, TokenType.COMMENT):
            self.advance()

    def collect_docs(self) -> list[str]:
        """
        Skip blank lines and return the comment group directly above the
        next token. A blank line ends a group.
        """
        docs: list[str] = []
        newline_run = 0
        while self.match(TokenType.NEWLINE, TokenType.COMMENT):
            token = self.advance()
            if token.type == TokenType.COMMENT:
                docs.append(token.value)
                newline_run = 0
            else:
                newline_run += 1
                if newline_run > 1:
                    docs = []
        return docs

    def trailing_comment(self, line: int) -> str:
        """Consume and return a comment that sits on ``line``, if any."""
        token = self.current_token()
        if token.type == TokenType.COMMENT and token.line == line:
            self.advance()
            return token.value
        return ""

    def end_of_line(self) -> None:
        """Consume a newline; closing brackets and EOF also end a line."""
        if self.match(TokenType.NEWLINE):
            self.advance()
            return
        if self.match(TokenType.RBRACE, TokenType.RPAREN, TokenType.EOF):
            return
        raise self.error(f"Expected end of line, got {self.describe(self.current_token())}")

    def parse_property_value(self) -> str:
        """
        Read the rest of a ``key: value`` line.

        A lone string literal yields its unquoted value; anything else
        yields the source text as written (``A, B``, ``/v1``, ``3s``).
        """
        value_tokens: list[Token] = []
        while not self.match(*PROPERTY_TERMINATORS):
            value_tokens.append(self.advance())

        if not value_tokens:
            return ""
        if len(value_tokens) == 1 and value_tokens[0].type == TokenType.STRING:
            return value_tokens[0].value
        if self.text:
            return self.text[value_tokens[0].offset : value_tokens[-1].end].strip()
        return " ".join(t.value for t in value_tokens)

    def parse_property_block(self) -> dict[str, str]:
        """
        Parse ``( key: value ... )``.

        Grammar:
            LPAREN (IDENTIFIER COLON value NEWLINE)* RPAREN

        Returns:
            Properties in declaration order
        """
        self.expect(TokenType.LPAREN)
        properties: dict[str, str] = {}

        while True:
            self.skip_newlines()
            if self.match(TokenType.RPAREN):
                self.advance()
                break
            if self.match(TokenType.EOF):
                raise self.error("Unterminated property block, expected ')'")

            key = self.expect_identifier_or_keyword().value
            self.expect(TokenType.COLON)
            properties[key] = self.parse_property_value()

        return properties
