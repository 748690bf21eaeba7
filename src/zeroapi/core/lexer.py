"""
Lexer/Tokenizer for go-zero API files.

Converts raw .api text into a stream of tokens with source location tracking.
Newlines are significant (members, annotation properties and routes are
line oriented), and comments are kept as tokens so the parser can attach
them as docs and trailing comments.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import ParseError, extract_snippet, make_parse_error


class TokenType(Enum):
    """Token types in the API language."""

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    RAW_STRING = "RAW_STRING"  # `json:"name"` style tags
    NUMBER = "NUMBER"  # 1024, 3s, 500ms
    PATH = "PATH"  # /users/:id
    COMMENT = "COMMENT"

    # Keywords
    SYNTAX = "syntax"
    INFO = "info"
    IMPORT = "import"
    TYPE = "type"
    SERVICE = "service"
    RETURNS = "returns"
    STRUCT = "struct"
    MAP = "map"
    INTERFACE = "interface"

    # Annotations
    AT_SERVER = "@server"
    AT_DOC = "@doc"
    AT_HANDLER = "@handler"

    # Punctuation
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    COLON = ":"
    COMMA = ","
    EQUALS = "="
    STAR = "*"
    DOT = "."

    # Structure
    NEWLINE = "NEWLINE"
    EOF = "EOF"


KEYWORDS = {
    "syntax",
    "info",
    "import",
    "type",
    "service",
    "returns",
    "struct",
    "map",
    "interface",
}

ANNOTATIONS = {
    "@server": TokenType.AT_SERVER,
    "@doc": TokenType.AT_DOC,
    "@handler": TokenType.AT_HANDLER,
}

PUNCTUATION = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
    "=": TokenType.EQUALS,
    "*": TokenType.STAR,
    ".": TokenType.DOT,
}


@dataclass
class Token:
    """
    A single token in an API file.

    Attributes:
        type: Type of token
        value: String value of the token (unquoted for strings)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        offset: Offset of the first character in the source text
        end: Offset just past the last character in the source text
    """

    type: TokenType
    value: str
    line: int
    column: int
    offset: int = 0
    end: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Lexer for go-zero API files.

    Converts source text into a stream of tokens.
    """

    def __init__(self, text: str, file: Path):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source file path (for error reporting)
        """
        self.text = text
        self.file = file
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def error(self, message: str, line: int, column: int) -> ParseError:
        return make_parse_error(
            message, self.file, line, column, snippet=extract_snippet(self.text, line)
        )

    def skip_whitespace(self) -> None:
        """Skip whitespace characters (newlines are tokens)."""
        while self.current_char() in (" ", "\t", "\r", "\f", "\ufeff"):
            self.advance()

    def after_scheme(self) -> bool:
        """Check for a URL scheme separator such as the ':' in http://host."""
        return self.pos > 0 and self.text[self.pos - 1] == ":"

    def read_line_comment(self) -> str:
        """Read a // comment up to (not including) the newline."""
        start = self.pos
        while self.current_char() is not None and self.current_char() != "\n":
            self.advance()
        return self.text[start : self.pos].rstrip("\r")

    def read_block_comment(self) -> str:
        """Read a /* ... */ comment."""
        start = self.pos
        start_line, start_col = self.line, self.column
        self.advance()
        self.advance()
        while True:
            current = self.current_char()
            if current is None:
                raise self.error("Unterminated block comment", start_line, start_col)
            if current == "*" and self.peek_char() == "/":
                self.advance()
                self.advance()
                break
            self.advance()
        return self.text[start : self.pos]

    def read_string(self) -> str:
        """Read a double-quoted string."""
        start_line = self.line
        start_col = self.column
        self.advance()  # skip opening quote

        chars = []
        while True:
            current = self.current_char()
            if current is None or current == '"' or current == "\n":
                break

            if current == "\\":
                self.advance()
                escape_char = self.current_char()
                if escape_char == "n":
                    chars.append("\n")
                elif escape_char == "t":
                    chars.append("\t")
                elif escape_char == "\\":
                    chars.append("\\")
                elif escape_char == '"':
                    chars.append('"')
                elif escape_char:
                    chars.append("\\" + escape_char)
                self.advance()
            else:
                chars.append(current)
                self.advance()

        if self.current_char() != '"':
            raise self.error("Unterminated string literal", start_line, start_col)

        self.advance()  # skip closing quote
        return "".join(chars)

    def read_raw_string(self) -> str:
        """Read a backtick string, keeping the backticks."""
        start = self.pos
        start_line = self.line
        start_col = self.column
        self.advance()
        while self.current_char() is not None and self.current_char() != "`":
            self.advance()

        if self.current_char() != "`":
            raise self.error("Unterminated raw string", start_line, start_col)

        self.advance()
        return self.text[start : self.pos]

    def read_while(self, predicate) -> str:
        start = self.pos
        current = self.current_char()
        while current is not None and predicate(current):
            self.advance()
            current = self.current_char()
        return self.text[start : self.pos]

    def read_path(self) -> str:
        """Read a route path or prefix such as /users/:id."""
        return self.read_while(lambda c: not c.isspace() and c not in "()")

    def read_number(self) -> str:
        """Read a number, optionally with a unit suffix (3s, 500ms) or dashes (2024-01-02)."""
        return self.read_while(lambda c: c.isalnum() or c in "._-")

    def read_identifier(self) -> str:
        """Read an identifier or keyword. Hyphens are allowed after the first char."""
        return self.read_while(lambda c: c.isalnum() or c in "_-")

    def add(self, token_type: TokenType, value: str, line: int, column: int, offset: int) -> None:
        self.tokens.append(Token(token_type, value, line, column, offset, self.pos))

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens ending with EOF

        Raises:
            ParseError: If an invalid character or literal is encountered
        """
        while self.pos < len(self.text):
            self.skip_whitespace()

            ch = self.current_char()
            if ch is None:
                break

            token_line = self.line
            token_col = self.column
            start = self.pos

            if ch == "\n":
                self.advance()
                self.add(TokenType.NEWLINE, "\\n", token_line, token_col, start)

            elif ch == "/" and self.peek_char() == "/" and not self.after_scheme():
                value = self.read_line_comment()
                self.add(TokenType.COMMENT, value, token_line, token_col, start)

            elif ch == "/" and self.peek_char() == "*":
                value = self.read_block_comment()
                self.add(TokenType.COMMENT, value, token_line, token_col, start)

            elif ch == "/":
                value = self.read_path()
                self.add(TokenType.PATH, value, token_line, token_col, start)

            elif ch == '"':
                value = self.read_string()
                self.add(TokenType.STRING, value, token_line, token_col, start)

            elif ch == "`":
                value = self.read_raw_string()
                self.add(TokenType.RAW_STRING, value, token_line, token_col, start)

            elif ch.isdigit():
                value = self.read_number()
                self.add(TokenType.NUMBER, value, token_line, token_col, start)

            elif ch.isalpha() or ch == "_":
                value = self.read_identifier()
                token_type = TokenType(value) if value in KEYWORDS else TokenType.IDENTIFIER
                self.add(token_type, value, token_line, token_col, start)

            elif ch == "@":
                self.advance()
                value = "@" + self.read_identifier()
                if value not in ANNOTATIONS:
                    raise self.error(f"Unknown annotation: {value}", token_line, token_col)
                self.add(ANNOTATIONS[value], value, token_line, token_col, start)

            elif ch in PUNCTUATION:
                self.advance()
                self.add(PUNCTUATION[ch], ch, token_line, token_col, start)

            else:
                raise self.error(f"Unexpected character: {ch!r}", token_line, token_col)

        self.tokens.append(Token(TokenType.EOF, "", self.line, self.column, self.pos, self.pos))
        return self.tokens


def tokenize(text: str, file: Path) -> list[Token]:
    """
    Convenience function to tokenize API text.

    Args:
        text: Source text
        file: Source file path

    Returns:
        List of tokens
    """
    lexer = Lexer(text, file)
    return lexer.tokenize()
