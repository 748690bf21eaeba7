"""
Header parser mixin for go-zero API files.

Parses the syntax declaration, the info block and imports.

API Syntax:

    syntax = "v1"

    info (
        title: "User API"
        author: "dev"
    )

    import "common.api"
    import (
        "user.api"
        "order.api"
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType

# Info keys that also populate the single-valued InfoBlock fields
LEGACY_INFO_KEYS = ("title", "desc", "author", "version", "email")


class InfoParserMixin:
    """Parser mixin for syntax, info and import declarations."""

    if TYPE_CHECKING:
        expect: Any
        advance: Any
        match: Any
        skip_newlines: Any
        end_of_line: Any
        trailing_comment: Any
        parse_property_block: Any
        error: Any
        current_token: Any

    def parse_syntax(self) -> ir.SyntaxDecl:
        """
        Parse a syntax declaration.

        Grammar:
            SYNTAX EQUALS STRING
        """
        start = self.expect(TokenType.SYNTAX)
        self.expect(TokenType.EQUALS)
        version = self.expect(TokenType.STRING).value
        self.trailing_comment(start.line)
        self.end_of_line()
        return ir.SyntaxDecl(version=version)

    def parse_info(self) -> ir.InfoBlock:
        """
        Parse an info block.

        Grammar:
            INFO LPAREN (IDENTIFIER COLON value NEWLINE)* RPAREN

        Returns:
            InfoBlock with both the property map and the single-valued fields
        """
        self.expect(TokenType.INFO)
        properties = self.parse_property_block()
        legacy = {key: properties.get(key, "") for key in LEGACY_INFO_KEYS}
        return ir.InfoBlock(properties=properties, **legacy)

    def parse_imports(self) -> list[ir.ImportDecl]:
        """
        Parse a single import or an import group.

        Grammar:
            IMPORT STRING
            IMPORT LPAREN (STRING NEWLINE)* RPAREN
        """
        self.expect(TokenType.IMPORT)

        if not self.match(TokenType.LPAREN):
            imports = [ir.ImportDecl(value=self.expect(TokenType.STRING).value)]
            self.end_of_line()
            return imports

        self.advance()
        imports = []
        while True:
            self.skip_newlines()
            if self.match(TokenType.RPAREN):
                self.advance()
                break
            if self.match(TokenType.EOF):
                raise self.error("Unterminated import group, expected ')'")
            imports.append(ir.ImportDecl(value=self.expect(TokenType.STRING).value))
        return imports
