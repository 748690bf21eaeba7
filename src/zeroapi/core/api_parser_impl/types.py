"""
Type parser mixin for go-zero API files.

Parses type declarations and type expressions.

API Syntax:

    type User {
        Id   int64  `json:"id"`      // primary key
        Name string `json:"name,optional"`
        Base                          // inline member
    }

    type (
        // Request for login
        LoginReq struct {
            Username string `json:"username"`
        }
        Gender = int
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType

# Tokens that can start a type expression
TYPE_START_TOKENS = (
    TokenType.IDENTIFIER,
    TokenType.LBRACKET,
    TokenType.STAR,
    TokenType.MAP,
    TokenType.INTERFACE,
)


class TypeParserMixin:
    """Parser mixin for type declarations."""

    if TYPE_CHECKING:
        expect: Any
        advance: Any
        match: Any
        collect_docs: Any
        trailing_comment: Any
        end_of_line: Any
        expect_identifier_or_keyword: Any
        current_token: Any
        error: Any
        describe: Any

    def parse_type_decls(self, docs: list[str]) -> list[ir.TypeDecl]:
        """
        Parse a type declaration or a type group.

        Grammar:
            TYPE type_body
            TYPE LPAREN (type_body)* RPAREN

        Args:
            docs: Comment lines above the ``type`` keyword

        Returns:
            Declarations in source order
        """
        self.expect(TokenType.TYPE)

        if not self.match(TokenType.LPAREN):
            return [self.parse_type_body(docs)]

        self.advance()
        decls: list[ir.TypeDecl] = []
        while True:
            inner_docs = self.collect_docs()
            if self.match(TokenType.RPAREN):
                self.advance()
                break
            if self.match(TokenType.EOF):
                raise self.error("Unterminated type group, expected ')'")
            decls.append(self.parse_type_body(inner_docs))
        return decls

    def parse_type_body(self, docs: list[str]) -> ir.TypeDecl:
        """
        Parse one declaration after ``type`` (or inside a type group).

        Grammar:
            IDENTIFIER STRUCT? LBRACE members RBRACE
            IDENTIFIER EQUALS? type_expr
        """
        name = self.expect_identifier_or_keyword().value

        if self.match(TokenType.STRUCT):
            self.advance()
            self.expect(TokenType.LBRACE)
            return ir.DefineStruct(raw_name=name, members=self.parse_members(), docs=docs)

        if self.match(TokenType.LBRACE):
            self.advance()
            return ir.DefineStruct(raw_name=name, members=self.parse_members(), docs=docs)

        if self.match(TokenType.EQUALS):
            self.advance()
        target = self.parse_type_expr()
        self.end_of_line()
        return ir.AliasType(raw_name=name, target=target, docs=docs)

    def parse_members(self) -> list[ir.Member]:
        """Parse struct members up to and including the closing brace."""
        members: list[ir.Member] = []
        while True:
            docs = self.collect_docs()
            if self.match(TokenType.RBRACE):
                self.advance()
                break
            if self.match(TokenType.EOF):
                raise self.error("Unterminated struct, expected '}'")
            members.append(self.parse_member(docs))
        return members

    def parse_member(self, docs: list[str]) -> ir.Member:
        """
        Parse one struct member.

        Grammar:
            IDENTIFIER type_expr RAW_STRING? COMMENT?
            STAR? IDENTIFIER (DOT IDENTIFIER)? RAW_STRING? COMMENT?   (inline)
        """
        line = self.current_token().line

        if self.match(TokenType.STAR):
            name = ""
            member_type = self.parse_type_expr()
            is_inline = True
        else:
            name_token = self.expect_identifier_or_keyword()
            if self.match(TokenType.DOT):
                # Inline member from another package: common.Base
                self.advance()
                qualified = f"{name_token.value}.{self.expect(TokenType.IDENTIFIER).value}"
                name = ""
                member_type = self.type_from_name(qualified)
                is_inline = True
            elif self.match(*TYPE_START_TOKENS):
                name = name_token.value
                member_type = self.parse_type_expr()
                is_inline = False
            else:
                name = ""
                member_type = self.type_from_name(name_token.value)
                is_inline = True

        tag = ""
        if self.match(TokenType.RAW_STRING):
            tag = self.advance().value

        comment = self.trailing_comment(line)
        self.end_of_line()

        return ir.Member(
            name=name,
            type=member_type,
            tag=tag,
            comment=comment,
            docs=docs,
            is_inline=is_inline,
        )

    def parse_type_expr(self) -> ir.TypeExpr:
        """
        Parse a type expression.

        Grammar:
            STAR type_expr
            LBRACKET NUMBER? RBRACKET type_expr
            MAP LBRACKET type_expr RBRACKET type_expr
            INTERFACE LBRACE RBRACE
            IDENTIFIER (DOT IDENTIFIER)?
        """
        token = self.current_token()

        if token.type == TokenType.STAR:
            self.advance()
            inner = self.parse_type_expr()
            return ir.PointerType(raw_name=f"*{inner.name}", type=inner)

        if token.type == TokenType.LBRACKET:
            self.advance()
            size = self.advance().value if self.match(TokenType.NUMBER) else ""
            self.expect(TokenType.RBRACKET)
            inner = self.parse_type_expr()
            return ir.ArrayType(raw_name=f"[{size}]{inner.name}", value=inner)

        if token.type == TokenType.MAP:
            self.advance()
            self.expect(TokenType.LBRACKET)
            key = self.parse_type_expr()
            self.expect(TokenType.RBRACKET)
            value = self.parse_type_expr()
            return ir.MapType(raw_name=f"map[{key.name}]{value.name}", key=key.name, value=value)

        if token.type == TokenType.INTERFACE:
            self.advance()
            self.expect(TokenType.LBRACE)
            self.expect(TokenType.RBRACE)
            return ir.InterfaceType()

        if token.type == TokenType.IDENTIFIER:
            name = self.advance().value
            if self.match(TokenType.DOT):
                self.advance()
                name = f"{name}.{self.expect(TokenType.IDENTIFIER).value}"
            return self.type_from_name(name)

        raise self.error(f"Expected type, got {self.describe(token)}")

    @staticmethod
    def type_from_name(name: str) -> ir.TypeExpr:
        """Classify a bare type name."""
        if name == "any":
            return ir.InterfaceType(raw_name="any")
        if name in ir.PRIMITIVE_TYPES:
            return ir.PrimitiveType(raw_name=name)
        return ir.NamedType(raw_name=name)
