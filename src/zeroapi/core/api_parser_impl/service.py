"""
Service parser mixin for go-zero API files.

Parses service blocks, their ``@server`` annotations and routes.

API Syntax:

    @server (
        jwt: Auth
        group: user
        prefix: /v1
        middleware: Log, Trace
    )
    service user-api {
        @doc "Get a user"
        @handler getUser
        get /users/:id (GetUserReq) returns (GetUserResp)
    }
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType

HTTP_METHODS = frozenset(
    {"get", "head", "post", "put", "patch", "delete", "connect", "options", "trace"}
)


class ServiceParserMixin:
    """Parser mixin for service blocks."""

    if TYPE_CHECKING:
        expect: Any
        advance: Any
        match: Any
        skip_newlines: Any
        collect_docs: Any
        trailing_comment: Any
        end_of_line: Any
        expect_identifier_or_keyword: Any
        parse_property_block: Any
        parse_type_expr: Any
        current_token: Any
        error: Any
        describe: Any

    def parse_service_group(self) -> tuple[str, ir.RouteGroup]:
        """
        Parse an optional ``@server`` block and the service block below it.

        Grammar:
            (AT_SERVER property_block)? SERVICE IDENTIFIER LBRACE route* RBRACE

        Returns:
            Tuple of (service name, route group)
        """
        annotation = None
        if self.match(TokenType.AT_SERVER):
            self.advance()
            annotation = ir.Annotation(properties=self.parse_property_block())
            self.skip_newlines()

        self.expect(TokenType.SERVICE)
        name = self.expect_identifier_or_keyword().value
        self.expect(TokenType.LBRACE)

        routes: list[ir.Route] = []
        while True:
            docs = self.collect_docs()
            if self.match(TokenType.RBRACE):
                self.advance()
                break
            if self.match(TokenType.EOF):
                raise self.error(f"Unterminated service {name!r}, expected '}}'")
            routes.append(self.parse_route(docs))

        return name, ir.RouteGroup(annotation=annotation, routes=routes)

    def parse_route(self, docs: list[str]) -> ir.Route:
        """
        Parse route annotations and the route line.

        Grammar:
            (AT_DOC (STRING | property_block) | AT_SERVER property_block
             | AT_HANDLER IDENTIFIER)*
            METHOD PATH (LPAREN type_expr? RPAREN)?
            (RETURNS LPAREN type_expr? RPAREN)?
        """
        at_doc = ir.AtDoc()
        at_server: ir.Annotation | None = None
        handler = ""

        while self.match(TokenType.AT_DOC, TokenType.AT_SERVER, TokenType.AT_HANDLER):
            token = self.advance()
            if token.type == TokenType.AT_DOC:
                if self.match(TokenType.STRING):
                    at_doc = ir.AtDoc(text=self.advance().value)
                else:
                    at_doc = ir.AtDoc(properties=self.parse_property_block())
            elif token.type == TokenType.AT_SERVER:
                at_server = ir.Annotation(properties=self.parse_property_block())
            else:
                handler = self.expect_identifier_or_keyword().value
            self.skip_newlines()

        if not handler and at_server is not None:
            # Older files name the handler inside a route-level @server block
            handler = at_server.get("handler")

        method_token = self.expect_identifier_or_keyword()
        method = method_token.value.lower()
        if method not in HTTP_METHODS:
            raise self.error(f"Unknown HTTP method {method_token.value!r}", method_token)

        path = self.expect(TokenType.PATH).value

        request_type = None
        if self.match(TokenType.LPAREN):
            request_type = self.parse_body_type()

        response_type = None
        if self.match(TokenType.RETURNS):
            self.advance()
            response_type = self.parse_body_type()

        comment = self.trailing_comment(method_token.line)
        self.end_of_line()

        if not handler:
            raise self.error(f"Missing @handler for route {method} {path}", method_token)

        return ir.Route(
            handler=handler,
            method=method,
            path=path,
            request_type=request_type,
            response_type=response_type,
            at_doc=at_doc,
            docs=docs,
            comment=comment,
            at_server_annotation=at_server,
        )

    def parse_body_type(self) -> ir.TypeExpr | None:
        """Parse ``( Type )``; empty parentheses mean no body."""
        self.expect(TokenType.LPAREN)
        if self.match(TokenType.RPAREN):
            self.advance()
            return None
        body_type = self.parse_type_expr()
        self.expect(TokenType.RPAREN)
        return body_type
