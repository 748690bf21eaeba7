"""
go-zero API Parser Package.

This package provides a modular parser for go-zero ``.api`` files.
The parser is built using mixins to separate parsing logic by construct type.

The main exports are:
- Parser: The complete parser class
- parse_api: Convenience function to parse API source text

Usage:
    from zeroapi.core.api_parser_impl import parse_api

    document = parse_api(text, file)
"""

import logging
from pathlib import Path

from .. import ir
from ..lexer import TokenType, tokenize
from .base import BaseParser
from .info import InfoParserMixin
from .service import ServiceParserMixin
from .types import TypeParserMixin

logger = logging.getLogger(__name__)


class Parser(
    BaseParser,
    InfoParserMixin,
    TypeParserMixin,
    ServiceParserMixin,
):
    """
    Complete go-zero API parser.

    This class composes all parser mixins:

    - InfoParserMixin: syntax, info and import declarations
    - TypeParserMixin: type declarations and type expressions
    - ServiceParserMixin: service blocks, annotations and routes
    """

    def parse(self) -> ir.Document:
        """
        Parse the whole token stream into a Document.

        Returns:
            Document with every top-level declaration in source order

        Raises:
            ParseError: On the first syntax error
        """
        syntax = ir.SyntaxDecl()
        info = ir.InfoBlock()
        imports: list[ir.ImportDecl] = []
        types: list[ir.TypeDecl] = []
        service_name = ""
        groups: list[ir.RouteGroup] = []

        while True:
            docs = self.collect_docs()
            token = self.current_token()

            if token.type == TokenType.EOF:
                break
            elif token.type == TokenType.SYNTAX:
                syntax = self.parse_syntax()
            elif token.type == TokenType.INFO:
                info = self.parse_info()
            elif token.type == TokenType.IMPORT:
                imports.extend(self.parse_imports())
            elif token.type == TokenType.TYPE:
                types.extend(self.parse_type_decls(docs))
            elif token.type in (TokenType.AT_SERVER, TokenType.SERVICE):
                name, group = self.parse_service_group()
                if not service_name:
                    service_name = name
                elif name != service_name:
                    logger.warning(
                        "%s: service %r differs from %r, routes are merged into %r",
                        self.file,
                        name,
                        service_name,
                        service_name,
                    )
                groups.append(group)
            else:
                raise self.error(f"Unexpected {self.describe(token)} at top level")

        return ir.Document(
            syntax=syntax,
            info=info,
            imports=imports,
            types=types,
            service=ir.ServiceDecl(name=service_name, groups=groups),
            source=self.file,
        )


def parse_api(text: str, file: Path) -> ir.Document:
    """
    Parse complete API source text.

    Args:
        text: API source text
        file: Source file path

    Returns:
        Parsed Document
    """
    tokens = tokenize(text, file)
    parser = Parser(tokens, file, text)
    document = parser.parse()
    logger.debug(
        "Parsed %s: %d imports, %d types, %d route groups",
        file,
        len(document.imports),
        len(document.types),
        len(document.service.groups),
    )
    return document


__all__ = [
    "Parser",
    "parse_api",
    "BaseParser",
    "InfoParserMixin",
    "TypeParserMixin",
    "ServiceParserMixin",
]
