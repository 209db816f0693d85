# code_canvas/parsers/session.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Parser session owning the single reusable tree-sitter parser.

The parser is created once by initialize() and reconfigured with the right
grammar before every parse. Every parse is a fresh, full parse.
"""

import logging
from typing import Optional, Union

from tree_sitter import Parser, Tree

from ..errors import InitError, NotInitialized, ParseError
from .languages import LanguageId
from .registry import GrammarRegistry

logger = logging.getLogger(__name__)


class ParserSession:
    """One tree-sitter parser shared by all parses of an analysis session."""

    def __init__(self, registry: Optional[GrammarRegistry] = None):
        """Initialize the session without bootstrapping the parser.

        Args:
            registry: Grammar registry to configure the parser from.
        """
        self.registry = registry or GrammarRegistry()
        self.parser: Optional[Parser] = None

    @property
    def is_initialized(self) -> bool:
        return self.parser is not None

    def initialize(self) -> "ParserSession":
        """Bootstrap the parse engine. Safe to call more than once.

        Returns:
            This session, ready to parse.

        Raises:
            InitError: If the tree-sitter parser cannot be created.
        """
        if self.parser is not None:
            return self

        try:
            self.parser = Parser()
        except Exception as e:
            raise InitError(f"Failed to create tree-sitter parser: {e}") from e

        logger.debug("Parser session initialized")
        return self

    def parse(
        self,
        content: str,
        language: Union[str, LanguageId],
        filename: Optional[str] = None,
    ) -> Tree:
        """Parse source text with the grammar for language.

        Malformed source still produces a tree (with ERROR nodes); only a
        failure of the engine itself raises ParseError.

        Args:
            content: Source code as string.
            language: Language whose grammar to use.
            filename: Name used in error messages.

        Returns:
            tree_sitter.Tree for the content.

        Raises:
            NotInitialized: If initialize() has not completed.
            UnsupportedLanguage: If no grammar exists for language.
            ParseError: If the engine produced no tree.
        """
        if self.parser is None:
            raise NotInitialized()

        grammar = self.registry.load_grammar(language)
        self.parser.language = grammar

        name = filename or str(language)
        try:
            tree = self.parser.parse(content.encode("utf-8"))
        except Exception as e:
            raise ParseError(name, str(e)) from e

        if tree is None:
            raise ParseError(name, "parser returned no tree")
        return tree
