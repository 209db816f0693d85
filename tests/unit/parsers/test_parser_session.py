# tests/unit/parsers/test_parser_session.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Tests for ParserSession - the single reusable parser."""

import pytest

from code_canvas.errors import NotInitialized, UnsupportedLanguage
from code_canvas.parsers.registry import GrammarRegistry
from code_canvas.parsers.session import ParserSession


@pytest.fixture
def session() -> ParserSession:
    return ParserSession().initialize()


class TestParserSessionLifecycle:
    """Tests for initialization."""

    def test_parse_before_initialize_raises(self):
        session = ParserSession()

        assert not session.is_initialized
        with pytest.raises(NotInitialized, match="Parser not initialized"):
            session.parse("const a = 1;", "javascript")

    def test_initialize_is_idempotent(self):
        session = ParserSession()
        parser = session.initialize().parser

        assert session.is_initialized
        assert session.initialize().parser is parser

    def test_uses_given_registry(self):
        registry = GrammarRegistry()
        session = ParserSession(registry).initialize()
        session.parse("x = 1\n", "python")

        assert registry.is_loaded("python")


class TestParserSessionParse:
    """Tests for parsing with per-language grammars."""

    @pytest.mark.parametrize(
        "language,content,root_type",
        [
            ("javascript", "const a = 1;", "program"),
            ("typescript", "let a: number = 1;", "program"),
            ("tsx", "const el = <div />;", "program"),
            ("python", "a = 1\n", "module"),
            ("rust", "fn main() {}", "source_file"),
        ],
    )
    def test_root_node_per_language(self, session, language, content, root_type):
        tree = session.parse(content, language)
        assert tree.root_node.type == root_type

    def test_switching_languages_reuses_parser(self, session):
        parser = session.parser
        session.parse("a = 1\n", "python")
        tree = session.parse("fn main() {}", "rust")

        assert session.parser is parser
        assert tree.root_node.type == "source_file"

    def test_malformed_source_still_parses(self, session):
        """Invalid syntax degrades to a tree with error nodes."""
        tree = session.parse("function (", "javascript")

        assert tree.root_node.has_error

    def test_unknown_language_raises(self, session):
        with pytest.raises(UnsupportedLanguage):
            session.parse("PROCEDURE DIVISION.", "cobol")
