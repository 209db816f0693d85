# code_canvas/parsers/__init__.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Language support for code_canvas.

Tree-sitter grammars, the shared parser session and per-language fact
extractors.
"""

from .base import BaseExtractor, ExtractedFacts
from .languages import (
    DEFAULT_LANGUAGE,
    EXTENSION_TO_LANGUAGE,
    LanguageId,
    detect_language,
    extensions_for,
)
from .python_extractor import PythonExtractor
from .registry import GrammarRegistry, extractor_for
from .rust_extractor import RustExtractor
from .session import ParserSession
from .typescript_extractor import TypeScriptExtractor


__all__ = [
    # Languages
    "LanguageId",
    "DEFAULT_LANGUAGE",
    "EXTENSION_TO_LANGUAGE",
    "detect_language",
    "extensions_for",
    # Grammars and parsing
    "GrammarRegistry",
    "ParserSession",
    # Extractors
    "BaseExtractor",
    "ExtractedFacts",
    "extractor_for",
    "TypeScriptExtractor",
    "PythonExtractor",
    "RustExtractor",
]
