# code_canvas/parsers/registry.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Grammar registry and extractor lookup for code_canvas language support."""

import importlib
import logging
import threading
from typing import Callable, Optional, Union

from tree_sitter import Language

from ..errors import UnsupportedLanguage
from .base import BaseExtractor
from .languages import LanguageId
from .python_extractor import PythonExtractor
from .rust_extractor import RustExtractor
from .typescript_extractor import TypeScriptExtractor

logger = logging.getLogger(__name__)


# language -> (grammar module, function returning the language pointer)
GRAMMAR_MODULES: dict[LanguageId, tuple[str, str]] = {
    LanguageId.JAVASCRIPT: ("tree_sitter_javascript", "language"),
    LanguageId.TYPESCRIPT: ("tree_sitter_typescript", "language_typescript"),
    LanguageId.TSX: ("tree_sitter_typescript", "language_tsx"),
    LanguageId.PYTHON: ("tree_sitter_python", "language"),
    LanguageId.RUST: ("tree_sitter_rust", "language"),
}

_EXTRACTORS: dict[LanguageId, BaseExtractor] = {}
for _extractor in (TypeScriptExtractor(), PythonExtractor(), RustExtractor()):
    for _lang in _extractor.languages:
        _EXTRACTORS[_lang] = _extractor


def load_grammar_module(language: LanguageId) -> Language:
    """Import the grammar package for a language and wrap it.

    Args:
        language: Language to load.

    Returns:
        tree_sitter.Language for the grammar.

    Raises:
        UnsupportedLanguage: If no grammar module is registered or it
            cannot be imported.
    """
    entry = GRAMMAR_MODULES.get(language)
    if entry is None:
        raise UnsupportedLanguage(language.value, "no grammar module registered")

    module_name, factory_name = entry
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise UnsupportedLanguage(language.value, f"{module_name} not installed") from e

    factory = getattr(module, factory_name, None)
    if factory is None:
        raise UnsupportedLanguage(
            language.value, f"{module_name} has no {factory_name}()"
        )
    return Language(factory())


def extractor_for(language: Union[str, LanguageId]) -> BaseExtractor:
    """Get the fact extractor for a language.

    Raises:
        UnsupportedLanguage: If no extractor handles the language.
    """
    try:
        lang_id = LanguageId(language)
    except ValueError:
        raise UnsupportedLanguage(str(language), "no extractor registered") from None
    extractor = _EXTRACTORS.get(lang_id)
    if extractor is None:
        raise UnsupportedLanguage(lang_id.value, "no extractor registered")
    return extractor


class GrammarRegistry:
    """Loads and caches one tree-sitter grammar per language.

    Grammars are loaded on first request and kept for the registry's
    lifetime; there is no eviction. Each language has its own load lock, so
    concurrent requests for the same uncached language wait for a single
    load instead of triggering duplicates.

    A registry belongs to one analysis session (one CodeAnalyzer); it is not
    a process-wide singleton.
    """

    def __init__(self, loader: Optional[Callable[[LanguageId], Language]] = None):
        """Initialize an empty registry.

        Args:
            loader: Function loading a grammar for a language. Defaults to
                    importing the grammar package (load_grammar_module).
        """
        self._loader = loader or load_grammar_module
        self._grammars: dict[LanguageId, Language] = {}
        self._load_locks: dict[LanguageId, threading.Lock] = {}
        self._lock = threading.Lock()

    def load_grammar(self, language: Union[str, LanguageId]) -> Language:
        """Get the grammar for a language, loading it on first use.

        Args:
            language: Language name or LanguageId. Unlike detect_language,
                      unknown names do not fall back to a default.

        Returns:
            Cached tree_sitter.Language.

        Raises:
            UnsupportedLanguage: If no grammar exists for the language.
        """
        try:
            lang_id = LanguageId(language)
        except ValueError:
            raise UnsupportedLanguage(str(language), "unknown language") from None

        grammar = self._grammars.get(lang_id)
        if grammar is not None:
            return grammar

        with self._lock:
            load_lock = self._load_locks.setdefault(lang_id, threading.Lock())

        with load_lock:
            grammar = self._grammars.get(lang_id)
            if grammar is None:
                logger.debug(f"Loading {lang_id.value} grammar")
                grammar = self._loader(lang_id)
                self._grammars[lang_id] = grammar
        return grammar

    def is_loaded(self, language: Union[str, LanguageId]) -> bool:
        """Check if a grammar is already cached."""
        try:
            return LanguageId(language) in self._grammars
        except ValueError:
            return False

    def loaded_languages(self) -> list[str]:
        """Get the cached languages, sorted by name."""
        return sorted(lang.value for lang in self._grammars)

    def __repr__(self) -> str:
        langs = ", ".join(self.loaded_languages())
        return f"GrammarRegistry({len(self._grammars)} grammars: {langs})"
