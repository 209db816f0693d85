# code_canvas/parsers/languages.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Language detection from file extensions.

Every filename maps to a LanguageId. Unknown extensions fall back to a
default language instead of failing, so detection is total.
"""

from enum import Enum
from pathlib import PurePosixPath
from typing import Iterable, Union


class LanguageId(str, Enum):
    """Languages with a tree-sitter grammar and a fact extractor."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"
    PYTHON = "python"
    RUST = "rust"


DEFAULT_LANGUAGE = LanguageId.JAVASCRIPT

# Map file extensions to languages
EXTENSION_TO_LANGUAGE: dict[str, LanguageId] = {
    ".js": LanguageId.JAVASCRIPT,
    ".jsx": LanguageId.JAVASCRIPT,
    ".mjs": LanguageId.JAVASCRIPT,
    ".cjs": LanguageId.JAVASCRIPT,
    ".ts": LanguageId.TYPESCRIPT,
    ".mts": LanguageId.TYPESCRIPT,
    ".cts": LanguageId.TYPESCRIPT,
    ".tsx": LanguageId.TSX,
    ".py": LanguageId.PYTHON,
    ".pyi": LanguageId.PYTHON,
    ".rs": LanguageId.RUST,
}

# Languages whose sources may import each other
LANGUAGE_FAMILIES: dict[LanguageId, tuple[LanguageId, ...]] = {
    LanguageId.JAVASCRIPT: (LanguageId.JAVASCRIPT, LanguageId.TYPESCRIPT, LanguageId.TSX),
    LanguageId.TYPESCRIPT: (LanguageId.JAVASCRIPT, LanguageId.TYPESCRIPT, LanguageId.TSX),
    LanguageId.TSX: (LanguageId.JAVASCRIPT, LanguageId.TYPESCRIPT, LanguageId.TSX),
    LanguageId.PYTHON: (LanguageId.PYTHON,),
    LanguageId.RUST: (LanguageId.RUST,),
}


def to_language_id(
    language: Union[str, LanguageId], default: LanguageId = DEFAULT_LANGUAGE
) -> LanguageId:
    """Coerce a language name to a LanguageId, falling back to default."""
    if isinstance(language, LanguageId):
        return language
    try:
        return LanguageId(str(language).lower())
    except ValueError:
        return default


def detect_language(
    filename: str, default: Union[str, LanguageId] = DEFAULT_LANGUAGE
) -> LanguageId:
    """Detect the language of a file from its extension.

    Args:
        filename: File name or path (may be a URI with query params)
        default: Language returned for unknown or missing extensions

    Returns:
        LanguageId for the file, never None.
    """
    # Strip query parameters from URIs (e.g., https://...?ref=main)
    path_str = str(filename).split("?")[0]
    suffix = PurePosixPath(path_str.replace("\\", "/")).suffix.lower()
    language = EXTENSION_TO_LANGUAGE.get(suffix)
    if language is None:
        return to_language_id(default)
    return language


def extensions_for(languages: Iterable[Union[str, LanguageId]]) -> tuple[str, ...]:
    """Get the known source extensions of the given languages.

    Languages in the same family (JS/TS/TSX) share extensions, since a
    TypeScript file may import a JavaScript one. Order follows
    EXTENSION_TO_LANGUAGE so the result is stable.

    Args:
        languages: Languages present in a selection

    Returns:
        Tuple of extensions including the leading dot.
    """
    wanted: set[LanguageId] = set()
    for language in languages:
        lang_id = to_language_id(language)
        wanted.update(LANGUAGE_FAMILIES.get(lang_id, (lang_id,)))

    return tuple(ext for ext, lang in EXTENSION_TO_LANGUAGE.items() if lang in wanted)
