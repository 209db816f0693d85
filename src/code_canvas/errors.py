# code_canvas/errors.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Exceptions raised by the code_canvas engine.

UnsupportedLanguage and ParseError are per-file failures: the batch
orchestrator logs them and skips the file. NotInitialized and InitError mean
the engine itself is unusable and always propagate.
"""

from typing import Optional


class CodeCanvasError(Exception):
    """Base class for all code_canvas errors."""


class UnsupportedLanguage(CodeCanvasError):
    """Raised when no grammar module exists for a language."""

    def __init__(self, language: str, reason: Optional[str] = None):
        self.language = language
        message = f"Language {language} not supported"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NotInitialized(CodeCanvasError):
    """Raised when parsing is attempted before initialize() completed."""

    def __init__(self, message: str = "Parser not initialized"):
        super().__init__(message)


class InitError(CodeCanvasError):
    """Raised when the parse engine cannot be bootstrapped."""


class ParseError(CodeCanvasError):
    """Raised when the parse engine produces no tree at all.

    Syntactically invalid source does not raise this; tree-sitter recovers
    and returns a tree containing ERROR nodes instead.
    """

    def __init__(self, filename: str, reason: Optional[str] = None):
        self.filename = filename
        message = f"Failed to parse {filename}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
