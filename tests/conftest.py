# tests/conftest.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Pytest configuration for code-canvas tests.

Ensures the src package is importable without installing it, and provides
shared analyzer fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to path for local packages
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def analyzer():
    """An initialized analyzer with default configuration."""
    from code_canvas.analyzer import CodeAnalyzer
    from code_canvas.config import CanvasConfig

    return CodeAnalyzer(CanvasConfig()).initialize()


@pytest.fixture
def analyze(analyzer):
    """Analyze a source snippet under a filename."""

    def _analyze(content: str, filename: str = "sample.ts"):
        return analyzer.analyze_file(content, filename)

    return _analyze
