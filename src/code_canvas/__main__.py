# code_canvas/__main__.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Module entry point for code-canvas.

Allows running with: python -m code_canvas src/ --output canvas.json
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
