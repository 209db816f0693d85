# code_canvas/project.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Project configuration models for code-canvas.

Defines the structure of YAML project files naming which source paths to
analyze, which symbols to query and where to write the canvas.
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel


class SourcePath(BaseModel):
    """A source path to analyze.

    Attributes:
        path: File or directory to scan for source files.
        recursive: Whether to recurse into subdirectories (default True).
        extensions: Only read these extensions (default: every known one).
    """

    path: Path
    recursive: bool = True
    extensions: Optional[list[str]] = None


class ProjectConfig(BaseModel):
    """Configuration for one canvas.

    This model maps directly to the YAML project file format.

    Attributes:
        name: Display name of the project.
        sources: Source paths to analyze, in priority order.
        usages: Symbol names to query after analysis.
        output: Where to write the canvas JSON.

    Example YAML:
        name: web-app
        sources:
          - path: src
            recursive: true
          - path: scripts/build.ts
        usages:
          - formatDate
        output: build/canvas.json
    """

    name: str = "code-canvas"
    sources: list[SourcePath]
    usages: list[str] = []
    output: Optional[Path] = None

    @classmethod
    def from_yaml(cls, config_path: Path) -> "ProjectConfig":
        """Load and validate a project file.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            pydantic.ValidationError: If the content does not match.
        """
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)
