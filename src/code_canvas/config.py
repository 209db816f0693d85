# code_canvas/config.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0

from dataclasses import dataclass, field, asdict
import os
from typing import Optional, Dict, Any

from dotenv import load_dotenv


def get_env(dotenv_path: Optional[str] = None) -> Dict[str, Any]:
    if dotenv_path is not None:
        load_dotenv(dotenv_path)
    else:
        load_dotenv()

    return {
        "default_language": os.getenv("CANVAS_DEFAULT_LANGUAGE", "javascript"),
        "preview_chars": int(os.getenv("CANVAS_PREVIEW_CHARS", 500)),
        "log_level": os.getenv("CANVAS_LOG_LEVEL", "INFO"),

        # Layout configuration
        "origin_x": float(os.getenv("CANVAS_LAYOUT_ORIGIN_X", 50)),
        "singleton_y": float(os.getenv("CANVAS_LAYOUT_SINGLETON_Y", 50)),
        "singleton_step": float(os.getenv("CANVAS_LAYOUT_SINGLETON_STEP", 350)),
        "small_component_max": int(os.getenv("CANVAS_LAYOUT_SMALL_COMPONENT_MAX", 6)),
        "circle_offset_x": float(os.getenv("CANVAS_LAYOUT_CIRCLE_OFFSET_X", 200)),
        "circle_center_y": float(os.getenv("CANVAS_LAYOUT_CIRCLE_CENTER_Y", 200)),
        "min_radius": float(os.getenv("CANVAS_LAYOUT_MIN_RADIUS", 100)),
        "radius_per_node": float(os.getenv("CANVAS_LAYOUT_RADIUS_PER_NODE", 30)),
        "column_pitch": float(os.getenv("CANVAS_LAYOUT_COLUMN_PITCH", 320)),
        "row_pitch": float(os.getenv("CANVAS_LAYOUT_ROW_PITCH", 250)),
        "grid_top": float(os.getenv("CANVAS_LAYOUT_GRID_TOP", 50)),
        "min_component_width": float(os.getenv("CANVAS_LAYOUT_MIN_COMPONENT_WIDTH", 400)),
        "component_margin": float(os.getenv("CANVAS_LAYOUT_COMPONENT_MARGIN", 100)),
        "initial_columns": int(os.getenv("CANVAS_LAYOUT_INITIAL_COLUMNS", 4)),
    }


@dataclass
class LayoutConfig:
    origin_x: float = 50
    singleton_y: float = 50
    singleton_step: float = 350
    small_component_max: int = 6  # components up to this size are drawn as a circle
    circle_offset_x: float = 200
    circle_center_y: float = 200
    min_radius: float = 100
    radius_per_node: float = 30
    column_pitch: float = 320
    row_pitch: float = 250
    grid_top: float = 50
    min_component_width: float = 400
    component_margin: float = 100
    initial_columns: int = 4

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CanvasConfig:
    default_language: str = "javascript"
    preview_chars: int = 500
    log_level: str = "INFO"
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def update(self, **kwargs):
        for key, value in kwargs.items():
            if hasattr(self.layout, key):
                setattr(self.layout, key, value)
            else:
                setattr(self, key, value)

    @classmethod
    def from_env(cls, dotenv_file: Optional[str] = None) -> "CanvasConfig":
        env = get_env(dotenv_file)
        layout_keys = set(LayoutConfig.__dataclass_fields__)
        layout = LayoutConfig(**{k: v for k, v in env.items() if k in layout_keys})
        return cls(
            layout=layout,
            **{k: v for k, v in env.items() if k not in layout_keys},
        )
