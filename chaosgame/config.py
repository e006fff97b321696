from dataclasses import dataclass
from typing import Optional, Tuple


# Bounds for user-facing configuration (inclusive).
MIN_VERTICES = 3
MAX_VERTICES = 12
MIN_JUMP_RATIO = 2
MAX_JUMP_RATIO = 12

DEFAULT_VERTICES = 3
DEFAULT_JUMP_RATIO = 2
DEFAULT_CAPACITY = 10000
DEFAULT_RULE = "uniform"


@dataclass
class AppConfig:
    view_width: int = 1280
    view_height: int = 900
    font_size: int = 24
    seed: Optional[int] = None
    capacity: int = DEFAULT_CAPACITY
    radius: float = 1.0
    steps_per_frame: int = 20  # engine steps per rendered frame
    fade_window: int = 120     # ticks until a point reaches min_alpha
    min_alpha: float = 0.0
    fps: int = 60
    view_margin: int = 60      # pixels between the polygon and the panel edge
    rotation_deg: float = 90.0  # rotate engine space so vertex 0 points up
    point_radius: int = 1
    point_color: Tuple[int, int, int] = (90, 200, 255)
    vertex_color: Tuple[int, int, int] = (255, 210, 80)
