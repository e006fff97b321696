"""Age -> opacity mapping shared by renderers (no pygame dependency)."""
from typing import Tuple

Color = Tuple[int, int, int]


def age_to_alpha(age: int, fade_window: int, min_alpha: float = 0.0) -> float:
    """alpha = 1 - min(1, age / fade_window), floored at min_alpha."""
    if fade_window <= 0:
        raise ValueError(f"fade_window must be positive, got {fade_window}")
    alpha = 1.0 - min(1.0, age / fade_window)
    return max(min_alpha, alpha)


def blend_color(bg: Color, fg: Color, alpha: float) -> Color:
    """Pre-mix fg over an opaque bg at the given opacity."""
    t = max(0.0, min(1.0, alpha))
    return (
        int(bg[0] + (fg[0] - bg[0]) * t),
        int(bg[1] + (fg[1] - bg[1]) * t),
        int(bg[2] + (fg[2] - bg[2]) * t),
    )
