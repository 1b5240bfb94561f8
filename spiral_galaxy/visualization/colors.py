"""Color parsing and mixing for galaxy particles."""

import numpy as np
from vispy.color import Color

from ..errors import InvalidParameter


def parse_color(value, name: str = "color") -> np.ndarray:
    """
    Convert a color specification to an RGB array.

    Args:
        value: Hex string ('#ff6030'), color name, or RGB(A) tuple in 0-1 range
        name: Parameter name, used in the error message

    Returns:
        Array of shape (3,) with RGB values in 0-1 range
    """
    try:
        rgb = Color(value).rgb
    except (ValueError, TypeError, KeyError) as e:
        raise InvalidParameter(name, value, f"not a color ({e})") from e
    return np.asarray(rgb, dtype=np.float64)


def mix_colors(inside: np.ndarray, outside: np.ndarray, t: np.ndarray) -> np.ndarray:
    """
    Linearly interpolate between two colors, component-wise.

    Written as inside * (1 - t) + outside * t so that t == 0 and t == 1
    reproduce the end colors exactly.

    Args:
        inside: RGB color at t = 0, shape (3,)
        outside: RGB color at t = 1, shape (3,)
        t: Interpolation factors, shape (N,)

    Returns:
        Array of shape (N, 3) with float32 RGB values
    """
    t = np.asarray(t, dtype=np.float64)[:, np.newaxis]
    mixed = inside[np.newaxis, :] * (1.0 - t) + outside[np.newaxis, :] * t
    return mixed.astype(np.float32)


def colors_to_rgba(rgb: np.ndarray, white: bool = False) -> np.ndarray:
    """
    Expand (N, 3) RGB colors to (N, 4) RGBA for upload, alpha = 1.0.

    Colors are passed through as-is (no tone mapping); they are meant to be
    drawn with additive blending.

    Args:
        rgb: Array of shape (N, 3)
        white: Replace every color with white

    Returns:
        Array of shape (N, 4) with float32 RGBA values
    """
    rgba = np.ones((len(rgb), 4), dtype=np.float32)
    if not white:
        rgba[:, :3] = rgb
    return rgba
