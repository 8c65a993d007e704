"""
Cell colors. Solid tiles use a fixed palette keyed by visual index (dirt, grass, ...).
Liquid amount 0-1 maps through a piecewise-linear gradient from pale to deep water;
amounts above 1 (transient overfill) clip to the deepest stop.
"""

import numpy as np

SOLID_PALETTE = (
    (0.50, 0.35, 0.20),  # dirt
    (0.20, 0.66, 0.20),  # grass
    (0.50, 0.50, 0.52),  # stone
)
MISSING_COLOR = (1.0, 0.0, 1.0)

# Water: pale cyan -> blue -> deep navy
_LIQUID_STOPS = np.array([
    [0.70, 0.90, 1.00], [0.35, 0.65, 0.95], [0.18, 0.40, 0.74], [0.06, 0.16, 0.45],
], dtype=np.float64)
_LIQUID_T = np.array([0.0, 0.3, 0.65, 1.0], dtype=np.float64)


def _apply_gradient(t: np.ndarray, stops: np.ndarray, t_vals: np.ndarray) -> np.ndarray:
    """Map t in [0,1] to RGB via piecewise-linear stops. t 1D, returns (n, 3)."""
    t = np.clip(np.asarray(t, dtype=np.float64).reshape(-1), 0.0, 1.0)
    out = np.empty((t.size, 3), dtype=np.float64)
    for c in range(3):
        out[:, c] = np.interp(t, t_vals, stops[:, c])
    return out


def _to_rgb8(rgb) -> tuple[int, int, int]:
    r, g, b = (np.clip(np.asarray(rgb, dtype=np.float64), 0.0, 1.0) * 255).astype(np.uint8)
    return int(r), int(g), int(b)


def solid_color(index: int) -> tuple[int, int, int]:
    if 0 <= index < len(SOLID_PALETTE):
        return _to_rgb8(SOLID_PALETTE[index])
    return _to_rgb8(MISSING_COLOR)


def liquid_colors(amounts: np.ndarray) -> np.ndarray:
    """(n,) amounts -> (n, 3) uint8 RGB."""
    rgb = _apply_gradient(amounts, _LIQUID_STOPS, _LIQUID_T)
    return (rgb * 255).astype(np.uint8)


def liquid_color(amount: float) -> tuple[int, int, int]:
    r, g, b = liquid_colors(np.array([amount]))[0]
    return int(r), int(g), int(b)
