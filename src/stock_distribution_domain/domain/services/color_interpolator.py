"""Two-segment linear colour interpolation for heatmap cells."""

import math
import numbers
from decimal import Decimal

from src.stock_distribution_domain.domain.entities.heatmap_palette import DEFAULT_PALETTE, HeatmapPalette, RGBColor


def _round_half_up(value: float) -> int:
    # Built-in round() would send 0.5 to the even neighbour
    return math.floor(value + 0.5)


def _clamp_factor(factor: float) -> float:
    if not isinstance(factor, (numbers.Real, Decimal)) or isinstance(factor, bool):
        return 0.0
    factor = float(factor)
    if math.isnan(factor):
        return 0.0
    return min(1.0, max(0.0, factor))


def blend(start: RGBColor, end: RGBColor, weight: float) -> RGBColor:
    """Per-channel linear blend: ``round(c1 + (c2 - c1) * weight)``."""
    return RGBColor(
        _round_half_up(start.r + (end.r - start.r) * weight),
        _round_half_up(start.g + (end.g - start.g) * weight),
        _round_half_up(start.b + (end.b - start.b) * weight),
    )


def interpolate_rgb(factor: float, palette: HeatmapPalette = DEFAULT_PALETTE) -> RGBColor:
    """
    Maps a normalised factor to a colour on the LOW -> MID -> HIGH gradient.

    Factors up to the palette midpoint blend LOW into MID, the rest blend MID
    into HIGH. Factors outside [0, 1] are clamped and NaN counts as 0, so the
    result is always a valid colour.
    """
    factor = _clamp_factor(factor)
    if factor <= palette.midpoint:
        return blend(palette.low, palette.mid, factor / palette.midpoint)
    return blend(palette.mid, palette.high, (factor - palette.midpoint) / (1 - palette.midpoint))


def interpolate_color(factor: float, palette: HeatmapPalette = DEFAULT_PALETTE) -> str:
    """Same as interpolate_rgb, encoded as a CSS ``rgb(r, g, b)`` string."""
    return interpolate_rgb(factor, palette).to_css()
