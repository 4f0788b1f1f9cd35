"""Heatmap colour value objects."""

import re
from dataclasses import dataclass

from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import ConfigurationError

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


@dataclass(frozen=True)
class RGBColor:
    """An 8-bit RGB colour."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"RGB channel out of range: {channel}")

    @classmethod
    def from_hex(cls, value: str) -> "RGBColor":
        """Parses ``#rrggbb`` or ``#rgb`` (leading ``#`` optional)."""
        match = _HEX_COLOR.match(value.strip()) if isinstance(value, str) else None
        if not match:
            raise ConfigurationError(f"Invalid hex colour: {value!r}")
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    def to_css(self) -> str:
        return f"rgb({self.r}, {self.g}, {self.b})"

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


@dataclass(frozen=True)
class HeatmapPalette:
    """Anchor colours for the two-segment heatmap gradient plus the empty-cell colour."""

    low: RGBColor
    mid: RGBColor
    high: RGBColor
    empty: RGBColor
    midpoint: float = 0.5

    def __post_init__(self) -> None:
        if not 0 < self.midpoint < 1:
            raise ConfigurationError(f"Heatmap midpoint must lie strictly between 0 and 1, got {self.midpoint}")

    @classmethod
    def from_hex(cls, low: str, mid: str, high: str, empty: str, midpoint: float = 0.5) -> "HeatmapPalette":
        return cls(
            low=RGBColor.from_hex(low),
            mid=RGBColor.from_hex(mid),
            high=RGBColor.from_hex(high),
            empty=RGBColor.from_hex(empty),
            midpoint=midpoint,
        )

    @classmethod
    def from_settings(cls) -> "HeatmapPalette":
        """Builds the palette configured through the HEATMAP_* environment variables."""
        try:
            midpoint = float(settings.HEATMAP_MIDPOINT)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"HEATMAP_MIDPOINT is not a number: {settings.HEATMAP_MIDPOINT!r}", e)
        return cls.from_hex(
            settings.HEATMAP_LOW_COLOR,
            settings.HEATMAP_MID_COLOR,
            settings.HEATMAP_HIGH_COLOR,
            settings.HEATMAP_EMPTY_COLOR,
            midpoint=midpoint,
        )


DEFAULT_PALETTE = HeatmapPalette.from_hex("#f8faff", "#bfdbfe", "#1e40af", "#f3f4f6")
