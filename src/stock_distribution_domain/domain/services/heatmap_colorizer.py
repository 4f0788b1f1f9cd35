"""Turns a stock matrix into a grid of coloured heatmap cells."""

from src.common.dtos.stock_dtos import HeatmapCellDTO
from src.stock_distribution_domain.domain.entities.heatmap_palette import DEFAULT_PALETTE, HeatmapPalette
from src.stock_distribution_domain.domain.entities.stock_matrix import StockMatrix
from src.stock_distribution_domain.domain.services.color_interpolator import interpolate_color


def colorize_cell(
    matrix: StockMatrix, product: str, warehouse: str, palette: HeatmapPalette = DEFAULT_PALETTE
) -> HeatmapCellDTO:
    """Colours one cell; zero or absent stock gets the palette's empty colour."""
    entry = matrix.entry(product, warehouse)
    quantity = entry.current_quantity if entry else 0

    if quantity > 0:
        normalized = matrix.normalize(quantity)
        color = interpolate_color(normalized, palette)
    else:
        normalized = 0.0
        color = palette.empty.to_css()

    return HeatmapCellDTO(
        product=product,
        warehouse=warehouse,
        quantity=quantity,
        normalized=normalized,
        color=color,
        is_empty=quantity <= 0,
        unit_of_measurement=entry.unit_of_measurement if entry else None,
    )


def colorize_matrix(matrix: StockMatrix, palette: HeatmapPalette = DEFAULT_PALETTE) -> list[list[HeatmapCellDTO]]:
    """One row per product, one cell per warehouse, in axis order."""
    return [
        [colorize_cell(matrix, product, warehouse, palette) for warehouse in matrix.warehouses]
        for product in matrix.products
    ]
