"""Console rendering of the stock distribution heatmap."""

from typing import Optional

from rich.color import Color
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from src.common.dtos.stock_dtos import HeatmapCellDTO, LowStockAlertDTO, Quantity
from src.stock_distribution_domain.application.stock_distribution_service import (
    DistributionStatus,
    StockDistributionView,
)

VIEW_MODES = ("compact", "detailed")


def format_quantity(quantity: Quantity) -> str:
    if isinstance(quantity, float) and quantity.is_integer():
        quantity = int(quantity)
    if isinstance(quantity, int):
        return f"{quantity:,}"
    return f"{quantity:,.2f}"


def _cell_style(cell: HeatmapCellDTO) -> Style:
    background = Color.parse(cell.color)
    r, g, b = background.get_truecolor()
    # Relative luminance (ITU-R BT.601); dark cells get light text
    luminance = 0.299 * r + 0.587 * g + 0.114 * b
    foreground = "white" if luminance < 140 else "black"
    return Style(color=foreground, bgcolor=background)


def _cell_text(cell: HeatmapCellDTO, view_mode: str) -> Text:
    if cell.is_empty:
        return Text("-", style=_cell_style(cell), justify="center")
    label = format_quantity(cell.quantity)
    if view_mode == "detailed":
        if cell.unit_of_measurement:
            label = f"{label} {cell.unit_of_measurement}"
        label = f"{label}\n{cell.normalized:.0%}"
    return Text(label, style=_cell_style(cell), justify="right")


def build_heatmap_table(view: StockDistributionView, view_mode: str = "compact") -> Table:
    """Products as rows, warehouses as columns, with row and column totals."""
    if view_mode not in VIEW_MODES:
        raise ValueError(f"Unknown view mode {view_mode!r}, expected one of {VIEW_MODES}")

    table = Table(title="Current Stock Distribution", show_footer=True, show_lines=view_mode == "detailed")
    table.add_column("Product", footer="Total", style="bold")
    for warehouse in view.matrix.warehouses:
        table.add_column(
            warehouse, footer=format_quantity(view.summary.warehouse_totals.get(warehouse, 0)), justify="right"
        )
    table.add_column("Total", footer=format_quantity(view.summary.total_quantity), justify="right", style="bold")

    for product, row in zip(view.matrix.products, view.cells):
        table.add_row(
            product,
            *(_cell_text(cell, view_mode) for cell in row),
            format_quantity(view.summary.product_totals.get(product, 0)),
        )
    return table


def build_alerts_table(alerts: list[LowStockAlertDTO]) -> Table:
    table = Table(title="Low Stock Alerts")
    table.add_column("Product")
    table.add_column("Available", justify="right")
    table.add_column("Min. Reorder Level", justify="right")
    for alert in alerts:
        table.add_row(alert.name, format_quantity(alert.available), format_quantity(alert.min_reorder_level))
    return table


def render_distribution(
    view: StockDistributionView,
    console: Optional[Console] = None,
    view_mode: str = "compact",
    show_alerts: bool = False,
) -> None:
    console = console or Console()

    if view.status is DistributionStatus.ERROR:
        console.print(Text(view.message or "", style="bold red"))
        return
    if view.status is DistributionStatus.EMPTY:
        console.print(Text(view.message or "", style="dim"))
        return

    console.print(build_heatmap_table(view, view_mode))
    if view.skipped_count:
        console.print(Text(f"{view.skipped_count} malformed stock record(s) were skipped.", style="yellow"))

    if show_alerts:
        if view.low_stock_alerts:
            console.print(build_alerts_table(view.low_stock_alerts))
        else:
            console.print(Text("No SKUs below minimum reorder levels.", style="green"))
