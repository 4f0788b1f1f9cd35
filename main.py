"""Main application entry point for the BatchFlow stock distribution heatmap."""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console

from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import ConfigurationError
from src.common.logger_config import setup_logging
from src.stock_distribution_domain.application.stock_distribution_service import (
    DistributionStatus,
    StockDistributionApplicationService,
)
from src.stock_distribution_domain.domain.entities.heatmap_palette import HeatmapPalette
from src.stock_distribution_domain.domain.repositories.stock_record_repository import IStockRecordRepository
from src.stock_distribution_domain.infrastructure.api_clients.batchflow_stock_api_client import (
    BatchFlowStockApiClient,
)
from src.stock_distribution_domain.infrastructure.persistence.json_stock_record_repository import (
    JsonStockRecordRepository,
)
from src.stock_distribution_domain.infrastructure.rendering.rich_heatmap_renderer import (
    VIEW_MODES,
    render_distribution,
)

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show the current stock distribution as a heatmap.")
    parser.add_argument("--input", metavar="FILE", help="read stock records from a JSON export instead of the API")
    parser.add_argument(
        "--view", choices=VIEW_MODES, default=None, help="cell detail level (default: HEATMAP_VIEW_MODE)"
    )
    parser.add_argument("--alerts", action="store_true", help="also list products below their reorder level")
    parser.add_argument("--log-level", default=None, help="override LOG_LEVEL")
    return parser.parse_args(argv)


def setup_dependencies(input_path: Optional[str] = None) -> StockDistributionApplicationService:
    """Initializes and wires up stock distribution dependencies."""
    stock_repo: IStockRecordRepository
    if input_path:
        stock_repo = JsonStockRecordRepository(input_path)
    else:
        stock_repo = BatchFlowStockApiClient()
    return StockDistributionApplicationService(stock_repo=stock_repo, palette=HeatmapPalette.from_settings())


def run(argv: Optional[list[str]] = None, console: Optional[Console] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    view_mode = args.view or settings.HEATMAP_VIEW_MODE
    if view_mode not in VIEW_MODES:
        logger.warning(f"Unknown HEATMAP_VIEW_MODE {view_mode!r}, falling back to 'compact'.")
        view_mode = "compact"

    try:
        service = setup_dependencies(args.input)
    except ConfigurationError as e:
        logger.error(str(e))
        return 2

    view = service.load_distribution()
    render_distribution(view, console=console, view_mode=view_mode, show_alerts=args.alerts)
    return 1 if view.status is DistributionStatus.ERROR else 0


if __name__ == "__main__":
    sys.exit(run())
