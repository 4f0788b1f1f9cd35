"""Application settings and environment variables."""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


class Settings:
    BATCHFLOW_API_BASE_URL: Optional[str] = os.getenv("BATCHFLOW_API_BASE_URL")
    BATCHFLOW_API_TOKEN: Optional[str] = os.getenv("BATCHFLOW_API_TOKEN")
    BATCHFLOW_API_TIMEOUT: str = os.getenv("BATCHFLOW_API_TIMEOUT", "30")  # seconds, parsed by the API client

    # Heatmap palette (hex colours) and interpolation midpoint
    HEATMAP_LOW_COLOR: str = os.getenv("HEATMAP_LOW_COLOR", "#f8faff")
    HEATMAP_MID_COLOR: str = os.getenv("HEATMAP_MID_COLOR", "#bfdbfe")
    HEATMAP_HIGH_COLOR: str = os.getenv("HEATMAP_HIGH_COLOR", "#1e40af")
    HEATMAP_EMPTY_COLOR: str = os.getenv("HEATMAP_EMPTY_COLOR", "#f3f4f6")
    HEATMAP_MIDPOINT: str = os.getenv("HEATMAP_MIDPOINT", "0.5")
    HEATMAP_VIEW_MODE: str = os.getenv("HEATMAP_VIEW_MODE", "compact")  # compact, detailed

    # Logging settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")  # INFO, DEBUG, WARNING, ERROR, CRITICAL


settings = Settings()
