"""Configuration for the hexroads core."""

import os
from pathlib import Path

# Paths
HEXROADS_ROOT = Path(__file__).parent
DATA_DIR = HEXROADS_ROOT / "data"
ROAD_ASSETS_PATH = Path(os.environ.get("HEXROADS_ROAD_ASSETS", DATA_DIR / "road_assets.toml"))

# Board geometry
DEFAULT_BOARD_RADIUS = int(os.environ.get("HEXROADS_BOARD_RADIUS", "18"))
HEX_SIZE = float(os.environ.get("HEXROADS_HEX_SIZE", "1.0"))

# Rendering hand-off
TILES_URL_PREFIX = "tiles"
DEFAULT_ZONE_COLOR = "#87CEEB"
