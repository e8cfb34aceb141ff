"""
Settings and configuration for romakana.

Values are read once from the environment at import time.
"""

import os
from pathlib import Path
from typing import Optional

# Debug mode
DEBUG = os.environ.get("ROMAKANA_DEBUG", "").lower() in ("1", "true", "yes")

# Optional tab-separated romaji -> kana override file used by the CLI
_custom_map_env = os.environ.get("ROMAKANA_CUSTOM_MAP_PATH")
CUSTOM_MAP_PATH: Optional[Path] = Path(_custom_map_env) if _custom_map_env else None

# Maximum number of derived mapping trees kept in memory
MAP_CACHE_SIZE = int(os.environ.get("ROMAKANA_MAP_CACHE_SIZE", "32"))

# Delimiter used by custom map files
CUSTOM_MAP_DELIMITER = "\t"
