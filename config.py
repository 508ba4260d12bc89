"""
config.py
Runtime settings, read from environment variables with local defaults.
"""

from __future__ import annotations

import os
from pathlib import Path

# SQLite file holding the key-value slot
DB_FILE = Path(os.getenv("GYM_DB_FILE", str(Path(__file__).with_name("gym.db"))))

# Key the member snapshot is saved under
STORAGE_KEY = os.getenv("GYM_STORAGE_KEY", "gym_members")

LOG_LEVEL = os.getenv("GYM_LOG_LEVEL", "INFO")

# Members shown in the dashboard's "recent" panel
RECENT_MEMBERS_LIMIT = 5
