"""Constants for todaylist.

This module centralizes default values used throughout the application.
"""

# Settings defaults
DEFAULT_RESET_HOUR = 0
MIN_RESET_HOUR = 0
MAX_RESET_HOUR = 23

# Ordering
SEED_ORDER_KEY = 1.0
ORDER_KEY_STEP = 1.0
ORDER_KEY_MIN_GAP = 1e-9  # Neighbour gap at which a group gets renumbered

# Reset loop
DEFAULT_RESET_CHECK_INTERVAL_SECONDS = 60.0
