"""
Centralized constants for Zion.

This module contains hardcoded strings and magic numbers that are used
across the codebase. Centralizing them here makes them easier to find
and modify.
"""

# Settings file location, relative to the user's home directory
SETTINGS_DIR = ".config/zion"
SETTINGS_FILE = "settings.json"

# History paging
DEFAULT_PAGE_SIZE = 300
MIN_PAGE_SIZE = 50

# Graph row geometry (pixels)
DEFAULT_ROW_HEIGHT = 28
DEFAULT_LANE_WIDTH = 20
GRAPH_PADDING = 14
