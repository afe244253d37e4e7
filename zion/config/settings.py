"""
Settings management for Zion
"""

import copy
import json
from pathlib import Path
from typing import Any

from zion.constants import (
    DEFAULT_LANE_WIDTH,
    DEFAULT_PAGE_SIZE,
    DEFAULT_ROW_HEIGHT,
    MIN_PAGE_SIZE,
    SETTINGS_DIR,
    SETTINGS_FILE,
)


class Settings:
    """Manages application settings"""

    DEFAULT_SETTINGS = {
        "graph": {
            "page_size": DEFAULT_PAGE_SIZE,  # Commits per history page
            "row_height": DEFAULT_ROW_HEIGHT,
            "lane_width": DEFAULT_LANE_WIDTH,
            "highlight_main_chain": True,  # Reserve the first color for HEAD's first-parent line
        },
        "ui": {
            "theme": "light",
            "recent_repositories": [],
        },
    }

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize settings"""
        if config_path is None:
            config_path = Path.home() / SETTINGS_DIR / SETTINGS_FILE

        self.config_path = config_path
        self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.load()

    def load(self) -> None:
        """Load settings from file"""
        if self.config_path.exists():
            with open(self.config_path) as f:
                loaded = json.load(f)
                # Merge with defaults to handle new settings
                self._merge_settings(self.settings, loaded)

    def save(self) -> None:
        """Save settings to file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(self.settings, f, indent=2)

    def _merge_settings(self, base: dict[str, Any], updates: dict[str, Any]) -> None:
        """Recursively merge settings dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                base_dict: dict[str, Any] = base[key]
                value_dict: dict[str, Any] = value
                self._merge_settings(base_dict, value_dict)
            else:
                base[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get a setting by dot-separated path (e.g., 'graph.page_size')"""
        value: Any = self.settings

        for part in path.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]

        return value

    def set(self, path: str, value: Any) -> None:
        """Set a setting by dot-separated path"""
        parts = path.split(".")
        target: Any = self.settings

        for part in parts[:-1]:
            if part not in target:
                target[part] = {}
            target = target[part]

        target[parts[-1]] = value

    def get_page_size(self) -> int:
        """Get the number of commits loaded per history page."""
        page_size: int = int(self.get("graph.page_size", DEFAULT_PAGE_SIZE))
        return max(MIN_PAGE_SIZE, page_size)

    def get_row_height(self) -> int:
        row_height: int = int(self.get("graph.row_height", DEFAULT_ROW_HEIGHT))
        return max(12, row_height)

    def get_lane_width(self) -> int:
        lane_width: int = int(self.get("graph.lane_width", DEFAULT_LANE_WIDTH))
        return max(8, lane_width)

    def get_highlight_main_chain(self) -> bool:
        return bool(self.get("graph.highlight_main_chain", True))

    def add_recent_repository(self, path: str, limit: int = 10) -> None:
        """Move a repository path to the front of the recent list."""
        recent: list[str] = [p for p in self.get("ui.recent_repositories", []) if p != path]
        recent.insert(0, path)
        self.set("ui.recent_repositories", recent[:limit])
