"""Qt colors for git graph lanes."""

from PySide6.QtGui import QColor

from zion.graph.colors import color_for_key

# Drawn around nodes so they stand out from the lines passing behind them
NODE_OUTLINE = QColor(255, 255, 255, 204)


def get_lane_color(color_key: int) -> QColor:
    """Get color for a lane color key."""
    return QColor(color_for_key(color_key))
