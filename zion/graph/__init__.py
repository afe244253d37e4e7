"""Commit graph lane layout"""

from zion.graph.layout import GraphLayoutEngine, main_first_parent_chain, max_lane_count
from zion.graph.types import Commit, LaneColor, LaneEdge, ParsedCommit

__all__ = [
    "Commit",
    "GraphLayoutEngine",
    "LaneColor",
    "LaneEdge",
    "ParsedCommit",
    "main_first_parent_chain",
    "max_lane_count",
]
