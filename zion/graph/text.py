"""Plain-text rendering of a laid-out commit graph."""

from collections.abc import Sequence

from zion.graph.layout import max_lane_count
from zion.graph.types import Commit

NODE = "*"
HEAD_NODE = "@"
LINE = "|"
EMPTY = " "


def graph_cells(commit: Commit, width: int) -> str:
    """Lane cells for one row, two characters per lane."""
    open_lanes = set(commit.incoming_lanes) | set(commit.outgoing_lanes)
    cells = []
    for lane in range(width):
        if lane == commit.lane:
            cells.append(HEAD_NODE if commit.is_head else NODE)
        elif lane in open_lanes:
            cells.append(LINE)
        else:
            cells.append(EMPTY)
    return " ".join(cells)


def render_text(commits: Sequence[Commit]) -> list[str]:
    """Render one line per commit: lanes, short hash, decorations, subject."""
    width = max_lane_count(commits)
    lines = []
    for commit in commits:
        parts = [graph_cells(commit, width), commit.short_hash]
        if commit.decorations:
            parts.append(f"({', '.join(commit.decorations)})")
        parts.append(commit.subject)
        lines.append(" ".join(parts).rstrip())
    return lines
