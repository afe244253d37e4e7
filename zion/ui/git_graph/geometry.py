"""
Row geometry for the lane graph.

COORDINATE SYSTEM NOTE:
Each row is drawn in its own box, (0, 0) at the top-left corner.
Newer commits are above, so lines coming from children enter at y=0 and
lines going to parents leave at y=row_height. The node sits at the vertical
center of the row.

This module is Qt-free so it can be tested without a display; the delegate
turns strokes into QPainterPaths.
"""

from dataclasses import dataclass
from enum import Enum

from zion.constants import DEFAULT_LANE_WIDTH, DEFAULT_ROW_HEIGHT, GRAPH_PADDING
from zion.graph.types import Commit

Point = tuple[float, float]


class StrokeKind(Enum):
    LINE = "line"
    CURVE = "curve"


@dataclass(frozen=True)
class Stroke:
    """A single line or cubic curve within a row."""

    kind: StrokeKind
    points: tuple[Point, ...]  # 2 points for lines, 4 (start, c1, c2, end) for curves
    color_key: int
    emphasized: bool = False


@dataclass(frozen=True)
class RowGeometry:
    strokes: tuple[Stroke, ...]
    node: Point
    node_color_key: int


def lane_x(
    lane: int, lane_width: float = DEFAULT_LANE_WIDTH, padding: float = GRAPH_PADDING
) -> float:
    """Horizontal center of a lane."""
    return padding + lane * lane_width


def graph_width(
    lane_count: int, lane_width: float = DEFAULT_LANE_WIDTH, padding: float = GRAPH_PADDING
) -> float:
    """Width needed to draw lane_count lanes with padding on both sides."""
    return 2 * padding + (max(lane_count, 1) - 1) * lane_width


def row_geometry(
    commit: Commit,
    row_height: float = DEFAULT_ROW_HEIGHT,
    lane_width: float = DEFAULT_LANE_WIDTH,
    padding: float = GRAPH_PADDING,
) -> RowGeometry:
    """
    Compute the strokes for one commit row.

    - Incoming lanes draw from the top edge to the center line.
    - Outgoing lanes draw from the center line to the bottom edge.
    - Each edge curves from the node down into its target lane.
    - Converging lanes curve from the top of their lane into the node.
    """
    center_y = row_height / 2
    node_x = lane_x(commit.lane, lane_width, padding)
    colors = {lane_color.lane: lane_color.color_key for lane_color in commit.lane_colors}
    converging = set(commit.converging_lanes)
    strokes: list[Stroke] = []

    for lane in commit.incoming_lanes:
        if lane in converging:
            continue
        x = lane_x(lane, lane_width, padding)
        strokes.append(
            Stroke(
                StrokeKind.LINE,
                ((x, 0.0), (x, center_y)),
                colors.get(lane, commit.node_color_key),
                emphasized=lane == commit.lane,
            )
        )

    for lane in commit.outgoing_lanes:
        x = lane_x(lane, lane_width, padding)
        if lane not in commit.incoming_lanes and lane != commit.lane:
            # Started by an edge in this row; the edge curve draws it
            continue
        strokes.append(
            Stroke(
                StrokeKind.LINE,
                ((x, center_y), (x, row_height)),
                colors.get(lane, commit.node_color_key),
                emphasized=lane == commit.lane,
            )
        )

    for lane in commit.converging_lanes:
        x = lane_x(lane, lane_width, padding)
        strokes.append(
            Stroke(
                StrokeKind.CURVE,
                ((x, 0.0), (x, center_y * 0.6), (node_x, center_y * 0.4), (node_x, center_y)),
                colors.get(lane, commit.node_color_key),
            )
        )

    for edge in commit.outgoing_edges:
        if edge.from_lane == edge.to_lane:
            continue
        start_x = lane_x(edge.from_lane, lane_width, padding)
        end_x = lane_x(edge.to_lane, lane_width, padding)
        strokes.append(
            Stroke(
                StrokeKind.CURVE,
                (
                    (start_x, center_y),
                    (start_x, center_y + center_y * 0.6),
                    (end_x, center_y + center_y * 0.4),
                    (end_x, row_height),
                ),
                edge.color_key,
            )
        )

    return RowGeometry(
        strokes=tuple(strokes), node=(node_x, center_y), node_color_key=commit.node_color_key
    )
