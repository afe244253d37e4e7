"""Data types for commit graph layout."""

from dataclasses import dataclass
from datetime import datetime

SHORT_HASH_LENGTH = 8


@dataclass(frozen=True)
class ParsedCommit:
    """A commit as read from history, before layout."""

    hash: str
    parents: tuple[str, ...]
    author: str = ""
    date: datetime | None = None
    subject: str = ""
    decorations: tuple[str, ...] = ()

    @property
    def is_head(self) -> bool:
        return any("HEAD" in decoration for decoration in self.decorations)


@dataclass(frozen=True)
class LaneColor:
    """Color key bound to a lane at one row."""

    lane: int
    color_key: int


@dataclass(frozen=True)
class LaneEdge:
    """Connector from this row's node lane to a parent's lane in the next row."""

    from_lane: int
    to_lane: int
    color_key: int


@dataclass(frozen=True)
class Commit:
    """A commit with its lane layout for one row of the graph."""

    hash: str
    parents: tuple[str, ...]
    author: str
    date: datetime | None
    subject: str
    decorations: tuple[str, ...]
    lane: int
    node_color_key: int
    incoming_lanes: tuple[int, ...] = ()
    outgoing_lanes: tuple[int, ...] = ()
    lane_colors: tuple[LaneColor, ...] = ()
    outgoing_edges: tuple[LaneEdge, ...] = ()

    @property
    def short_hash(self) -> str:
        return self.hash[:SHORT_HASH_LENGTH]

    @property
    def is_head(self) -> bool:
        return any("HEAD" in decoration for decoration in self.decorations)

    @property
    def converging_lanes(self) -> tuple[int, ...]:
        """Incoming lanes that end in this commit's node besides its own lane.

        These appear when several children expected this commit in different
        lanes; the first claimant keeps the node, the others merge into it.
        """
        outgoing = set(self.outgoing_lanes)
        return tuple(
            lane for lane in self.incoming_lanes if lane != self.lane and lane not in outgoing
        )

    def color_key_for(self, lane: int) -> int | None:
        """Color key of a lane at this row, or None if the lane is not active."""
        for lane_color in self.lane_colors:
            if lane_color.lane == lane:
                return lane_color.color_key
        return None
