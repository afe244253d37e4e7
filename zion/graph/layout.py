"""
Commit graph lane layout.

Takes commits in `git log` order (children before parents, newest first) and
assigns every commit a lane, the lanes open above and below its row, a color
key per open lane, and the connectors needed where a parent is drawn in a
different lane than its child.

The layout is a single forward pass. All working state lives in a
`_LanePass` created per call, so independent layouts can run concurrently.
"""

import heapq
from collections.abc import Iterable, Sequence

from zion.graph.types import Commit, LaneColor, LaneEdge, ParsedCommit

MAIN_CHAIN_COLOR_KEY = 0


class _LanePass:
    """Working state for one layout pass."""

    def __init__(self, main_chain: frozenset[str]) -> None:
        # lane -> hash of the commit expected to appear in that lane
        self.pending: dict[int, str] = {}
        # hash -> lanes expecting it
        self.claims: dict[str, list[int]] = {}
        # lane -> color key, for open lanes only
        self.colors: dict[int, int] = {}
        self.free_lanes: list[int] = []
        self.next_lane = 0
        self.main_chain = main_chain
        self.next_color_key = MAIN_CHAIN_COLOR_KEY + 1 if main_chain else 0

    def _fresh_color_key(self, commit_hash: str) -> int:
        if commit_hash in self.main_chain:
            return MAIN_CHAIN_COLOR_KEY
        key = self.next_color_key
        self.next_color_key += 1
        return key

    def _allocate_lane(self, commit_hash: str) -> int:
        """Open the lowest free lane for a new line of descent."""
        if self.free_lanes:
            lane = heapq.heappop(self.free_lanes)
        else:
            lane = self.next_lane
            self.next_lane += 1
        self.colors[lane] = self._fresh_color_key(commit_hash)
        return lane

    def _claim(self, lane: int, commit_hash: str) -> None:
        self.pending[lane] = commit_hash
        self.claims.setdefault(commit_hash, []).append(lane)

    def step(self, commit: ParsedCommit) -> Commit:
        incoming = sorted(self.pending)

        own_lanes = self.claims.pop(commit.hash, [])
        for lane in own_lanes:
            del self.pending[lane]

        if own_lanes:
            # Leftmost claimant keeps the node; any other lanes converge into it
            node_lane = min(own_lanes)
        else:
            # Branch tip with no child above it in this window
            node_lane = self._allocate_lane(commit.hash)
        node_color_key = self.colors[node_lane]

        edges: list[LaneEdge] = []
        for index, parent in enumerate(commit.parents):
            if index == 0:
                # Mainline goes straight down, keeping lane and color
                self._claim(node_lane, parent)
                continue

            if parent in self.claims:
                target = min(self.claims[parent])
            else:
                target = self._allocate_lane(parent)
                self._claim(target, parent)

            if target != node_lane:
                edges.append(LaneEdge(node_lane, target, self.colors[target]))

        outgoing = sorted(self.pending)

        active = set(incoming) | set(outgoing) | {node_lane}
        lane_colors = tuple(LaneColor(lane, self.colors[lane]) for lane in sorted(active))

        # Freed lanes only become available to the next row
        released = (set(incoming) | {node_lane}) - set(outgoing)
        for lane in sorted(released):
            del self.colors[lane]
            heapq.heappush(self.free_lanes, lane)

        return Commit(
            hash=commit.hash,
            parents=tuple(commit.parents),
            author=commit.author,
            date=commit.date,
            subject=commit.subject,
            decorations=tuple(commit.decorations),
            lane=node_lane,
            node_color_key=node_color_key,
            incoming_lanes=tuple(incoming),
            outgoing_lanes=tuple(outgoing),
            lane_colors=lane_colors,
            outgoing_edges=tuple(edges),
        )


class GraphLayoutEngine:
    """Assigns lanes, colors and connector edges to an ordered commit list."""

    def layout(
        self,
        commits: Iterable[ParsedCommit],
        main_chain: Iterable[str] = (),
    ) -> list[Commit]:
        """
        Lay out commits for a swimlane graph.

        Args:
            commits: Commits in `git log` order, children before parents.
                Parents missing from the list keep their lane open to the end.
            main_chain: Hashes whose lanes get the reserved color key 0,
                usually from `main_first_parent_chain`.

        Returns:
            One laid-out Commit per input commit, in the same order.
        """
        lane_pass = _LanePass(frozenset(main_chain))
        return [lane_pass.step(commit) for commit in commits]


def max_lane_count(commits: Sequence[Commit]) -> int:
    """Number of lane columns a renderer needs for the whole result set."""
    highest = -1
    for commit in commits:
        highest = max(
            highest,
            commit.lane,
            *commit.incoming_lanes,
            *commit.outgoing_lanes,
            *(edge.to_lane for edge in commit.outgoing_edges),
        )
    return highest + 1


def main_first_parent_chain(commits: Sequence[ParsedCommit]) -> set[str]:
    """Walk first parents from the commit decorated with HEAD."""
    head = next((commit for commit in commits if commit.is_head), None)
    if head is None:
        return set()

    parents_by_hash = {commit.hash: commit.parents for commit in commits}
    chain: set[str] = set()
    current = head.hash
    while current not in chain:
        chain.add(current)
        parents = parents_by_hash.get(current)
        if not parents:
            break
        current = parents[0]

    return chain
