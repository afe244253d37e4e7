"""Tests for commit graph lane layout."""

from zion.graph.layout import GraphLayoutEngine, main_first_parent_chain, max_lane_count
from zion.graph.types import LaneColor, LaneEdge, ParsedCommit


def pc(commit_hash: str, *parents: str, decorations: tuple[str, ...] = ()) -> ParsedCommit:
    return ParsedCommit(hash=commit_hash, parents=parents, decorations=decorations)


def layout(*commits: ParsedCommit, main_chain: set[str] | None = None):
    return GraphLayoutEngine().layout(list(commits), main_chain=main_chain or set())


def by_hash(rows):
    return {row.hash: row for row in rows}


def assert_rows_connect(rows):
    """Lanes leaving a row are exactly the lanes entering the next, with the same colors."""
    for above, below in zip(rows, rows[1:]):
        assert above.outgoing_lanes == below.incoming_lanes
        for lane in above.outgoing_lanes:
            assert above.color_key_for(lane) == below.color_key_for(lane)


class TestBasics:
    """Row count, determinism and the empty case."""

    def test_empty_input(self):
        assert GraphLayoutEngine().layout([]) == []

    def test_row_count_and_order_preserved(self):
        commits = [pc("a", "b"), pc("b", "c"), pc("x"), pc("c")]
        rows = layout(*commits)
        assert [row.hash for row in rows] == ["a", "b", "x", "c"]

    def test_deterministic(self):
        commits = [
            pc("m", "a", "f"),
            pc("f", "r"),
            pc("a", "b", "g"),
            pc("g", "r"),
            pc("b", "r"),
            pc("r"),
        ]
        assert layout(*commits) == layout(*commits)

    def test_input_fields_carried_through(self):
        commit = ParsedCommit(
            hash="abcdef0123456789",
            parents=("p",),
            author="Ada",
            subject="Fix things",
            decorations=("HEAD -> main", "tag: v1"),
        )
        row = GraphLayoutEngine().layout([commit])[0]
        assert row.author == "Ada"
        assert row.subject == "Fix things"
        assert row.decorations == ("HEAD -> main", "tag: v1")
        assert row.parents == ("p",)
        assert row.short_hash == "abcdef01"
        assert row.is_head


class TestMainline:
    """Straight-line history."""

    def test_linear_history_stays_in_lane_zero(self):
        rows = layout(pc("c4", "c3"), pc("c3", "c2"), pc("c2", "c1"), pc("c1", "c0"), pc("c0"))

        for row in rows:
            assert row.lane == 0
            assert row.outgoing_edges == ()
            assert row.lane_colors == (LaneColor(0, rows[0].node_color_key),)

        assert rows[0].incoming_lanes == ()
        assert rows[-1].outgoing_lanes == ()
        assert_rows_connect(rows)

    def test_own_lane_continues_to_first_parent(self):
        rows = layout(pc("a", "b"), pc("b"))
        assert rows[0].lane in rows[0].outgoing_lanes

    def test_root_commit_releases_its_lane(self):
        rows = layout(pc("root"))
        assert rows[0].lane == 0
        assert rows[0].incoming_lanes == ()
        assert rows[0].outgoing_lanes == ()
        assert rows[0].lane_colors == (LaneColor(0, 0),)


class TestMerges:
    """Merge commits and reconverging branches."""

    def test_merge_fans_out_to_new_lane(self):
        rows = layout(pc("t", "c"), pc("c", "p1", "p2"), pc("p1"), pc("p2"))
        merge = rows[1]

        assert merge.lane == 0
        assert merge.outgoing_edges == (LaneEdge(0, 1, 1),)
        assert merge.outgoing_lanes == (0, 1)
        assert merge.lane_colors == (LaneColor(0, 0), LaneColor(1, 1))
        assert_rows_connect(rows)

    def test_merge_and_reconverge_scenario(self):
        rows = by_hash(layout(pc("A", "B", "C"), pc("B", "D"), pc("C", "D"), pc("D")))

        assert rows["A"].lane == 0
        assert rows["A"].outgoing_edges == (LaneEdge(0, 1, rows["C"].node_color_key),)
        assert rows["B"].lane == 0
        assert rows["C"].lane == 1

        # Both lanes wait for D; the lowest lane keeps the node
        assert rows["C"].outgoing_lanes == (0, 1)
        assert rows["D"].lane == 0
        assert rows["D"].incoming_lanes == (0, 1)
        assert rows["D"].outgoing_lanes == ()
        assert rows["D"].converging_lanes == (1,)

    def test_lane_colors_stable_while_open(self):
        rows = layout(pc("A", "B", "C"), pc("B", "D"), pc("C", "D"), pc("D"))
        expected = (LaneColor(0, 0), LaneColor(1, 1))
        for row in rows:
            assert row.lane_colors == expected
        assert_rows_connect(rows)

    def test_merge_parent_already_expected_reuses_its_lane(self):
        rows = by_hash(layout(pc("F", "P"), pc("M", "Q", "P"), pc("Q", "P"), pc("P")))

        assert rows["F"].lane == 0
        assert rows["M"].lane == 1
        # Edge joins the existing lane for P instead of opening a third one
        assert rows["M"].outgoing_edges == (LaneEdge(1, 0, rows["F"].node_color_key),)
        assert rows["M"].outgoing_lanes == (0, 1)
        assert rows["P"].lane == 0
        assert rows["P"].converging_lanes == (1,)
        assert max_lane_count(list(rows.values())) == 2

    def test_octopus_merge_fans_out_in_parent_order(self):
        rows = layout(pc("O", "a", "b", "c"), pc("a"), pc("b"), pc("c"))
        octopus = rows[0]
        assert [edge.to_lane for edge in octopus.outgoing_edges] == [1, 2]
        assert octopus.outgoing_lanes == (0, 1, 2)


class TestLaneReuse:
    """Freed lanes are handed out lowest first."""

    def test_new_branch_reuses_lowest_freed_lane(self):
        rows = by_hash(layout(pc("A", "B"), pc("R"), pc("S", "B"), pc("B")))

        assert rows["R"].lane == 1
        assert rows["R"].outgoing_lanes == (0,)
        assert rows["S"].lane == 1
        # A reused lane represents a new line and gets a new color
        assert rows["S"].node_color_key != rows["R"].node_color_key
        assert max_lane_count(list(rows.values())) == 2

    def test_lane_freed_in_a_row_is_not_reused_in_that_row(self):
        rows = by_hash(layout(pc("X", "Z"), pc("Y", "Z"), pc("Z", "P", "Q"), pc("P"), pc("Q")))

        # Lane 1 converges into Z in the same row that needs a lane for Q
        assert rows["Z"].converging_lanes == (1,)
        assert rows["Z"].outgoing_edges[0].to_lane == 2
        assert rows["Z"].outgoing_lanes == (0, 2)

    def test_freed_lane_available_on_next_row(self):
        rows = by_hash(layout(pc("A", "B"), pc("R"), pc("T"), pc("B")))
        assert rows["R"].lane == 1
        assert rows["T"].lane == 1

    def test_lowest_free_lane_preferred(self):
        rows = by_hash(
            layout(
                pc("A", "Z", "X", "Y"),
                pc("X"),
                pc("Y"),
                pc("N", "Z"),
                pc("Z"),
            )
        )
        assert rows["X"].lane == 1
        assert rows["Y"].lane == 2
        assert rows["N"].lane == 1


class TestMalformedInput:
    """Truncated and inconsistent input never raises."""

    def test_missing_parent_keeps_lane_open(self):
        rows = layout(pc("A", "missing"), pc("B"), pc("C"))

        for row in rows:
            assert 0 in row.outgoing_lanes
        assert rows[1].lane == 1
        assert rows[2].lane == 1
        assert_rows_connect(rows)

    def test_truncated_window(self):
        rows = layout(pc("a", "b"), pc("b", "c"))
        assert rows[-1].outgoing_lanes == (0,)

    def test_duplicate_hashes(self):
        rows = layout(pc("A", "B"), pc("A", "B"), pc("B"))
        assert len(rows) == 3
        assert rows[0].lane == 0
        assert rows[1].lane == 1
        assert rows[2].converging_lanes == (1,)

    def test_cycle_does_not_loop(self):
        rows = layout(pc("A", "B"), pc("B", "A"))
        assert len(rows) == 2
        assert rows[1].outgoing_lanes == (0,)

    def test_duplicate_parent_adds_no_edge(self):
        rows = layout(pc("A", "B", "B"), pc("B"))
        assert rows[0].outgoing_edges == ()
        assert rows[0].outgoing_lanes == (0,)


class TestMainChain:
    """Reserved color for HEAD's first-parent line."""

    def test_first_parent_chain_from_head(self):
        commits = [
            pc("F", "A", decorations=("feature",)),
            pc("H", "A", "F", decorations=("HEAD -> main",)),
            pc("A", "R"),
            pc("R"),
        ]
        assert main_first_parent_chain(commits) == {"H", "A", "R"}

    def test_no_head_gives_empty_chain(self):
        assert main_first_parent_chain([pc("A", "B"), pc("B")]) == set()

    def test_chain_with_cycle_terminates(self):
        commits = [pc("A", "B", decorations=("HEAD",)), pc("B", "A")]
        assert main_first_parent_chain(commits) == {"A", "B"}

    def test_main_chain_takes_reserved_color(self):
        commits = [
            pc("F", "A", decorations=("feature",)),
            pc("H", "A", decorations=("HEAD -> main",)),
            pc("A"),
        ]
        plain = by_hash(layout(*commits))
        assert plain["F"].node_color_key == 0
        assert plain["H"].node_color_key == 1

        highlighted = by_hash(layout(*commits, main_chain=main_first_parent_chain(commits)))
        assert highlighted["H"].node_color_key == 0
        assert highlighted["F"].node_color_key == 1


class TestMaxLaneCount:
    def test_empty(self):
        assert max_lane_count([]) == 0

    def test_linear(self):
        assert max_lane_count(layout(pc("a", "b"), pc("b"))) == 1

    def test_counts_edge_targets(self):
        rows = layout(pc("m", "a", "b"), pc("a"), pc("b"))
        assert max_lane_count(rows) == 2


class TestRowInvariants:
    """Properties that hold for every row of a larger history."""

    HISTORY = [
        pc("m2", "m1", "f2", decorations=("HEAD -> main",)),
        pc("f2", "f1"),
        pc("m1", "b", "h1"),
        pc("h1", "b"),
        pc("f1", "b"),
        pc("t", "c"),
        pc("b", "a"),
        pc("a", "root"),
        pc("c", "gone"),
        pc("root"),
    ]

    def test_rows_connect(self):
        assert_rows_connect(layout(*self.HISTORY))

    def test_own_lane_outgoing_unless_root(self):
        for row in layout(*self.HISTORY):
            if row.parents:
                assert row.lane in row.outgoing_lanes
            else:
                assert row.lane not in row.outgoing_lanes

    def test_lane_colors_cover_active_lanes(self):
        for row in layout(*self.HISTORY):
            active = set(row.incoming_lanes) | set(row.outgoing_lanes) | {row.lane}
            assert [lc.lane for lc in row.lane_colors] == sorted(active)

    def test_edges_start_at_node_and_end_in_open_lane(self):
        for row in layout(*self.HISTORY):
            for edge in row.outgoing_edges:
                assert edge.from_lane == row.lane
                assert edge.to_lane in row.outgoing_lanes
                assert edge.color_key == row.color_key_for(edge.to_lane)
