"""
Git repository access using pygit2
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pygit2

from zion.constants import DEFAULT_PAGE_SIZE
from zion.graph.layout import GraphLayoutEngine, main_first_parent_chain, max_lane_count
from zion.graph.types import Commit, ParsedCommit

HEADS_PREFIX = "refs/heads/"
REMOTES_PREFIX = "refs/remotes/"
TAGS_PREFIX = "refs/tags/"


@dataclass
class HistoryPage:
    """A window of history, newest first."""

    commits: list[ParsedCommit] = field(default_factory=list)
    has_more: bool = False


@dataclass
class LaidOutHistory:
    """A history page after lane layout, ready for rendering."""

    commits: list[Commit] = field(default_factory=list)
    has_more: bool = False
    max_lanes: int = 0


class ZionRepository:
    """Reads commit history for the graph view"""

    def __init__(self, repo_path: str | None = None) -> None:
        """Initialize repository"""
        if repo_path is None:
            repo_path = self._find_repo()

        try:
            self.repo = pygit2.Repository(repo_path)
        except pygit2.GitError as e:
            raise ValueError(f"Not a git repository: {repo_path}") from e

    def _find_repo(self) -> str:
        """Find git repository in current directory or parents"""
        current = Path.cwd()
        while current != current.parent:
            if (current / ".git").exists():
                return str(current)
            current = current.parent
        raise ValueError("Not in a git repository")

    @property
    def path(self) -> str:
        return str(self.repo.workdir or self.repo.path)

    def decorations(self) -> dict[str, list[str]]:
        """
        Ref names pointing at each commit, formatted like `git log %D`.

        Returns:
            Dict of commit oid -> names such as "HEAD -> main", "origin/main"
            and "tag: v1.0". HEAD always comes first for its commit.
        """
        result: dict[str, list[str]] = {}
        head_branch = None

        if not self.repo.head_is_unborn:
            head_oid = str(self.repo.head.peel(pygit2.Commit).id)
            if self.repo.head_is_detached:
                result[head_oid] = ["HEAD"]
            else:
                head_branch = self.repo.head.name
                result[head_oid] = [f"HEAD -> {self.repo.head.shorthand}"]

        for name in sorted(self.repo.references):
            if name == head_branch:
                continue
            if name.startswith(HEADS_PREFIX):
                label = name[len(HEADS_PREFIX) :]
            elif name.startswith(REMOTES_PREFIX):
                label = name[len(REMOTES_PREFIX) :]
            elif name.startswith(TAGS_PREFIX):
                label = f"tag: {name[len(TAGS_PREFIX) :]}"
            else:
                continue

            oid = self._peel_to_commit_oid(name)
            if oid is None:
                continue
            result.setdefault(oid, []).append(label)

        return result

    def _peel_to_commit_oid(self, ref_name: str) -> str | None:
        """Resolve a reference to the commit it points at, if any."""
        try:
            commit = self.repo.references[ref_name].peel(pygit2.Commit)
        except (pygit2.GitError, ValueError, KeyError):
            # Tags on trees/blobs and dangling symbolic refs have no commit
            return None
        return str(commit.id)

    def _tip_oids(self, reference: str | None) -> list[pygit2.Oid]:
        """Commits to start the walk from."""
        if reference:
            try:
                commit = self.repo.revparse_single(reference).peel(pygit2.Commit)
            except (KeyError, ValueError, pygit2.GitError) as e:
                raise ValueError(f"Unknown reference: {reference}") from e
            return [commit.id]

        tips: list[pygit2.Oid] = []
        if not self.repo.head_is_unborn:
            tips.append(self.repo.head.peel(pygit2.Commit).id)
        for name in sorted(self.repo.references):
            if not name.startswith((HEADS_PREFIX, REMOTES_PREFIX, TAGS_PREFIX)):
                continue
            oid = self._peel_to_commit_oid(name)
            if oid is None:
                continue
            tip = pygit2.Oid(hex=oid)
            if tip not in tips:
                tips.append(tip)
        return tips

    def load_history(
        self, reference: str | None = None, limit: int = DEFAULT_PAGE_SIZE
    ) -> HistoryPage:
        """
        Load commits newest first, children always before parents.

        Args:
            reference: Branch, tag or revision to start from. None walks
                every branch and tag, like `git log --all`.
            limit: Maximum number of commits to return

        Returns:
            HistoryPage whose has_more is set when older commits exist
        """
        tips = self._tip_oids(reference)
        if not tips:
            return HistoryPage()

        decorations = self.decorations()
        walker = self.repo.walk(
            tips[0], pygit2.enums.SortMode.TOPOLOGICAL | pygit2.enums.SortMode.TIME
        )
        for tip in tips[1:]:
            walker.push(tip)

        commits: list[ParsedCommit] = []
        has_more = False
        for c in walker:
            if len(commits) >= limit:
                has_more = True
                break
            oid = str(c.id)
            commits.append(
                ParsedCommit(
                    hash=oid,
                    parents=tuple(str(p) for p in c.parent_ids),
                    author=c.author.name,
                    date=_author_date(c),
                    subject=c.message.strip().split("\n")[0],
                    decorations=tuple(decorations.get(oid, [])),
                )
            )

        return HistoryPage(commits=commits, has_more=has_more)


def _author_date(commit: pygit2.Commit) -> datetime:
    tz = timezone(timedelta(minutes=commit.author.offset))
    return datetime.fromtimestamp(commit.author.time, tz=tz)


def build_history(
    repo: ZionRepository,
    reference: str | None = None,
    limit: int = DEFAULT_PAGE_SIZE,
    highlight_main_chain: bool = True,
) -> LaidOutHistory:
    """Load a history page and lay it out for the graph."""
    page = repo.load_history(reference, limit)
    main_chain = main_first_parent_chain(page.commits) if highlight_main_chain else set()
    commits = GraphLayoutEngine().layout(page.commits, main_chain=main_chain)
    return LaidOutHistory(
        commits=commits, has_more=page.has_more, max_lanes=max_lane_count(commits)
    )
