"""List model holding one laid-out commit per row."""

from typing import Any

from PySide6.QtCore import QAbstractListModel, QModelIndex, QPersistentModelIndex, Qt

from zion.git_backend.repository import LaidOutHistory
from zion.graph.types import Commit

COMMIT_ROLE = Qt.ItemDataRole.UserRole + 1


class CommitListModel(QAbstractListModel):
    """Rows of the commit graph. Replaced wholesale on every refresh."""

    def __init__(self, parent: Any = None) -> None:
        super().__init__(parent)
        self._commits: list[Commit] = []
        self.max_lanes = 0
        self.has_more = False

    def set_history(self, history: LaidOutHistory) -> None:
        """Replace all rows with a freshly laid-out history."""
        self.beginResetModel()
        self._commits = list(history.commits)
        self.max_lanes = history.max_lanes
        self.has_more = history.has_more
        self.endResetModel()

    def commit_at(self, row: int) -> Commit | None:
        if 0 <= row < len(self._commits):
            return self._commits[row]
        return None

    def row_of(self, commit_hash: str) -> int:
        """Row index of a commit, or -1 if it is not loaded."""
        for row, commit in enumerate(self._commits):
            if commit.hash == commit_hash:
                return row
        return -1

    def rowCount(  # noqa: N802
        self, parent: QModelIndex | QPersistentModelIndex = QModelIndex()  # noqa: B008
    ) -> int:
        if parent.isValid():
            return 0
        return len(self._commits)

    def data(
        self, index: QModelIndex | QPersistentModelIndex, role: int = Qt.ItemDataRole.DisplayRole
    ) -> Any:
        commit = self.commit_at(index.row()) if index.isValid() else None
        if commit is None:
            return None

        if role == Qt.ItemDataRole.DisplayRole:
            return commit.subject
        if role == Qt.ItemDataRole.ToolTipRole:
            date = commit.date.strftime("%Y-%m-%d %H:%M") if commit.date else ""
            return f"{commit.short_hash}  {commit.author}  {date}\n{commit.subject}"
        if role == COMMIT_ROLE:
            return commit
        return None
