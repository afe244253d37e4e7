"""Commit history view - lane graph list with background refresh."""

from PySide6.QtCore import QModelIndex, QThread, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListView,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from zion.config.settings import Settings
from zion.git_backend.repository import LaidOutHistory
from zion.ui.git_graph.delegate import LaneGraphDelegate
from zion.ui.git_graph.model import CommitListModel
from zion.ui.git_graph.workers import HistoryWorker, RefreshTracker


class CommitHistoryView(QWidget):
    """Scrollable commit graph for one repository."""

    commit_selected = Signal(str)  # oid

    def __init__(
        self,
        repo_path: str,
        settings: Settings,
        reference: str | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.repo_path = repo_path
        self.settings = settings
        self.reference = reference
        self.limit = settings.get_page_size()

        self._tracker = RefreshTracker()
        # generation -> (thread, worker); stale loads stay here until they finish
        self._loads: dict[int, tuple[QThread, HistoryWorker]] = {}
        self._selected_oid: str | None = None

        self.model = CommitListModel(self)
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.list_view = QListView()
        self.list_view.setModel(self.model)
        self.list_view.setItemDelegate(
            LaneGraphDelegate(
                row_height=self.settings.get_row_height(),
                lane_width=self.settings.get_lane_width(),
                parent=self.list_view,
            )
        )
        self.list_view.setUniformItemSizes(True)
        self.list_view.clicked.connect(self._on_clicked)
        layout.addWidget(self.list_view)

        footer = QHBoxLayout()
        self.status_label = QLabel("")
        footer.addWidget(self.status_label, 1)
        self.load_more_button = QPushButton("Load more")
        self.load_more_button.setEnabled(False)
        self.load_more_button.clicked.connect(self.load_more)
        footer.addWidget(self.load_more_button)
        layout.addLayout(footer)

    def refresh(self) -> None:
        """Reload history in the background; any load still running becomes stale."""
        generation = self._tracker.begin()

        thread = QThread()
        worker = HistoryWorker(
            self.repo_path,
            generation,
            self.reference,
            self.limit,
            highlight_main_chain=self.settings.get_highlight_main_chain(),
        )
        worker.moveToThread(thread)

        worker.finished.connect(self._on_history_loaded)
        worker.error.connect(self._on_history_error)
        thread.started.connect(worker.run)

        self._loads[generation] = (thread, worker)
        self.status_label.setText("Loading history...")
        thread.start()

    def load_more(self) -> None:
        """Extend the window by one page; the whole window is laid out again."""
        self.limit += self.settings.get_page_size()
        self.refresh()

    def set_reference(self, reference: str | None) -> None:
        """Show history for another branch or tag (None for all refs)."""
        self.reference = reference
        self.limit = self.settings.get_page_size()
        self.refresh()

    def _finish_load(self, generation: int) -> None:
        """Clean up the thread of a finished load"""
        load = self._loads.pop(generation, None)
        if load is not None:
            thread, _worker = load
            thread.quit()
            thread.wait()

    def _on_history_loaded(self, generation: int, history: LaidOutHistory) -> None:
        self._finish_load(generation)
        if not self._tracker.is_current(generation):
            return

        self.model.set_history(history)
        self.load_more_button.setEnabled(history.has_more)
        suffix = "+" if history.has_more else ""
        self.status_label.setText(f"{len(history.commits)}{suffix} commits")

        # Keep selection across refreshes when the commit is still loaded
        if self._selected_oid:
            row = self.model.row_of(self._selected_oid)
            if row >= 0:
                self.list_view.setCurrentIndex(self.model.index(row))

    def _on_history_error(self, generation: int, error_msg: str) -> None:
        self._finish_load(generation)
        if not self._tracker.is_current(generation):
            return
        self.status_label.setText(f"❌ Error loading history: {error_msg}")

    def _on_clicked(self, index: QModelIndex) -> None:
        commit = self.model.commit_at(index.row())
        if commit is None:
            return
        self._selected_oid = commit.hash
        self.commit_selected.emit(commit.hash)

    def shutdown(self) -> None:
        """Wait for background loads before the widget goes away."""
        for generation in list(self._loads):
            self._finish_load(generation)
