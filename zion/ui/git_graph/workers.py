"""
Background loading for the commit graph.

Each refresh gets a generation number. Results are tagged with the
generation that requested them and anything but the latest is dropped, so a
slow load can never overwrite a newer one.
"""

from PySide6.QtCore import QObject, Signal

from zion.git_backend.repository import ZionRepository, build_history


class RefreshTracker:
    """Hands out refresh generations and tells which one is current."""

    def __init__(self) -> None:
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self) -> int:
        """Start a new refresh, making every earlier one stale."""
        self._generation += 1
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation


class HistoryWorker(QObject):
    """Worker for loading and laying out history in a separate thread"""

    finished = Signal(int, object)  # Emitted with (generation, LaidOutHistory)
    error = Signal(int, str)  # Emitted with (generation, message)

    def __init__(
        self,
        repo_path: str,
        generation: int,
        reference: str | None,
        limit: int,
        highlight_main_chain: bool = True,
    ) -> None:
        super().__init__()
        self.repo_path = repo_path
        self.generation = generation
        self.reference = reference
        self.limit = limit
        self.highlight_main_chain = highlight_main_chain

    def run(self) -> None:
        """Load history"""
        try:
            # Own repository handle; pygit2 objects are not shared across threads
            repo = ZionRepository(self.repo_path)
            history = build_history(
                repo,
                reference=self.reference,
                limit=self.limit,
                highlight_main_chain=self.highlight_main_chain,
            )
            self.finished.emit(self.generation, history)
        except Exception as e:
            import traceback

            print(f"❌ HistoryWorker error: {e}")
            traceback.print_exc()
            self.error.emit(self.generation, str(e))
