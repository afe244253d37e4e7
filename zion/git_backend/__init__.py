"""Git backend for reading repository history"""

from zion.git_backend.repository import HistoryPage, LaidOutHistory, ZionRepository, build_history

__all__ = ["HistoryPage", "LaidOutHistory", "ZionRepository", "build_history"]
