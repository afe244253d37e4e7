#!/usr/bin/env python3
"""
Zion - visual git client
"""

import argparse
import sys

from zion.config.settings import Settings
from zion.git_backend.repository import ZionRepository, build_history
from zion.graph.text import render_text


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="zion",
        description="Zion - visual git client",
    )
    parser.add_argument(
        "repo",
        nargs="?",
        default=None,
        help="Repository to open (default: the repository containing the current directory)",
    )
    parser.add_argument(
        "--ref",
        default=None,
        help="Branch, tag or revision to show (default: all refs)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Number of commits to load (default: graph.page_size setting)",
    )
    parser.add_argument(
        "--text",
        action="store_true",
        help="Print the commit graph to stdout instead of opening a window",
    )
    return parser.parse_args(argv)


def print_graph(
    repo: ZionRepository, reference: str | None, limit: int, settings: Settings
) -> None:
    history = build_history(
        repo,
        reference=reference,
        limit=limit,
        highlight_main_chain=settings.get_highlight_main_chain(),
    )
    for line in render_text(history.commits):
        print(line)
    if history.has_more:
        print(f"... more history beyond {limit} commits")


def run_window(
    repo: ZionRepository, reference: str | None, limit: int, settings: Settings
) -> int:
    from PySide6.QtWidgets import QApplication, QMainWindow

    from zion.ui.git_graph.widget import CommitHistoryView

    app = QApplication(sys.argv)
    app.setApplicationName("Zion")
    app.setOrganizationName("Zion")

    window = QMainWindow()
    window.setWindowTitle(f"Zion - {repo.path}")
    view = CommitHistoryView(repo.path, settings, reference=reference)
    view.limit = limit
    window.setCentralWidget(view)
    window.resize(900, 700)
    window.show()

    settings.add_recent_repository(repo.path)
    settings.save()

    view.refresh()
    app.aboutToQuit.connect(view.shutdown)
    return app.exec()


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings = Settings()
    limit = args.limit if args.limit is not None else settings.get_page_size()

    try:
        repo = ZionRepository(args.repo)
        if args.text:
            print_graph(repo, args.ref, limit, settings)
            return
    except ValueError as e:
        print(f"zion: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(run_window(repo, args.ref, limit, settings))
