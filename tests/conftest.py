"""Shared fixtures: small pygit2 repositories."""

import pygit2
import pytest


def make_commit(repo: pygit2.Repository, message: str, parents: list, time: int) -> pygit2.Oid:
    sig = pygit2.Signature("Tester", "tester@example.com", time, 60)
    tree = repo.TreeBuilder().write()
    return repo.create_commit(None, sig, sig, message, tree, parents)


@pytest.fixture
def merged_repo(tmp_path):
    """
    main:    root -- a ------ m   (HEAD)
                 \\          /
    feature:      b --------
    tag v1 on root.
    """
    repo = pygit2.init_repository(str(tmp_path / "repo"))
    root = make_commit(repo, "root commit\n\nbody text", [], 1000)
    a = make_commit(repo, "work on main", [root], 2000)
    b = make_commit(repo, "work on feature", [root], 2500)
    m = make_commit(repo, "merge feature", [a, b], 3000)

    repo.references.create("refs/heads/main", m)
    repo.references.create("refs/heads/feature", b)
    repo.references.create("refs/tags/v1", root)
    repo.set_head("refs/heads/main")

    return {
        "path": str(tmp_path / "repo"),
        "root": str(root),
        "a": str(a),
        "b": str(b),
        "m": str(m),
    }
