"""Tests for the branch membership calculator."""

import pytest

from githerald.engine.branches import BranchMembership
from githerald.engine.gateway import CommandGateway


@pytest.fixture
def membership(gateway):
    return BranchMembership(gateway)


@pytest.fixture
def two_branch_repo(builder):
    """main: c1-c2-c3, feature: c1-c2-c4-c5."""
    c1 = builder.commit("c1", {"a.txt": "1\n"})
    c2 = builder.commit("c2", {"a.txt": "2\n"})
    main = builder.main
    builder.branch("feature", c2)
    c3 = builder.commit("c3", {"a.txt": "3\n"})
    builder.checkout("feature")
    c4 = builder.commit("c4", {"b.txt": "4\n"})
    c5 = builder.commit("c5", {"b.txt": "5\n"})
    builder.checkout(main)
    return builder, {"c1": c1, "c2": c2, "c3": c3, "c4": c4, "c5": c5}


def test_branch_heads(two_branch_repo, membership):
    builder, c = two_branch_repo

    assert membership.branch_heads() == {c["c3"], c["c5"]}


def test_single_branch_unique_commits_are_all_reachable(linear_repo, membership):
    builder, commits = linear_repo

    assert membership.unique_to_branch(builder.main) == set(commits)
    assert membership.unique_to_branch("HEAD") == set(commits)


def test_unique_to_branch_excludes_other_heads(two_branch_repo, membership):
    builder, c = two_branch_repo

    assert membership.unique_to_branch(builder.main) == {c["c3"]}
    assert membership.unique_to_branch("feature") == {c["c4"], c["c5"]}


def test_branch_at_the_same_commit_keeps_its_exclusion(two_branch_repo, membership):
    builder, c = two_branch_repo
    builder.branch("copy", c["c3"])

    assert membership.other_heads(builder.main) == {c["c3"], c["c5"]}
    assert membership.unique_to_branch(builder.main) == set()
    assert membership.unique_to_branch("copy") == set()
    assert membership.unique_to_branch("refs/heads/copy") == set()


def test_heads_by_ref(two_branch_repo, membership):
    builder, c = two_branch_repo
    builder.branch("copy", c["c3"])

    assert membership.heads_by_ref() == {
        f"refs/heads/{builder.main}": c["c3"],
        "refs/heads/copy": c["c3"],
        "refs/heads/feature": c["c5"],
    }


def test_branch_ref_accepts_short_full_and_symbolic_names(two_branch_repo, membership):
    builder, c = two_branch_repo

    assert membership.branch_ref("feature") == "refs/heads/feature"
    assert membership.branch_ref("refs/heads/feature") == "refs/heads/feature"
    assert membership.branch_ref("HEAD") == f"refs/heads/{builder.main}"
    assert membership.branch_ref(c["c4"]) is None


def test_commit_tip_leaves_out_branches_at_that_commit(two_branch_repo, membership):
    builder, c = two_branch_repo

    assert membership.other_heads(c["c5"]) == {c["c3"]}
    assert membership.unique_to_branch(c["c5"]) == {c["c4"], c["c5"]}


def test_accepts_repository_path(two_branch_repo):
    builder, c = two_branch_repo

    membership = BranchMembership(CommandGateway(builder.path))

    assert membership.branch_heads() == {c["c3"], c["c5"]}
