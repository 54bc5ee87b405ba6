"""Tests for the command gateway."""

from unittest.mock import MagicMock

import pytest

from githerald.engine import commands
from githerald.engine.gateway import CommandGateway
from githerald.models.errors import CommandFailure


@pytest.fixture
def mock_repo():
    """A repository double whose git.execute returns canned output."""
    repo = MagicMock()
    repo.git.execute.return_value = (0, b"", "")
    return repo


def make_gateway(mock_repo) -> CommandGateway:
    gateway = CommandGateway.__new__(CommandGateway)
    gateway.repo = mock_repo
    return gateway


def test_run_returns_stdout(linear_repo, gateway):
    builder, commits = linear_repo

    assert gateway.run(commands.rev_parse("HEAD")).strip() == commits[-1]


def test_lines_split_output_without_terminators(linear_repo, gateway):
    builder, commits = linear_repo

    lines = gateway.lines(commands.rev_list(["HEAD"], reverse=True))

    assert lines == commits


def test_run_raises_command_failure_on_nonzero_exit(linear_repo, gateway):
    with pytest.raises(CommandFailure) as excinfo:
        gateway.run(commands.rev_list(["does-not-exist"]))

    assert excinfo.value.exit_code != 0
    assert excinfo.value.command[:2] == ["git", "rev-list"]


def test_probe_returns_none_on_failure(linear_repo, gateway):
    assert gateway.probe(commands.cat_file_type("does-not-exist")) is None
    assert gateway.probe(commands.cat_file_type("HEAD")).strip() == "commit"


def test_command_is_passed_as_argument_vector(mock_repo):
    gateway = make_gateway(mock_repo)

    gateway.run(commands.rev_parse("HEAD"))

    args, kwargs = mock_repo.git.execute.call_args
    assert args[0] == ["git", "rev-parse", "--verify", "--quiet", "HEAD"]
    assert kwargs["with_exceptions"] is False
    assert kwargs["stdout_as_string"] is False


def test_invalid_utf8_passes_through(mock_repo):
    mock_repo.git.execute.return_value = (0, b"caf\xe9\nok\n", "")
    gateway = make_gateway(mock_repo)

    lines = gateway.lines(commands.for_each_ref_heads())

    assert lines == ["caf\udce9", "ok"]
    assert lines[0].encode("utf-8", errors="surrogateescape") == b"caf\xe9"


def test_lines_only_split_on_line_feeds(mock_repo):
    mock_repo.git.execute.return_value = (0, b"a\x1eb\x0cc\r\nd\n", "")

    assert make_gateway(mock_repo).lines(commands.for_each_ref_heads()) == ["a\x1eb\x0cc", "d"]


def test_empty_output_has_no_lines(mock_repo):
    assert make_gateway(mock_repo).lines(commands.for_each_ref_heads()) == []


def test_failure_carries_stderr(mock_repo):
    mock_repo.git.execute.return_value = (128, b"", "fatal: bad revision\n")

    with pytest.raises(CommandFailure) as excinfo:
        make_gateway(mock_repo).run(commands.for_each_ref_heads())

    assert excinfo.value.exit_code == 128
    assert excinfo.value.stderr == "fatal: bad revision"
    assert "fatal: bad revision" in str(excinfo.value)
