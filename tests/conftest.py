"""Shared fixtures."""
from unittest.mock import MagicMock

import pytest

from hisendesk.core.executor import CommandResult


@pytest.fixture
def mock_logger():
    return MagicMock()


def make_command_result(stdout: str = "", stderr: str = "", return_code: int = 0) -> CommandResult:
    return CommandResult(
        command="fake",
        return_code=return_code,
        stdout=stdout,
        stderr=stderr,
        duration=0.01,
        success=(return_code == 0),
    )


@pytest.fixture
def fake_executor():
    """Executor whose run_command result is set per test."""
    executor = MagicMock()
    executor.run_command.return_value = make_command_result()
    return executor
