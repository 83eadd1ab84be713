"""
Pytest configuration and fixtures for PR Dependency Checker tests.
"""

import sys
from pathlib import Path

# Ensure 'src' directory is on sys.path so 'pr_dependency_checker' is importable without installation
_repo_root = Path(__file__).resolve().parents[1]
_src_path = _repo_root / "src"
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

from unittest.mock import Mock

import pytest
from loguru import logger

from pr_dependency_checker.config import CheckerConfig
from pr_dependency_checker.github_client import GitHubClient

_ENV_KEYS = (
    "GITHUB_TOKEN",
    "GITHUB_API_URL",
    "GITHUB_REPOSITORY",
    "GITHUB_EVENT_PATH",
    "GITHUB_ACTIONS",
    "LOG_LEVEL",
    "INPUT_PR-NUMBER",
    "INPUT_CUSTOM-DOMAINS",
    "PR_NUMBER",
    "CUSTOM_DOMAINS",
)


# Test stabilization: eliminate the influence of the GitHub Actions environment the tests may run in
@pytest.fixture(autouse=True)
def _clear_actions_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_logger():
    """Keep log handlers added by a test (e.g. CLI runs) from leaking into the next one."""
    yield
    logger.remove()
    logger.configure(patcher=None)
    logger.add(sys.stderr, level="DEBUG")


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG", format="{message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def mock_github_token():
    """Mock GitHub token for testing."""
    return "test_github_token"


@pytest.fixture
def checker_config():
    """Configuration for a check running in acme/widgets."""
    return CheckerConfig(owner="acme", repo="widgets")


@pytest.fixture
def mock_github_client(mock_github_token):
    """Mock GitHub client for testing."""
    client = Mock(spec=GitHubClient)
    client.token = mock_github_token
    return client


@pytest.fixture
def open_pr_data():
    """Sample payload of an open pull request."""
    return {
        "number": 42,
        "title": "Add widget storage",
        "body": "",
        "state": "open",
        "merged": False,
        "closed_at": None,
        "url": "https://github.com/acme/widgets/pull/42",
    }


@pytest.fixture
def closed_issue_data():
    """Sample payload of a closed issue."""
    return {
        "number": 7,
        "title": "Decide on storage format",
        "body": "",
        "state": "closed",
        "closed_at": "2024-01-01T00:00:00+00:00",
        "url": "https://github.com/other-org/other-repo/issues/7",
    }
