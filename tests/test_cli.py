"""
Tests for the pr-dependency-check command.
"""

import json
from unittest.mock import Mock, patch

from click.testing import CliRunner
from github.GithubException import BadCredentialsException

from pr_dependency_checker.cli import main

TARGET_PR = {"number": 100, "title": "Target", "body": "This depends on #42", "merged": False, "closed_at": None}
OPEN_PR = {"number": 42, "title": "Add widget storage", "merged": False, "closed_at": None}
MERGED_PR = {"number": 42, "title": "Add widget storage", "merged": True, "closed_at": "2024-01-01T00:00:00"}


def _client(*pull_requests):
    client = Mock()
    client.get_pull_request.side_effect = list(pull_requests)
    return client


class TestCLI:
    """Test cases for the command line entry point."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "--repo" in result.output
        assert "--pr-number" in result.output
        assert "--custom-domains" in result.output
        assert "--github-token" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0

    @patch("pr_dependency_checker.evaluator.GitHubClient")
    def test_open_dependency_fails(self, mock_client_class):
        mock_client_class.return_value = _client(TARGET_PR, OPEN_PR)

        runner = CliRunner()
        result = runner.invoke(main, ["--repo", "acme/widgets", "--pr-number", "100", "--github-token", "t"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "#42 - Add widget storage" in result.output
        mock_client_class.assert_called_once_with("t", base_url="https://api.github.com")

    @patch("pr_dependency_checker.evaluator.GitHubClient")
    def test_resolved_dependency_passes(self, mock_client_class):
        mock_client_class.return_value = _client(TARGET_PR, MERGED_PR)

        runner = CliRunner()
        result = runner.invoke(main, ["--repo", "acme/widgets", "--pr-number", "100"])

        assert result.exit_code == 0
        assert "All dependencies have been resolved!" in result.output

    @patch("pr_dependency_checker.evaluator.GitHubClient")
    def test_failure_is_annotated_on_github_actions(self, mock_client_class):
        mock_client_class.return_value = _client(TARGET_PR, OPEN_PR)

        runner = CliRunner()
        result = runner.invoke(main, ["--repo", "acme/widgets", "--pr-number", "100"], env={"GITHUB_ACTIONS": "true"})

        assert result.exit_code == 1
        assert "::error::%0AThe following issues need to be resolved before this PR can be merged:%0A%0A#42 - Add widget storage" in result.output

    @patch("pr_dependency_checker.evaluator.GitHubClient")
    def test_reads_github_actions_environment(self, mock_client_class, tmp_path):
        event_path = tmp_path / "event.json"
        event_path.write_text(json.dumps({"pull_request": {"number": 100}}), encoding="utf-8")
        client = _client(
            {"number": 100, "title": "Target", "body": "Depends on https://git.example.com/acme/widgets/pull/42"},
            OPEN_PR,
        )
        mock_client_class.return_value = client

        runner = CliRunner()
        result = runner.invoke(
            main,
            [],
            env={
                "GITHUB_REPOSITORY": "acme/widgets",
                "GITHUB_EVENT_PATH": str(event_path),
                "GITHUB_TOKEN": "env-token",
                "INPUT_CUSTOM-DOMAINS": "git.example.com",
            },
        )

        assert result.exit_code == 1
        assert client.get_pull_request.call_args_list[0].args == ("acme", "widgets", 100)
        assert client.get_pull_request.call_args_list[1].args == ("acme", "widgets", 42)
        mock_client_class.assert_called_once_with("env-token", base_url="https://api.github.com")

    def test_missing_repository_is_a_usage_error(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--pr-number", "1"])

        assert result.exit_code == 1
        assert "Repository is required" in result.output

    def test_missing_pr_number_is_a_usage_error(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--repo", "acme/widgets"])

        assert result.exit_code == 1
        assert "Pull request number is required" in result.output

    @patch("pr_dependency_checker.evaluator.GitHubClient")
    def test_crash_propagates(self, mock_client_class):
        client = Mock()
        client.get_pull_request.side_effect = BadCredentialsException(401, {"message": "Bad credentials"}, None)
        mock_client_class.return_value = client

        runner = CliRunner()
        result = runner.invoke(main, ["--repo", "acme/widgets", "--pr-number", "100"])

        assert result.exit_code == 1
        assert isinstance(result.exception, BadCredentialsException)
        assert "Dependency check failed" in result.output
