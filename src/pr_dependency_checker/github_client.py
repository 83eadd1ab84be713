"""
GitHub API client for PR Dependency Checker.
"""

from typing import Any, Dict, Optional

from github import Auth, Github, Issue, PullRequest, Repository

from .config import DEFAULT_API_URL
from .logger_config import get_logger

logger = get_logger(__name__)


def _isoformat(value: Any) -> Optional[str]:
    return value.isoformat() if value is not None else None


class GitHubClient:
    """GitHub API client for reading pull requests and issues.

    Lookups return plain dictionaries and let ``GithubException`` propagate
    when the item does not exist or cannot be accessed; callers decide how
    to degrade.
    """

    def __init__(self, token: Optional[str], base_url: str = DEFAULT_API_URL):
        """Initialize GitHub client with API token.

        Args:
            token: GitHub API token. When empty the client is anonymous and
                private repositories fail with an authentication error.
            base_url: REST API root, for GitHub Enterprise Server installations
        """
        self.token = token
        self.base_url = base_url
        auth = Auth.Token(token) if token else None
        self.github = Github(auth=auth, base_url=base_url)

    def get_repository(self, repo_name: str) -> Repository.Repository:
        """Get a lazy repository object; errors surface from the item request that follows."""
        return self.github.get_repo(repo_name, lazy=True)

    def get_pr_details(self, pr: PullRequest.PullRequest) -> Dict[str, Any]:
        """Extract the fields a dependency check needs from a pull request."""
        return {
            "number": pr.number,
            "title": pr.title,
            "body": pr.body or "",
            "state": pr.state,
            "merged": bool(pr.merged),
            "closed_at": _isoformat(pr.closed_at),
            "url": pr.html_url,
        }

    def get_issue_details(self, issue: Issue.Issue) -> Dict[str, Any]:
        """Extract the fields a dependency check needs from an issue."""
        return {
            "number": issue.number,
            "title": issue.title,
            "body": issue.body or "",
            "state": issue.state,
            "closed_at": _isoformat(issue.closed_at),
            "url": issue.html_url,
        }

    def get_pull_request(self, owner: str, repo: str, pull_number: int) -> Dict[str, Any]:
        """Fetch a pull request by number.

        Raises:
            GithubException: If the pull request does not exist or cannot be read
        """
        logger.debug(f"GET pull request {owner}/{repo}#{pull_number}")
        repository = self.get_repository(f"{owner}/{repo}")
        pr = repository.get_pull(pull_number)
        return self.get_pr_details(pr)

    def get_issue(self, owner: str, repo: str, issue_number: int) -> Dict[str, Any]:
        """Fetch an issue by number.

        Raises:
            GithubException: If the issue does not exist or cannot be read
        """
        logger.debug(f"GET issue {owner}/{repo}#{issue_number}")
        repository = self.get_repository(f"{owner}/{repo}")
        issue = repository.get_issue(issue_number)
        return self.get_issue_details(issue)
