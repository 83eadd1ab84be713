"""
Top-level dependency check for a single pull request.
"""

from typing import Any, Optional

from .config import DEFAULT_API_URL, CheckerConfig
from .dependency_resolver import DependencyResolver
from .github_client import GitHubClient
from .logger_config import get_logger
from .models import CheckResult
from .reference_extractor import ReferenceExtractor

logger = get_logger(__name__)

EMPTY_BODY_MESSAGE = "Pull request body is empty"
SUCCESS_MESSAGE = "All dependencies have been resolved!"


class DependencyEvaluator:
    """Decide whether a pull request is blocked by open dependencies."""

    def __init__(self, client: Any, config: CheckerConfig):
        """
        Args:
            client: Object exposing get_pull_request and get_issue (normally GitHubClient)
            config: Repository identity and trusted domains
        """
        self.client = client
        self.config = config
        self.extractor = ReferenceExtractor(config.owner, config.repo, config.trusted_domains)
        self.resolver = DependencyResolver.from_client(client)

    def evaluate(self, pr_number: int) -> CheckResult:
        """Fetch pull request ``pr_number`` of the configured repository and check its body."""
        logger.info(f"Checking dependencies of {self.config.full_name}#{pr_number}")
        pull_request = self.client.get_pull_request(self.config.owner, self.config.repo, pr_number)
        return self.evaluate_body(pull_request.get("body"))

    def evaluate_body(self, body: Optional[str]) -> CheckResult:
        """Check a pull request body. An empty body passes without any lookups."""
        if not body:
            logger.info(EMPTY_BODY_MESSAGE)
            return CheckResult(success=True, message=EMPTY_BODY_MESSAGE)

        logger.info("Reading PR body...")
        references = self.extractor.extract(body)

        logger.info("Analyzing lines...")
        report = self.resolver.resolve(references)

        if report.unresolved:
            logger.warning(f"{len(report.unresolved)} dependency reference(s) could not be located: " + ", ".join(str(r) for r in report.unresolved))

        if not report.is_mergeable:
            return CheckResult(success=False, message=report.format_message(), report=report)

        logger.info(SUCCESS_MESSAGE)
        return CheckResult(success=True, message=SUCCESS_MESSAGE, report=report)


def run_dependency_check(
    config: CheckerConfig,
    pr_number: int,
    token: Optional[str],
    api_url: str = DEFAULT_API_URL,
) -> CheckResult:
    """Build the GitHub client and evaluate one pull request.

    Open blockers are reported through the returned CheckResult. Any other
    error is logged as the failure reason and re-raised, so callers can tell
    a crash apart from a blocked pull request.
    """
    try:
        logger.info("Initializing...")
        client = GitHubClient(token, base_url=api_url)
        return DependencyEvaluator(client, config).evaluate(pr_number)
    except Exception as e:
        logger.error(f"Dependency check failed: {e}")
        raise
