"""Command Line Interface for PR Dependency Checker."""

import sys
from typing import Optional

import click
from dotenv import load_dotenv

from . import __version__ as CHECKER_VERSION
from . import actions_output
from .config import CheckerConfig, Settings, resolve_pr_number
from .evaluator import run_dependency_check
from .exceptions import ConfigurationError
from .logger_config import VALID_LOG_LEVELS, get_logger, setup_logger

# Load environment variables
load_dotenv()

logger = get_logger(__name__)


def _report_failure(message: str) -> None:
    """Surface a failure message on stderr, or as an annotation on GitHub Actions."""
    if actions_output.is_github_actions():
        actions_output.set_failed(message)
    else:
        click.echo(message, err=True)


@click.command(help="Fail when a pull request body declares dependencies on pull requests or issues that are still open.")
@click.version_option(version=CHECKER_VERSION, package_name="pr-dependency-checker")
@click.option("--repo", help="Repository containing the pull request (owner/repo). Defaults to GITHUB_REPOSITORY.")
@click.option(
    "--pr-number",
    type=int,
    envvar=["INPUT_PR-NUMBER", "PR_NUMBER"],
    help="Pull request to check. Defaults to the pull request of the triggering GitHub event.",
)
@click.option(
    "--custom-domains",
    envvar=["INPUT_CUSTOM-DOMAINS", "CUSTOM_DOMAINS"],
    default="",
    help="Space-separated hosts trusted in dependency URLs, in addition to github.com.",
)
@click.option("--github-token", envvar="GITHUB_TOKEN", help="GitHub API token")
@click.option("--api-url", help="GitHub REST API root. Defaults to GITHUB_API_URL or https://api.github.com.")
@click.option("--event-path", help="GitHub event payload used to find the pull request number. Defaults to GITHUB_EVENT_PATH.")
@click.option(
    "--log-level",
    type=click.Choice(VALID_LOG_LEVELS, case_sensitive=False),
    help="Log level. Defaults to LOG_LEVEL or INFO.",
)
@click.option("--log-file", help="Also write logs to this file.")
def main(
    repo: Optional[str],
    pr_number: Optional[int],
    custom_domains: str,
    github_token: Optional[str],
    api_url: Optional[str],
    event_path: Optional[str],
    log_level: Optional[str],
    log_file: Optional[str],
) -> None:
    settings = Settings()

    setup_logger(log_level=log_level or settings.log_level, log_file=log_file, stream=sys.stdout)

    try:
        config = CheckerConfig.build(repo or settings.github_repository, custom_domains)
        number = resolve_pr_number(pr_number, event_path or settings.github_event_path)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    logger.debug(f"Trusted domains: {', '.join(config.trusted_domains)}")

    try:
        result = run_dependency_check(
            config,
            number,
            token=github_token or settings.github_token,
            api_url=api_url or settings.github_api_url,
        )
    except Exception as e:
        _report_failure(str(e))
        raise

    if not result.success:
        _report_failure(result.message)
        sys.exit(1)

    click.echo(result.message)


if __name__ == "__main__":
    main()
