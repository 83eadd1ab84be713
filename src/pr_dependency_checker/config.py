"""
Configuration management for PR Dependency Checker.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_DOMAIN = "github.com"
DEFAULT_API_URL = "https://api.github.com"


class Settings(BaseSettings):
    """Application settings."""

    # GitHub settings
    github_token: Optional[str] = Field(default=None, json_schema_extra={"env": "GITHUB_TOKEN"})
    github_api_url: str = Field(default=DEFAULT_API_URL, json_schema_extra={"env": "GITHUB_API_URL"})

    # GitHub Actions context
    github_repository: Optional[str] = Field(default=None, json_schema_extra={"env": "GITHUB_REPOSITORY"})
    github_event_path: Optional[str] = Field(default=None, json_schema_extra={"env": "GITHUB_EVENT_PATH"})

    # Logging settings
    log_level: str = Field(default="INFO", json_schema_extra={"env": "LOG_LEVEL"})

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unexpected environment variables
    )


settings = Settings()


def parse_repository(value: Optional[str]) -> Tuple[str, str]:
    """Split an 'owner/repo' string into its two parts.

    Raises:
        ConfigurationError: If the value is missing or not of the form owner/repo
    """
    if not value:
        raise ConfigurationError("Repository is required. Use --repo owner/repo or set GITHUB_REPOSITORY.")

    parts = value.strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise ConfigurationError(f"Invalid repository '{value}'. Expected format: owner/repo")
    return parts[0], parts[1]


def parse_custom_domains(value: Optional[str]) -> List[str]:
    """Split a whitespace-delimited list of extra trusted domains."""
    if not value:
        return []
    return value.split()


def build_trusted_domains(custom_domains: Iterable[str] = ()) -> Tuple[str, ...]:
    """Return the default host followed by the custom hosts, without blanks or duplicates."""
    domains: List[str] = [DEFAULT_DOMAIN]
    for domain in custom_domains:
        domain = domain.strip()
        if domain and domain.lower() not in (d.lower() for d in domains):
            domains.append(domain)
    return tuple(domains)


@dataclass(frozen=True)
class CheckerConfig:
    """Explicit configuration for one dependency check.

    Attributes:
        owner: Owner of the repository containing the pull request.
        repo: Name of the repository containing the pull request. Bare
            ``#123`` references resolve against ``owner/repo``.
        trusted_domains: Hosts accepted in full URL and markdown references.
    """

    owner: str
    repo: str
    trusted_domains: Tuple[str, ...] = (DEFAULT_DOMAIN,)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def build(cls, repository: Optional[str], custom_domains: Optional[str] = None) -> "CheckerConfig":
        owner, repo = parse_repository(repository)
        return cls(owner=owner, repo=repo, trusted_domains=build_trusted_domains(parse_custom_domains(custom_domains)))


def _event_number(value: Any, event_path: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid pull request number {value!r} in GitHub event payload at {event_path}") from e


def read_event_number(event_path: Optional[str]) -> Optional[int]:
    """Read the issue or pull request number from a GitHub Actions event payload.

    Follows the same lookup order as the Actions toolkit context: the
    ``pull_request`` object, then ``issue``, then the top-level ``number``.
    Returns None when the file is absent or carries no number.
    """
    if not event_path:
        return None

    path = Path(event_path)
    if not path.is_file():
        return None

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Could not parse GitHub event payload at {event_path}: {e}") from e

    if not isinstance(payload, dict):
        return None

    for key in ("pull_request", "issue"):
        item = payload.get(key)
        if isinstance(item, dict) and item.get("number") is not None:
            return _event_number(item["number"], event_path)

    number = payload.get("number")
    return _event_number(number, event_path) if number is not None else None


def resolve_pr_number(explicit: Optional[int], event_path: Optional[str]) -> int:
    """Return the pull request to check: the explicit value, or the one from the event payload.

    Raises:
        ConfigurationError: If neither source provides a number
    """
    if explicit is not None:
        return explicit

    number = read_event_number(event_path)
    if number is None:
        raise ConfigurationError("Pull request number is required. Use --pr-number or run from a pull_request event.")
    return number
