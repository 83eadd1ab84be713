"""
Extraction of "depends on" / "blocked by" references from pull request bodies.
"""

import re
from typing import Iterable, List, Optional, Pattern, Tuple

from .config import build_trusted_domains
from .logger_config import get_logger
from .models import DependencyReference, ReferenceForm, ReferenceMatch

logger = get_logger(__name__)

KEY_PHRASES = r"depends on|blocked by"
ITEM_TYPES = r"issues|pull"

# GitHub issue and pull request numbers are 32-bit signed integers
MAX_REFERENCE_NUMBER = 2**31 - 1

_KEYWORD = rf"(?:{KEY_PHRASES}):? "
_OWNER = r"(?P<owner>[-_\w]+)"
_REPO = r"(?P<repo>[-._a-z0-9]+)"
_NUMBER = r"(?P<number>\d+)"

# Qualified forms, in the order their matches are reported
_QUALIFIED_FORMS = (
    ReferenceForm.SHORTHAND,
    ReferenceForm.PARTIAL_PATH,
    ReferenceForm.FULL_URL,
    ReferenceForm.MARKDOWN_LINK,
)


def build_domain_pattern(domains: Iterable[str]) -> str:
    """Join trusted domains into a regex alternation, escaping each one literally."""
    return "|".join(re.escape(domain) for domain in domains)


def build_patterns(domains: Iterable[str]) -> List[Tuple[ReferenceForm, Pattern[str]]]:
    """Compile one pattern per reference form for the given trusted domains."""
    domain_pattern = build_domain_pattern(domains)
    url = rf"https?://(?:{domain_pattern})/{_OWNER}/{_REPO}/(?:{ITEM_TYPES})/{_NUMBER}"

    sources = [
        (ReferenceForm.BARE_NUMBER, rf"{_KEYWORD}#{_NUMBER}"),
        (ReferenceForm.SHORTHAND, rf"{_KEYWORD}{_OWNER}/{_REPO}#{_NUMBER}"),
        (ReferenceForm.PARTIAL_PATH, rf"{_KEYWORD}{_OWNER}/{_REPO}/(?:{ITEM_TYPES})/{_NUMBER}"),
        (ReferenceForm.FULL_URL, rf"{_KEYWORD}{url}"),
        (ReferenceForm.MARKDOWN_LINK, rf"{_KEYWORD}\[.*\]\({url}\)"),
    ]
    # ASCII: \d and \w must not match fullwidth or other non-ASCII digits and letters
    return [(form, re.compile(source, re.IGNORECASE | re.ASCII)) for form, source in sources]


class ReferenceExtractor:
    """Find dependency references in free text.

    Bare ``#123`` references are attributed to the repository the text
    belongs to (``owner``/``repo``). Full URLs and markdown links are only
    recognized when they point at one of ``trusted_domains``; the default
    host is always trusted.
    """

    def __init__(self, owner: str, repo: str, trusted_domains: Optional[Iterable[str]] = None):
        self.owner = owner
        self.repo = repo
        self.trusted_domains: Tuple[str, ...] = build_trusted_domains(trusted_domains or ())
        self._patterns = dict(build_patterns(self.trusted_domains))

    def find_matches(self, body: Optional[str]) -> List[ReferenceMatch]:
        """Return raw matches: every bare-number match, then each qualified form in turn.

        Matches are neither deduplicated within nor across forms.
        """
        if not body:
            return []

        matches: List[ReferenceMatch] = []
        for form in (ReferenceForm.BARE_NUMBER,) + _QUALIFIED_FORMS:
            for match in self._patterns[form].finditer(body):
                groups = match.groupdict()
                matches.append(
                    ReferenceMatch(
                        form=form,
                        owner=groups.get("owner"),
                        repo=groups.get("repo"),
                        number_text=groups["number"],
                        text=match.group(0),
                    )
                )
        return matches

    def to_reference(self, match: ReferenceMatch) -> Optional[DependencyReference]:
        """Normalize a raw match, or return None when its number is out of range."""
        digits = match.number_text.lstrip("0")
        number = int(digits) if 0 < len(digits) <= len(str(MAX_REFERENCE_NUMBER)) else 0
        if number < 1 or number > MAX_REFERENCE_NUMBER:
            logger.warning(f"  Ignoring dependency '{match.text}': number {match.number_text} is out of range")
            return None

        if match.form is ReferenceForm.BARE_NUMBER:
            return DependencyReference(owner=self.owner, repo=self.repo, number=number)
        return DependencyReference(owner=match.owner, repo=match.repo, number=number)

    def extract(self, body: Optional[str]) -> List[DependencyReference]:
        """Extract dependency references from ``body`` in discovery order."""
        references: List[DependencyReference] = []
        for match in self.find_matches(body):
            logger.info(f"  Found number-referenced dependency in '{match.text}'")
            reference = self.to_reference(match)
            if reference is not None:
                references.append(reference)
        return references


def extract_references(
    body: Optional[str],
    owner: str,
    repo: str,
    trusted_domains: Optional[Iterable[str]] = None,
) -> List[DependencyReference]:
    """Extract dependency references from a pull request body.

    Args:
        body: Pull request body text (None or empty yields no references)
        owner: Owner of the repository the body belongs to
        repo: Name of the repository the body belongs to
        trusted_domains: Extra hosts accepted in URLs, in addition to github.com

    Returns:
        References in discovery order: bare numbers first, then shorthand,
        partial path, full URL and markdown link matches

    Examples:
        "Depends on #42" -> [owner/repo#42]
        "blocked by: acme/widgets#7" -> [acme/widgets#7]
        "Depends on [x](https://github.com/acme/widgets/pull/3)" -> [acme/widgets#3]
    """
    return ReferenceExtractor(owner, repo, trusted_domains).extract(body)
