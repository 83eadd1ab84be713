"""
Resolution of dependency references against GitHub and aggregation of open blockers.
"""

from typing import Any, Callable, Dict, Iterable

from .logger_config import get_logger
from .models import DependencyReference, DependencyReport, ItemKind, LookupResult, ResolvedItem

logger = get_logger(__name__)

# (owner, repo, number) -> item payload; raises when the item does not exist
LookupFn = Callable[[str, str, int], Dict[str, Any]]


class DependencyResolver:
    """Look references up as pull requests, falling back to issues, and classify them.

    Lookup failures never propagate: a reference that is neither a pull
    request nor an issue is recorded as unresolved and left for manual
    verification.
    """

    def __init__(self, lookup_pull_request: LookupFn, lookup_issue: LookupFn):
        self.lookup_pull_request = lookup_pull_request
        self.lookup_issue = lookup_issue

    @classmethod
    def from_client(cls, client: Any) -> "DependencyResolver":
        """Build a resolver from an object exposing get_pull_request and get_issue."""
        return cls(client.get_pull_request, client.get_issue)

    def lookup(self, reference: DependencyReference) -> LookupResult:
        """Find ``reference`` as a pull request, then as an issue."""
        logger.info(f"  Fetching pull request '{reference}'")
        try:
            data = self.lookup_pull_request(reference.owner, reference.repo, reference.number)
        except Exception as e:
            logger.error(f"  Pull request lookup for '{reference}' failed: {e}")
        else:
            if data:
                return LookupResult(reference=reference, kind=ItemKind.PULL_REQUEST, data=data)

        logger.info(f"  Fetching issue '{reference}'")
        try:
            data = self.lookup_issue(reference.owner, reference.repo, reference.number)
        except Exception as e:
            logger.error(f"  Issue lookup for '{reference}' failed: {e}")
        else:
            if data:
                return LookupResult(reference=reference, kind=ItemKind.ISSUE, data=data)

        logger.info("    Could not locate this dependency.  Will need to verify manually.")
        return LookupResult.not_found(reference)

    def classify(self, result: LookupResult) -> ResolvedItem:
        """Turn a successful lookup into a ResolvedItem.

        A pull request is open when it is neither merged nor closed; an issue
        is open when it is not closed.

        Raises:
            ValueError: If the lookup did not find anything
        """
        if not result.found or result.data is None:
            raise ValueError(f"Cannot classify unresolved reference '{result.reference}'")

        data = result.data
        if result.kind is ItemKind.PULL_REQUEST:
            is_open = not data.get("merged") and not data.get("closed_at")
        else:
            is_open = not data.get("closed_at")

        reference = result.reference
        return ResolvedItem(
            owner=reference.owner,
            repo=reference.repo,
            number=data.get("number", reference.number),
            kind=result.kind,
            title=data.get("title") or "",
            is_open=is_open,
        )

    def resolve(self, references: Iterable[DependencyReference]) -> DependencyReport:
        """Resolve every reference in order and collect the still-open ones."""
        report = DependencyReport()
        for reference in references:
            result = self.lookup(reference)
            if not result.found:
                report.unresolved.append(reference)
                continue

            item = self.classify(result)
            label = "PR" if item.kind is ItemKind.PULL_REQUEST else "Issue"
            if item.is_open:
                logger.info(f"    {label} is still open.")
                report.open_items.append(item)
            else:
                logger.info(f"    {label} has been closed.")
                report.closed_items.append(item)

        return report


def resolve(references: Iterable[DependencyReference], lookup_pull_request: LookupFn, lookup_issue: LookupFn) -> DependencyReport:
    """Resolve references with the given lookup functions.

    Args:
        references: References in discovery order
        lookup_pull_request: Fetches a pull request by (owner, repo, number)
        lookup_issue: Fetches an issue by (owner, repo, number)

    Returns:
        Report whose ``open_items`` lists the still-open dependencies in order
    """
    return DependencyResolver(lookup_pull_request, lookup_issue).resolve(references)
