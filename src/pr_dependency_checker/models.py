"""Structured types shared by the extractor, resolver and evaluator.

References, lookup outcomes and reports are plain dataclasses so that every
stage of a dependency check can be built and asserted on in isolation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

FAILURE_HEADER = "The following issues need to be resolved before this PR can be merged:"


class ReferenceForm(str, Enum):
    """Syntactic form in which a dependency was written."""

    BARE_NUMBER = "bare_number"
    SHORTHAND = "shorthand"
    PARTIAL_PATH = "partial_path"
    FULL_URL = "full_url"
    MARKDOWN_LINK = "markdown_link"


class ItemKind(str, Enum):
    """Kind of GitHub item a reference resolved to."""

    PULL_REQUEST = "pull_request"
    ISSUE = "issue"


@dataclass(frozen=True)
class DependencyReference:
    """A candidate pull request or issue named in a pull request body."""

    owner: str
    repo: str
    number: int

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"


@dataclass(frozen=True)
class ReferenceMatch:
    """One raw pattern match, before it is normalized into a reference.

    Attributes:
        form: The pattern that produced the match.
        owner: Parsed owner, or None for bare ``#123`` references.
        repo: Parsed repository, or None for bare ``#123`` references.
        number_text: The digits exactly as written.
        text: The full matched text, used for logging.
    """

    form: ReferenceForm
    owner: Optional[str]
    repo: Optional[str]
    number_text: str
    text: str


@dataclass(frozen=True)
class LookupResult:
    """Outcome of looking a reference up: a pull request, an issue, or nothing."""

    reference: DependencyReference
    kind: Optional[ItemKind] = None
    data: Optional[Dict[str, Any]] = None

    @property
    def found(self) -> bool:
        return self.kind is not None

    @classmethod
    def not_found(cls, reference: DependencyReference) -> "LookupResult":
        return cls(reference=reference)


@dataclass(frozen=True)
class ResolvedItem:
    """Current state of one dependency at query time."""

    owner: str
    repo: str
    number: int
    kind: ItemKind
    title: str
    is_open: bool

    def format_line(self) -> str:
        return f"#{self.number} - {self.title}"


@dataclass
class DependencyReport:
    """Aggregated result of resolving every reference of a pull request body.

    Only ``open_items`` decides the verdict. ``closed_items`` and ``unresolved``
    are kept for logging.
    """

    open_items: List[ResolvedItem] = field(default_factory=list)
    closed_items: List[ResolvedItem] = field(default_factory=list)
    unresolved: List[DependencyReference] = field(default_factory=list)

    @property
    def is_mergeable(self) -> bool:
        return not self.open_items

    def format_message(self) -> str:
        lines = ["", FAILURE_HEADER, ""]
        lines.extend(item.format_line() for item in self.open_items)
        return "\n".join(lines)


@dataclass
class CheckResult:
    """Final verdict of a dependency check."""

    success: bool
    message: str
    report: Optional[DependencyReport] = None
