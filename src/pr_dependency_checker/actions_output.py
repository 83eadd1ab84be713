"""
GitHub Actions workflow command helpers.

Annotations are written as ``::error::<message>`` lines on stdout, which the
Actions runner turns into error annotations on the workflow run.
"""

import os
import sys
from typing import IO, Any, Optional


def is_github_actions() -> bool:
    """Return True when running inside a GitHub Actions job."""
    return os.environ.get("GITHUB_ACTIONS") == "true"


def escape_data(value: Any) -> str:
    """Escape a value for use as workflow command data."""
    return str(value).replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def error(message: str, stream: Optional[IO[str]] = None) -> None:
    """Emit an error annotation."""
    print(f"::error::{escape_data(message)}", file=stream or sys.stdout, flush=True)


def set_failed(message: str, stream: Optional[IO[str]] = None) -> None:
    """Mark the step as failed with ``message``.

    Only emits the annotation; the caller sets the non-zero exit code.
    """
    error(message, stream=stream)
