"""
Custom exceptions used across PR Dependency Checker.
"""


class DependencyCheckError(RuntimeError):
    """Base class for errors raised by the dependency checker itself."""

    pass


class ConfigurationError(DependencyCheckError):
    """Raised when the repository or pull request to check cannot be determined.

    The CLI converts this into a usage error instead of a crash.
    """

    pass
