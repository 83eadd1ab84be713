"""
PR Dependency Checker: block pull requests that still depend on open pull requests or issues.
"""

__version__ = "2026.10.19"
__author__ = "PR Dependency Checker Team"
__description__ = "Block pull requests that still depend on open pull requests or issues"
